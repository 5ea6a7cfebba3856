"""
Layer Tagger - Name Codec Service

Encodes layer metadata into the layer's display name and decodes it back.
Every function here is pure: no host access, no state.

Grammar:
    name := base '@' tag [ ':' json ]

- base is everything before the first '@' and never contains '@'
- tag runs up to the first ':' after the '@'
- json is the rest of the string, so it may contain any character
"""

import json
import logging
import re

from models.metadata import LayerKind, LayerMetadata
from constants import (
    TAG_DELIMITER, PROPERTIES_DELIMITER, JSON_SEPARATORS, KNOWN_TAGS,
    HOST_TEXT_LAYER_KIND,
    CLASSIFY_TEXT, CLASSIFY_TEXTURE, CLASSIFY_DEFAULT
)

logger = logging.getLogger(__name__)

_TAG_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9_]*$')

# Tag comparison is case-insensitive, same as the importer's type lookup
_CLASSIFICATION_BY_TAG = {
    LayerKind.TEXT.tag.lower(): CLASSIFY_TEXT,
    LayerKind.TEXTURE.tag.lower(): CLASSIFY_TEXTURE,
}


class LayerNameError(ValueError):
    """Raised when metadata cannot be encoded into a layer name"""


def _split_name(name):
    """Split a layer name into (base, tag, payload).

    tag is None when the name has no '@'; payload is None when no ':'
    follows the tag.
    """
    if not name or TAG_DELIMITER not in name:
        return name or '', None, None
    base, rest = name.split(TAG_DELIMITER, 1)
    tag, sep, payload = rest.partition(PROPERTIES_DELIMITER)
    return base, tag, (payload if sep else None)


def _tag_string(kind):
    tag = kind.tag if isinstance(kind, LayerKind) else kind
    if not isinstance(tag, str) or not _TAG_PATTERN.match(tag):
        raise LayerNameError(f"Invalid layer tag: {tag!r}")
    if tag not in KNOWN_TAGS:
        logger.warning("Tag '%s' is not known to the importer", tag)
    return tag


def strip_tag(name):
    """Return the base name of a layer name (everything before the first '@')"""
    return _split_name(name)[0]


def tag_for_layer_kind(host_kind):
    """Map a host layer kind to the tag the populate action writes.

    Args:
        host_kind: Host layer kind string ("text", "pixel", "smartObject", ...)

    Returns:
        LayerKind.TEXT for text layers, LayerKind.IMAGE for everything else
    """
    if host_kind == HOST_TEXT_LAYER_KIND:
        return LayerKind.TEXT
    return LayerKind.IMAGE


def encode(base_name, kind, properties=None):
    """Encode metadata into a layer name.

    Any existing tag on base_name is dropped first, so encoding an encoded
    name never stacks a second '@' segment.

    Args:
        base_name: Layer name, tagged or not
        kind: LayerKind or tag string
        properties: JSON-serialisable dict (None means {})

    Returns:
        Encoded name, e.g. 'icon@Image:{"size":[64,64]}'

    Raises:
        LayerNameError: Invalid tag or properties that are not a JSON object
    """
    base = strip_tag(base_name)
    tag = _tag_string(kind)

    if properties is None:
        properties = {}
    if not isinstance(properties, dict):
        raise LayerNameError(f"Layer properties must be a dict, got {type(properties).__name__}")

    try:
        properties_json = json.dumps(
            properties, separators=JSON_SEPARATORS, ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as e:
        raise LayerNameError(f"Layer properties are not JSON serialisable: {e}") from e

    return f"{base}{TAG_DELIMITER}{tag}{PROPERTIES_DELIMITER}{properties_json}"


def _parse_properties(payload):
    if not payload:
        return {}
    try:
        value = json.loads(payload)
    except ValueError as e:
        logger.debug("Ignoring malformed layer properties %r: %s", payload, e)
        return {}
    if not isinstance(value, dict):
        logger.debug("Ignoring non-object layer properties %r", payload)
        return {}
    return value


def decode(name):
    """Decode a layer name into LayerMetadata. Never raises.

    A name without '@' decodes to (name, None, {}). Malformed or non-object
    JSON decodes to empty properties.
    """
    base, tag, payload = _split_name(name)
    return LayerMetadata(base_name=base, kind=tag, properties=_parse_properties(payload))


def classify(name):
    """Classify a layer name for panel routing.

    The tag is parsed by the grammar and compared for equality, so
    'x@Texture:{}' is a texture even though it contains '@Text'.

    Returns:
        'text', 'texture' or 'default'
    """
    tag = _split_name(name)[1]
    if tag is None:
        return CLASSIFY_DEFAULT
    return _CLASSIFICATION_BY_TAG.get(tag.lower(), CLASSIFY_DEFAULT)


def classify_selection(layer_names):
    """Classify the primary (first) name of a selection; empty -> 'default'"""
    if not layer_names:
        return CLASSIFY_DEFAULT
    return classify(layer_names[0])


def parse_ui_element(name):
    """Strict parse, as the importer does it.

    Returns:
        LayerMetadata, or None when the name has no '@', the tag is empty,
        or the JSON segment is malformed
    """
    base, tag, payload = _split_name(name)
    if not tag:
        return None

    if not payload:
        return LayerMetadata(base_name=base, kind=tag, properties={})

    try:
        properties = json.loads(payload)
    except ValueError as e:
        logger.warning("JSON parse error in layer name %r: %s", name, e)
        return None
    if not isinstance(properties, dict):
        logger.warning("Layer name %r carries non-object properties", name)
        return None

    return LayerMetadata(base_name=base, kind=tag, properties=properties)
