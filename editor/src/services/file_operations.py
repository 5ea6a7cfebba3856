"""
Layer Tagger - File Operations Service

Loads and saves layer manifests: JSON files describing a document's layers
(name, kind, bounds, opacity, blend mode) and its selection. Lets the tool
run against exported layer lists without the image editor.
Separates file operations from UI logic.
"""

import json
import logging

from models.document import Document

logger = logging.getLogger(__name__)


class ManifestError(ValueError):
    """Raised when a manifest file is not a valid layer document"""


def manifest_from_string(text):
    """Parse manifest JSON text into a Document

    Raises:
        ManifestError: If the text is not JSON or misses the layer list
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise ManifestError(f"Manifest is not valid JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get('layers'), list):
        raise ManifestError("Manifest must be an object with a 'layers' list")

    try:
        return Document.from_dict(data)
    except (TypeError, ValueError, AttributeError) as e:
        raise ManifestError(f"Invalid layer entry in manifest: {e}") from e


def manifest_to_string(document):
    """Serialize a Document to manifest JSON text"""
    return json.dumps(document.to_dict(), indent=2, ensure_ascii=False)


def load_manifest_from_file(filename):
    """Load a layer manifest file

    Args:
        filename: Path to the manifest

    Returns:
        Document (not yet opened in a host)

    Raises:
        OSError: If the file cannot be read
        ManifestError: If the content is not a valid manifest
    """
    with open(filename, 'r', encoding='utf-8') as f:
        text = f.read()

    document = manifest_from_string(text)
    document.file_path = filename
    logger.info("Manifest loaded from %s (%d layers)", filename, len(document.layers))
    return document


def save_manifest_to_file(document, filename):
    """Write a Document to a manifest file

    Raises:
        OSError: If the file write fails
    """
    with open(filename, 'w', encoding='utf-8') as f:
        f.write(manifest_to_string(document))
        f.write('\n')

    document.file_path = filename
    logger.info("Manifest saved to %s", filename)
