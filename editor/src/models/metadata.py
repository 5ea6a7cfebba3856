"""Layer metadata decoded from a layer name.

LayerMetadata is derived on demand from the host's layer name and is never
stored on its own. Compute it, use it, drop it.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple


class LayerKind(Enum):
    """Tags written by the populate action or recognised by the panel router."""
    TEXT = 'Text'
    IMAGE = 'Image'
    TEXTURE = 'Texture'

    @property
    def tag(self) -> str:
        return self.value


@dataclass
class LayerMetadata:
    """Base name, tag and properties of one layer name.

    kind is the raw tag string (None when the name carries no tag) so tags
    the importer knows but this tool does not write still survive decode.
    """
    base_name: str
    kind: Optional[str] = None
    properties: dict = field(default_factory=dict)

    @property
    def is_tagged(self) -> bool:
        return self.kind is not None

    def get_param(self, key: str, default: Any = None, expected_type=None) -> Any:
        """Typed property lookup that never raises.

        Args:
            key: Property name
            default: Returned when the key is missing or has the wrong type
            expected_type: Optional type (or tuple of types) the value must match
        """
        if key not in self.properties:
            return default
        value = self.properties[key]
        if expected_type is not None:
            types = expected_type if isinstance(expected_type, tuple) else (expected_type,)
            # bool is an int subclass; a flag is never a number here
            if isinstance(value, bool) and bool not in types:
                return default
            if not isinstance(value, types):
                return default
        return value

    @property
    def size(self) -> Optional[Tuple[float, float]]:
        """(width, height) from the size property, or None if unusable.

        The importer rejects a size that is not a two element numeric list
        and a size of (0, 0).
        """
        raw = self.get_param('size', expected_type=(list, tuple))
        if raw is None or len(raw) != 2:
            return None
        if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in raw):
            return None
        width, height = raw
        if width == 0 and height == 0:
            return None
        return (width, height)
