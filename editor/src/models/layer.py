"""Host layer handle: name, bounds, kind, opacity and blend mode."""
import itertools
from dataclasses import dataclass

from constants import HOST_PIXEL_LAYER_KIND, DEFAULT_LAYER_OPACITY, DEFAULT_BLEND_MODE


@dataclass
class Bounds:
    """Layer bounds in document pixels (right/bottom exclusive)."""
    left: float = 0
    top: float = 0
    right: float = 0
    bottom: float = 0

    @property
    def width(self):
        return self.right - self.left

    @property
    def height(self):
        return self.bottom - self.top

    def to_list(self):
        return [self.left, self.top, self.right, self.bottom]

    @classmethod
    def from_list(cls, values):
        """Build from [left, top, right, bottom]"""
        if values is None:
            return cls()
        if len(values) != 4:
            raise ValueError(f"Bounds need 4 values, got {len(values)}")
        return cls(*values)

    @classmethod
    def from_size(cls, width, height, left=0, top=0):
        return cls(left, top, left + width, top + height)


class Layer:
    """A layer owned by a Document.

    The name is the only field this tool writes. Writing it while the layer
    belongs to a hosted document requires the host's modal scope.
    """

    _ids = itertools.count(1)

    def __init__(self, name, kind=HOST_PIXEL_LAYER_KIND, bounds=None,
                 opacity=DEFAULT_LAYER_OPACITY, blend_mode=DEFAULT_BLEND_MODE, layer_id=None):
        if not isinstance(name, str):
            raise TypeError(f"Layer name must be a string, got {type(name).__name__}")
        self.id = layer_id if layer_id is not None else next(Layer._ids)
        self._name = name
        self.kind = kind
        self.bounds = bounds if bounds is not None else Bounds()
        self.opacity = opacity
        self.blend_mode = blend_mode
        self.document = None  # Set by Document.add_layer

    def __repr__(self):
        return f"Layer(id={self.id}, name={self._name!r}, kind={self.kind!r})"

    @property
    def name(self):
        return self._name

    @name.setter
    def name(self, value):
        if not isinstance(value, str):
            raise TypeError(f"Layer name must be a string, got {type(value).__name__}")
        if self.document is not None:
            self.document._check_writable()
        old_name = self._name
        self._name = value
        if self.document is not None and old_name != value:
            self.document._layer_renamed(self, old_name)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self._name,
            'kind': self.kind,
            'bounds': self.bounds.to_list(),
            'opacity': self.opacity,
            'blendMode': self.blend_mode,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            name=data.get('name', ''),
            kind=data.get('kind', HOST_PIXEL_LAYER_KIND),
            bounds=Bounds.from_list(data.get('bounds')),
            opacity=data.get('opacity', DEFAULT_LAYER_OPACITY),
            blend_mode=data.get('blendMode', DEFAULT_BLEND_MODE),
            layer_id=data.get('id'),
        )
