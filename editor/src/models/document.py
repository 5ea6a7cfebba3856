"""Host document: an ordered layer stack plus the active layer selection."""
import itertools
import logging

from models.layer import Layer
from constants import DEFAULT_DOCUMENT_NAME, EVENT_SELECT, EVENT_SET


class Document:
    """Layer document owned by a Host.

    Selection order is kept: active_layers[0] is the primary selection.
    """

    _ids = itertools.count(1)

    def __init__(self, name=DEFAULT_DOCUMENT_NAME, width=0, height=0, layers=None):
        self._logger = logging.getLogger('Document')
        self.id = next(Document._ids)
        self.name = name
        self.width = width
        self.height = height
        self.host = None  # Set by Host.open_document
        self.file_path = None
        self._layers = []
        self._active_ids = []
        for layer in layers or []:
            self.add_layer(layer)

    def __repr__(self):
        return f"Document(id={self.id}, name={self.name!r}, layers={len(self._layers)})"

    # ========================================
    # Layers
    # ========================================

    @property
    def layers(self):
        return tuple(self._layers)

    def add_layer(self, layer):
        """Append a layer to the top of the stack

        Raises:
            ValueError: If a layer with the same id is already present
        """
        if self.get_layer(layer.id) is not None:
            raise ValueError(f"Duplicate layer id {layer.id} in document '{self.name}'")
        layer.document = self
        self._layers.append(layer)
        return layer

    def get_layer(self, layer_id):
        for layer in self._layers:
            if layer.id == layer_id:
                return layer
        return None

    # ========================================
    # Selection
    # ========================================

    @property
    def active_layers(self):
        """Selected layers, primary selection first"""
        return [layer for layer in (self.get_layer(i) for i in self._active_ids) if layer is not None]

    @property
    def active_layer_ids(self):
        return list(self._active_ids)

    def select_layers(self, layer_ids):
        """Replace the selection and emit a 'select' notification

        Args:
            layer_ids: Layer ids in selection order (first is primary)

        Raises:
            KeyError: If an id does not belong to this document
        """
        ids = []
        for layer_id in layer_ids:
            if self.get_layer(layer_id) is None:
                raise KeyError(f"No layer with id {layer_id} in document '{self.name}'")
            if layer_id not in ids:
                ids.append(layer_id)
        self._active_ids = ids
        self._logger.debug("Selection changed: %s", ids)
        if self.host is not None:
            self.host.notify(EVENT_SELECT, {'_target': list(ids), 'documentID': self.id})

    def clear_selection(self):
        self.select_layers([])

    # ========================================
    # Host hooks
    # ========================================

    def _check_writable(self):
        if self.host is not None:
            self.host.assert_modal()

    def _layer_renamed(self, layer, old_name):
        if self.host is not None:
            self.host.notify(EVENT_SET, {
                '_target': layer.id,
                'documentID': self.id,
                'from': old_name,
                'name': layer.name,
            })

    # ========================================
    # Snapshots (undo history)
    # ========================================

    def get_snapshot(self):
        """Layer state for history; selection is not part of it"""
        return [layer.to_dict() for layer in self._layers]

    def set_snapshot(self, snapshot):
        """Restore layer fields from get_snapshot() output, matched by id"""
        by_id = {entry['id']: entry for entry in snapshot}
        for layer in self._layers:
            entry = by_id.get(layer.id)
            if entry is None:
                continue
            restored = Layer.from_dict(entry)
            layer._name = restored.name
            layer.kind = restored.kind
            layer.bounds = restored.bounds
            layer.opacity = restored.opacity
            layer.blend_mode = restored.blend_mode

    # ========================================
    # Manifest
    # ========================================

    def to_dict(self):
        return {
            'name': self.name,
            'width': self.width,
            'height': self.height,
            'layers': [layer.to_dict() for layer in self._layers],
            'selection': list(self._active_ids),
        }

    @classmethod
    def from_dict(cls, data):
        entries = data.get('layers', [])
        # Layers without an id are numbered after the largest id in this manifest
        explicit_ids = [entry['id'] for entry in entries if entry.get('id') is not None]
        implicit_ids = itertools.count(max(explicit_ids, default=0) + 1)
        layers = []
        for entry in entries:
            if entry.get('id') is None:
                entry = dict(entry, id=next(implicit_ids))
            layers.append(Layer.from_dict(entry))

        document = cls(
            name=data.get('name', DEFAULT_DOCUMENT_NAME),
            width=data.get('width', 0),
            height=data.get('height', 0),
            layers=layers,
        )
        # Unknown ids in a hand-edited manifest are dropped rather than rejected
        document._active_ids = [i for i in data.get('selection', []) if document.get_layer(i) is not None]
        return document
