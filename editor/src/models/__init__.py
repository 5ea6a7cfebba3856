"""
Layer Tagger - Data Models

This module contains the host-side data model (documents, layers, the
modal scope) and the layer metadata decoded from layer names.
This is the MODEL in MVC architecture.
"""

from .layer import Layer, Bounds
from .document import Document
from .host import Host, ModalStateError
from .metadata import LayerKind, LayerMetadata

__all__ = ['Layer', 'Bounds', 'Document', 'Host', 'ModalStateError', 'LayerKind', 'LayerMetadata']
