"""UI components for Layer Tagger

- layer_list_widget: the active document's layers, feeding host selection
- tagger_panel: the default/text/texture panels and the populate button
"""

from .layer_list_widget import LayerListWidget
from .tagger_panel import TaggerPanel

__all__ = [
    'LayerListWidget',
    'TaggerPanel',
]
