"""
Layer Tagger - Selection Controller

Keeps the tagger panels in step with the host's layer selection.

States: DEFAULT, SHOWING_TEXT, SHOWING_TEXTURE. The state is recomputed from
the primary selected layer's name on every 'select' notification; nothing
is carried between notifications except the state itself, which survives a
failed read.
"""

import logging
from enum import Enum

from services.name_codec import classify_selection
from constants import (
    EVENT_SELECT, SELECTION_COMMAND_NAME,
    CLASSIFY_TEXT, CLASSIFY_TEXTURE,
    DEFAULT_PANEL_ID, TEXT_PANEL_ID, TEXTURE_PANEL_ID
)

logger = logging.getLogger(__name__)


class PanelState(Enum):
    """Panel state, valued by the id of the one panel it shows"""
    DEFAULT = DEFAULT_PANEL_ID
    SHOWING_TEXT = TEXT_PANEL_ID
    SHOWING_TEXTURE = TEXTURE_PANEL_ID

    @property
    def panel_id(self):
        return self.value


_STATE_BY_CLASSIFICATION = {
    CLASSIFY_TEXT: PanelState.SHOWING_TEXT,
    CLASSIFY_TEXTURE: PanelState.SHOWING_TEXTURE,
}


def state_for_selection(layer_names):
    """Pure mapping from a selection (names, primary first) to a PanelState"""
    return _STATE_BY_CLASSIFICATION.get(classify_selection(layer_names), PanelState.DEFAULT)


class SelectionController:
    """Drives panel visibility from host selection notifications

    Args:
        document_port: DocumentPort for reading the selection
        panel_port: PanelPort for toggling panels
    """

    def __init__(self, document_port, panel_port):
        self.document_port = document_port
        self.panel_port = panel_port
        self.state = PanelState.DEFAULT
        self._attached = False

    def attach(self):
        """Show the initial state and start listening for selection changes"""
        if self._attached:
            return
        self._apply(self.state)
        self.document_port.on_selection_changed(self.handle_notification)
        self._attached = True
        logger.debug("Listening for layer selection changes")

    def handle_notification(self, event, descriptor=None):
        """Host notification handler; only 'select' causes a transition"""
        if event != EVENT_SELECT:
            return self.state
        return self.refresh()

    def refresh(self):
        """Re-read the selection and transition. Errors keep the prior state."""
        try:
            layer_names = self.document_port.execute_as_modal(
                self._read_selection, SELECTION_COMMAND_NAME
            )
        except Exception:
            logger.exception("Error handling layer selection; keeping %s", self.state.name)
            return self.state

        logger.debug("Selected layers: %s", layer_names)
        self._apply(state_for_selection(layer_names))
        return self.state

    def _read_selection(self):
        if not self.document_port.has_open_document():
            return []
        return self.document_port.active_layer_names()

    def _apply(self, state):
        # At most one panel visible at any time
        self.panel_port.hide_all_panels()
        try:
            self.panel_port.show_panel(state.panel_id)
        except Exception:
            logger.exception("Could not show %s; restoring %s", state.panel_id, self.state.panel_id)
            self.panel_port.show_panel(self.state.panel_id)
            return
        if state is not self.state:
            logger.debug("Panel state %s -> %s", self.state.name, state.name)
        self.state = state
