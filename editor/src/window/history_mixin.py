"""History management and undo/redo for LayerTaggerWindow"""

from models.host import ModalStateError


class HistoryMixin:
    """Undo/redo through the host, window title and status bar updates"""

    def undo(self):
        """Undo the last modal command"""
        try:
            self.host.undo()
        except ModalStateError as e:
            self.statusBar().showMessage(str(e), 3000)

    def redo(self):
        """Redo the last undone modal command"""
        try:
            self.host.redo()
        except ModalStateError as e:
            self.statusBar().showMessage(str(e), 3000)

    def _on_history_changed(self, can_undo, can_redo):
        """Called when history state changes to update UI"""
        if hasattr(self, 'undo_action'):
            self.undo_action.setEnabled(can_undo)
            self.undo_action.setText(self._history_label("&Undo", self.host.history_manager.get_undo_description()))
        if hasattr(self, 'redo_action'):
            self.redo_action.setEnabled(can_redo)
            self.redo_action.setText(self._history_label("&Redo", self.host.history_manager.get_redo_description()))
        self._update_status_bar()

    def _history_label(self, verb, description):
        return f"{verb} {description}" if description else verb

    def _update_status_bar(self):
        """Update status bar with last action and selection stats"""
        current_desc = self.host.history_manager.get_current_description()
        left_msg = f"Last action: {current_desc}" if current_desc else "Ready"

        document = self.host.active_document
        if document is None:
            right_msg = "No document"
        else:
            selected = document.active_layers
            if not selected:
                right_msg = f"Layers: {len(document.layers)} | No selection"
            elif len(selected) == 1:
                right_msg = f"Layers: {len(document.layers)} | Selected: {selected[0].name}"
            else:
                right_msg = f"Layers: {len(document.layers)} | Selected: {len(selected)} layers"

        if hasattr(self, 'status_left'):
            self.status_left.setText(left_msg)
        if hasattr(self, 'status_right'):
            self.status_right.setText(right_msg)

    def _update_window_title(self):
        document = self.host.active_document
        if document is None:
            self.setWindowTitle("Layer Tagger")
        else:
            self.setWindowTitle(f"Layer Tagger - {document.name}")
