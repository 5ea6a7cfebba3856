"""
Undo/Redo history for Layer Tagger documents

One entry per modal command that changed the active document. Entry 0 is
the state the document was opened in; undo never goes past it.
"""

import copy
import logging
from collections import namedtuple

logger = logging.getLogger(__name__)

HistoryEntry = namedtuple('HistoryEntry', ['command', 'state'])


class HistoryManager:
    """Linear snapshot history with a movable cursor

    Args:
        max_history: Oldest entries are dropped past this many
    """

    def __init__(self, max_history=50):
        self.max_history = max_history
        self.history = []  # HistoryEntry list, oldest first
        self.current_index = -1
        self._listeners = []

    def save_state(self, state, command=""):
        """Record state as the newest entry, discarding anything undone"""
        del self.history[self.current_index + 1:]
        self.history.append(HistoryEntry(command, copy.deepcopy(state)))
        overflow = len(self.history) - self.max_history
        if overflow > 0:
            del self.history[:overflow]
        self.current_index = len(self.history) - 1

        logger.debug("Recorded '%s' (%d/%d)", command, self.current_index + 1, len(self.history))
        self._changed()

    def _move(self, step):
        self.current_index += step
        entry = self.history[self.current_index]
        logger.debug("History at '%s' (%d/%d)", entry.command, self.current_index + 1, len(self.history))
        self._changed()
        return copy.deepcopy(entry.state)

    def undo(self):
        """Step back; returns the state to restore, or None at the first entry"""
        return self._move(-1) if self.can_undo() else None

    def redo(self):
        """Step forward; returns the state to restore, or None at the newest entry"""
        return self._move(1) if self.can_redo() else None

    def can_undo(self):
        return self.current_index > 0

    def can_redo(self):
        return self.current_index + 1 < len(self.history)

    def clear(self):
        self.history = []
        self.current_index = -1
        self._changed()

    # ========================================
    # Listeners
    # ========================================

    def add_listener(self, callback):
        """callback(can_undo, can_redo) runs after every history change"""
        self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _changed(self):
        can_undo, can_redo = self.can_undo(), self.can_redo()
        for callback in list(self._listeners):
            try:
                callback(can_undo, can_redo)
            except Exception:
                logger.exception("History listener failed")

    # ========================================
    # Descriptions
    # ========================================

    def _command_at(self, index):
        if 0 <= index < len(self.history):
            return self.history[index].command
        return ""

    def get_current_description(self):
        """Command that produced the current state"""
        return self._command_at(self.current_index)

    def get_undo_description(self):
        """Command that undo would revert"""
        return self._command_at(self.current_index) if self.can_undo() else ""

    def get_redo_description(self):
        """Command that redo would re-apply"""
        return self._command_at(self.current_index + 1)
