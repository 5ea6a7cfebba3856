"""
Layer Tagger - In-process Host

Plays the part of the image editor: owns the open documents, serialises
document mutation through an exclusive modal scope, records undo history
and delivers notifications to listeners.

Notifications are FIFO and never re-entrant. A notification raised while a
listener runs, or while a modal scope is active, waits in the queue until
the current work finishes.
"""
import logging
from collections import deque
from contextlib import contextmanager

from utils.history_manager import HistoryManager
from constants import MAX_HISTORY_ENTRIES, EVENT_OPEN, EVENT_CLOSE, EVENT_HISTORY_STATE_CHANGED

logger = logging.getLogger(__name__)


class ModalStateError(RuntimeError):
    """Raised on document writes outside, or nested entry into, a modal scope"""


class Host:
    """Documents, modal scope, notifications and alerts"""

    def __init__(self, max_history=MAX_HISTORY_ENTRIES, alert_handler=None):
        self._documents = []
        self._active_document = None
        self.history_manager = HistoryManager(max_history=max_history)
        self.alert_handler = alert_handler  # Callable(message), set by the UI
        self._listeners = []  # (events or None, handler)
        self._queue = deque()
        self._dispatching = False
        self._modal_command = None

    # ========================================
    # Documents
    # ========================================

    @property
    def documents(self):
        return tuple(self._documents)

    @property
    def active_document(self):
        return self._active_document

    def open_document(self, document):
        """Add a document and make it active"""
        if document.host is not None and document.host is not self:
            raise ValueError(f"Document '{document.name}' belongs to another host")
        document.host = self
        if document not in self._documents:
            self._documents.append(document)
        self.set_active_document(document)
        self.notify(EVENT_OPEN, {'documentID': document.id})
        return document

    def close_document(self, document=None):
        """Close a document (the active one by default)"""
        document = document or self._active_document
        if document is None or document not in self._documents:
            return
        self._documents.remove(document)
        document.host = None
        if document is self._active_document:
            self.set_active_document(self._documents[-1] if self._documents else None)
        self.notify(EVENT_CLOSE, {'documentID': document.id})

    def set_active_document(self, document):
        """Switch the active document; history restarts from its current state"""
        if document is not None and document not in self._documents:
            raise ValueError(f"Document '{document.name}' is not open")
        self._active_document = document
        self.history_manager.clear()
        if document is not None:
            self.history_manager.save_state(self._history_state(document), "Open")

    # ========================================
    # Modal scope
    # ========================================

    @property
    def in_modal_scope(self):
        return self._modal_command is not None

    @property
    def modal_command(self):
        return self._modal_command

    def assert_modal(self):
        if self._modal_command is None:
            raise ModalStateError("Document can only be modified inside a modal scope")

    @contextmanager
    def modal_scope(self, command_name):
        """Exclusive, undoable document access.

        On success one history entry named command_name is recorded if the
        active document changed. If the body raises, the document is rolled
        back, notifications raised inside the scope are dropped, and the
        exception propagates.

        Raises:
            ModalStateError: If another modal scope is active
        """
        if self._modal_command is not None:
            raise ModalStateError(
                f"Cannot start '{command_name}' while '{self._modal_command}' is running"
            )
        document = self._active_document
        before = document.get_snapshot() if document is not None else None
        queue_mark = len(self._queue)
        self._modal_command = command_name
        try:
            yield document
        except Exception:
            if document is not None:
                document.set_snapshot(before)
            while len(self._queue) > queue_mark:
                self._queue.pop()
            logger.debug("Rolled back '%s'", command_name)
            raise
        else:
            if document is not None and document.get_snapshot() != before:
                self.history_manager.save_state(self._history_state(document), command_name)
        finally:
            self._modal_command = None
        self._drain_notifications()

    def execute_as_modal(self, action, command_name):
        """Run a zero-argument callable inside modal_scope and return its result"""
        with self.modal_scope(command_name):
            return action()

    # ========================================
    # Undo / redo
    # ========================================

    def _history_state(self, document):
        return {'document_id': document.id, 'layers': document.get_snapshot()}

    def _restore_history_state(self, state):
        document = self._active_document
        if state is None or document is None or state['document_id'] != document.id:
            return False
        document.set_snapshot(state['layers'])
        self.notify(EVENT_HISTORY_STATE_CHANGED, {
            'documentID': document.id,
            'name': self.history_manager.get_current_description(),
        })
        return True

    def undo(self):
        if self.in_modal_scope:
            raise ModalStateError(f"Cannot undo while '{self._modal_command}' is running")
        return self._restore_history_state(self.history_manager.undo())

    def redo(self):
        if self.in_modal_scope:
            raise ModalStateError(f"Cannot redo while '{self._modal_command}' is running")
        return self._restore_history_state(self.history_manager.redo())

    # ========================================
    # Notifications
    # ========================================

    def add_notification_listener(self, filters, handler):
        """Register handler(event, descriptor) for the events named in filters

        Args:
            filters: List of {'event': name} dicts, or None for every event
            handler: Callable receiving (event, descriptor)
        """
        events = None
        if filters is not None:
            try:
                events = frozenset(f['event'] for f in filters)
            except (KeyError, TypeError) as e:
                raise ValueError(f"Notification filters need an 'event' key: {filters!r}") from e
        self._listeners.append((events, handler))

    def remove_notification_listener(self, handler):
        self._listeners = [(e, h) for e, h in self._listeners if h is not handler]

    def notify(self, event, descriptor=None):
        """Queue a notification and deliver it when the host is idle"""
        self._queue.append((event, dict(descriptor or {})))
        self._drain_notifications()

    def _drain_notifications(self):
        if self._dispatching or self._modal_command is not None:
            return
        self._dispatching = True
        try:
            while self._queue:
                event, descriptor = self._queue.popleft()
                for events, handler in list(self._listeners):
                    if events is not None and event not in events:
                        continue
                    try:
                        handler(event, descriptor)
                    except Exception:
                        logger.exception("Notification listener failed on '%s'", event)
        finally:
            self._dispatching = False

    # ========================================
    # Alerts
    # ========================================

    def show_alert(self, message):
        if self.alert_handler is not None:
            self.alert_handler(message)
        else:
            logger.warning("Alert: %s", message)
