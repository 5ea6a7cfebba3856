"""
Layer Tagger - Host and Panel Ports

Narrow capability interfaces between the tagging logic and the things it
does not own: the host document and the panel widgets. The logic only holds
a port, never a copy of host state.
"""

from typing import Callable, List, Protocol, Sequence

from constants import EVENT_SELECT


class DocumentPort(Protocol):
    """Access to the host's active document"""

    def has_open_document(self) -> bool: ...

    def active_layers(self) -> list: ...

    def active_layer_names(self) -> List[str]: ...

    def execute_as_modal(self, action: Callable, command_name: str): ...

    def alert(self, message: str) -> None: ...

    def on_selection_changed(self, handler: Callable[[str, dict], None]) -> None: ...


class PanelPort(Protocol):
    """The mutually exclusive editor panels and the populate button"""

    def hide_all_panels(self) -> None: ...

    def show_panel(self, panel_id: str) -> None: ...

    def visible_panel_ids(self) -> Sequence[str]: ...

    def on_action_triggered(self, handler: Callable[[], None]) -> None: ...


class HostDocumentPort:
    """DocumentPort over the in-process Host"""

    def __init__(self, host):
        self.host = host

    def has_open_document(self):
        return len(self.host.documents) > 0 and self.host.active_document is not None

    def active_layers(self):
        if not self.has_open_document():
            return []
        return self.host.active_document.active_layers

    def active_layer_names(self):
        return [layer.name for layer in self.active_layers()]

    def execute_as_modal(self, action, command_name):
        return self.host.execute_as_modal(action, command_name)

    def alert(self, message):
        self.host.show_alert(message)

    def on_selection_changed(self, handler):
        self.host.add_notification_listener([{'event': EVENT_SELECT}], handler)
