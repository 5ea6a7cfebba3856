"""
Tests for the selection controller.

Covers:
- Initial state shows only the default panel
- Text / texture / default transitions from 'select' notifications
- Exactly one panel visible after every selection sequence
- Events other than 'select' cause no transition
- Read failures keep the previous state
"""
import itertools
import pytest

from services.ports import HostDocumentPort
from services.selection_controller import SelectionController, PanelState, state_for_selection
from conftest import layer_named, RecordingPanel


@pytest.fixture
def controller(open_host, port, panel):
    controller = SelectionController(port, panel)
    controller.attach()
    return controller


def _select(host, *base_names):
    document = host.active_document
    document.select_layers([layer_named(document, name).id for name in base_names])


# ══════════════════════════════════════════════════════════════════════════
# Pure mapping
# ══════════════════════════════════════════════════════════════════════════

class TestStateForSelection:

    def test_empty(self):
        assert state_for_selection([]) is PanelState.DEFAULT

    def test_text(self):
        assert state_for_selection(['t@Text:{}']) is PanelState.SHOWING_TEXT

    def test_texture(self):
        assert state_for_selection(['x@Texture:{}']) is PanelState.SHOWING_TEXTURE

    def test_image(self):
        assert state_for_selection(['i@Image:{}']) is PanelState.DEFAULT

    def test_panel_ids(self):
        assert PanelState.DEFAULT.panel_id == 'default-panel'
        assert PanelState.SHOWING_TEXT.panel_id == 'text-panel'
        assert PanelState.SHOWING_TEXTURE.panel_id == 'texture-panel'


# ══════════════════════════════════════════════════════════════════════════
# Transitions
# ══════════════════════════════════════════════════════════════════════════

class TestTransitions:

    def test_initial_state(self, controller, panel):
        assert controller.state is PanelState.DEFAULT
        assert panel.visible_panel_ids() == ['default-panel']

    def test_text_selected(self, controller, open_host, panel):
        _select(open_host, "title")
        assert controller.state is PanelState.SHOWING_TEXT
        assert panel.visible_panel_ids() == ['text-panel']

    def test_texture_selected(self, controller, open_host, panel):
        _select(open_host, "logo")
        assert controller.state is PanelState.SHOWING_TEXTURE
        assert panel.visible_panel_ids() == ['texture-panel']

    def test_texture_after_text(self, controller, open_host, panel):
        _select(open_host, "title")
        _select(open_host, "logo")
        assert controller.state is PanelState.SHOWING_TEXTURE
        assert panel.visible_panel_ids() == ['texture-panel']

    def test_deselect_returns_to_default(self, controller, open_host, panel):
        _select(open_host, "logo")
        open_host.active_document.clear_selection()
        assert controller.state is PanelState.DEFAULT
        assert panel.visible_panel_ids() == ['default-panel']

    def test_untagged_layer_is_default(self, controller, open_host, panel):
        _select(open_host, "title")
        _select(open_host, "icon")
        assert controller.state is PanelState.DEFAULT
        assert panel.visible_panel_ids() == ['default-panel']

    def test_primary_layer_decides(self, controller, open_host):
        _select(open_host, "logo", "title")
        assert controller.state is PanelState.SHOWING_TEXTURE
        _select(open_host, "title", "logo")
        assert controller.state is PanelState.SHOWING_TEXT

    def test_hides_before_showing(self, controller, open_host, panel):
        panel.calls.clear()
        _select(open_host, "title")
        assert panel.calls == [('hide_all',), ('show', 'text-panel')]

    def test_attach_twice_registers_once(self, controller, open_host, panel):
        controller.attach()
        panel.calls.clear()
        _select(open_host, "title")
        assert panel.calls.count(('show', 'text-panel')) == 1

    def test_no_document(self, host, port, panel):
        controller = SelectionController(port, panel)
        controller.attach()
        assert controller.refresh() is PanelState.DEFAULT
        assert panel.visible_panel_ids() == ['default-panel']

    def test_exactly_one_panel_for_every_sequence(self, controller, open_host, panel):
        document = open_host.active_document
        choices = [
            (),
            ("title",),
            ("logo",),
            ("icon",),
            ("logo", "title"),
        ]
        expected = {
            (): 'default-panel',
            ("title",): 'text-panel',
            ("logo",): 'texture-panel',
            ("icon",): 'default-panel',
            ("logo", "title"): 'texture-panel',
        }
        for sequence in itertools.product(choices, repeat=3):
            for selection in sequence:
                document.select_layers([layer_named(document, n).id for n in selection])
                assert panel.visible_panel_ids() == [expected[selection]]
                assert controller.state.panel_id == expected[selection]


# ══════════════════════════════════════════════════════════════════════════
# Ignored events and failures
# ══════════════════════════════════════════════════════════════════════════

class TestRobustness:

    def test_other_events_ignored(self, controller, open_host, panel):
        _select(open_host, "title")
        panel.calls.clear()
        for event in ('set', 'open', 'close', 'historyStateChanged'):
            assert controller.handle_notification(event, {}) is PanelState.SHOWING_TEXT
        assert panel.calls == []

    def test_rename_does_not_transition(self, controller, open_host, panel):
        _select(open_host, "title")
        layer = layer_named(open_host.active_document, "title")
        with open_host.modal_scope("Rename"):
            layer.name = "title@Texture:{}"
        assert controller.state is PanelState.SHOWING_TEXT

    def test_refresh_picks_up_rename(self, controller, open_host, panel):
        _select(open_host, "title")
        layer = layer_named(open_host.active_document, "title")
        with open_host.modal_scope("Rename"):
            layer.name = "title@Texture:{}"
        assert controller.refresh() is PanelState.SHOWING_TEXTURE
        assert panel.visible_panel_ids() == ['texture-panel']

    def test_busy_host_keeps_state(self, controller, open_host, panel, caplog):
        _select(open_host, "logo")
        panel.calls.clear()
        with open_host.modal_scope("Busy"):
            assert controller.refresh() is PanelState.SHOWING_TEXTURE
        assert panel.calls == []
        assert "Error handling layer selection" in caplog.text

    def test_panel_failure_restores_previous_panel(self, open_host, caplog):
        class BrokenTexturePanel(RecordingPanel):
            def show_panel(self, panel_id):
                if panel_id == 'texture-panel':
                    raise KeyError(panel_id)
                super().show_panel(panel_id)

        panel = BrokenTexturePanel()
        controller = SelectionController(HostDocumentPort(open_host), panel)
        controller.attach()

        _select(open_host, "title")
        assert controller.refresh() is PanelState.SHOWING_TEXT
        _select(open_host, "logo")

        assert controller.state is PanelState.SHOWING_TEXT
        assert panel.visible_panel_ids() == ['text-panel']
        assert "Could not show texture-panel" in caplog.text

    def test_read_error_keeps_state(self, open_host, caplog):
        class FlakyPort(HostDocumentPort):
            fail = False

            def active_layer_names(self):
                if self.fail:
                    raise RuntimeError("host went away")
                return super().active_layer_names()

        port = FlakyPort(open_host)
        panel = RecordingPanel()
        controller = SelectionController(port, panel)
        controller.attach()

        _select(open_host, "title")
        port.fail = True
        _select(open_host, "logo")

        assert controller.state is PanelState.SHOWING_TEXT
        assert panel.visible_panel_ids() == ['text-panel']
        assert "host went away" in caplog.text
