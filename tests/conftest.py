"""
Shared fixtures for Layer Tagger tests.

Provides a host with an open sample document, ports over it, a recording
panel, and sample manifest text.
"""
import sys
import os
import json
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))

# Widgets are created without a display
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')


# ── Sample layer names ──────────────────────────────────────────────────

TEXT_NAME = 'title@Text:{"size":[300,40]}'
TEXTURE_NAME = 'logo@Texture:{"size":[128,128]}'

SAMPLE_MANIFEST = {
    "name": "main_menu.psd",
    "width": 1920,
    "height": 1080,
    "layers": [
        {"id": 101, "name": "background", "kind": "pixel", "bounds": [0, 0, 1920, 1080]},
        {"id": 102, "name": "icon", "kind": "pixel", "bounds": [10, 10, 74, 74],
         "opacity": 80, "blendMode": "multiply"},
        {"id": 103, "name": "Start Game", "kind": "text", "bounds": [100, 200, 400, 240]},
    ],
    "selection": [102],
}


class RecordingPanel:
    """PanelPort that records visibility instead of drawing widgets"""

    def __init__(self):
        self.visible = set()
        self.calls = []
        self.action_handlers = []

    def hide_all_panels(self):
        self.calls.append(('hide_all',))
        self.visible.clear()

    def show_panel(self, panel_id):
        self.calls.append(('show', panel_id))
        self.visible.add(panel_id)

    def visible_panel_ids(self):
        return sorted(self.visible)

    def on_action_triggered(self, handler):
        self.action_handlers.append(handler)


@pytest.fixture
def alerts():
    """Alert messages shown by the host"""
    return []


@pytest.fixture
def sample_document():
    """Document with a text, a texture, a plain image and a background layer"""
    from models import Document, Layer, Bounds
    return Document("ui.psd", 800, 600, layers=[
        Layer("background", bounds=Bounds.from_size(800, 600)),
        Layer("icon", bounds=Bounds.from_size(64, 64, left=16, top=16)),
        Layer(TEXT_NAME, kind="text", bounds=Bounds.from_size(300, 40)),
        Layer(TEXTURE_NAME, bounds=Bounds.from_size(128, 128)),
    ])


@pytest.fixture
def host(alerts):
    """Host with no document open"""
    from models import Host
    return Host(alert_handler=alerts.append)


@pytest.fixture
def open_host(host, sample_document):
    """Host with sample_document open and nothing selected"""
    host.open_document(sample_document)
    return host


@pytest.fixture
def port(host):
    from services.ports import HostDocumentPort
    return HostDocumentPort(host)


@pytest.fixture
def panel():
    return RecordingPanel()


def layer_named(document, base_name):
    """First layer whose base name (before '@') matches"""
    for layer in document.layers:
        if layer.name.split('@', 1)[0] == base_name:
            return layer
    raise LookupError(base_name)


@pytest.fixture
def manifest_file(tmp_path):
    """Sample manifest written to a temp file"""
    path = tmp_path / "layers.json"
    path.write_text(json.dumps(SAMPLE_MANIFEST), encoding='utf-8')
    return path
