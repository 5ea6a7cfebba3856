import sys
import os
import logging

# Configure logging
logging.basicConfig(
    level=logging.WARNING,  # Only show warnings and errors
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)  # Output to console
    ]
)

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    current_dir = os.path.dirname(os.path.abspath(__file__))
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5 import QtWidgets
from PyQt5.QtWidgets import QMainWindow, QWidget, QHBoxLayout, QSplitter, QLabel
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPalette, QColor

# Component imports
from components.layer_list_widget import LayerListWidget
from components.tagger_panel import TaggerPanel

# Model and service imports
from models.host import Host
from services.ports import HostDocumentPort
from services.selection_controller import SelectionController

# Utility imports
from utils.logger import set_main_window, show_alert
from utils.config import get_config_path, load_config
from constants import EVENT_SELECT, EVENT_OPEN, EVENT_CLOSE, EVENT_HISTORY_STATE_CHANGED

# Action imports
from actions.file_actions import FileActions
from actions.populate_actions import PopulateActions

# Mixin imports
from window.menu_mixin import MenuMixin
from window.config_mixin import ConfigMixin
from window.history_mixin import HistoryMixin


class LayerTaggerWindow(MenuMixin, ConfigMixin, HistoryMixin, QMainWindow):
    def __init__(self, config_dir=None):
        super().__init__()
        self.setWindowTitle("Layer Tagger")
        self.resize(900, 600)

        self.config_file = get_config_path(config_dir)
        self.config = load_config(self.config_file)

        # Host stands in for the image editor; everything else talks to it through ports
        self.host = Host(max_history=self.config['max_history'], alert_handler=show_alert)
        self.host.history_manager.add_listener(self._on_history_changed)
        self.document_port = HostDocumentPort(self.host)

        set_main_window(self)

        # Initialize action handlers (composition pattern)
        self.file_actions = FileActions(self)
        self.populate_actions = PopulateActions(self)

        self.setup_ui()

        self.selection_controller = SelectionController(self.document_port, self.tagger_panel)
        self.selection_controller.attach()

        self.host.add_notification_listener([
            {'event': EVENT_SELECT},
            {'event': EVENT_OPEN},
            {'event': EVENT_CLOSE},
            {'event': EVENT_HISTORY_STATE_CHANGED},
        ], self._on_host_notification)

        self.tagger_panel.on_action_triggered(self._on_populate)

    # ============= UI Setup =============

    def setup_ui(self):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QHBoxLayout(central_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        splitter = QSplitter(Qt.Horizontal)

        # Left: document layers
        self.layer_list = LayerListWidget(self)
        self.layer_list.set_host(self.host)
        splitter.addWidget(self.layer_list)

        # Right: panels driven by the selection
        self.tagger_panel = TaggerPanel(self)
        splitter.addWidget(self.tagger_panel)

        splitter.setSizes([550, 350])
        splitter.setCollapsible(0, False)
        main_layout.addWidget(splitter)

        # Menu needs the panel and config in place
        self._create_menu_bar()

        self.status_left = QLabel("Ready")
        self.status_right = QLabel("No document")
        self.statusBar().addWidget(self.status_left, 1)
        self.statusBar().addPermanentWidget(self.status_right)

    # ============= Event Handlers =============

    def _on_host_notification(self, event, descriptor):
        # Open/close/undo change names without a 'select' event; re-read them
        if event != EVENT_SELECT:
            self.selection_controller.refresh()
            self._update_window_title()
            self._update_menu_actions()
        self._update_status_bar()

    def _on_populate(self):
        """Populate button / menu: encode the selected layers, then re-route the panel"""
        new_names = self.populate_actions.populate_selected()
        if new_names:
            self.selection_controller.refresh()
        return new_names


def main():
    """Main entry point for the Layer Tagger application"""
    app = QtWidgets.QApplication(sys.argv)

    # Use Fusion style with dark palette
    app.setStyle("Fusion")

    dark_palette = QPalette()
    dark_palette.setColor(QPalette.Window, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.WindowText, Qt.white)
    dark_palette.setColor(QPalette.Base, QColor(25, 25, 25))
    dark_palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ToolTipBase, Qt.white)
    dark_palette.setColor(QPalette.ToolTipText, Qt.white)
    dark_palette.setColor(QPalette.Text, Qt.white)
    dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ButtonText, Qt.white)
    dark_palette.setColor(QPalette.BrightText, Qt.red)
    dark_palette.setColor(QPalette.Link, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.HighlightedText, Qt.black)

    app.setPalette(dark_palette)

    window = LayerTaggerWindow()
    # Optional manifest path on the command line
    if len(sys.argv) > 1:
        window.file_actions.open_manifest(sys.argv[1])
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
