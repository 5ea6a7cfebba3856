"""Menu bar creation and menu action handlers for LayerTaggerWindow"""

from PyQt5.QtWidgets import QMessageBox

from constants import OPTIONAL_LAYER_PROPERTIES


class MenuMixin:
    """Menu bar and menu action handlers"""

    def _create_menu_bar(self):
        """Create the menu bar with File, Edit, Layer, Help menus"""
        menubar = self.menuBar()

        # File Menu
        file_menu = menubar.addMenu("&File")

        open_action = file_menu.addAction("&Open Manifest...")
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(lambda: self.file_actions.open_manifest())

        # Recent Files submenu
        self.recent_menu = file_menu.addMenu("Recent Files")
        self._update_recent_files_menu()

        file_menu.addSeparator()

        self.save_action = file_menu.addAction("&Save Manifest")
        self.save_action.setShortcut("Ctrl+S")
        self.save_action.triggered.connect(self.file_actions.save_manifest)

        self.save_as_action = file_menu.addAction("Save Manifest &As...")
        self.save_as_action.setShortcut("Ctrl+Shift+S")
        self.save_as_action.triggered.connect(lambda: self.file_actions.save_manifest_as())

        self.close_action = file_menu.addAction("&Close Document")
        self.close_action.setShortcut("Ctrl+W")
        self.close_action.triggered.connect(self.file_actions.close_document)

        file_menu.addSeparator()

        exit_action = file_menu.addAction("E&xit")
        exit_action.setShortcut("Alt+F4")
        exit_action.triggered.connect(self.close)

        # Edit Menu
        self.edit_menu = menubar.addMenu("&Edit")

        self.undo_action = self.edit_menu.addAction("&Undo")
        self.undo_action.setShortcut("Ctrl+Z")
        self.undo_action.triggered.connect(self.undo)

        self.redo_action = self.edit_menu.addAction("&Redo")
        self.redo_action.setShortcut("Ctrl+Y")
        self.redo_action.triggered.connect(self.redo)

        # Layer Menu
        self.layers_menu = menubar.addMenu("&Layer")

        self.populate_action = self.layers_menu.addAction("&Populate and Rename")
        self.populate_action.setShortcut("Ctrl+P")
        self.populate_action.triggered.connect(self._on_populate)

        self.layers_menu.addSeparator()

        # Optional properties written next to size
        self.extra_property_actions = {}
        for prop in OPTIONAL_LAYER_PROPERTIES:
            action = self.layers_menu.addAction(f"Include {prop}")
            action.setCheckable(True)
            action.setChecked(prop in self.config.get('extra_properties', []))
            action.toggled.connect(lambda checked, p=prop: self._on_extra_property_toggled(p, checked))
            self.extra_property_actions[prop] = action

        # Help Menu
        help_menu = menubar.addMenu("&Help")

        about_action = help_menu.addAction("&About")
        about_action.triggered.connect(self._show_about)

        self._update_menu_actions()

    def _update_menu_actions(self):
        """Enable document actions only when a document is open"""
        has_document = self.host.active_document is not None
        self.save_action.setEnabled(has_document)
        self.save_as_action.setEnabled(has_document)
        self.close_action.setEnabled(has_document)
        self.undo_action.setEnabled(self.host.history_manager.can_undo())
        self.redo_action.setEnabled(self.host.history_manager.can_redo())

    def _on_extra_property_toggled(self, prop, checked):
        extra = [p for p in self.config.get('extra_properties', []) if p != prop]
        if checked:
            extra.append(prop)
        # Keep the configured order stable
        self.config['extra_properties'] = [p for p in OPTIONAL_LAYER_PROPERTIES if p in extra]
        self._save_config()

    def _show_about(self):
        from version import get_version
        QMessageBox.about(
            self,
            "About Layer Tagger",
            f"Layer Tagger {get_version()}\n\n"
            "Encodes layer type and size into layer names\n"
            "as name@Type:{json} for the asset importer."
        )
