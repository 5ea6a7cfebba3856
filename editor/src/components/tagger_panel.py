"""
Layer Tagger - Tagger Panel

Three mutually exclusive panels (default, text, texture) and the populate
button. Implements the PanelPort used by the selection controller.
"""

from PyQt5.QtWidgets import QFrame, QVBoxLayout, QLabel, QPushButton
from PyQt5.QtCore import pyqtSignal

from constants import (
	DEFAULT_PANEL_ID, TEXT_PANEL_ID, TEXTURE_PANEL_ID, PANEL_IDS, POPULATE_BUTTON_ID
)


class TaggerPanel(QFrame):
	"""Right-hand editor panel driven by the primary layer selection"""

	populate_requested = pyqtSignal()  # Emitted when the populate button is clicked

	def __init__(self, parent=None):
		super().__init__(parent)
		self.setMinimumWidth(250)
		self.setMaximumWidth(400)
		self.panels = {}  # panel_id -> QFrame
		self._setup_ui()

	def _setup_ui(self):
		"""Setup the tagger panel UI"""
		layout = QVBoxLayout(self)
		layout.setContentsMargins(5, 5, 5, 5)

		header = QLabel("Layer Tagger")
		header.setStyleSheet("font-size: 14px; font-weight: bold; padding: 10px;")
		layout.addWidget(header)

		self._add_panel(layout, DEFAULT_PANEL_ID, "Layer",
			"Select a layer tagged @Text or @Texture to edit it here.\n"
			"Use Populate to tag the selected layers.")
		self._add_panel(layout, TEXT_PANEL_ID, "Text Layer",
			"The primary selection is a Text element.\n"
			"The importer builds a text block from it.")
		self._add_panel(layout, TEXTURE_PANEL_ID, "Texture Layer",
			"The primary selection is a Texture element.\n"
			"The importer builds an image from it.")

		layout.addStretch()

		self.populate_button = QPushButton("Populate and Rename")
		self.populate_button.setObjectName(POPULATE_BUTTON_ID)
		self.populate_button.setFixedHeight(30)
		self.populate_button.setToolTip("Encode type and size into the names of the selected layers")
		self.populate_button.clicked.connect(self._on_populate_clicked)
		layout.addWidget(self.populate_button)

		# Nothing selected at startup
		self.hide_all_panels()
		self.show_panel(DEFAULT_PANEL_ID)

	def _add_panel(self, layout, panel_id, title, hint):
		panel = QFrame()
		panel.setObjectName(panel_id)
		panel.setStyleSheet(f"""
			QFrame#{panel_id} {{
				border: 1px solid rgba(255, 255, 255, 40);
				border-radius: 3px;
			}}
		""")
		panel_layout = QVBoxLayout(panel)
		panel_layout.setContentsMargins(8, 8, 8, 8)

		title_label = QLabel(title)
		title_label.setStyleSheet("font-weight: bold; font-size: 12px; border: none;")
		panel_layout.addWidget(title_label)

		hint_label = QLabel(hint)
		hint_label.setWordWrap(True)
		hint_label.setStyleSheet("font-size: 11px; border: none;")
		panel_layout.addWidget(hint_label)

		layout.addWidget(panel)
		self.panels[panel_id] = panel

	def _on_populate_clicked(self):
		self.populate_requested.emit()

	# ========================================
	# PanelPort
	# ========================================

	def hide_all_panels(self):
		for panel in self.panels.values():
			panel.setHidden(True)

	def show_panel(self, panel_id):
		"""Show one panel; the caller hides the others first

		Raises:
			KeyError: If panel_id is not one of PANEL_IDS
		"""
		if panel_id not in self.panels:
			raise KeyError(f"Unknown panel '{panel_id}'")
		self.panels[panel_id].setHidden(False)

	def visible_panel_ids(self):
		"""Ids of panels not hidden (independent of whether the window is shown)"""
		return [panel_id for panel_id in PANEL_IDS if not self.panels[panel_id].isHidden()]

	def on_action_triggered(self, handler):
		self.populate_requested.connect(handler)
