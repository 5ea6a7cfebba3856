"""
Layer Tagger - Layer List Widget

Shows the active document's layers (top of the stack first) and turns row
selection into host selection changes, which the host reports as 'select'
notifications.
"""

import logging

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QLabel, QListWidget, QListWidgetItem, QAbstractItemView
from PyQt5.QtCore import Qt, QItemSelectionModel

from services.name_codec import decode
from constants import EVENT_SELECT, EVENT_SET, EVENT_OPEN, EVENT_CLOSE, EVENT_HISTORY_STATE_CHANGED

LAYER_ID_ROLE = Qt.UserRole


class LayerListWidget(QWidget):
	"""Layer list bound to a Host"""

	def __init__(self, parent=None):
		super().__init__(parent)
		self.host = None  # Set by set_host
		self._syncing = False  # True while the list is being updated from the host
		self._logger = logging.getLogger('LayerListWidget')
		self._setup_ui()

	def _setup_ui(self):
		"""Setup the layer list UI"""
		layout = QVBoxLayout(self)
		layout.setContentsMargins(0, 0, 0, 0)
		layout.setSpacing(2)

		self.title_label = QLabel("No document")
		self.title_label.setStyleSheet("font-size: 12px; font-weight: bold; padding: 4px;")
		layout.addWidget(self.title_label)

		self.list_widget = QListWidget()
		self.list_widget.setSelectionMode(QAbstractItemView.ExtendedSelection)
		self.list_widget.itemSelectionChanged.connect(self._on_item_selection_changed)
		layout.addWidget(self.list_widget)

	def set_host(self, host):
		"""Bind to a host and follow its document notifications"""
		self.host = host
		host.add_notification_listener([
			{'event': EVENT_SELECT},
			{'event': EVENT_SET},
			{'event': EVENT_OPEN},
			{'event': EVENT_CLOSE},
			{'event': EVENT_HISTORY_STATE_CHANGED},
		], self._on_host_notification)
		self.rebuild()

	def _on_host_notification(self, event, descriptor):
		if event == EVENT_SELECT:
			self._sync_selection()
		else:
			self.rebuild()

	# ========================================
	# Host -> list
	# ========================================

	def _document(self):
		return self.host.active_document if self.host is not None else None

	def rebuild(self):
		"""Rebuild rows from the active document"""
		document = self._document()
		self._syncing = True
		try:
			self.list_widget.clear()
			if document is None:
				self.title_label.setText("No document")
				return
			self.title_label.setText(f"{document.name} ({len(document.layers)} layers)")
			# Top of the stack first, as in the image editor's layer panel
			for layer in reversed(document.layers):
				item = QListWidgetItem(layer.name)
				item.setData(LAYER_ID_ROLE, layer.id)
				item.setToolTip(self._tooltip_for(layer))
				self.list_widget.addItem(item)
		finally:
			self._syncing = False
		self._sync_selection()

	def _tooltip_for(self, layer):
		metadata = decode(layer.name)
		tag = metadata.kind or "untagged"
		return (f"{metadata.base_name} [{tag}]\n"
			f"kind: {layer.kind}, size: {layer.bounds.width} x {layer.bounds.height}")

	def _sync_selection(self):
		"""Mirror the host selection in the list without echoing it back"""
		document = self._document()
		selected_ids = document.active_layer_ids if document is not None else []
		self._syncing = True
		try:
			current_item = None
			for row in range(self.list_widget.count()):
				item = self.list_widget.item(row)
				layer_id = item.data(LAYER_ID_ROLE)
				item.setSelected(layer_id in selected_ids)
				if selected_ids and layer_id == selected_ids[0]:
					current_item = item
			if current_item is not None:
				self.list_widget.setCurrentItem(current_item, QItemSelectionModel.NoUpdate)
		finally:
			self._syncing = False

	# ========================================
	# List -> host
	# ========================================

	def selected_layer_ids(self):
		"""Selected layer ids, current (last clicked) item first"""
		selected = list(self.list_widget.selectedItems())
		selected.sort(key=self.list_widget.row)
		current = self.list_widget.currentItem()
		if current is not None and current in selected:
			selected.remove(current)
			selected.insert(0, current)
		return [item.data(LAYER_ID_ROLE) for item in selected]

	def _on_item_selection_changed(self):
		if self._syncing:
			return
		document = self._document()
		if document is None:
			return
		layer_ids = self.selected_layer_ids()
		self._logger.debug("List selection -> %s", layer_ids)
		document.select_layers(layer_ids)

	def select_layer_ids(self, layer_ids):
		"""Select layers programmatically (goes through the host)"""
		document = self._document()
		if document is not None:
			document.select_layers(layer_ids)
