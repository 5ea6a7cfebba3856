"""Config persistence and the Recent Files menu for LayerTaggerWindow"""

import os
from PyQt5.QtWidgets import QMessageBox

from utils.config import save_config, add_recent_file


class ConfigMixin:
	"""Keeps self.config on disk and mirrors config['recent_files'] in the menu"""

	def _save_config(self):
		save_config(self.config, self.config_file)

	def _add_to_recent_files(self, filepath):
		add_recent_file(self.config, filepath)
		self._save_config()
		if hasattr(self, 'recent_menu'):
			self._update_recent_files_menu()

	def _forget_recent_file(self, filepath):
		self.config['recent_files'] = [f for f in self.config['recent_files'] if f != filepath]
		self._save_config()
		self._update_recent_files_menu()

	def _update_recent_files_menu(self):
		"""Rebuild the Recent Files submenu from config"""
		menu = self.recent_menu
		menu.clear()

		recent_files = self.config.get('recent_files', [])
		if not recent_files:
			menu.addAction("No recent files").setEnabled(False)
			return

		for filepath in recent_files:
			action = menu.addAction(os.path.basename(filepath))
			action.setToolTip(filepath)
			action.triggered.connect(lambda checked, f=filepath: self._open_recent_file(f))

		menu.addSeparator()
		menu.addAction("Clear Recent Files").triggered.connect(self._clear_recent_files)

	def _clear_recent_files(self):
		self.config['recent_files'] = []
		self._save_config()
		self._update_recent_files_menu()

	def _open_recent_file(self, filepath):
		"""Open a manifest from the Recent Files menu"""
		if os.path.exists(filepath):
			self.file_actions.open_manifest(filepath)
			return
		QMessageBox.warning(self, "File Not Found", f"The manifest no longer exists:\n{filepath}")
		self._forget_recent_file(filepath)
