"""File operations for the main window - open, save, close layer manifests"""
import logging

from PyQt5.QtWidgets import QFileDialog, QMessageBox

from services.file_operations import load_manifest_from_file, save_manifest_to_file, ManifestError

MANIFEST_FILTER = "Layer Manifest (*.json);;All Files (*)"

logger = logging.getLogger(__name__)


class FileActions:
	"""Handles all file menu operations"""

	def __init__(self, main_window):
		"""Initialize with reference to main window

		Args:
			main_window: The LayerTaggerWindow instance
		"""
		self.main_window = main_window

	def open_manifest(self, filepath=None):
		"""Open a layer manifest as the active document

		Args:
			filepath: Path to open; asks with a file dialog when None

		Returns:
			The opened Document, or None when cancelled or on error
		"""
		if not filepath:
			filepath, _ = QFileDialog.getOpenFileName(
				self.main_window, "Open Layer Manifest", "", MANIFEST_FILTER
			)
			if not filepath:
				return None

		try:
			document = load_manifest_from_file(filepath)
		except (OSError, ManifestError) as e:
			logger.warning("Failed to open %s: %s", filepath, e)
			QMessageBox.critical(self.main_window, "Open Failed", f"Could not open manifest:\n{e}")
			return None

		self.main_window.host.open_document(document)
		self.main_window._add_to_recent_files(filepath)
		return document

	def save_manifest(self):
		"""Save the active document to its file, asking for a path if it has none"""
		document = self.main_window.host.active_document
		if document is None:
			return False
		if not document.file_path:
			return self.save_manifest_as()
		return self._write(document, document.file_path)

	def save_manifest_as(self, filepath=None):
		"""Save the active document to a new file"""
		document = self.main_window.host.active_document
		if document is None:
			return False
		if not filepath:
			filepath, _ = QFileDialog.getSaveFileName(
				self.main_window, "Save Layer Manifest", document.file_path or "", MANIFEST_FILTER
			)
			if not filepath:
				return False
		if self._write(document, filepath):
			self.main_window._add_to_recent_files(filepath)
			return True
		return False

	def _write(self, document, filepath):
		try:
			save_manifest_to_file(document, filepath)
		except OSError as e:
			logger.warning("Failed to save %s: %s", filepath, e)
			QMessageBox.critical(self.main_window, "Save Failed", f"Could not save manifest:\n{e}")
			return False
		self.main_window.statusBar().showMessage(f"Saved {filepath}", 3000)
		return True

	def close_document(self):
		"""Close the active document"""
		self.main_window.host.close_document()
