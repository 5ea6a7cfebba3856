"""Populate action - encode metadata into the names of the selected layers"""
import logging

from services.name_codec import encode, strip_tag, tag_for_layer_kind
from constants import (
	POPULATE_COMMAND_NAME, NO_DOCUMENT_MESSAGE, NO_SELECTION_MESSAGE,
	POPULATE_SUCCESS_MESSAGE, POPULATE_FAILED_MESSAGE, OPTIONAL_LAYER_PROPERTIES
)

logger = logging.getLogger(__name__)


def _json_number(value):
	# Whole floats are written as ints: [64,64], never [64.0,64.0]
	if isinstance(value, float) and value.is_integer():
		return int(value)
	return value


def build_layer_properties(layer, extra_properties=()):
	"""Properties written into a layer name

	Args:
		layer: Host layer handle
		extra_properties: Names from OPTIONAL_LAYER_PROPERTIES to add after size

	Returns:
		Dict with 'size': [width, height] and any requested extras
	"""
	properties = {'size': [_json_number(layer.bounds.width), _json_number(layer.bounds.height)]}
	for key in extra_properties:
		if key == 'opacity':
			properties['opacity'] = _json_number(layer.opacity)
		elif key == 'blendMode':
			properties['blendMode'] = layer.blend_mode
		else:
			logger.warning("Ignoring unknown layer property '%s' (expected one of %s)",
				key, ', '.join(OPTIONAL_LAYER_PROPERTIES))
	return properties


def populate_selected_layers(port, extra_properties=()):
	"""Rename every selected layer to base@Tag:{json} in one modal command

	Preconditions (an open document, a non-empty selection) are reported
	with an alert and nothing is renamed. Any other error is logged, the
	host rolls the document back, and the user sees the error message.

	Args:
		port: DocumentPort
		extra_properties: Optional property names to encode besides size

	Returns:
		List of new layer names (empty when nothing was renamed)
	"""
	def rename():
		if not port.has_open_document():
			port.alert(NO_DOCUMENT_MESSAGE)
			return []

		layers = port.active_layers()
		if not layers:
			port.alert(NO_SELECTION_MESSAGE)
			return []

		new_names = []
		for layer in layers:
			new_name = encode(
				strip_tag(layer.name),
				tag_for_layer_kind(layer.kind),
				build_layer_properties(layer, extra_properties)
			)
			layer.name = new_name
			new_names.append(new_name)
		return new_names

	try:
		new_names = port.execute_as_modal(rename, POPULATE_COMMAND_NAME)
	except Exception as e:
		logger.exception("Populate and rename failed")
		port.alert(POPULATE_FAILED_MESSAGE.format(error=e))
		return []

	if new_names:
		logger.info("Encoded %d layer name(s)", len(new_names))
		port.alert(POPULATE_SUCCESS_MESSAGE + "\n" + "\n".join(new_names))
	return new_names


class PopulateActions:
	"""Populate button handler for the main window"""

	def __init__(self, main_window):
		"""Initialize with reference to main window

		Args:
			main_window: The LayerTaggerWindow instance
		"""
		self.main_window = main_window

	def populate_selected(self):
		"""Encode the selected layers using the configured extra properties"""
		extra_properties = self.main_window.config.get('extra_properties', [])
		return populate_selected_layers(self.main_window.document_port, extra_properties)
