"""
Layer Tagger - Constants and Configuration

This module contains all constant values used throughout the application:
- Layer name grammar (delimiters, tags)
- Panel and control identifiers
- Host notification kinds and modal command names
- User-facing messages
- Config defaults
"""

# ======================================================================
# LAYER NAME GRAMMAR
# ======================================================================
# name := base '@' tag [ ':' json ]

TAG_DELIMITER = '@'
PROPERTIES_DELIMITER = ':'

# Compact JSON, same bytes the importer expects: {"size":[64,64]}
JSON_SEPARATORS = (',', ':')

# Tags understood by the downstream importer (type -> widget class map)
KNOWN_TAGS = (
    'Panel', 'Texture', 'Text', 'Image', 'Button',
    'Slider', 'InputField', 'Toggle', 'Common',
)

# Host layer kind that maps to the Text tag; every other kind becomes Image
HOST_TEXT_LAYER_KIND = 'text'
HOST_PIXEL_LAYER_KIND = 'pixel'

# Classification results used to route the panel state
CLASSIFY_TEXT = 'text'
CLASSIFY_TEXTURE = 'texture'
CLASSIFY_DEFAULT = 'default'

# Properties the populate action may add on top of size
OPTIONAL_LAYER_PROPERTIES = ('opacity', 'blendMode')

# ======================================================================
# UI IDENTIFIERS
# ======================================================================

DEFAULT_PANEL_ID = 'default-panel'
TEXT_PANEL_ID = 'text-panel'
TEXTURE_PANEL_ID = 'texture-panel'
PANEL_IDS = (DEFAULT_PANEL_ID, TEXT_PANEL_ID, TEXTURE_PANEL_ID)

POPULATE_BUTTON_ID = 'btnPopulate'

# ======================================================================
# HOST NOTIFICATIONS AND MODAL COMMANDS
# ======================================================================

EVENT_SELECT = 'select'
EVENT_SET = 'set'
EVENT_OPEN = 'open'
EVENT_CLOSE = 'close'
EVENT_HISTORY_STATE_CHANGED = 'historyStateChanged'

POPULATE_COMMAND_NAME = 'Populate and Rename Layers'
SELECTION_COMMAND_NAME = 'Read Layer Selection'

# ======================================================================
# MESSAGES
# ======================================================================

NO_DOCUMENT_MESSAGE = 'Please open a document first.'
NO_SELECTION_MESSAGE = 'Please select at least one layer.'
POPULATE_SUCCESS_MESSAGE = 'Layer names encoded as:'
POPULATE_FAILED_MESSAGE = 'Operation failed: {error}'

# ======================================================================
# DEFAULTS
# ======================================================================

DEFAULT_LAYER_OPACITY = 100
DEFAULT_BLEND_MODE = 'normal'
DEFAULT_DOCUMENT_NAME = 'Untitled'

MAX_HISTORY_ENTRIES = 50
MAX_RECENT_FILES = 10

CONFIG_DIR_NAME = '.layertagger'
CONFIG_FILE_NAME = 'config.json'
