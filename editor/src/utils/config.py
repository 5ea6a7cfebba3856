"""Configuration file for Layer Tagger: recent files and populate options"""

import os
import json
import logging

from utils.logger import loggerRaise
from constants import (
    CONFIG_DIR_NAME, CONFIG_FILE_NAME, MAX_RECENT_FILES, MAX_HISTORY_ENTRIES,
    OPTIONAL_LAYER_PROPERTIES
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'recent_files': [],
    'extra_properties': [],  # Subset of OPTIONAL_LAYER_PROPERTIES
    'max_history': MAX_HISTORY_ENTRIES,
}


def get_config_path(config_dir=None):
    """Config file path, ~/.layertagger/config.json unless config_dir is given"""
    if config_dir is None:
        config_dir = os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)
    return os.path.join(config_dir, CONFIG_FILE_NAME)


def _normalize(config):
    merged = dict(DEFAULT_CONFIG)
    merged.update({k: v for k, v in config.items() if k in DEFAULT_CONFIG})

    if not isinstance(merged['recent_files'], list):
        merged['recent_files'] = []
    merged['recent_files'] = [f for f in merged['recent_files'] if isinstance(f, str)][:MAX_RECENT_FILES]

    extra = merged['extra_properties']
    if not isinstance(extra, list):
        extra = []
    merged['extra_properties'] = [p for p in extra if p in OPTIONAL_LAYER_PROPERTIES]

    if not isinstance(merged['max_history'], int) or merged['max_history'] < 1:
        merged['max_history'] = MAX_HISTORY_ENTRIES
    return merged


def load_config(config_file):
    """Load settings, falling back to defaults for a missing or unreadable file

    Recent files that no longer exist are dropped.
    """
    if not os.path.exists(config_file):
        return _normalize({})
    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_file, e)
        return _normalize({})

    if not isinstance(config, dict):
        logger.warning("Ignoring config %s: expected a JSON object", config_file)
        return _normalize({})

    config = _normalize(config)
    config['recent_files'] = [f for f in config['recent_files'] if os.path.exists(f)]
    return config


def save_config(config, config_file):
    """Save settings, creating the config directory if needed"""
    try:
        os.makedirs(os.path.dirname(config_file), exist_ok=True)
        with open(config_file, 'w', encoding='utf-8') as f:
            json.dump(_normalize(config), f, indent=2)
    except Exception as e:
        loggerRaise(e, "Error saving config")


def add_recent_file(config, filepath):
    """Move filepath to the front of the recent files list (in place)"""
    recent = [f for f in config.get('recent_files', []) if f != filepath]
    recent.insert(0, filepath)
    config['recent_files'] = recent[:MAX_RECENT_FILES]
    return config
