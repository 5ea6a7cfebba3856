"""User-facing alerts and error popups for Layer Tagger"""
import sys
import logging
from PyQt5.QtWidgets import QMessageBox

# Running from source (not a frozen build)
DEBUG_MODE = not getattr(sys, 'frozen', False)

ALERT_TITLE = "Layer Tagger"

_logger = logging.getLogger('LayerTagger')
_main_window = None


def set_main_window(window):
    """Parent window for popups; None switches to log-only alerts"""
    global _main_window
    _main_window = window


def show_alert(message: str, title: str = ALERT_TITLE):
    """Host alert handler: an information box over the main window"""
    _logger.info("Alert: %s", message)
    if _main_window is not None:
        QMessageBox.information(_main_window, title, message)


def loggerRaise(e: Exception, user_message: str = None, title: str = "Error"):
    """Report e to the user, then re-raise it

    From source the exception is re-raised untouched so the traceback reaches
    the console. Frozen builds log the traceback and show user_message (or
    the exception text) in a critical popup first.
    """
    if not DEBUG_MODE:
        _logger.error("%s", user_message or title, exc_info=e)
        message = user_message or str(e)
        if _main_window is not None:
            QMessageBox.critical(_main_window, title, message)
        else:
            _logger.error("No window for popup: %s - %s", title, message)
    raise e
