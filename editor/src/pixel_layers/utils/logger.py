"""Global logging and error handling utilities"""
import logging
import sys
import traceback

# Detect debug mode - True if running from source, False if packaged
DEBUG_MODE = not getattr(sys, 'frozen', False)

_logger = logging.getLogger('pixel_layers')

_error_sink = None


def set_error_sink(callback):
    """Set the host callback used to surface errors to the user

    Args:
        callback: Callable taking (title, message), or None to clear
    """
    global _error_sink
    _error_sink = callback


def logger_raise(e: Exception, user_message: str = None, title: str = "Error"):
    """Log an exception, forward it to the host, then re-raise it

    Args:
        e: The exception to handle
        user_message: User-friendly message for the host sink (optional)
        title: Title passed to the host sink

    In DEBUG_MODE:
        - Logs the message and raises (the traceback is shown by the raise)

    In RELEASE_MODE:
        - Logs the full traceback as well
        - Forwards the message to the host error sink
        - Then raises the exception
    """
    message = user_message if user_message else str(e)

    if DEBUG_MODE:
        _logger.debug(f"{title}: {message}")
    else:
        tb = ''.join(traceback.format_exception(type(e), e, e.__traceback__))
        _logger.error(f"{title}: {message}\n{tb}")
        if _error_sink:
            _error_sink(title, message)

    raise e
