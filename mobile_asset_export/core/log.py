# -*- coding: utf-8 -*-
"""
Mobile Asset Export Logging Module
Lightweight console logging with a fixed prefix.

Messages go to stderr so that stdout stays free for listings
(``--list-artboards``, ``--dry-run``).
"""

import sys

_PREFIX = "[MobileAssetExport]"

_verbose = False


def set_verbose(enabled):
    """
    Enable or disable debug output

    Args:
        enabled: True to print debug messages
    """
    global _verbose
    _verbose = bool(enabled)


def _emit(level, message):
    print(f"{_PREFIX} {level}: {message}", file=sys.stderr)


def info(message):
    """
    Log an informational message

    Args:
        message: Message to log
    """
    _emit("INFO", message)


def warning(message):
    """
    Log a warning message

    Args:
        message: Warning message to log
    """
    _emit("WARNING", message)


def error(message):
    """
    Log an error message

    Args:
        message: Error message to log
    """
    _emit("ERROR", message)


def debug(message):
    """
    Log a debug message (only printed in verbose mode)

    Args:
        message: Debug message to log
    """
    if _verbose:
        _emit("DEBUG", message)


def error_safe(message, exception=None):
    """
    Log an error with the exception text appended.

    Args:
        message: Error message prefix
        exception: Optional exception object to include
    """
    if exception:
        full_msg = f"{message}: {exception}"
    else:
        full_msg = message
    error(full_msg)


def debug_safe(message, exception=None):
    if exception:
        full_msg = f"{message}: {exception}"
    else:
        full_msg = message
    debug(full_msg)
