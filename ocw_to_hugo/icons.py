#!/usr/bin/env python3
"""
icons.py - Centralized icon definitions for ocw-to-hugo console output

Usage:
    from ocw_to_hugo.icons import icons
    print(f"{icons.SUCCESS} Course converted")

Or import individual icons:
    from ocw_to_hugo.icons import SUCCESS, WARNING
    print(log_warning("Course skipped", prefix="paths"))

All unicode characters are defined here once.
"""

import logging
from dataclasses import dataclass


@dataclass(frozen=True)
class Icons:
    """
    Centralized icon definitions.

    Categories:
    - Status: SUCCESS, ERROR, WARNING, INFO, DEBUG, CRITICAL
    - Content: COURSE, PAGE, FOLDER
    """

    # =========================================================================
    # Status Icons
    # =========================================================================
    SUCCESS: str = "✅"
    ERROR: str = "❌"
    WARNING: str = "⚠️"
    INFO: str = "ℹ️"
    DEBUG: str = "🔍"
    CRITICAL: str = "💥"

    # =========================================================================
    # Content Icons
    # =========================================================================
    COURSE: str = "📚"
    PAGE: str = "📄"
    FOLDER: str = "📁"


# Global singleton instance
icons = Icons()

# Convenience exports for direct import
SUCCESS = icons.SUCCESS
ERROR = icons.ERROR
WARNING = icons.WARNING
INFO = icons.INFO
COURSE = icons.COURSE
PAGE = icons.PAGE
FOLDER = icons.FOLDER

# Icon shown in front of each log record
LEVEL_ICONS = {
    logging.DEBUG: icons.DEBUG,
    logging.INFO: icons.INFO,
    logging.WARNING: icons.WARNING,
    logging.ERROR: icons.ERROR,
    logging.CRITICAL: icons.CRITICAL,
}


# =========================================================================
# Output Helper Functions
# =========================================================================

def log(icon: str, message: str, prefix: str = "") -> str:
    """
    Format a console message with icon.

    Args:
        icon: Icon to display (use constants from this module)
        message: Message text
        prefix: Optional prefix tag like "paths" or "convert"

    Returns:
        Formatted string like "✅ Done!" or "[convert] ✅ Done!"
    """
    if prefix:
        return f"[{prefix}] {icon} {message}"
    return f"{icon} {message}"


def log_success(message: str, prefix: str = "") -> str:
    """Format a success message."""
    return log(SUCCESS, message, prefix)


def log_error(message: str, prefix: str = "") -> str:
    """Format an error message."""
    return log(ERROR, message, prefix)


def log_warning(message: str, prefix: str = "") -> str:
    """Format a warning message."""
    return log(WARNING, message, prefix)


def log_info(message: str, prefix: str = "") -> str:
    """Format an info message."""
    return log(INFO, message, prefix)
