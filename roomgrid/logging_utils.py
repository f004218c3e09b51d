"""Logging utilities for roomgrid.

Provides color-coded console output with a level threshold taken from
``Config.LOG_LEVEL``.
"""

import os
from enum import Enum

from .config import Config, LOG_LEVELS


class Color(Enum):
    """ANSI color codes for terminal output."""

    GREY = "\033[90m"      # Debug detail
    CYAN = "\033[96m"      # Info/metadata
    GREEN = "\033[92m"     # Success/completion
    YELLOW = "\033[93m"    # Destructive-but-handled operations
    RED = "\033[91m"       # Errors

    # Formatting
    BOLD = "\033[1m"
    RESET = "\033[0m"


# Markers for message types (color-blind accessible)
EMOJI_DEBUG = "[•]"
EMOJI_INFO = "[i]"
EMOJI_SUCCESS = "[✓]"
EMOJI_WARNING = "[!]"
EMOJI_ERROR = "[!!]"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Wrap text in ANSI color codes if colors are enabled.

    Args:
        text: Text to colorize
        color: Color to apply
        bold: Whether to make text bold

    Returns:
        Colorized text if ROOMGRID_NO_COLOR is not set, otherwise plain text
    """
    if os.getenv("ROOMGRID_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def is_enabled(level: str) -> bool:
    """Return True if messages at ``level`` pass the configured threshold."""
    threshold = Config.LOG_LEVEL if Config.LOG_LEVEL in LOG_LEVELS else "INFO"
    return LOG_LEVELS.index(level) >= LOG_LEVELS.index(threshold)


def log_debug(message: str) -> None:
    """Log debug detail (grey)."""
    if is_enabled("DEBUG"):
        print(colored(f"{EMOJI_DEBUG} {message}", Color.GREY))


def log_info(message: str) -> None:
    """Log metadata/info (cyan)."""
    if is_enabled("INFO"):
        print(colored(f"{EMOJI_INFO} {message}", Color.CYAN))


def log_success(message: str) -> None:
    """Log a success (green)."""
    if is_enabled("INFO"):
        print(colored(f"{EMOJI_SUCCESS} {message}", Color.GREEN))


def log_warning(message: str) -> None:
    """Log a warning (yellow)."""
    if is_enabled("WARNING"):
        print(colored(f"{EMOJI_WARNING} {message}", Color.YELLOW))


def log_error(message: str) -> None:
    """Log an error (red)."""
    if is_enabled("ERROR"):
        print(colored(f"{EMOJI_ERROR} {message}", Color.RED, bold=True))
