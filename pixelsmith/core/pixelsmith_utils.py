#!/usr/bin/env python3
"""
Common utilities for the sprite editor engine
Extracted to avoid duplication between modules
"""

# Standard library imports
import logging
from pathlib import Path, PosixPath, WindowsPath
from typing import Any, Union

# Local imports
from pixelsmith.logging_config import get_logger

# ================================================================================
# Debug Logging Utilities
# ================================================================================

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def debug_log(category: str, message: str, level: str = "INFO") -> None:
    """Log a message under a category logger

    Args:
        category: Category for the log message (e.g., "GRID", "TOOL", "CODEC")
        message: The log message
        level: Log level ("INFO", "WARNING", "ERROR", "DEBUG")
    """
    get_logger(category.lower()).log(_LEVELS.get(level, logging.INFO), message)


def debug_exception(category: str, exception: Exception) -> None:
    """Log exceptions with full traceback

    Args:
        category: Category for the log message
        exception: The exception to log
    """
    get_logger(category.lower()).error(
        f"Exception: {type(exception).__name__}: {exception!s}",
        exc_info=exception,
    )


def debug_color(color: tuple[int, ...]) -> str:
    """Format color information for debugging

    Args:
        color: RGB or RGBA tuple

    Returns:
        Formatted string with color information
    """
    return f"RGBA: {tuple(color)}, Hex: {color_to_hex(color)}"


# ================================================================================
# Color Validation Utilities
# ================================================================================


def validate_rgba_color(color: Union[tuple, list]) -> tuple[int, int, int, int]:
    """Validate and normalize an RGB or RGBA color

    Args:
        color: RGB or RGBA color as tuple or list

    Returns:
        RGBA tuple with channels clamped to 0-255 (alpha defaults to 255)

    Raises:
        ValueError: If the color does not have 3 or 4 channels
    """
    if not isinstance(color, (tuple, list)) or len(color) not in (3, 4):
        raise ValueError(f"Expected an RGB or RGBA color, got {color!r}")

    channels = [max(0, min(255, int(c))) for c in color]
    if len(channels) == 3:
        channels.append(255)
    return (channels[0], channels[1], channels[2], channels[3])


def color_to_hex(color: tuple[int, ...]) -> str:
    """Format a color as #rrggbb or #rrggbbaa when not fully opaque"""
    r, g, b = color[0], color[1], color[2]
    a = color[3] if len(color) > 3 else 255
    if a == 255:
        return f"#{r:02x}{g:02x}{b:02x}"
    return f"#{r:02x}{g:02x}{b:02x}{a:02x}"


def parse_hex_color(value: str) -> tuple[int, int, int, int]:
    """Parse #rgb, #rrggbb or #rrggbbaa into an RGBA tuple

    Raises:
        ValueError: If the string is not a hex color
    """
    if not isinstance(value, str):
        raise ValueError(f"Invalid hex color: {value!r}")
    text = value.strip().lstrip("#")
    if len(text) == 3:
        text = "".join(ch * 2 for ch in text)
    if len(text) not in (6, 8):
        raise ValueError(f"Invalid hex color: {value!r}")
    channels = [int(text[i : i + 2], 16) for i in range(0, len(text), 2)]
    if len(channels) == 3:
        channels.append(255)
    return (channels[0], channels[1], channels[2], channels[3])


# ================================================================================
# JSON Serialization Utilities
# ================================================================================


def sanitize_for_json(obj: Any) -> Any:
    """Convert non-JSON-serializable objects to JSON-safe types.

    Args:
        obj: Object to sanitize

    Returns:
        JSON-safe version of the object
    """
    if isinstance(obj, (str, int, float, bool, type(None))):
        return obj
    if isinstance(obj, (Path, WindowsPath, PosixPath)):
        return str(obj)
    if isinstance(obj, bytes):
        return obj.decode("utf-8", errors="ignore")
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(item) for item in obj]
    return str(obj)
