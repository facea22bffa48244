#!/usr/bin/env python3
"""
Custom exceptions and error handling utilities for the sprite editor.

This module defines domain-specific exceptions and provides utilities
for consistent error handling across the engine.
"""

from typing import Optional


class PixelsmithError(Exception):
    """Base exception for all sprite editor errors"""
    pass


class OutOfBoundsError(PixelsmithError, IndexError):
    """Raised when a cell coordinate lies outside the grid"""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(f"Cell ({row}, {col}) is outside the {rows}x{cols} grid")
        self.row = row
        self.col = col


class ValidationError(PixelsmithError):
    """Raised when input validation fails"""
    pass


class FileOperationError(PixelsmithError):
    """Raised when file operations fail"""
    pass


class DecodeError(FileOperationError):
    """Raised when an image buffer is missing, corrupt or unsupported"""
    pass


class CatalogError(PixelsmithError):
    """Raised when sprite catalog operations fail"""

    def __init__(self, message: str, sprite_id: Optional[int] = None) -> None:
        super().__init__(message)
        self.sprite_id = sprite_id


def format_error_message(operation: str, error: Exception) -> str:
    """
    Format an error message for user display.

    Args:
        operation: Description of the operation that failed
        error: The exception that was raised

    Returns:
        User-friendly error message
    """
    if isinstance(error, FileNotFoundError):
        return f"File not found during {operation}"
    elif isinstance(error, PermissionError):
        return f"Permission denied during {operation}"
    elif isinstance(error, MemoryError):
        return f"Out of memory during {operation}"
    elif isinstance(error, OSError) and error.errno == 28:  # No space left
        return f"Disk full - cannot complete {operation}"
    elif isinstance(error, DecodeError):
        return f"Invalid image: {error}"
    elif isinstance(error, CatalogError):
        return f"Sprite catalog error: {error}"
    elif isinstance(error, ValidationError):
        return f"Invalid input: {error}"
    else:
        return f"Failed to {operation}: {error}"
