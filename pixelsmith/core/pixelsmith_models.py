#!/usr/bin/env python3
"""
Core data models for the sprite editor
These models handle the business logic without any UI dependencies
"""

# Standard library imports
from dataclasses import dataclass, field
from typing import Callable, NamedTuple, Optional

# Third-party imports
import numpy as np

from .pixelsmith_constants import (
    CHANNELS,
    CHECKER_DARK,
    CHECKER_LIGHT,
    DEFAULT_GRID_COLS,
    DEFAULT_GRID_ROWS,
    DEFAULT_PAINT_COLOR,
    MIN_GRID_DIMENSION,
    ZOOM_DEFAULT,
)
from .pixelsmith_exceptions import OutOfBoundsError, ValidationError
from .pixelsmith_utils import debug_color, debug_log, validate_rgba_color


class Color(NamedTuple):
    """RGBA color with exact value equality"""

    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def of(cls, value) -> "Color":
        """Build a Color from any RGB/RGBA sequence"""
        if isinstance(value, Color):
            return value
        return cls(*validate_rgba_color(value))

    @property
    def is_transparent(self) -> bool:
        return self.a == 0


LIGHT_CHECKER = Color(*CHECKER_LIGHT)
DARK_CHECKER = Color(*CHECKER_DARK)
CHECKER_COLORS = (LIGHT_CHECKER, DARK_CHECKER)


def checker_color(row: int, col: int) -> Color:
    """Checkerboard sentinel color for a cell; the sole definition of 'empty'"""
    return LIGHT_CHECKER if (row + col) % 2 == 0 else DARK_CHECKER


def checkerboard(rows: int, cols: int) -> np.ndarray:
    """Build a (rows, cols, 4) array filled with the checkerboard sentinel"""
    parity = (np.add.outer(np.arange(rows), np.arange(cols)) % 2).astype(bool)
    data = np.empty((rows, cols, CHANNELS), dtype=np.uint8)
    data[~parity] = CHECKER_LIGHT
    data[parity] = CHECKER_DARK
    return data


def _validate_dimensions(rows: int, cols: int) -> None:
    if rows < MIN_GRID_DIMENSION or cols < MIN_GRID_DIMENSION:
        raise ValidationError(f"Grid dimensions must be positive, got {rows}x{cols}")


@dataclass
class GridModel:
    """
    Model owning the cell colors of one sprite
    Cells are stored as a (rows, cols, 4) RGBA uint8 array; `edits` counts
    every content change and is never reset
    """

    rows: int = DEFAULT_GRID_ROWS
    cols: int = DEFAULT_GRID_COLS
    data: Optional[np.ndarray] = None
    modified: bool = False
    version: int = 0
    edits: int = 0

    def __post_init__(self):
        """Ensure data array matches dimensions"""
        _validate_dimensions(self.rows, self.cols)
        if self.data is None or self.data.shape != (self.rows, self.cols, CHANNELS):
            self.data = checkerboard(self.rows, self.cols)
        else:
            self.data = np.ascontiguousarray(self.data, dtype=np.uint8)

    @classmethod
    def from_array(cls, data: np.ndarray) -> "GridModel":
        """Create a grid from an existing (rows, cols, 4) RGBA array"""
        if data.ndim != 3 or data.shape[2] != CHANNELS:
            raise ValidationError(f"Expected an RGBA array, got shape {data.shape}")
        rows, cols = data.shape[:2]
        return cls(rows=rows, cols=cols, data=data.astype(np.uint8, copy=True))

    @property
    def size(self) -> tuple[int, int]:
        """(rows, cols)"""
        return (self.rows, self.cols)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(row, col, self.rows, self.cols)

    def get(self, row: int, col: int) -> Color:
        """Get the stored color of a cell"""
        self._check_bounds(row, col)
        r, g, b, a = self.data[row, col]
        return Color(int(r), int(g), int(b), int(a))

    def set(self, row: int, col: int, color) -> bool:
        """
        Store a color in a cell
        Returns True if the stored value changed
        """
        self._check_bounds(row, col)
        rgba = Color.of(color)
        if tuple(self.data[row, col]) == rgba:
            return False
        self.data[row, col] = rgba
        self.modified = True
        self.edits += 1
        return True

    def is_empty(self, row: int, col: int) -> bool:
        """A cell is empty iff it holds the checkerboard color for its position"""
        return self.get(row, col) == checker_color(row, col)

    def empty_mask(self) -> np.ndarray:
        """Boolean (rows, cols) array, True where the cell is empty"""
        return np.all(self.data == checkerboard(self.rows, self.cols), axis=2)

    def resize(self, new_rows: int, new_cols: int) -> None:
        """Replace the matrix with a fresh checkerboard of the new size"""
        _validate_dimensions(new_rows, new_cols)
        self.rows = new_rows
        self.cols = new_cols
        self.data = checkerboard(new_rows, new_cols)
        self.modified = True
        self.edits += 1
        self.version += 1
        debug_log("GRID", f"Grid resized to {new_rows}x{new_cols}")

    def clear(self) -> None:
        """Reset every cell to empty"""
        self.data = checkerboard(self.rows, self.cols)
        self.modified = True
        self.edits += 1

    def copy(self) -> "GridModel":
        return GridModel(
            rows=self.rows,
            cols=self.cols,
            data=self.data.copy(),
            version=self.version,
            edits=self.edits,
        )


@dataclass
class PaintColorModel:
    """
    Model for the shared current paint color
    Read by drawing tools and written by the eyedropper
    """

    color: Color = field(default_factory=lambda: Color(*DEFAULT_PAINT_COLOR))
    changed_callback: Optional[Callable[[Color], None]] = None

    @property
    def current_color(self) -> Color:
        return self.color

    def set_color(self, color) -> None:
        """Set the paint color and notify the listener if it changed"""
        new_color = Color.of(color)
        if new_color == self.color:
            return
        self.color = new_color
        debug_log("COLOR", f"Paint color set to {debug_color(new_color)}", "DEBUG")
        if self.changed_callback:
            self.changed_callback(new_color)


@dataclass
class ViewTransform:
    """Pan offset and uniform zoom of the editor view"""

    pan_x: float = 0.0
    pan_y: float = 0.0
    scale: float = ZOOM_DEFAULT

    def reset(self) -> None:
        self.pan_x = 0.0
        self.pan_y = 0.0
        self.scale = ZOOM_DEFAULT
