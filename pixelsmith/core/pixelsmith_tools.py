#!/usr/bin/env python3
"""
Drawing tools for the sprite editor

Every tool works on a GridModel through ``apply`` and returns the list of
cells it wrote so the view can repaint only those. Gesture hooks
(``on_press``/``on_drag``/``on_release``) default to the primary action,
tools with multi-event gestures override them.
"""

# Standard library imports
from abc import ABC, abstractmethod
from collections import deque
from enum import Enum, auto
from typing import Optional

from .pixelsmith_constants import (
    TOOL_ERASER,
    TOOL_EYEDROPPER,
    TOOL_FILL,
    TOOL_LINE,
    TOOL_PEN,
    TOOL_SQUARE,
)
from .pixelsmith_exceptions import ValidationError
from .pixelsmith_models import CHECKER_COLORS, Color, GridModel, PaintColorModel, checker_color
from .pixelsmith_utils import debug_log

Cell = tuple[int, int]


class ToolType(Enum):
    """Available drawing tools"""

    PEN = auto()
    ERASER = auto()
    FILL = auto()
    EYEDROPPER = auto()
    SQUARE = auto()
    LINE = auto()


TOOL_NAMES = {
    TOOL_PEN: ToolType.PEN,
    TOOL_ERASER: ToolType.ERASER,
    TOOL_FILL: ToolType.FILL,
    TOOL_EYEDROPPER: ToolType.EYEDROPPER,
    TOOL_SQUARE: ToolType.SQUARE,
    TOOL_LINE: ToolType.LINE,
}


class Tool(ABC):
    """Abstract base class for drawing tools"""

    tool_type: ToolType
    sizeable = False

    @abstractmethod
    def apply(
        self, row: int, col: int, grid: GridModel, paint: PaintColorModel
    ) -> list[Cell]:
        """Perform the tool's primary action at a cell, return written cells"""

    def set_size(self, size: int) -> None:
        """Tools without a size ignore this"""

    def on_press(
        self, row: int, col: int, grid: GridModel, paint: PaintColorModel
    ) -> list[Cell]:
        return self.apply(row, col, grid, paint)

    def on_drag(
        self, row: int, col: int, grid: GridModel, paint: PaintColorModel
    ) -> list[Cell]:
        return self.apply(row, col, grid, paint)

    def on_release(
        self, row: int, col: int, grid: GridModel, paint: PaintColorModel
    ) -> list[Cell]:
        return []

    def reset(self) -> None:
        """Discard any in-flight gesture state"""

    @property
    def name(self) -> str:
        return self.tool_type.name.lower()


def _paint_cells(grid: GridModel, cells, color: Color) -> list[Cell]:
    """Write a color into every in-bounds cell, return the cells written"""
    written = []
    for r, c in cells:
        if grid.in_bounds(r, c):
            grid.set(r, c, color)
            written.append((r, c))
    return written


class BrushTool(Tool):
    """Base for tools that act on a centered square neighborhood"""

    sizeable = True

    def __init__(self) -> None:
        self.size = 1

    def set_size(self, size: int) -> None:
        if size < 1:
            raise ValidationError(f"Brush size must be at least 1, got {size}")
        self.size = size

    def neighborhood(self, row: int, col: int) -> list[Cell]:
        """Square of side 2*size-1 centered on the cell, not clipped"""
        reach = self.size - 1
        return [
            (r, c)
            for r in range(row - reach, row + self.size)
            for c in range(col - reach, col + self.size)
        ]


class PenTool(BrushTool):
    """Paints the current color with the brush neighborhood"""

    tool_type = ToolType.PEN

    def apply(self, row, col, grid, paint):
        return _paint_cells(grid, self.neighborhood(row, col), paint.current_color)


class EraserTool(BrushTool):
    """Restores cells to their checkerboard color"""

    tool_type = ToolType.ERASER

    def apply(self, row, col, grid, paint):
        written = []
        for r, c in self.neighborhood(row, col):
            if grid.in_bounds(r, c):
                grid.set(r, c, checker_color(r, c))
                written.append((r, c))
        return written


class EyeDropperTool(Tool):
    """Picks the stored color of a cell as the new paint color"""

    tool_type = ToolType.EYEDROPPER

    def apply(self, row, col, grid, paint):
        picked = grid.get(row, col)
        paint.set_color(picked)
        debug_log("TOOL", f"Picked color {tuple(picked)} at ({row}, {col})", "DEBUG")
        return []


def is_fillable(current: Color, target: Color) -> bool:
    """Target color and both checkerboard grays form one fillable class"""
    return current == target or current in CHECKER_COLORS


class FillTool(Tool):
    """4-connected flood fill"""

    tool_type = ToolType.FILL

    def apply(self, row, col, grid, paint):
        target = grid.get(row, col)
        replacement = paint.current_color
        if target == replacement:
            return []
        return self.flood_fill(grid, row, col, target, replacement)

    @staticmethod
    def flood_fill(
        grid: GridModel, start_row: int, start_col: int, target: Color, replacement: Color
    ) -> list[Cell]:
        """
        Breadth-first fill from a start cell
        Returns list of changed cells
        """
        changed: list[Cell] = []
        visited: set[Cell] = set()
        queue = deque([(start_row, start_col)])

        while queue:
            r, c = queue.popleft()
            if (r, c) in visited or not grid.in_bounds(r, c):
                continue
            visited.add((r, c))

            if not is_fillable(grid.get(r, c), target):
                continue

            grid.set(r, c, replacement)
            changed.append((r, c))

            queue.extend([(r, c - 1), (r, c + 1), (r - 1, c), (r + 1, c)])

        debug_log("TOOL", f"Flood fill changed {len(changed)} cells", "DEBUG")
        return changed


class SquareTool(Tool):
    """Filled rectangle between the press and release cells"""

    tool_type = ToolType.SQUARE

    def __init__(self) -> None:
        self.start: Optional[Cell] = None

    def apply(self, row, col, grid, paint):
        # A plain click does nothing, the rectangle is drawn on release
        return []

    def on_press(self, row, col, grid, paint):
        self.start = (row, col)
        return []

    def on_drag(self, row, col, grid, paint):
        return []

    def on_release(self, row, col, grid, paint):
        if self.start is None:
            return []
        start_row, start_col = self.start
        self.start = None

        min_row, max_row = min(start_row, row), max(start_row, row)
        min_col, max_col = min(start_col, col), max(start_col, col)
        cells = [
            (r, c)
            for r in range(min_row, max_row + 1)
            for c in range(min_col, max_col + 1)
        ]
        return _paint_cells(grid, cells, paint.current_color)

    def reset(self) -> None:
        self.start = None


def line_cells(row0: int, col0: int, row1: int, col1: int) -> list[Cell]:
    """Get all cells on a line using Bresenham's algorithm"""
    cells = []

    d_col = abs(col1 - col0)
    d_row = abs(row1 - row0)

    # Determine direction
    s_col = 1 if col0 < col1 else -1
    s_row = 1 if row0 < row1 else -1

    err = d_col - d_row
    row, col = row0, col0

    while True:
        cells.append((row, col))

        if row == row1 and col == col1:
            break

        e2 = 2 * err

        if e2 > -d_row:
            err -= d_row
            col += s_col

        if e2 < d_col:
            err += d_col
            row += s_row

    return cells


class LineTool(Tool):
    """Two-click straight line"""

    tool_type = ToolType.LINE

    def __init__(self) -> None:
        self.awaiting_second_point = False
        self.start: Optional[Cell] = None

    def apply(self, row, col, grid, paint):
        if not self.awaiting_second_point:
            self.start = (row, col)
            self.awaiting_second_point = True
            return []

        start_row, start_col = self.start
        self.reset()
        return _paint_cells(
            grid, line_cells(start_row, start_col, row, col), paint.current_color
        )

    def on_drag(self, row, col, grid, paint):
        return []

    def reset(self) -> None:
        self.awaiting_second_point = False
        self.start = None


TOOL_CLASSES: dict[ToolType, type[Tool]] = {
    ToolType.PEN: PenTool,
    ToolType.ERASER: EraserTool,
    ToolType.FILL: FillTool,
    ToolType.EYEDROPPER: EyeDropperTool,
    ToolType.SQUARE: SquareTool,
    ToolType.LINE: LineTool,
}


def resolve_tool_type(tool_type) -> ToolType:
    """Accept a ToolType or a case-insensitive tool name"""
    if isinstance(tool_type, ToolType):
        return tool_type
    mapped = TOOL_NAMES.get(str(tool_type).lower())
    if mapped is None:
        raise ValueError(f"Unknown tool: {tool_type}")
    return mapped


def create_tool(tool_type) -> Tool:
    """Create a fresh tool instance with new gesture state"""
    return TOOL_CLASSES[resolve_tool_type(tool_type)]()
