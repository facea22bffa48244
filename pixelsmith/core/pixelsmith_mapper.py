#!/usr/bin/env python3
"""
Coordinate mapping between the editor view and the cell grid

View coordinates relate to canvas coordinates by ``view = pan + scale * canvas``
and each grid cell covers ``cell_size`` canvas units on both axes.
"""

# Standard library imports
import math

from .pixelsmith_constants import CELL_SIZE, ZOOM_FACTOR, ZOOM_MAX, ZOOM_MIN
from .pixelsmith_models import ViewTransform
from .pixelsmith_utils import debug_log


class CoordinateMapper:
    """Converts pointer positions to cells and applies pan/zoom gestures"""

    def __init__(
        self,
        cell_size: int = CELL_SIZE,
        zoom_factor: float = ZOOM_FACTOR,
        min_scale: float = ZOOM_MIN,
        max_scale: float = ZOOM_MAX,
    ) -> None:
        if cell_size <= 0:
            raise ValueError("Cell size must be positive")
        if zoom_factor <= 1.0:
            raise ValueError("Zoom factor must be greater than 1")
        self.cell_size = cell_size
        self.zoom_factor = zoom_factor
        self.min_scale = min_scale
        self.max_scale = max_scale

    def view_to_canvas(self, x: float, y: float, view: ViewTransform) -> tuple[float, float]:
        return ((x - view.pan_x) / view.scale, (y - view.pan_y) / view.scale)

    def canvas_to_view(self, cx: float, cy: float, view: ViewTransform) -> tuple[float, float]:
        return (view.pan_x + cx * view.scale, view.pan_y + cy * view.scale)

    def pointer_to_cell(self, x: float, y: float, view: ViewTransform) -> tuple[int, int]:
        """
        Map a pointer position to (row, col)
        The result may lie outside the grid, callers must reject it
        """
        cx, cy = self.view_to_canvas(x, y, view)
        return (math.floor(cy / self.cell_size), math.floor(cx / self.cell_size))

    def cell_center(self, row: int, col: int, view: ViewTransform) -> tuple[float, float]:
        """View position of the visual center of a cell"""
        half = self.cell_size / 2
        return self.canvas_to_view(col * self.cell_size + half, row * self.cell_size + half, view)

    def canvas_size(self, rows: int, cols: int) -> tuple[int, int]:
        """Unscaled (width, height) of a grid on the canvas"""
        return (cols * self.cell_size, rows * self.cell_size)

    def pan(self, view: ViewTransform, dx: float, dy: float) -> None:
        """Translate the view, independently per axis"""
        view.pan_x += dx
        view.pan_y += dy

    def zoom(
        self,
        view: ViewTransform,
        delta: float,
        anchor_x: float = 0.0,
        anchor_y: float = 0.0,
    ) -> bool:
        """
        Zoom by one scroll tick keeping the canvas point under the anchor fixed
        Returns True if the scale changed
        """
        if delta == 0:
            return False

        factor = self.zoom_factor if delta > 0 else 1 / self.zoom_factor
        new_scale = max(self.min_scale, min(self.max_scale, view.scale * factor))
        if new_scale == view.scale:
            return False

        # Point in canvas space that's under the anchor
        cx, cy = self.view_to_canvas(anchor_x, anchor_y, view)

        view.scale = new_scale
        view.pan_x = anchor_x - cx * new_scale
        view.pan_y = anchor_y - cy * new_scale

        debug_log("VIEW", f"Zoom scale {new_scale:.3f}", "DEBUG")
        return True
