#!/usr/bin/env python3
"""
Controller for one sprite editing session
Routes pointer events through the coordinate mapper to the active tool and
tells the view which cells to repaint
"""

# Standard library imports
import os
from enum import Enum, auto
from typing import Optional

# Third-party imports
from PyQt6.QtCore import QObject, pyqtSignal

from .pixelsmith_catalog import SpriteCatalog, UserSession
from .pixelsmith_codec import SpriteCodec
from .pixelsmith_constants import (
    CELL_SIZE,
    DEFAULT_GRID_COLS,
    DEFAULT_GRID_ROWS,
    STATUS_MESSAGE_TIMEOUT,
    ZOOM_FACTOR,
)
from .pixelsmith_exceptions import (
    CatalogError,
    DecodeError,
    ValidationError,
    format_error_message,
)
from .pixelsmith_managers import FileManager, SpriteManager, ToolManager
from .pixelsmith_mapper import CoordinateMapper
from .pixelsmith_models import Color, GridModel, PaintColorModel, ViewTransform
from .pixelsmith_utils import debug_exception, debug_log, parse_hex_color
from pixelsmith.logging_config import setup_logging


class PointerButton(Enum):
    """Pointer buttons the editor reacts to"""

    PRIMARY = auto()
    SECONDARY = auto()


class EditorController(QObject):
    """Controller coordinating all operations of one editing session"""

    # Signals
    cellsChanged = pyqtSignal(list)  # [(row, col), ...] to repaint
    gridReplaced = pyqtSignal(int, int)  # rows, cols; repaint everything
    viewChanged = pyqtSignal()
    toolChanged = pyqtSignal(str)  # tool name
    colorChanged = pyqtSignal(object)  # Color
    spriteSaved = pyqtSignal(int, str)  # sprite id, file path
    statusMessage = pyqtSignal(str, int)  # message, timeout
    error = pyqtSignal(str)

    def __init__(
        self,
        settings=None,
        catalog: Optional[SpriteCatalog] = None,
        session: Optional[UserSession] = None,
        parent=None,
    ):
        super().__init__(parent)

        self.settings = settings
        if settings is not None:
            # The only place logging is configured from settings
            setup_logging(
                str(settings.get("log_level", "INFO")),
                settings.get("log_file") or None,
            )

        # Models; bad stored values fall back to the built-in defaults
        try:
            self.grid = GridModel(
                rows=self._setting("grid.rows", DEFAULT_GRID_ROWS),
                cols=self._setting("grid.cols", DEFAULT_GRID_COLS),
            )
        except (ValidationError, TypeError) as e:
            debug_exception("CONTROLLER", e)
            self.grid = GridModel(rows=DEFAULT_GRID_ROWS, cols=DEFAULT_GRID_COLS)

        self.paint = PaintColorModel()
        paint_color = self._setting("paint_color", None)
        if paint_color:
            try:
                self.paint.set_color(parse_hex_color(paint_color))
            except ValueError as e:
                debug_exception("CONTROLLER", e)
        self.paint.changed_callback = self.colorChanged.emit
        self.view = ViewTransform()

        try:
            self.mapper = CoordinateMapper(
                cell_size=self._setting("grid.cell_size", CELL_SIZE),
                zoom_factor=self._setting("view.zoom_factor", ZOOM_FACTOR),
            )
        except (ValueError, TypeError) as e:
            debug_exception("CONTROLLER", e)
            self.mapper = CoordinateMapper(cell_size=CELL_SIZE, zoom_factor=ZOOM_FACTOR)

        # Managers
        self.tool_manager = ToolManager()
        self.file_manager = FileManager()
        self.file_manager.error_callback = self.error.emit
        self.sprite_manager: Optional[SpriteManager] = None
        if catalog is not None:
            self.sprite_manager = SpriteManager(catalog, session or UserSession())

        # Workers
        self.load_worker = None
        self.save_worker = None

        # Catalog state of the sprite being edited
        self.sprite_id: Optional[int] = None
        self.sprite_path: Optional[str] = None
        self._pending_sprite_name: Optional[str] = None

        # Secondary-button drag state
        self._pan_last_point: Optional[tuple[float, float]] = None

    def _setting(self, key, default):
        if self.settings is None:
            return default
        return self.settings.get(key, default)

    # Tool operations
    def set_tool(self, tool_name: str) -> None:
        """Set the current drawing tool"""
        if self.tool_manager.set_tool(tool_name):
            self.toolChanged.emit(self.tool_manager.current_tool_name)

    def get_current_tool_name(self) -> str:
        return self.tool_manager.current_tool_name

    def set_tool_size_index(self, index: int) -> None:
        """Move the shared tool size selector"""
        self.tool_manager.set_size_index(index)

    def set_paint_color(self, color) -> None:
        self.paint.set_color(color)

    def get_paint_color(self) -> Color:
        return self.paint.current_color

    # Pointer events
    def _cell_at(self, x: float, y: float) -> Optional[tuple[int, int]]:
        """Grid cell under a pointer position, None outside the grid"""
        row, col = self.mapper.pointer_to_cell(x, y, self.view)
        if not self.grid.in_bounds(row, col):
            return None
        return (row, col)

    def _emit_changes(self, changed: list) -> None:
        if changed:
            self.cellsChanged.emit(changed)

    def pointer_pressed(self, x: float, y: float, button: PointerButton = PointerButton.PRIMARY) -> None:
        """Handle pointer press on the canvas"""
        if button == PointerButton.SECONDARY:
            self._pan_last_point = (x, y)
            return

        cell = self._cell_at(x, y)
        if cell is None:
            return
        tool = self.tool_manager.get_tool()
        self._emit_changes(tool.on_press(cell[0], cell[1], self.grid, self.paint))

    def pointer_dragged(self, x: float, y: float, button: PointerButton = PointerButton.PRIMARY) -> None:
        """Handle pointer drag; every event is applied in arrival order"""
        if button == PointerButton.SECONDARY:
            if self._pan_last_point is not None:
                last_x, last_y = self._pan_last_point
                self._pan_last_point = (x, y)
                self.pan_by(x - last_x, y - last_y)
            return

        cell = self._cell_at(x, y)
        if cell is None:
            return
        tool = self.tool_manager.get_tool()
        self._emit_changes(tool.on_drag(cell[0], cell[1], self.grid, self.paint))

    def pointer_released(self, x: float, y: float, button: PointerButton = PointerButton.PRIMARY) -> None:
        """Handle pointer release on the canvas"""
        if button == PointerButton.SECONDARY:
            self._pan_last_point = None
            return

        cell = self._cell_at(x, y)
        if cell is None:
            return
        tool = self.tool_manager.get_tool()
        self._emit_changes(tool.on_release(cell[0], cell[1], self.grid, self.paint))

    # View operations
    def pan_by(self, dx: float, dy: float) -> None:
        self.mapper.pan(self.view, dx, dy)
        self.viewChanged.emit()

    def scrolled(self, x: float, y: float, delta: float) -> None:
        """Zoom one tick, keeping the point under the cursor fixed"""
        if self.mapper.zoom(self.view, delta, x, y):
            self.viewChanged.emit()

    def reset_view(self) -> None:
        self.view.reset()
        self.viewChanged.emit()

    # Grid operations
    def get_grid_size(self) -> tuple[int, int]:
        """(rows, cols) of the current grid"""
        return self.grid.size

    def is_modified(self) -> bool:
        return self.grid.modified

    def _replace_grid(self, grid: GridModel) -> None:
        self.tool_manager.reset_gestures()
        self.grid = grid
        self.gridReplaced.emit(grid.rows, grid.cols)

    def resize_grid(self, rows: int, cols: int) -> None:
        """Resize the current grid, clearing every cell"""
        try:
            self.grid.resize(rows, cols)
        except ValidationError as e:
            self.error.emit(format_error_message("resize grid", e))
            return
        self.tool_manager.reset_gestures()
        self.gridReplaced.emit(rows, cols)

    def new_sprite(self, rows: int = DEFAULT_GRID_ROWS, cols: int = DEFAULT_GRID_COLS) -> None:
        """Start editing a new, unsaved sprite"""
        grid = self.file_manager.new_grid(rows, cols)
        if grid is None:
            return
        self.sprite_id = None
        self.sprite_path = None
        self._replace_grid(grid)
        debug_log("CONTROLLER", f"Created new {rows}x{cols} sprite")

    # Sprite sheet buffers
    def import_sprite(self, data: bytes) -> bool:
        """
        Replace the grid with a decoded sprite sheet
        The current grid is kept if the buffer cannot be decoded
        """
        try:
            grid = SpriteCodec.decode_png(data)
        except DecodeError as e:
            debug_log("CONTROLLER", f"Import failed: {e}", "WARNING")
            self.error.emit(format_error_message("import sprite sheet", e))
            return False

        self._replace_grid(grid)
        self.statusMessage.emit(f"Imported {grid.cols}x{grid.rows} sprite sheet", STATUS_MESSAGE_TIMEOUT)
        return True

    def export_sprite(self) -> bytes:
        """Current grid as PNG bytes with empty cells transparent"""
        return SpriteCodec.encode_png(self.grid)

    # File operations
    def open_file(self, file_path: str) -> None:
        """Load a sprite sheet file in the background, outside the catalog"""
        self._start_load(file_path, None)

    def open_sprite(self, sprite_id: int) -> None:
        """Open a catalogued sprite by id"""
        if self.sprite_manager is None:
            self.error.emit("No sprite catalog configured")
            return
        try:
            path = self.sprite_manager.resolve_path(sprite_id)
        except CatalogError as e:
            self.error.emit(format_error_message("open sprite", e))
            return

        self._start_load(path, sprite_id)

    def _start_load(self, file_path: str, sprite_id: Optional[int]) -> None:
        # The sprite id travels with the worker so each result is labelled
        # with the sprite it was read for
        self.load_worker = self.file_manager.load_sprite(file_path, sprite_id)
        if not self.load_worker:
            return

        self.load_worker.progress.connect(
            lambda p, msg: debug_log("CONTROLLER", f"Load progress: {p}% - {msg}", "DEBUG")
        )
        self.load_worker.error.connect(self._handle_load_error)
        self.load_worker.result.connect(self._handle_load_result)
        self.load_worker.start()

    def _handle_load_error(self, error_msg: str) -> None:
        debug_log("CONTROLLER", f"Load error: {error_msg}", "ERROR")
        self.error.emit(f"Failed to load file: {error_msg}")

    def _handle_load_result(self, grid: GridModel, metadata: dict) -> None:
        """Swap in a grid decoded by the load worker"""
        self.sprite_id = metadata.get("sprite_id")
        self.sprite_path = metadata.get("file_path")
        self._replace_grid(grid)

        if self.settings is not None and self.sprite_path:
            self.settings.add_recent_file(self.sprite_path)

        name = metadata.get("file_name", "sprite")
        self.statusMessage.emit(f"Loaded {name}", STATUS_MESSAGE_TIMEOUT)
        debug_log("CONTROLLER", f"Loaded {name} as {grid.rows}x{grid.cols} grid")

    def save_file(self, file_path: str, sprite_name: Optional[str] = None) -> None:
        """
        Save the sprite sheet in the background
        With a catalog, the file is then registered (new sprite) or updated
        """
        self._pending_sprite_name = sprite_name
        self.save_worker = self.file_manager.save_sprite(self.grid, file_path)
        if not self.save_worker:
            return

        self.save_worker.progress.connect(
            lambda p, msg: debug_log("CONTROLLER", f"Save progress: {p}% - {msg}", "DEBUG")
        )
        self.save_worker.error.connect(self._handle_save_error)
        self.save_worker.saved.connect(self._handle_save_success)
        self.save_worker.start()

    def _handle_save_error(self, error_msg: str) -> None:
        debug_log("CONTROLLER", f"Save error: {error_msg}", "ERROR")
        self.error.emit(f"Failed to save file: {error_msg}")

    def _handle_save_success(self, file_path: str) -> None:
        self.sprite_path = file_path
        if self.save_worker is not None and self.save_worker.is_snapshot_of(self.grid):
            self.grid.modified = False
        else:
            debug_log("CONTROLLER", "Grid changed while saving, keeping it modified", "DEBUG")

        if self.settings is not None:
            self.settings.add_recent_file(file_path)

        if self.sprite_manager is not None:
            try:
                self.sprite_id = self.sprite_manager.record_save(
                    file_path, self._pending_sprite_name, self.sprite_id
                )
            except CatalogError as e:
                self.error.emit(format_error_message("record sprite", e))
                return
            finally:
                self._pending_sprite_name = None
            self.spriteSaved.emit(self.sprite_id, file_path)

        self.statusMessage.emit(f"Saved to {os.path.basename(file_path)}", STATUS_MESSAGE_TIMEOUT)
        debug_log("CONTROLLER", f"Successfully saved: {file_path}")
