#!/usr/bin/env python3
"""
Manager classes for the sprite editor
Handle coordination between models and provide business logic
"""

# Standard library imports
import os
from pathlib import Path
from typing import Callable, Optional, Union

from .pixelsmith_catalog import SpriteCatalog, SpriteRecord, UserSession
from .pixelsmith_constants import (
    DEFAULT_TOOL,
    DEFAULT_TOOL_SIZE_INDEX,
    MAX_GRID_CELLS,
    MAX_GRID_DIMENSION,
    MAX_SPRITE_FILE_SIZE,
    SUPPORTED_IMPORT_EXTENSIONS,
    TOOL_SIZES,
)
from .pixelsmith_exceptions import (
    CatalogError,
    ValidationError,
    format_error_message,
)
from .pixelsmith_models import GridModel
from .pixelsmith_tools import Tool, ToolType, create_tool, resolve_tool_type
from .pixelsmith_utils import debug_exception, debug_log
from .pixelsmith_workers import SpriteLoadWorker, SpriteSaveWorker


class ToolManager:
    """Manages the active drawing tool and the shared tool size selector"""

    def __init__(self) -> None:
        self.size_index = DEFAULT_TOOL_SIZE_INDEX
        self.current_tool_type = resolve_tool_type(DEFAULT_TOOL)
        self.current_tool: Tool = create_tool(self.current_tool_type)

    def set_tool(self, tool_type: Union[ToolType, str]) -> bool:
        """
        Make a fresh instance of a tool current (accepts ToolType enum or string)
        The outgoing tool's in-flight gesture is discarded
        """
        try:
            new_type = resolve_tool_type(tool_type)
        except ValueError:
            debug_log("TOOL", f"Ignoring unknown tool {tool_type!r}", "WARNING")
            return False

        self.current_tool.reset()
        tool = create_tool(new_type)
        if tool.sizeable:
            tool.set_size(self.current_size)
        self.current_tool_type = new_type
        self.current_tool = tool
        debug_log("TOOL", f"Tool changed to {new_type.name}")
        return True

    @property
    def current_tool_name(self) -> str:
        return self.current_tool_type.name.lower()

    def get_tool(self) -> Tool:
        return self.current_tool

    @property
    def current_size(self) -> int:
        return TOOL_SIZES[self.size_index]

    def set_size_index(self, index: int) -> bool:
        """Select a tool size; only sizeable tools pick it up"""
        if not 0 <= index < len(TOOL_SIZES):
            debug_log(
                "TOOL", f"Invalid size index {index}, must be 0-{len(TOOL_SIZES) - 1}", "WARNING"
            )
            return False

        self.size_index = index
        if self.current_tool.sizeable:
            self.current_tool.set_size(self.current_size)
            debug_log("TOOL", f"Tool size changed to {self.current_size}")
        return True

    def reset_gestures(self) -> None:
        """Drop gesture state that refers to cells of a replaced grid"""
        self.current_tool.reset()


class FileManager:
    """Manages sprite file operations"""

    def __init__(self) -> None:
        self.error_callback: Optional[Callable[[str], None]] = None

    def _report(self, operation: str, error: Exception) -> None:
        debug_exception("FILE", error)
        if self.error_callback:
            self.error_callback(format_error_message(operation, error))

    def new_grid(self, rows: int, cols: int) -> Optional[GridModel]:
        """Create a new empty grid"""
        try:
            if rows > MAX_GRID_DIMENSION or cols > MAX_GRID_DIMENSION:
                raise ValidationError(
                    f"Grid dimensions too large (max {MAX_GRID_DIMENSION}x{MAX_GRID_DIMENSION})"
                )
            if rows * cols > MAX_GRID_CELLS:
                raise ValidationError("Grid has too many cells")
            grid = GridModel(rows=rows, cols=cols)
            debug_log("FILE", f"Created new {rows}x{cols} grid")
            return grid
        except ValidationError as e:
            self._report("create new sprite", e)
            return None

    def load_sprite(
        self, file_path: Union[str, Path], sprite_id: Optional[int] = None
    ) -> Optional[SpriteLoadWorker]:
        """
        Validate a sprite file and return a worker that loads it
        The caller starts the worker; sprite_id is echoed in the result metadata
        """
        try:
            file_path_str = str(file_path)
            if not file_path_str:
                raise ValidationError("File path cannot be empty")

            if not os.path.exists(file_path_str):
                raise FileNotFoundError(f"File not found: {file_path_str}")

            if not os.access(file_path_str, os.R_OK):
                raise PermissionError(f"Cannot read file: {file_path_str}")

            extension = os.path.splitext(file_path_str)[1].lower()
            if extension not in SUPPORTED_IMPORT_EXTENSIONS:
                raise ValidationError(f"Unsupported image format: {extension}")

            file_size = os.path.getsize(file_path_str)
            if file_size > MAX_SPRITE_FILE_SIZE:
                raise ValidationError(
                    f"File too large: {file_size / 1024 / 1024:.1f}MB (max 100MB)"
                )

            debug_log("FILE", f"Loading sprite: {file_path_str}")
            return SpriteLoadWorker(file_path_str, sprite_id)

        except (OSError, ValidationError) as e:
            self._report("load file", e)
            return None

    def save_sprite(
        self, grid: GridModel, file_path: Union[str, Path]
    ) -> Optional[SpriteSaveWorker]:
        """
        Validate the destination and return a worker that saves the sprite sheet
        The caller starts the worker
        """
        try:
            file_path_str = str(file_path)
            if not file_path_str:
                raise ValidationError("File path cannot be empty")

            directory = os.path.dirname(file_path_str)
            if directory and not os.path.isdir(directory):
                raise FileNotFoundError(f"Directory does not exist: {directory}")
            if directory and not os.access(directory, os.W_OK):
                raise PermissionError(f"Cannot write to directory: {directory}")

            debug_log("FILE", f"Saving sprite: {file_path_str}")
            return SpriteSaveWorker(grid, file_path_str)

        except (OSError, ValidationError) as e:
            self._report("save file", e)
            return None


class SpriteManager:
    """Connects save/open gestures to the sprite catalog"""

    def __init__(self, catalog: SpriteCatalog, session: UserSession) -> None:
        self.catalog = catalog
        self.session = session

    def record_save(self, path: str, name: Optional[str] = None, sprite_id: Optional[int] = None) -> int:
        """
        Register a saved file in the catalog
        A new sprite is created when no sprite id is given
        """
        if sprite_id is not None:
            self.catalog.update_sprite(sprite_id, path)
            return sprite_id

        user_id = self.session.current_user_id
        if user_id is None:
            raise CatalogError("No user is logged in")
        return self.catalog.create_sprite(user_id, name or Path(path).stem, path)

    def resolve_path(self, sprite_id: int) -> str:
        """File path of a catalogued sprite"""
        record = self.catalog.get_sprite(sprite_id)
        if record is None:
            raise CatalogError(f"Unknown sprite id {sprite_id}", sprite_id)
        if not record.path:
            raise CatalogError(f"Sprite {sprite_id} has no file", sprite_id)
        return record.path

    def user_sprites(self) -> list[SpriteRecord]:
        """Sprites of the logged-in user"""
        user_id = self.session.current_user_id
        if user_id is None:
            return []
        return self.catalog.list_sprites(user_id)
