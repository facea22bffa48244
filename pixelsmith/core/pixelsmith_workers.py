"""
Worker threads for async sprite file operations.

This module provides thread-based workers that read and write sprite sheets
through the codec, keeping file I/O off the drawing path.
"""

# Standard library imports
from pathlib import Path
from typing import Optional, Union

# Third-party imports
from PyQt6.QtCore import QObject, QThread, pyqtSignal

from .pixelsmith_codec import SpriteCodec
from .pixelsmith_exceptions import DecodeError
from .pixelsmith_models import GridModel
from .pixelsmith_utils import debug_exception, debug_log, sanitize_for_json


class BaseWorker(QThread):
    """Base worker class for async operations.

    Signals:
        progress: Emitted with progress percentage (0-100)
        error: Emitted with error message when operation fails
    """

    progress = pyqtSignal(int, str)  # Progress percentage 0-100, optional message
    error = pyqtSignal(str)  # Error message

    def __init__(
        self,
        file_path: Optional[Union[str, Path]] = None,
        parent: Optional[QObject] = None,
    ):
        """Initialize the base worker.

        Args:
            file_path: Optional file path (string or Path object)
            parent: Parent QObject for proper cleanup
        """
        super().__init__(parent)
        self._is_cancelled = False
        self._file_path: Optional[Path] = Path(file_path) if file_path is not None else None

    def cancel(self) -> None:
        """Cancel the operation."""
        self._is_cancelled = True

    def is_cancelled(self) -> bool:
        return self._is_cancelled

    @property
    def file_path(self) -> Optional[Path]:
        """Get the file path as a Path object (read-only)."""
        return self._file_path

    def validate_file_path(self, must_exist: bool = True) -> bool:
        """Validate the file path.

        Args:
            must_exist: If True, check that the file exists

        Returns:
            True if valid, False otherwise
        """
        if self._file_path is None:
            self.emit_error("No file path provided")
            return False

        if must_exist and not self._file_path.exists():
            self.emit_error(f"File not found: {self._file_path}")
            return False

        return True

    def emit_progress(self, value: int, message: str = "") -> None:
        if not self._is_cancelled:
            self.progress.emit(value, message)

    def emit_error(self, message: str) -> None:
        if not self._is_cancelled:
            self.error.emit(message)


class SpriteLoadWorker(BaseWorker):
    """Worker for loading sprite sheets asynchronously.

    Signals:
        result: Emitted with the decoded GridModel and image metadata
    """

    result = pyqtSignal(object, dict)  # GridModel, metadata

    def __init__(
        self,
        file_path: Optional[Union[str, Path]] = None,
        sprite_id: Optional[int] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(file_path, parent)
        self.sprite_id = sprite_id

    def run(self) -> None:
        """Load and decode the sprite file in a background thread."""
        try:
            if not self.validate_file_path(must_exist=True):
                return

            self.emit_progress(0, f"Loading {self.file_path.name}...")
            data = self.file_path.read_bytes()
            if self.is_cancelled():
                return

            self.emit_progress(40, "Decoding image...")
            image = SpriteCodec.open_image(data)
            metadata = sanitize_for_json(
                {
                    "width": image.width,
                    "height": image.height,
                    "mode": image.mode,
                    "format": image.format,
                    "file_path": self.file_path,
                    "file_name": self.file_path.name,
                    "sprite_id": self.sprite_id,
                    "info": image.info,
                }
            )
            grid = SpriteCodec.decode(image)
            if self.is_cancelled():
                return

            self.emit_progress(100, "Loading complete!")
            self.result.emit(grid, metadata)
            debug_log("WORKER", f"Loaded {self.file_path} ({grid.cols}x{grid.rows})")

        except DecodeError as e:
            debug_log("WORKER", f"Cannot decode {self.file_path}: {e}", "WARNING")
            self.emit_error(f"Failed to decode image: {e}")
        except OSError as e:
            debug_exception("WORKER", e)
            self.emit_error(f"Failed to read file: {e}")


class SpriteSaveWorker(BaseWorker):
    """Worker for saving sprite sheets asynchronously.

    Signals:
        saved: Emitted with the file path when the file is written
    """

    saved = pyqtSignal(str)  # Saved file path

    def __init__(
        self,
        grid: GridModel,
        file_path: Union[str, Path],
        parent: Optional[QObject] = None,
    ):
        super().__init__(file_path, parent)
        # Snapshot so drawing can continue while the file is written
        self.source = grid
        self.grid = grid.copy()

    def is_snapshot_of(self, grid: GridModel) -> bool:
        """True if the grid has not been edited since the snapshot was taken"""
        return grid is self.source and grid.edits == self.grid.edits

    def run(self) -> None:
        """Encode and write the sprite sheet in a background thread."""
        try:
            if not self.validate_file_path(must_exist=False):
                return

            self.emit_progress(0, "Encoding sprite sheet...")
            data = SpriteCodec.encode_png(self.grid)
            if self.is_cancelled():
                return

            self.emit_progress(50, f"Writing {self.file_path.name}...")
            self.file_path.write_bytes(data)

            self.emit_progress(100, "Save complete!")
            self.saved.emit(str(self.file_path))
            debug_log("WORKER", f"Saved {self.file_path}")

        except OSError as e:
            debug_exception("WORKER", e)
            self.emit_error(f"Failed to save file: {e}")
