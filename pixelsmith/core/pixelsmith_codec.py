#!/usr/bin/env python3
"""
Sprite sheet encoding and decoding

Exported sheets carry one pixel per grid cell. Empty cells (holding their
checkerboard color) are written as fully transparent pixels, every other
cell keeps its stored color. Decoding copies pixels verbatim into a new
grid sized to the image.
"""

# Standard library imports
import io

# Third-party imports
import numpy as np
from PIL import Image, UnidentifiedImageError

from .pixelsmith_constants import MAX_GRID_CELLS, MAX_GRID_DIMENSION, TRANSPARENT
from .pixelsmith_exceptions import DecodeError
from .pixelsmith_models import GridModel
from .pixelsmith_utils import debug_log


class SpriteCodec:
    """Converts between GridModel and RGBA pixel buffers"""

    @staticmethod
    def encode(grid: GridModel) -> Image.Image:
        """Render the grid as an RGBA image of size cols x rows"""
        pixels = grid.data.copy()
        pixels[grid.empty_mask()] = TRANSPARENT
        debug_log("CODEC", f"Encoded {grid.cols}x{grid.rows} sprite sheet", "DEBUG")
        return Image.fromarray(pixels)

    @classmethod
    def encode_png(cls, grid: GridModel) -> bytes:
        """Encode the grid as PNG bytes"""
        buffer = io.BytesIO()
        cls.encode(grid).save(buffer, format="PNG")
        return buffer.getvalue()

    @staticmethod
    def validate_image(image: Image.Image) -> None:
        """Reject images the grid cannot hold"""
        width, height = image.size
        if width < 1 or height < 1:
            raise DecodeError(f"Image has no pixels ({width}x{height})")
        if width > MAX_GRID_DIMENSION or height > MAX_GRID_DIMENSION:
            raise DecodeError(
                f"Image too large: {width}x{height} (max {MAX_GRID_DIMENSION}x{MAX_GRID_DIMENSION})"
            )
        if width * height > MAX_GRID_CELLS:
            raise DecodeError(f"Image too large: {width * height} pixels")

    @classmethod
    def decode(cls, image: Image.Image) -> GridModel:
        """Build a new grid with one cell per image pixel"""
        cls.validate_image(image)
        try:
            rgba = image if image.mode == "RGBA" else image.convert("RGBA")
            pixels = np.array(rgba, dtype=np.uint8)
        except (OSError, ValueError) as e:
            raise DecodeError(f"Could not read image pixels: {e}") from e

        grid = GridModel.from_array(pixels)
        debug_log("CODEC", f"Decoded {grid.cols}x{grid.rows} sprite sheet")
        return grid

    @classmethod
    def open_image(cls, data: bytes) -> Image.Image:
        """
        Open and fully load an image buffer
        The header size is checked before any pixel data is decoded
        """
        if not data:
            raise DecodeError("Image buffer is empty")
        try:
            image = Image.open(io.BytesIO(data))
            cls.validate_image(image)
            image.load()
        except UnidentifiedImageError as e:
            raise DecodeError("Unrecognized image format") from e
        except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
            raise DecodeError(f"Corrupt image data: {e}") from e
        return image

    @classmethod
    def decode_png(cls, data: bytes) -> GridModel:
        """Decode an encoded image buffer (PNG, GIF, JPEG) into a new grid"""
        return cls.decode(cls.open_image(data))
