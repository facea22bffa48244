#!/usr/bin/env python3
"""
Tests for sprite sheet encoding and decoding
"""

import io
from unittest.mock import Mock

import numpy as np
import pytest
from PIL import Image

from pixelsmith.core.pixelsmith_codec import SpriteCodec
from pixelsmith.core.pixelsmith_exceptions import DecodeError
from pixelsmith.core.pixelsmith_models import Color, GridModel

RED = Color(255, 0, 0)
HALF_BLUE = Color(0, 0, 255, 128)


def png_bytes(image: Image.Image, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


class TestEncode:
    """Test exporting a grid"""

    def test_image_matches_grid_shape(self):
        grid = GridModel(rows=3, cols=5)
        image = SpriteCodec.encode(grid)
        assert image.size == (5, 3)
        assert image.mode == "RGBA"

    def test_empty_cells_are_transparent(self, grid):
        grid.set(1, 2, RED)
        image = SpriteCodec.encode(grid)

        assert image.getpixel((2, 1)) == (255, 0, 0, 255)
        for row in range(grid.rows):
            for col in range(grid.cols):
                if (row, col) != (1, 2):
                    assert image.getpixel((col, row)) == (0, 0, 0, 0)

    def test_translucent_color_is_kept(self, grid):
        grid.set(0, 0, HALF_BLUE)
        assert SpriteCodec.encode(grid).getpixel((0, 0)) == (0, 0, 255, 128)

    def test_encode_does_not_touch_grid(self, grid):
        before = grid.data.copy()
        SpriteCodec.encode(grid)
        assert np.array_equal(grid.data, before)

    def test_encode_png_is_png(self, grid):
        data = SpriteCodec.encode_png(grid)
        assert data[:8] == b"\x89PNG\r\n\x1a\n"


class TestDecode:
    """Test importing a sprite sheet"""

    def test_round_trip_keeps_painted_cells(self, grid):
        grid.set(0, 0, RED)
        grid.set(7, 3, HALF_BLUE)
        grid.set(4, 4, Color(1, 2, 3, 255))

        decoded = SpriteCodec.decode_png(SpriteCodec.encode_png(grid))

        assert decoded.size == grid.size
        assert decoded.get(0, 0) == RED
        assert decoded.get(7, 3) == HALF_BLUE
        assert decoded.get(4, 4) == Color(1, 2, 3, 255)
        # Empty cells come back transparent, not as checkerboard
        assert decoded.get(1, 1) == Color(0, 0, 0, 0)
        assert not decoded.is_empty(1, 1)

    def test_one_pixel_per_cell(self):
        image = Image.new("RGBA", (7, 2), (10, 20, 30, 40))
        grid = SpriteCodec.decode_png(png_bytes(image))
        assert grid.size == (2, 7)
        assert grid.get(1, 6) == Color(10, 20, 30, 40)

    def test_rgb_input_is_opaque(self):
        image = Image.new("RGB", (2, 2), (9, 8, 7))
        grid = SpriteCodec.decode_png(png_bytes(image))
        assert grid.get(0, 0) == Color(9, 8, 7, 255)

    def test_palette_gif_input(self):
        image = Image.new("P", (3, 1))
        image.putpalette([255, 0, 0] + [0, 0, 0] * 255)
        grid = SpriteCodec.decode_png(png_bytes(image, "GIF"))
        assert grid.size == (1, 3)
        assert grid.get(0, 0)[:3] == (255, 0, 0)

    def test_decoded_grid_is_unmodified(self):
        grid = SpriteCodec.decode_png(png_bytes(Image.new("RGBA", (2, 2))))
        assert grid.modified is False

    def test_empty_buffer(self):
        with pytest.raises(DecodeError):
            SpriteCodec.decode_png(b"")

    def test_garbage_buffer(self):
        with pytest.raises(DecodeError, match="Unrecognized"):
            SpriteCodec.decode_png(b"definitely not an image")

    def test_truncated_png(self):
        noise = np.random.default_rng(7).integers(0, 256, (64, 64, 4), dtype=np.uint8)
        data = png_bytes(Image.fromarray(noise))
        with pytest.raises(DecodeError):
            SpriteCodec.decode_png(data[: len(data) // 2])

    def test_oversized_image(self):
        image = Image.new("RGBA", (4097, 1))
        with pytest.raises(DecodeError, match="too large"):
            SpriteCodec.decode(image)

    def test_oversized_buffer_rejected_before_pixels_are_decoded(self, monkeypatch):
        data = png_bytes(Image.new("RGBA", (4097, 1)))
        real_open = Image.open
        opened = []

        def tracking_open(fp):
            image = real_open(fp)
            image.load = Mock()
            opened.append(image)
            return image

        monkeypatch.setattr(Image, "open", tracking_open)

        with pytest.raises(DecodeError, match="too large"):
            SpriteCodec.decode_png(data)

        assert len(opened) == 1
        opened[0].load.assert_not_called()

    def test_decode_error_is_a_file_error(self):
        from pixelsmith.core.pixelsmith_exceptions import FileOperationError

        with pytest.raises(FileOperationError):
            SpriteCodec.decode_png(b"\x00")
