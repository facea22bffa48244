#!/usr/bin/env python3
"""
Unit tests for sprite editor data models
Tests Color, the checkerboard sentinel, GridModel and PaintColorModel
"""

import numpy as np
import pytest

from pixelsmith.core.pixelsmith_exceptions import OutOfBoundsError, ValidationError
from pixelsmith.core.pixelsmith_models import (
    DARK_CHECKER,
    LIGHT_CHECKER,
    Color,
    GridModel,
    PaintColorModel,
    ViewTransform,
    checker_color,
    checkerboard,
)

RED = Color(255, 0, 0)


class TestColor:
    """Test the Color value type"""

    def test_defaults_to_opaque(self):
        assert Color(1, 2, 3) == Color(1, 2, 3, 255)

    def test_value_equality_on_all_channels(self):
        assert Color(10, 20, 30, 40) == Color(10, 20, 30, 40)
        assert Color(10, 20, 30, 40) != Color(10, 20, 30, 41)

    def test_of_accepts_sequences(self):
        assert Color.of([1, 2, 3]) == Color(1, 2, 3, 255)
        assert Color.of((1, 2, 3, 4)) == Color(1, 2, 3, 4)

    def test_of_clamps_channels(self):
        assert Color.of((300, -5, 10)) == Color(255, 0, 10, 255)

    def test_of_rejects_bad_length(self):
        with pytest.raises(ValueError):
            Color.of((1, 2))

    def test_is_transparent(self):
        assert Color(0, 0, 0, 0).is_transparent
        assert not Color(0, 0, 0).is_transparent


class TestCheckerboard:
    """Test the checkerboard sentinel"""

    def test_parity(self):
        assert checker_color(0, 0) == LIGHT_CHECKER
        assert checker_color(0, 1) == DARK_CHECKER
        assert checker_color(3, 5) == LIGHT_CHECKER
        assert checker_color(4, 7) == DARK_CHECKER

    def test_sentinel_values(self):
        assert LIGHT_CHECKER == Color(160, 160, 160, 255)
        assert DARK_CHECKER == Color(96, 96, 96, 255)

    def test_array_matches_function(self):
        data = checkerboard(3, 4)
        assert data.shape == (3, 4, 4)
        for row in range(3):
            for col in range(4):
                assert tuple(int(v) for v in data[row, col]) == checker_color(row, col)


class TestGridModel:
    """Test the GridModel class"""

    def test_initialization_is_empty(self, grid):
        assert grid.size == (8, 8)
        assert grid.data.shape == (8, 8, 4)
        assert grid.data.dtype == np.uint8
        assert grid.empty_mask().all()
        assert grid.modified is False

    def test_default_dimensions(self):
        model = GridModel()
        assert model.size == (125, 125)

    def test_rejects_non_positive_dimensions(self):
        with pytest.raises(ValidationError):
            GridModel(rows=0, cols=5)
        with pytest.raises(ValidationError):
            GridModel(rows=5, cols=-1)

    def test_mismatched_data_is_replaced(self):
        model = GridModel(rows=2, cols=3, data=np.zeros((4, 4, 4), dtype=np.uint8))
        assert model.data.shape == (2, 3, 4)
        assert model.empty_mask().all()

    def test_get_and_set(self, grid):
        assert grid.set(2, 3, RED) is True
        assert grid.get(2, 3) == RED
        assert grid.modified is True

    def test_set_same_value_reports_no_change(self, grid):
        grid.set(2, 3, RED)
        assert grid.set(2, 3, RED) is False

    def test_set_accepts_plain_tuples(self, grid):
        grid.set(0, 0, (1, 2, 3))
        assert grid.get(0, 0) == Color(1, 2, 3, 255)

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (8, 0), (0, 8)])
    def test_out_of_bounds(self, grid, row, col):
        with pytest.raises(OutOfBoundsError):
            grid.get(row, col)
        with pytest.raises(OutOfBoundsError):
            grid.set(row, col, RED)

    def test_out_of_bounds_is_an_index_error(self, grid):
        with pytest.raises(IndexError):
            grid.get(100, 100)

    def test_is_empty(self, grid):
        assert grid.is_empty(1, 1)
        grid.set(1, 1, RED)
        assert not grid.is_empty(1, 1)

    def test_other_parity_gray_is_not_empty(self, grid):
        # Only the sentinel for the cell's own position counts as empty
        grid.set(0, 0, DARK_CHECKER)
        assert not grid.is_empty(0, 0)

    def test_painting_reserved_gray_collides_with_empty(self, grid):
        # Known boundary: the sentinel gray is indistinguishable from empty
        grid.set(0, 0, RED)
        grid.set(0, 0, LIGHT_CHECKER)
        assert grid.is_empty(0, 0)

    def test_resize(self, grid):
        grid.set(0, 0, RED)
        version = grid.version

        grid.resize(3, 5)

        assert grid.size == (3, 5)
        assert grid.data.shape == (3, 5, 4)
        assert grid.empty_mask().all()
        assert grid.version == version + 1
        with pytest.raises(OutOfBoundsError):
            grid.get(4, 0)

    def test_resize_rejects_zero(self, grid):
        with pytest.raises(ValidationError):
            grid.resize(0, 4)
        assert grid.size == (8, 8)

    def test_clear(self, grid):
        grid.set(4, 4, RED)
        grid.clear()
        assert grid.empty_mask().all()

    def test_from_array_copies(self):
        data = np.zeros((2, 3, 4), dtype=np.uint8)
        model = GridModel.from_array(data)
        data[0, 0] = (9, 9, 9, 9)
        assert model.size == (2, 3)
        assert model.get(0, 0) == Color(0, 0, 0, 0)

    def test_from_array_rejects_rgb(self):
        with pytest.raises(ValidationError):
            GridModel.from_array(np.zeros((2, 2, 3), dtype=np.uint8))

    def test_edits_count_content_changes(self, grid):
        assert grid.edits == 0
        grid.set(0, 0, RED)
        grid.set(0, 0, RED)
        assert grid.edits == 1
        grid.clear()
        grid.resize(4, 4)
        assert grid.edits == 3

    def test_edits_survive_clearing_modified(self, grid):
        grid.set(0, 0, RED)
        grid.modified = False
        assert grid.edits == 1

    def test_copy_keeps_edit_count(self, grid):
        grid.set(1, 1, RED)
        clone = grid.copy()
        assert clone.edits == grid.edits
        grid.set(2, 2, RED)
        assert clone.edits != grid.edits

    def test_copy_is_independent(self, grid):
        clone = grid.copy()
        clone.set(0, 0, RED)
        assert grid.is_empty(0, 0)


class TestPaintColorModel:
    """Test the shared paint color"""

    def test_default_is_black(self):
        assert PaintColorModel().current_color == Color(0, 0, 0, 255)

    def test_set_color_notifies(self):
        seen = []
        model = PaintColorModel(changed_callback=seen.append)
        model.set_color((10, 20, 30))
        assert model.current_color == Color(10, 20, 30)
        assert seen == [Color(10, 20, 30)]

    def test_same_color_does_not_notify(self):
        seen = []
        model = PaintColorModel(changed_callback=seen.append)
        model.set_color((0, 0, 0, 255))
        assert seen == []


class TestViewTransform:
    def test_reset(self):
        view = ViewTransform(pan_x=5, pan_y=-3, scale=2.0)
        view.reset()
        assert (view.pan_x, view.pan_y, view.scale) == (0.0, 0.0, 1.0)
