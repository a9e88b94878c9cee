"""
Tests for the range normalizer.
"""

import numpy as np
import pytest

from terrain_filters.core.easing import EaseIn, Linear
from terrain_filters.core.grid import TerrainOptions
from terrain_filters.core.validation import DegenerateRangeError, GridShapeError
from terrain_filters.filters.normalize import normalize, target_range


class TestNormalize:
    """Tests for normalize()."""

    def test_stretch_to_bounds(self, options5, ramp25):
        """Test a ramp is rescaled linearly into [min_height, max_height]."""
        result = normalize(ramp25, options5)

        assert result is ramp25
        assert np.allclose(ramp25, np.arange(25) / 24 * 10)
        assert ramp25.min() == 0.0
        assert ramp25.max() == 10.0

    def test_flat_grid_raises(self, options5):
        """Test a constant grid cannot be normalized and is left untouched."""
        heights = np.full(25, 5.0)

        with pytest.raises(DegenerateRangeError):
            normalize(heights, options5)
        assert np.all(heights == 5.0)

    def test_length_unchanged(self, random_options, random_heights):
        """Test the grid keeps its length."""
        before = random_heights.size
        normalize(random_heights, random_options)
        assert random_heights.size == before

    def test_bounds_guarantee(self, random_options, random_heights):
        """Test every value lies within the configured bounds."""
        options = random_options.resolved(max_height=3.0, min_height=-7.5)
        normalize(random_heights, options)

        assert random_heights.min() >= -7.5 - 1e-9
        assert random_heights.max() <= 3.0 + 1e-9

    def test_idempotent(self, random_options, random_heights):
        """Test normalizing twice equals normalizing once."""
        once = normalize(random_heights.copy(), random_options)
        twice = normalize(normalize(random_heights.copy(), random_options), random_options)

        assert np.allclose(once, twice)

    def test_no_stretch_keeps_narrower_data(self, options5, ramp25):
        """Test data inside the bounds is not stretched."""
        options = options5.resolved(max_height=100.0, min_height=-100.0, stretch=False)
        normalize(ramp25, options)

        assert np.allclose(ramp25, np.arange(25))

    def test_no_stretch_clamps_to_bounds(self, options5, ramp25):
        """Test data wider than the bounds is squeezed into them."""
        options = options5.resolved(max_height=10.0, min_height=2.0, stretch=False)
        normalize(ramp25, options)

        assert ramp25.min() == pytest.approx(2.0)
        assert ramp25.max() == pytest.approx(10.0)

    def test_inverted_window_uses_max_height(self, options5, ramp25):
        """Test the fallback when clamping inverts the target window."""
        options = options5.resolved(max_height=-5.0, min_height=-10.0, stretch=False)
        normalize(ramp25, options)

        # target_min = max(0, -10) = 0, target_max falls back to -5
        assert ramp25[0] == pytest.approx(0.0)
        assert ramp25[-1] == pytest.approx(-5.0)

    def test_unset_bounds_use_data_extremes(self, options5, ramp25):
        """Test unset bounds leave the data range as it is."""
        options = options5.resolved(max_height=None, min_height=None)
        normalize(ramp25, options)

        assert np.allclose(ramp25, np.arange(25))

    def test_easing_applied(self, options5, ramp25):
        """Test the easing curve shapes the result."""
        normalize(ramp25, options5.resolved(easing=EaseIn()))

        assert np.allclose(ramp25, (np.arange(25) / 24) ** 2 * 10)

    def test_custom_callable_easing(self, options5, ramp25):
        """Test a plain function works as an easing."""
        normalize(ramp25, options5.resolved(easing=lambda x: x ** 0.5))

        assert np.allclose(ramp25, np.sqrt(np.arange(25) / 24) * 10)

    def test_options_not_mutated(self, ramp25):
        """Test the caller's options keep their easing."""
        options = TerrainOptions(width_segments=4, height_segments=4, easing=None)
        normalize(ramp25, options)

        assert options.easing == Linear()

    def test_two_dimensional_input(self, options5, ramp25):
        """Test a (rows, columns) array is modified in place."""
        grid = ramp25.reshape(5, 5)
        normalize(grid, options5)

        assert grid.shape == (5, 5)
        assert grid[4, 4] == 10.0

    def test_integer_grid_rejected(self, options5):
        """Test integer arrays are rejected."""
        with pytest.raises(GridShapeError, match="floating dtype"):
            normalize(np.arange(25), options5)

    def test_nan_rejected(self, options5, ramp25):
        """Test non-finite elevations are rejected before mutation."""
        ramp25[3] = np.nan
        with pytest.raises(GridShapeError, match="NaN"):
            normalize(ramp25, options5)
        assert ramp25[4] == 4.0

    def test_list_rejected(self, options5):
        """Test plain lists are rejected."""
        with pytest.raises(GridShapeError, match="numpy array"):
            normalize([1.0, 2.0], options5)


class TestTargetRange:
    """Tests for target window resolution."""

    def test_stretch(self, options5):
        assert target_range(3.0, 4.0, options5) == (0.0, 10.0)

    def test_clamped(self, options5):
        options = options5.resolved(stretch=False)
        assert target_range(3.0, 40.0, options) == (3.0, 10.0)
