"""
Tests for the turbulence transform.
"""

import numpy as np
import pytest

from terrain_filters.core.validation import MissingConfigurationError
from terrain_filters.filters.turbulence import turbulence


class TestTurbulence:
    """Tests for turbulence()."""

    def test_fold_symmetry(self, options5):
        """Test values symmetric about the midpoint map to the same output."""
        z = np.array([2.0, 8.0])
        turbulence(z, options5)
        assert z[0] == z[1] == 6.0

    def test_tent_profile(self, options5):
        """Test the ends of the range map high and the midpoint maps low."""
        z = np.array([0.0, 2.5, 5.0, 7.5, 10.0])
        turbulence(z, options5)
        assert np.allclose(z, [10.0, 5.0, 0.0, 5.0, 10.0])

    def test_out_of_range_folds_outside(self, options5):
        z = np.array([12.0, -1.0])
        turbulence(z, options5)
        assert np.allclose(z, [14.0, 12.0])

    def test_offset_range(self, options5):
        options = options5.resolved(max_height=30.0, min_height=10.0)
        z = np.array([10.0, 20.0, 25.0])
        turbulence(z, options)
        assert np.allclose(z, [30.0, 10.0, 20.0])

    def test_length_unchanged(self, random_options, random_heights):
        turbulence(random_heights, random_options)
        assert random_heights.size == random_options.size

    @pytest.mark.parametrize("unset", ["max_height", "min_height"])
    def test_missing_bound_raises(self, options5, ramp25, unset):
        before = ramp25.copy()
        with pytest.raises(MissingConfigurationError, match=unset):
            turbulence(ramp25, options5.resolved(**{unset: None}))
        assert np.array_equal(ramp25, before)
