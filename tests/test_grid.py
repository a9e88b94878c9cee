"""
Tests for grid addressing, terrain options, scratch buffers and HeightGrid.
"""

import dataclasses
import json

import numpy as np
import pytest

from terrain_filters.core.buffer import ScratchBuffer
from terrain_filters.core.easing import CallableEasing, EaseIn, Linear
from terrain_filters.core.grid import (
    HeightGrid,
    TerrainOptions,
    grid_coords,
    grid_index,
    load_options,
)
from terrain_filters.core.validation import GridShapeError, ValidationError


class TestGridIndex:
    """Tests for row-major addressing."""

    def test_index_is_row_major(self):
        """Test index = row * columns + col."""
        assert grid_index(0, 0, 5) == 0
        assert grid_index(4, 0, 5) == 4
        assert grid_index(0, 1, 5) == 5
        assert grid_index(3, 2, 5) == 13

    def test_coords_inverts_index(self):
        """Test grid_coords returns (col, row)."""
        assert grid_coords(13, 5) == (3, 2)
        for k in range(20):
            col, row = grid_coords(k, 4)
            assert grid_index(col, row, 4) == k

    def test_options_index_matches_numpy_layout(self, options5):
        """Test options.index agrees with a (rows, columns) reshape."""
        z = np.arange(25.0)
        grid2d = z.reshape(options5.shape)
        assert z[options5.index(3, 1)] == grid2d[1, 3]
        assert options5.coords(options5.index(2, 4)) == (2, 4)


class TestTerrainOptions:
    """Tests for option defaults, derived values and validation."""

    def test_defaults(self):
        """Test default options describe a 64 x 64 grid."""
        options = TerrainOptions()
        assert options.columns == 64
        assert options.rows == 64
        assert options.size == 64 * 64
        assert options.max_height == 100.0
        assert options.min_height == -100.0
        assert options.easing == Linear()
        assert options.stretch is True

    def test_segment_sizes(self, random_options):
        """Test physical size of one segment."""
        assert random_options.x_segment_size == pytest.approx(20.0)
        assert random_options.y_segment_size == pytest.approx(20.0)

    def test_negative_segments_raise(self):
        """Test that negative segment counts are rejected."""
        with pytest.raises(ValidationError, match="cannot be negative"):
            TerrainOptions(width_segments=-1)

    def test_float_segments_raise(self):
        """Test that non-integer segment counts are rejected."""
        with pytest.raises(ValidationError, match="must be an integer"):
            TerrainOptions(height_segments=4.5)

    def test_zero_width_raises(self):
        """Test that a zero extent is rejected."""
        with pytest.raises(ValidationError, match="positive"):
            TerrainOptions(width=0)

    def test_non_numeric_height_bound_raises(self):
        """Test that a string bound is rejected."""
        with pytest.raises(ValidationError, match="must be a number or None"):
            TerrainOptions(max_height="high")

    def test_unset_bounds_allowed(self):
        """Test that bounds can be left unset."""
        options = TerrainOptions(max_height=None, min_height=None)
        assert options.max_height is None
        assert options.min_height is None

    def test_easing_resolved_from_name(self):
        """Test easing given by name."""
        assert TerrainOptions(easing="ease-in").easing == EaseIn()

    def test_options_are_immutable(self, options5):
        """Test options cannot be mutated in place."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            options5.easing = EaseIn()

    def test_resolved_returns_copy(self, options5):
        """Test resolved() leaves the original untouched."""
        changed = options5.resolved(stretch=False, max_height=5.0)
        assert changed.stretch is False
        assert changed.max_height == 5.0
        assert options5.stretch is True
        assert options5.max_height == 10.0

    def test_from_dict_camel_case(self):
        """Test camelCase keys are accepted."""
        options = TerrainOptions.from_dict({
            "width": 200,
            "height": 100,
            "widthSegments": 8,
            "heightSegments": 4,
            "maxHeight": 50,
            "minHeight": None,
            "easing": "ease-in-out",
            "stretch": False,
        })
        assert options.shape == (5, 9)
        assert options.max_height == 50.0
        assert options.min_height is None
        assert options.easing.name == "ease-in-out"
        assert options.stretch is False

    def test_from_dict_unknown_key(self):
        """Test unknown keys are rejected."""
        with pytest.raises(ValidationError, match="Unknown terrain option"):
            TerrainOptions.from_dict({"depth": 3})

    def test_to_dict_round_trip(self, options5):
        """Test to_dict output can rebuild the options."""
        assert TerrainOptions.from_dict(options5.to_dict()) == options5

    def test_to_dict_custom_easing_not_serialized(self, options5):
        """Test a custom easing is written as None and loads back as Linear."""
        options = options5.resolved(easing=CallableEasing(lambda x: x ** 3))
        data = options.to_dict()

        assert data["easing"] is None
        json.dumps(data)
        assert TerrainOptions.from_dict(data).easing == Linear()

    def test_to_dict_named_easing(self, options5):
        assert options5.resolved(easing="ease-in").to_dict()["easing"] == "ease-in"

    def test_load_options(self, tmp_path):
        """Test loading options from JSON."""
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"widthSegments": 2, "heightSegments": 3, "maxHeight": 1}))

        options = load_options(path)
        assert options.columns == 3
        assert options.rows == 4
        assert options.max_height == 1.0

    def test_load_options_not_object(self, tmp_path):
        """Test a JSON list is rejected."""
        path = tmp_path / "options.json"
        path.write_text("[1, 2]")

        with pytest.raises(ValidationError, match="JSON object"):
            load_options(path)


class TestScratchBuffer:
    """Tests for the reusable work array."""

    def test_acquire_reuses_allocation(self):
        """Test the same array is returned while the size is unchanged."""
        buffer = ScratchBuffer()
        first = buffer.acquire(10)
        second = buffer.acquire(10)
        assert first is second
        assert buffer.acquire(12) is not first
        assert buffer.size == 12

    def test_load_and_commit(self):
        """Test load copies the source and commit writes it back."""
        buffer = ScratchBuffer()
        source = np.arange(4.0)
        work = buffer.load(source)
        work *= 2
        assert np.array_equal(source, [0, 1, 2, 3])

        buffer.commit(source)
        assert np.array_equal(source, [0, 2, 4, 6])

    def test_commit_size_mismatch(self):
        """Test committing into a different-size target fails."""
        buffer = ScratchBuffer(3)
        with pytest.raises(ValueError):
            buffer.commit(np.zeros(5))


class TestHeightGrid:
    """Tests for the HeightGrid container."""

    def test_flat_input_reshaped(self, options5, ramp25):
        """Test flat elevations become (rows, columns)."""
        grid = HeightGrid(elevations=ramp25, options=options5)
        assert grid.shape == (5, 5)
        assert grid.get(3, 1) == 8.0
        assert grid.flat[grid.index(3, 1)] == 8.0
        assert len(grid) == 25

    def test_shape_mismatch_raises(self, options5):
        """Test elevations must match the options."""
        with pytest.raises(GridShapeError):
            HeightGrid(elevations=np.zeros((4, 5)), options=options5)
        with pytest.raises(GridShapeError):
            HeightGrid(elevations=np.zeros(24), options=options5)

    def test_from_array_derives_segments(self):
        """Test from_array uses the array shape."""
        grid = HeightGrid.from_array(np.zeros((3, 7)), width=60.0)
        assert grid.options.width_segments == 6
        assert grid.options.height_segments == 2
        assert grid.options.width == 60.0

    def test_statistics(self, options5, ramp25):
        """Test basic statistics."""
        stats = HeightGrid(elevations=ramp25, options=options5).statistics()
        assert stats["min_elevation"] == 0.0
        assert stats["max_elevation"] == 24.0
        assert stats["mean_elevation"] == pytest.approx(12.0)
        assert stats["elevation_range"] == 24.0
        assert stats["cells"] == 25
        assert stats["distinct_elevations"] == 25

    def test_chained_filters(self, options5, ramp25):
        """Test filter methods chain and keep the grid size."""
        grid = HeightGrid(elevations=ramp25, options=options5)
        result = grid.smooth().normalize().step(levels=5)

        assert result is grid
        assert grid.shape == (5, 5)
        assert np.unique(grid.elevations).size <= 5
        assert grid.elevations.min() >= 0.0
        assert grid.elevations.max() <= 10.0

    def test_normalize_overrides(self, options5, ramp25):
        """Test keyword overrides do not change the stored options."""
        grid = HeightGrid(elevations=ramp25, options=options5)
        grid.normalize(max_height=1.0, min_height=0.0)

        assert grid.elevations.max() == pytest.approx(1.0)
        assert grid.options.max_height == 10.0

    def test_copy_is_independent(self, options5, ramp25):
        """Test copies do not share elevations."""
        grid = HeightGrid(elevations=ramp25, options=options5)
        clone = grid.copy()
        clone.turbulence()
        assert grid.get(0, 0) == 0.0
        assert clone.get(0, 0) != grid.get(0, 0)

    def test_scratch_buffer_is_internal(self, options5, ramp25):
        """Test the scratch buffer is neither a constructor argument nor compared."""
        with pytest.raises(TypeError):
            HeightGrid(elevations=ramp25, options=options5, _scratch=ScratchBuffer())

        scratch = next(f for f in dataclasses.fields(HeightGrid) if f.name == "_scratch")
        assert not scratch.compare
        assert "_scratch" not in repr(HeightGrid(elevations=ramp25, options=options5))
