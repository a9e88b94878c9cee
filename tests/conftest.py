"""
Shared pytest fixtures and configuration for terrain_filters tests.
"""

import numpy as np
import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "requires_matplotlib: requires matplotlib to be installed"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip tests based on missing dependencies."""
    try:
        import matplotlib
        matplotlib.use("Agg")
        matplotlib_available = True
    except ImportError:
        matplotlib_available = False

    for item in items:
        if "requires_matplotlib" in item.keywords and not matplotlib_available:
            item.add_marker(pytest.mark.skip(reason="matplotlib not installed"))


@pytest.fixture
def options5():
    """Options for a 5 x 5 vertex grid over a 100 x 100 extent."""
    from terrain_filters.core.grid import TerrainOptions

    return TerrainOptions(
        width=100.0,
        height=100.0,
        width_segments=4,
        height_segments=4,
        max_height=10.0,
        min_height=0.0,
    )


@pytest.fixture
def ramp25():
    """Elevations 0..24 in row-major order."""
    return np.arange(25, dtype=np.float64)


@pytest.fixture
def random_options():
    """Options for a non-square 13 x 9 vertex grid."""
    from terrain_filters.core.grid import TerrainOptions

    return TerrainOptions(
        width=240.0,
        height=160.0,
        width_segments=12,
        height_segments=8,
        max_height=50.0,
        min_height=-20.0,
    )


@pytest.fixture
def random_heights(random_options):
    """Reproducible noisy heightmap matching random_options."""
    rng = np.random.default_rng(42)
    return rng.uniform(-20.0, 50.0, size=random_options.size)


@pytest.fixture
def sample_heightmap_file(tmp_path):
    """Small 2D heightmap saved as .npy."""
    rng = np.random.default_rng(7)
    path = tmp_path / "heightmap.npy"
    np.save(path, rng.uniform(0.0, 100.0, size=(9, 11)))
    return path


@pytest.fixture
def cli_runner():
    """Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def tmp_output_dir(tmp_path):
    """Temporary directory for CLI outputs."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    return output_dir
