"""Utility modules."""

from .visualization import plot_heightmap, plot_histogram, create_comparison_figure

__all__ = ["plot_heightmap", "plot_histogram", "create_comparison_figure"]
