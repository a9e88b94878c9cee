"""
Visualization Utilities

Plotting functions for heightmaps and their elevation distributions.
"""

from __future__ import annotations

from typing import Optional, Tuple, TYPE_CHECKING
import numpy as np

try:
    import matplotlib.pyplot as plt
    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False

if TYPE_CHECKING:
    from ..core.grid import HeightGrid


def require_matplotlib():
    if not HAS_MATPLOTLIB:
        raise ImportError("matplotlib is required. Install with: pip install matplotlib")


def plot_heightmap(
    grid: 'HeightGrid',
    ax: Optional[plt.Axes] = None,
    title: str = "Heightmap",
    cmap: str = "terrain",
    show_contours: bool = True,
    contour_levels: int = 10,
    figsize: Tuple[int, int] = (10, 8),
) -> plt.Figure:
    """
    Plot a heightmap as a 2D image with optional contours.

    Args:
        grid: HeightGrid to plot
        ax: Optional matplotlib axes (creates new figure if None)
        title: Plot title
        cmap: Colormap name
        show_contours: Whether to draw contour lines
        contour_levels: Number of contour levels
        figsize: Figure size if creating new figure

    Returns:
        matplotlib Figure
    """
    require_matplotlib()

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    options = grid.options
    extent = [0.0, options.width, 0.0, options.height]

    im = ax.imshow(
        grid.elevations,
        extent=extent,
        origin='upper',
        cmap=cmap,
        aspect='equal',
    )
    plt.colorbar(im, ax=ax, label='Elevation')

    z = grid.elevations
    if show_contours and z.min() < z.max() and min(z.shape) > 1:
        cs = ax.contour(
            z,
            levels=contour_levels,
            extent=extent,
            origin='upper',
            colors='black',
            linewidths=0.5,
            alpha=0.5,
        )
        ax.clabel(cs, inline=True, fontsize=8, fmt='%.1f')

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_title(title)

    return fig


def plot_histogram(
    grid: 'HeightGrid',
    ax: Optional[plt.Axes] = None,
    title: str = "Elevation Distribution",
    bins: int = 50,
    figsize: Tuple[int, int] = (8, 5),
) -> plt.Figure:
    """Plot the distribution of elevations."""
    require_matplotlib()

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    ax.hist(grid.flat, bins=bins, color='steelblue', edgecolor='white')

    # Configured bounds, where set
    for bound, label in ((grid.options.min_height, 'min_height'),
                         (grid.options.max_height, 'max_height')):
        if bound is not None:
            ax.axvline(bound, color='red', linestyle='--', linewidth=1, label=label)
    if ax.get_legend_handles_labels()[0]:
        ax.legend()

    ax.set_xlabel('Elevation')
    ax.set_ylabel('Cells')
    ax.set_title(title)

    return fig


def create_comparison_figure(
    before: 'HeightGrid',
    after: 'HeightGrid',
    title: str = "Heightmap Filtering",
    figsize: Tuple[int, int] = (14, 10),
) -> plt.Figure:
    """
    Side-by-side heightmaps and elevation histograms before and after filtering.

    Returns:
        matplotlib Figure
    """
    require_matplotlib()

    fig, axes = plt.subplots(2, 2, figsize=figsize)
    fig.suptitle(title, fontsize=14, fontweight='bold')

    plot_heightmap(before, ax=axes[0, 0], title="Before", show_contours=False)
    plot_heightmap(after, ax=axes[0, 1], title="After", show_contours=False)
    plot_histogram(before, ax=axes[1, 0], title="Before")
    plot_histogram(after, ax=axes[1, 1], title="After")

    fig.tight_layout()
    return fig


def save_figure(
    figure: plt.Figure,
    filepath: str,
    dpi: int = 150,
) -> None:
    """Save figure to file."""
    figure.savefig(filepath, dpi=dpi, bbox_inches='tight')
