"""
Island Heightmap Example

This example demonstrates:
1. Generating a noisy heightmap
2. Smoothing it and rescaling into the elevation bounds
3. Pulling the edges down to sea level (linear and radial)
4. Terracing with the step quantizer
5. Visualizing before/after

Run from the project root:
    python examples/island_pipeline.py
"""

import sys
from pathlib import Path

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from terrain_filters import HeightGrid, EaseInOut, EaseOut
from terrain_filters.io.grid_files import save_heightmap


def make_noise(rows: int, columns: int, seed: int = 42) -> np.ndarray:
    """Sum of a few sine octaves plus white noise."""
    rng = np.random.default_rng(seed)
    y, x = np.mgrid[0:rows, 0:columns] / max(rows, columns)
    z = np.zeros((rows, columns))
    for octave in range(1, 5):
        phase = rng.uniform(0, 2 * np.pi, size=2)
        z += np.sin(x * 6 * octave + phase[0]) * np.cos(y * 6 * octave + phase[1]) / octave
    return z + rng.normal(0.0, 0.1, size=z.shape)


def main():
    print("=" * 60)
    print("TERRAIN FILTERS - ISLAND EXAMPLE")
    print("=" * 60)

    # =========================================================================
    # Step 1: Generate a heightmap
    # =========================================================================
    print("\n[1] Generating noise...")

    grid = HeightGrid.from_array(
        make_noise(129, 129),
        width=1024.0,
        height=1024.0,
        max_height=120.0,
        min_height=-20.0,
        easing=EaseOut(),
    )
    before = grid.copy()

    stats = grid.statistics()
    print(f"   Grid size: {grid.columns} x {grid.rows}")
    print(f"   Elevation range: {stats['min_elevation']:.2f} to {stats['max_elevation']:.2f}")

    # =========================================================================
    # Step 2: Smooth and normalize
    # =========================================================================
    print("\n[2] Smoothing and normalizing...")

    grid.smooth(weight=0.5).smooth_median().normalize()

    stats = grid.statistics()
    print(f"   Elevation range: {stats['min_elevation']:.2f} to {stats['max_elevation']:.2f}")

    # =========================================================================
    # Step 3: Sink the edges
    # =========================================================================
    print("\n[3] Shaping edges...")

    # Rectangular band first, then a circular falloff for the island outline
    grid.edges(direction=False, distance=96.0, easing=EaseInOut())
    grid.radial_edges(direction=False, distance=64.0)

    print(f"   Corner elevation: {grid.get(0, 0):.2f}")
    print(f"   Center elevation: {grid.get(64, 64):.2f}")

    # =========================================================================
    # Step 4: Terraces
    # =========================================================================
    print("\n[4] Terracing...")

    grid.step(levels=8, merge_remainder=True)
    print(f"   Distinct elevations: {grid.statistics()['distinct_elevations']}")

    output_path = Path(__file__).parent / "island.npy"
    save_heightmap(grid.elevations, output_path)
    print(f"   Heightmap saved to: {output_path}")

    # =========================================================================
    # Step 5: Visualization (if matplotlib available)
    # =========================================================================
    print("\n[5] Generating visualization...")

    try:
        from terrain_filters.utils.visualization import create_comparison_figure, save_figure
        import matplotlib.pyplot as plt

        fig = create_comparison_figure(before, grid, title="Island Pipeline")
        report_path = Path(__file__).parent / "island_report.png"
        save_figure(fig, str(report_path))
        print(f"   Report saved to: {report_path}")

        plt.show()

    except ImportError:
        print("   (matplotlib not available - skipping visualization)")

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
