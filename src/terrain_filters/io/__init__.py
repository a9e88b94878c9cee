"""I/O modules for loading and saving heightmaps."""

from .grid_files import load_heightmap, save_heightmap, export_statistics_json

__all__ = [
    "load_heightmap",
    "save_heightmap",
    "export_statistics_json",
]
