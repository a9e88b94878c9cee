"""
Command Line Interface for Terrain Filters

Usage:
    terrain-filters info <input>
    terrain-filters apply <input> -o <output> --op smooth --op step:levels=8
    terrain-filters list-ops
"""

import sys
from typing import Callable, Dict, List, Optional, Tuple

import click

from .core.easing import EASINGS
from .core.grid import HeightGrid, TerrainOptions, load_options
from .core.validation import ValidationError
from .filters.edges import EdgeSelection
from .io.grid_files import export_statistics_json, load_heightmap, save_heightmap

_TRUE = {"1", "true", "yes", "on", "up"}
_FALSE = {"0", "false", "no", "off", "down"}


def _to_bool(value: str, name: str) -> bool:
    key = value.strip().lower()
    if key in _TRUE:
        return True
    if key in _FALSE:
        return False
    raise ValueError(f"{name} must be one of {sorted(_TRUE | _FALSE)}, got '{value}'")


def _to_float(value: str, name: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{value}'")


def _to_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{value}'")


def _to_edges(value: str) -> EdgeSelection:
    """Parse 'top+left' style edge lists."""
    names = {part.strip().lower() for part in value.split('+') if part.strip()}
    all_edges = ('top', 'bottom', 'left', 'right')
    unknown = names.difference(all_edges)
    if unknown:
        raise ValueError(
            f"Unknown edge(s): {', '.join(sorted(unknown))}. Use e.g. edges=top+left"
        )
    return EdgeSelection(**{edge: edge in names for edge in all_edges})


def _op_normalize(grid: HeightGrid, params: Dict[str, str]) -> None:
    changes = {}
    if 'easing' in params:
        changes['easing'] = params.pop('easing')
    if 'stretch' in params:
        changes['stretch'] = _to_bool(params.pop('stretch'), 'stretch')
    for name in ('max_height', 'min_height'):
        if name in params:
            changes[name] = _to_float(params.pop(name), name)
    grid.normalize(**changes)


def _op_edges(grid: HeightGrid, params: Dict[str, str]) -> None:
    edges = params.pop('edges', None)
    grid.edges(
        direction=_to_bool(params.pop('direction', 'up'), 'direction'),
        distance=_to_float(params.pop('distance', '0'), 'distance'),
        easing=params.pop('easing', None),
        edges=_to_edges(edges) if edges is not None else None,
    )


def _op_radial_edges(grid: HeightGrid, params: Dict[str, str]) -> None:
    grid.radial_edges(
        direction=_to_bool(params.pop('direction', 'up'), 'direction'),
        distance=_to_float(params.pop('distance', '0'), 'distance'),
        easing=params.pop('easing', None),
    )


def _op_smooth(grid: HeightGrid, params: Dict[str, str]) -> None:
    grid.smooth(weight=_to_float(params.pop('weight', '0'), 'weight'))


def _op_median(grid: HeightGrid, params: Dict[str, str]) -> None:
    grid.smooth_median()


def _op_conservative(grid: HeightGrid, params: Dict[str, str]) -> None:
    multiplier = params.pop('multiplier', None)
    grid.smooth_conservative(
        multiplier=_to_float(multiplier, 'multiplier') if multiplier is not None else None
    )


def _op_step(grid: HeightGrid, params: Dict[str, str]) -> None:
    levels = params.pop('levels', None)
    grid.step(
        levels=_to_int(levels, 'levels') if levels is not None else None,
        merge_remainder=_to_bool(params.pop('merge_remainder', 'false'), 'merge_remainder'),
    )


def _op_turbulence(grid: HeightGrid, params: Dict[str, str]) -> None:
    grid.turbulence()


OPERATIONS: Dict[str, Tuple[Callable[[HeightGrid, Dict[str, str]], None], str]] = {
    'normalize': (_op_normalize, "Rescale into the elevation bounds [easing, stretch, max_height, min_height]"),
    'edges': (_op_edges, "Shape the rectangular edges [direction, distance, easing, edges]"),
    'radial-edges': (_op_radial_edges, "Shape edges by distance from center [direction, distance, easing]"),
    'smooth': (_op_smooth, "Neighborhood mean [weight]"),
    'median': (_op_median, "Neighborhood median"),
    'conservative': (_op_conservative, "Clamp to diagonal neighbors' range [multiplier]"),
    'step': (_op_step, "Quantize into flat steps [levels, merge_remainder]"),
    'turbulence': (_op_turbulence, "Fold around the range midpoint"),
}


def parse_operation(text: str) -> Tuple[str, Dict[str, str]]:
    """
    Parse an operation string such as ``edges:direction=down,distance=50``.

    Raises:
        ValueError: On unknown operations or malformed parameters
    """
    name, _, raw_params = text.partition(':')
    name = name.strip().lower()
    if name not in OPERATIONS:
        raise ValueError(
            f"Unknown operation '{name}'. Available: {', '.join(OPERATIONS)}"
        )

    params = {}
    for item in filter(None, (p.strip() for p in raw_params.split(','))):
        key, sep, value = item.partition('=')
        if not sep or not key.strip():
            raise ValueError(f"Parameter '{item}' of '{name}' must look like key=value")
        params[key.strip().replace('-', '_')] = value.strip()

    return name, params


def run_operation(grid: HeightGrid, name: str, params: Dict[str, str]) -> None:
    """Apply one parsed operation to the grid."""
    func, _ = OPERATIONS[name]
    remaining = dict(params)
    func(grid, remaining)
    if remaining:
        raise ValueError(
            f"Unknown parameter(s) for '{name}': {', '.join(sorted(remaining))}"
        )


@click.group()
@click.version_option(version="0.1.0")
def main():
    """Terrain Filters

    Post-process heightmap grids: normalize, shape edges, smooth,
    step and fold elevations.
    """
    pass


@main.command()
@click.argument('input_file', type=click.Path(exists=True))
def info(input_file: str):
    """Display information about a heightmap file."""
    click.echo(f"Loading: {input_file}")

    try:
        grid = HeightGrid.from_array(load_heightmap(input_file))
    except Exception as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(1)

    stats = grid.statistics()

    click.echo("\n" + "=" * 50)
    click.echo("HEIGHTMAP INFO")
    click.echo("=" * 50)
    click.echo(f"File:           {input_file}")
    click.echo(f"Grid:           {stats['columns']} x {stats['rows']} (columns x rows)")
    click.echo(f"Cells:          {stats['cells']:,}")
    click.echo(f"")
    click.echo(f"Elevation:")
    click.echo(f"  Min:          {stats['min_elevation']:.3f}")
    click.echo(f"  Max:          {stats['max_elevation']:.3f}")
    click.echo(f"  Mean:         {stats['mean_elevation']:.3f}")
    click.echo(f"  Std Dev:      {stats['std_elevation']:.3f}")
    click.echo(f"  Range:        {stats['elevation_range']:.3f}")
    click.echo(f"  Distinct:     {stats['distinct_elevations']:,}")
    click.echo("=" * 50)


@main.command()
@click.argument('input_file', type=click.Path(exists=True))
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output heightmap (.npy, .csv or .txt)')
@click.option('--op', 'operations', multiple=True, required=True,
              help='Operation as NAME[:key=value,...]; repeat to chain')
@click.option('--config', '-c', type=click.Path(exists=True),
              help='JSON file with terrain options')
@click.option('--width', type=float, help='Physical width of the terrain')
@click.option('--height', type=float, help='Physical height of the terrain')
@click.option('--max-height', type=float, help='Upper elevation bound')
@click.option('--min-height', type=float, help='Lower elevation bound')
@click.option('--easing', type=click.Choice(sorted(EASINGS)), help='Normalization easing')
@click.option('--stretch/--no-stretch', default=None,
              help='Force the full elevation range when normalizing')
@click.option('--stats', type=click.Path(), help='Save output statistics to JSON')
@click.option('--report', type=click.Path(), help='Save before/after figure (PNG/PDF)')
def apply(
    input_file: str,
    output: str,
    operations: Tuple[str, ...],
    config: Optional[str],
    width: Optional[float],
    height: Optional[float],
    max_height: Optional[float],
    min_height: Optional[float],
    easing: Optional[str],
    stretch: Optional[bool],
    stats: Optional[str],
    report: Optional[str],
):
    """Apply a chain of filters to a heightmap.

    Operations run in the order given.

    Examples:

        # Island: smooth, then pull the edges down
        terrain-filters apply in.npy -o out.npy --op smooth \\
            --op edges:direction=down,distance=200

        # Terraces
        terrain-filters apply in.csv -o out.csv --op step:levels=6
    """
    try:
        parsed: List[Tuple[str, Dict[str, str]]] = [parse_operation(o) for o in operations]
    except ValueError as e:
        click.echo(f"Error parsing operations: {e}", err=True)
        sys.exit(1)

    click.echo(f"Loading heightmap: {input_file}")
    try:
        elevations = load_heightmap(input_file)
        base = load_options(config) if config else TerrainOptions()
        overrides = {
            name: value for name, value in (
                ('width', width),
                ('height', height),
                ('max_height', max_height),
                ('min_height', min_height),
                ('easing', easing),
                ('stretch', stretch),
            ) if value is not None
        }
        options = base.resolved(
            width_segments=elevations.shape[1] - 1,
            height_segments=elevations.shape[0] - 1,
            **overrides,
        )
        grid = HeightGrid(elevations=elevations, options=options)
        click.echo(f"  Grid size: {grid.columns} x {grid.rows}")
    except (ValidationError, ValueError, OSError) as e:
        click.echo(f"Error loading heightmap: {e}", err=True)
        sys.exit(1)

    before = grid.copy() if report else None

    for name, params in parsed:
        click.echo(f"Applying {name}...")
        try:
            run_operation(grid, name, params)
        except (ValidationError, ValueError) as e:
            click.echo(f"Error in {name}: {e}", err=True)
            sys.exit(1)

    try:
        save_heightmap(grid.elevations, output)
        click.echo(f"Saved to: {output}")
    except (ValidationError, ValueError, OSError) as e:
        click.echo(f"Error saving output: {e}", err=True)
        sys.exit(1)

    if stats:
        try:
            export_statistics_json(
                grid.statistics(),
                stats,
                metadata={"operations": list(operations), "options": grid.options.to_dict()},
            )
            click.echo(f"Statistics saved to: {stats}")
        except (ValidationError, OSError) as e:
            click.echo(f"Error saving statistics: {e}", err=True)
            sys.exit(1)

    if report:
        try:
            from .utils.visualization import create_comparison_figure, save_figure

            fig = create_comparison_figure(before, grid)
            save_figure(fig, report)
            click.echo(f"Report saved to: {report}")
        except ImportError:
            click.echo("Warning: matplotlib required for reports", err=True)


@main.command('list-ops')
def list_ops():
    """List available operations and easing curves."""
    click.echo("Operations:")
    for name, (_, description) in OPERATIONS.items():
        click.echo(f"  {name:<14} {description}")
    click.echo("")
    click.echo("Easings:")
    for name in sorted(EASINGS):
        click.echo(f"  {name}")


if __name__ == '__main__':
    main()
