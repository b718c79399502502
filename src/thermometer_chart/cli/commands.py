# src/thermometer_chart/cli/commands.py
"""
CLI commands for the thermometer chart using Click.

Render charts headlessly, inspect the computed layout, open the interactive
viewer, or write a default configuration file.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import click
import yaml
from rich.console import Console
from rich.table import Table

from thermometer_chart import __version__
from thermometer_chart.core.arguments import normalize_property_name
from thermometer_chart.core.config import Config, get_config
from thermometer_chart.core.exceptions import ChartArgumentError, ThermometerChartError
from thermometer_chart.core.layout import compute_layout
from thermometer_chart.core.models import ThermometerLayout, build_properties
from thermometer_chart.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)

console = Console()


def _parse_floats(ctx, param, value: Optional[str]) -> Optional[List[float]]:
    if value is None:
        return None
    try:
        return [float(item) for item in value.split(',') if item.strip()]
    except ValueError:
        raise click.BadParameter(f"Expected comma-separated numbers, got '{value}'")


def _parse_labels(ctx, param, value: Optional[str]) -> Optional[List[str]]:
    if value is None:
        return None
    return [item.strip() for item in value.split(',')]


def chart_options(func):
    """Options describing the chart properties, shared by several commands."""
    options = [
        click.option('--file', '-f', 'props_file', type=click.Path(exists=True, dir_okay=False),
                     help='YAML file with chart properties'),
        click.option('--data', '-d', callback=_parse_floats,
                     help='Area data, comma separated (e.g. 5,4,7)'),
        click.option('--max', 'max_value', type=float,
                     help='Upper limit; the lower limit is 0'),
        click.option('--limits', callback=_parse_floats,
                     help='Lower and upper limit (e.g. 0,20)'),
        click.option('--area-labels', callback=_parse_labels,
                     help='Area labels, comma separated'),
        click.option('--goals', callback=_parse_floats,
                     help='Goal values, comma separated'),
        click.option('--goal-labels', callback=_parse_labels,
                     help='Goal labels, comma separated'),
        click.option('--goal-location', type=click.Choice(['left', 'right'], case_sensitive=False),
                     help='Side of the goal marks'),
        click.option('--title', help='Chart title'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def load_chart_file(props_file: Path) -> Dict[str, Any]:
    """Read chart properties from a YAML mapping of property name -> value."""
    with open(props_file, 'r') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise click.BadParameter(f"{props_file} must contain a mapping of chart properties")
    try:
        return {normalize_property_name(name): value for name, value in data.items()}
    except ChartArgumentError as e:
        raise click.BadParameter(f"{props_file}: {e}")


def collect_properties(props_file=None, data=None, max_value=None, limits=None,
                       area_labels=None, goals=None, goal_labels=None,
                       goal_location=None, title=None) -> Dict[str, Any]:
    """Merge a properties file with command line options (options win)."""
    if max_value is not None and limits is not None:
        raise click.UsageError("Use either --max or --limits, not both.")

    properties: Dict[str, Any] = load_chart_file(Path(props_file)) if props_file else {}

    overrides = {
        'area_data': data,
        'limits': [0.0, max_value] if max_value is not None else limits,
        'area_labels': area_labels,
        'goal_data': goals,
        'goal_labels': goal_labels,
        'goal_location': goal_location,
        'title_text': title,
    }
    properties.update({name: value for name, value in overrides.items() if value is not None})
    return properties


def _fail(ctx, error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {error}")
    if ctx.obj.get('debug'):
        console.print_exception()
    sys.exit(1)


# Main CLI group
@click.group()
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='Path to configuration file')
@click.option('--debug/--no-debug', default=False, help='Enable debug logging')
@click.version_option(version=__version__, prog_name='thermo')
@click.pass_context
def cli(ctx, config_path, debug):
    """
    Thermometer Chart - progress toward quantitative goals.

    Run 'thermo COMMAND --help' for more information on each command.
    """
    ctx.ensure_object(dict)

    try:
        config = Config.from_yaml(Path(config_path)) if config_path else get_config()
    except ThermometerChartError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    setup_logging(
        level='DEBUG' if debug or config.debug else config.logging.level,
        log_dir=config.logging.log_directory,
        rich_console=config.logging.rich_console,
        file_output=config.logging.file_output,
    )

    ctx.obj['config'] = config
    ctx.obj['debug'] = debug

    if debug:
        console.print("[yellow]Debug mode enabled[/yellow]")


@cli.command()
@click.argument('output', type=click.Path(dir_okay=False))
@chart_options
@click.option('--dpi', type=int, default=None, help='Export resolution (default 150)')
@click.pass_context
def render(ctx, output, dpi, **options):
    """
    Render a thermometer chart to OUTPUT (.png, .svg or .pdf).

    Examples:
        thermo render progress.png --data 5,4,7 --max 20 --goals 10,18
        thermo render progress.svg --file fundraiser.yaml
    """
    from thermometer_chart.gui.widgets.charts.thermometer import ThermometerChart

    config = ctx.obj['config']
    properties = collect_properties(**options)

    try:
        chart = ThermometerChart(config=config.chart, **properties)
        export_kwargs = {'dpi': dpi} if dpi else {}
        path = chart.savefig(output, **export_kwargs)
    except ThermometerChartError as e:
        _fail(ctx, e)
        return

    console.print(f"[green]✓[/green] Chart written to: {path}")


@cli.command()
@chart_options
@click.option('--json', 'as_json', is_flag=True, help='Print the layout as JSON')
@click.pass_context
def layout(ctx, as_json, **options):
    """
    Print the shapes computed for a chart without drawing it.

    Example:
        thermo layout --data 5,4,7 --max 20 --goals 10,18 --json
    """
    config = ctx.obj['config']
    properties = collect_properties(**options)

    try:
        result = compute_layout(
            build_properties(**properties),
            stem_width=config.chart.stem_width,
            palette=config.chart.palette,
            bulb_height_factor=config.chart.bulb_height_factor,
        )
    except ThermometerChartError as e:
        _fail(ctx, e)
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _display_layout(result)


def _fmt(values) -> str:
    return ", ".join(f"{value:.4g}" for value in values)


def _display_layout(result: ThermometerLayout) -> None:
    """Display the layout shapes in a table."""
    table = Table(title=result.title or "Thermometer Layout", show_header=True,
                  header_style="bold magenta")
    table.add_column("Shape", style="cyan")
    table.add_column("X")
    table.add_column("Y")
    table.add_column("Detail")

    bulb = result.bulb
    table.add_row("bulb", _fmt((bulb.x, bulb.width)), _fmt((bulb.y, bulb.height)),
                  bulb.face_color or "empty")
    for segment in result.segments:
        table.add_row(f"area {segment.index + 1}", _fmt((segment.left, segment.right)),
                      _fmt((segment.bottom, segment.top)), segment.color)
    for shape in (*result.brackets, *result.goal_ticks, *result.goal_lines, result.stem):
        table.add_row(shape.kind.value, _fmt(shape.xdata), _fmt(shape.ydata), "")
    for anchor in (*result.area_texts, *result.goal_texts):
        table.add_row(anchor.kind.value, _fmt((anchor.x,)), _fmt((anchor.y,)),
                      anchor.text.replace("\n", " | "))

    console.print(table)
    console.print(f"x limits: {_fmt(result.xlim)}   y limits: {_fmt(result.ylim)}")


@cli.command()
@chart_options
@click.option('--appearance', type=click.Choice(['light', 'dark', 'system']), default='system',
              help='Window appearance mode')
@click.pass_context
def show(ctx, appearance, **options):
    """Open an interactive window with the chart."""
    from thermometer_chart.gui.widgets.chart_frame import launch_viewer

    config = ctx.obj['config']
    properties = collect_properties(**options)

    try:
        launch_viewer(properties, config=config.chart, appearance_mode=appearance)
    except ThermometerChartError as e:
        _fail(ctx, e)


@cli.command('config-init')
@click.argument('path', type=click.Path(dir_okay=False), default='config/default.yaml')
@click.option('--force', is_flag=True, help='Overwrite an existing file')
def config_init(path, force):
    """Write the default configuration to PATH."""
    path = Path(path)
    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists; use --force to overwrite[/yellow]")
        sys.exit(1)

    Config().to_yaml(path)
    console.print(f"[green]✓[/green] Configuration written to: {path}")


def main():
    """Console script entry point."""
    cli(obj={})


if __name__ == '__main__':
    main()
