"""graphpaper CLI: render chart descriptions to SVG."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from .config import (
    DEFAULT_HEIGHT,
    DEFAULT_TIMEOUT,
    DEFAULT_WIDTH,
    RenderSettings,
    load_chart_file,
    parse_attr_overrides,
    setup_logging,
)
from .core.animation import VirtualTimer
from .core.attributes import AttributeStore, Computed
from .core.chart import Chart, create_chart
from .core.errors import GraphError
from .core.events import HostElement
from .core.transport import HttpTransport
from .surface.scene import SceneSurface

console = Console()

BANNER = r"""
                          _
   __ _ _ __ __ _ _ __ | |__  _ __   __ _ _ __   ___ _ __
  / _` | '__/ _` | '_ \| '_ \| '_ \ / _` | '_ \ / _ \ '__|
 | (_| | | | (_| | |_) | | | | |_) | (_| | |_) |  __/ |
  \__, |_|  \__,_| .__/|_| |_| .__/ \__,_| .__/ \___|_|
  |___/          |_|         |_|         |_|
  Declarative charts → SVG  v0.1
"""

# Points listed by `inspect` before the tree is truncated
_INSPECT_LIMIT = 25


def _build_chart(settings: RenderSettings) -> tuple[Chart, SceneSurface, VirtualTimer]:
    timer = VirtualTimer()
    surface = SceneSurface(settings.width, settings.height, clock=timer.now)
    element = HostElement(client_width=settings.width, client_height=settings.height)
    chart = create_chart(
        element,
        settings.width,
        settings.height,
        surface=surface,
        timer=timer,
        transport=HttpTransport(timeout=settings.timeout),
    )
    return chart, surface, timer


def _load_description(spec_file: str, attr_pairs: tuple[str, ...]) -> dict[str, Any]:
    try:
        raw = load_chart_file(spec_file)
        overrides = parse_attr_overrides(attr_pairs)
    except (OSError, ValueError) as exc:
        console.print(f"[bold red]❌ Could not read {spec_file}:[/] {exc}")
        raise SystemExit(1)
    if overrides:
        raw.setdefault("attrs", {}).update(overrides)
    return raw


def _draw(chart: Chart, raw: dict[str, Any]) -> None:
    try:
        asyncio.run(chart.load(raw))
    except GraphError as exc:
        console.print(f"[bold red]❌ {type(exc).__name__}:[/] {exc}")
        raise SystemExit(1)


def _size_options(func):
    func = click.option(
        "--timeout", type=float, envvar="GRAPHPAPER_TIMEOUT", default=DEFAULT_TIMEOUT,
        show_default=True, help="Timeout in seconds for remote data.",
    )(func)
    func = click.option(
        "--height", type=click.IntRange(min=1), envvar="GRAPHPAPER_HEIGHT", default=DEFAULT_HEIGHT,
        show_default=True, help="Canvas height in pixels.",
    )(func)
    func = click.option(
        "--width", type=click.IntRange(min=1), envvar="GRAPHPAPER_WIDTH", default=DEFAULT_WIDTH,
        show_default=True, help="Canvas width in pixels.",
    )(func)
    return func


@click.group()
@click.version_option(version="0.1.0", prog_name="graphpaper")
def main():
    """graphpaper: draw bar, line, pie and scatter charts from declarative files."""
    pass


@main.command()
@click.argument("spec_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-o", "--output",
    "output_path",
    type=click.Path(dir_okay=False),
    default="chart.svg",
    help="Where to write the SVG (default: chart.svg).",
)
@_size_options
@click.option(
    "--attr",
    "attr_pairs",
    multiple=True,
    metavar="NAME=VALUE",
    help="Override a chart attribute; repeatable (e.g. --attr barColor=blue).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def render(
    spec_file: str,
    output_path: str,
    width: int,
    height: int,
    timeout: float,
    attr_pairs: tuple[str, ...],
    verbose: bool,
):
    """Render SPEC_FILE (JSON, YAML or TOML) to an SVG file.

    Remote data sources are fetched before drawing; entry animations are
    written as SMIL animations.
    """
    setup_logging(verbose)
    console.print(BANNER)

    raw = _load_description(spec_file, attr_pairs)
    chart, surface, timer = _build_chart(RenderSettings(width=width, height=height, timeout=timeout))
    _draw(chart, raw)
    timer.flush()

    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(surface.to_svg(), encoding="utf-8")

    shapes = len(chart.layout.shapes) if chart.layout else 0
    console.print(f"[green]✓[/] Wrote [bold]{out}[/bold] ({chart.spec.type.value}, {shapes} shapes)")


@main.command()
def attributes():
    """List the default chart attributes."""
    from rich.table import Table as RichTable

    table = RichTable(title="Default Attributes", show_lines=False)
    table.add_column("Name", style="bold cyan")
    table.add_column("Default")
    table.add_column("Kind", style="dim")

    store = AttributeStore()
    snapshot = store.snapshot()
    for name in store.names():
        value = snapshot[name]
        if isinstance(store.raw(name), Computed):
            table.add_row(name, getattr(value, "__name__", repr(value)), "computed")
        else:
            table.add_row(name, repr(value), "constant")

    console.print(table)


@main.command()
@click.argument("spec_file", type=click.Path(exists=True, dir_okay=False))
@_size_options
@click.option("--attr", "attr_pairs", multiple=True, metavar="NAME=VALUE")
def inspect(spec_file: str, width: int, height: int, timeout: float, attr_pairs: tuple[str, ...]):
    """Lay out SPEC_FILE and display the computed geometry."""
    from rich.tree import Tree

    raw = _load_description(spec_file, attr_pairs)
    chart, _, _ = _build_chart(RenderSettings(width=width, height=height, timeout=timeout))
    _draw(chart, raw)

    layout = chart.layout
    tree = Tree(f"[bold]{chart.spec.type.value}[/bold] {chart.title!r} ({width}×{height})")
    if chart.source is not None:
        tree.add(f"[dim]Source: {chart.source.method} {chart.source.url}[/dim]")

    bounds = tree.add("[bold blue]Bounds[/]")
    for key, value in layout.bounds.items():
        bounds.add(f"{key} = {value:.3f}")

    points = tree.add(f"[bold blue]Points[/] ({len(layout.points)})")
    for index, point in enumerate(layout.points[:_INSPECT_LIMIT]):
        fields = {k: v for k, v in point.items() if k not in ("point", "bar", "segment")}
        label = ", ".join(
            f"{k}={v:.2f}" if isinstance(v, float) else f"{k}={v}" for k, v in fields.items()
        )
        if layout.sweeps:
            label += f", sweep={layout.sweeps[index]:.2f}°"
        points.add(label)
    if len(layout.points) > _INSPECT_LIMIT:
        points.add(f"[dim]… {len(layout.points) - _INSPECT_LIMIT} more[/dim]")

    console.print(tree)


if __name__ == "__main__":
    main()
