"""Command line interface of pibound."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pibound import reference
from pibound.config import ConfigError, PiboundConfig, get_config
from pibound.interval import FloatInterval
from pibound.quad import pi_from_quadrant
from pibound.rounding import ROUND_CEILING, ROUND_FLOOR, UnsupportedRoundingError
from pibound.series import Order, series_enclosure
from pibound.study import convergence_order, quadrant_widths, series_widths

app = typer.Typer(no_args_is_help=True)

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Rigorous enclosures of pi."""
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


@contextmanager
def _failures() -> Iterator[None]:
    try:
        yield
    except (ConfigError, UnsupportedRoundingError, ValueError) as e:
        logger.error(str(e))
        raise typer.Exit(code=1) from e


def _config() -> PiboundConfig:
    config = get_config()

    if config.project_root is not None:
        logger.debug(f"Using configuration from {config.project_root}")

    return config


def _enclosure_table(title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan", box=None)
    table.add_column("n", justify="right")
    table.add_column("lower")
    table.add_column("upper")
    table.add_column("width", justify="right")
    table.add_column("π inside")
    return table


def _add_enclosure(table: Table, n: int, x: FloatInterval, precision: int) -> None:
    inside = "[green]yes[/green]" if reference.pi(precision) in x else "[red]no[/red]"
    lower = x.converter.tostr(x.inf, ROUND_FLOOR)
    upper = x.converter.tostr(x.sup, ROUND_CEILING)
    table.add_row(str(n), lower, upper, f"{x.diam():.3e}", inside)


@app.command()
def series(
    terms: Annotated[
        int | None,
        typer.Option("-n", "--terms", help="Number of terms of the Basel series"),
    ] = None,
    order: Annotated[
        Order | None,
        typer.Option("--order", help="Order of summation"),
    ] = None,
) -> None:
    """Enclose pi by directed-rounding summation of the Basel series."""
    with _failures():
        config = _config()
        n = config.terms if terms is None else terms
        order = config.order if order is None else order

        logger.info(f"Summing {n} terms in {order} order")
        x = series_enclosure(n, order)

        table = _enclosure_table(f"Basel series ({order})")
        _add_enclosure(table, n, x, config.precision)
        out_console.print(table)


@app.command()
def quadrant(
    cells: Annotated[
        int | None,
        typer.Option("-n", "--cells", help="Number of cells of the Riemann sum"),
    ] = None,
    radius: Annotated[
        int | None,
        typer.Option("--radius", help="Radius of the quadrant"),
    ] = None,
) -> None:
    """Enclose pi by an interval Riemann sum over a circle quadrant."""
    with _failures():
        config = _config()
        n = config.cells if cells is None else cells
        r = config.radius if radius is None else radius

        logger.info(f"Integrating over {n} cells, radius {r}")
        x = pi_from_quadrant(n, r)

        table = _enclosure_table(f"Quadrant of radius {r}")
        _add_enclosure(table, n, x, config.precision)
        out_console.print(table)


@app.command()
def study(
    sizes: Annotated[
        list[int] | None,
        typer.Option("-n", "--size", help="Number of terms or cells (repeatable)"),
    ] = None,
    order: Annotated[
        Order | None,
        typer.Option("--order", help="Order of summation of the series"),
    ] = None,
) -> None:
    """Tabulate how the enclosure widths shrink with the number of terms or cells."""
    with _failures():
        config = _config()
        ns = list(config.sizes) if not sizes else sizes
        order = config.order if order is None else order

        if len(ns) < 2:
            raise ValueError("at least two sizes are required")

        logger.info(f"Tabulating widths for n in {ns}")
        series_w = series_widths(ns, order)
        quadrant_w = quadrant_widths(ns, config.radius)

        table = Table(title="Widths", header_style="bold cyan", box=None)
        table.add_column("n", justify="right")
        table.add_column(f"series ({order})", justify="right")
        table.add_column("quadrant", justify="right")

        for n, sw, qw in zip(ns, series_w, quadrant_w):
            table.add_row(str(n), f"{sw:.3e}", f"{qw:.3e}")

        out_console.print(table)
        out_console.print(
            f"convergence order: series {convergence_order(ns, series_w):.2f}, "
            f"quadrant {convergence_order(ns, quadrant_w):.2f}"
        )


def main() -> None:
    app()
