"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from photo_mosaic.assembler import create_mosaic
from photo_mosaic.config import MosaicConfig
from photo_mosaic.errors import MosaicError, UsageError

app = typer.Typer(
    name="photo-mosaic",
    help="Rebuild an image as a grid of reference photos.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
        force=True,
    )


# Defaults come from MosaicConfig - single source of truth
_DEFAULTS = MosaicConfig()


@app.command()
def main(
    target: Path = typer.Argument(..., help="Image to rebuild as a mosaic"),
    reference_dir: Path = typer.Argument(
        ..., help="Folder of tile images (searched recursively)",
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o",
        help=f"Output JPEG (default: ./{_DEFAULTS.output_filename})",
    ),
    grid_width: int = typer.Option(
        _DEFAULTS.grid_width, "--grid-width", "-W", help="Tiles across",
    ),
    grid_height: int = typer.Option(
        _DEFAULTS.grid_height, "--grid-height", "-H", help="Tiles down",
    ),
    color_space: str = typer.Option(
        _DEFAULTS.color_space, "--color-space",
        help="'lab', 'lab-d65' or 'rgb'",
    ),
    illuminant: tuple[float, float, float] = typer.Option(
        _DEFAULTS.illuminant, "--illuminant",
        help="Reference white X Y Z for the 'lab' metric",
    ),
    quality: int = typer.Option(
        _DEFAULTS.jpeg_quality, "--quality", "-q", help="JPEG quality (1-95)",
    ),
    workers: int = typer.Option(
        _DEFAULTS.workers, "--workers", "-j", help="Worker threads",
    ),
    skip_unreadable: bool = typer.Option(
        _DEFAULTS.skip_unreadable, "--skip-unreadable/--strict",
        help="Skip reference files that cannot be decoded",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Build a photomosaic of TARGET from the images in REFERENCE_DIR."""
    _setup_logging(verbose)

    try:
        cfg = MosaicConfig(
            grid_width=grid_width,
            grid_height=grid_height,
            illuminant=tuple(illuminant),
            color_space=color_space,
            jpeg_quality=quality,
            workers=workers,
            skip_unreadable=skip_unreadable,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    console.print(Panel.fit(
        f"[bold]PHOTO MOSAIC[/bold]\n"
        f"Target: {target}  |  References: {reference_dir}\n"
        f"Grid: {cfg.grid_width}x{cfg.grid_height}  |  "
        f"Colour space: {cfg.color_space}  |  Workers: {cfg.workers}",
        border_style="cyan",
    ))

    t0 = time.perf_counter()
    try:
        out = create_mosaic(target, reference_dir, cfg, output_path=output)
    except UsageError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(2) from exc
    except MosaicError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc

    elapsed = time.perf_counter() - t0
    console.print(
        f"[green]✓[/green] Saved to {out}  [dim]time={elapsed:.1f}s[/dim]"
    )


if __name__ == "__main__":
    app()
