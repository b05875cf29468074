"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass

COLOR_SPACES = ("lab", "lab-d65", "rgb")


@dataclass(frozen=True)
class MosaicConfig:
    """All tuneable parameters for a mosaic run.

    Attributes:
        grid_width:      Number of tiles across the target image.
        grid_height:     Number of tiles down the target image.
        illuminant:      Reference white (X, Y, Z) used by the ``"lab"`` metric.
                         The default is an equal-energy placeholder, not D65.
        color_space:     Distance metric - "lab", "lab-d65" (standard CIELAB)
                         or "rgb".
        output_filename: Name of the JPEG written to the working directory.
        jpeg_quality:    Pillow JPEG quality (1-95).
        workers:         Threads used for palette building and tile rendering.
        skip_unreadable: Skip reference files Pillow cannot decode instead of
                         aborting the run.
    """

    # Grid
    grid_width: int = 40
    grid_height: int = 40

    # Colour matching
    illuminant: tuple[float, float, float] = (10.0, 10.0, 10.0)
    color_space: str = "lab"

    # Output
    output_filename: str = "result.jpg"
    jpeg_quality: int = 75

    # Execution
    workers: int = 1
    skip_unreadable: bool = False

    def __post_init__(self) -> None:
        if self.grid_width < 1 or self.grid_height < 1:
            msg = f"Grid must be at least 1x1, got {self.grid_width}x{self.grid_height}"
            raise ValueError(msg)
        if len(self.illuminant) != 3 or min(self.illuminant) <= 0:
            msg = f"Illuminant must be three positive values, got {self.illuminant}"
            raise ValueError(msg)
        if self.color_space not in COLOR_SPACES:
            msg = f"Unknown colour space {self.color_space!r}, expected one of {COLOR_SPACES}"
            raise ValueError(msg)
        if not 1 <= self.jpeg_quality <= 95:
            msg = f"JPEG quality must be in 1..95, got {self.jpeg_quality}"
            raise ValueError(msg)
        if self.workers < 1:
            msg = f"Workers must be >= 1, got {self.workers}"
            raise ValueError(msg)
