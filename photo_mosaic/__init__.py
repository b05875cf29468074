"""
Photo Mosaic Generator
======================

Rebuild a target image as a grid of tiles, each replaced by the
reference photo whose average colour is perceptually closest.

- Colour matching in a Lab-style space with a configurable white point
- Tile grid whose last row and column absorb the remainder pixels
- Optional thread pool for palette building and tile rendering
"""

__version__ = "1.0.0"

from photo_mosaic.assembler import MosaicAssembler, create_mosaic
from photo_mosaic.color_utils import (
    Color,
    PerceptualColor,
    color_distance,
    rgb_to_lab,
    to_perceptual,
)
from photo_mosaic.config import MosaicConfig
from photo_mosaic.errors import (
    EmptyPaletteError,
    GridSizeError,
    ImageLoadError,
    MosaicError,
    NoMatchError,
    RegionBoundsError,
    UsageError,
)
from photo_mosaic.grid import TileRegion, region_average, tile_region, tile_regions
from photo_mosaic.palette import ReferencePalette, build_palette

__all__ = [
    "Color",
    "EmptyPaletteError",
    "GridSizeError",
    "ImageLoadError",
    "MosaicAssembler",
    "MosaicConfig",
    "MosaicError",
    "NoMatchError",
    "PerceptualColor",
    "ReferencePalette",
    "RegionBoundsError",
    "TileRegion",
    "UsageError",
    "build_palette",
    "color_distance",
    "create_mosaic",
    "region_average",
    "rgb_to_lab",
    "tile_region",
    "tile_regions",
    "to_perceptual",
]
