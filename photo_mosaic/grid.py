"""Tile grid geometry and per-region colour averaging."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from photo_mosaic.color_utils import Color
from photo_mosaic.errors import GridSizeError, RegionBoundsError


class TileRegion(NamedTuple):
    """Pixel rectangle covered by one tile."""

    x: int
    y: int
    width: int
    height: int


def tile_region(
    column: int,
    row: int,
    image_width: int,
    image_height: int,
    grid_width: int,
    grid_height: int,
) -> TileRegion:
    """Region of tile (*column*, *row*).

    Tiles are ``image // grid`` pixels on a side; the last column and
    last row additionally absorb the ``image % grid`` remainder, so the
    grid covers every pixel exactly once.
    """
    if not (0 <= column < grid_width and 0 <= row < grid_height):
        msg = f"Tile ({column}, {row}) outside a {grid_width}x{grid_height} grid"
        raise IndexError(msg)
    tile_w = image_width // grid_width
    tile_h = image_height // grid_height
    width = tile_w + (image_width % grid_width if column == grid_width - 1 else 0)
    height = tile_h + (image_height % grid_height if row == grid_height - 1 else 0)
    return TileRegion(column * tile_w, row * tile_h, width, height)


def tile_regions(
    image_width: int,
    image_height: int,
    grid_width: int,
    grid_height: int,
) -> list[TileRegion]:
    """All tile regions in row-major order.

    Raises:
        GridSizeError: if the image has fewer pixels than tiles along
            either axis (tiles would be empty).
    """
    if image_width < grid_width or image_height < grid_height:
        msg = (
            f"Image {image_width}x{image_height} is smaller than the "
            f"{grid_width}x{grid_height} tile grid"
        )
        raise GridSizeError(msg)
    return [
        tile_region(col, row, image_width, image_height, grid_width, grid_height)
        for row in range(grid_height)
        for col in range(grid_width)
    ]


def region_average(image: np.ndarray, region: TileRegion | None = None) -> Color:
    """Mean colour of *region* of an (H, W, 3) uint8 image.

    Channel sums use a 64-bit accumulator and are floor-divided by the
    pixel count. ``region=None`` averages the whole image.
    """
    h, w = image.shape[:2]
    if region is None:
        region = TileRegion(0, 0, w, h)
    x, y, rw, rh = region
    if rw <= 0 or rh <= 0 or x < 0 or y < 0 or x + rw > w or y + rh > h:
        msg = f"Region {tuple(region)} is empty or outside a {w}x{h} image"
        raise RegionBoundsError(msg)

    pixels = image[y:y + rh, x:x + rw, :3].reshape(-1, 3)
    totals = pixels.sum(axis=0, dtype=np.int64)
    red, green, blue = (int(t) for t in totals // len(pixels))
    return Color(red, green, blue)
