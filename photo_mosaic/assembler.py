"""Tile the target image and render each tile from its best reference."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import numpy as np

from photo_mosaic.config import MosaicConfig
from photo_mosaic.grid import TileRegion, region_average, tile_regions
from photo_mosaic.image_io import (
    collect_reference_paths,
    load_image,
    resize_nearest,
    save_mosaic,
)
from photo_mosaic.palette import ImageLoader, ReferencePalette, build_palette

logger = logging.getLogger(__name__)


class MosaicAssembler:
    """Builds a photomosaic canvas for a target image.

    The palette must be complete before assembly starts; it is only read
    from here on. Every tile writes to its own disjoint slice of the
    canvas, so rendering needs no locking.
    """

    def __init__(
        self,
        palette: ReferencePalette,
        config: MosaicConfig | None = None,
        loader: ImageLoader = load_image,
    ) -> None:
        cfg = config or MosaicConfig()
        if palette.color_space != cfg.color_space:
            msg = (
                f"Palette was built for colour space {palette.color_space!r} "
                f"but the config asks for {cfg.color_space!r}"
            )
            raise ValueError(msg)
        if cfg.color_space == "lab" and tuple(palette.illuminant) != tuple(cfg.illuminant):
            msg = (
                f"Palette illuminant {tuple(palette.illuminant)} differs from "
                f"config illuminant {tuple(cfg.illuminant)}"
            )
            raise ValueError(msg)
        self.palette = palette
        self.config = cfg
        self.loader = loader

    def plan(self, target: np.ndarray) -> list[tuple[TileRegion, str]]:
        """Pair every tile region of *target* with its matched identifier."""
        h, w = target.shape[:2]
        cfg = self.config
        regions = tile_regions(w, h, cfg.grid_width, cfg.grid_height)

        plan = []
        for region in regions:
            color = region_average(target, region)
            identifier = self.palette.match(color)
            logger.debug(
                "Tile at (%d, %d) colour %s -> %s",
                region.x, region.y, tuple(color), identifier,
            )
            plan.append((region, identifier))
        return plan

    def assemble(self, target: np.ndarray) -> np.ndarray:
        """Return an (H, W, 3) uint8 mosaic the size of *target*."""
        cfg = self.config
        logger.info(
            "Building mosaic %d tiles wide and %d tiles high",
            cfg.grid_width, cfg.grid_height,
        )
        t0 = time.perf_counter()
        plan = self.plan(target)
        logger.info("Tiles matched  (%.1f s)", time.perf_counter() - t0)

        # Group by reference so each image is decoded once
        groups: dict[str, list[TileRegion]] = {}
        for region, identifier in plan:
            groups.setdefault(identifier, []).append(region)

        canvas = np.zeros((*target.shape[:2], 3), dtype=np.uint8)

        def _render(item: tuple[str, list[TileRegion]]) -> None:
            identifier, regions = item
            reference = self.loader(identifier)
            for x, y, w, h in regions:
                canvas[y:y + h, x:x + w] = resize_nearest(reference, w, h)

        t0 = time.perf_counter()
        if cfg.workers > 1:
            with ThreadPoolExecutor(max_workers=cfg.workers) as pool:
                list(pool.map(_render, groups.items()))
        else:
            for item in groups.items():
                _render(item)
        logger.info(
            "Rendered %d tiles from %d distinct references  (%.1f s)",
            len(plan), len(groups), time.perf_counter() - t0,
        )
        return canvas


def create_mosaic(
    target_path: str | Path,
    reference_dir: str | Path,
    config: MosaicConfig | None = None,
    output_path: str | Path | None = None,
) -> Path:
    """Run the whole pipeline and write the mosaic as a JPEG.

    *output_path* defaults to ``config.output_filename`` in the current
    working directory. Nothing is written if any step fails.
    """
    cfg = config or MosaicConfig()
    target = load_image(target_path)
    logger.info("Target: %dx%d", target.shape[1], target.shape[0])

    paths = collect_reference_paths(reference_dir)
    logger.info("Found %d files under %s", len(paths), reference_dir)
    palette = build_palette(
        paths,
        color_space=cfg.color_space,
        illuminant=cfg.illuminant,
        workers=cfg.workers,
        skip_unreadable=cfg.skip_unreadable,
    )

    mosaic = MosaicAssembler(palette, cfg).assemble(target)

    out = Path(output_path) if output_path else Path.cwd() / cfg.output_filename
    save_mosaic(mosaic, out, quality=cfg.jpeg_quality)
    logger.info("Mosaic saved: %s", out)
    return out
