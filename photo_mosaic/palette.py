"""Reference palette: average colours of candidate tile images, and matching."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import numpy as np

from photo_mosaic.color_utils import (
    DEFAULT_ILLUMINANT,
    Color,
    euclidean,
    to_working_space,
)
from photo_mosaic.errors import EmptyPaletteError, ImageLoadError
from photo_mosaic.grid import region_average
from photo_mosaic.image_io import load_image

logger = logging.getLogger(__name__)

ImageLoader = Callable[[str | Path], np.ndarray]


class ReferencePalette:
    """Insertion-ordered, read-only sequence of (identifier, average colour).

    Entry order decides ties in :meth:`match`: among equally distant
    candidates the earliest one wins.
    """

    def __init__(
        self,
        entries: Iterable[tuple[str, Color]],
        color_space: str = "lab",
        illuminant: tuple[float, float, float] = DEFAULT_ILLUMINANT,
    ) -> None:
        ids: list[str] = []
        colors: list[Color] = []
        for identifier, color in entries:
            ids.append(str(identifier))
            colors.append(Color(*color))
        if len(set(ids)) != len(ids):
            msg = "Duplicate identifiers in reference palette"
            raise ValueError(msg)

        self.color_space = color_space
        self.illuminant = illuminant
        self._ids = tuple(ids)
        self._colors = tuple(colors)
        if colors:
            self._points = to_working_space(
                np.array(colors, dtype=np.uint8), color_space, illuminant,
            )
        else:
            self._points = np.empty((0, 3), dtype=np.float64)
        self._points.flags.writeable = False

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[tuple[str, Color]]:
        return iter(zip(self._ids, self._colors, strict=True))

    def __repr__(self) -> str:
        return f"ReferencePalette({len(self)} entries, color_space={self.color_space!r})"

    @property
    def identifiers(self) -> tuple[str, ...]:
        return self._ids

    def color_of(self, identifier: str) -> Color:
        return self._colors[self._ids.index(identifier)]

    def match(self, target: Color) -> str:
        """Identifier whose colour is nearest *target*.

        Raises:
            EmptyPaletteError: if the palette has no entries.
        """
        if not self._ids:
            msg = "Reference palette is empty; nothing to match against"
            raise EmptyPaletteError(msg)
        point = to_working_space(
            np.array([target], dtype=np.uint8), self.color_space, self.illuminant,
        )[0]
        # argmin returns the first index among equal minima
        best = int(np.argmin(euclidean(self._points, point)))
        return self._ids[best]


def build_palette(
    paths: Sequence[str | Path],
    loader: ImageLoader = load_image,
    color_space: str = "lab",
    illuminant: tuple[float, float, float] = DEFAULT_ILLUMINANT,
    workers: int = 1,
    skip_unreadable: bool = False,
) -> ReferencePalette:
    """Average every reference image and collect the results in input order.

    Args:
        paths:           Reference image locations; order is preserved.
        loader:          Returns an (H, W, 3) uint8 array for a path.
        color_space:     Metric the palette will match with.
        illuminant:      White point for the ``"lab"`` metric.
        workers:         Thread count; results are merged in input order.
        skip_unreadable: Log and drop images the loader rejects.

    Raises:
        ImageLoadError:    an image failed to load and *skip_unreadable* is off.
        EmptyPaletteError: no image could be averaged.
    """
    logger.info("Averaging %d reference images ...", len(paths))
    t0 = time.perf_counter()

    def _average(path: str | Path) -> tuple[str, Color] | None:
        try:
            image = loader(path)
        except ImageLoadError as exc:
            if not skip_unreadable:
                raise
            logger.warning("Skipping %s (%s)", path, exc)
            return None
        color = region_average(image)
        logger.debug("Average colour %s for %s", tuple(color), path)
        return str(path), color

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(_average, paths))
    else:
        results = [_average(p) for p in paths]

    entries = [r for r in results if r is not None]
    if not entries:
        msg = "No loadable reference images found"
        raise EmptyPaletteError(msg)

    logger.info(
        "Palette ready: %d entries  (%.1f s)", len(entries), time.perf_counter() - t0,
    )
    return ReferencePalette(entries, color_space=color_space, illuminant=illuminant)
