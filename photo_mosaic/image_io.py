"""Image loading, reference discovery, resizing and saving."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from photo_mosaic.errors import ImageLoadError, UsageError


def load_image(path: str | Path) -> np.ndarray:
    """Load any Pillow-decodable image.

    Returns:
        (H, W, 3) uint8 array. Alpha is discarded.

    Raises:
        ImageLoadError: if the file is missing or cannot be decoded.
    """
    try:
        with Image.open(path) as img:
            return np.array(img.convert("RGB"), dtype=np.uint8)
    except (OSError, Image.DecompressionBombError) as exc:
        raise ImageLoadError(path, str(exc)) from exc


def collect_reference_paths(folder: str | Path) -> list[Path]:
    """Every file under *folder*, recursively, regardless of extension.

    Order is deterministic: a directory's files sorted by name, then
    each subdirectory (sorted by name) in turn. Symlinked directories
    are not followed.
    """
    folder = Path(folder)
    if not folder.is_dir():
        msg = f"Reference folder {folder} is not a directory"
        raise UsageError(msg)

    entries = sorted(folder.iterdir())
    files = [p for p in entries if p.is_file()]
    for sub in entries:
        if sub.is_dir() and not sub.is_symlink():
            files.extend(collect_reference_paths(sub))
    return files


def resize_nearest(array: np.ndarray, width: int, height: int) -> np.ndarray:
    """Nearest-neighbour resample an (H, W, 3) array to *width* x *height*."""
    if array.shape[1] == width and array.shape[0] == height:
        return array
    img = Image.fromarray(array.astype(np.uint8))
    return np.array(img.resize((width, height), Image.NEAREST), dtype=np.uint8)


def save_mosaic(array: np.ndarray, path: str | Path, quality: int = 75) -> Path:
    """Write an (H, W, 3) array as a JPEG and return the path."""
    path = Path(path)
    Image.fromarray(array.astype(np.uint8)).save(path, format="JPEG", quality=quality)
    return path
