"""Exception hierarchy. Everything user-facing derives from MosaicError."""

from __future__ import annotations


class MosaicError(Exception):
    """Base class for errors that abort a mosaic run."""


class UsageError(MosaicError):
    """The command line arguments do not describe a runnable job."""


class ImageLoadError(MosaicError):
    """An image file could not be opened or decoded."""

    def __init__(self, path: object, reason: str = "") -> None:
        self.path = path
        msg = f"Cannot load image {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class NoMatchError(MosaicError):
    """No reference image is available to match a tile against."""


class EmptyPaletteError(NoMatchError):
    """The reference palette holds no entries."""


class GridSizeError(MosaicError):
    """The target image is smaller than the tile grid."""


class RegionBoundsError(AssertionError):
    """A tile region fell outside the image; a grid-sizing bug."""
