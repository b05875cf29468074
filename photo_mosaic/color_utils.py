"""Colour types, colour-space conversion and perceptual distance."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np
from skimage.color import rgb2lab

# Equal-energy placeholder white point (not D65)
DEFAULT_ILLUMINANT: tuple[float, float, float] = (10.0, 10.0, 10.0)

# Linear sRGB -> XYZ, one row per output component
RGB_TO_XYZ = (
    (0.4124, 0.3576, 0.1805),
    (0.2126, 0.7152, 0.0722),
    (0.0193, 0.1192, 0.9505),
)


class Color(NamedTuple):
    """An 8-bit device RGB colour."""

    red: int
    green: int
    blue: int


class PerceptualColor(NamedTuple):
    """A Lab-style triple: lightness plus two chroma axes."""

    lightness: float
    a: float
    b: float


def _srgb_to_linear(v: np.ndarray) -> np.ndarray:
    return np.where(v > 0.04045, ((v + 0.055) / 1.055) ** 2.4, v / 12.92)


def _lab_f(t: np.ndarray) -> np.ndarray:
    return np.where(t > 0.008856, np.cbrt(t), 7.787 * t + 16 / 116)


def rgb_to_lab(
    rgb: np.ndarray,
    illuminant: tuple[float, float, float] = DEFAULT_ILLUMINANT,
) -> np.ndarray:
    """Convert flat (N, 3) uint8 RGB → (N, 3) float64 Lab.

    The XYZ step is normalised by *illuminant* rather than a standard
    white point, so the output is only comparable with other colours
    converted against the same triple.
    """
    v = np.asarray(rgb, dtype=np.float64).reshape(-1, 3) / 255.0
    linear = _srgb_to_linear(v) * 100.0
    r, g, b = linear[:, 0], linear[:, 1], linear[:, 2]

    (xr, xg, xb), (yr, yg, yb), (zr, zg, zb) = RGB_TO_XYZ
    x = r * xr + g * xg + b * xb
    y = r * yr + g * yg + b * yb
    z = r * zr + g * zg + b * zb

    ref_x, ref_y, ref_z = illuminant
    fx = _lab_f(x / ref_x)
    fy = _lab_f(y / ref_y)
    fz = _lab_f(z / ref_z)

    return np.stack(
        [116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)], axis=1,
    )


def rgb_to_lab_d65(rgb: np.ndarray) -> np.ndarray:
    """Standard CIELAB (D65 white) via scikit-image, flat (N, 3) → (N, 3)."""
    return rgb2lab(
        np.asarray(rgb, dtype=np.float64).reshape(1, -1, 3) / 255.0,
    ).reshape(-1, 3)


def to_working_space(
    rgb: np.ndarray,
    color_space: str = "lab",
    illuminant: tuple[float, float, float] = DEFAULT_ILLUMINANT,
) -> np.ndarray:
    """Map (N, 3) RGB into the space distances are measured in."""
    if color_space == "lab":
        return rgb_to_lab(rgb, illuminant)
    if color_space == "lab-d65":
        return rgb_to_lab_d65(rgb)
    if color_space == "rgb":
        return np.asarray(rgb, dtype=np.float64).reshape(-1, 3)
    msg = f"Unknown colour space: {color_space!r}"
    raise ValueError(msg)


def to_perceptual(
    color: Color,
    illuminant: tuple[float, float, float] = DEFAULT_ILLUMINANT,
) -> PerceptualColor:
    """Convert a single device colour to its Lab-style triple."""
    lightness, a, b = rgb_to_lab(np.array([color]), illuminant)[0]
    return PerceptualColor(float(lightness), float(a), float(b))


def euclidean(points: np.ndarray, point: np.ndarray) -> np.ndarray:
    """Distance from each row of *points* (N, 3) to *point* (3,)."""
    return np.sqrt(np.sum((points - point) ** 2, axis=-1))


def color_distance(
    a: Color,
    b: Color,
    illuminant: tuple[float, float, float] = DEFAULT_ILLUMINANT,
    color_space: str = "lab",
) -> float:
    """Perceptual dissimilarity of two colours (symmetric, non-negative)."""
    pa, pb = to_working_space(np.array([a, b]), color_space, illuminant)
    return float(euclidean(pa, pb))
