from __future__ import annotations

import re
from collections.abc import Sequence

import numpy as np
from skimage import color as skcolor

RGB = tuple[int, int, int]
LAB = tuple[float, float, float]

_HEX_PATTERN = re.compile(r"^#?[0-9A-Fa-f]{6}$")

# Linear sRGB -> XYZ, D65.
RGB_TO_XYZ = np.array(
    [
        [0.4124564, 0.3575761, 0.1804375],
        [0.2126729, 0.7151522, 0.0721750],
        [0.0193339, 0.1191920, 0.9503041],
    ],
    dtype=np.float64,
)
XYZ_TO_RGB = np.linalg.inv(RGB_TO_XYZ)

SRGB_LINEAR_THRESHOLD = 0.04045


class InvalidColorError(ValueError):
    pass


def parse_hex(value: object) -> RGB | None:
    """Parse ``#RRGGBB`` (case-insensitive, ``#`` optional); ``None`` if invalid."""
    if not isinstance(value, str) or not _HEX_PATTERN.match(value):
        return None

    normalized = value[1:] if value.startswith("#") else value
    return (
        int(normalized[0:2], 16),
        int(normalized[2:4], 16),
        int(normalized[4:6], 16),
    )


def hex_to_rgb(value: str) -> RGB:
    rgb = parse_hex(value)
    if rgb is None:
        raise InvalidColorError(f"invalid hex color '{value}'")
    return rgb


def clamp_rgb(values: Sequence[float] | np.ndarray) -> RGB:
    """Round half up and clamp three channels into [0, 255]."""
    arr = np.asarray(values, dtype=np.float64).reshape(3)
    if not np.all(np.isfinite(arr)):
        raise InvalidColorError(f"rgb channels must be finite numbers: {list(arr)}")
    clipped = np.clip(np.floor(arr + 0.5), 0, 255).astype(np.int64)
    return int(clipped[0]), int(clipped[1]), int(clipped[2])


def rgb_to_hex(rgb: Sequence[float]) -> str:
    r, g, b = clamp_rgb(rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def to_rgb(color: str | Sequence[float]) -> RGB:
    """Coerce a hex string or an RGB triple into a clamped RGB tuple."""
    if isinstance(color, str):
        return hex_to_rgb(color)

    try:
        channels = [float(channel) for channel in color]
    except (TypeError, ValueError) as exc:
        raise InvalidColorError(f"invalid rgb color {color!r}") from exc
    if len(channels) != 3:
        raise InvalidColorError(f"rgb color needs three channels, got {len(channels)}")
    return clamp_rgb(channels)


def srgb_to_linear(values: np.ndarray) -> np.ndarray:
    linear = values / 12.92
    high = values > SRGB_LINEAR_THRESHOLD
    linear[high] = ((values[high] + 0.055) / 1.055) ** 2.4
    return linear


def linear_to_srgb(values: np.ndarray) -> np.ndarray:
    values = np.clip(values, 0.0, None)
    encoded = values * 12.92
    high = values > 0.0031308
    encoded[high] = 1.055 * values[high] ** (1 / 2.4) - 0.055
    return encoded


def rgb_array_to_lab(rgb: np.ndarray) -> np.ndarray:
    """Convert an ``(..., 3)`` array of 0-255 RGB values to CIELAB (D65)."""
    normalized = np.asarray(rgb, dtype=np.float64) / 255.0
    linear = srgb_to_linear(normalized)
    xyz = linear @ RGB_TO_XYZ.T
    return skcolor.xyz2lab(xyz, illuminant="D65", observer="2")


def rgb_to_lab(rgb: Sequence[float]) -> LAB:
    lab = rgb_array_to_lab(np.asarray(rgb, dtype=np.float64).reshape(1, 3)).reshape(3)
    return float(lab[0]), float(lab[1]), float(lab[2])


def lab_to_rgb(lab: Sequence[float]) -> RGB:
    lab_arr = np.asarray(lab, dtype=np.float64).reshape(1, 3)
    xyz = skcolor.lab2xyz(lab_arr, illuminant="D65", observer="2")
    linear = xyz @ XYZ_TO_RGB.T
    return clamp_rgb(linear_to_srgb(linear).reshape(3) * 255.0)
