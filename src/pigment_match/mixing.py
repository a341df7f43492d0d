"""CMYK-proxy subtractive mixing.

Pigments are blended as a weighted linear average in CMYK space and the
result converted back to RGB. This is a fast stand-in for real pigment
optics, not Kubelka-Munk; it tends to come out darker than a physical mix
and recipe outputs are calibrated against that behaviour.
"""
from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .convert import RGB, clamp_rgb
from .models import RecipeEntry


def rgb_to_cmyk(rgb: np.ndarray) -> np.ndarray:
    """Convert ``(..., 3)`` 0-255 RGB to ``(..., 4)`` CMYK in [0, 1]."""
    normalized = np.asarray(rgb, dtype=np.float64) / 255.0
    k = 1.0 - normalized.max(axis=-1)
    ink = 1.0 - k
    safe_ink = np.where(ink > 0.0, ink, 1.0)
    cmy = (1.0 - normalized - k[..., np.newaxis]) / safe_ink[..., np.newaxis]
    cmy = np.where((ink > 0.0)[..., np.newaxis], cmy, 0.0)
    return np.concatenate([cmy, k[..., np.newaxis]], axis=-1)


def cmyk_to_rgb(cmyk: np.ndarray) -> np.ndarray:
    cmyk = np.asarray(cmyk, dtype=np.float64)
    k = cmyk[..., 3:4]
    return 255.0 * (1.0 - cmyk[..., :3]) * (1.0 - k)


def mix_weighted(cmyk: np.ndarray, weights: np.ndarray) -> np.ndarray:
    """Blend a batch of candidate mixes.

    ``cmyk`` has shape ``(candidates, components, 4)`` and ``weights`` shape
    ``(candidates, components)``. Returns float RGB of shape ``(candidates, 3)``;
    rows whose weights sum to zero come out black.
    """
    weights = np.asarray(weights, dtype=np.float64)
    totals = weights.sum(axis=1, keepdims=True)
    empty = totals[:, 0] == 0
    normalized = np.divide(
        weights, totals, out=np.zeros_like(weights), where=totals != 0
    )
    mixed = np.einsum("nk,nkc->nc", normalized, cmyk)
    rgb = cmyk_to_rgb(mixed)
    rgb[empty] = 0.0
    return rgb


def mix_colors(entries: Sequence[RecipeEntry]) -> RGB:
    if not entries:
        return (0, 0, 0)

    total = float(sum(entry.parts for entry in entries))
    if total == 0:
        return (0, 0, 0)

    cmyk = rgb_to_cmyk(np.asarray([entry.pigment.rgb for entry in entries]))
    weights = np.asarray([[entry.parts for entry in entries]], dtype=np.float64)
    mixed = mix_weighted(cmyk[np.newaxis, ...], weights)
    return clamp_rgb(mixed[0])
