from __future__ import annotations

from collections.abc import Collection, Sequence

import numpy as np

from .catalog import filter_catalog
from .convert import rgb_array_to_lab, rgb_to_lab, to_rgb
from .distance import RANKING_ACCURACY_SCALE, accuracy_from_distance, delta_e_many
from .models import CatalogMatch, Pigment

DEFAULT_LIMIT = 15


def rank_catalog(
    target: str | Sequence[float],
    catalog: Sequence[Pigment],
    limit: int = DEFAULT_LIMIT,
    inventory: Collection[str] | None = None,
    brand: str | None = None,
    accuracy_scale: float = RANKING_ACCURACY_SCALE,
) -> list[CatalogMatch]:
    """Rank pre-made paints by CIE76 distance to ``target``, closest first."""
    if limit < 1:
        raise ValueError("limit must be at least 1")

    target_lab = rgb_to_lab(to_rgb(target))
    eligible = filter_catalog(catalog, inventory=inventory, brand=brand)
    if not eligible:
        return []

    lab = rgb_array_to_lab(np.asarray([p.rgb for p in eligible], dtype=np.float64))
    distances = delta_e_many(target_lab, lab)
    order = np.argsort(distances, kind="stable")[:limit]

    return [
        CatalogMatch(
            pigment=eligible[int(idx)],
            distance=float(distances[int(idx)]),
            accuracy=accuracy_from_distance(float(distances[int(idx)]), accuracy_scale),
        )
        for idx in order
    ]
