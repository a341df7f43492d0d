"""Recipe search: find a mix of catalog pigments that approximates a target.

The search walks increasingly complex candidate families and keeps a single
running best, replaced only by a strictly lower delta E:

1. a single pigment under ``exact_match_threshold`` ends the search;
2. every pair from the ``pair_shortlist`` closest pigments (self pairs
   included) at ratios ``n / pair_steps``;
3. every triple from the ``triple_shortlist`` closest pigments at the fixed
   ``triple_ratios`` splits;
4. the best recipe tinted with the white pigment and shaded with the black
   pigment, when the catalog tags them.

Each family is scored as one numpy batch in search order. ``argmin`` returns
the first minimal index, so the first-found candidate wins ties exactly as a
sequential strict-less-than scan would.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from itertools import combinations

import numpy as np

from .catalog import filter_catalog
from .convert import clamp_rgb, rgb_array_to_lab, rgb_to_hex, rgb_to_lab, to_rgb
from .distance import RECIPE_ACCURACY_SCALE, accuracy_from_distance, delta_e_many
from .mixing import mix_weighted, rgb_to_cmyk
from .models import BLACK_ROLE, WHITE_ROLE, Pigment, RecipeEntry, RecipeResult

logger = logging.getLogger(__name__)


def _steps(step: float, count: int) -> tuple[float, ...]:
    return tuple(step * n for n in range(1, count + 1))


@dataclass(frozen=True)
class RecipeSearchConfig:
    exact_match_threshold: float = 2.0
    pair_shortlist: int = 10
    pair_steps: int = 40
    triple_shortlist: int = 6
    triple_ratios: tuple[tuple[float, float, float], ...] = (
        (0.5, 0.3, 0.2),
        (0.5, 0.25, 0.25),
        (0.4, 0.4, 0.2),
        (0.4, 0.3, 0.3),
        (0.6, 0.2, 0.2),
    )
    white_ratios: tuple[float, ...] = _steps(0.025, 8)
    black_ratios: tuple[float, ...] = _steps(0.025, 6)
    recipe_units: float = 20.0
    rounding_step: float = 0.5
    accuracy_scale: float = RECIPE_ACCURACY_SCALE

    def pair_ratios(self) -> np.ndarray:
        return np.arange(1, self.pair_steps, dtype=np.float64) / self.pair_steps


DEFAULT_CONFIG = RecipeSearchConfig()


@dataclass
class _Best:
    indices: tuple[int, ...] = ()
    weights: tuple[float, ...] = ()
    rgb: np.ndarray | None = None
    distance: float = math.inf

    def offer(
        self,
        indices: np.ndarray,
        weights: np.ndarray,
        rgb: np.ndarray,
        distances: np.ndarray,
    ) -> bool:
        if distances.size == 0:
            return False
        pos = int(np.argmin(distances))
        if not distances[pos] < self.distance:
            return False
        self.indices = tuple(int(i) for i in indices[pos])
        self.weights = tuple(float(w) for w in weights[pos])
        self.rgb = rgb[pos]
        self.distance = float(distances[pos])
        return True


def consolidate_recipe(entries: Sequence[RecipeEntry]) -> list[RecipeEntry]:
    """Merge entries sharing a pigment id, keeping first-occurrence order."""
    merged: dict[str, RecipeEntry] = {}
    for entry in entries:
        current = merged.get(entry.pigment.id)
        if current is None:
            merged[entry.pigment.id] = entry
        else:
            merged[entry.pigment.id] = RecipeEntry(
                pigment=current.pigment, parts=current.parts + entry.parts
            )
    return list(merged.values())


def normalize_recipe(
    entries: Sequence[RecipeEntry],
    units: float = DEFAULT_CONFIG.recipe_units,
    step: float = DEFAULT_CONFIG.rounding_step,
) -> tuple[RecipeEntry, ...]:
    """Rescale to ``units`` total parts, round to ``step`` and sort descending.

    Entries that round to zero are dropped. Ties keep their input order.
    """
    total = float(sum(entry.parts for entry in entries))
    if total <= 0:
        return ()

    normalized: list[RecipeEntry] = []
    for entry in entries:
        parts = math.floor((entry.parts / total) * units / step + 0.5) * step
        if parts > 0:
            normalized.append(RecipeEntry(pigment=entry.pigment, parts=parts))

    normalized.sort(key=lambda entry: entry.parts, reverse=True)
    return tuple(normalized)


def calculate_recipe(
    target: str | Sequence[float],
    catalog: Sequence[Pigment],
    inventory: Collection[str] | None = None,
    config: RecipeSearchConfig | None = None,
) -> RecipeResult | None:
    """Compute a mixing recipe for ``target`` from ``catalog``.

    Returns ``None`` when no pigment is eligible (empty catalog or an
    inventory that excludes everything). Raises ``InvalidColorError`` for a
    malformed target.
    """
    config = config or DEFAULT_CONFIG
    target_rgb = to_rgb(target)
    target_hex = rgb_to_hex(target_rgb)

    pigments = filter_catalog(catalog, inventory=inventory)
    if not pigments:
        logger.debug(f"No eligible pigments for {target_hex}")
        return None

    target_lab = rgb_to_lab(target_rgb)
    catalog_rgb = np.asarray([pigment.rgb for pigment in pigments], dtype=np.float64)
    catalog_cmyk = rgb_to_cmyk(catalog_rgb)
    distances = delta_e_many(target_lab, rgb_array_to_lab(catalog_rgb))
    order = np.argsort(distances, kind="stable")

    closest = int(order[0])
    if distances[closest] < config.exact_match_threshold:
        logger.debug(
            f"Exact match for {target_hex}: {pigments[closest].id} "
            f"(dE {distances[closest]:.3f})"
        )
        return RecipeResult(
            target_hex=target_hex,
            recipe=(RecipeEntry(pigment=pigments[closest], parts=1.0),),
            achieved_rgb=pigments[closest].rgb,
            accuracy=accuracy_from_distance(
                float(distances[closest]), config.accuracy_scale
            ),
            distance=float(distances[closest]),
        )

    def score(indices: np.ndarray, weights: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        rgb = mix_weighted(catalog_cmyk[indices], weights)
        return rgb, delta_e_many(target_lab, rgb_array_to_lab(rgb))

    best = _Best()

    pair_indices, pair_weights = _pair_candidates(
        order[: config.pair_shortlist], config.pair_ratios()
    )
    if pair_indices.size:
        best.offer(pair_indices, pair_weights, *score(pair_indices, pair_weights))
    logger.debug(f"Pair search: {len(pair_indices)} candidates, best dE {best.distance:.3f}")

    triple_indices, triple_weights = _triple_candidates(
        order[: config.triple_shortlist], config.triple_ratios
    )
    if triple_indices.size:
        best.offer(triple_indices, triple_weights, *score(triple_indices, triple_weights))
    logger.debug(
        f"Triple search: {len(triple_indices)} candidates, best dE {best.distance:.3f}"
    )

    if best.indices:
        base_indices, base_weights = best.indices, best.weights
        for role, ratios in (
            (WHITE_ROLE, config.white_ratios),
            (BLACK_ROLE, config.black_ratios),
        ):
            if not ratios:
                continue
            reference = _find_role(pigments, role)
            if reference is None:
                logger.debug(f"No {role} pigment in catalog, skipping refinement")
                continue
            indices, weights = _refinement_candidates(
                base_indices, base_weights, reference, ratios
            )
            if best.offer(indices, weights, *score(indices, weights)):
                logger.debug(f"Refined with {role}: dE {best.distance:.3f}")

    if best.rgb is None:
        # Only reachable with a config that disables every search family.
        return None

    entries = consolidate_recipe(
        [
            RecipeEntry(pigment=pigments[index], parts=weight)
            for index, weight in zip(best.indices, best.weights)
        ]
    )
    return RecipeResult(
        target_hex=target_hex,
        recipe=normalize_recipe(entries, config.recipe_units, config.rounding_step),
        achieved_rgb=clamp_rgb(best.rgb),
        accuracy=accuracy_from_distance(best.distance, config.accuracy_scale),
        distance=best.distance,
    )


def _pair_candidates(
    shortlist: np.ndarray, ratios: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    pairs = [
        (int(shortlist[i]), int(shortlist[j]))
        for i in range(len(shortlist))
        for j in range(i, len(shortlist))
    ]
    if not pairs or ratios.size == 0:
        return np.empty((0, 2), dtype=np.int64), np.empty((0, 2))

    indices = np.repeat(np.asarray(pairs, dtype=np.int64), len(ratios), axis=0)
    first = np.tile(ratios, len(pairs))
    weights = np.stack([first, 1.0 - first], axis=1)
    return indices, weights


def _triple_candidates(
    shortlist: np.ndarray, ratios: Sequence[tuple[float, float, float]]
) -> tuple[np.ndarray, np.ndarray]:
    triples = list(combinations((int(i) for i in shortlist), 3))
    if not triples or not ratios:
        return np.empty((0, 3), dtype=np.int64), np.empty((0, 3))

    indices = np.repeat(np.asarray(triples, dtype=np.int64), len(ratios), axis=0)
    weights = np.tile(np.asarray(ratios, dtype=np.float64), (len(triples), 1))
    return indices, weights


def _refinement_candidates(
    base_indices: tuple[int, ...],
    base_weights: tuple[float, ...],
    reference: int,
    ratios: Sequence[float],
) -> tuple[np.ndarray, np.ndarray]:
    base = np.asarray(base_weights, dtype=np.float64)
    total = float(base.sum())
    ratios_arr = np.asarray(ratios, dtype=np.float64)[:, np.newaxis]

    weights = np.concatenate([base * (1.0 - ratios_arr), ratios_arr * total], axis=1)
    indices = np.tile(
        np.asarray(base_indices + (reference,), dtype=np.int64), (len(ratios), 1)
    )
    return indices, weights


def _find_role(pigments: Sequence[Pigment], role: str) -> int | None:
    for index, pigment in enumerate(pigments):
        if pigment.role == role:
            return index
    return None
