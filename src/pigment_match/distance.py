from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from skimage.color import deltaE_cie76

RANKING_ACCURACY_SCALE = 1.5
RECIPE_ACCURACY_SCALE = 8.0


def delta_e_many(lab: Sequence[float], others: np.ndarray) -> np.ndarray:
    """CIE76 distance from one Lab color to each row of ``others``."""
    source = np.asarray(lab, dtype=np.float64).reshape(1, 3)
    targets = np.asarray(others, dtype=np.float64).reshape(-1, 3)
    return deltaE_cie76(source, targets).reshape(-1)


def delta_e(lab1: Sequence[float], lab2: Sequence[float]) -> float:
    return float(delta_e_many(lab1, np.asarray(lab2, dtype=np.float64))[0])


def accuracy_from_distance(distance: float, scale: float) -> float:
    # Display value only; ranking and search always compare raw distance.
    return float(max(0.0, min(100.0, 100.0 - distance * scale)))
