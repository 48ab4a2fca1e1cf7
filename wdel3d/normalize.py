"""
Нормалізація координат у ґратку рушія.

Одне афінне перетворення для всіх трьох осей (спільний BoundingExtent):
  v -> (v - lo) * (G - 3) / (hi - lo) + 1
Значення з [lo, hi] потрапляють у [1, G-2]: по одній клітинці запасу з
кожного боку ґратки. Нічого не обрізаємо.
"""
from __future__ import annotations

from math import isfinite
from typing import Sequence, Tuple

import numpy as np

from .constants import GRID_SIZE, MIN_GRID_SIZE
from .errors import ConfigError, DegenerateInputError
from .geom import BoundingExtent, RawPoint


def scale_point(value: float, lo: float, hi: float, grid_size: float = GRID_SIZE) -> float:
    value = value - lo                              # зсув
    value = (grid_size - 3.0) * value / (hi - lo)   # масштаб
    return value + 1.0                              # у [1, grid_size-2]


def _check(extent: BoundingExtent, grid_size: int, n: int) -> None:
    if grid_size < MIN_GRID_SIZE:
        raise ConfigError(f"grid_size must be >= {MIN_GRID_SIZE}, got {grid_size}")
    if n == 0:
        raise DegenerateInputError("no points to normalize")
    if not isfinite(extent.span):
        raise DegenerateInputError(
            f"bounding extent [{extent.lo}, {extent.hi}] has a non-finite width, "
            "cannot scale to the grid"
        )
    if extent.is_degenerate:
        raise DegenerateInputError(
            f"zero-width bounding extent [{extent.lo}, {extent.hi}]: "
            "all coordinates coincide, cannot scale to the grid"
        )


def normalize_points(
    points: Sequence[RawPoint],
    extent: BoundingExtent,
    grid_size: int = GRID_SIZE,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Повертає:
      grid   : (N, 3) float64, координати у ґратці;
      weights: (N,) float64, ваги без змін, той самий індекс.
    """
    _check(extent, grid_size, len(points))
    xyz = np.array([(p.x, p.y, p.z) for p in points], dtype=np.float64)
    weights = np.array([p.w for p in points], dtype=np.float64)
    # те саме, що scale_point, але для всього масиву одразу
    grid = (grid_size - 3.0) * (xyz - extent.lo) / (extent.hi - extent.lo) + 1.0
    return grid, weights


__all__ = ["scale_point", "normalize_points"]
