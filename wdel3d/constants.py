"""Сталі пайплайну: розмір ґратки, межі для рушія, допуски."""
from __future__ import annotations

# Ґратка рушія: координати кладемо в [1, GRID_SIZE-2]
GRID_SIZE: int = 512
MIN_GRID_SIZE: int = 4

# Межі для рушія тріангуляції
FACET_MAX: int = 12_000_000   # стеля на кількість тетраедрів
WEIGHT_MAX: float = 1.0       # очікувана верхня межа |w|

# Менше 4 точок тетраедра не дають
MIN_TET_POINTS: int = 4

# Qhull: Qt без joggle; xyz не зсуваються, тож вертикальні грані лишаються вертикальними
DEFAULT_QHULL_OPTIONS: str = "Qt"

# Нижня грань 4D-оболонки: остання компонента одиничної нормалі < -EPS
EPS_LOWER_FACET: float = 1e-10

# Зсув висот підйому: EPS * (max|h| + 1) * u, u з [0, 1), фіксоване зерно.
# Розбиває кросферичні збіги (куб, ґратка) на прості грані.
EPS_LIFT_PERTURB: float = 1e-8
LIFT_PERTURB_SEED: int = 0x5EED

# Пласкі симплекси: 6*|V| <= EPS * span^3 відкидаємо
EPS_FLAT_TET: float = 1e-12

__all__ = [
    "GRID_SIZE",
    "MIN_GRID_SIZE",
    "FACET_MAX",
    "WEIGHT_MAX",
    "MIN_TET_POINTS",
    "DEFAULT_QHULL_OPTIONS",
    "EPS_LOWER_FACET",
    "EPS_LIFT_PERTURB",
    "LIFT_PERTURB_SEED",
    "EPS_FLAT_TET",
]
