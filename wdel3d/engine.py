"""
Рушій зваженої (регулярної) тріангуляції Делоне.

Контракт (TriangulationEngine):
    init(config, points, weights) -> compute() -> tetrahedra() -> deinit()
Стан рушія є ресурсом з областю дії; engine_session() гарантує рівно один
deinit() на будь-якому виході (успіх, помилка рушія, помилка запису).

LiftedHullEngine (типова реалізація): підйом (p, |p|^2 - w) у 4D, нижня
опукла оболонка через SciPy ConvexHull (Qhull). Грані нижньої оболонки є
тетраедрами регулярної тріангуляції; «зайві» точки (піднята точка вище
нижньої оболонки) у жоден тетраедр не потрапляють.

Кросферичні набори (куб, ґратка) дають неспрощені грані; висоти підйому
зсуваються на детермінований малий шум, а грані з нульовим об'ємом у xyz
відкидаються. Результат завжди є тріангуляцією, без перетинів.
"""
from __future__ import annotations

from contextlib import contextmanager
from time import perf_counter
from typing import Iterator, NamedTuple, Optional

import numpy as np
from scipy.spatial import ConvexHull, QhullError

from .config import EngineConfig
from .constants import (
    EPS_FLAT_TET,
    EPS_LIFT_PERTURB,
    EPS_LOWER_FACET,
    LIFT_PERTURB_SEED,
    MIN_TET_POINTS,
)
from .errors import EngineError
from .geom import Pt
from .logging_utils import get_logger
from .mesh import TetMesh, report_problems

log = get_logger(__name__)


class EngineTimings(NamedTuple):
    """Чотири фази обчислення, мс."""
    lift: float
    hull: float
    extract: float
    check: float

    @property
    def total(self) -> float:
        return self.lift + self.hull + self.extract + self.check


class TriangulationEngine:
    """Базовий клас рушія; підкласи реалізують усі чотири кроки."""
    name = "abstract"

    def init(self, config: EngineConfig, points: np.ndarray, weights: np.ndarray) -> None:
        raise NotImplementedError

    def compute(self) -> EngineTimings:
        raise NotImplementedError

    def tetrahedra(self) -> np.ndarray:
        raise NotImplementedError

    def deinit(self) -> None:
        raise NotImplementedError


class LiftedHullEngine(TriangulationEngine):
    name = "lifted-hull"

    def __init__(self) -> None:
        self._config: Optional[EngineConfig] = None
        self._points: Optional[np.ndarray] = None
        self._weights: Optional[np.ndarray] = None
        self._tets: Optional[np.ndarray] = None

    @property
    def initialized(self) -> bool:
        return self._config is not None

    # ---------------- життєвий цикл ----------------
    def init(self, config: EngineConfig, points: np.ndarray, weights: np.ndarray) -> None:
        if self.initialized:
            raise EngineError("engine already initialized, call deinit() first")
        config.validate()
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        w = np.asarray(weights, dtype=np.float64).reshape(-1)
        if len(pts) != len(w):
            raise EngineError(f"{len(pts)} points but {len(w)} weights")
        if config.point_num != len(pts):
            raise EngineError(f"config.point_num={config.point_num}, got {len(pts)} points")
        if not np.all(np.isfinite(pts)):
            raise EngineError("non-finite point coordinates")
        if not np.all(np.isfinite(w)):
            raise EngineError("non-finite weights")
        if len(w) and np.abs(w).max() > config.weight_max:
            log.warning("max |weight| %.6g exceeds weight_max %.6g", np.abs(w).max(), config.weight_max)

        self._config = config
        self._points = pts
        self._weights = w
        self._tets = None
        self._say("init: %d points, grid %d, dist %s", len(pts), config.grid_size, config.dist.value)

    def compute(self) -> EngineTimings:
        if not self.initialized:
            raise EngineError("engine not initialized")
        cfg = self._config
        n = len(self._points)

        t0 = perf_counter()
        if n < MIN_TET_POINTS:
            self._say("%d points: nothing to tetrahedralize", n)
            self._tets = np.empty((0, 4), dtype=np.int64)
            t1 = t2 = t3 = t4 = perf_counter()
        else:
            self._check_dimension()
            lifted = self._lift()
            t1 = perf_counter()
            hull = self._hull(lifted)
            t2 = perf_counter()
            self._tets = self._lower_facets(hull, n)
            t3 = perf_counter()
            if cfg.do_check:
                self._check()
            t4 = perf_counter()

        timings = EngineTimings(
            lift=(t1 - t0) * 1e3,
            hull=(t2 - t1) * 1e3,
            extract=(t3 - t2) * 1e3,
            check=(t4 - t3) * 1e3,
        )
        if cfg.log_stats:
            used = len(np.unique(self._tets)) if len(self._tets) else 0
            log.info("stats: points=%d tets=%d redundant=%d", n, len(self._tets), n - used)
        if cfg.log_timing:
            log.info(
                "timing (ms): lift=%.3f hull=%.3f extract=%.3f check=%.3f total=%.3f",
                *timings, timings.total,
            )
        return timings

    def tetrahedra(self) -> np.ndarray:
        if self._tets is None:
            raise EngineError("no tetrahedra: compute() has not run")
        return self._tets

    def deinit(self) -> None:
        self._config = None
        self._points = None
        self._weights = None
        self._tets = None

    # ---------------- внутрішні кроки ----------------
    def _say(self, msg: str, *args) -> None:
        if self._config is not None and self._config.log_verbose:
            log.info(msg, *args)
        else:
            log.debug(msg, *args)

    def _check_dimension(self) -> None:
        # усі точки в одній площині (на прямій): тетраедрів не буде
        rank = np.linalg.matrix_rank(self._points - self._points.mean(axis=0))
        if rank < 3:
            raise EngineError(f"points span only {rank} dimension(s), need 3 for tetrahedra")

    def _lift(self) -> np.ndarray:
        """
        (x, y, z, |p|^2 - w) + одна сторожова точка високо над параболоїдом
        над центроїдом: 4D-оболонка повнорозмірна навіть для 4 точок.
        Сторожова точка має індекс n.
        """
        pts = self._points
        h = np.einsum("ij,ij->i", pts, pts) - self._weights
        # детермінований зсув лише висот: x, y, z лишаються точними
        jitter = np.random.default_rng(LIFT_PERTURB_SEED).random(len(h))
        h = h + EPS_LIFT_PERTURB * (np.abs(h).max() + 1.0) * jitter
        top = h.max() + (h.max() - h.min()) + 1.0
        sentinel = np.append(pts.mean(axis=0), top)
        return np.vstack([np.column_stack([pts, h]), sentinel])

    def _hull(self, lifted: np.ndarray) -> ConvexHull:
        try:
            return ConvexHull(lifted, qhull_options=self._config.qhull_options)
        except QhullError as e:
            raise EngineError(f"qhull failed (coplanar input?): {e}") from e

    def _lower_facets(self, hull: ConvexHull, n: int) -> np.ndarray:
        # нормаль назовні з від'ємною 4-ю компонентою = нижня грань
        lower = hull.equations[:, 3] < -EPS_LOWER_FACET
        keep = lower & np.all(hull.simplices != n, axis=1)
        simp = hull.simplices[keep].astype(np.int64)
        flat = self._flat_mask(simp)
        if flat.any():
            self._say("dropped %d flat lower facets", int(flat.sum()))
        tets = np.sort(simp[~flat], axis=1)
        tets = tets[np.lexsort(tets.T[::-1])]
        self._say("lower hull: %d of %d facets", len(tets), len(hull.simplices))
        if len(tets) > self._config.facet_max:
            raise EngineError(f"{len(tets)} tetrahedra exceed facet_max={self._config.facet_max}")
        return tets

    def _flat_mask(self, simp: np.ndarray) -> np.ndarray:
        """Симплекси з нульовим об'ємом у xyz (вироджені грані, злиті Qhull)."""
        pts = self._points
        span = float(np.ptp(pts, axis=0).max())
        vol6 = np.abs(np.linalg.det(pts[simp[:, 1:]] - pts[simp[:, :1]]))
        return vol6 <= EPS_FLAT_TET * span ** 3

    def _check(self) -> None:
        pts = [Pt(*map(float, p)) for p in self._points]
        report = TetMesh.from_tets(pts, self._tets).validate()
        bad = report_problems(report)
        if bad:
            raise EngineError(f"tetrahedralization check failed ({bad} problems): {report}")
        self._say("check ok: %d tets, %d boundary faces", report["tets"], report["boundary_faces"])


@contextmanager
def engine_session(
    engine: TriangulationEngine,
    config: EngineConfig,
    points: np.ndarray,
    weights: np.ndarray,
) -> Iterator[TriangulationEngine]:
    """init() на вході, рівно один deinit() на будь-якому виході."""
    try:
        engine.init(config, points, weights)
        yield engine
    finally:
        engine.deinit()


__all__ = [
    "EngineTimings",
    "TriangulationEngine",
    "LiftedHullEngine",
    "engine_session",
]
