from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

import numpy as np

from .constants import GRID_SIZE, MIN_TET_POINTS
from .config import make_engine_config
from .edges import extract_edges
from .engine import EngineTimings, LiftedHullEngine, TriangulationEngine, engine_session
from .geom import BoundingExtent, RawPoint
from .io import PathT, load_points, write_edges
from .logging_utils import get_logger
from .normalize import normalize_points

log = get_logger(__name__)

EdgeSink = Callable[[np.ndarray], Any]


@dataclass
class PipelineResult:
    point_count: int
    tet_count: int
    edges: np.ndarray = field(repr=False)
    timings: Optional[EngineTimings] = None
    truncated: bool = False

    @property
    def edge_count(self) -> int:
        return len(self.edges)


def triangulate_edges(
    points: Sequence[RawPoint],
    extent: Optional[BoundingExtent] = None,
    *,
    grid_size: int = GRID_SIZE,
    engine: Optional[TriangulationEngine] = None,
    in_filename: Optional[str] = None,
    sink: Optional[EdgeSink] = None,
    **engine_overrides: Any,
) -> PipelineResult:
    """
    Повний пайплайн у пам'яті:
      - нормалізує координати у ґратку [1, grid_size-2] (спільний масштаб по осях);
      - рахує зважену Делоне-тетраедралізацію рушієм (типово LiftedHullEngine);
      - витягує ребра без дублікатів, відсортовані за (lo, hi).

    sink(edges), якщо задано, викликається ВСЕРЕДИНІ сесії рушія: якщо він
    впаде (напр. запис файлу), рушій однаково звільниться.
    Менше 4 точок: порожній результат, рушій не запускається.
    """
    n = len(points)
    if n < MIN_TET_POINTS:
        log.warning("%d points: fewer than %d, edge skeleton is empty", n, MIN_TET_POINTS)
        edges = np.empty((0, 2), dtype=np.int64)
        if sink is not None:
            sink(edges)
        return PipelineResult(n, 0, edges)

    if extent is None:
        extent = BoundingExtent.of(points)
    grid, weights = normalize_points(points, extent, grid_size)
    log.info("normalized %d points, extent [%g, %g] -> grid %d", n, extent.lo, extent.hi, grid_size)

    config = make_engine_config(n, in_filename, grid_size=grid_size, **engine_overrides)
    if engine is None:
        engine = LiftedHullEngine()

    with engine_session(engine, config, grid, weights) as eng:
        timings = eng.compute()
        tets = eng.tetrahedra()
        edges = extract_edges(tets)
        log.info("%s: %d tetrahedra -> %d unique edges", eng.name, len(tets), len(edges))
        if sink is not None:
            sink(edges)

    return PipelineResult(n, len(tets), edges, timings)


def run(input_path: PathT, output_path: PathT, **kwargs: Any) -> PipelineResult:
    """Файл -> ребра -> файл. kwargs ідуть у triangulate_edges()."""
    loaded = load_points(input_path)
    kwargs.setdefault("in_filename", str(input_path))
    res = triangulate_edges(
        loaded.points,
        loaded.extent,
        sink=lambda edges: write_edges(output_path, edges),
        **kwargs,
    )
    res.truncated = loaded.truncated
    return res


__all__ = ["PipelineResult", "triangulate_edges", "run"]
