from __future__ import annotations
from typing import Iterable, List, Sequence, Tuple

import numpy as np

Edge = Tuple[int, int]  # канонічне ребро (min(u,v), max(u,v))

# 6 пар локальних вершин тетраедра
TET_EDGES: Tuple[Edge, ...] = ((0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3))


def canonical_edge(u: int, v: int) -> Edge:
    return (u, v) if u <= v else (v, u)


def tet_edges(tet: Sequence[int]) -> List[Edge]:
    """Шість канонічних ребер одного тетраедра."""
    return [canonical_edge(int(tet[i]), int(tet[j])) for i, j in TET_EDGES]


def extract_edges(tets: Iterable[Sequence[int]]) -> np.ndarray:
    """
    Скелет тетраедралізації: кожне фізичне ребро рівно один раз.

      1) усі 6*T пар в один робочий масив;
      2) канонізація рядків (менший індекс першим);
      3) сортування + унікальні (лексикографічно по (lo, hi)).

    Результат: (E, 2) int64, детермінований: залежить лише від множини
    тетраедрів, не від їхнього порядку.
    """
    arr = np.asarray(tets if isinstance(tets, np.ndarray) else list(tets), dtype=np.int64)
    if arr.size == 0:
        return np.empty((0, 2), dtype=np.int64)
    arr = arr.reshape(-1, 4)

    idx = np.array(TET_EDGES)
    segs = np.stack([arr[:, idx[:, 0]], arr[:, idx[:, 1]]], axis=-1).reshape(-1, 2)
    segs.sort(axis=1)
    segs = segs[segs[:, 0] != segs[:, 1]]  # вироджений тет з повтореною вершиною
    if len(segs) == 0:
        return np.empty((0, 2), dtype=np.int64)
    return np.unique(segs, axis=0)


def vertex_degrees(edges: np.ndarray, n: int) -> np.ndarray:
    """Степінь кожної з n вершин у скелеті (0: точка не потрапила в жоден тет)."""
    edges = np.asarray(edges, dtype=np.int64).reshape(-1, 2)
    return np.bincount(edges.ravel(), minlength=n)


__all__ = ["Edge", "TET_EDGES", "canonical_edge", "tet_edges", "extract_edges", "vertex_degrees"]
