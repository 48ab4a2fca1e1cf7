"""
Вхід/вихід пайплайну.

Вхід (.xyzw): дійсні числа через пробіли, по 4 на точку (x y z w), без
заголовка. Читання зупиняється на першому токені, що не є скінченним числом
(зокрема на байтах, що не декодуються як UTF-8, і на "1_000");
неповна остання четвірка відкидається. Це не помилка: лише прапорець
LoadResult.truncated і попередження в лог.

Вихід: по рядку "lo hi" на ребро, без заголовка.
"""
from __future__ import annotations

from dataclasses import dataclass
from math import isfinite
from os import PathLike
from typing import Iterator, List, Optional, TextIO, Union

import numpy as np

from .errors import InputFileError, OutputFileError
from .geom import BoundingExtent, RawPoint
from .logging_utils import get_logger

log = get_logger(__name__)

PathT = Union[str, "PathLike[str]"]


@dataclass(frozen=True)
class LoadResult:
    points: List[RawPoint]       # порядок = порядок у файлі = простір індексів вершин
    extent: BoundingExtent
    truncated: bool = False
    tokens_read: int = 0


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


def _parse_real(tok: str) -> Optional[float]:
    # float() приймає "1_000", у .xyzw це не число
    if "_" in tok:
        return None
    try:
        v = float(tok)
    except ValueError:
        return None
    # nan/inf теж не числа для .xyzw
    return v if isfinite(v) else None


def read_points(stream: TextIO) -> LoadResult:
    """Прочитати четвірки (x, y, z, w) з потоку до кінця або до першого зіпсованого токена."""
    points: List[RawPoint] = []
    group: List[float] = []
    tokens_read = 0
    truncated = False

    for tok in _tokens(stream):
        v = _parse_real(tok)
        if v is None:
            truncated = True
            log.warning(
                "malformed token %r at position %d: reading stopped, %d points kept",
                tok[:32], tokens_read + 1, len(points),
            )
            break
        tokens_read += 1
        group.append(v)
        if len(group) == 4:
            points.append(RawPoint(*group))
            group = []
    else:
        if group:
            truncated = True
            log.warning("incomplete trailing point (%d of 4 values) dropped", len(group))

    return LoadResult(points, BoundingExtent.of(points), truncated, tokens_read)


def load_points(path: PathT) -> LoadResult:
    try:
        fh = open(path, "r", encoding="utf-8", errors="replace")
    except OSError as e:
        raise InputFileError(f"Cannot open input file: {path}") from e
    with fh:
        res = read_points(fh)
    log.info("read %d points from %s", len(res.points), path)
    return res


def write_edges(path: PathT, edges) -> int:
    """
    Записати ребра (E, 2) по рядку "lo hi" у наданому порядку.
    Повертає кількість записаних рядків.
    """
    arr = np.asarray(edges, dtype=np.int64).reshape(-1, 2)
    try:
        fh = open(path, "w", encoding="utf-8")
    except OSError as e:
        raise OutputFileError(f"Cannot open output file: {path}") from e
    with fh:
        np.savetxt(fh, arr, fmt="%d", delimiter=" ")
    log.info("wrote %d edges to %s", len(arr), path)
    return len(arr)


__all__ = ["LoadResult", "read_points", "load_points", "write_edges"]
