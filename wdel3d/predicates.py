# wdel3d/predicates.py
from __future__ import annotations
from .geom import Pt, sub, cross, dot

def orient3d(a: Pt, b: Pt, c: Pt, d: Pt) -> float:
    """Шестикратний об'єм тетраедра abcd зі знаком; >0: позитивна орієнтація."""
    ab = sub(b, a)
    ac = sub(c, a)
    ad = sub(d, a)
    return dot(cross(ab, ac), ad)
