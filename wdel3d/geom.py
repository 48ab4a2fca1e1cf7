from __future__ import annotations
from dataclasses import dataclass
from math import inf, isfinite
from typing import Iterable

@dataclass(frozen=True)
class Pt:
    x: float
    y: float
    z: float

@dataclass(frozen=True)
class RawPoint:
    """Точка з файлу: просторові x, y, z і вага w (як є, без змін)."""
    x: float
    y: float
    z: float
    w: float

@dataclass(frozen=True)
class BoundingExtent:
    """
    Один скалярний діапазон [lo, hi] для ВСІХ координат x, y, z разом
    (не три окремі): масштаб однаковий по осях, форма хмари не спотворюється.
    Порожній набір дає lo=+inf, hi=-inf (lo > hi).
    """
    lo: float
    hi: float

    @classmethod
    def empty(cls) -> "BoundingExtent":
        return cls(inf, -inf)

    @classmethod
    def of(cls, points: Iterable[RawPoint]) -> "BoundingExtent":
        lo, hi = inf, -inf
        for p in points:
            lo = min(lo, p.x, p.y, p.z)
            hi = max(hi, p.x, p.y, p.z)
        return cls(lo, hi)

    @property
    def span(self) -> float:
        return self.hi - self.lo

    @property
    def is_degenerate(self) -> bool:
        # порожньо (lo > hi), одна точка / всі збіглися (lo == hi) або inf
        return not (isfinite(self.span) and self.span > 0.0)

def sub(a: Pt, b: Pt) -> Pt:
    return Pt(a.x - b.x, a.y - b.y, a.z - b.z)

def dot(a: Pt, b: Pt) -> float:
    return a.x*b.x + a.y*b.y + a.z*b.z

def cross(a: Pt, b: Pt) -> Pt:
    return Pt(a.y*b.z - a.z*b.y,
              a.z*b.x - a.x*b.z,
              a.x*b.y - a.y*b.x)
