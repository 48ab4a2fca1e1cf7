"""Конфігурація рушія тріангуляції."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional

from .constants import DEFAULT_QHULL_OPTIONS, FACET_MAX, GRID_SIZE, MIN_GRID_SIZE, WEIGHT_MAX
from .errors import ConfigError


class Distribution(Enum):
    """Підказка рушію про розподіл точок."""
    UNIFORM = "uniform"
    GAUSSIAN = "gaussian"
    BALL = "ball"
    SPHERE = "sphere"
    GRID = "grid"
    THIN_SPHERE = "thin-sphere"


@dataclass(frozen=True)
class EngineConfig:
    run: int = 0
    run_num: int = 1
    grid_size: int = GRID_SIZE
    point_num: int = 0
    dist: Distribution = Distribution.UNIFORM
    facet_max: int = FACET_MAX
    weight_max: float = WEIGHT_MAX
    log_verbose: bool = False
    log_stats: bool = False
    log_timing: bool = False
    do_check: bool = False
    in_file: bool = False
    in_filename: Optional[str] = None
    qhull_options: str = DEFAULT_QHULL_OPTIONS

    def validate(self) -> "EngineConfig":
        if self.grid_size < MIN_GRID_SIZE:
            raise ConfigError(f"grid_size must be >= {MIN_GRID_SIZE}, got {self.grid_size}")
        if self.point_num < 0:
            raise ConfigError(f"point_num must be >= 0, got {self.point_num}")
        if self.facet_max <= 0:
            raise ConfigError(f"facet_max must be positive, got {self.facet_max}")
        if not self.weight_max > 0:
            raise ConfigError(f"weight_max must be positive, got {self.weight_max}")
        return self


def make_engine_config(point_num: int, in_filename: Optional[str] = None, **overrides: Any) -> EngineConfig:
    """
    Конфіг рушія для одного запуску: point_num береться з розміру входу,
    in_file/in_filename: з імені вхідного файлу; решта: типові значення,
    які можна перекрити через overrides.
    """
    cfg = EngineConfig(
        point_num=point_num,
        in_file=in_filename is not None,
        in_filename=in_filename,
    )
    try:
        cfg = replace(cfg, **overrides)
    except TypeError as e:
        raise ConfigError(str(e)) from e
    return cfg.validate()


__all__ = ["Distribution", "EngineConfig", "make_engine_config"]
