"""
wdel3d: скелет ребер зваженої (регулярної) 3D тріангуляції Делоне.
Пайплайн: точки x y z w -> нормалізація у ґратку -> рушій -> унікальні ребра.
"""

__version__ = "0.1.0"

import logging as _logging

from wdel3d.geom import Pt, RawPoint, BoundingExtent
from wdel3d.normalize import scale_point, normalize_points
from wdel3d.edges import canonical_edge, tet_edges, extract_edges
from wdel3d.config import Distribution, EngineConfig, make_engine_config
from wdel3d.engine import EngineTimings, TriangulationEngine, LiftedHullEngine, engine_session
from wdel3d.io import LoadResult, read_points, load_points, write_edges
from wdel3d.pipeline import PipelineResult, triangulate_edges, run
from wdel3d.errors import (
    Wdel3dError, ConfigError, DegenerateInputError, EngineError, InputFileError, OutputFileError,
)

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

__all__ = [
    "Pt", "RawPoint", "BoundingExtent",
    "scale_point", "normalize_points",
    "canonical_edge", "tet_edges", "extract_edges",
    "Distribution", "EngineConfig", "make_engine_config",
    "EngineTimings", "TriangulationEngine", "LiftedHullEngine", "engine_session",
    "LoadResult", "read_points", "load_points", "write_edges",
    "PipelineResult", "triangulate_edges", "run",
    "Wdel3dError", "ConfigError", "DegenerateInputError", "EngineError",
    "InputFileError", "OutputFileError",
    "__version__",
]
