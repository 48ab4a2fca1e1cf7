from __future__ import annotations

import numpy as np
import pytest

from wdel3d.engine import EngineTimings, TriangulationEngine
from wdel3d.errors import EngineError


class FakeEngine(TriangulationEngine):
    """Синтетичний рушій: віддає заздалегідь задані тетраедри й пише журнал викликів."""
    name = "fake"

    def __init__(self, tets=(), fail_on=None):
        self._tets = np.asarray(tets, dtype=np.int64).reshape(-1, 4)
        self.fail_on = fail_on
        self.calls = []
        self.config = None
        self.points = None
        self.weights = None

    def init(self, config, points, weights):
        self.calls.append("init")
        self.config = config
        self.points = np.asarray(points)
        self.weights = np.asarray(weights)
        if self.fail_on == "init":
            raise EngineError("init failed")

    def compute(self):
        self.calls.append("compute")
        if self.fail_on == "compute":
            raise EngineError("tetrahedra exceed facet_max")
        return EngineTimings(0.0, 0.0, 0.0, 0.0)

    def tetrahedra(self):
        self.calls.append("tetrahedra")
        return self._tets

    def deinit(self):
        self.calls.append("deinit")


@pytest.fixture
def fake_engine_cls():
    return FakeEngine


def write_xyzw(path, rows):
    path.write_text("".join(" ".join(str(v) for v in r) + "\n" for r in rows))
    return path


@pytest.fixture
def xyzw_file(tmp_path):
    def _make(rows, name="points.xyzw"):
        return write_xyzw(tmp_path / name, rows)
    return _make


# одиничний тетраедр: 4 вершини, без ваг
SINGLE_TET = [
    (0.0, 0.0, 0.0, 0.0),
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
]
