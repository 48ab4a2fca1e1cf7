import numpy as np
import pytest

from conftest import SINGLE_TET, FakeEngine
from wdel3d.config import Distribution
from wdel3d.errors import DegenerateInputError, EngineError, OutputFileError
from wdel3d.geom import RawPoint
from wdel3d.pipeline import run, triangulate_edges

FIVE = [RawPoint(*p) for p in SINGLE_TET] + [RawPoint(1.0, 1.0, 1.0, 0.0)]


def test_edges_from_synthetic_tets():
    eng = FakeEngine([(0, 1, 2, 3), (4, 3, 2, 1)])
    res = triangulate_edges(FIVE, engine=eng)
    assert res.point_count == 5
    assert res.tet_count == 2
    assert res.edge_count == 9
    keys = [tuple(e) for e in res.edges]
    assert keys == sorted(set(keys))
    assert eng.calls == ["init", "compute", "tetrahedra", "deinit"]


def test_engine_receives_grid_points_and_weights():
    pts = FIVE[:4] + [RawPoint(1.0, 1.0, 1.0, 0.75)]
    eng = FakeEngine()
    triangulate_edges(pts, engine=eng, grid_size=64, in_filename="cloud.xyzw")
    assert eng.points.shape == (5, 3)
    assert eng.points.min() == pytest.approx(1.0)
    assert eng.points.max() == pytest.approx(62.0)
    np.testing.assert_array_equal(eng.weights, [0, 0, 0, 0, 0.75])
    cfg = eng.config
    assert cfg.point_num == 5
    assert cfg.grid_size == 64
    assert cfg.dist is Distribution.UNIFORM
    assert cfg.in_filename == "cloud.xyzw"


def test_engine_overrides_forwarded():
    eng = FakeEngine()
    triangulate_edges(FIVE, engine=eng, do_check=True, facet_max=10)
    assert eng.config.do_check
    assert eng.config.facet_max == 10


def test_sink_failure_still_releases_engine():
    eng = FakeEngine([(0, 1, 2, 3)])

    def sink(_edges):
        raise OutputFileError("Cannot open output file: x")

    with pytest.raises(OutputFileError):
        triangulate_edges(FIVE, engine=eng, sink=sink)
    assert eng.calls[-1] == "deinit"
    assert eng.calls.count("deinit") == 1


@pytest.mark.parametrize("stage", ["init", "compute"])
def test_engine_failure_still_releases_engine(stage):
    eng = FakeEngine(fail_on=stage)
    with pytest.raises(EngineError):
        triangulate_edges(FIVE, engine=eng)
    assert eng.calls[-1] == "deinit"
    assert eng.calls.count("deinit") == 1


@pytest.mark.parametrize("n", [0, 1, 3])
def test_fewer_than_four_points_is_empty(n):
    eng = FakeEngine()
    got = []
    res = triangulate_edges(FIVE[:n], engine=eng, sink=got.append)
    assert res.edges.shape == (0, 2)
    assert res.tet_count == 0
    assert eng.calls == []
    assert len(got) == 1 and got[0].shape == (0, 2)


def test_coincident_points_fail_fast():
    eng = FakeEngine()
    pts = [RawPoint(2.0, 2.0, 2.0, w) for w in (0.1, 0.2, 0.3, 0.4)]
    with pytest.raises(DegenerateInputError):
        triangulate_edges(pts, engine=eng)
    assert eng.calls == []


def test_run_single_tetrahedron(xyzw_file, tmp_path):
    out = tmp_path / "edges.txt"
    res = run(xyzw_file(SINGLE_TET), out)
    assert res.tet_count == 1
    assert not res.truncated
    assert out.read_text() == "0 1\n0 2\n0 3\n1 2\n1 3\n2 3\n"


def test_run_reports_truncation(tmp_path):
    src = tmp_path / "points.xyzw"
    src.write_text("0 0 0 0\n1 0 0 0\n0 1 0 0\n0 0 1 0\n5 5 x 0\n")
    out = tmp_path / "edges.txt"
    res = run(src, out)
    assert res.truncated
    assert res.point_count == 4
    assert len(out.read_text().splitlines()) == 6


def test_run_unwritable_output_releases_engine(xyzw_file, tmp_path):
    eng = FakeEngine([(0, 1, 2, 3)])
    with pytest.raises(OutputFileError):
        run(xyzw_file(SINGLE_TET), tmp_path / "missing" / "edges.txt", engine=eng)
    assert eng.calls == ["init", "compute", "tetrahedra", "deinit"]


def test_run_random_cloud_with_check(tmp_path):
    rng = np.random.default_rng(5)
    rows = np.column_stack([rng.normal(size=(80, 3)), rng.uniform(0, 1, 80)])
    src = tmp_path / "cloud.xyzw"
    np.savetxt(src, rows)
    out = tmp_path / "edges.txt"
    res = run(src, out, do_check=True)
    edges = np.loadtxt(out, dtype=np.int64, ndmin=2)
    np.testing.assert_array_equal(edges, res.edges)
    assert np.all(edges[:, 0] < edges[:, 1])
    assert edges.max() < 80


def test_run_passes_input_path_as_filename(xyzw_file):
    path = xyzw_file(SINGLE_TET)
    eng = FakeEngine([(0, 1, 2, 3)])
    run(path, path.parent / "edges.txt", engine=eng)
    assert eng.config.in_filename == str(path)


def test_run_accepts_explicit_filename(xyzw_file):
    path = xyzw_file(SINGLE_TET)
    eng = FakeEngine([(0, 1, 2, 3)])
    res = run(path, path.parent / "edges.txt", engine=eng, in_filename="label.xyzw")
    assert eng.config.in_filename == "label.xyzw"
    assert res.edge_count == 6
