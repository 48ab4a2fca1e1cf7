import numpy as np
import pytest

from wdel3d.errors import ConfigError, DegenerateInputError
from wdel3d.geom import BoundingExtent, RawPoint
from wdel3d.normalize import normalize_points, scale_point


def _cloud(n=200, seed=0, lo=-37.5, hi=120.0):
    rng = np.random.default_rng(seed)
    xyz = rng.uniform(lo, hi, size=(n, 3))
    w = rng.uniform(0.0, 1.0, size=n)
    return [RawPoint(*map(float, p), float(wi)) for p, wi in zip(xyz, w)]


def test_scale_point_endpoints():
    assert scale_point(-2.0, -2.0, 6.0, 512) == 1.0
    assert scale_point(6.0, -2.0, 6.0, 512) == 510.0
    assert scale_point(2.0, -2.0, 6.0, 512) == pytest.approx(255.5)


def test_scale_point_is_not_clamped():
    assert scale_point(-10.0, 0.0, 1.0, 512) < 1.0
    assert scale_point(10.0, 0.0, 1.0, 512) > 510.0


@pytest.mark.parametrize("grid_size", [4, 16, 512, 1024])
def test_coordinates_in_interior_margin(grid_size):
    pts = _cloud()
    grid, _ = normalize_points(pts, BoundingExtent.of(pts), grid_size)
    assert grid.shape == (len(pts), 3)
    assert np.all(np.isfinite(grid))
    assert grid.min() >= 1.0
    assert grid.max() <= grid_size - 2 + 1e-9
    # хоч одна координата торкається кожного краю
    assert grid.min() == pytest.approx(1.0)
    assert grid.max() == pytest.approx(grid_size - 2)


def test_matches_scalar_scale_point():
    pts = _cloud(n=10, seed=3)
    ext = BoundingExtent.of(pts)
    grid, _ = normalize_points(pts, ext, 512)
    for p, g in zip(pts, grid):
        expected = [scale_point(v, ext.lo, ext.hi, 512) for v in (p.x, p.y, p.z)]
        np.testing.assert_allclose(g, expected, rtol=1e-12)


def test_weights_pass_through_by_index():
    pts = _cloud(n=25, seed=1)
    _, w = normalize_points(pts, BoundingExtent.of(pts))
    np.testing.assert_array_equal(w, [p.w for p in pts])


def test_uniform_scale_and_translation_invariance():
    pts = _cloud(n=50, seed=2)
    moved = [RawPoint(3.5 * p.x - 11.0, 3.5 * p.y - 11.0, 3.5 * p.z - 11.0, p.w) for p in pts]
    g1, _ = normalize_points(pts, BoundingExtent.of(pts))
    g2, _ = normalize_points(moved, BoundingExtent.of(moved))
    np.testing.assert_allclose(g1, g2, rtol=1e-9, atol=1e-9)


def test_same_transform_on_every_axis():
    # точка з однаковими x=y=z лягає в однакові координати ґратки
    pts = [RawPoint(0, 0, 0, 0), RawPoint(4, 1, 2, 0), RawPoint(2.5, 2.5, 2.5, 0)]
    grid, _ = normalize_points(pts, BoundingExtent.of(pts), 512)
    assert grid[2, 0] == grid[2, 1] == grid[2, 2]
    # y не розтягується до повної ґратки, хоча власний діапазон y вужчий
    assert grid[:, 1].max() < 510.0


def test_empty_input_rejected():
    with pytest.raises(DegenerateInputError):
        normalize_points([], BoundingExtent.empty())


def test_zero_width_extent_rejected():
    pts = [RawPoint(1.0, 1.0, 1.0, w) for w in (0.1, 0.2, 0.3, 0.4, 0.5)]
    with pytest.raises(DegenerateInputError, match="zero-width"):
        normalize_points(pts, BoundingExtent.of(pts))


def test_small_grid_rejected():
    pts = _cloud(n=5)
    with pytest.raises(ConfigError):
        normalize_points(pts, BoundingExtent.of(pts), grid_size=3)


def test_overflowing_extent_rejected():
    pts = [RawPoint(-1e308, 0.0, 0.0, 0.0), RawPoint(1e308, 1.0, 1.0, 0.0)]
    ext = BoundingExtent.of(pts)
    assert ext.span == float("inf")
    with pytest.raises(DegenerateInputError, match="non-finite width"):
        normalize_points(pts, ext)
