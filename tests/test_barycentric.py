import numpy as np
import pytest
from trimeshcal.geometry.primitives import Point2D, Triangle
from trimeshcal.calibrate.barycentric import DegenerateTriangle, check_solvable, solve, solve_many, weights

SRC = Triangle.of([(100,100),(200,200),(50,200)])
DST = Triangle.of([(300,300),(400,400),(250,400)])

def test_vertices_map_to_vertices():
    onehot = [(1,0,0),(0,1,0),(0,0,1)]
    for v, d, expect in zip(SRC.vertices(), DST.vertices(), onehot):
        w, pt = solve(SRC, DST, v)
        assert w.as_tuple() == pytest.approx(expect, abs=1e-12)
        assert (pt.x, pt.y) == pytest.approx(d.as_tuple())

def test_reference_vertex_a():
    w, pt = solve(SRC, DST, (100,100))
    assert w.as_tuple() == (1.0, 0.0, 0.0)
    assert pt == Point2D(300.0, 300.0)
    assert w.inside

def test_centroid_maps_to_centroid():
    w, pt = solve(SRC, DST, SRC.centroid())
    assert w.as_tuple() == pytest.approx((1/3, 1/3, 1/3))
    c = DST.centroid()
    assert (pt.x, pt.y) == pytest.approx((c.x, c.y))

def test_weights_sum_to_one_everywhere():
    rng = np.random.default_rng(0)
    for x, y in rng.uniform(-1000, 1000, size=(50,2)):
        w = weights(SRC, (x, y))
        assert w.a + w.b + w.c == pytest.approx(1.0)

def test_far_point_is_outside():
    w = weights(SRC, (1000,1000))
    assert min(w.as_tuple()) < 0
    assert not w.inside

def test_containment_boundary():
    tri = Triangle.of([(0,0),(4,4),(-2,4)])
    inner = weights(tri, tri.centroid())
    assert all(v > 0 for v in inner.as_tuple()) and not inner.on_boundary
    on_ab = weights(tri, (2,2))
    assert on_ab.c == 0 and on_ab.a >= 0 and on_ab.b >= 0
    assert on_ab.on_boundary
    on_ac = weights(tri, (-1,2))
    assert on_ac.b == 0 and on_ac.a >= 0 and on_ac.c >= 0
    assert on_ac.inside
    out = weights(tri, (10,0))
    assert not out.inside

def test_zero_denominators_raise():
    with pytest.raises(DegenerateTriangle, match="vertical"):
        weights(Triangle.of([(0,0),(0,1),(1,0)]), (0.2,0.2))
    with pytest.raises(DegenerateTriangle, match="horizontal"):
        check_solvable(Triangle.of([(0,0),(1,0),(0,1)]))
    with pytest.raises(DegenerateTriangle, match="zero denominator"):
        check_solvable(Triangle.of([(0,0),(1,1),(2,2)]))

def test_solve_many_matches_solve():
    pts = np.array([[100,100],[120,150],[1000,1000],[75,180]], dtype=float)
    W, xy = solve_many(SRC, DST, pts)
    for i, p in enumerate(pts):
        w, pt = solve(SRC, DST, p)
        assert np.allclose(W[i], w.as_tuple())
        assert np.allclose(xy[i], pt.as_tuple())
