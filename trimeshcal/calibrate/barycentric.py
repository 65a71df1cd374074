from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import numpy as np
from ..geometry.primitives import Point2D, Triangle, PointLike

class DegenerateTriangle(ValueError):
    """Triangle whose barycentric solve is undefined (collinear or zero denominator)."""
    def __init__(self, triangle: Triangle, reason: str):
        self.triangle = triangle
        self.reason = reason
        pts = ", ".join(f"({p.x:g},{p.y:g})" for p in triangle.vertices())
        super().__init__(f"degenerate triangle [{pts}]: {reason}")

@dataclass(frozen=True)
class BarycentricWeights:
    a: float; b: float; c: float

    @property
    def inside(self) -> bool:
        # inside or on the boundary; NaN weights compare false
        return self.a >= 0 and self.b >= 0 and self.c >= 0

    @property
    def on_boundary(self) -> bool:
        return self.inside and (self.a == 0 or self.b == 0 or self.c == 0)

    def as_tuple(self) -> Tuple[float,float,float]:
        return (self.a, self.b, self.c)

def _denominators(tri: Triangle) -> Tuple[float,float,float]:
    A, B, C = tri.vertices()
    dx = B.x - A.x
    if dx == 0:
        raise DegenerateTriangle(tri, "vertical AB edge")
    dy = B.y - A.y
    if dy == 0:
        raise DegenerateTriangle(tri, "horizontal AB edge")
    den = (A.x - C.x) / dx - (A.y - C.y) / dy
    if den == 0:
        raise DegenerateTriangle(tri, "zero denominator")
    return dx, dy, den

def check_solvable(tri: Triangle) -> None:
    """Raise DegenerateTriangle if `weights` would divide by zero for `tri`."""
    _denominators(tri)

def weights(tri: Triangle, q: PointLike) -> BarycentricWeights:
    """
    Solve  a*A + b*B + c*C = q,  a + b + c = 1
    for c first, then b, with a derived so the weights always sum to one.
    """
    q = Point2D.of(q)
    A, B, C = tri.vertices()
    dx, dy, den = _denominators(tri)
    c = ((q.y - A.y) / dy - (q.x - A.x) / dx) / den
    b = (q.x - A.x + c * (A.x - C.x)) / dx
    a = 1.0 - b - c
    return BarycentricWeights(a, b, c)

def interpolate(tri: Triangle, w: BarycentricWeights) -> Point2D:
    A, B, C = tri.vertices()
    return Point2D(w.a * A.x + w.b * B.x + w.c * C.x,
                   w.a * A.y + w.b * B.y + w.c * C.y)

def solve(src: Triangle, dst: Triangle, q: PointLike) -> Tuple[BarycentricWeights, Point2D]:
    """Weights of q w.r.t. src and the same weights applied to dst."""
    w = weights(src, q)
    return w, interpolate(dst, w)

def solve_many(src: Triangle, dst: Triangle, pts: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    pts: (N,2) query points in source space
    returns (N,3) weights [a,b,c] and (N,2) mapped points
    """
    pts = np.asarray(pts, dtype=np.float64).reshape(-1, 2)
    dx, dy, den = _denominators(src)
    A, _, C = src.as_array()
    c = ((pts[:,1] - A[1]) / dy - (pts[:,0] - A[0]) / dx) / den
    b = (pts[:,0] - A[0] + c * (A[0] - C[0])) / dx
    a = 1.0 - b - c
    W = np.stack([a, b, c], axis=1)
    return W, W @ dst.as_array()
