from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple, Union
import numpy as np

PointLike = Union["Point2D", Sequence[float]]

@dataclass(frozen=True)
class Point2D:
    x: float; y: float

    @staticmethod
    def of(p: PointLike) -> "Point2D":
        if isinstance(p, Point2D): return p
        x, y = p
        return Point2D(float(x), float(y))

    def as_tuple(self) -> Tuple[float,float]:
        return (self.x, self.y)

@dataclass(frozen=True)
class Triangle:
    """Three ordered vertices (ptA, ptB, ptC). Not validated on construction."""
    a: Point2D; b: Point2D; c: Point2D

    @staticmethod
    def of(pts: "Triangle|Sequence[PointLike]") -> "Triangle":
        if isinstance(pts, Triangle): return pts
        if len(pts) != 3:
            raise ValueError(f"triangle needs exactly 3 vertices, got {len(pts)}")
        a, b, c = (Point2D.of(p) for p in pts)
        return Triangle(a, b, c)

    def vertices(self) -> Tuple[Point2D,Point2D,Point2D]:
        return (self.a, self.b, self.c)

    def as_array(self) -> np.ndarray:
        return np.array([p.as_tuple() for p in self.vertices()], dtype=np.float64)

    def signed_area(self) -> float:
        # positive for counter-clockwise in a y-up frame
        return 0.5 * ((self.b.x - self.a.x) * (self.c.y - self.a.y)
                      - (self.c.x - self.a.x) * (self.b.y - self.a.y))

    def is_degenerate(self, eps: float = 0.0) -> bool:
        return abs(self.signed_area()) <= eps

    def centroid(self) -> Point2D:
        return Point2D((self.a.x + self.b.x + self.c.x) / 3.0,
                       (self.a.y + self.b.y + self.c.y) / 3.0)
