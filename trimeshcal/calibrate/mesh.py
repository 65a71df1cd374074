from __future__ import annotations
import logging, math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union
import numpy as np
from ..geometry.primitives import Point2D, Triangle, PointLike
from .barycentric import BarycentricWeights, DegenerateTriangle, check_solvable, solve, solve_many

logger = logging.getLogger(__name__)

DEFAULT_AREA_EPS = 1e-9

@dataclass(frozen=True)
class TrianglePair:
    """One calibration cell: source triangle -> destination triangle (A<->A, B<->B, C<->C)."""
    src: Triangle; dst: Triangle
    name: Optional[str] = None

    @staticmethod
    def of(src, dst, name: Optional[str]=None) -> "TrianglePair":
        return TrianglePair(Triangle.of(src), Triangle.of(dst), name)

@dataclass(frozen=True)
class Mapped:
    point: Point2D
    pair: TrianglePair
    weights: BarycentricWeights
    index: int
    found = True

@dataclass(frozen=True)
class NotFound:
    query: Point2D
    found = False

MappingResult = Union[Mapped, NotFound]
CalibrationMesh = Tuple[TrianglePair, ...]

def validate_pair(pair: TrianglePair, area_eps: float=DEFAULT_AREA_EPS) -> None:
    for tri in (pair.src, pair.dst):
        if tri.is_degenerate(area_eps):
            raise DegenerateTriangle(tri, f"collinear (|area| <= {area_eps:g})")
    # only the source side is divided through
    check_solvable(pair.src)

class TriangleMeshCalibrator:
    """
    Ordered triangle-pair mesh with first-match-wins lookup.
    Mutators swap in a new tuple, so a query always walks a complete snapshot.
    """
    def __init__(self, pairs: Iterable[TrianglePair]=(), area_eps: float=DEFAULT_AREA_EPS):
        self.area_eps = area_eps
        self._mesh: CalibrationMesh = ()
        self.extend(pairs)

    @classmethod
    def from_triangles(cls, src: Sequence, dst: Sequence, area_eps: float=DEFAULT_AREA_EPS) -> "TriangleMeshCalibrator":
        if len(src) != len(dst):
            raise ValueError(f"got {len(src)} source and {len(dst)} destination triangles")
        return cls([TrianglePair.of(s, d) for s, d in zip(src, dst)], area_eps=area_eps)

    @property
    def mesh(self) -> CalibrationMesh:
        return self._mesh

    def __len__(self) -> int:
        return len(self._mesh)

    def __iter__(self) -> Iterator[TrianglePair]:
        return iter(self._mesh)

    def add_pair(self, pair: TrianglePair) -> int:
        validate_pair(pair, self.area_eps)
        self._mesh = self._mesh + (pair,)
        logger.debug("added cell %d (%s)", len(self._mesh) - 1, pair.name or "unnamed")
        return len(self._mesh) - 1

    def extend(self, pairs: Iterable[TrianglePair]) -> None:
        pairs = tuple(pairs)
        for p in pairs:
            validate_pair(p, self.area_eps)
        self._mesh = self._mesh + pairs
        if pairs:
            logger.debug("added %d cells, mesh now has %d", len(pairs), len(self._mesh))

    def remove_pair(self, index: int) -> TrianglePair:
        mesh = list(self._mesh)
        pair = mesh.pop(index)
        self._mesh = tuple(mesh)
        return pair

    def clear(self) -> None:
        self._mesh = ()

    def map(self, q: PointLike) -> MappingResult:
        q = Point2D.of(q)
        mesh = self._mesh
        if not (math.isfinite(q.x) and math.isfinite(q.y)):
            logger.debug("non-finite query (%g, %g)", q.x, q.y)
            return NotFound(q)
        for i, pair in enumerate(mesh):
            w, pt = solve(pair.src, pair.dst, q)
            if w.inside:
                return Mapped(pt, pair, w, i)
        logger.debug("(%g, %g) outside all %d cells", q.x, q.y, len(mesh))
        return NotFound(q)

    def locate(self, q: PointLike) -> Optional[int]:
        res = self.map(q)
        return res.index if res.found else None

    def map_points(self, pts) -> Tuple[np.ndarray, np.ndarray]:
        """
        Batch form of map().
        pts: (N,2); returns mapped (N,2) with NaN rows for misses, and
        the matching cell index per row (-1 for misses).
        """
        pts = np.asarray(pts, dtype=np.float64).reshape(-1, 2)
        out = np.full(pts.shape, np.nan)
        idx = np.full(pts.shape[0], -1, dtype=int)
        for i, pair in enumerate(self._mesh):
            todo = idx < 0
            if not todo.any(): break
            W, xy = solve_many(pair.src, pair.dst, pts[todo])
            hit = (W >= 0).all(axis=1)
            rows = np.flatnonzero(todo)[hit]
            out[rows] = xy[hit]
            idx[rows] = i
        return out, idx
