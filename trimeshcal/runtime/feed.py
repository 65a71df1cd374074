from __future__ import annotations
import re
from typing import Iterable, Iterator, Tuple
from ..calibrate.mesh import TriangleMeshCalibrator
from .events import MappingEvent, Point

_SEP = re.compile(r"\s*,\s*|\s+")

def parse_point(text: str) -> Tuple[float,float]:
    """Parse 'x,y' or 'x y'."""
    parts = _SEP.split(text.strip())
    if len(parts) != 2:
        raise ValueError(f"expected 'x,y' or 'x y', got {text!r}")
    return float(parts[0]), float(parts[1])

def read_points(lines: Iterable[str]) -> Iterator[Tuple[float,float]]:
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"): continue
        yield parse_point(line)

def map_stream(cal: TriangleMeshCalibrator, points: Iterable[Tuple[float,float]]) -> Iterator[MappingEvent]:
    # one map() per incoming point, in feed order
    for x, y in points:
        q = Point(x=x, y=y)
        yield MappingEvent.from_result(q, cal.map((x, y)))
