from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Optional, Tuple
import time
from ..calibrate.mesh import MappingResult

class Point(BaseModel):
    x: float; y: float

class MappingEvent(BaseModel):
    ts: float = Field(default_factory=lambda: time.time())
    query: Point
    found: bool = False
    mapped: Optional[Point] = None
    cell: Optional[int] = None
    name: Optional[str] = None
    weights: Optional[Tuple[float,float,float]] = None

    @classmethod
    def from_result(cls, q: Point, res: MappingResult) -> "MappingEvent":
        if not res.found:
            return cls(query=q)
        return cls(query=q, found=True, mapped=Point(x=res.point.x, y=res.point.y),
                   cell=res.index, name=res.pair.name, weights=res.weights.as_tuple())
