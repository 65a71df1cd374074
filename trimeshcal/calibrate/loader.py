from __future__ import annotations
import json, logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
import yaml
from pydantic import BaseModel, Field, field_validator
from .mesh import DEFAULT_AREA_EPS, TriangleMeshCalibrator, TrianglePair

logger = logging.getLogger(__name__)

Vertex = Tuple[float, float]

class CellSpec(BaseModel):
    name: Optional[str] = None
    src: List[Vertex]
    dst: List[Vertex]

    @field_validator("src", "dst")
    @classmethod
    def _three_vertices(cls, v: List[Vertex]) -> List[Vertex]:
        if len(v) != 3:
            raise ValueError(f"expected 3 vertices, got {len(v)}")
        return v

    def to_pair(self) -> TrianglePair:
        return TrianglePair.of(self.src, self.dst, self.name)

class MeshSpec(BaseModel):
    area_eps: float = Field(default=DEFAULT_AREA_EPS, ge=0.0)
    cells: List[CellSpec] = []

def calibrator_from_dict(cfg: Dict[str,Any]) -> TriangleMeshCalibrator:
    spec = MeshSpec.model_validate(cfg)
    return TriangleMeshCalibrator([c.to_pair() for c in spec.cells], area_eps=spec.area_eps)

def mesh_to_dict(cal: TriangleMeshCalibrator) -> Dict[str,Any]:
    cells = []
    for p in cal:
        cell = CellSpec(name=p.name,
                        src=[v.as_tuple() for v in p.src.vertices()],
                        dst=[v.as_tuple() for v in p.dst.vertices()])
        cells.append(cell.model_dump(mode="json", exclude_none=True))
    return {"area_eps": cal.area_eps, "cells": cells}

def _is_yaml(path: Path) -> bool:
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"): return True
    if suffix == ".json": return False
    raise ValueError(f"unsupported mesh file type: {path.suffix!r} (use .yaml, .yml or .json)")

def load_mesh(path: str|Path) -> TriangleMeshCalibrator:
    path = Path(path)
    as_yaml = _is_yaml(path)
    text = path.read_text()
    cfg = (yaml.safe_load(text) if as_yaml else json.loads(text)) or {}
    cal = calibrator_from_dict(cfg)
    logger.info("loaded %d cells from %s", len(cal), path)
    return cal

def save_mesh(path: str|Path, cal: TriangleMeshCalibrator) -> None:
    path = Path(path)
    data = mesh_to_dict(cal)
    if _is_yaml(path):
        path.write_text(yaml.safe_dump(data, sort_keys=False))
    else:
        path.write_text(json.dumps(data, indent=2))
    logger.info("saved %d cells to %s", len(cal), path)

def reference_single() -> TriangleMeshCalibrator:
    return calibrator_from_dict({"cells": [
        {"name": "main",
         "src": [[100,100],[200,200],[50,200]],
         "dst": [[300,300],[400,400],[250,400]]},
    ]})

def reference_quad() -> TriangleMeshCalibrator:
    """Quad (79,9) (258,30) (297,207) (78,225) split along the (79,9)-(297,207) diagonal."""
    return calibrator_from_dict({"cells": [
        {"name": "upper",
         "src": [[79,9],[258,30],[297,207]],
         "dst": [[400,100],[700,100],[700,400]]},
        {"name": "lower",
         "src": [[79,9],[78,225],[297,207]],
         "dst": [[400,100],[400,400],[700,400]]},
    ]})

BUILTIN = {"single": reference_single, "quad": reference_quad}

def resolve_mesh(ref: str) -> TriangleMeshCalibrator:
    """Built-in name or path to a mesh file."""
    if ref in BUILTIN and not Path(ref).exists():
        return BUILTIN[ref]()
    return load_mesh(ref)
