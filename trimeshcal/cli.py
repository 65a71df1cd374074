from __future__ import annotations
import logging, sys
from typing import List, NoReturn, Optional
import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from .calibrate.barycentric import DegenerateTriangle
from .calibrate.loader import BUILTIN, resolve_mesh, save_mesh
from .calibrate.mesh import TriangleMeshCalibrator
from .logging_config import setup_logging
from .runtime.feed import map_stream, parse_point, read_points

app = typer.Typer(add_completion=False, help="Triangle mesh calibration CLI (tmc)")

def _fail(msg: str) -> NoReturn:
    Console(stderr=True).print(f"[red]{escape(msg)}[/red]")
    raise typer.Exit(code=1)

def _load(mesh: str) -> TriangleMeshCalibrator:
    try:
        return resolve_mesh(mesh)
    except FileNotFoundError:
        _fail(f"mesh not found: {mesh}")
    except DegenerateTriangle as e:
        _fail(str(e))
    except (ValidationError, ValueError, yaml.YAMLError) as e:
        _fail(f"invalid mesh {mesh}: {e}")

@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="debug logging")):
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

@app.command("map")
def map_cmd(mesh: str = typer.Argument(..., help="mesh file (.yaml/.json) or built-in: " + ", ".join(BUILTIN)),
            point: Optional[List[str]] = typer.Option(None, "--point", "-p", help="'x,y' query; repeatable")):
    """
    Map query points through the mesh and print one JSON event per point.
    Reads points from stdin (one per line) when no --point is given.
    """
    cal = _load(mesh)
    try:
        pts = [parse_point(p) for p in point] if point else list(read_points(sys.stdin))
    except ValueError as e:
        _fail(str(e))
    for ev in map_stream(cal, pts):
        typer.echo(ev.model_dump_json())

@app.command()
def check(mesh: str = typer.Argument(..., help="mesh file or built-in name")):
    """Validate a mesh and list its cells."""
    cal = _load(mesh)
    table = Table(title=f"{mesh}: {len(cal)} cells")
    for col in ("#", "name", "src area", "dst area"):
        table.add_column(col)
    for i, p in enumerate(cal):
        table.add_row(str(i), p.name or "-", f"{p.src.signed_area():.3f}", f"{p.dst.signed_area():.3f}")
    Console().print(table)

@app.command()
def export(name: str = typer.Argument(..., help="built-in mesh: " + ", ".join(BUILTIN)),
           out: str = typer.Argument(..., help="output .yaml/.json path")):
    """Write a built-in mesh to a file."""
    if name not in BUILTIN:
        _fail(f"unknown built-in mesh {name!r}")
    try:
        save_mesh(out, BUILTIN[name]())
    except ValueError as e:
        _fail(str(e))
    except OSError as e:
        _fail(f"cannot write {out}: {e}")
    Console().print("[green]Saved mesh[/green]", out)

if __name__ == "__main__":
    app()
