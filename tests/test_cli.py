import json
from typer.testing import CliRunner
from trimeshcal.cli import app
from trimeshcal.runtime.feed import parse_point, read_points
import pytest

runner = CliRunner()

def test_parse_point():
    assert parse_point("1,2") == (1.0, 2.0)
    assert parse_point(" 3.5  -4 ") == (3.5, -4.0)
    with pytest.raises(ValueError):
        parse_point("1,2,3")
    for bad in ("1,,2", ",1,2", "1,2,", "", "1"):
        with pytest.raises(ValueError):
            parse_point(bad)
    assert parse_point("1 , 2") == (1.0, 2.0)
    assert list(read_points(["# header", "", "5 6"])) == [(5.0, 6.0)]

def test_map_points_option():
    res = runner.invoke(app, ["map", "single", "-p", "100,100", "-p", "1000,1000"])
    assert res.exit_code == 0
    hit, miss = [json.loads(l) for l in res.stdout.splitlines()]
    assert hit["found"] and hit["mapped"] == {"x": 300.0, "y": 300.0} and hit["cell"] == 0
    assert not miss["found"] and miss["mapped"] is None

def test_map_points_stdin():
    res = runner.invoke(app, ["map", "quad"], input="79 9\n10,10\n")
    assert res.exit_code == 0
    events = [json.loads(l) for l in res.stdout.splitlines()]
    assert [e["found"] for e in events] == [True, False]
    assert events[0]["name"] == "upper"

def test_bad_point_and_mesh(tmp_path):
    assert runner.invoke(app, ["map", "single", "-p", "oops"]).exit_code == 1
    assert runner.invoke(app, ["check", str(tmp_path / "nope.yaml")]).exit_code == 1
    bad = tmp_path / "bad.json"
    bad.write_text(json.dumps({"cells": [{"src": [[0,0],[1,1],[2,2]], "dst": [[0,0],[10,5],[2,10]]}]}))
    assert runner.invoke(app, ["check", str(bad)]).exit_code == 1

def test_check_and_export(tmp_path):
    out = tmp_path / "quad.yaml"
    assert runner.invoke(app, ["export", "quad", str(out)]).exit_code == 0
    assert out.exists()
    res = runner.invoke(app, ["check", str(out)])
    assert res.exit_code == 0
    assert "upper" in res.stdout and "lower" in res.stdout
    assert runner.invoke(app, ["export", "nope", str(out)]).exit_code == 1

def test_non_finite_point_is_not_found():
    res = runner.invoke(app, ["map", "single", "-p", "inf,inf", "-p", "nan 150"])
    assert res.exit_code == 0
    events = [json.loads(l) for l in res.stdout.splitlines()]
    assert [e["found"] for e in events] == [False, False]
    assert all(e["mapped"] is None for e in events)

def test_malformed_yaml_mesh(tmp_path):
    bad = tmp_path / "broken.yaml"
    bad.write_text("cells: [\n  - {src: [[0,0]\n")
    res = runner.invoke(app, ["check", str(bad)])
    assert res.exit_code == 1
    assert isinstance(res.exception, SystemExit)

def test_export_to_missing_directory(tmp_path):
    res = runner.invoke(app, ["export", "quad", str(tmp_path / "no" / "such" / "quad.yaml")])
    assert res.exit_code == 1
    assert isinstance(res.exception, SystemExit)
