import json

from geodata.cli import main

POINTS = {
    "type": "FeatureCollection",
    "features": [
        {"type": "Feature", "geometry": {"type": "Point", "coordinates": [30.3351, 59.9343]}, "properties": {"name": "Saint Petersburg"}},
        {"type": "Feature", "geometry": {"type": "Point", "coordinates": [37.6173, 55.7558]}, "properties": {"name": "Moscow"}},
    ],
}

SQUARE = {
    "type": "FeatureCollection",
    "features": [
        {"type": "Feature", "geometry": {"type": "Polygon", "coordinates": [[[0, 0], [4, 0], [4, 4], [0, 4]]]}, "properties": {}}
    ],
}


def _write(tmp_path, name, payload):
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_cli_nearest_prints_feature(tmp_path, capsys):
    path = _write(tmp_path, "points.geojson", POINTS)
    assert main(["nearest", path, "--lat", "55.75", "--lon", "37.6"]) == 0
    out = capsys.readouterr().out
    assert "nearest feature: #1" in out
    assert "name: Moscow" in out


def test_cli_nearest_json(tmp_path, capsys):
    path = _write(tmp_path, "points.geojson", POINTS)
    assert main(["nearest", path, "--lat", "60", "--lon", "30", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["index"] == 0
    assert payload["feature"]["properties"]["name"] == "Saint Petersburg"


def test_cli_area(tmp_path, capsys):
    path = _write(tmp_path, "square.geojson", SQUARE)
    assert main(["area", path]) == 0
    assert "area: 16.000000" in capsys.readouterr().out


def test_cli_area_on_point_reports_error(tmp_path, capsys):
    path = _write(tmp_path, "points.geojson", POINTS)
    assert main(["area", path]) == 2
    assert "error: wrong_geometry_type" in capsys.readouterr().err


def test_cli_distance(tmp_path, capsys):
    a = _write(tmp_path, "a.geojson", {"type": "FeatureCollection", "features": POINTS["features"][1:]})
    b = _write(tmp_path, "b.geojson", POINTS)
    assert main(["distance", a, b]) == 0
    out = capsys.readouterr().out
    km = float(out.split()[1])
    assert 629 <= km <= 639


def test_cli_info(tmp_path, capsys):
    path = _write(tmp_path, "points.geojson", POINTS)
    assert main(["info", path, "--index", "1"]) == 0
    out = capsys.readouterr().out
    assert "features=2 | Point=2" in out
    assert "geometry type: Point" in out
    assert "coordinates: [37.6173, 55.7558]" in out


def test_cli_info_on_empty_collection(tmp_path, capsys):
    path = _write(tmp_path, "empty.geojson", {"type": "FeatureCollection", "features": []})
    assert main(["info", path]) == 2
    assert "error: empty_collection" in capsys.readouterr().err


def test_cli_missing_file_reports_error(tmp_path, capsys):
    assert main(["area", str(tmp_path / "missing.geojson")]) == 2
    assert "error: invalid_input" in capsys.readouterr().err


def test_cli_typed_paths_are_relative_to_cwd(tmp_path, monkeypatch, capsys):
    # A same-named file at the project root must not shadow the one in the cwd.
    (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
    _write(tmp_path, "sq.geojson", POINTS)
    sub = tmp_path / "sub"
    sub.mkdir()
    _write(sub, "sq.geojson", SQUARE)
    monkeypatch.chdir(sub)

    assert main(["area", "sq.geojson"]) == 0
    assert "area: 16.000000" in capsys.readouterr().out


def test_cli_default_path_is_relative_to_project_root(tmp_path, monkeypatch, capsys):
    (tmp_path / "pyproject.toml").write_text("", encoding="utf-8")
    (tmp_path / "data").mkdir()
    _write(tmp_path / "data", "square.geojson", SQUARE)
    sub = tmp_path / "sub"
    sub.mkdir()
    monkeypatch.chdir(sub)
    monkeypatch.setenv("GEODATA_DATA_PATH", "data/square.geojson")

    assert main(["area"]) == 0
    assert "area: 16.000000" in capsys.readouterr().out
