import json

import pytest

import drawing_ir.__main__ as cli

VIEWS = {
    "front": {"visible": ["M0 0 L40 0"], "hidden": ["M0 10 L40 10"], "viewBox": "0 0 40 20"},
    "top": {"visible": ["M0 0 L40 0"], "viewBox": "0 0 40 4"},
    "right": "not a view",
}


def _write_views(tmp_path, payload):
    path = tmp_path / "views.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_main_writes_drawing_json(tmp_path):
    views_path = _write_views(tmp_path, VIEWS)
    output_path = tmp_path / "out" / "drawing.json"

    cli.main([str(views_path), "--no-normalize", "--output", str(output_path)])

    drawing = json.loads(output_path.read_text(encoding="utf-8"))
    assert drawing["viewBox"] == "0 0 40 44"
    assert [p["view"] for p in drawing["placements"]] == ["front", "top"]
    assert drawing["placements"][1]["translate"] == [0, 40]
    assert [p["id"] for p in drawing["paths"]] == [
        "standard_front_visible_0_0",
        "standard_front_hidden_0_0",
        "standard_top_visible_0_0",
    ]
    top_line = drawing["paths"][2]
    assert top_line["type"] == "line"
    assert top_line["view"] == "top"
    assert top_line["geometry"] == {"endpoints": [[0, 40], [40, 40]], "length": 40}


def test_main_prints_part_layout(tmp_path, capsys):
    payload = {
        "front": {"visible": ["M15 10 A5 5 0 1 0 25 10 A5 5 0 1 0 15 10"], "viewBox": "10 0 20 20"},
    }
    views_path = _write_views(tmp_path, payload)

    cli.main([str(views_path), "--mode", "part", "--no-normalize"])

    drawing = json.loads(capsys.readouterr().out)
    assert drawing["viewBox"] == "0 0 20 20"
    (circle,) = drawing["paths"]
    assert circle["id"] == "part_front_visible_0_circle"
    assert circle["geometry"]["center"] == pytest.approx([10, 10])
    assert circle["geometry"]["diameter"] == pytest.approx(10)


def test_main_without_usable_views(tmp_path, capsys):
    views_path = _write_views(tmp_path, {"front": {"visible": [], "viewBox": "bad"}})

    cli.main([str(views_path)])

    drawing = json.loads(capsys.readouterr().out)
    assert drawing == {"viewBox": None, "placements": [], "paths": []}


@pytest.mark.parametrize("content", [None, "{not json", "[1, 2]"])
def test_main_rejects_unreadable_input(tmp_path, content):
    views_path = tmp_path / "views.json"
    if content is not None:
        views_path.write_text(content, encoding="utf-8")

    with pytest.raises(SystemExit) as exc:
        cli.main([str(views_path)])
    assert exc.value.code == 1
