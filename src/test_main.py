"""Tests for the command-line entry point."""

import json

import pytest

from main import main


def test_demo_to_json(tmp_path):
    output = tmp_path / "layout.json"

    assert main(["--demo", "-o", str(output)]) == 0

    layout = json.loads(output.read_text(encoding="utf-8"))
    ids = {p["id"] for p in layout["positions"] if isinstance(p["id"], str)}
    assert {"gg1", "g1", "c3", "pet4"} <= ids
    assert {"anchor": 0} in [p["id"] for p in layout["positions"]]
    assert layout["dimensions"]["width"] >= 900


def test_json_input_to_dot(tmp_path):
    source = tmp_path / "tree.json"
    source.write_text(
        json.dumps(
            {
                "members": [
                    {"id": "a", "firstName": "Ann", "generation": 0, "childIds": ["b"]},
                    {"id": "b", "firstName": "Ben", "generation": 1, "parentIds": ["a"]},
                ],
                "rootMemberIds": ["a"],
            }
        ),
        encoding="utf-8",
    )
    output = tmp_path / "tree.dot"

    assert main([str(source), "-o", str(output), "--node-width", "100"]) == 0
    assert "digraph" in output.read_text(encoding="utf-8")


def test_input_or_demo_required():
    with pytest.raises(SystemExit):
        main([])
