from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from pypgn.cli import main, replay_lines
from pypgn.models.rule import parse_options

_RULES = {"pgns": [{"pgn": 127508, "basePath": "electrical.batteries.{Instance}", "fields": "Voltage"}]}


def test_replay_prints_one_delta_per_match() -> None:
    lines = [
        json.dumps({"pgn": 127508, "src": 35, "fields": {"Battery Instance": 2, "Voltage": 12.4}}),
        "",
        "not json",
        json.dumps({"pgn": 1, "src": 35, "fields": {}}),
        json.dumps({"pgn": 127508, "src": 35, "fields": {"Battery Instance": 3, "Voltage": 12.9}}),
    ]
    out = io.StringIO()

    emitted = replay_lines(lines, parse_options(_RULES), out=out)

    assert emitted == 2
    deltas = [json.loads(line) for line in out.getvalue().splitlines()]
    assert deltas[0]["updates"][0]["values"] == [{"path": "electrical.batteries.2.voltage", "value": 12.4}]
    assert deltas[1]["updates"][0]["values"] == [{"path": "electrical.batteries.3.voltage", "value": 12.9}]


def test_replay_uses_sources_snapshot() -> None:
    options = parse_options({"pgns": [{"pgn": 65280, "basePath": "devices.{canName}"}]})
    sources = {"can0": {"dev": {"n2k": {"src": "7", "canName": "abc123"}}}}
    out = io.StringIO()

    replay_lines([json.dumps({"pgn": 65280, "src": 7, "fields": {"X": 1}})], options, sources=sources, out=out)

    assert json.loads(out.getvalue())["updates"][0]["values"] == [{"path": "devices.abc123.x", "value": 1}]


def test_main_schema(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["schema"]) == 0

    schema = json.loads(capsys.readouterr().out)
    assert "pgns" in schema["properties"]


def test_main_replay_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rules = tmp_path / "rules.json"
    rules.write_text(json.dumps(_RULES))
    data = tmp_path / "analyzer.jsonl"
    data.write_text(json.dumps({"pgn": 127508, "src": 1, "fields": {"Battery Instance": 0, "Voltage": 12.0}}) + "\n")

    assert main(["replay", str(rules), str(data)]) == 0

    assert json.loads(capsys.readouterr().out)["updates"][0]["values"][0]["path"] == "electrical.batteries.0.voltage"


def test_main_reports_bad_rules(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rules = tmp_path / "rules.json"
    rules.write_text(json.dumps({"pgns": [{"basePath": "x"}]}))

    assert main(["replay", str(rules), str(tmp_path / "none.jsonl")]) == 2
    assert "pypgn:" in capsys.readouterr().err
