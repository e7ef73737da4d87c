from __future__ import annotations

import json
from pathlib import Path

import pytest

from pypgn.exceptions import PgnConfigError
from pypgn.ingestion.rules import resolve_rule
from pypgn.models.message import DecodedMessage
from pypgn.models.rule import PluginOptions, TransformRule, load_options, parse_options


def _message(pgn: int, **fields: object) -> DecodedMessage:
    return DecodedMessage.from_fields(pgn, 35, fields)


def test_rule_parses_host_option_keys() -> None:
    rule = TransformRule.model_validate(
        {"pgn": 130820, "basePath": "entertainment.{Source}", "manufacturer": "Fusion", "fields": " Volume , Zone"}
    )

    assert rule.pgn == 130820
    assert rule.base_path == "entertainment.{Source}"
    assert rule.manufacturer_filter == "Fusion"
    assert rule.field_allow_list == ("Volume", "Zone")


def test_rule_accepts_list_allow_list_and_drops_blank_entries() -> None:
    rule = TransformRule.model_validate({"pgn": 1, "basePath": "a", "fields": ["x", " ", "y "]})
    assert rule.field_allow_list == ("x", "y")


def test_rule_string_allow_list_drops_empty_entries() -> None:
    rule = TransformRule.model_validate({"pgn": 1, "basePath": "a", "fields": "A,,B,"})
    assert rule.field_allow_list == ("A", "B")


def test_rule_blank_optional_values_mean_unset() -> None:
    rule = TransformRule.model_validate({"pgn": 1, "basePath": "a", "manufacturer": "", "fields": "  "})
    assert rule.manufacturer_filter is None
    assert rule.field_allow_list is None


@pytest.mark.parametrize(
    "entry",
    [
        {"basePath": "a"},
        {"pgn": 1},
        {"pgn": 1, "basePath": ""},
        {"pgn": "not-a-number", "basePath": "a"},
    ],
)
def test_invalid_rules_rejected(entry: dict[str, object]) -> None:
    with pytest.raises(PgnConfigError):
        parse_options({"pgns": [entry]})


def test_missing_options_yield_empty_rule_set() -> None:
    assert parse_options(None).pgns == ()
    assert parse_options({}).pgns == ()


def test_schema_requires_pgn_and_base_path() -> None:
    schema = PluginOptions.model_json_schema(by_alias=True)
    rule_schema = schema["$defs"]["TransformRule"]

    assert set(rule_schema["required"]) == {"pgn", "basePath"}
    assert set(rule_schema["properties"]) == {"pgn", "basePath", "manufacturer", "fields"}
    assert rule_schema["properties"]["fields"]["type"] == "string"


def test_load_options_from_file(tmp_path: Path) -> None:
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"pgns": [{"pgn": 127508, "basePath": "electrical.batteries.{Instance}"}]}))

    options = load_options(path)

    assert [rule.pgn for rule in options.pgns] == [127508]


def test_load_options_reports_bad_files(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")

    with pytest.raises(PgnConfigError):
        load_options(broken)
    with pytest.raises(PgnConfigError):
        load_options(tmp_path / "missing.json")


def test_no_rule_for_pgn() -> None:
    rules = [TransformRule(pgn=1, base_path="a")]
    assert resolve_rule(_message(2), rules) is None


def test_first_matching_rule_wins() -> None:
    first = TransformRule(pgn=1, base_path="first")
    second = TransformRule(pgn=1, base_path="second")
    assert resolve_rule(_message(1), [first, second]) is first


def test_manufacturer_filter_must_match_exactly() -> None:
    rule = TransformRule(pgn=126720, base_path="fusion", manufacturer_filter="Fusion")

    assert resolve_rule(_message(126720, **{"Manufacturer Code": "Fusion"}), [rule]) is rule
    assert resolve_rule(_message(126720, **{"Manufacturer Code": "fusion"}), [rule]) is None
    assert resolve_rule(_message(126720, **{"Manufacturer Code": "Garmin"}), [rule]) is None
    assert resolve_rule(_message(126720), [rule]) is None


def test_rule_without_filter_matches_any_manufacturer() -> None:
    rule = TransformRule(pgn=126720, base_path="any")
    assert resolve_rule(_message(126720, **{"Manufacturer Code": "Garmin"}), [rule]) is rule
    assert resolve_rule(_message(126720), [rule]) is rule


def test_later_rule_selected_when_earlier_filter_does_not_match() -> None:
    garmin = TransformRule(pgn=126720, base_path="garmin", manufacturer_filter="Garmin")
    fusion = TransformRule(pgn=126720, base_path="fusion", manufacturer_filter="Fusion")

    message = _message(126720, **{"Manufacturer Code": "Fusion"})

    assert resolve_rule(message, [garmin, fusion]) is fusion
