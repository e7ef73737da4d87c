from __future__ import annotations

from pypgn.ingestion.flatten import build_values, select_labels
from pypgn.models.message import DecodedMessage
from pypgn.models.rule import TransformRule


def _pairs(values: list) -> list[tuple[str, object]]:
    return [(item.path, item.value) for item in values]


def test_scalar_fields_in_message_order() -> None:
    message = DecodedMessage.from_fields(1, 0, {"Engine RPM": 1500, "Boost Pressure": 1.2})
    rule = TransformRule(pgn=1, base_path="propulsion.main")

    values = build_values("propulsion.main", select_labels(message, rule), message)

    assert _pairs(values) == [
        ("propulsion.main.engineRpm", 1500),
        ("propulsion.main.boostPressure", 1.2),
    ]


def test_repeated_group_expands_with_indices() -> None:
    message = DecodedMessage.from_fields(129540, 0, {"list": [{"a": 1, "b": 2}, {"a": 3, "b": 4}]})

    values = build_values("gnss.sats", ["list"], message)

    assert _pairs(values) == [
        ("gnss.sats.list.0.a", 1),
        ("gnss.sats.list.0.b", 2),
        ("gnss.sats.list.1.a", 3),
        ("gnss.sats.list.1.b", 4),
    ]


def test_mixed_scalar_and_group_fields() -> None:
    message = DecodedMessage.from_fields(
        129540,
        0,
        {"Sats in View": 2, "list": [{"PRN": 5, "SNR": 38.5}], "SID": 1},
    )

    values = build_values("gnss", message.labels(), message)

    assert _pairs(values) == [
        ("gnss.satsInView", 2),
        ("gnss.list.0.prn", 5),
        ("gnss.list.0.snr", 38.5),
        ("gnss.sid", 1),
    ]


def test_allow_list_restricts_and_orders() -> None:
    message = DecodedMessage.from_fields(1, 0, {"A": 1, "B": 2, "C": 3})
    rule = TransformRule.model_validate({"pgn": 1, "basePath": "x", "fields": " C, A "})

    values = build_values("x", select_labels(message, rule), message)

    assert _pairs(values) == [("x.c", 3), ("x.a", 1)]


def test_missing_selected_field_emits_empty_value() -> None:
    message = DecodedMessage.from_fields(1, 0, {"A": 1})

    values = build_values("x", ["A", "Missing Field"], message)

    assert _pairs(values) == [("x.a", 1), ("x.missingField", "")]


def test_present_null_value_kept() -> None:
    message = DecodedMessage.from_fields(1, 0, {"A": None})

    assert _pairs(build_values("x", ["A"], message)) == [("x.a", None)]


def test_empty_group_emits_nothing() -> None:
    message = DecodedMessage.from_fields(1, 0, {"list": []})

    assert build_values("x", ["list"], message) == []
