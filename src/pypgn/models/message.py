"""Decoded analyzer messages.

A field value is a tagged union of :class:`ScalarField` and
:class:`RepeatedGroup`; consumers branch on the type instead of probing the
raw value for list-ness.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeAlias

from pypgn.exceptions import PgnDecodeError

Scalar: TypeAlias = str | int | float | bool | None


@dataclass(frozen=True)
class ScalarField:
    """A single labelled value."""

    value: Scalar


@dataclass(frozen=True)
class RepeatedGroup:
    """Ordered nested records, e.g. the satellite list of PGN 129540."""

    records: tuple[Mapping[str, Scalar], ...]

    def __iter__(self) -> Iterator[Mapping[str, Scalar]]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)


FieldValue: TypeAlias = ScalarField | RepeatedGroup


def to_field_value(value: Any) -> FieldValue:
    """Wrap a raw analyzer value in the matching tag."""
    if isinstance(value, (list, tuple)) and all(isinstance(item, Mapping) for item in value):
        return RepeatedGroup(records=tuple(MappingProxyType(dict(item)) for item in value))
    return ScalarField(value=value)


@dataclass(frozen=True)
class DecodedMessage:
    """One PGN occurrence as decoded by the network analyzer.

    ``fields`` must hold :class:`ScalarField`/:class:`RepeatedGroup` values;
    use :meth:`from_fields` or :meth:`from_analyzer` to wrap plain data.
    """

    pgn: int
    source_address: int
    fields: Mapping[str, FieldValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for label, value in self.fields.items():
            if not isinstance(value, (ScalarField, RepeatedGroup)):
                raise TypeError(
                    f"field {label!r} holds {type(value).__name__}; wrap values with DecodedMessage.from_fields"
                )

    def get(self, label: str) -> FieldValue | None:
        """Return the field stored under *label*, or ``None`` when it is missing."""
        return self.fields.get(label)

    def scalar(self, label: str) -> Scalar:
        """Return the scalar value under *label*; ``None`` when missing or a group."""
        value = self.fields.get(label)
        if isinstance(value, ScalarField):
            return value.value
        return None

    def labels(self) -> tuple[str, ...]:
        return tuple(self.fields)

    @classmethod
    def from_fields(cls, pgn: int, source_address: int, fields: Mapping[str, Any]) -> DecodedMessage:
        """Build a message from plain label -> value data."""
        wrapped = {str(label): to_field_value(value) for label, value in fields.items()}
        return cls(pgn=pgn, source_address=source_address, fields=MappingProxyType(wrapped))

    @classmethod
    def from_analyzer(cls, payload: Mapping[str, Any]) -> DecodedMessage:
        """Build a message from one analyzer JSON object.

        Only ``pgn``, ``src`` and ``fields`` are used; extras such as
        ``timestamp``, ``prio``, ``dst`` and ``description`` are ignored.
        """
        if not isinstance(payload, Mapping):
            raise PgnDecodeError(f"Analyzer payload must be an object, got {type(payload).__name__}")
        try:
            pgn = int(payload["pgn"])
            source_address = int(payload.get("src", 0))
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise PgnDecodeError(f"Analyzer payload has no usable pgn/src: {exc}") from exc

        fields = payload.get("fields") or {}
        if not isinstance(fields, Mapping):
            raise PgnDecodeError(f"Analyzer fields for pgn {pgn} must be an object")
        return cls.from_fields(pgn, source_address, fields)
