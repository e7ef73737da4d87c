"""Base path template expansion.

A template such as ``"electrical.batteries.{Battery Instance}.{Source}"`` is
expanded per message. Placeholder spans are recorded in one left-to-right
scan and the output is built by concatenation, so resolved text (which may
itself contain braces) is never scanned again.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pypgn._constants import CAN_NAME_MARKER, CAN_NAME_PROPERTY, INSTANCE_MARKER, SOURCE_MARKER
from pypgn.ingestion.normalize import camel_case, parse_int, to_text
from pypgn.models.message import DecodedMessage, RepeatedGroup, ScalarField
from pypgn.registry import DeviceRegistry


@dataclass(frozen=True)
class TemplateResolution:
    """Expanded path plus diagnostics for placeholders that could not be resolved."""

    path: str
    failures: tuple[str, ...] = ()


def find_placeholders(template: str) -> list[tuple[int, int]]:
    """Return ``(start, end)`` spans of ``{...}`` placeholders, braces included."""
    spans: list[tuple[int, int]] = []
    pos = 0
    while True:
        start = template.find("{", pos)
        if start < 0:
            break
        end = template.find("}", start + 1)
        if end < 0:
            break
        spans.append((start, end + 1))
        pos = end + 1
    return spans


def _resolve_name(
    name: str,
    message: DecodedMessage,
    instance: Any,
    registry: DeviceRegistry,
) -> tuple[str, str | None]:
    field = message.get(name)
    if isinstance(field, ScalarField):
        return to_text(camel_case(field.value)), None
    if isinstance(field, RepeatedGroup):
        return "", f"field {name} is a repeated group and cannot be used in a path (pgn {message.pgn})"

    if INSTANCE_MARKER in name:
        parsed = parse_int(instance)
        if parsed is None:
            return "", f"Instance not found for pgn {message.pgn} source {message.source_address}"
        return str(parsed), None

    if SOURCE_MARKER in name:
        return str(message.source_address), None

    if CAN_NAME_MARKER in name:
        can_name = registry.lookup(message.source_address, CAN_NAME_PROPERTY)
        if can_name is None:
            return "", f"canName not found for pgn {message.pgn} source {message.source_address}"
        return to_text(can_name), None

    return "", f"replacement not found for field {name}"


def resolve_template(
    template: str,
    message: DecodedMessage,
    instance: Any,
    registry: DeviceRegistry,
) -> TemplateResolution:
    """Expand every placeholder in *template* for *message*.

    Each distinct placeholder literal is resolved once, in order of first
    appearance, and all of its occurrences receive the same text.
    Unresolvable placeholders become ``""`` and are reported in
    :attr:`TemplateResolution.failures`.
    """
    spans = find_placeholders(template)
    if not spans:
        return TemplateResolution(path=template)

    resolved: dict[str, str] = {}
    failures: list[str] = []
    for start, end in spans:
        literal = template[start:end]
        if literal in resolved:
            continue
        value, failure = _resolve_name(literal[1:-1], message, instance, registry)
        resolved[literal] = value
        if failure is not None:
            failures.append(failure)

    parts: list[str] = []
    pos = 0
    for start, end in spans:
        parts.append(template[pos:start])
        parts.append(resolved[template[start:end]])
        pos = end
    parts.append(template[pos:])
    return TemplateResolution(path="".join(parts), failures=tuple(failures))
