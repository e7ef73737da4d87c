"""Rule selection for decoded messages."""

from __future__ import annotations

from collections.abc import Iterable

from pypgn._constants import MANUFACTURER_FIELD
from pypgn.models.message import DecodedMessage
from pypgn.models.rule import TransformRule


def resolve_rule(message: DecodedMessage, rules: Iterable[TransformRule]) -> TransformRule | None:
    """Return the first rule that applies to *message*, or ``None``.

    A rule applies when its pgn equals the message pgn and its manufacturer
    filter is unset or equals the message's ``Manufacturer Code`` field.
    """
    manufacturer = message.scalar(MANUFACTURER_FIELD)
    for rule in rules:
        if rule.pgn != message.pgn:
            continue
        if rule.matches_manufacturer(manufacturer):
            return rule
    return None
