"""Normalization helpers.

Centralizes label tokenization and defensive parsing of analyzer values.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any


def _is_upper(char: str) -> bool:
    # A-Z plus Latin-1 uppercase letters (À-Ö, Ø-Þ).
    return "A" <= char <= "Z" or "\xc0" <= char <= "\xd6" or "\xd8" <= char <= "\xde"


def _is_lower(char: str) -> bool:
    # a-z plus Latin-1 lowercase letters (ß-ö, ø-ÿ).
    return "a" <= char <= "z" or "\xdf" <= char <= "\xf6" or "\xf8" <= char <= "\xff"


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def _run_end(text: str, start: int, predicate: Callable[[str], bool]) -> int:
    end = start
    while end < len(text) and predicate(text[end]):
        end += 1
    return end


def tokenize(text: str) -> list[str]:
    """Split *text* into word tokens.

    A token is one of:

    - an optional capital followed by lowercase letters (``Engine``, ``rpm``)
    - an uppercase run not directly followed by a lowercase letter (``AIS``)
    - a digit run (``2``)

    Characters that belong to none of these are separators.
    """
    tokens: list[str] = []
    pos = 0
    size = len(text)
    while pos < size:
        char = text[pos]
        if _is_lower(char):
            end = _run_end(text, pos, _is_lower)
        elif _is_upper(char):
            if pos + 1 < size and _is_lower(text[pos + 1]):
                end = _run_end(text, pos + 1, _is_lower)
            else:
                end = _run_end(text, pos, _is_upper)
                # "AISTarget": the last capital starts the next word.
                if end < size and _is_lower(text[end]):
                    end -= 1
        elif _is_digit(char):
            end = _run_end(text, pos, _is_digit)
        else:
            pos += 1
            continue
        tokens.append(text[pos:end])
        pos = end
    return tokens


def camel_case(value: Any) -> Any:
    """Convert a label or string value into a path-safe camelCase token.

    ``"Engine RPM"`` becomes ``"engineRpm"``. Non-string values are returned
    unchanged; strings without any word characters become ``""``.
    """
    if not isinstance(value, str):
        return value

    parts: list[str] = []
    for index, token in enumerate(tokenize(value)):
        lowered = token.lower()
        if index:
            lowered = lowered[:1].upper() + lowered[1:]
        parts.append(lowered)
    return "".join(parts)


def parse_int(value: Any) -> int | None:
    """Parse an integer the lenient way analyzers report instances.

    Accepts ints, finite floats (truncated) and strings with a leading
    integer (``" 3"``, ``"3 (bank)"``). Booleans and everything else yield
    ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    if not isinstance(value, str):
        return None

    text = value.strip()
    sign = ""
    if text[:1] in ("+", "-"):
        sign, text = text[:1], text[1:]
    end = _run_end(text, 0, _is_digit)
    if end == 0:
        return None
    return int(sign + text[:end])


def to_text(value: Any) -> str:
    """Render a scalar as path text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
