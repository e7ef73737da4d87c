"""Transform rule configuration models.

The on-disk shape matches what the host's plugin UI stores::

    {"pgns": [{"pgn": 130820, "basePath": "electrical.{Instance}",
               "manufacturer": "Fusion", "fields": "Volume, Source"}]}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

from pydantic import AliasChoices, Field, ValidationError, WithJsonSchema, field_validator

from pypgn.exceptions import PgnConfigError
from pypgn.models._base import PgnBaseModel

FieldAllowList = Annotated[
    tuple[str, ...] | None,
    WithJsonSchema(
        {
            "type": "string",
            "title": "PGN fields",
            "description": (
                "Comma separated list of data fields. If no fields are selected then all fields will be returned."
            ),
        }
    ),
]


class TransformRule(PgnBaseModel):
    """Maps one PGN (optionally one manufacturer's variant of it) onto a base path."""

    pgn: int = Field(..., title="PGN", description="The PGN to parse.")
    base_path: str = Field(..., title="Base Path", description="The path to map it to")
    manufacturer_filter: str | None = Field(
        default=None,
        validation_alias=AliasChoices("manufacturer", "manufacturerFilter", "manufacturer_filter"),
        title="Manufacturer",
        description="Optional: Used for proprietary PGNs.",
    )
    field_allow_list: FieldAllowList = Field(
        default=None,
        validation_alias=AliasChoices("fields", "fieldAllowList", "field_allow_list"),
    )

    @field_validator("field_allow_list", mode="before")
    @classmethod
    def _split_field_labels(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            labels = tuple(str(item).strip() for item in value)
            # Blank entries ("A,,B" or a trailing comma) are dropped.
            labels = tuple(label for label in labels if label)
            return labels or None
        return value

    def matches_manufacturer(self, manufacturer: Any) -> bool:
        """Return True when the rule has no filter or the filter equals *manufacturer*."""
        if not self.manufacturer_filter:
            return True
        return manufacturer == self.manufacturer_filter


class PluginOptions(PgnBaseModel):
    """Ordered rule set loaded once at start."""

    pgns: tuple[TransformRule, ...] = Field(default=(), title="PGNs")


def parse_options(data: Any) -> PluginOptions:
    """Validate a decoded options document."""
    try:
        return PluginOptions.model_validate(data if data is not None else {})
    except ValidationError as exc:
        raise PgnConfigError(f"Invalid PGN rule set: {exc}") from exc


def load_options(path: str | Path) -> PluginOptions:
    """Read and validate a JSON options file."""
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PgnConfigError(f"Cannot read rule set {file_path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PgnConfigError(f"Rule set {file_path} is not valid JSON: {exc}") from exc
    return parse_options(data)
