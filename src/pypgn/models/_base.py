"""Base model for pypgn configuration records.

Every configuration model inherits from :class:`PgnBaseModel` which
provides:

* ``alias_generator=to_camel`` so the camelCase keys stored by the host's
  plugin UI (``basePath``) map automatically to snake_case fields.
* A ``model_validator(mode="before")`` that strips empty values
  (``None``, ``""``, whitespace) so the field default is used.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class PgnBaseModel(BaseModel):
    """Base for pypgn configuration models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        """Drop keys whose value is ``None`` or a blank string."""
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_empty_values(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return PgnBaseModel._clean_dict(values)
