"""Produced updates and their Signal K delta representation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PathValue(BaseModel):
    """A single (path, value) pair."""

    model_config = ConfigDict(frozen=True)

    path: str
    value: Any = ""


class ProducedUpdate(BaseModel):
    """All values derived from one decoded message."""

    model_config = ConfigDict(frozen=True)

    values: tuple[PathValue, ...] = Field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.values

    def to_delta(self) -> dict[str, Any]:
        """Return the delta document handed to the host ingestion entry point."""
        return {"updates": [{"values": [item.model_dump() for item in self.values]}]}
