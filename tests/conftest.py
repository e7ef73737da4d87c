from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from pypgn.registry import SnapshotHolder, SourcesRegistry


def sources_tree(*devices: dict[str, Any]) -> dict[str, Any]:
    """Build a /sources tree holding the given n2k descriptors."""
    return {
        "can0": {f"device{index}": {"n2k": dict(device)} for index, device in enumerate(devices)},
        "defaults": "ignored",
    }


@pytest.fixture
def make_sources() -> Callable[..., dict[str, Any]]:
    return sources_tree


@pytest.fixture
def registry() -> SourcesRegistry:
    return SourcesRegistry(
        SnapshotHolder(
            sources_tree(
                {"src": "35", "canName": "c0788c00e7e04312", "deviceInstance": 4},
                {"src": "12", "canName": "a1b2c3d4e5f60718"},
            )
        )
    )
