"""Read-only device registry lookups.

The host keeps a multi-level ``/sources`` tree describing every device seen
on the bus, for example::

    {
        "can0": {
            "c0788c00e7e04312": {"n2k": {"src": "35", "canName": "c0788c00e7e04312", "deviceInstance": 0}},
        },
    }

The registry never copies or caches that tree: every lookup reads the
current snapshot from the host provider.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Protocol

_logger = logging.getLogger(__name__)

SourcesProvider = Callable[[], Mapping[str, Any] | None]


class DeviceRegistry(Protocol):
    """Structural lookup interface consumed by the transform pipeline."""

    def lookup(self, source_address: int, property_name: str) -> Any | None:
        ...


def find_device(sources: Mapping[str, Any] | None, source_address: int) -> Mapping[str, Any] | None:
    """Return the ``n2k`` descriptor recorded for *source_address*, if any."""
    if not isinstance(sources, Mapping):
        return None
    wanted = str(source_address)
    for connection in sources.values():
        if not isinstance(connection, Mapping):
            continue
        for device in connection.values():
            if not isinstance(device, Mapping):
                continue
            n2k = device.get("n2k")
            if isinstance(n2k, Mapping) and "src" in n2k and str(n2k["src"]) == wanted:
                return n2k
    return None


class SourcesRegistry:
    """Registry backed by the host's ``/sources`` tree."""

    def __init__(self, provider: SourcesProvider, *, logger: logging.Logger | None = None) -> None:
        self._provider = provider
        self._logger = logger or _logger

    def lookup(self, source_address: int, property_name: str) -> Any | None:
        self._logger.debug("Looking for device property %s of src=%s", property_name, source_address)
        device = find_device(self._provider(), source_address)
        if device is None or property_name not in device:
            return None
        value = device[property_name]
        self._logger.debug("Found property %s=%s for src=%s", property_name, value, source_address)
        return value


class NullRegistry:
    """Registry for hosts that track no devices."""

    def lookup(self, source_address: int, property_name: str) -> Any | None:
        return None


class SnapshotHolder:
    """Host-side holder for the latest ``/sources`` snapshot.

    Host adapters replace the snapshot as fresh data arrives; the holder is
    callable so it can be passed directly as a :data:`SourcesProvider`.
    """

    def __init__(self, snapshot: Mapping[str, Any] | None = None) -> None:
        self._snapshot: Mapping[str, Any] = snapshot or {}

    def replace(self, snapshot: Mapping[str, Any]) -> None:
        self._snapshot = snapshot

    def __call__(self) -> Mapping[str, Any]:
        return self._snapshot
