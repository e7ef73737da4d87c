"""Instance number resolution."""

from __future__ import annotations

import logging
from typing import Any

from pypgn._constants import DEVICE_INSTANCE_PROPERTY, INSTANCE_MARKER
from pypgn.ingestion.normalize import parse_int
from pypgn.models.message import DecodedMessage, ScalarField
from pypgn.registry import DeviceRegistry

_logger = logging.getLogger(__name__)


def find_field_instance(message: DecodedMessage) -> int | None:
    """Return the integer value of the first field whose label mentions ``Instance``.

    Only that first field is considered; when its value is not an integer
    (or is a repeated group) the result is ``None`` so the registry applies.
    """
    for label, value in message.fields.items():
        if INSTANCE_MARKER not in label:
            continue
        if not isinstance(value, ScalarField):
            return None
        return parse_int(value.value)
    return None


def resolve_instance(message: DecodedMessage, registry: DeviceRegistry) -> Any:
    """Resolve the logical instance used for path placeholders.

    Falls back to the registry's ``deviceInstance`` property for the message
    source. The registry value is returned as found and may be ``None`` or
    not an integer; callers validate it before use.
    """
    instance = find_field_instance(message)
    if instance is not None:
        _logger.debug("Found data instance %s pgn=%s src=%s", instance, message.pgn, message.source_address)
        return instance
    return registry.lookup(message.source_address, DEVICE_INSTANCE_PROPERTY)
