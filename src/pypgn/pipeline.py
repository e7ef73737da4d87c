"""Per-message transform pipeline."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pypgn.ingestion.flatten import build_values, select_labels
from pypgn.ingestion.instance import resolve_instance
from pypgn.ingestion.rules import resolve_rule
from pypgn.ingestion.template import resolve_template
from pypgn.models.message import DecodedMessage
from pypgn.models.rule import TransformRule
from pypgn.models.update import ProducedUpdate
from pypgn.registry import DeviceRegistry, NullRegistry

_logger = logging.getLogger(__name__)


class PgnTransformer:
    """Turns decoded messages into updates using an immutable rule set.

    The transformer keeps no per-message state: given the same rules,
    registry snapshot and message it always produces the same update.
    """

    def __init__(
        self,
        rules: Iterable[TransformRule],
        registry: DeviceRegistry | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._rules: tuple[TransformRule, ...] = tuple(rules)
        self._registry: DeviceRegistry = registry if registry is not None else NullRegistry()
        self._logger = logger or _logger

    @property
    def rules(self) -> tuple[TransformRule, ...]:
        return self._rules

    def transform(self, message: DecodedMessage) -> ProducedUpdate | None:
        """Return the update for *message*, or ``None`` when no rule applies."""
        rule = resolve_rule(message, self._rules)
        if rule is None:
            return None

        instance = resolve_instance(message, self._registry)
        resolution = resolve_template(rule.base_path, message, instance, self._registry)
        for failure in resolution.failures:
            self._logger.error(failure)

        labels = select_labels(message, rule)
        values = build_values(resolution.path, labels, message)
        self._logger.debug(
            "pgn=%s src=%s mapped to %s (%d values)",
            message.pgn,
            message.source_address,
            resolution.path,
            len(values),
        )
        return ProducedUpdate(values=tuple(values))
