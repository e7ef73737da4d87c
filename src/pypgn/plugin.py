"""Host plugin shell around the transform pipeline.

The plugin subscribes to the analyzer channel of a host bus, runs every
inbound message through :class:`pypgn.pipeline.PgnTransformer` and submits
non-empty updates to the host ingestion entry point.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Mapping
from typing import Any

from pypgn._constants import ANALYZER_CHANNEL, PLUGIN_DESCRIPTION, PLUGIN_ID, PLUGIN_NAME
from pypgn._redact import truncate_for_log
from pypgn.bus import MessageBus
from pypgn.models.message import DecodedMessage
from pypgn.models.rule import PluginOptions, parse_options
from pypgn.models.update import ProducedUpdate
from pypgn.pipeline import PgnTransformer
from pypgn.registry import DeviceRegistry, NullRegistry

_logger = logging.getLogger(__name__)

HandleMessage = Callable[[str, dict[str, Any]], None]


class PgnParserPlugin:
    """Maps analyzer output for configured PGNs onto host paths."""

    name = PLUGIN_NAME
    description = PLUGIN_DESCRIPTION

    def __init__(
        self,
        bus: MessageBus,
        handle_message: HandleMessage,
        registry: DeviceRegistry | None = None,
        *,
        channel: str = ANALYZER_CHANNEL,
        plugin_id: str = PLUGIN_ID,
        logger: logging.Logger | None = None,
    ) -> None:
        self._bus = bus
        self._handle_message = handle_message
        self._registry: DeviceRegistry = registry if registry is not None else NullRegistry()
        self._channel = channel
        self._plugin_id = plugin_id
        self._logger = logger or _logger
        self._transformer: PgnTransformer | None = None

    @property
    def id(self) -> str:
        return self._plugin_id

    @property
    def channel(self) -> str:
        return self._channel

    @property
    def schema(self) -> dict[str, Any]:
        """JSON schema of the options document, as shown in the host UI."""
        return PluginOptions.model_json_schema(by_alias=True)

    @property
    def is_running(self) -> bool:
        return self._transformer is not None

    def start(self, options: PluginOptions | Mapping[str, Any] | None) -> None:
        """Load the rule set and subscribe to the analyzer channel.

        Calling ``start`` again replaces the rule set; the listener is never
        registered twice.
        """
        parsed = options if isinstance(options, PluginOptions) else parse_options(options)
        self.stop()
        self._transformer = PgnTransformer(parsed.pgns, self._registry, logger=self._logger)
        self._bus.on(self._channel, self._on_message)
        self._logger.debug("Listening on %s with %d PGN rules", self._channel, len(parsed.pgns))

    def stop(self) -> None:
        """Unsubscribe from the bus. Safe to call when not started."""
        if self._transformer is None:
            return
        self._bus.remove_listener(self._channel, self._on_message)
        self._transformer = None
        self._logger.debug("Stopped listening on %s", self._channel)

    def process(self, message: DecodedMessage) -> ProducedUpdate | None:
        """Transform one message and submit the result. Returns what was submitted."""
        transformer = self._transformer
        if transformer is None:
            return None
        update = transformer.transform(message)
        if update is None or update.is_empty:
            return None
        delta = update.to_delta()
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(json.dumps(truncate_for_log(delta), default=str))
        self._handle_message(self._plugin_id, delta)
        return update

    def _on_message(self, payload: DecodedMessage | Mapping[str, Any]) -> None:
        try:
            message = payload if isinstance(payload, DecodedMessage) else DecodedMessage.from_analyzer(payload)
            self.process(message)
        except Exception:
            self._logger.error("Failed to process analyzer message", exc_info=True)
