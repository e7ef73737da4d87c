"""MQTT bus adapter for analyzer output.

The analyzer (for example canboat ``analyzer -json`` piped into an MQTT
publisher) sends one decoded PGN per message. The paho network loop runs on
its own thread; decoded messages are handed to the asyncio loop so listeners
always run one message at a time on a single thread.
"""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, cast

import paho.mqtt.client as mqtt

from pypgn._constants import ANALYZER_CHANNEL
from pypgn.bus import LocalBus
from pypgn.exceptions import PgnDecodeError
from pypgn.models.message import DecodedMessage


@dataclass(frozen=True)
class MqttEndpoint:
    """Broker and topics used by the bridge."""

    host: str
    port: int
    analyzer_topic: str
    delta_topic: str
    keepalive: int = 60
    client_id: str = ""


def decode_analyzer_payload(raw: bytes) -> list[DecodedMessage]:
    """Decode an MQTT payload holding one analyzer object or a list of them."""
    try:
        parsed = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as exc:
        raise PgnDecodeError(f"Analyzer payload is not JSON: {exc}") from exc
    items = parsed if isinstance(parsed, list) else [parsed]
    return [DecodedMessage.from_analyzer(item) for item in items]


class MqttAnalyzerBus(LocalBus):
    """Bus that emits analyzer messages received over MQTT."""

    def __init__(
        self,
        endpoint: MqttEndpoint,
        *,
        loop: asyncio.AbstractEventLoop,
        channel: str = ANALYZER_CHANNEL,
        logger: logging.Logger | None = None,
    ) -> None:
        super().__init__()
        self._endpoint = endpoint
        self._loop = loop
        self._channel = channel
        self._logger = logger or logging.getLogger(__name__)
        self._client: mqtt.Client | None = None
        self._running = False

    @property
    def is_running(self) -> bool:
        """Whether the MQTT network loop is running."""
        return self._running

    def start(self) -> None:
        """Connect, subscribe to the analyzer topic and start the network loop."""
        self.stop()
        endpoint = self._endpoint
        self._logger.debug(
            "MQTT start requested host=%s port=%s topic=%s",
            endpoint.host,
            endpoint.port,
            endpoint.analyzer_topic,
        )

        client = mqtt.Client(
            callback_api_version=cast(Any, mqtt).CallbackAPIVersion.VERSION2,
            client_id=endpoint.client_id,
        )
        client.enable_logger(self._logger)

        def on_connect(
            c: mqtt.Client,
            _userdata: Any,
            _flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if reason_code.value != 0:
                self._logger.warning("MQTT connect failed: %s", reason_code)
                return
            self._logger.debug("MQTT connected, subscribing topic=%s", endpoint.analyzer_topic)
            c.subscribe(endpoint.analyzer_topic, qos=0)

        def on_message(_c: mqtt.Client, _userdata: Any, msg: mqtt.MQTTMessage) -> None:
            try:
                messages = decode_analyzer_payload(msg.payload)
            except PgnDecodeError:
                self._logger.debug("Analyzer payload parse failure topic=%s", msg.topic, exc_info=True)
                return
            except Exception:
                self._logger.error("Unexpected analyzer payload failure topic=%s", msg.topic, exc_info=True)
                return
            for message in messages:
                self._loop.call_soon_threadsafe(self.emit, self._channel, message)

        def on_disconnect(
            _client: mqtt.Client,
            _userdata: Any,
            _disconnect_flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if self._running:
                self._logger.debug("MQTT disconnected: %s", reason_code)

        client.on_connect = on_connect
        client.on_message = on_message
        client.on_disconnect = on_disconnect

        client.connect(endpoint.host, endpoint.port, keepalive=endpoint.keepalive)
        client.loop_start()

        self._client = client
        self._running = True
        self._logger.debug("MQTT network loop started")

    def stop(self) -> None:
        """Stop and disconnect the current MQTT client if running."""
        client = self._client
        self._client = None
        was_running = self._running
        self._running = False

        if client is None:
            return
        try:
            if was_running:
                client.disconnect()
        finally:
            client.loop_stop()
            self._logger.debug("MQTT network loop stopped")

    def publish_delta(self, plugin_id: str, delta: dict[str, Any]) -> None:
        """Host ingestion entry point: publish *delta* on the delta topic."""
        client = self._client
        if client is None:
            self._logger.debug("Dropping delta from %s: MQTT not running", plugin_id)
            return
        updates = [{"$source": plugin_id, **update} for update in delta.get("updates", [])]
        document = {**delta, "updates": updates}
        client.publish(self._endpoint.delta_topic, json.dumps(document, default=str), qos=0)

