"""Runtime configuration for the pypgn host adapters."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pypgn._constants import ANALYZER_CHANNEL, PLUGIN_ID
from pypgn.exceptions import PgnConfigError


@dataclasses.dataclass(frozen=True)
class PgnConfig:
    """Bridge configuration.

    Parameters
    ----------
    rules_path : str
        Path of the JSON options file holding the ``pgns`` rule list.
    channel : str
        Bus channel carrying analyzer output.
    plugin_id : str
        Identifier attached to every submitted delta.
    mqtt_host : str
        MQTT broker host.
    mqtt_port : int
        MQTT broker port.
    mqtt_keepalive : int
        MQTT keepalive in seconds.
    analyzer_topic : str
        Topic the analyzer publishes decoded PGNs (one JSON object per
        message) to.
    delta_topic : str
        Topic deltas are published to.
    signalk_url : str or None
        Base URL of a Signal K server used to refresh the ``/sources``
        snapshot. ``None`` disables device registry lookups.
    sources_refresh_seconds : float
        Interval between ``/sources`` refreshes.
    """

    rules_path: str = "pgn-rules.json"
    channel: str = ANALYZER_CHANNEL
    plugin_id: str = PLUGIN_ID
    mqtt_host: str = "localhost"
    mqtt_port: int = 1883
    mqtt_keepalive: int = 60
    analyzer_topic: str = "n2k/analyzer"
    delta_topic: str = "signalk/delta"
    signalk_url: str | None = None
    sources_refresh_seconds: float = 30.0

    @classmethod
    def from_env(cls, **overrides: Any) -> PgnConfig:
        """Create configuration from ``PYPGN_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "PYPGN_RULES_PATH": "rules_path",
            "PYPGN_CHANNEL": "channel",
            "PYPGN_PLUGIN_ID": "plugin_id",
            "PYPGN_MQTT_HOST": "mqtt_host",
            "PYPGN_ANALYZER_TOPIC": "analyzer_topic",
            "PYPGN_DELTA_TOPIC": "delta_topic",
            "PYPGN_SIGNALK_URL": "signalk_url",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # Numeric values, handled separately
        try:
            port_env = env.get("PYPGN_MQTT_PORT")
            if port_env is not None and "mqtt_port" not in overrides:
                config_kwargs["mqtt_port"] = int(port_env)

            keepalive_env = env.get("PYPGN_MQTT_KEEPALIVE")
            if keepalive_env is not None and "mqtt_keepalive" not in overrides:
                config_kwargs["mqtt_keepalive"] = int(keepalive_env)

            refresh_env = env.get("PYPGN_SOURCES_REFRESH_SECONDS")
            if refresh_env is not None and "sources_refresh_seconds" not in overrides:
                config_kwargs["sources_refresh_seconds"] = float(refresh_env)
        except ValueError as exc:
            raise PgnConfigError(f"Invalid numeric PYPGN_* environment value: {exc}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
