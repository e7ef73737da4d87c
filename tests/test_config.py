from __future__ import annotations

import pytest

from pypgn._constants import ANALYZER_CHANNEL, PLUGIN_ID
from pypgn.config import PgnConfig
from pypgn.exceptions import PgnConfigError


def test_defaults() -> None:
    config = PgnConfig()

    assert config.channel == ANALYZER_CHANNEL
    assert config.plugin_id == PLUGIN_ID
    assert config.signalk_url is None


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYPGN_RULES_PATH", "/etc/pypgn/rules.json")
    monkeypatch.setenv("PYPGN_MQTT_HOST", "venus.local")
    monkeypatch.setenv("PYPGN_MQTT_PORT", "8883")
    monkeypatch.setenv("PYPGN_SIGNALK_URL", "http://boat.local:3000")
    monkeypatch.setenv("PYPGN_SOURCES_REFRESH_SECONDS", "5")

    config = PgnConfig.from_env()

    assert config.rules_path == "/etc/pypgn/rules.json"
    assert config.mqtt_host == "venus.local"
    assert config.mqtt_port == 8883
    assert config.signalk_url == "http://boat.local:3000"
    assert config.sources_refresh_seconds == 5.0


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYPGN_MQTT_PORT", "8883")
    monkeypatch.setenv("PYPGN_RULES_PATH", "env.json")

    config = PgnConfig.from_env(mqtt_port=1884, rules_path="cli.json")

    assert config.mqtt_port == 1884
    assert config.rules_path == "cli.json"


def test_invalid_numeric_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYPGN_MQTT_KEEPALIVE", "soon")

    with pytest.raises(PgnConfigError):
        PgnConfig.from_env()
