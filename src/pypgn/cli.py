"""Command line entry point.

Subcommands:

- ``schema``: print the JSON schema of the options document.
- ``replay``: run analyzer JSON lines (a file or stdin) through the rule set
  and print one delta per matched message.
- ``bridge``: subscribe to analyzer output over MQTT and publish deltas,
  refreshing the device registry from a Signal K server.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import signal
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TextIO

import aiohttp

from pypgn._mqtt import MqttAnalyzerBus, MqttEndpoint
from pypgn._transport import SignalKSources
from pypgn.bus import LocalBus
from pypgn.config import PgnConfig
from pypgn.exceptions import PgnConfigError, PgnTransportError
from pypgn.models.rule import PluginOptions, load_options
from pypgn.plugin import PgnParserPlugin
from pypgn.registry import NullRegistry, SnapshotHolder, SourcesRegistry

_LOG = logging.getLogger("pypgn.cli")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pypgn",
        description="Map decoded NMEA 2000 PGNs onto Signal K paths.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logs.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("schema", help="Print the JSON schema of the rule options.")

    replay = sub.add_parser("replay", help="Transform analyzer JSON lines and print deltas.")
    replay.add_argument("rules", type=Path, help="JSON options file with a 'pgns' list.")
    replay.add_argument(
        "input",
        nargs="?",
        type=Path,
        default=None,
        help="Analyzer output, one JSON object per line (default: stdin).",
    )
    replay.add_argument(
        "--sources",
        type=Path,
        default=None,
        help="JSON snapshot of the Signal K /sources tree for device lookups.",
    )

    bridge = sub.add_parser("bridge", help="Run the MQTT bridge (settings from PYPGN_* env vars).")
    bridge.add_argument("--rules", type=Path, default=None, help="Override PYPGN_RULES_PATH.")
    return parser.parse_args(argv)


def replay_lines(
    lines: Iterable[str],
    options: PluginOptions,
    *,
    sources: dict[str, Any] | None = None,
    out: TextIO | None = None,
) -> int:
    """Feed analyzer JSON lines through the plugin. Returns the number of deltas printed."""
    stream = out if out is not None else sys.stdout
    bus = LocalBus()
    emitted = 0

    def handle_message(plugin_id: str, delta: dict[str, Any]) -> None:
        nonlocal emitted
        emitted += 1
        print(json.dumps(delta, ensure_ascii=False, default=str), file=stream)

    registry = SourcesRegistry(SnapshotHolder(sources)) if sources is not None else NullRegistry()
    plugin = PgnParserPlugin(bus, handle_message, registry)
    plugin.start(options)
    try:
        for number, line in enumerate(lines, start=1):
            text = line.strip()
            if not text:
                continue
            try:
                payload = json.loads(text)
            except json.JSONDecodeError:
                _LOG.warning("Skipping line %d: not JSON", number)
                continue
            bus.emit(plugin.channel, payload)
    finally:
        plugin.stop()
    return emitted


async def _refresh_sources(
    holder: SnapshotHolder,
    config: PgnConfig,
    stop: asyncio.Event,
) -> None:
    if not config.signalk_url:
        await stop.wait()
        return

    async with aiohttp.ClientSession() as session:
        sources = SignalKSources(config.signalk_url, session)
        while not stop.is_set():
            try:
                holder.replace(await sources.fetch())
            except PgnTransportError as exc:
                _LOG.warning("Sources refresh failed: %s", exc)
            try:
                await asyncio.wait_for(stop.wait(), timeout=config.sources_refresh_seconds)
            except TimeoutError:
                pass


async def run_bridge(config: PgnConfig, options: PluginOptions) -> None:
    loop = asyncio.get_running_loop()
    stop = asyncio.Event()
    for signum in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signum, stop.set)

    holder = SnapshotHolder()
    endpoint = MqttEndpoint(
        host=config.mqtt_host,
        port=config.mqtt_port,
        analyzer_topic=config.analyzer_topic,
        delta_topic=config.delta_topic,
        keepalive=config.mqtt_keepalive,
    )
    bus = MqttAnalyzerBus(endpoint, loop=loop, channel=config.channel)
    plugin = PgnParserPlugin(
        bus,
        bus.publish_delta,
        SourcesRegistry(holder),
        channel=config.channel,
        plugin_id=config.plugin_id,
    )
    plugin.start(options)
    try:
        await loop.run_in_executor(None, bus.start)
        await _refresh_sources(holder, config, stop)
    finally:
        plugin.stop()
        await loop.run_in_executor(None, bus.stop)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "schema":
        print(json.dumps(PluginOptions.model_json_schema(by_alias=True), indent=2))
        return 0

    try:
        if args.command == "replay":
            options = load_options(args.rules)
            sources = None
            if args.sources is not None:
                sources = json.loads(args.sources.read_text(encoding="utf-8"))
            if args.input is None:
                replay_lines(sys.stdin, options, sources=sources)
            else:
                with args.input.open(encoding="utf-8") as handle:
                    replay_lines(handle, options, sources=sources)
            return 0

        overrides = {"rules_path": str(args.rules)} if args.rules is not None else {}
        config = PgnConfig.from_env(**overrides)
        options = load_options(config.rules_path)
        asyncio.run(run_bridge(config, options))
    except (PgnConfigError, OSError, json.JSONDecodeError) as exc:
        print(f"pypgn: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
