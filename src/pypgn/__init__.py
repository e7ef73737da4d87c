"""pypgn - Map decoded NMEA 2000 PGNs onto Signal K paths."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pypgn")
except PackageNotFoundError:
    __version__ = "0+local"
from pypgn.bus import LocalBus, MessageBus
from pypgn.config import PgnConfig
from pypgn.exceptions import PgnConfigError, PgnDecodeError, PgnError, PgnTransportError
from pypgn.ingestion.normalize import camel_case
from pypgn.models import (
    DecodedMessage,
    PathValue,
    PluginOptions,
    ProducedUpdate,
    RepeatedGroup,
    ScalarField,
    TransformRule,
    load_options,
)
from pypgn.pipeline import PgnTransformer
from pypgn.plugin import PgnParserPlugin
from pypgn.registry import DeviceRegistry, NullRegistry, SnapshotHolder, SourcesRegistry

__all__ = [
    "__version__",
    "DecodedMessage",
    "DeviceRegistry",
    "LocalBus",
    "MessageBus",
    "NullRegistry",
    "PathValue",
    "PgnConfig",
    "PgnConfigError",
    "PgnDecodeError",
    "PgnError",
    "PgnParserPlugin",
    "PgnTransformer",
    "PgnTransportError",
    "PluginOptions",
    "ProducedUpdate",
    "RepeatedGroup",
    "ScalarField",
    "SnapshotHolder",
    "SourcesRegistry",
    "TransformRule",
    "camel_case",
    "load_options",
]
