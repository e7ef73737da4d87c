"""Constants shared by the pypgn core and its host adapters."""

from __future__ import annotations

PLUGIN_ID = "signalk-generic-pgn-parser"
PLUGIN_NAME = "Generic PGN Parser"
PLUGIN_DESCRIPTION = "Allows users to parse PGNs that are not directly supported by SignalK."

# Host bus channel carrying analyzer output.
ANALYZER_CHANNEL = "N2KAnalyzerOut"

# Field label used for proprietary PGN manufacturer filtering.
MANUFACTURER_FIELD = "Manufacturer Code"

# Substrings that select placeholder resolution strategies.
INSTANCE_MARKER = "Instance"
SOURCE_MARKER = "Source"
CAN_NAME_MARKER = "canName"

# Device registry property names.
DEVICE_INSTANCE_PROPERTY = "deviceInstance"
CAN_NAME_PROPERTY = "canName"

SOURCES_API_PATH = "/signalk/v1/api/sources"
