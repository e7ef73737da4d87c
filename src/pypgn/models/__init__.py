"""Typed models for rule configuration, decoded messages and produced updates."""

from pypgn.models.message import DecodedMessage, FieldValue, RepeatedGroup, Scalar, ScalarField
from pypgn.models.rule import PluginOptions, TransformRule, load_options, parse_options
from pypgn.models.update import PathValue, ProducedUpdate

__all__ = [
    "DecodedMessage",
    "FieldValue",
    "PathValue",
    "PluginOptions",
    "ProducedUpdate",
    "RepeatedGroup",
    "Scalar",
    "ScalarField",
    "TransformRule",
    "load_options",
    "parse_options",
]
