"""Ingestion layer.

This package contains the per-message transformation steps that turn a
decoded analyzer message into (path, value) pairs: rule selection, instance
resolution, template expansion, label normalization and field flattening.
"""

from pypgn.ingestion.flatten import build_values, select_labels
from pypgn.ingestion.instance import resolve_instance
from pypgn.ingestion.normalize import camel_case
from pypgn.ingestion.rules import resolve_rule
from pypgn.ingestion.template import TemplateResolution, resolve_template

__all__ = [
    "TemplateResolution",
    "build_values",
    "camel_case",
    "resolve_instance",
    "resolve_rule",
    "resolve_template",
    "select_labels",
]
