"""Field selection and flattening into (path, value) pairs."""

from __future__ import annotations

from collections.abc import Iterable

from pypgn.ingestion.normalize import camel_case
from pypgn.models.message import DecodedMessage, RepeatedGroup, ScalarField
from pypgn.models.rule import TransformRule
from pypgn.models.update import PathValue


def select_labels(message: DecodedMessage, rule: TransformRule) -> tuple[str, ...]:
    """Labels to emit: the rule's allow list, or every message field in order."""
    if rule.field_allow_list:
        return rule.field_allow_list
    return message.labels()


def build_values(base_path: str, labels: Iterable[str], message: DecodedMessage) -> list[PathValue]:
    """Flatten the selected fields of *message* under *base_path*.

    Repeated groups expand to ``<base>.<label>.<index>.<property>``; scalars
    to ``<base>.<label>``. A selected label missing from the message still
    yields its path with an empty-string value.
    """
    values: list[PathValue] = []
    for label in labels:
        prefix = f"{base_path}.{camel_case(label)}"
        field = message.get(label)
        if isinstance(field, RepeatedGroup):
            for index, record in enumerate(field):
                for prop, value in record.items():
                    values.append(PathValue(path=f"{prefix}.{index}.{camel_case(prop)}", value=value))
        elif isinstance(field, ScalarField):
            values.append(PathValue(path=prefix, value=field.value))
        else:
            values.append(PathValue(path=prefix, value=""))
    return values
