"""Authorization and annotation rules shared by entity mutations."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

NUMERIC_VALUE_GAS_BYTES = 8


@dataclass(frozen=True)
class StringAnnotation:
    """A string key/value annotation attached to an entity."""

    key: str
    value: str


@dataclass(frozen=True)
class NumericAnnotation:
    """A numeric key/value annotation attached to an entity."""

    key: str
    value: int


@dataclass
class LogAnnotations:
    """Annotations split into parallel key and value lists, as emitted in logs."""

    string_keys: list[str] = field(default_factory=list)
    string_values: list[str] = field(default_factory=list)
    numeric_keys: list[str] = field(default_factory=list)
    numeric_values: list[int] = field(default_factory=list)


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def annotation_gas_bytes(
    string_annotations: Sequence[StringAnnotation],
    numeric_annotations: Sequence[NumericAnnotation],
) -> int:
    """Number of bytes charged for annotations.

    String annotations cost the byte length of key and value; numeric ones the
    byte length of the key plus eight bytes for the value.
    """
    string_bytes = sum(_byte_len(a.key) + _byte_len(a.value) for a in string_annotations)
    numeric_bytes = sum(
        _byte_len(a.key) + NUMERIC_VALUE_GAS_BYTES for a in numeric_annotations
    )
    return string_bytes + numeric_bytes


def authorize_mutation(sender: bytes, owner: bytes, operator: bytes | None) -> bool:
    """True when the sender is the owner or the entity's operator."""
    return sender == owner or (operator is not None and operator == sender)


def unzip_annotations(
    string_annotations: Sequence[StringAnnotation],
    numeric_annotations: Sequence[NumericAnnotation],
) -> LogAnnotations:
    """Split annotations into the parallel lists carried by event logs."""
    return LogAnnotations(
        string_keys=[a.key for a in string_annotations],
        string_values=[a.value for a in string_annotations],
        numeric_keys=[a.key for a in numeric_annotations],
        numeric_values=[a.value for a in numeric_annotations],
    )