"""Record size calculation utilities.

This module provides functions to calculate the encoded size of records and
inspect their wire layout without encoding any data.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..codec.encoder import encode
from ..codec.kinds import Directive, Kind
from ..codec.schema import (
    FieldSpec,
    FixedArrayField,
    NestedField,
    RecordSchema,
    ScalarField,
    eligible,
)
from ..config import CodecConfig
from ..models.base import BaseRecord


@dataclass(frozen=True)
class FieldLayout:
    """Wire layout of one top-level record field.

    Attributes:
        name: Field name
        kind: Field kind
        directive: Directive spelling (``"be"``, ``"le"``, ``"-"``) or None
        participates: Whether the field is written when the record is encoded
            as the outermost record
        size: Encoded width in bytes; 0 for fields that do not participate,
            None for fields whose width depends on the value
    """

    name: str
    kind: Kind
    directive: str | None
    participates: bool
    size: int | None


def encoded_size(record: BaseRecord, config: CodecConfig | None = None) -> int:
    """Calculate the encoded size of a record instance in bytes.

    Example:
        >>> encoded_size(Sample(value=123, array=[1, 2, 3, 4]))
        12
    """
    return len(encode(record, config) or b"")


def static_size(record_or_class: BaseRecord | type[BaseRecord]) -> int | None:
    """Calculate the fixed encoded size of a record class.

    Args:
        record_or_class: Record instance or class

    Returns:
        Size in bytes, or None if a trailing text or sequence field makes the
        size depend on the values

    Example:
        >>> static_size(Sample)
        12
        >>> static_size(Message)  # ends in a text field
        None
    """
    return _record_size(_record_class(record_or_class), True)


def field_layout(record_or_class: BaseRecord | type[BaseRecord]) -> list[FieldLayout]:
    """Describe the wire layout of each field of a record.

    Example:
        >>> [(f.name, f.size) for f in field_layout(Sample)]
        [('value', 4), ('array', 8)]
    """
    schema = RecordSchema.for_record(_record_class(record_or_class))
    count = len(schema)
    layout = []
    for field in schema.fields:
        participates = eligible(field, field.position, count, True)
        layout.append(
            FieldLayout(
                name=field.name,
                kind=field.kind,
                directive=field.directive.value if field.directive is not None else None,
                participates=participates,
                size=_field_size(field, count, True) if participates else 0,
            )
        )
    return layout


def _record_class(record_or_class: BaseRecord | type[BaseRecord]) -> type[BaseRecord]:
    if isinstance(record_or_class, BaseRecord):
        return type(record_or_class)
    return record_or_class


def _record_size(record_class: type[BaseRecord], terminal: bool) -> int | None:
    schema = RecordSchema.for_record(record_class)
    count = len(schema)
    total = 0
    for field in schema.fields:
        if not eligible(field, field.position, count, terminal):
            continue
        size = _field_size(field, count, terminal)
        if size is None:
            return None
        total += size
    return total


def _field_size(field: FieldSpec, count: int, terminal: bool) -> int | None:
    if field.dynamic:
        return None

    if isinstance(field, ScalarField):
        return field.ctype.size

    if isinstance(field, NestedField):
        return _record_size(field.record_type, field.position == count - 1 and terminal)

    if isinstance(field, FixedArrayField):
        element = field.element
        if field.length == 0 or not element.traversable:
            return 0
        if element.kind is Kind.RECORD:
            if field.directive is not Directive.NATIVE or element.record_type is None:
                return 0
            element_size = _record_size(element.record_type, False)
            return None if element_size is None else element_size * field.length
        return element.ctype.size * field.length if element.ctype is not None else 0

    return 0
