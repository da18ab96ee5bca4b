"""Record encoder.

This module provides the encode() function that flattens a record into bytes
according to its fields' directives. The output is the concatenation of each
participating field's packed bytes in declaration order, with no framing.
"""

from __future__ import annotations

import struct
from typing import Any

from structlog import get_logger

from ..config import CodecConfig, default_config
from ..models.base import BaseRecord
from .kinds import Directive, Kind
from .packing import pack_array, pack_scalar
from .schema import (
    FixedArrayField,
    NestedField,
    RecordSchema,
    ScalarField,
    SequenceField,
    TextField,
    eligible,
)

logger = get_logger()

TEXT_TERMINATOR = b"\x00"
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


def encode(record: BaseRecord | None, config: CodecConfig | None = None) -> bytes | None:
    """Encode a record to bytes.

    The outermost record is in terminal position, so its trailing field may
    be a text or sequence field. Fields that do not participate (no directive,
    unrepresentable kind, dynamic field in non-terminal position) contribute
    nothing. Encoding does not raise for unrepresentable content.

    Args:
        record: Record instance to encode
        config: Codec configuration (defaults to :func:`default_config`)

    Returns:
        Encoded bytes, or None if ``record`` is None or not a record

    Examples:
        ```python
        from structwire import BaseRecord, Int16, Int32, encode

        class Sample(BaseRecord):
            value: int = Int32("le")
            array: list[int] = Int16("be", length=4)

        encode(Sample(value=123, array=[1, 2, 3, 4]))
        # b'{\\x00\\x00\\x00\\x00\\x01\\x00\\x02\\x00\\x03\\x00\\x04'
        ```
    """
    if record is None or not isinstance(record, BaseRecord):
        return None

    out = bytearray()
    _encode_record(out, record, True, config or default_config())
    return bytes(out)


def _encode_record(out: bytearray, record: BaseRecord, terminal: bool, config: CodecConfig) -> None:
    """Append the encoding of ``record`` to ``out``.

    Args:
        out: Output buffer
        record: Record to encode
        terminal: Whether ``record`` is in terminal position
        config: Codec configuration
    """
    schema = RecordSchema.for_record(type(record))
    count = len(schema)

    for field in schema.fields:
        if not eligible(field, field.position, count, terminal):
            continue

        value = getattr(record, field.name)
        last = field.position == count - 1 and terminal

        if isinstance(field, TextField):
            try:
                out += _text_bytes(value) + TEXT_TERMINATOR
            except UnicodeEncodeError:
                logger.warning("text not encodable, field omitted", field=field.name)
            continue

        if isinstance(field, SequenceField):
            # A sequence is always the record's final output
            _encode_sequence(out, field, value, config)
            return

        if isinstance(field, FixedArrayField):
            _encode_fixed_array(out, field, value, config)
            continue

        if isinstance(field, NestedField):
            if isinstance(value, BaseRecord):
                _encode_record(out, value, last, config)
            continue

        if isinstance(field, ScalarField):
            try:
                out += pack_scalar(field.ctype, value, field.struct_prefix(config))
            except (struct.error, TypeError, ValueError, OverflowError):
                logger.warning("scalar value not packable, field omitted", field=field.name, value=value)


def _encode_sequence(out: bytearray, field: SequenceField, values: Any, config: CodecConfig) -> None:
    element = field.element
    if element.kind is Kind.RECORD:
        for item in values or ():
            if isinstance(item, BaseRecord):
                _encode_record(out, item, False, config)
        return

    if element.kind is not Kind.SCALAR or element.ctype is None:
        return

    prefix = field.struct_prefix(config)
    if field.as_bytes:
        out += bytes(values or b"")
        return
    _pack_values(out, field.name, element.ctype, values or (), prefix)


def _encode_fixed_array(out: bytearray, field: FixedArrayField, values: Any, config: CodecConfig) -> None:
    element = field.element
    if field.length == 0 or not element.traversable:
        return

    if element.kind is Kind.RECORD:
        if field.directive is not Directive.NATIVE:
            return
        for item in _fit_length(values, field.length):
            if isinstance(item, BaseRecord):
                _encode_record(out, item, False, config)
            else:
                _encode_record(out, element.record_type(), False, config)  # type: ignore[misc]
        return

    if element.ctype is None:
        return

    if field.as_bytes:
        out += bytes(values or b"")[: field.length].ljust(field.length, b"\x00")
        return
    _pack_values(
        out, field.name, element.ctype, _fit_length(values, field.length, 0), field.struct_prefix(config)
    )


def _pack_values(out: bytearray, name: str, ctype: Any, values: Any, prefix: str) -> None:
    try:
        out += pack_array(ctype, values, prefix)
    except (struct.error, TypeError, ValueError, OverflowError):
        logger.warning("array values not packable, field omitted", field=name)


def _fit_length(values: Any, length: int, fill: Any = None) -> list[Any]:
    """Truncate or pad a list to exactly ``length`` items."""
    items = list(values or ())[:length]
    return items + [fill] * (length - len(items))


def _text_bytes(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return str(value if value is not None else "").encode(TEXT_ENCODING, TEXT_ERRORS)
