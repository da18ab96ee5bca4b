"""Record decoder.

This module provides the decode() function that populates a record in place
from bytes produced by :func:`structwire.encode`, mirroring the encoder field
by field.

Decoding is best-effort and never raises for malformed data:

- a scalar or scalar array that does not fit in the remaining bytes is left
  untouched and the remaining bytes are consumed;
- a nested record cut short is populated as far as the data goes;
- a trailing sequence of records is partitioned by repeatedly decoding one
  element and advancing by the bytes it consumed. This is exact only when
  every element has the same encoded size.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import ValidationError
from structlog import get_logger

from ..config import CodecConfig, default_config
from ..models.base import BaseRecord
from .encoder import TEXT_ENCODING, TEXT_ERRORS, TEXT_TERMINATOR
from .kinds import Directive, Kind
from .packing import unpack_array, unpack_scalar
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

R = TypeVar("R", bound=BaseRecord)


def decode(
    data: bytes | bytearray | memoryview | None,
    record: BaseRecord | None,
    config: CodecConfig | None = None,
) -> None:
    """Decode bytes into an existing record, in place.

    Fields that do not participate keep their current value.

    Args:
        data: Encoded bytes
        record: Record instance to populate
        config: Codec configuration (defaults to :func:`default_config`)

    Examples:
        ```python
        from structwire import decode, encode

        data = encode(Sample(value=123, array=[1, 2, 3, 4]))
        target = Sample()
        decode(data, target)
        assert target.value == 123
        ```
    """
    if record is None or not isinstance(record, BaseRecord):
        return

    view = memoryview(data if data is not None else b"").cast("B")
    _decode_record(view, record, True, config or default_config())


def unpack(record_class: type[R], data: bytes | bytearray | memoryview, config: CodecConfig | None = None) -> R:
    """Decode bytes into a fresh zero-valued instance of ``record_class``.

    Args:
        record_class: Record class to instantiate
        data: Encoded bytes
        config: Codec configuration

    Returns:
        The populated record
    """
    record = record_class()
    decode(data, record, config)
    return record


def _decode_record(view: memoryview, record: BaseRecord, terminal: bool, config: CodecConfig) -> int:
    """Populate ``record`` from the start of ``view``.

    Returns:
        Number of bytes consumed
    """
    schema = RecordSchema.for_record(type(record))
    count = len(schema)
    end = len(view)
    offset = 0

    for field in schema.fields:
        if not eligible(field, field.position, count, terminal):
            continue

        last = field.position == count - 1 and terminal

        if isinstance(field, TextField):
            raw = bytes(view[offset:])
            if raw.endswith(TEXT_TERMINATOR):
                raw = raw[: -len(TEXT_TERMINATOR)]
            _assign(record, field.name, raw.decode(TEXT_ENCODING, TEXT_ERRORS))
            return end

        if isinstance(field, SequenceField):
            return offset + _decode_sequence(view[offset:], record, field, config)

        if isinstance(field, FixedArrayField) and field.element.kind is Kind.RECORD:
            if field.length and field.directive is Directive.NATIVE:
                offset += _decode_record_array(view[offset:], record, field, config)
            continue

        if isinstance(field, NestedField):
            if offset >= end:
                return offset
            target = _fresh(getattr(record, field.name), field.record_type)
            offset += _decode_record(view[offset:], target, last, config)
            _assign(record, field.name, target)
            continue

        if isinstance(field, FixedArrayField):
            ctype = field.element.ctype
            if field.length == 0 or not field.element.traversable or ctype is None:
                continue
            size = ctype.size * field.length
        elif isinstance(field, ScalarField):
            ctype = field.ctype
            size = ctype.size
        else:
            continue

        remaining = end - offset
        if remaining <= 0:
            return offset
        if remaining < size:
            logger.debug("truncated field left untouched", field=field.name, needed=size, available=remaining)
            return end

        prefix = field.struct_prefix(config)
        chunk = view[offset : offset + size]
        if isinstance(field, ScalarField):
            _assign(record, field.name, unpack_scalar(ctype, chunk, prefix))
        elif field.as_bytes:
            _assign(record, field.name, bytes(chunk))
        else:
            _assign(record, field.name, unpack_array(ctype, chunk, field.length, prefix))
        offset += size

    return offset


def _decode_sequence(view: memoryview, record: BaseRecord, field: SequenceField, config: CodecConfig) -> int:
    """Decode a trailing sequence from the rest of the buffer.

    Returns:
        Number of bytes consumed
    """
    element = field.element
    if not element.traversable or not view:
        return 0

    if element.record_type is not None:
        items = []
        offset = 0
        while offset < len(view):
            item = element.record_type()
            used = _decode_record(view[offset:], item, False, config)
            if used == 0:
                logger.debug("sequence element consumed no bytes, stopping", field=field.name)
                break
            items.append(item)
            offset += used
        _assign(record, field.name, items)
        return offset

    if element.ctype is None:
        return 0

    count = len(view) // element.ctype.size
    size = count * element.ctype.size
    if field.as_bytes:
        _assign(record, field.name, bytes(view[:size]))
    else:
        values = unpack_array(element.ctype, view[:size], count, field.struct_prefix(config))
        _assign(record, field.name, values)
    return size


def _decode_record_array(view: memoryview, record: BaseRecord, field: FixedArrayField, config: CodecConfig) -> int:
    """Decode a fixed array of records.

    Each slot is decoded into a copy of the element it currently holds, so
    fields that are not on the wire keep their values.

    Returns:
        Number of bytes consumed
    """
    record_type = field.element.record_type
    if record_type is None:
        return 0
    current = list(getattr(record, field.name) or ())
    items = [_fresh(current[i] if i < len(current) else None, record_type) for i in range(field.length)]

    offset = 0
    for item in items:
        offset += _decode_record(view[offset:], item, False, config)
    _assign(record, field.name, items)
    return offset


def _fresh(existing: Any, record_type: type[R]) -> R:
    """Return a private copy of ``existing``, or a zero record if it is not one.

    Nested instances may be shared between slots or with the caller, so they
    are never decoded into directly. A shallow copy is enough: nested records
    inside it go through this function again when they are decoded.
    """
    if isinstance(existing, record_type):
        return existing.model_copy()
    return record_type()


def _assign(record: BaseRecord, name: str, value: Any) -> None:
    try:
        setattr(record, name, value)
    except ValidationError as err:
        logger.warning(
            "decoded value rejected by record validation",
            record=type(record).__name__,
            field=name,
            errors=err.error_count(),
        )
