"""Schema compilation for wire records.

A record class is compiled once into a :class:`RecordSchema`: an ordered
tuple of field descriptions, each one a member of a closed set of variants
(:class:`ScalarField`, :class:`FixedArrayField`, :class:`SequenceField`,
:class:`TextField`, :class:`NestedField`, :class:`OpaqueField`). The encoder
and decoder dispatch over these variants and never look at annotations while
processing data.

Which fields take part in a given encode/decode is decided by
:func:`eligible`, because it also depends on where the record sits inside the
outermost record being processed.
"""

from __future__ import annotations

import asyncio
import collections.abc
import queue
import types
from dataclasses import dataclass
from typing import Annotated, Any, Callable, Union, cast, get_args, get_origin

from pydantic.fields import FieldInfo
from structlog import get_logger

from ..config import CodecConfig
from ..exceptions import SchemaError
from ..models.base import BaseRecord
from ..models.fields import WIRE_KEY
from .kinds import FLOAT64, UINT8, CType, Directive, Kind, is_dynamic, lookup_ctype, supported

logger = get_logger()

_CACHE_ATTR = "__wire_schema__"

# Returned by zero_value() for kinds that have no zero value to fill in
MISSING: Any = object()


@dataclass(frozen=True)
class Element:
    """Element type of a fixed array or sequence.

    Attributes:
        kind: Element kind
        ctype: Width and signedness for scalar elements
        record_type: Record class for record elements
        python_type: ``int`` or ``float`` for scalar elements
    """

    kind: Kind
    ctype: CType | None = None
    record_type: type[BaseRecord] | None = None
    python_type: type = int

    @property
    def traversable(self) -> bool:
        """True for elements that can be laid out one after another."""
        return supported(self.kind) and not is_dynamic(self.kind)

    def zero(self) -> Any:
        if self.kind is Kind.SCALAR:
            return self.python_type()
        if self.kind is Kind.RECORD and self.record_type is not None:
            return self.record_type()
        if self.kind is Kind.TEXT:
            return ""
        if self.kind is Kind.SEQUENCE:
            return []
        if self.kind is Kind.BOOL:
            return False
        return MISSING


@dataclass(frozen=True)
class FieldSpec:
    """Common description of a record field.

    Attributes:
        name: Field name
        position: Index among the record's fields (declaration order)
        directive: Recognized directive, or None if unset/unrecognized
        kind: Field kind
        visible: False for fields excluded from the model's public surface
    """

    name: str
    position: int
    directive: Directive | None
    kind: Kind
    visible: bool

    @property
    def dynamic(self) -> bool:
        return is_dynamic(self.kind)

    def struct_prefix(self, config: CodecConfig) -> str:
        """Byte-order prefix of a participating field.

        Only called for fields that passed :func:`eligible`, which requires a
        directive.
        """
        return cast(Directive, self.directive).struct_prefix(config)


@dataclass(frozen=True)
class ScalarField(FieldSpec):
    ctype: CType
    python_type: type


@dataclass(frozen=True)
class FixedArrayField(FieldSpec):
    length: int
    element: Element
    as_bytes: bool


@dataclass(frozen=True)
class SequenceField(FieldSpec):
    element: Element
    as_bytes: bool


@dataclass(frozen=True)
class TextField(FieldSpec):
    pass


@dataclass(frozen=True)
class NestedField(FieldSpec):
    record_type: type[BaseRecord]


@dataclass(frozen=True)
class OpaqueField(FieldSpec):
    """A field whose kind has no wire representation."""

    zero_factory: Callable[[], Any] | None


def eligible(field: FieldSpec, position: int, field_count: int, enclosing_terminal: bool) -> bool:
    """Decide whether a field takes part in encoding/decoding.

    Args:
        field: Compiled field description
        position: Index of the field in its record
        field_count: Number of fields in the record
        enclosing_terminal: Whether the record itself sits in terminal position

    Returns:
        True if the field is written on encode and read on decode
    """
    if field.directive is None or not field.visible or not supported(field.kind):
        return False
    if field.dynamic and not (position == field_count - 1 and enclosing_terminal):
        return False
    if field.kind is Kind.RECORD and field.directive is not Directive.NATIVE:
        return False
    return True


def zero_value(field: FieldSpec) -> Any:
    """Return a fresh zero value for a field, or MISSING if the kind has none."""
    if isinstance(field, ScalarField):
        return field.python_type()
    if isinstance(field, TextField):
        return ""
    if isinstance(field, SequenceField):
        return b"" if field.as_bytes else []
    if isinstance(field, FixedArrayField):
        if field.as_bytes:
            return bytes(field.length)
        if field.element.zero() is MISSING:
            return []
        return [field.element.zero() for _ in range(field.length)]
    if isinstance(field, NestedField):
        return field.record_type()
    if isinstance(field, OpaqueField) and field.zero_factory is not None:
        return field.zero_factory()
    return MISSING


class RecordSchema:
    """Compiled wire layout of a record class.

    Example:
        >>> schema = RecordSchema.for_record(Reading)
        >>> [(f.name, f.kind.value) for f in schema.fields]
        [('sensor_id', 'scalar'), ('samples', 'sequence')]
    """

    def __init__(self, record_type: type[BaseRecord]) -> None:
        self.record_type = record_type
        self.log = logger.new(record=record_type.__name__)
        self.fields: tuple[FieldSpec, ...] = self._compile()

    @classmethod
    def for_record(cls, record_type: type[BaseRecord]) -> RecordSchema:
        """Return the compiled schema of a record class, compiling it on first use."""
        schema = record_type.__dict__.get(_CACHE_ATTR)
        if schema is None:
            schema = cls(record_type)
            setattr(record_type, _CACHE_ATTR, schema)
        return schema

    def __len__(self) -> int:
        return len(self.fields)

    def _compile(self) -> tuple[FieldSpec, ...]:
        fields = []
        for position, (name, info) in enumerate(self.record_type.model_fields.items()):
            spec = self._compile_field(position, name, info)
            if spec.directive is None:
                self.log.debug("field has no directive", field=name)
            elif not supported(spec.kind):
                self.log.debug("field kind not representable", field=name, kind=spec.kind.value)
            fields.append(spec)
        return tuple(fields)

    def _compile_field(self, position: int, name: str, info: FieldInfo) -> FieldSpec:
        wire = _wire_metadata(name, info)
        directive = Directive.parse(wire.get("directive"))
        ctype = lookup_ctype(wire["ctype"]) if wire.get("ctype") is not None else None
        length = wire.get("length")
        if length is not None and (not isinstance(length, int) or length < 0):
            raise SchemaError(f"Field {name}: length must be a non-negative integer, got {length!r}")

        common: dict[str, Any] = {
            "name": name,
            "position": position,
            "directive": directive,
            "visible": not info.exclude,
        }

        annotation = _strip_annotated(info.annotation)
        origin = get_origin(annotation)

        if annotation is bool:
            return OpaqueField(kind=Kind.BOOL, zero_factory=bool, **common)

        if annotation is int:
            if ctype is None:
                return OpaqueField(kind=Kind.PLATFORM_INT, zero_factory=int, **common)
            return ScalarField(kind=Kind.SCALAR, ctype=ctype, python_type=int, **common)

        if annotation is float:
            return ScalarField(kind=Kind.SCALAR, ctype=ctype or FLOAT64, python_type=float, **common)

        if annotation is str:
            return TextField(kind=Kind.TEXT, **common)

        if annotation is bytes or origin is list:
            if annotation is bytes:
                element = Element(Kind.SCALAR, UINT8)
            else:
                args = get_args(annotation)
                element = _resolve_element(args[0] if args else Any, ctype)
            as_bytes = annotation is bytes
            if length is not None:
                return FixedArrayField(
                    kind=Kind.FIXED_ARRAY, length=length, element=element, as_bytes=as_bytes, **common
                )
            return SequenceField(kind=Kind.SEQUENCE, element=element, as_bytes=as_bytes, **common)

        if _is_record(annotation):
            return NestedField(kind=Kind.RECORD, record_type=annotation, **common)

        if _is_mapping(annotation):
            return OpaqueField(kind=Kind.MAP, zero_factory=dict, **common)

        if origin is Union or origin is types.UnionType:
            if type(None) in get_args(annotation):
                return OpaqueField(kind=Kind.POINTER, zero_factory=_none, **common)
            return OpaqueField(kind=Kind.INTERFACE, zero_factory=None, **common)

        if annotation is Any or annotation is object:
            return OpaqueField(kind=Kind.INTERFACE, zero_factory=_none, **common)

        if annotation is collections.abc.Callable or origin is collections.abc.Callable:
            return OpaqueField(kind=Kind.FUNCTION, zero_factory=None, **common)

        if _is_queue(annotation):
            return OpaqueField(kind=Kind.CHANNEL, zero_factory=None, **common)

        # Any other object is held by reference
        return OpaqueField(kind=Kind.POINTER, zero_factory=None, **common)


def _none() -> None:
    return None


def _wire_metadata(name: str, info: FieldInfo) -> dict[str, Any]:
    extra = info.json_schema_extra
    if not isinstance(extra, dict):
        return {}
    wire = extra.get(WIRE_KEY)
    if wire is None:
        return {}
    if not isinstance(wire, dict):
        raise SchemaError(f"Field {name}: wire metadata must be a mapping, got {type(wire).__name__}")
    return wire


def _strip_annotated(annotation: Any) -> Any:
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def _is_record(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseRecord)


def _is_mapping(annotation: Any) -> bool:
    target = get_origin(annotation) or annotation
    return isinstance(target, type) and issubclass(target, collections.abc.Mapping)


def _is_queue(annotation: Any) -> bool:
    target = get_origin(annotation) or annotation
    return isinstance(target, type) and issubclass(
        target, (queue.Queue, queue.SimpleQueue, asyncio.Queue)
    )


def _resolve_element(annotation: Any, ctype: CType | None) -> Element:
    annotation = _strip_annotated(annotation)
    if annotation is bool:
        return Element(Kind.BOOL)
    if annotation is int:
        if ctype is None:
            return Element(Kind.PLATFORM_INT)
        return Element(Kind.SCALAR, ctype=ctype)
    if annotation is float:
        return Element(Kind.SCALAR, ctype=ctype or FLOAT64, python_type=float)
    if annotation is str:
        return Element(Kind.TEXT)
    if annotation is bytes or get_origin(annotation) is list:
        return Element(Kind.SEQUENCE)
    if _is_record(annotation):
        return Element(Kind.RECORD, record_type=annotation)
    if _is_mapping(annotation):
        return Element(Kind.MAP)
    if annotation is Any or annotation is object:
        return Element(Kind.INTERFACE)
    return Element(Kind.POINTER)
