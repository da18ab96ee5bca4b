"""Field helpers that attach wire directives to record fields.

The directive and ctype are stored as pydantic ``json_schema_extra`` metadata
under the ``"wire"`` key, so a record stays an ordinary pydantic model.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo

WIRE_KEY = "wire"


def WireField(
    directive: str | None = None,
    ctype: str | None = None,
    *,
    length: int | None = None,
    **kwargs: Any,
) -> FieldInfo:
    """Create a field carrying a wire directive.

    The field's annotation decides its kind; the metadata only says how to
    lay it out.

    Args:
        directive: ``"be"``, ``"le"`` or ``"-"``. Anything else (including
            None) leaves the field off the wire.
        ctype: Fixed-width type for numeric values and numeric list elements
            (``"int8"`` .. ``"uint64"``, ``"float32"``, ``"float64"``, ``"byte"``)
        length: Element count for fixed-size arrays. Without it a ``list`` or
            ``bytes`` field is a variable-length sequence.
        **kwargs: Additional Field() arguments (default, description, ...)

    Returns:
        Pydantic FieldInfo suitable for use as a field default.

    Example:
        >>> class Header(BaseRecord):
        ...     magic: int = WireField("be", "uint32")
        ...     flags: list[int] = WireField("le", "uint16", length=4)
        ...     label: str = WireField("-")
    """
    wire: dict[str, Any] = {"directive": directive}
    if ctype is not None:
        wire["ctype"] = ctype
    if length is not None:
        wire["length"] = length
    return cast(FieldInfo, Field(json_schema_extra={WIRE_KEY: wire}, **kwargs))


def Nested(**kwargs: Any) -> FieldInfo:
    """Create a nested record field (or list of records) under the ``"-"`` directive.

    Example:
        >>> class Outer(BaseRecord):
        ...     inner: Inner = Nested()
        ...     items: list[Inner] = Nested(length=4)
    """
    return WireField("-", **kwargs)


def Text(directive: str = "-", **kwargs: Any) -> FieldInfo:
    """Create a text field. Only written when it is the record's trailing field."""
    return WireField(directive, **kwargs)


def Int8(directive: str, **kwargs: Any) -> FieldInfo:
    return WireField(directive, "int8", **kwargs)


def Uint8(directive: str, **kwargs: Any) -> FieldInfo:
    return WireField(directive, "uint8", **kwargs)


Byte = Uint8


def Int16(directive: str, **kwargs: Any) -> FieldInfo:
    return WireField(directive, "int16", **kwargs)


def Uint16(directive: str, **kwargs: Any) -> FieldInfo:
    return WireField(directive, "uint16", **kwargs)


def Int32(directive: str, **kwargs: Any) -> FieldInfo:
    """Create a 32-bit signed integer field (or array/sequence of them).

    Example:
        >>> class Sample(BaseRecord):
        ...     value: int = Int32("le")
        ...     history: list[int] = Int32("be", length=8)
    """
    return WireField(directive, "int32", **kwargs)


def Uint32(directive: str, **kwargs: Any) -> FieldInfo:
    return WireField(directive, "uint32", **kwargs)


def Int64(directive: str, **kwargs: Any) -> FieldInfo:
    return WireField(directive, "int64", **kwargs)


def Uint64(directive: str, **kwargs: Any) -> FieldInfo:
    return WireField(directive, "uint64", **kwargs)


def Float32(directive: str, **kwargs: Any) -> FieldInfo:
    """Create an IEEE 754 single precision field.

    Note:
        Python floats are doubles; values lose precision on the way through.
    """
    return WireField(directive, "float32", **kwargs)


def Float64(directive: str, **kwargs: Any) -> FieldInfo:
    return WireField(directive, "float64", **kwargs)
