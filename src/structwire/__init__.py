"""structwire: directive-driven binary records

A Python library that converts records to and from flat byte sequences using
per-field layout directives instead of hand-written marshaling code. Each
field says how it goes on the wire:

- ``"be"``: big-endian
- ``"le"``: little-endian
- ``"-"``: native byte order for numbers, "descend" for nested records
- no directive: the field is not serialized

There is no framing, no length prefix and no version tag. Text and
variable-length sequences are only written in trailing position, and
malformed input degrades into a partially populated record instead of an
exception.

Quick Start:
    >>> from structwire import BaseRecord, Int16, Int32, Nested, Text, encode, unpack
    >>>
    >>> class Payload(BaseRecord):
    ...     value: int = Int32("le")
    ...     array: list[int] = Int16("be", length=4)
    ...     msg: str = Text()
    >>>
    >>> class Envelope(BaseRecord):
    ...     kind: int = Int16("le")
    ...     payload: Payload = Nested()
    >>>
    >>> env = Envelope(kind=456, payload=Payload(value=123, array=[1, 2, 3, 4], msg="Hello"))
    >>> data = encode(env)
    >>> unpack(Envelope, data) == env
    True
"""

from __future__ import annotations

from .codec import CType, Directive, Kind, RecordSchema, decode, encode, unpack
from .config import ByteOrder, CodecConfig, default_config
from .exceptions import ConfigError, SchemaError, StructwireError
from .models import (
    BaseRecord,
    Byte,
    Float32,
    Float64,
    Int8,
    Int16,
    Int32,
    Int64,
    Nested,
    Text,
    Uint8,
    Uint16,
    Uint32,
    Uint64,
    WireField,
)
from .utils import FieldLayout, encoded_size, field_layout, static_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "BaseRecord",
    "encode",
    "decode",
    "unpack",
    # Field helpers
    "WireField",
    "Nested",
    "Text",
    "Int8",
    "Uint8",
    "Byte",
    "Int16",
    "Uint16",
    "Int32",
    "Uint32",
    "Int64",
    "Uint64",
    "Float32",
    "Float64",
    # Vocabulary
    "CType",
    "Directive",
    "Kind",
    "RecordSchema",
    # Configuration
    "ByteOrder",
    "CodecConfig",
    "default_config",
    # Exceptions
    "StructwireError",
    "SchemaError",
    "ConfigError",
    # Sizing
    "encoded_size",
    "static_size",
    "field_layout",
    "FieldLayout",
    # Version
    "__version__",
]
