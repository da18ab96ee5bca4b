"""Record modeling for structwire.

This module provides the BaseRecord class and the field helpers that attach
wire directives to record fields.
"""

from __future__ import annotations

from .base import BaseRecord
from .fields import (
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

__all__ = [
    "BaseRecord",
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
]
