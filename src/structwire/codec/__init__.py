"""Binary record codec for structwire.

This module provides encoding and decoding of records to and from flat byte
sequences, driven by per-field directives.
"""

from __future__ import annotations

from .decoder import decode, unpack
from .encoder import encode
from .kinds import CType, Directive, Kind, supported
from .schema import FieldSpec, RecordSchema, eligible

__all__ = [
    "encode",
    "decode",
    "unpack",
    "RecordSchema",
    "FieldSpec",
    "eligible",
    "supported",
    "CType",
    "Directive",
    "Kind",
]
