"""Wire vocabulary: field kinds, directives and fixed-width C types.

A record field is described by a :class:`Kind` (what shape the value has), a
:class:`Directive` (how it is laid out on the wire) and, for numeric values,
a :class:`CType` giving the exact width and signedness.

Only some kinds have a canonical fixed-width byte representation. The rest
(booleans, unsized integers, maps, references, interfaces, channels and
functions) are never written, whatever directive they carry.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from ..config import CodecConfig
from ..exceptions import SchemaError


class Kind(enum.Enum):
    """Shape of a record field."""

    SCALAR = "scalar"
    FIXED_ARRAY = "fixed_array"
    SEQUENCE = "sequence"
    TEXT = "text"
    RECORD = "record"

    # Kinds with no wire representation
    BOOL = "bool"
    PLATFORM_INT = "platform_int"
    MAP = "map"
    POINTER = "pointer"
    INTERFACE = "interface"
    CHANNEL = "channel"
    FUNCTION = "function"


UNSUPPORTED_KINDS = frozenset(
    {
        Kind.BOOL,
        Kind.PLATFORM_INT,
        Kind.MAP,
        Kind.POINTER,
        Kind.INTERFACE,
        Kind.CHANNEL,
        Kind.FUNCTION,
    }
)

# Kinds whose encoded length depends on the value
DYNAMIC_KINDS = frozenset({Kind.SEQUENCE, Kind.TEXT})


def supported(kind: Kind) -> bool:
    """Return True if values of this kind can be written to the wire."""
    return kind not in UNSUPPORTED_KINDS


def is_dynamic(kind: Kind) -> bool:
    return kind in DYNAMIC_KINDS


class Directive(enum.Enum):
    """Per-field layout directive.

    The wire spelling is case-sensitive: ``"be"``, ``"le"`` and ``"-"``.
    A field without a directive is not serialized.
    """

    BIG_ENDIAN = "be"
    LITTLE_ENDIAN = "le"
    NATIVE = "-"

    @classmethod
    def parse(cls, value: object) -> Directive | None:
        """Map a raw directive value to a Directive, or None if unrecognized."""
        if isinstance(value, Directive):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    def struct_prefix(self, config: CodecConfig) -> str:
        """The :mod:`struct` byte-order prefix this directive selects."""
        if self is Directive.BIG_ENDIAN:
            return ">"
        if self is Directive.LITTLE_ENDIAN:
            return "<"
        return config.native_order.prefix


@dataclass(frozen=True)
class CType:
    """A fixed-width numeric type.

    Attributes:
        name: Canonical name (e.g. ``"int32"``)
        fmt: :mod:`struct` format character
        size: Width in bytes
        signed: Whether the integer is two's complement signed
        is_float: Whether this is an IEEE 754 type
    """

    name: str
    fmt: str
    size: int
    signed: bool = False
    is_float: bool = False

    @property
    def bits(self) -> int:
        return self.size * 8


CTYPES: dict[str, CType] = {
    "int8": CType("int8", "b", 1, signed=True),
    "uint8": CType("uint8", "B", 1),
    "int16": CType("int16", "h", 2, signed=True),
    "uint16": CType("uint16", "H", 2),
    "int32": CType("int32", "i", 4, signed=True),
    "uint32": CType("uint32", "I", 4),
    "int64": CType("int64", "q", 8, signed=True),
    "uint64": CType("uint64", "Q", 8),
    "float32": CType("float32", "f", 4, signed=True, is_float=True),
    "float64": CType("float64", "d", 8, signed=True, is_float=True),
}

_ALIASES = {"byte": "uint8"}

UINT8 = CTYPES["uint8"]
FLOAT64 = CTYPES["float64"]


def lookup_ctype(name: str) -> CType:
    """Resolve a ctype name (or alias) to its CType.

    Raises:
        SchemaError: If the name is not a known ctype
    """
    canonical = _ALIASES.get(name, name)
    try:
        return CTYPES[canonical]
    except KeyError:
        known = ", ".join(sorted([*CTYPES, *_ALIASES]))
        raise SchemaError(f"Unknown ctype {name!r}. Known ctypes: {known}") from None
