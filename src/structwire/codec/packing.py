"""Fixed-width packing and unpacking of scalars and flat arrays.

All functions take a :mod:`struct` byte-order prefix (``"<"`` or ``">"``) so
the caller decides the order once per field.

Example:
    >>> from structwire.codec.kinds import CTYPES
    >>> pack_scalar(CTYPES["int32"], 456, "<")
    b'\\xc8\\x01\\x00\\x00'
    >>> unpack_array(CTYPES["int16"], b"\\x00\\x01\\x00\\x02", 2, ">")
    [1, 2]
"""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable
from typing import Union

from .kinds import CType

Number = Union[int, float]

_FLOAT32_MAX = 3.4028234663852886e38


def fit(ctype: CType, value: Number) -> Number:
    """Coerce a value into the range representable by ``ctype``.

    Integers are wrapped to the ctype width the way a C cast would (two's
    complement for signed types). float32 values beyond its range become a
    signed infinity.

    Args:
        ctype: Target type
        value: Value to coerce

    Returns:
        A value :func:`struct.pack` accepts for ``ctype.fmt``
    """
    if ctype.is_float:
        value = float(value)
        if ctype.size == 4 and math.isfinite(value) and abs(value) > _FLOAT32_MAX:
            return math.copysign(math.inf, value)
        return value

    value = int(value) & ((1 << ctype.bits) - 1)
    if ctype.signed and value >= 1 << (ctype.bits - 1):
        value -= 1 << ctype.bits
    return value


def pack_scalar(ctype: CType, value: Number, prefix: str) -> bytes:
    """Pack a single value."""
    return struct.pack(prefix + ctype.fmt, fit(ctype, value))


def pack_array(ctype: CType, values: Iterable[Number], prefix: str) -> bytes:
    """Pack a sequence of values as one contiguous blob."""
    items = [fit(ctype, v) for v in values]
    return struct.pack(f"{prefix}{len(items)}{ctype.fmt}", *items)


def unpack_scalar(ctype: CType, data: bytes | memoryview, prefix: str) -> Number:
    """Unpack a single value from exactly ``ctype.size`` bytes."""
    return struct.unpack(prefix + ctype.fmt, data)[0]


def unpack_array(ctype: CType, data: bytes | memoryview, count: int, prefix: str) -> list[Number]:
    """Unpack ``count`` contiguous values from exactly ``count * ctype.size`` bytes."""
    return list(struct.unpack(f"{prefix}{count}{ctype.fmt}", data))
