#!/usr/bin/env python3
"""Basic usage example for structwire.

This example demonstrates:
1. Defining records with per-field directives
2. Encoding a nested record ending in text
3. Encoding trailing sequences of records
4. Fixed-width nesting and fixed arrays of records
5. Inspecting a record's wire layout
"""

from __future__ import annotations

from structwire import (
    BaseRecord,
    Byte,
    Int16,
    Int32,
    Nested,
    Text,
    Uint32,
    WireField,
    encode,
    field_layout,
    static_size,
    unpack,
)


class Payload(BaseRecord):
    """Measurement with a trailing message."""

    value: int = Int32("le")
    array: list[int] = Int16("be", length=4)
    msg: str = Text()


class Envelope(BaseRecord):
    """Tag followed by a payload."""

    value2: int = Int16("le")
    m: Payload = Nested()


class Batch(BaseRecord):
    """Header followed by a trailing sequence of envelopes."""

    first: int = Int32("le")
    second: int = Int32("be")
    items: list[Envelope] = Nested()


class Pair(BaseRecord):
    """Two little-endian values."""

    value1: int = Int32("le")
    value2: int = Int32("le")


class Framed(BaseRecord):
    """Pair nested between two scalars."""

    value3: int = Int32("le")
    m: Pair = Nested()
    value4: int = Int32("le")


class Reading(BaseRecord):
    """Mixed-order element."""

    be: int = Int32("be")
    le: int = Int16("le")


class Readings(BaseRecord):
    """Fixed array of readings followed by a byte."""

    value: int = Int32("le")
    a: list[Reading] = Nested(length=4)
    b: int = Byte("le")


class Command(BaseRecord):
    """Command header followed by raw content."""

    id: int = Uint32("be")
    action: int = Int32("be")
    content: bytes = WireField("-")


def show(label: str, data: bytes | None) -> None:
    """Print encoded bytes as a decimal list."""
    data = data or b""
    print(f"   {label} ({len(data)} bytes): {list(data)}")


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("structwire Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Nested record ending in text...")
    env = Envelope(value2=456, m=Payload(value=123, array=[1, 2, 3, 4], msg="Hello, World!"))
    data = encode(env)
    show("Encoded", data)
    decoded = unpack(Envelope, data or b"")
    print(f"   Decoded msg: {decoded.m.msg!r}")
    print(f"   Round-trip: {'ok' if decoded == env else 'FAILED'}")
    print()

    print("2. Trailing sequence of records...")
    batch = Batch(
        first=123,
        second=456,
        items=[
            Envelope(value2=789, m=Payload(value=10, array=[1, 2, 3, 4], msg="Hello, World! 0")),
            Envelope(value2=123, m=Payload(value=11, array=[1, 2, 3, 4], msg="Hello, World! 1")),
        ],
    )
    data = encode(batch)
    show("Encoded", data)
    decoded_batch = unpack(Batch, data or b"")
    for i, item in enumerate(decoded_batch.items):
        print(f"   Item {i}: value2={item.value2} value={item.m.value} msg={item.m.msg!r}")
    print("   Element text is not written: elements are not in terminal position.")
    print()

    print("3. Fixed-width nesting...")
    framed = Framed(value3=456, m=Pair(value1=123, value2=456), value4=789)
    show("Encoded", encode(framed))
    print()

    print("4. Fixed array of records...")
    readings = Readings(
        value=123,
        a=[Reading(be=789, le=10), Reading(be=123, le=11), Reading(be=456, le=12), Reading(be=789, le=13)],
        b=3,
    )
    show("Encoded", encode(readings))
    print()

    print("5. Header with raw content...")
    command = Command(id=123, action=456, content=b"Hello, World!")
    show("Encoded", encode(command))
    print()

    print("6. Wire layout...")
    for record_class in (Envelope, Framed, Readings):
        size = static_size(record_class)
        print(f"   {record_class.__name__}: {'variable' if size is None else f'{size} bytes'}")
        for layout in field_layout(record_class):
            width = "dynamic" if layout.size is None else f"{layout.size} bytes"
            print(f"      {layout.name}: {layout.kind.value} {layout.directive} {width}")
    print()

    print("=" * 60)
    print("Example completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
