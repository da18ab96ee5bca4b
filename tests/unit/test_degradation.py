"""Tests for silent degradation on unsupported schemas and malformed input."""

from __future__ import annotations

import math
import queue
from typing import Any, Callable, Optional

from structwire import BaseRecord, Int16, Int32, Nested, Text, Uint8, WireField, decode, encode, unpack


class Inner(BaseRecord):
    """Two fixed-width fields."""

    value1: int = Int32("le")
    value2: int = Int32("le")


class Sandwich(BaseRecord):
    """Nested record between two scalars."""

    value3: int = Int32("le")
    m: Inner = Nested()
    value4: int = Int32("le")


class Unrepresentable(BaseRecord):
    """Fields with kinds that never reach the wire."""

    flag: bool = WireField("le")
    count: int = WireField("le")
    table: dict[str, int] = WireField("le")
    ref: Optional[int] = WireField("le")
    anything: Any = WireField("-")
    callback: Callable[[int], int] = WireField("-", default=abs)
    channel: queue.Queue = WireField("-", default_factory=queue.Queue)
    value: int = Int32("le")


class Misdirected(BaseRecord):
    """Fields whose directive keeps them off the wire."""

    shouting: int = WireField("BE", "int32")
    unknown: int = WireField("network", "int32")
    unset: int = Int32(None)  # type: ignore[arg-type]
    hidden: int = Int32("le", exclude=True)
    nested_be: Inner = WireField("be")
    array_le: list[Inner] = WireField("le", length=2)
    names: list[str] = WireField("-", length=2)
    value: int = Int16("le")


class Tagged(BaseRecord):
    """Element ending in a text field."""

    id: int = Int16("le")
    label: str = Text()


class TaggedList(BaseRecord):
    """Trailing sequence of records that each end in text."""

    items: list[Tagged] = Nested()


class Head(BaseRecord):
    """Record ending in text, used in non-terminal position."""

    tag: int = Int16("le")
    label: str = Text()


class Frame(BaseRecord):
    """Nested record followed by a scalar."""

    head: Head = Nested()
    body: int = Int16("le")


class Blank(BaseRecord):
    """Record with no participating fields."""

    note: int = 5


class BlankList(BaseRecord):
    """Trailing sequence of zero-width records."""

    items: list[Blank] = Nested()


class Cell(BaseRecord):
    """Single int16."""

    v: int = Int16("le")


class Twin(BaseRecord):
    """Two nested records of the same type."""

    a: Cell = Nested()
    b: Cell = Nested()


class Note(BaseRecord):
    """Level followed by a trailing text."""

    level: int = Uint8("le")
    text: str = Text()


class Rounded(BaseRecord):
    """Float value stored in an integer ctype."""

    x: float = WireField("le", "int32")
    y: int = Int16("le")


class Bounded(BaseRecord):
    """Field with its own validation constraint."""

    x: int = Int32("le", ge=0)
    y: int = Int16("le")


class Window(BaseRecord):
    """Scalar followed by a fixed scalar array."""

    head: int = Int16("le")
    values: list[int] = Int16("be", length=4)


class Reading(BaseRecord):
    """Mixed-order element."""

    be: int = Int32("be")
    le: int = Int16("le")


class Readings(BaseRecord):
    """Fixed array of records between scalars."""

    value: int = Int32("le")
    a: list[Reading] = Nested(length=2)
    b: int = Uint8("le")


class TestUnsupportedFields:
    """Test fields that are excluded from the wire format."""

    def test_unrepresentable_kinds_are_skipped(self) -> None:
        """Test bool, unsized int, map, optional, any, callable and queue fields."""
        record = Unrepresentable(flag=True, count=7, table={"a": 1}, ref=3, anything="x", value=456)
        assert encode(record) == bytes([200, 1, 0, 0])

    def test_unrepresentable_kinds_keep_values_on_decode(self) -> None:
        """Test decode does not touch excluded fields."""
        target = Unrepresentable(flag=True, count=7, value=0)
        decode(bytes([200, 1, 0, 0]), target)

        assert target.flag is True
        assert target.count == 7
        assert target.value == 456

    def test_unrecognized_directives_are_skipped(self) -> None:
        """Test directive spelling, hidden fields, and composite directive rules."""
        record = Misdirected(shouting=1, unknown=2, unset=3, hidden=4, value=456)
        assert encode(record) == bytes([200, 1])

    def test_non_terminal_nested_text_is_dropped(self) -> None:
        """Test a text field inside a non-terminal nested record is never written."""
        data = encode(Frame(head=Head(tag=1, label="lost"), body=2))
        assert data == bytes([1, 0, 2, 0])

        decoded = unpack(Frame, data)
        assert decoded.head == Head(tag=1, label="")
        assert decoded.body == 2


class TestMalformedInput:
    """Test decoding truncated or ill-formed data."""

    def test_truncated_scalar_left_untouched(self) -> None:
        """Test decoding stops at a scalar that does not fit."""
        data = encode(Sandwich(value3=456, m=Inner(value1=123, value2=456), value4=789))
        assert data is not None

        decoded = unpack(Sandwich, data[:10])

        assert decoded.value3 == 456
        assert decoded.m.value1 == 123
        assert decoded.m.value2 == 0
        assert decoded.value4 == 0

    def test_empty_input(self) -> None:
        """Test decoding nothing leaves the record at zero."""
        assert unpack(Sandwich, b"") == Sandwich()

    def test_trailing_extra_bytes_ignored(self) -> None:
        """Test bytes beyond the record layout are ignored."""
        decoded = unpack(Inner, bytes([1, 0, 0, 0, 2, 0, 0, 0, 99, 99]))
        assert decoded == Inner(value1=1, value2=2)

    def test_odd_sequence_remainder_ignored(self) -> None:
        """Test a partial trailing scalar element is dropped."""

        class Shorts(BaseRecord):
            values: list[int] = Int16("le")

        assert unpack(Shorts, bytes([1, 0, 2, 0, 9])).values == [1, 2]

    def test_non_uniform_sequence_encode(self) -> None:
        """Test element text is not written inside a trailing sequence."""
        record = TaggedList(items=[Tagged(id=1, label="a"), Tagged(id=2, label="bcd")])
        assert encode(record) == bytes([1, 0, 2, 0])

    def test_non_uniform_sequence_decode_diverges(self) -> None:
        """Test the decoded sequence does not reproduce the original elements."""
        record = TaggedList(items=[Tagged(id=1, label="a"), Tagged(id=2, label="bcd")])
        decoded = unpack(TaggedList, encode(record) or b"")

        assert decoded != record
        assert decoded.items == [Tagged(id=1, label=""), Tagged(id=2, label="")]

    def test_inline_text_buffer_is_misparted(self) -> None:
        """Test a buffer with per-element text is partitioned by element width."""
        data = b"\x01\x00a\x00\x02\x00bcd\x00"
        decoded = unpack(TaggedList, data)

        assert [item.id for item in decoded.items] == [1, 97, 2, 25442, 100]
        assert all(item.label == "" for item in decoded.items)

    def test_zero_width_elements_stop_decoding(self) -> None:
        """Test a sequence of records with no wire fields does not loop forever."""
        assert encode(BlankList(items=[Blank(), Blank()])) == b""
        assert unpack(BlankList, b"\x01\x02").items == []


class TestTruncatedArrays:
    """Test fixed arrays cut short by the input."""

    def test_truncated_scalar_array_left_untouched(self) -> None:
        """Test a scalar array that does not fit keeps its value."""
        target = Window(head=0, values=[9, 9, 9, 9])
        decode(bytes([5, 0, 0, 1, 0, 2]), target)

        assert target.head == 5
        assert target.values == [9, 9, 9, 9]

    def test_truncated_record_array_partially_populated(self) -> None:
        """Test elements are decoded as far as the data goes."""
        decoded = unpack(Readings, bytes([1, 0, 0, 0, 0, 0, 0, 7, 8, 0, 0, 0]))

        assert decoded.value == 1
        assert decoded.a == [Reading(be=7, le=8), Reading()]
        assert decoded.b == 0


class TestSharedRecords:
    """Test decoding into records that share nested instances."""

    def test_shared_nested_fields(self) -> None:
        """Test two fields holding one instance decode independently."""
        shared = Cell(v=9)
        target = Twin(a=shared, b=shared)

        decode(bytes([1, 0, 2, 0]), target)

        assert target.a.v == 1
        assert target.b.v == 2

    def test_caller_instance_not_mutated(self) -> None:
        """Test decode does not write into objects the caller still holds."""
        shared = Cell(v=9)
        decode(bytes([1, 0, 2, 0]), Twin(a=shared, b=shared))

        assert shared.v == 9


class TestUnencodableValues:
    """Test values that cannot be packed are omitted instead of raising."""

    def test_lone_surrogate_text_omitted(self) -> None:
        """Test a text that has no UTF-8 form is left out."""
        assert encode(Note(level=1, text="\ud800")) == b"\x01"

    def test_escaped_text_round_trips(self) -> None:
        """Test undecodable input bytes survive decode and encode."""
        data = b"\x01\xff\xfe\x00"
        assert encode(unpack(Note, data)) == data

    def test_infinite_float_in_integer_ctype(self) -> None:
        """Test infinity in an integer ctype is left out."""
        assert encode(Rounded(x=math.inf, y=1)) == bytes([1, 0])

    def test_nan_in_integer_ctype(self) -> None:
        """Test NaN in an integer ctype is left out."""
        assert encode(Rounded(x=math.nan, y=1)) == bytes([1, 0])

    def test_float_in_integer_ctype(self) -> None:
        """Test a finite float is truncated into an integer ctype."""
        data = encode(Rounded(x=3.7, y=1))

        assert data == bytes([3, 0, 0, 0, 1, 0])
        assert unpack(Rounded, data).x == 3.0


class TestRejectedValues:
    """Test decoded values the record's own validation refuses."""

    def test_rejected_value_left_untouched(self) -> None:
        """Test a value failing a field constraint keeps the old value."""
        target = Bounded(x=5, y=0)
        decode(bytes([0xFF, 0xFF, 0xFF, 0xFF, 7, 0]), target)

        assert target.x == 5
        assert target.y == 7


class TestInvalidArguments:
    """Test null and non-record arguments."""

    def test_encode_none(self) -> None:
        """Test encoding None."""
        assert encode(None) is None

    def test_encode_non_record(self) -> None:
        """Test encoding a value that is not a record."""
        assert encode("not a record") is None  # type: ignore[arg-type]

    def test_decode_none_record(self) -> None:
        """Test decoding into None is a no-op."""
        decode(b"\x01\x02", None)

    def test_decode_non_record(self) -> None:
        """Test decoding into a non-record leaves it alone."""
        target = {"value": 1}
        decode(b"\x01\x02\x03\x04", target)  # type: ignore[arg-type]
        assert target == {"value": 1}

    def test_decode_none_data(self) -> None:
        """Test decoding None data leaves the record at zero."""
        target = Inner()
        decode(None, target)
        assert target == Inner()
