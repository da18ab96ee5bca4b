"""Property-based tests using hypothesis."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from structwire import BaseRecord, Float32, Int16, Int32, Nested, Text, Uint8, decode, encode, unpack


class Meas(BaseRecord):
    """Fixed-width element body."""

    value: int = Int32("le")
    array: list[int] = Int16("be", length=4)
    msg: str = Text()


class Item(BaseRecord):
    """Element of a trailing sequence."""

    value2: int = Int16("le")
    m: Meas = Nested()


class Batch(BaseRecord):
    """Header followed by a trailing sequence of records."""

    seq: int = Int32("be")
    ratio: float = Float32("le")
    items: list[Item] = Nested()


class Note(BaseRecord):
    """Header followed by a trailing text."""

    level: int = Uint8("le")
    text: str = Text()


int16s = st.integers(min_value=-(2**15), max_value=2**15 - 1)
int32s = st.integers(min_value=-(2**31), max_value=2**31 - 1)
float32s = st.floats(width=32, allow_nan=False)

metas = st.builds(Meas, value=int32s, array=st.lists(int16s, min_size=4, max_size=4), msg=st.text())
items = st.builds(Item, value2=int16s, m=metas)
batches = st.builds(Batch, seq=int32s, ratio=float32s, items=st.lists(items, max_size=5))


class TestCodecProperties:
    """Property-based tests for codec."""

    @given(level=st.integers(min_value=0, max_value=255), text=st.text())
    def test_text_roundtrip(self, level: int, text: str) -> None:
        """Test a trailing text round trips, including embedded NULs."""
        record = Note(level=level, text=text)
        assert unpack(Note, encode(record) or b"") == record

    @given(batch=batches)
    def test_sequence_roundtrip_drops_element_text(self, batch: Batch) -> None:
        """Test a trailing sequence round trips except for element text."""
        decoded = unpack(Batch, encode(batch) or b"")

        assert decoded.seq == batch.seq
        assert decoded.ratio == batch.ratio
        assert len(decoded.items) == len(batch.items)
        for got, want in zip(decoded.items, batch.items):
            assert got.value2 == want.value2
            assert got.m.value == want.m.value
            assert got.m.array == want.m.array
            assert got.m.msg == ""

    @given(batch=batches)
    def test_encode_idempotent(self, batch: Batch) -> None:
        """Test encode(decode(encode(x))) == encode(x)."""
        data = encode(batch)
        assert encode(unpack(Batch, data or b"")) == data

    @given(batch=batches)
    def test_encode_deterministic(self, batch: Batch) -> None:
        """Test encoding is deterministic."""
        assert encode(batch) == encode(batch.model_copy(deep=True))

    @given(batch=batches)
    def test_size_is_header_plus_elements(self, batch: Batch) -> None:
        """Test every sequence element encodes to the same width."""
        assert len(encode(batch) or b"") == 8 + 14 * len(batch.items)

    @given(data=st.binary(max_size=64))
    def test_decode_never_raises(self, data: bytes) -> None:
        """Test arbitrary input decodes without error."""
        target = Batch()
        decode(data, target)
        assert len(target.items) <= len(data) // 14 + 1
