import uuid

import pytest

from kasumi.codec import (
    BOOL,
    BYTES,
    F32,
    F64,
    I8,
    I32,
    I64,
    MAX_STRING_LENGTH,
    STRING,
    U8,
    U16,
    UUID,
    VARINT,
    BitSet,
    IncompleteError,
    MalformedBufferError,
    Optional,
    PrefixedArray,
    ReadError,
    TooManyBytesError,
    WriteError,
)
from kasumi.varint import VarIntIncompleteError, write_varint


@pytest.mark.parametrize("text", ["", "hello", "Привет, мир", "a" * MAX_STRING_LENGTH])
def test_string_round_trip(text):
    encoded = STRING.write(text)
    decoded, consumed = STRING.read(encoded + b"tail")
    assert decoded == text
    assert consumed == len(encoded)


def test_string_is_length_prefixed_in_bytes():
    text = "ü"
    raw = text.encode("utf-8")
    assert STRING.write(text) == write_varint(len(raw)) + raw


def test_string_negative_length():
    with pytest.raises(MalformedBufferError):
        STRING.read(write_varint(-1))


def test_string_too_long():
    with pytest.raises(TooManyBytesError):
        STRING.read(write_varint(MAX_STRING_LENGTH + 1))


def test_string_incomplete():
    with pytest.raises(IncompleteError):
        STRING.read(write_varint(5) + b"ab")


def test_string_invalid_utf8():
    with pytest.raises(ReadError):
        STRING.read(write_varint(1) + b"\xff")


@pytest.mark.parametrize(
    "codec, value",
    [
        (VARINT, 300),
        (VARINT, -1),
        (U8, 200),
        (I8, -1),
        (U16, 25565),
        (I32, -123456),
        (I64, -(2**63)),
        (I64, 2**63 - 1),
        (F32, 0.25),
        (F64, -1.5),
        (BOOL, True),
        (BOOL, False),
        (UUID, uuid.UUID("12345678-1234-5678-1234-567812345678")),
    ],
)
def test_primitive_round_trip(codec, value):
    encoded = codec.write(value)
    decoded, consumed = codec.read(encoded)
    assert decoded == value
    assert consumed == len(encoded)


@pytest.mark.parametrize(
    "codec, buffer",
    [
        (U8, b""),
        (I8, b""),
        (BOOL, b""),
        (U16, b"\x00"),
        (I32, b"\x00" * 3),
        (F32, b"\x00" * 3),
        (I64, b"\x00" * 7),
        (F64, b"\x00" * 7),
        (UUID, b"\x00" * 15),
    ],
)
def test_short_buffer_is_incomplete(codec, buffer):
    with pytest.raises(IncompleteError):
        codec.read(buffer)


def test_bool_wire_values():
    assert BOOL.write(True) == b"\x01"
    assert BOOL.write(False) == b"\x00"
    assert BOOL.read(b"\x02") == (False, 1)


def test_uuid_is_raw_bytes():
    value = uuid.uuid4()
    assert UUID.write(value) == value.bytes


def test_bytes_consumes_everything():
    data = b"\x01\x02\x03"
    assert BYTES.read(data) == (data, len(data))
    assert BYTES.write(data) == data


@pytest.mark.parametrize("codec, value", [(U16, 70000), (U8, -1), (VARINT, 2**31)])
def test_write_out_of_range(codec, value):
    with pytest.raises(WriteError):
        codec.write(value)


def test_prefixed_array_round_trip():
    codec = PrefixedArray(STRING)
    items = ["a", "bc", "def"]
    encoded = codec.write(items)
    decoded, consumed = codec.read(encoded)
    assert decoded == items
    assert consumed == len(encoded)


def test_prefixed_array_empty():
    codec = PrefixedArray(I32)
    assert codec.read(codec.write([])) == ([], len(write_varint(0)))


def test_prefixed_array_negative_length():
    with pytest.raises(MalformedBufferError):
        PrefixedArray(U8).read(write_varint(-2))


def test_prefixed_array_length_exceeds_buffer():
    with pytest.raises(MalformedBufferError):
        PrefixedArray(U8).read(write_varint(10) + b"\x01")


def test_prefixed_array_element_incomplete():
    with pytest.raises(IncompleteError):
        PrefixedArray(I32).read(write_varint(1) + b"\x00\x00")


def test_prefixed_array_of_class_elements():
    codec = PrefixedArray(BitSet)
    items = [BitSet([1]), BitSet.empty()]
    decoded, consumed = codec.read(codec.write(items))
    assert decoded == items
    assert consumed == len(codec.write(items))


def test_optional_absent():
    codec = Optional(I64)
    assert codec.write(None) == b""
    assert codec.read(b"") == (None, 0)


def test_optional_present():
    codec = Optional(I64)
    encoded = codec.write(42)
    assert encoded == I64.write(42)
    assert codec.read(encoded) == (42, len(encoded))


def test_optional_does_not_swallow_varint_errors():
    with pytest.raises(VarIntIncompleteError):
        Optional(STRING).read(b"")


def test_bitset_empty():
    bits = BitSet.empty()
    assert bits.get(0) is False
    assert bits.write() == write_varint(0)


def test_bitset_get():
    bits = BitSet([1, 1 << 63])
    assert bits.get(0) is True
    assert bits.get(1) is False
    assert bits.get(127) is True
    assert bits.get(200) is False


def test_bitset_round_trip():
    bits = BitSet([1, 1 << 63, 0])
    encoded = bits.write()
    decoded, consumed = BitSet.read(encoded + b"\xff")
    assert decoded == bits
    assert consumed == len(encoded)


def test_bitset_negative_length_reads_empty():
    encoded = write_varint(-1)
    assert BitSet.read(encoded) == (BitSet.empty(), len(encoded))


def test_bitset_truncated_word():
    with pytest.raises(IncompleteError):
        BitSet.read(write_varint(1) + b"\x00\x00")