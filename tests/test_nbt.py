import struct

import pytest

from kasumi.nbt import Byte, Double, Float, Int, Long, to_bytes_unnamed


def test_empty_compound():
    assert to_bytes_unnamed({}) == b"\x0a\x00"


def test_compound_with_int():
    assert to_bytes_unnamed({"a": Int(1)}) == b"\x0a\x03\x00\x01a\x00\x00\x00\x01\x00"


def test_null_character_uses_modified_utf8():
    assert b"\xc0\x80" in to_bytes_unnamed({"s": "a\0b"})


def test_plain_int_is_int_tag():
    assert to_bytes_unnamed({"a": 1}) == to_bytes_unnamed({"a": Int(1)})


def test_bool_is_byte():
    assert to_bytes_unnamed({"x": True}) == to_bytes_unnamed({"x": Byte(1)})
    assert to_bytes_unnamed({"x": False}) == to_bytes_unnamed({"x": Byte(0)})


def test_none_values_are_skipped():
    assert to_bytes_unnamed({"a": None, "b": Int(2)}) == to_bytes_unnamed({"b": Int(2)})


def test_double_is_four_bytes_longer_than_float():
    double = to_bytes_unnamed({"v": Double(1.5)})
    single = to_bytes_unnamed({"v": Float(1.5)})
    assert len(double) - len(single) == 4
    assert struct.unpack(">d", double[5:13])[0] == 1.5
    assert struct.unpack(">f", single[5:9])[0] == 1.5


def test_long_payload():
    data = to_bytes_unnamed(Long(-7))
    assert data[0] == 4
    assert struct.unpack(">q", data[1:])[0] == -7


def test_list_header():
    data = to_bytes_unnamed([1, 2])
    assert data[0] == 9
    assert data[1] == 3
    assert struct.unpack(">i", data[2:6])[0] == 2
    assert struct.unpack(">ii", data[6:]) == (1, 2)


def test_empty_list_has_end_element_tag():
    data = to_bytes_unnamed([])
    assert data[1] == 0
    assert struct.unpack(">i", data[2:6])[0] == 0


def test_string_root():
    data = to_bytes_unnamed("hello")
    assert data[0] == 8
    assert struct.unpack(">H", data[1:3])[0] == 5
    assert data[3:] == b"hello"


def test_mixed_list_rejected():
    with pytest.raises(ValueError):
        to_bytes_unnamed({"l": [1, "a"]})


def test_byte_out_of_range():
    with pytest.raises(ValueError):
        to_bytes_unnamed({"b": Byte(300)})


def test_int_out_of_range():
    with pytest.raises(ValueError):
        to_bytes_unnamed({"i": 1 << 40})


def test_string_too_long():
    with pytest.raises(ValueError):
        to_bytes_unnamed("x" * 70000)


def test_unsupported_type():
    with pytest.raises(TypeError):
        to_bytes_unnamed(object())


def test_non_string_key():
    with pytest.raises(TypeError):
        to_bytes_unnamed({1: 2})