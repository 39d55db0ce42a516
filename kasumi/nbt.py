"""Binary NBT encoding of values, in the unnamed-root form used on the network."""

from __future__ import annotations

import struct
from collections.abc import Mapping
from typing import Any

TAG_END = 0
TAG_BYTE = 1
TAG_SHORT = 2
TAG_INT = 3
TAG_LONG = 4
TAG_FLOAT = 5
TAG_DOUBLE = 6
TAG_BYTE_ARRAY = 7
TAG_STRING = 8
TAG_LIST = 9
TAG_COMPOUND = 10

MAX_STRING_BYTES = 0xFFFF
"""Largest encoded string an NBT string tag can hold."""

_NUMBER_FORMATS = {
    TAG_BYTE: struct.Struct(">b"),
    TAG_SHORT: struct.Struct(">h"),
    TAG_INT: struct.Struct(">i"),
    TAG_LONG: struct.Struct(">q"),
    TAG_FLOAT: struct.Struct(">f"),
    TAG_DOUBLE: struct.Struct(">d"),
}
_LENGTH = struct.Struct(">i")
_STRING_LENGTH = struct.Struct(">H")


class Byte(int):
    """An integer stored as a signed 8-bit byte tag."""

    tag = TAG_BYTE


class Int(int):
    """An integer stored as a signed 32-bit int tag."""

    tag = TAG_INT


class Long(int):
    """An integer stored as a signed 64-bit long tag."""

    tag = TAG_LONG


class Float(float):
    """A number stored as a 32-bit float tag."""

    tag = TAG_FLOAT


class Double(float):
    """A number stored as a 64-bit double tag."""

    tag = TAG_DOUBLE


def _tag_of(value: Any) -> int:
    if isinstance(value, (Byte, Int, Long, Float, Double)):
        return value.tag
    if isinstance(value, bool):
        return TAG_BYTE
    if isinstance(value, int):
        return TAG_INT
    if isinstance(value, float):
        return TAG_DOUBLE
    if isinstance(value, str):
        return TAG_STRING
    if isinstance(value, (bytes, bytearray)):
        return TAG_BYTE_ARRAY
    if isinstance(value, Mapping):
        return TAG_COMPOUND
    if isinstance(value, (list, tuple)):
        return TAG_LIST
    raise TypeError(f"cannot encode {type(value).__name__} as NBT")


def _encode_mutf8(text: str) -> bytes:
    output = bytearray()
    for char in text:
        code = ord(char)
        if code == 0:
            output += b"\xc0\x80"
        elif code > 0xFFFF:
            code -= 0x10000
            for unit in (0xD800 | (code >> 10), 0xDC00 | (code & 0x3FF)):
                output += bytes(
                    (0xE0 | (unit >> 12), 0x80 | ((unit >> 6) & 0x3F), 0x80 | (unit & 0x3F))
                )
        else:
            output += char.encode("utf-8", "surrogatepass")
    return bytes(output)


def _string(text: str) -> bytes:
    encoded = _encode_mutf8(text)
    if len(encoded) > MAX_STRING_BYTES:
        raise ValueError(f"string of {len(encoded)} bytes is too long for NBT")
    return _STRING_LENGTH.pack(len(encoded)) + encoded


def _list(items: list | tuple) -> bytes:
    tags = {_tag_of(item) for item in items}
    if len(tags) > 1:
        raise ValueError("NBT lists must hold elements of one type")
    tag = tags.pop() if tags else TAG_END
    return (
        bytes((tag,))
        + _LENGTH.pack(len(items))
        + b"".join(_payload(item, tag) for item in items)
    )


def _compound(mapping: Mapping) -> bytes:
    parts = []
    for key, item in mapping.items():
        if item is None:
            continue
        if not isinstance(key, str):
            raise TypeError(f"NBT compound keys must be strings, got {key!r}")
        tag = _tag_of(item)
        parts.append(bytes((tag,)) + _string(key) + _payload(item, tag))
    parts.append(bytes((TAG_END,)))
    return b"".join(parts)


def _payload(value: Any, tag: int) -> bytes:
    number_format = _NUMBER_FORMATS.get(tag)
    if number_format is not None:
        try:
            return number_format.pack(value)
        except (struct.error, OverflowError) as exc:
            raise ValueError(f"cannot encode {value!r} as NBT tag {tag}: {exc}") from exc
    if tag == TAG_STRING:
        return _string(value)
    if tag == TAG_BYTE_ARRAY:
        return _LENGTH.pack(len(value)) + bytes(value)
    if tag == TAG_LIST:
        return _list(value)
    return _compound(value)


def to_bytes_unnamed(value: Any) -> bytes:
    """Encode ``value`` as a root tag without a name.

    ``bool`` becomes a byte, ``int`` an int, ``float`` a double, ``str`` a
    string, ``bytes`` a byte array, mappings compounds and lists lists; the
    wrapper types choose other numeric tags. ``None`` values in a compound are
    left out.
    """
    tag = _tag_of(value)
    return bytes((tag,)) + _payload(value, tag)