"""Wire codecs for the primitive protocol types, and protocol states."""

from __future__ import annotations

import enum
import struct
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from kasumi.varint import VarIntError, read_varint, write_varint

T = TypeVar("T")

MAX_STRING_LENGTH = 32767
"""Maximum length of a protocol string, in bytes."""

_UINT64_MASK = (1 << 64) - 1


class ProtocolState(enum.Enum):
    """The state a client connection is in."""

    HANDSHAKE = enum.auto()
    STATUS = enum.auto()
    LOGIN = enum.auto()
    CONFIGURATION = enum.auto()
    PLAY = enum.auto()


class ReadError(ValueError):
    """A value could not be read from a buffer."""


class IncompleteError(ReadError):
    """The buffer holds too few bytes for the whole value."""

    def __init__(
        self, message: str = "there weren't enough bytes to read the whole value"
    ) -> None:
        super().__init__(message)


class TooManyBytesError(ReadError):
    """The value announces more bytes than its type allows."""

    def __init__(self, message: str = "there were too many bytes in the buffer") -> None:
        super().__init__(message)


class MalformedBufferError(ReadError):
    """The buffer content is not valid for the type being read."""

    def __init__(self, message: str = "the provided buffer is malformed") -> None:
        super().__init__(message)


class WriteError(ValueError):
    """A value could not be encoded."""


class Codec(ABC, Generic[T]):
    """Reads values of one wire type from bytes and writes them back."""

    @abstractmethod
    def read(self, buffer: bytes | bytearray | memoryview) -> tuple[T, int]:
        """Decode a value from the start of ``buffer``; return it and the bytes consumed."""

    @abstractmethod
    def write(self, value: T) -> bytes:
        """Encode ``value``."""


class _VarIntCodec(Codec[int]):
    def read(self, buffer):
        return read_varint(buffer)

    def write(self, value):
        try:
            return write_varint(value)
        except VarIntError as exc:
            raise WriteError(str(exc)) from exc


class _StructCodec(Codec[Any]):
    def __init__(self, fmt: str) -> None:
        self._struct = struct.Struct(fmt)

    def read(self, buffer):
        if len(buffer) < self._struct.size:
            raise IncompleteError()
        (value,) = self._struct.unpack_from(buffer)
        return value, self._struct.size

    def write(self, value):
        try:
            return self._struct.pack(value)
        except struct.error as exc:
            raise WriteError(f"cannot encode {value!r}: {exc}") from exc


class _BoolCodec(Codec[bool]):
    def read(self, buffer):
        if not buffer:
            raise IncompleteError()
        return buffer[0] == 0x01, 1

    def write(self, value):
        return b"\x01" if value else b"\x00"


class _StringCodec(Codec[str]):
    def read(self, buffer):
        length, offset = read_varint(buffer)
        if length < 0:
            raise MalformedBufferError()
        if length > MAX_STRING_LENGTH:
            raise TooManyBytesError()
        end = offset + length
        if len(buffer) < end:
            raise IncompleteError()
        try:
            text = bytes(buffer[offset:end]).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ReadError(f"invalid UTF-8 in string: {exc}") from exc
        return text, end

    def write(self, value):
        encoded = value.encode("utf-8")
        return VARINT.write(len(encoded)) + encoded


class _UuidCodec(Codec[uuid.UUID]):
    def read(self, buffer):
        if len(buffer) < 16:
            raise IncompleteError()
        return uuid.UUID(bytes=bytes(buffer[:16])), 16

    def write(self, value):
        return value.bytes


class _RemainingBytesCodec(Codec[bytes]):
    def read(self, buffer):
        return bytes(buffer), len(buffer)

    def write(self, value):
        return bytes(value)


VARINT: Codec[int] = _VarIntCodec()
STRING: Codec[str] = _StringCodec()
BOOL: Codec[bool] = _BoolCodec()
U8: Codec[int] = _StructCodec(">B")
I8: Codec[int] = _StructCodec(">b")
U16: Codec[int] = _StructCodec(">H")
I32: Codec[int] = _StructCodec(">i")
I64: Codec[int] = _StructCodec(">q")
F32: Codec[float] = _StructCodec(">f")
F64: Codec[float] = _StructCodec(">d")
UUID: Codec[uuid.UUID] = _UuidCodec()
BYTES: Codec[bytes] = _RemainingBytesCodec()

_U64: Codec[int] = _StructCodec(">Q")


class PrefixedArray(Codec[list]):
    """A VarInt element count followed by that many elements.

    ``element`` is anything with ``read(buffer)`` returning ``(value, consumed)``
    and ``write(value)`` returning bytes: a codec, or a class whose ``read`` is a
    classmethod and whose ``write`` is an instance method.
    """

    def __init__(self, element: Any) -> None:
        self.element = element

    def read(self, buffer):
        length, offset = read_varint(buffer)
        if length < 0:
            raise MalformedBufferError()
        if len(buffer) < length:
            raise MalformedBufferError()

        items = []
        for _ in range(length):
            item, consumed = self.element.read(buffer[offset:])
            items.append(item)
            offset += consumed
        return items, offset

    def write(self, value):
        return VARINT.write(len(value)) + b"".join(
            self.element.write(item) for item in value
        )


class Optional(Codec[Any]):
    """A value that is absent when the buffer runs out before it."""

    def __init__(self, inner: Any) -> None:
        self.inner = inner

    def read(self, buffer):
        try:
            return self.inner.read(buffer)
        except IncompleteError:
            return None, 0

    def write(self, value):
        if value is None:
            return b""
        return self.inner.write(value)


@dataclass
class BitSet:
    """A bit set sent as a VarInt word count followed by 64-bit words."""

    words: list[int] = field(default_factory=list)

    @classmethod
    def empty(cls) -> BitSet:
        """Return a bit set with no words."""
        return cls()

    def get(self, bit: int) -> bool:
        """Return whether ``bit`` is set; bits past the last word are clear."""
        word_index, bit_index = divmod(bit, 64)
        if word_index >= len(self.words):
            return False
        return bool(self.words[word_index] & (1 << bit_index))

    @classmethod
    def read(cls, buffer) -> tuple[BitSet, int]:
        """Decode a bit set; return it and the bytes consumed."""
        length, offset = read_varint(buffer)
        words = []
        for _ in range(max(length, 0)):
            word, consumed = _U64.read(buffer[offset:])
            words.append(word)
            offset += consumed
        return cls(words), offset

    def write(self) -> bytes:
        """Encode the bit set."""
        return VARINT.write(len(self.words)) + b"".join(
            _U64.write(word & _UINT64_MASK) for word in self.words
        )