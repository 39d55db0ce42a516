"""Framing of packets received over a stream, and sequential buffer reading."""

from __future__ import annotations

from typing import Any

from kasumi.varint import VarIntError, VarIntIncompleteError, read_varint

BUFFER_CAPACITY = 4096
"""Size of the receive buffer used for one connection."""


class PacketReaderError(Exception):
    """A packet could not be framed from the received data."""


class MalformedPacketError(PacketReaderError):
    """A packet announced a negative length."""

    def __init__(self, length: int) -> None:
        super().__init__(f"the length of the received packet is less than 0 ({length})")
        self.length = length


class PacketReader:
    """Accumulates received bytes and splits them into packets."""

    def __init__(self, capacity: int = BUFFER_CAPACITY) -> None:
        self.capacity = capacity
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def extend(self, data: bytes | bytearray | memoryview) -> None:
        """Append received bytes."""
        self._buffer.extend(data)

    def clear(self) -> None:
        """Drop all buffered bytes."""
        self._buffer.clear()

    def try_next_packet(self) -> tuple[int, bytes] | None:
        """Return the next complete packet's ID and body, or None if more data is needed."""
        try:
            length, header_size = read_varint(self._buffer)
        except VarIntIncompleteError:
            return None
        except VarIntError as exc:
            raise PacketReaderError(str(exc)) from exc

        if length < 0:
            raise MalformedPacketError(length)

        end = header_size + length
        if len(self._buffer) < end:
            return None

        body = bytes(self._buffer[header_size:end])
        del self._buffer[:end]

        try:
            packet_id, id_size = read_varint(body)
        except VarIntIncompleteError:
            return None
        except VarIntError as exc:
            raise PacketReaderError(str(exc)) from exc

        return packet_id, body[id_size:]


class BufferReader:
    """Reads consecutive values from one buffer, tracking the offset."""

    def __init__(self, buffer: bytes | bytearray | memoryview) -> None:
        self._buffer = buffer
        self._offset = 0

    def read(self, codec: Any) -> Any:
        """Read one value with ``codec`` and advance past it."""
        value, consumed = codec.read(self._buffer[self._offset:])
        self._offset += consumed
        return value

    def consumed(self) -> int:
        """Return the number of bytes read so far."""
        return self._offset