"""Packet definitions: field-wise decoding and encoding, and registration."""

from __future__ import annotations

import enum
from dataclasses import field, fields
from typing import Any, ClassVar

from kasumi.codec import VARINT, MalformedBufferError, ProtocolState, ReadError, WriteError
from kasumi.network import BufferReader
from kasumi.protocol_registry import ProtocolRegistry
from kasumi.varint import read_varint


class PacketDecodeError(ReadError):
    """A packet could not be decoded."""


class PacketEncodeError(WriteError):
    """A packet could not be encoded."""

    def __init__(self, message: str = "this packet is not encodable") -> None:
        super().__init__(message)


class VarIntEnum(enum.IntEnum):
    """An enumeration sent on the wire as a VarInt."""

    @classmethod
    def read(cls, buffer) -> tuple[Any, int]:
        """Decode a member; unknown values are malformed."""
        value, consumed = read_varint(buffer)
        try:
            return cls(value), consumed
        except ValueError:
            raise MalformedBufferError(f"unknown {cls.__name__} variant {value}") from None

    def write(self) -> bytes:
        """Encode the member's value."""
        return VARINT.write(int(self))


def packet_field(codec: Any) -> Any:
    """Declare a packet field encoded with ``codec``."""
    return field(metadata={"codec": codec})


class Packet:
    """Base of all packets.

    Subclasses are dataclasses whose fields are declared with
    :func:`packet_field`, and give their ID and state as class keywords:
    ``class Ping(Packet, packet_id=0x01, state=ProtocolState.STATUS)``.
    """

    PACKET_ID: ClassVar[int]
    PACKET_STATE: ClassVar[ProtocolState]

    def __init_subclass__(
        cls, packet_id: int | None = None, state: ProtocolState | None = None, **kwargs: Any
    ) -> None:
        super().__init_subclass__(**kwargs)
        if packet_id is not None:
            cls.PACKET_ID = packet_id
        if state is not None:
            cls.PACKET_STATE = state

    @classmethod
    def _codecs(cls) -> list[tuple[str, Any]]:
        result = []
        for attribute in fields(cls):
            codec = attribute.metadata.get("codec")
            if codec is None:
                raise TypeError(f"{cls.__name__}.{attribute.name} has no codec")
            result.append((attribute.name, codec))
        return result

    @classmethod
    def read(cls, buffer) -> tuple[Any, int]:
        """Decode the fields in order; return the packet and the bytes consumed."""
        reader = BufferReader(buffer)
        values = {name: reader.read(codec) for name, codec in cls._codecs()}
        return cls(**values), reader.consumed()

    def write(self) -> bytes:
        """Encode the fields in order."""
        return b"".join(codec.write(getattr(self, name)) for name, codec in self._codecs())


def register_packet(registry: ProtocolRegistry, packet_cls: type[Packet]) -> None:
    """Register ``packet_cls``'s decoder under its state and ID."""
    registry.register(packet_cls.PACKET_STATE, packet_cls.PACKET_ID, packet_cls.read)