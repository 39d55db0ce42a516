"""Packets of the handshake state."""

from __future__ import annotations

from dataclasses import dataclass

from kasumi.codec import STRING, U16, VARINT, ProtocolState
from kasumi.packets.base import Packet, VarIntEnum, packet_field, register_packet
from kasumi.protocol_registry import ProtocolRegistry


class HandshakeIntent(VarIntEnum):
    """What the client wants to do after the handshake."""

    STATUS = 0x01
    LOGIN = 0x02
    TRANSFER = 0x03


@dataclass
class ServerboundHandshakePacket(Packet, packet_id=0x00, state=ProtocolState.HANDSHAKE):
    """The first packet a client sends."""

    protocol_version: int = packet_field(VARINT)
    server_address: str = packet_field(STRING)
    server_port: int = packet_field(U16)
    intent: HandshakeIntent = packet_field(HandshakeIntent)


def setup_registry(registry: ProtocolRegistry) -> None:
    """Register the decoders of the serverbound handshake packets."""
    register_packet(registry, ServerboundHandshakePacket)