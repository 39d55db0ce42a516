"""Packets of the status state."""

from __future__ import annotations

from dataclasses import dataclass

from kasumi.codec import I64, ProtocolState
from kasumi.packets.base import Packet, packet_field, register_packet
from kasumi.protocol_registry import ProtocolRegistry
from kasumi.server_list_ping import ServerListPing


@dataclass
class ServerboundStatusRequestPacket(Packet, packet_id=0x00, state=ProtocolState.STATUS):
    """Request for the server list status."""


@dataclass
class ServerboundPingRequestPacket(Packet, packet_id=0x01, state=ProtocolState.STATUS):
    """Ping carrying a value to be echoed back."""

    value: int = packet_field(I64)


@dataclass
class ClientboundStatusResponsePacket(Packet, packet_id=0x00, state=ProtocolState.STATUS):
    """The server list status."""

    response: ServerListPing = packet_field(ServerListPing)


@dataclass
class ClientboundPingResponsePacket(Packet, packet_id=0x01, state=ProtocolState.STATUS):
    """Echo of a ping request's value."""

    value: int = packet_field(I64)


def setup_registry(registry: ProtocolRegistry) -> None:
    """Register the decoders of the serverbound status packets."""
    register_packet(registry, ServerboundStatusRequestPacket)
    register_packet(registry, ServerboundPingRequestPacket)