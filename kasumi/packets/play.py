"""Packets of the play state and the chunk and light data they carry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from kasumi.codec import (
    BOOL,
    BYTES,
    F32,
    F64,
    I8,
    I32,
    I64,
    U8,
    VARINT,
    BitSet,
    Optional,
    PrefixedArray,
    ProtocolState,
)
from kasumi.identifier import Identifier
from kasumi.network import BufferReader
from kasumi.packets.base import Packet, PacketDecodeError, packet_field, register_packet
from kasumi.protocol_registry import ProtocolRegistry
from kasumi.world import Chunk, Heightmap

_HEIGHTMAPS = PrefixedArray(Heightmap)
_BLOCK_ENTITIES = PrefixedArray(U8)
_LIGHT_ARRAYS = PrefixedArray(BYTES)


@dataclass
class ServerboundConfirmTeleportationPacket(Packet, packet_id=0x00, state=ProtocolState.PLAY):
    """Confirms a teleport by its ID."""

    teleport_id: int = packet_field(VARINT)


@dataclass
class ClientboundPlayPacket(Packet, packet_id=0x2B, state=ProtocolState.PLAY):
    """Login into the world: the player's entity and world settings."""

    entity_id: int = packet_field(I32)
    is_hardcore: bool = packet_field(BOOL)
    dimension_names: list[Identifier] = packet_field(PrefixedArray(Identifier))
    max_players: int = packet_field(VARINT)
    view_distance: int = packet_field(VARINT)
    simulation_distance: int = packet_field(VARINT)
    reduced_debug_info: bool = packet_field(BOOL)
    enable_respawn_screen: bool = packet_field(BOOL)
    do_limited_crafting: bool = packet_field(BOOL)
    dimension_type: int = packet_field(VARINT)
    dimension_name: Identifier = packet_field(Identifier)
    hashed_seed: int = packet_field(I64)
    game_mode: int = packet_field(U8)
    previous_game_mode: int = packet_field(I8)
    is_debug: bool = packet_field(BOOL)
    is_flat: bool = packet_field(BOOL)
    has_death_location: bool = packet_field(BOOL)
    death_dimension_name: Identifier | None = packet_field(Optional(Identifier))
    death_location: int | None = packet_field(Optional(I64))
    portal_cooldown: int = packet_field(VARINT)
    sea_level: int = packet_field(VARINT)
    enforces_secure_chat: bool = packet_field(BOOL)


@dataclass
class ClientboundSynchronizePlayerPositionPacket(
    Packet, packet_id=0x41, state=ProtocolState.PLAY
):
    """Moves the player to a position."""

    teleport_id: int = packet_field(VARINT)
    x: float = packet_field(F64)
    y: float = packet_field(F64)
    z: float = packet_field(F64)
    velocity_x: float = packet_field(F64)
    velocity_y: float = packet_field(F64)
    velocity_z: float = packet_field(F64)
    yaw: float = packet_field(F32)
    pitch: float = packet_field(F32)
    flags: int = packet_field(I32)


@dataclass
class ClientboundGameEventPacket(Packet, packet_id=0x22, state=ProtocolState.PLAY):
    """A game event with its value."""

    event: int = packet_field(U8)
    value: float = packet_field(F32)


@dataclass
class ChunkData:
    """Heightmaps, sections and block entities of a chunk."""

    heightmap: list[Heightmap]
    data: Chunk
    block_entities: list[int] = field(default_factory=list)

    def write(self) -> bytes:
        """Encode the chunk data."""
        return (
            _HEIGHTMAPS.write(self.heightmap)
            + self.data.write()
            + _BLOCK_ENTITIES.write(self.block_entities)
        )


@dataclass
class LightData:
    """Sky and block light masks and arrays of a chunk."""

    sky_light_mask: BitSet = field(default_factory=BitSet.empty)
    block_light_mask: BitSet = field(default_factory=BitSet.empty)
    empty_sky_light_mask: BitSet = field(default_factory=BitSet.empty)
    empty_block_light_mask: BitSet = field(default_factory=BitSet.empty)
    sky_lights: list[bytes] = field(default_factory=list)
    block_lights: list[bytes] = field(default_factory=list)

    @classmethod
    def read(cls, buffer) -> tuple[LightData, int]:
        """Decode the light data; return it and the bytes consumed."""
        reader = BufferReader(buffer)
        masks = [reader.read(BitSet) for _ in range(4)]
        sky_lights = reader.read(_LIGHT_ARRAYS)
        block_lights = reader.read(_LIGHT_ARRAYS)
        return cls(*masks, sky_lights, block_lights), reader.consumed()

    def write(self) -> bytes:
        """Encode the light data."""
        return b"".join(
            (
                self.sky_light_mask.write(),
                self.block_light_mask.write(),
                self.empty_sky_light_mask.write(),
                self.empty_block_light_mask.write(),
                _LIGHT_ARRAYS.write(self.sky_lights),
                _LIGHT_ARRAYS.write(self.block_lights),
            )
        )


class _WriteOnly:
    """Codec for values that are only ever sent, never received."""

    def __init__(self, name: str) -> None:
        self._name = name

    def read(self, buffer: Any) -> tuple[Any, int]:
        raise PacketDecodeError(f"{self._name} cannot be decoded")

    def write(self, value: Any) -> bytes:
        return value.write()


@dataclass
class ClientboundChunkDataAndLightPacket(Packet, packet_id=0x27, state=ProtocolState.PLAY):
    """A whole chunk with its light."""

    chunk_x: int = packet_field(I32)
    chunk_z: int = packet_field(I32)
    chunk_data: ChunkData = packet_field(_WriteOnly("chunk data"))
    light_data: LightData = packet_field(LightData)


def setup_registry(registry: ProtocolRegistry) -> None:
    """Register the decoders of the serverbound play packets."""
    register_packet(registry, ServerboundConfirmTeleportationPacket)