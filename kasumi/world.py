"""Chunks, chunk sections and heightmaps with their packed wire form."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from dataclasses import dataclass, field

from kasumi.codec import U8, U16, VARINT

SECTION_BLOCKS = 16 * 16 * 16
"""Number of blocks in one chunk section."""

SECTION_BIOMES = 64
"""Number of biome cells in one chunk section."""

SECTIONS_PER_CHUNK = 24
"""Number of sections in a chunk column."""

BLOCK_BITS = 15
"""Bits per entry used for block states."""

BIOME_BITS = 6
"""Bits per entry used for biomes."""

HEIGHTMAP_ENTRIES = 256
HEIGHTMAP_BITS = 9
HEIGHTMAP_LONGS = 36

_U64_MASK = (1 << 64) - 1
_U16_MAX = 0xFFFF
_LONG = struct.Struct(">Q")


def _pack_longs(words: Iterable[int]) -> bytes:
    return b"".join(_LONG.pack(word) for word in words)


def pack_data_array(entries: Iterable[int], bits_per_entry: int) -> list[int]:
    """Pack entries into 64-bit words using ``bits_per_entry`` bits each."""
    output: list[int] = []
    accumulator = 0
    bits = 0
    for entry in entries:
        value = entry & _U64_MASK
        if bits >= 64:
            output.append(accumulator)
            accumulator = value >> (bits_per_entry - (bits - 64))
            bits -= 64
        accumulator = (accumulator | (value << bits)) & _U64_MASK
        bits += bits_per_entry

    if bits > 0:
        output.append(accumulator)
    return output


@dataclass
class ChunkSection:
    """A 16x16x16 cube of block states together with its biomes."""

    block_states: list[int] = field(default_factory=lambda: [0] * SECTION_BLOCKS)
    biomes: list[int] = field(default_factory=lambda: [1] * SECTION_BIOMES)

    def set_block_at(self, x: int, y: int, z: int, block_id: int) -> None:
        """Set the block state at local coordinates."""
        self.block_states[(y << 8) | (z << 4) | x] = block_id

    def pack_block_states(self) -> list[int]:
        """Return the block states packed into 64-bit words."""
        return pack_data_array(self.block_states, BLOCK_BITS)

    def pack_biomes(self) -> list[int]:
        """Return the biomes packed into 64-bit words."""
        return pack_data_array(self.biomes, BIOME_BITS)

    def non_air_block_count(self) -> int:
        """Return the number of non-air blocks, capped at 65535."""
        return min(sum(1 for state in self.block_states if state != 0), _U16_MAX)

    def write(self) -> bytes:
        """Encode the section."""
        return b"".join(
            (
                U16.write(self.non_air_block_count()),
                U8.write(BLOCK_BITS),
                _pack_longs(self.pack_block_states()),
                U8.write(BIOME_BITS),
                _pack_longs(self.pack_biomes()),
            )
        )


class Chunk:
    """A chunk column made of stacked sections."""

    def __init__(self, x: int, z: int) -> None:
        self.x = x
        self.z = z
        self.sections: list[ChunkSection | None] = [
            ChunkSection() for _ in range(SECTIONS_PER_CHUNK)
        ]

    def __repr__(self) -> str:
        return f"Chunk(x={self.x}, z={self.z})"

    def set_block_at(self, x: int, y: int, z: int, block_id: int) -> None:
        """Set the block state at chunk-relative coordinates."""
        section_index = y // 16
        if not 0 <= section_index < len(self.sections):
            raise IndexError(f"y={y} is outside of the chunk")

        section = self.sections[section_index]
        if section is None:
            section = self.sections[section_index] = ChunkSection()
        section.set_block_at(x % 16, y % 16, z % 16, block_id)

    def write(self) -> bytes:
        """Encode the section data prefixed with its length."""
        data = b"".join(section.write() for section in self.sections if section is not None)
        return VARINT.write(len(data)) + data


class Heightmap:
    """Column heights of one heightmap kind."""

    def __init__(self, kind: int) -> None:
        self.kind = kind
        self.heights: list[int] = [0] * HEIGHTMAP_ENTRIES

    def __repr__(self) -> str:
        return f"Heightmap(kind={self.kind})"

    def pack(self) -> list[int]:
        """Pack the heights into 64-bit words, never splitting an entry across words."""
        longs: list[int] = []
        current = 0
        bits = 0
        for height in self.heights:
            if bits + HEIGHTMAP_BITS > 64:
                longs.append(current)
                current = 0
                bits = 0
            current = (current | ((height & _U64_MASK) << bits)) & _U64_MASK
            bits += HEIGHTMAP_BITS

        if len(longs) < HEIGHTMAP_LONGS:
            longs.append(current)
        return longs

    def write(self) -> bytes:
        """Encode the kind, word count and packed words."""
        packed = self.pack()
        return VARINT.write(self.kind) + VARINT.write(len(packed)) + _pack_longs(packed)