"""Lookup tables keyed by protocol state and packet ID."""

from __future__ import annotations

from typing import Generic, TypeVar

from kasumi.codec import ProtocolState

V = TypeVar("V")


class ProtocolRegistry(Generic[V]):
    """Maps a (protocol state, packet ID) pair to a value such as a decoder or handler."""

    def __init__(self) -> None:
        self._entries: dict[tuple[ProtocolState, int], V] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def register(self, state: ProtocolState, packet_id: int, value: V) -> None:
        """Register ``value``, replacing any earlier one for the same key."""
        self._entries[(state, packet_id)] = value

    def get(self, state: ProtocolState, packet_id: int) -> V | None:
        """Return the registered value, or None."""
        return self._entries.get((state, packet_id))

    def remove(self, state: ProtocolState, packet_id: int) -> None:
        """Remove the entry if present."""
        self._entries.pop((state, packet_id), None)