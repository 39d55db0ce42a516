"""A client connection: framing, packet decoding and handler dispatch."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from kasumi.codec import VARINT, ProtocolState, ReadError
from kasumi.network import PacketReader, PacketReaderError
from kasumi.packets.base import Packet
from kasumi.protocol_registry import ProtocolRegistry
from kasumi.varint import VarIntError, VarIntIncompleteError

log = logging.getLogger(__name__)

READ_SIZE = 4096
"""Largest chunk read from the stream at once."""


class ConnectionServeError(Exception):
    """Serving a connection failed: an I/O error or a malformed packet."""


class Connection:
    """A client connection over a socket-like stream with ``recv`` and ``sendall``.

    ``packets`` maps (state, packet ID) to decoders, ``handlers`` maps the same
    keys to handler functions, and ``registries`` holds the registry data sent
    during configuration (or None to send none).
    """

    def __init__(
        self,
        stream: Any,
        packets: ProtocolRegistry,
        handlers: ProtocolRegistry,
        registries: Any = None,
    ) -> None:
        self.stream = stream
        self.packets = packets
        self.handlers = handlers
        self.registries = registries
        self.state = ProtocolState.HANDSHAKE
        self._reader = PacketReader(READ_SIZE)
        self._unknown_ids: set[int] = set()

    def __repr__(self) -> str:
        return f"Connection(state={self.state})"

    def set_state(self, state: ProtocolState) -> None:
        """Switch the connection to another protocol state."""
        self.state = state

    def write_packet(self, packet: Packet) -> None:
        """Frame the packet with its ID and length and send it."""
        body = VARINT.write(packet.PACKET_ID) + packet.write()
        self.stream.sendall(VARINT.write(len(body)) + body)

    def _frames(self) -> Iterator[tuple[int, Any]]:
        while True:
            try:
                frame = self._reader.try_next_packet()
            except (PacketReaderError, ReadError, VarIntError) as exc:
                raise ConnectionServeError(str(exc)) from exc
            if frame is None:
                return
            yield frame

    def _dispatch(self, packet_id: int, body: Any) -> None:
        decode = self.packets.get(self.state, packet_id)
        if decode is None:
            if packet_id not in self._unknown_ids:
                log.warning("Received an unknown packet ID=%s in state %s", packet_id, self.state)
                self._unknown_ids.add(packet_id)
            return

        try:
            packet, _ = decode(body)
        except VarIntIncompleteError:
            return
        except (ReadError, VarIntError) as exc:
            raise ConnectionServeError(str(exc)) from exc

        handler = self.handlers.get(self.state, packet_id)
        if handler is not None:
            handler(self, packet)

    def serve(self) -> None:
        """Read and handle packets until the client disconnects."""
        while True:
            try:
                data = self.stream.recv(READ_SIZE)
            except OSError as exc:
                raise ConnectionServeError(f"I/O error has occurred: {exc}") from exc
            if not data:
                return
            self._reader.extend(data)
            for packet_id, body in self._frames():
                self._dispatch(packet_id, body)