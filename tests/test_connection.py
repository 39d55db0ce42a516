import pytest

from kasumi.codec import STRING, U16, VARINT, ProtocolState
from kasumi.connection import Connection, ConnectionServeError
from kasumi.network import PacketReader
from kasumi.packets import handshake
from kasumi.packets.handshake import HandshakeIntent, ServerboundHandshakePacket
from kasumi.packets.status import ClientboundPingResponsePacket
from kasumi.protocol_registry import ProtocolRegistry
from kasumi.varint import read_varint


class FakeStream:
    def __init__(self, chunks=(), error=None):
        self._chunks = list(chunks)
        self._error = error
        self.sent = bytearray()

    def recv(self, size):
        if self._error is not None:
            raise self._error
        return self._chunks.pop(0) if self._chunks else b""

    def sendall(self, data):
        self.sent += data


def frame(packet):
    body = VARINT.write(packet.PACKET_ID) + packet.write()
    return VARINT.write(len(body)) + body


def raw_frame(body):
    return VARINT.write(len(body)) + body


def sent_frames(stream):
    reader = PacketReader(4096)
    reader.extend(bytes(stream.sent))
    frames = []
    while (item := reader.try_next_packet()) is not None:
        frames.append((item[0], bytes(item[1])))
    return frames


def handshake_packet(intent=HandshakeIntent.STATUS):
    return ServerboundHandshakePacket(770, "localhost", 25565, intent)


def recording_handlers(calls):
    handlers = ProtocolRegistry()
    handlers.register(
        ProtocolState.HANDSHAKE, 0x00, lambda connection, packet: calls.append(packet)
    )
    return handlers


def packets_registry():
    registry = ProtocolRegistry()
    handshake.setup_registry(registry)
    return registry


def test_initial_state_is_handshake():
    connection = Connection(FakeStream(), ProtocolRegistry(), ProtocolRegistry())
    assert connection.state is ProtocolState.HANDSHAKE


def test_set_state():
    connection = Connection(FakeStream(), ProtocolRegistry(), ProtocolRegistry())
    connection.set_state(ProtocolState.PLAY)
    assert connection.state is ProtocolState.PLAY


def test_write_packet_wire_bytes():
    stream = FakeStream()
    connection = Connection(stream, ProtocolRegistry(), ProtocolRegistry())
    connection.write_packet(ClientboundPingResponsePacket(1))
    assert bytes(stream.sent) == b"\x09\x01" + (1).to_bytes(8, "big")


def test_write_packet_round_trip():
    stream = FakeStream()
    connection = Connection(stream, ProtocolRegistry(), ProtocolRegistry())
    packet = handshake_packet()
    connection.write_packet(packet)
    [(packet_id, body)] = sent_frames(stream)
    assert packet_id == ServerboundHandshakePacket.PACKET_ID
    assert ServerboundHandshakePacket.read(body)[0] == packet


def test_serve_dispatches_decoded_packet():
    calls = []
    packet = handshake_packet()
    connection = Connection(
        FakeStream([frame(packet)]), packets_registry(), recording_handlers(calls)
    )
    connection.serve()
    assert calls == [packet]


def test_serve_joins_split_frames():
    calls = []
    data = frame(handshake_packet()) * 2
    chunks = [data[:3], data[3:15], data[15:]]
    connection = Connection(FakeStream(chunks), packets_registry(), recording_handlers(calls))
    connection.serve()
    assert calls == [handshake_packet(), handshake_packet()]


def test_serve_skips_unknown_packets():
    calls = []
    data = raw_frame(VARINT.write(0x55) + b"\x01\x02") + frame(handshake_packet())
    connection = Connection(FakeStream([data]), packets_registry(), recording_handlers(calls))
    connection.serve()
    assert calls == [handshake_packet()]
    assert connection.state is ProtocolState.HANDSHAKE


def test_serve_skips_incomplete_varint_decode():
    calls = []
    packets = ProtocolRegistry()
    packets.register(ProtocolState.HANDSHAKE, 0x01, lambda body: read_varint(b"\x80"))
    handshake.setup_registry(packets)
    data = raw_frame(VARINT.write(0x01)) + frame(handshake_packet())
    connection = Connection(FakeStream([data]), packets, recording_handlers(calls))
    connection.serve()
    assert calls == [handshake_packet()]


def test_serve_without_handler_sends_nothing():
    stream = FakeStream([frame(handshake_packet())])
    connection = Connection(stream, packets_registry(), ProtocolRegistry())
    connection.serve()
    assert bytes(stream.sent) == b""


def test_serve_rejects_negative_length():
    connection = Connection(
        FakeStream([VARINT.write(-1)]), packets_registry(), ProtocolRegistry()
    )
    with pytest.raises(ConnectionServeError):
        connection.serve()


def test_serve_rejects_unknown_enum_variant():
    body = (
        VARINT.write(0x00)
        + VARINT.write(770)
        + STRING.write("localhost")
        + U16.write(25565)
        + VARINT.write(9)
    )
    connection = Connection(FakeStream([raw_frame(body)]), packets_registry(), ProtocolRegistry())
    with pytest.raises(ConnectionServeError):
        connection.serve()


def test_serve_wraps_io_errors():
    connection = Connection(
        FakeStream(error=OSError("reset")), packets_registry(), ProtocolRegistry()
    )
    with pytest.raises(ConnectionServeError, match="reset"):
        connection.serve()