# kasumi

Building blocks for the Minecraft: Java Edition network protocol: variable-length
integers, wire codecs, packet framing, packet definitions for the handshake, status and
play states, chunk and heightmap encoding, unnamed NBT encoding, registry data, and a
per-client connection loop that decodes packets and dispatches them to handlers.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `kasumi.varint`: `read_varint` and `write_varint`. `read_varint` returns the value
  and the number of bytes consumed, and raises `VarIntIncompleteError` or
  `VarIntTooBigError`.
- `kasumi.codec`: codecs for the wire types (`VARINT`, `STRING`, `BOOL`, `U8`, `I8`,
  `U16`, `I32`, `I64`, `F32`, `F64`, `UUID`, `BYTES`), the `PrefixedArray` and
  `Optional` wrappers, `BitSet`, the `ProtocolState` enum and the `ReadError` family of
  exceptions.
- `kasumi.network`: `PacketReader`, which splits a byte stream into
  `(packet id, body)` frames, and `BufferReader`, which reads several values from one
  buffer in a row.
- `kasumi.identifier`: `Identifier`, a namespaced value such as `minecraft:overworld`.
- `kasumi.text`: `TextComponent` chat components with `to_json` / `from_json`.
- `kasumi.server_list_ping`: the `ServerListPing` status payload.
- `kasumi.world`: `Chunk`, `ChunkSection` and `Heightmap` with their packed encodings,
  and `pack_data_array`.
- `kasumi.protocol_registry`: `ProtocolRegistry`, a table keyed by protocol state and
  packet ID.
- `kasumi.nbt`: `to_bytes_unnamed` and the `Byte`, `Int`, `Long`, `Float` and `Double`
  wrappers that pick a numeric tag.
- `kasumi.registry`: the registry models, `Registry.from_json`, and the `build_*`
  functions that turn a `Registry` into `RegistryData` ready to be written.
- `kasumi.packets.base`: `Packet`, `VarIntEnum` and `register_packet`.
- `kasumi.packets.handshake`, `kasumi.packets.status`, `kasumi.packets.play`: packet
  definitions for those states, each with a `setup_registry` function that registers
  the serverbound decoders.
- `kasumi.connection`: `Connection`, which reads from a socket-like object (`recv` and
  `sendall`), decodes frames with a packet registry and calls
  `handler(connection, packet)` from a handler registry.

## Examples

Framing an incoming stream:

```python
from kasumi.network import PacketReader

reader = PacketReader(4096)
reader.extend(b"\x02\x00\x05")
packet_id, body = reader.try_next_packet()  # (0, b"\x05")
```

`try_next_packet` returns `None` until a whole frame has arrived.

Serving one client with your own handlers:

```python
from kasumi.codec import ProtocolState
from kasumi.connection import Connection
from kasumi.packets import handshake, play, status
from kasumi.packets.handshake import HandshakeIntent, ServerboundHandshakePacket
from kasumi.protocol_registry import ProtocolRegistry

packets = ProtocolRegistry()
for module in (handshake, status, play):
    module.setup_registry(packets)

def on_handshake(connection, packet):
    if packet.intent is HandshakeIntent.STATUS:
        connection.set_state(ProtocolState.STATUS)

handlers = ProtocolRegistry()
handlers.register(ProtocolState.HANDSHAKE, ServerboundHandshakePacket.PACKET_ID, on_handshake)

Connection(client_socket, packets, handlers).serve()
```

## What this package does not do

- There is no command and no listening server: accepting sockets and creating a
  `Connection` for each is left to the caller.
- There are no packet definitions for the login and configuration states, and no
  ready-made handlers; `Connection` only calls the handlers it is given.
- No registry JSON is bundled: `Registry.from_json` parses data you supply.
- Reading chunk data is not supported; chunks, sections and heightmaps are only
  encoded.