"""Variable-length integers (VarInt) as used on the wire by the protocol."""

SEGMENT_BITS = 0x7F
"""Mask selecting the seven data bits of each VarInt byte."""

CONTINUE_BIT = 0x80
"""Bit set on every VarInt byte that is followed by another one."""

SHIFT_VALUE = 7
"""Number of data bits carried by each VarInt byte."""

MAX_VARINT_SIZE = 5
"""Maximum number of bytes a single VarInt can occupy."""

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1
_UINT32_MASK = 0xFFFFFFFF


class VarIntError(ValueError):
    """Base class for VarInt encoding and decoding failures."""


class VarIntTooBigError(VarIntError):
    """The VarInt does not fit into a signed 32-bit integer."""

    def __init__(self, message: str = "the received VarInt is too big") -> None:
        super().__init__(message)


class VarIntIncompleteError(VarIntError):
    """The buffer ended before the VarInt was complete."""

    def __init__(self, message: str = "the received VarInt is incomplete") -> None:
        super().__init__(message)


def read_varint(buffer: bytes | bytearray | memoryview) -> tuple[int, int]:
    """Decode a VarInt from the start of ``buffer``.

    Returns the decoded signed 32-bit value and the number of bytes consumed.
    """
    result = 0
    for index, byte in enumerate(buffer[:MAX_VARINT_SIZE]):
        result |= (byte & SEGMENT_BITS) << (SHIFT_VALUE * index)
        if not byte & CONTINUE_BIT:
            result &= _UINT32_MASK
            if result > _INT32_MAX:
                result -= 1 << 32
            return result, index + 1

    if len(buffer) < MAX_VARINT_SIZE:
        raise VarIntIncompleteError()
    raise VarIntTooBigError()


def write_varint(value: int) -> bytes:
    """Encode a signed 32-bit integer as a VarInt."""
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise VarIntTooBigError(f"{value} does not fit into a VarInt")

    remaining = value & _UINT32_MASK
    output = bytearray()
    while True:
        segment = remaining & SEGMENT_BITS
        remaining >>= SHIFT_VALUE
        if remaining:
            output.append(segment | CONTINUE_BIT)
        else:
            output.append(segment)
            return bytes(output)