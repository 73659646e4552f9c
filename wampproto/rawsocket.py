"""RawSocket transport handshake and message framing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from wampproto.messages.base import ProtocolError

MAGIC = 0x7F
PROTOCOL_MAX_MSG_SIZE = 1 << 24
DEFAULT_MAX_MSG_SIZE = 1 << 20


class SerializerID(IntEnum):
    """Serializer codes carried in the handshake."""

    JSON = 1
    MSGPACK = 2
    CBOR = 3


class MessageKind(IntEnum):
    """Frame kinds carried in a message header."""

    WAMP = 0
    PING = 1
    PONG = 2


@dataclass(frozen=True)
class Handshake:
    """A serializer and the largest message a peer accepts."""

    serializer_id: SerializerID
    max_message_size: int = DEFAULT_MAX_MSG_SIZE


@dataclass(frozen=True)
class MessageHeader:
    """The four-byte prefix of a RawSocket frame."""

    kind: MessageKind
    length: int


def send_handshake(hs: Handshake) -> bytes:
    """Encode a handshake as its four bytes."""
    size = hs.max_message_size
    if size > PROTOCOL_MAX_MSG_SIZE:
        raise ProtocolError("max_message_size must not be more than 16 megabytes")
    if size < 512 or size & (size - 1):
        raise ProtocolError("max_message_size must be a power of 2 and >= 512")
    exponent = size.bit_length() - 1
    b1 = ((exponent - 9) << 4) | (int(hs.serializer_id) & 0x0F)
    return bytes([MAGIC, b1, 0x00, 0x00])


def receive_handshake(data: bytes) -> Handshake:
    """Decode the four handshake bytes sent by a peer."""
    data = bytes(data)
    if len(data) != 4:
        raise ProtocolError(
            f"expected 4 bytes for handshake response, got {len(data)}"
        )
    if data[0] != MAGIC:
        raise ProtocolError(f"expected MAGIC, got {data[0]}")
    if data[2] != 0x00 or data[3] != 0x00:
        raise ProtocolError(
            "expected 0x00 for third and fourth byte, "
            f"got {data[2]} and {data[3]}"
        )
    try:
        serializer = SerializerID(data[1] & 0x0F)
    except ValueError:
        raise ProtocolError("got invalid serializer byte") from None
    return Handshake(serializer, 1 << ((data[1] >> 4) + 9))


def send_message_header(header: MessageHeader) -> bytes:
    """Encode a frame header: kind byte then a 24-bit big-endian length."""
    length = header.length
    return bytes(
        [int(header.kind), (length >> 16) & 0xFF, (length >> 8) & 0xFF, length & 0xFF]
    )


def receive_message_header(data: bytes) -> MessageHeader:
    """Decode a four-byte frame header."""
    data = bytes(data)
    if len(data) != 4:
        raise ProtocolError("expected 4 bytes for message header")
    try:
        kind = MessageKind(data[0])
    except ValueError:
        raise ProtocolError("received invalid message type") from None
    return MessageHeader(kind, int.from_bytes(data[1:4], "big"))