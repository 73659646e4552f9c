"""Turning WAMP messages into bytes and back with JSON, CBOR or MessagePack."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Sequence

import cbor2
import msgpack

from wampproto.messages.base import Message, MessageType, ProtocolError, _is_int
from wampproto.messages.establish import (
    Abort,
    Authenticate,
    Challenge,
    Goodbye,
    Hello,
    Welcome,
)
from wampproto.messages.pubsub import (
    Event,
    Publish,
    Published,
    Subscribe,
    Subscribed,
    Unsubscribe,
    Unsubscribed,
)
from wampproto.messages.registration import (
    Interrupt,
    Register,
    Registered,
    Unregister,
    Unregistered,
)
from wampproto.messages.rpc import Call, Cancel, Error, Invocation, Result, Yield

_MESSAGE_CLASSES: dict[MessageType, type[Message]] = {
    cls.TYPE: cls
    for cls in (
        Abort,
        Authenticate,
        Call,
        Cancel,
        Challenge,
        Error,
        Event,
        Goodbye,
        Hello,
        Interrupt,
        Invocation,
        Publish,
        Published,
        Register,
        Registered,
        Result,
        Subscribe,
        Subscribed,
        Unsubscribe,
        Unsubscribed,
        Unregister,
        Unregistered,
        Welcome,
        Yield,
    )
}


def to_message(wamp_msg: Sequence[Any]) -> Message:
    """Build the message object that a decoded list describes."""
    if not wamp_msg:
        raise ProtocolError("received empty wamp message array")
    first = wamp_msg[0]
    cls = _MESSAGE_CLASSES.get(first) if _is_int(first) else None
    if cls is None:
        raise ProtocolError(f"received invalid wamp message of type {first!r}")
    return cls.parse(list(wamp_msg))


def _wire(value: Any) -> Any:
    """Strip enum and container subclasses so every encoder sees plain types."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, int):
        return int(value)
    if isinstance(value, (list, tuple)):
        return [_wire(item) for item in value]
    if isinstance(value, dict):
        return {key: _wire(item) for key, item in value.items()}
    return value


def _from_decoded(raw: Any) -> Message:
    if not isinstance(raw, list):
        raise ProtocolError(
            f"failed to deserialize message expected an array, got {type(raw).__name__}"
        )
    return to_message(raw)


def _serialize_failed(message: Message) -> ProtocolError:
    return ProtocolError(f"failed to serialize message {int(message.TYPE)}")


class Serializer(ABC):
    """Encodes messages to bytes and decodes bytes to messages."""

    @abstractmethod
    def serialize(self, message: Message) -> bytes:
        """Encode a message."""

    @abstractmethod
    def deserialize(self, payload: bytes) -> Message:
        """Decode a payload into a message."""

    def is_static(self) -> bool:
        """Whether the serializer works on static, schema-bound types."""
        return False


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    raise TypeError(f"cannot encode {type(value).__name__}")


class JSONSerializer(Serializer):
    """Compact UTF-8 JSON; byte strings are written as arrays of numbers."""

    def serialize(self, message: Message) -> bytes:
        try:
            text = json.dumps(
                _wire(message.marshal()),
                separators=(",", ":"),
                ensure_ascii=False,
                allow_nan=False,
                default=_json_default,
            )
        except (TypeError, ValueError) as exc:
            raise _serialize_failed(message) from exc
        return text.encode("utf-8")

    def deserialize(self, payload: bytes) -> Message:
        try:
            raw = json.loads(bytes(payload))
        except ValueError as exc:
            raise ProtocolError(f"failed to deserialize message {exc}") from exc
        return _from_decoded(raw)


class CBORSerializer(Serializer):
    """CBOR encoding."""

    def serialize(self, message: Message) -> bytes:
        try:
            return cbor2.dumps(_wire(message.marshal()))
        except (cbor2.CBOREncodeError, TypeError, ValueError) as exc:
            raise _serialize_failed(message) from exc

    def deserialize(self, payload: bytes) -> Message:
        try:
            raw = cbor2.loads(bytes(payload))
        except (cbor2.CBORDecodeError, ValueError) as exc:
            raise ProtocolError(f"failed to deserialize message {exc}") from exc
        return _from_decoded(raw)


class MsgPackSerializer(Serializer):
    """MessagePack encoding with distinct string and binary types."""

    def serialize(self, message: Message) -> bytes:
        try:
            return msgpack.packb(_wire(message.marshal()), use_bin_type=True)
        except (TypeError, ValueError, OverflowError) as exc:
            raise _serialize_failed(message) from exc

    def deserialize(self, payload: bytes) -> Message:
        try:
            raw = msgpack.unpackb(bytes(payload), raw=False)
        except (ValueError, TypeError) as exc:
            raise ProtocolError(f"failed to deserialize message {exc}") from exc
        return _from_decoded(raw)