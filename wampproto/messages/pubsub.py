"""Messages used for publishing and subscribing to topics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional, Sequence

from wampproto.messages.base import (
    Message,
    MessageType,
    ValidationSpec,
    _is_dict,
    _is_int,
    _is_str,
    _matches,
)
from wampproto.messages.rpc import _marshal_payload, _parse_payload


@dataclass
class Publish(Message):
    """PUBLISH: a publisher sends an event to a topic."""

    TYPE: ClassVar[MessageType] = MessageType.PUBLISH
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(4, 6, "PUBLISH")

    request_id: int
    options: dict[str, Any]
    topic: str
    args: Optional[list[Any]] = None
    kwargs: Optional[dict[str, Any]] = None

    def marshal(self) -> list[Any]:
        return [
            self.TYPE,
            self.request_id,
            dict(self.options),
            self.topic,
            *_marshal_payload(self.args, self.kwargs),
        ]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Publish:
        args, kwargs = _parse_payload(data, cls.SPEC, _is_int, _is_dict, _is_str)
        return cls(
            request_id=data[1],
            options=dict(data[2]),
            topic=data[3],
            args=args,
            kwargs=kwargs,
        )


@dataclass
class Published(Message):
    """PUBLISHED: the router acknowledges a publication."""

    TYPE: ClassVar[MessageType] = MessageType.PUBLISHED
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 3, "PUBLISHED")

    request_id: int
    publication_id: int

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.request_id, self.publication_id]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Published:
        cls.SPEC.validate(data)
        if not _matches(data, _is_int, _is_int):
            raise cls.SPEC.invalid_message()
        return cls(request_id=data[1], publication_id=data[2])


@dataclass
class Subscribe(Message):
    """SUBSCRIBE: a subscriber asks for events on a topic."""

    TYPE: ClassVar[MessageType] = MessageType.SUBSCRIBE
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(4, 4, "SUBSCRIBE")

    request_id: int
    options: dict[str, Any]
    topic: str

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.request_id, dict(self.options), self.topic]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Subscribe:
        cls.SPEC.validate(data)
        if not _matches(data, _is_int, _is_dict, _is_str):
            raise cls.SPEC.invalid_message()
        return cls(request_id=data[1], options=dict(data[2]), topic=data[3])


@dataclass
class Subscribed(Message):
    """SUBSCRIBED: the router confirms a subscription."""

    TYPE: ClassVar[MessageType] = MessageType.SUBSCRIBED
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 3, "SUBSCRIBED")

    request_id: int
    subscription_id: int

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.request_id, self.subscription_id]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Subscribed:
        cls.SPEC.validate(data)
        if not _matches(data, _is_int, _is_int):
            raise cls.SPEC.invalid_message()
        return cls(request_id=data[1], subscription_id=data[2])


@dataclass
class Unsubscribe(Message):
    """UNSUBSCRIBE: a subscriber ends a subscription."""

    TYPE: ClassVar[MessageType] = MessageType.UNSUBSCRIBE
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 3, "UNSUBSCRIBE")

    request_id: int
    subscription_id: int

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.request_id, self.subscription_id]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Unsubscribe:
        cls.SPEC.validate(data)
        if not _matches(data, _is_int, _is_int):
            raise cls.SPEC.invalid_message()
        return cls(request_id=data[1], subscription_id=data[2])


@dataclass
class Unsubscribed(Message):
    """UNSUBSCRIBED: the router confirms a subscription has ended."""

    TYPE: ClassVar[MessageType] = MessageType.UNSUBSCRIBED
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(2, 2, "UNSUBSCRIBED")

    request_id: int

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.request_id]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Unsubscribed:
        cls.SPEC.validate(data)
        if not _matches(data, _is_int):
            raise cls.SPEC.invalid_message()
        return cls(request_id=data[1])


@dataclass
class Event(Message):
    """EVENT: the router delivers a publication to a subscriber."""

    TYPE: ClassVar[MessageType] = MessageType.EVENT
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(4, 6, "EVENT")

    subscription_id: int
    publication_id: int
    details: dict[str, Any] = field(default_factory=dict)
    args: Optional[list[Any]] = None
    kwargs: Optional[dict[str, Any]] = None

    def marshal(self) -> list[Any]:
        return [
            self.TYPE,
            self.subscription_id,
            self.publication_id,
            dict(self.details),
            *_marshal_payload(self.args, self.kwargs),
        ]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Event:
        args, kwargs = _parse_payload(data, cls.SPEC, _is_int, _is_int, _is_dict)
        return cls(
            subscription_id=data[1],
            publication_id=data[2],
            details=dict(data[3]),
            args=args,
            kwargs=kwargs,
        )