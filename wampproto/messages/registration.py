"""Messages used to register and unregister procedures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Sequence

from wampproto.messages.base import (
    Message,
    MessageType,
    ValidationSpec,
    _is_dict,
    _is_int,
    _is_str,
    _matches,
)


@dataclass
class Interrupt(Message):
    """INTERRUPT: the router asks a callee to stop a running invocation."""

    TYPE: ClassVar[MessageType] = MessageType.INTERRUPT
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 3, "INTERRUPT")

    request_id: int
    options: dict[str, Any] = field(default_factory=dict)

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.request_id, dict(self.options)]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Interrupt:
        cls.SPEC.validate(data)
        if not _matches(data, _is_int, _is_dict):
            raise cls.SPEC.invalid_message()
        return cls(request_id=data[1], options=dict(data[2]))


@dataclass
class Register(Message):
    """REGISTER: a callee offers a procedure under a URI."""

    TYPE: ClassVar[MessageType] = MessageType.REGISTER
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(4, 4, "REGISTER")

    request_id: int
    options: dict[str, Any]
    procedure: str

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.request_id, dict(self.options), self.procedure]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Register:
        cls.SPEC.validate(data)
        if not _matches(data, _is_int, _is_dict, _is_str):
            raise cls.SPEC.invalid_message()
        return cls(request_id=data[1], options=dict(data[2]), procedure=data[3])


@dataclass
class Registered(Message):
    """REGISTERED: the router confirms a registration."""

    TYPE: ClassVar[MessageType] = MessageType.REGISTERED
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 3, "REGISTERED")

    request_id: int
    registration_id: int

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.request_id, self.registration_id]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Registered:
        cls.SPEC.validate(data)
        if not _matches(data, _is_int, _is_int):
            raise cls.SPEC.invalid_message()
        return cls(request_id=data[1], registration_id=data[2])


@dataclass
class Unregister(Message):
    """UNREGISTER: a callee withdraws a registration."""

    TYPE: ClassVar[MessageType] = MessageType.UNREGISTER
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 3, "UNREGISTER")

    request_id: int
    registration_id: int

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.request_id, self.registration_id]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Unregister:
        cls.SPEC.validate(data)
        if not _matches(data, _is_int, _is_int):
            raise cls.SPEC.invalid_message()
        return cls(request_id=data[1], registration_id=data[2])


@dataclass
class Unregistered(Message):
    """UNREGISTERED: the router confirms a registration was withdrawn."""

    TYPE: ClassVar[MessageType] = MessageType.UNREGISTERED
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(2, 2, "UNREGISTERED")

    request_id: int

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.request_id]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Unregistered:
        cls.SPEC.validate(data)
        if not _matches(data, _is_int):
            raise cls.SPEC.invalid_message()
        return cls(request_id=data[1])