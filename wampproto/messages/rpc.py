"""Messages used for remote procedure calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Optional, Sequence

from wampproto.messages.base import (
    Message,
    MessageType,
    ValidationSpec,
    _is_dict,
    _is_int,
    _is_list,
    _is_str,
    _matches,
)


def _marshal_payload(
    args: Optional[list[Any]], kwargs: Optional[dict[str, Any]]
) -> list[Any]:
    """Return the trailing positional/keyword payload fields of a message."""
    payload: list[Any] = []
    if args is not None:
        payload.append(list(args))
    if kwargs is not None:
        if args is None:
            payload.append(None)
        payload.append(dict(kwargs))
    return payload


def _parse_payload(
    data: Sequence[Any],
    spec: ValidationSpec,
    *head: Callable[[Any], bool],
) -> tuple[Optional[list[Any]], Optional[dict[str, Any]]]:
    """Check the fixed fields and return the optional args and kwargs."""
    spec.validate(data)
    position = len(head) + 1
    if _matches(data, *head):
        return None, None
    if _matches(data, *head, _is_list):
        return list(data[position]), None
    if _matches(data, *head, _is_list, _is_dict):
        return list(data[position]), dict(data[position + 1])
    raise spec.invalid_message()


@dataclass
class Call(Message):
    """CALL: a caller asks for a procedure to be run."""

    TYPE: ClassVar[MessageType] = MessageType.CALL
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(4, 6, "CALL")

    request_id: int
    options: dict[str, Any]
    procedure: str
    args: Optional[list[Any]] = None
    kwargs: Optional[dict[str, Any]] = None

    def marshal(self) -> list[Any]:
        return [
            self.TYPE,
            self.request_id,
            dict(self.options),
            self.procedure,
            *_marshal_payload(self.args, self.kwargs),
        ]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Call:
        args, kwargs = _parse_payload(data, cls.SPEC, _is_int, _is_dict, _is_str)
        return cls(
            request_id=data[1],
            options=dict(data[2]),
            procedure=data[3],
            args=args,
            kwargs=kwargs,
        )


@dataclass
class Cancel(Message):
    """CANCEL: a caller withdraws a pending call."""

    TYPE: ClassVar[MessageType] = MessageType.CANCEL
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 3, "CANCEL")

    request_id: int
    options: dict[str, Any]

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.request_id, dict(self.options)]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Cancel:
        cls.SPEC.validate(data)
        if not _matches(data, _is_int, _is_dict):
            raise cls.SPEC.invalid_message()
        return cls(request_id=data[1], options=dict(data[2]))


@dataclass
class Error(Message):
    """ERROR: a request of the given message type failed."""

    TYPE: ClassVar[MessageType] = MessageType.ERROR
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(5, 7, "ERROR")

    message_type: int
    request_id: int
    options: dict[str, Any]
    uri: str
    args: Optional[list[Any]] = None
    kwargs: Optional[dict[str, Any]] = None

    def marshal(self) -> list[Any]:
        return [
            self.TYPE,
            self.message_type,
            self.request_id,
            dict(self.options),
            self.uri,
            *_marshal_payload(self.args, self.kwargs),
        ]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Error:
        args, kwargs = _parse_payload(
            data, cls.SPEC, _is_int, _is_int, _is_dict, _is_str
        )
        return cls(
            message_type=data[1],
            request_id=data[2],
            options=dict(data[3]),
            uri=data[4],
            args=args,
            kwargs=kwargs,
        )


@dataclass
class Invocation(Message):
    """INVOCATION: the router asks a callee to run a registered procedure."""

    TYPE: ClassVar[MessageType] = MessageType.INVOCATION
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(4, 6, "INVOCATION")

    request_id: int
    registration_id: int
    details: dict[str, Any]
    args: Optional[list[Any]] = None
    kwargs: Optional[dict[str, Any]] = None

    def marshal(self) -> list[Any]:
        return [
            self.TYPE,
            self.request_id,
            self.registration_id,
            dict(self.details),
            *_marshal_payload(self.args, self.kwargs),
        ]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Invocation:
        args, kwargs = _parse_payload(data, cls.SPEC, _is_int, _is_int, _is_dict)
        return cls(
            request_id=data[1],
            registration_id=data[2],
            details=dict(data[3]),
            args=args,
            kwargs=kwargs,
        )


@dataclass
class Result(Message):
    """RESULT: the outcome of a call, sent to the caller."""

    TYPE: ClassVar[MessageType] = MessageType.RESULT
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 5, "RESULT")

    request_id: int
    details: dict[str, Any]
    args: Optional[list[Any]] = None
    kwargs: Optional[dict[str, Any]] = None

    def marshal(self) -> list[Any]:
        return [
            self.TYPE,
            self.request_id,
            dict(self.details),
            *_marshal_payload(self.args, self.kwargs),
        ]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Result:
        args, kwargs = _parse_payload(data, cls.SPEC, _is_int, _is_dict)
        return cls(
            request_id=data[1],
            details=dict(data[2]),
            args=args,
            kwargs=kwargs,
        )


@dataclass
class Yield(Message):
    """YIELD: a callee returns the outcome of an invocation."""

    TYPE: ClassVar[MessageType] = MessageType.YIELD
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 5, "YIELD")

    request_id: int
    options: dict[str, Any]
    args: Optional[list[Any]] = None
    kwargs: Optional[dict[str, Any]] = None

    def marshal(self) -> list[Any]:
        return [
            self.TYPE,
            self.request_id,
            dict(self.options),
            *_marshal_payload(self.args, self.kwargs),
        ]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Yield:
        args, kwargs = _parse_payload(data, cls.SPEC, _is_int, _is_dict)
        return cls(
            request_id=data[1],
            options=dict(data[2]),
            args=args,
            kwargs=kwargs,
        )