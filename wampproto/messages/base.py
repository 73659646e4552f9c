"""Message type codes, length validation and the message base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, ClassVar, Sequence


class ProtocolError(Exception):
    """Raised when a message or protocol exchange is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class MessageType(IntEnum):
    """Numeric codes that open every WAMP message."""

    HELLO = 1
    WELCOME = 2
    ABORT = 3
    CHALLENGE = 4
    AUTHENTICATE = 5
    GOODBYE = 6
    ERROR = 8
    PUBLISH = 16
    PUBLISHED = 17
    SUBSCRIBE = 32
    SUBSCRIBED = 33
    UNSUBSCRIBE = 34
    UNSUBSCRIBED = 35
    EVENT = 36
    CALL = 48
    CANCEL = 49
    RESULT = 50
    REGISTER = 64
    REGISTERED = 65
    UNREGISTER = 66
    UNREGISTERED = 67
    INVOCATION = 68
    INTERRUPT = 69
    YIELD = 70


@dataclass(frozen=True)
class ValidationSpec:
    """Allowed length range of a message and its name for error texts."""

    min_length: int
    max_length: int
    name: str

    def invalid_message(self) -> ProtocolError:
        """Return the error for a message whose fields have the wrong types."""
        return ProtocolError(f"{self.name} received invalid message format")

    def validate(self, data: Sequence[Any]) -> None:
        """Raise ProtocolError unless the message length is within bounds."""
        length = len(data)
        if length < self.min_length:
            raise ProtocolError(
                f"unexpected message length for {self.name}: "
                f"must be at least {self.min_length}, but was {length}"
            )
        if length > self.max_length:
            raise ProtocolError(
                f"unexpected message length for {self.name}, "
                f"must be at most {self.max_length}, but was {length}"
            )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_dict(value: Any) -> bool:
    return isinstance(value, dict)


def _is_list(value: Any) -> bool:
    return isinstance(value, list)


def _matches(data: Sequence[Any], *checks: Callable[[Any], bool]) -> bool:
    """True if the fields after the type code pass the given checks, one each."""
    if len(data) != len(checks) + 1:
        return False
    return all(check(value) for check, value in zip(checks, data[1:]))


class Message(ABC):
    """A WAMP message that can be turned into a list and back."""

    TYPE: ClassVar[MessageType]
    SPEC: ClassVar[ValidationSpec]

    @abstractmethod
    def marshal(self) -> list[Any]:
        """Return the message as a list ready for serialization."""

    @classmethod
    @abstractmethod
    def parse(cls, data: Sequence[Any]) -> Message:
        """Build the message from a deserialized list."""