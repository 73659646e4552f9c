"""Messages used to open, authenticate and close a session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Optional, Sequence

from wampproto.messages.base import (
    Message,
    MessageType,
    ProtocolError,
    ValidationSpec,
    _is_dict,
    _is_int,
    _is_list,
    _is_str,
    _matches,
)

_MISSING = object()


def _detail(
    details: dict[str, Any],
    key: str,
    check: Callable[[Any], bool],
    label: Optional[str] = None,
    default: Any = _MISSING,
) -> Any:
    """Fetch a typed entry from a details dict, raising on bad or missing values."""
    label = label or key
    if key not in details:
        if default is _MISSING:
            raise ProtocolError(f"Missing field: '{label}'")
        return default
    value = details[key]
    if not check(value):
        raise ProtocolError(f"Invalid type for '{key}': {value!r}")
    return value


@dataclass
class Hello(Message):
    """HELLO: a client asks to join a realm."""

    TYPE: ClassVar[MessageType] = MessageType.HELLO
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 3, "HELLO")

    realm: str
    authid: str
    auth_extra: dict[str, Any] = field(default_factory=dict)
    roles: dict[str, Any] = field(default_factory=dict)
    auth_methods: list[str] = field(default_factory=list)

    def marshal(self) -> list[Any]:
        details = {
            "authid": self.authid,
            "authmethods": list(self.auth_methods),
            "authextra": dict(self.auth_extra),
            "roles": dict(self.roles),
        }
        return [self.TYPE, self.realm, details]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Hello:
        cls.SPEC.validate(data)
        if not _matches(data, _is_str, _is_dict):
            raise cls.SPEC.invalid_message()
        realm, details = data[1], data[2]

        authid = _detail(details, "authid", _is_str)
        methods = _detail(details, "authmethods", _is_list)
        auth_extra = _detail(details, "authextra", _is_dict)
        roles = _detail(details, "roles", _is_dict, label="authroles")

        # Entries that are not strings are ignored.
        return cls(
            realm=realm,
            authid=authid,
            auth_extra=dict(auth_extra),
            roles=dict(roles),
            auth_methods=[m for m in methods if isinstance(m, str)],
        )


@dataclass
class Welcome(Message):
    """WELCOME: the router accepts the session."""

    TYPE: ClassVar[MessageType] = MessageType.WELCOME
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 3, "WELCOME")

    session_id: int
    realm: str
    authid: str
    auth_role: str
    details: dict[str, Any] = field(default_factory=dict)

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.session_id, dict(self.details)]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Welcome:
        cls.SPEC.validate(data)
        if not _matches(data, _is_int, _is_dict):
            raise cls.SPEC.invalid_message()
        session_id, details = data[1], data[2]

        # Some routers omit the realm; the one sent in HELLO applies then.
        realm = _detail(details, "realm", _is_str, default="")
        authid = _detail(details, "authid", _is_str)
        auth_role = _detail(details, "authrole", _is_str)

        return cls(
            session_id=session_id,
            realm=realm,
            authid=authid,
            auth_role=auth_role,
            details=dict(details),
        )


@dataclass
class Abort(Message):
    """ABORT: the session is refused or torn down before it is established."""

    TYPE: ClassVar[MessageType] = MessageType.ABORT
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 5, "ABORT")

    details: dict[str, Any]
    reason: str
    args: Optional[list[Any]] = None
    kwargs: Optional[dict[str, Any]] = None

    def marshal(self) -> list[Any]:
        return [self.TYPE, dict(self.details), self.reason]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Abort:
        cls.SPEC.validate(data)
        if _matches(data, _is_dict, _is_str):
            return cls(details=dict(data[1]), reason=data[2])
        if _matches(data, _is_dict, _is_str, _is_list):
            return cls(details=dict(data[1]), reason=data[2], args=list(data[3]))
        if _matches(data, _is_dict, _is_str, _is_list, _is_dict):
            return cls(
                details=dict(data[1]),
                reason=data[2],
                args=list(data[3]),
                kwargs=dict(data[4]),
            )
        raise cls.SPEC.invalid_message()


@dataclass
class Challenge(Message):
    """CHALLENGE: the router asks the client to prove its identity."""

    TYPE: ClassVar[MessageType] = MessageType.CHALLENGE
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 3, "CHALLENGE")

    auth_method: str
    extra: dict[str, Any] = field(default_factory=dict)

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.auth_method, dict(self.extra)]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Challenge:
        cls.SPEC.validate(data)
        if not _matches(data, _is_str, _is_dict):
            raise cls.SPEC.invalid_message()
        return cls(auth_method=data[1], extra=dict(data[2]))


@dataclass
class Authenticate(Message):
    """AUTHENTICATE: the client answers a challenge."""

    TYPE: ClassVar[MessageType] = MessageType.AUTHENTICATE
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 3, "AUTHENTICATE")

    signature: str
    extra: dict[str, Any] = field(default_factory=dict)

    def marshal(self) -> list[Any]:
        return [self.TYPE, self.signature, dict(self.extra)]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Authenticate:
        cls.SPEC.validate(data)
        if not _matches(data, _is_str, _is_dict):
            raise cls.SPEC.invalid_message()
        return cls(signature=data[1], extra=dict(data[2]))


@dataclass
class Goodbye(Message):
    """GOODBYE: either side closes an established session."""

    TYPE: ClassVar[MessageType] = MessageType.GOODBYE
    SPEC: ClassVar[ValidationSpec] = ValidationSpec(3, 3, "GOODBYE")

    details: dict[str, Any]
    reason: str

    def marshal(self) -> list[Any]:
        return [self.TYPE, dict(self.details), self.reason]

    @classmethod
    def parse(cls, data: Sequence[Any]) -> Goodbye:
        cls.SPEC.validate(data)
        if not _matches(data, _is_dict, _is_str):
            raise cls.SPEC.invalid_message()
        return cls(details=dict(data[1]), reason=data[2])