"""Client side of the session opening handshake."""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Optional

from wampproto.auth import AnonymousAuthenticator, ClientAuthenticator
from wampproto.details import SessionDetails
from wampproto.messages.base import Message, ProtocolError
from wampproto.messages.establish import Abort, Challenge, Hello, Welcome
from wampproto.serializers import JSONSerializer, Serializer

_CLIENT_ROLES = ("caller", "callee", "publisher", "subscriber")


def get_client_roles() -> dict[str, Any]:
    """Return the roles a client announces in HELLO, each with no features."""
    return {role: {"features": {}} for role in _CLIENT_ROLES}


class _JoinerState(Enum):
    NONE = auto()
    HELLO_SENT = auto()
    AUTHENTICATE_SENT = auto()
    JOINED = auto()


class Joiner:
    """Drives HELLO, CHALLENGE/AUTHENTICATE and WELCOME for one realm."""

    def __init__(
        self,
        realm: str,
        serializer: Optional[Serializer] = None,
        authenticator: Optional[ClientAuthenticator] = None,
    ) -> None:
        self.realm = realm
        self.serializer = serializer if serializer is not None else JSONSerializer()
        self.authenticator = (
            authenticator if authenticator is not None else AnonymousAuthenticator()
        )
        self._state = _JoinerState.NONE
        self._session_details: Optional[SessionDetails] = None

    def send_hello(self) -> bytes:
        """Return the encoded HELLO and wait for the router's answer."""
        hello = Hello(
            realm=self.realm,
            authid=self.authenticator.authid,
            auth_extra=dict(self.authenticator.auth_extra),
            roles=get_client_roles(),
            auth_methods=[self.authenticator.auth_method],
        )
        payload = self.serializer.serialize(hello)
        self._state = _JoinerState.HELLO_SENT
        return payload

    def receive(self, data: bytes) -> Optional[bytes]:
        """Handle encoded data from the router; return an encoded reply, if any."""
        try:
            incoming = self.serializer.deserialize(data)
        except ProtocolError as exc:
            raise ProtocolError(f"failed to deserialize message: {exc}") from exc
        reply = self.receive_message(incoming)
        if reply is None:
            return None
        return self.serializer.serialize(reply)

    def receive_message(self, msg: Message) -> Optional[Message]:
        """Handle a message from the router; return the reply message, if any."""
        if isinstance(msg, Welcome):
            if self._state not in (
                _JoinerState.HELLO_SENT,
                _JoinerState.AUTHENTICATE_SENT,
            ):
                raise ProtocolError("received WELCOME when it was not expected")
            self._session_details = SessionDetails(
                id=msg.session_id,
                realm=msg.realm or self.realm,
                authid=msg.authid,
                auth_role=msg.auth_role,
                static_serializer=False,
            )
            self._state = _JoinerState.JOINED
            return None

        if isinstance(msg, Challenge):
            if self._state is not _JoinerState.HELLO_SENT:
                raise ProtocolError("received CHALLENGE when it was not expected")
            try:
                authenticate = self.authenticator.authenticate(msg)
            except ProtocolError as exc:
                raise ProtocolError(f"failed to authenticate: {exc}") from exc
            self._state = _JoinerState.AUTHENTICATE_SENT
            return authenticate

        if isinstance(msg, Abort):
            raise ProtocolError(msg.reason)

        raise ProtocolError(f"received unknown message type {int(msg.TYPE)}")

    def session_details(self) -> SessionDetails:
        """Return the details of the joined session."""
        if self._session_details is None:
            raise ProtocolError("session is not setup yet")
        return self._session_details