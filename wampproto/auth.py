"""Client-side authenticators: anonymous, ticket and WAMP-CRA."""

from __future__ import annotations

import base64
import hashlib
import hmac
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

from wampproto.messages.base import ProtocolError, _is_int, _is_str
from wampproto.messages.establish import Authenticate, Challenge

_U32_MAX = 2**32 - 1


class ClientAuthenticator(ABC):
    """Supplies the HELLO auth fields and answers CHALLENGE messages."""

    auth_method: ClassVar[str]
    authid: str
    auth_extra: dict[str, Any]

    @abstractmethod
    def authenticate(self, challenge: Challenge) -> Authenticate:
        """Return the AUTHENTICATE reply to a challenge."""


@dataclass
class AnonymousAuthenticator(ClientAuthenticator):
    """Joins without credentials."""

    auth_method: ClassVar[str] = "anonymous"

    authid: str = ""
    auth_extra: dict[str, Any] = field(default_factory=dict)

    def authenticate(self, challenge: Challenge) -> Authenticate:
        raise ProtocolError(
            "authenticate() must not be called for anonymous authentication"
        )


@dataclass
class TicketAuthenticator(ClientAuthenticator):
    """Answers a challenge with a fixed ticket."""

    auth_method: ClassVar[str] = "ticket"

    authid: str
    ticket: str
    auth_extra: dict[str, Any] = field(default_factory=dict)

    def authenticate(self, challenge: Challenge) -> Authenticate:
        return Authenticate(signature=self.ticket, extra=dict(self.auth_extra))


@dataclass
class WAMPCRAAuthenticator(ClientAuthenticator):
    """Signs the challenge with HMAC-SHA256, salting the secret if asked."""

    auth_method: ClassVar[str] = "wampcra"

    authid: str
    secret: str
    auth_extra: dict[str, Any] = field(default_factory=dict)

    def authenticate(self, challenge: Challenge) -> Authenticate:
        extra = challenge.extra
        challenge_text = extra.get("challenge")
        if not _is_str(challenge_text):
            raise ProtocolError("challenge must be a string")

        if all(key in extra for key in ("salt", "iterations", "keylen")):
            salt = extra["salt"]
            if not _is_str(salt):
                raise ProtocolError("salt must be a string")
            iterations = extra["iterations"]
            if not _is_int(iterations):
                raise ProtocolError("iterations must be an int")
            keylen = extra["keylen"]
            if not _is_int(keylen):
                raise ProtocolError("keylen must be an int")
            if not 0 <= iterations <= _U32_MAX:
                raise ProtocolError("Invalid value for iterations: must be positive")
            if keylen < 0:
                raise ProtocolError("Invalid value for keylen: must be positive")
            key = derive_cra_key(self.secret, salt, iterations, keylen).encode()
        else:
            key = self.secret.encode()

        return Authenticate(
            signature=sign_cra_challenge(challenge_text, key),
            extra=dict(self.auth_extra),
        )


def sign_cra_challenge(challenge: str, key: bytes) -> str:
    """Return the base64 HMAC-SHA256 of the challenge under the key."""
    digest = hmac.new(key, challenge.encode(), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def derive_cra_key(secret: str, salt: str, iterations: int, keylen: int) -> str:
    """Return the base64 PBKDF2-HMAC-SHA256 key derived from a salted secret."""
    if keylen == 0:
        return ""
    # A round count of zero yields the same block as a single round.
    derived = hashlib.pbkdf2_hmac(
        "sha256", secret.encode(), salt.encode(), max(iterations, 1), dklen=keylen
    )
    return base64.b64encode(derived).decode("ascii")