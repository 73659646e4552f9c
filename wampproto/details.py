"""Facts about an established session."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SessionDetails:
    """The identity a router granted to a joined session."""

    id: int
    realm: str
    authid: str
    auth_role: str
    static_serializer: bool = False