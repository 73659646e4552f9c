"""Bookkeeping of requests and their replies in an established session."""

from __future__ import annotations

import threading
from typing import Optional

from wampproto.messages.base import Message, MessageType, ProtocolError
from wampproto.messages.establish import Goodbye
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
    Register,
    Registered,
    Unregister,
    Unregistered,
)
from wampproto.messages.rpc import Call, Error, Invocation, Result, Yield
from wampproto.serializers import JSONSerializer, Serializer


class Session:
    """Checks that every message sent or received fits an outstanding request."""

    def __init__(self, serializer: Optional[Serializer] = None) -> None:
        self.serializer = serializer if serializer is not None else JSONSerializer()
        self._lock = threading.Lock()

        self._call_requests: set[int] = set()
        self._register_requests: set[int] = set()
        self._registrations: set[int] = set()
        self._invocation_requests: set[int] = set()
        self._unregister_requests: dict[int, int] = {}

        self._publish_requests: set[int] = set()
        self._subscribe_requests: set[int] = set()
        self._subscriptions: set[int] = set()
        self._unsubscribe_requests: dict[int, int] = {}

    def send_message(self, msg: Message) -> bytes:
        """Record an outgoing message and return it encoded."""
        try:
            data = self.serializer.serialize(msg)
        except ProtocolError as exc:
            raise ProtocolError(f"failed to serialize {exc}") from exc

        with self._lock:
            if isinstance(msg, Call):
                self._call_requests.add(msg.request_id)
            elif isinstance(msg, Yield):
                self._invocation_requests.discard(msg.request_id)
            elif isinstance(msg, Register):
                self._register_requests.add(msg.request_id)
            elif isinstance(msg, Unregister):
                self._unregister_requests[msg.request_id] = msg.registration_id
            elif isinstance(msg, Publish):
                if msg.options.get("acknowledge") is True:
                    self._publish_requests.add(msg.request_id)
            elif isinstance(msg, Subscribe):
                self._subscribe_requests.add(msg.request_id)
            elif isinstance(msg, Unsubscribe):
                if msg.subscription_id not in self._subscriptions:
                    raise ProtocolError(
                        "unsubscribe request for non existent subscription "
                        f"{msg.subscription_id}"
                    )
                self._unsubscribe_requests[msg.request_id] = msg.subscription_id
            elif isinstance(msg, Error):
                if msg.message_type != MessageType.INVOCATION:
                    raise ProtocolError(
                        "error message can only be sent for message_type=INVOCATION"
                    )
                self._invocation_requests.discard(msg.request_id)
            elif not isinstance(msg, Goodbye):
                raise ProtocolError(
                    f"send not supported for message of type {type(msg).__name__}"
                )
        return data

    def receive(self, data: bytes) -> Message:
        """Decode and check an incoming message, and return it."""
        try:
            msg = self.serializer.deserialize(data)
            self.receive_message(msg)
        except ProtocolError as exc:
            raise ProtocolError(f"failed to deserialize {exc}") from exc
        return msg

    def receive_message(self, msg: Message) -> None:
        """Check an incoming message against outstanding requests."""
        with self._lock:
            if isinstance(msg, Result):
                if msg.request_id not in self._call_requests:
                    raise ProtocolError(
                        f"received RESULT for invalid request_id {msg.request_id}"
                    )
                self._call_requests.remove(msg.request_id)
            elif isinstance(msg, Registered):
                if msg.request_id not in self._register_requests:
                    raise ProtocolError(
                        f"received REGISTERED for invalid request_id {msg.request_id}"
                    )
                self._register_requests.remove(msg.request_id)
                self._registrations.add(msg.registration_id)
            elif isinstance(msg, Unregistered):
                registration_id = self._unregister_requests.pop(msg.request_id, None)
                if registration_id is None:
                    raise ProtocolError(
                        "received UNREGISTERED for invalid request_id "
                        f"{msg.request_id}"
                    )
                if registration_id not in self._registrations:
                    raise ProtocolError(
                        "received UNREGISTERED for invalid registration_id "
                        f"{registration_id}"
                    )
                self._registrations.remove(registration_id)
            elif isinstance(msg, Invocation):
                if msg.registration_id not in self._registrations:
                    raise ProtocolError(
                        f"received INVOCATION for invalid request_id {msg.request_id}"
                    )
                self._invocation_requests.add(msg.request_id)
            elif isinstance(msg, Published):
                if msg.request_id not in self._publish_requests:
                    raise ProtocolError(
                        f"received PUBLISHED for invalid request_id {msg.request_id}"
                    )
                self._publish_requests.remove(msg.request_id)
            elif isinstance(msg, Subscribed):
                if msg.request_id not in self._subscribe_requests:
                    raise ProtocolError(
                        f"received SUBSCRIBED for invalid request_id {msg.request_id}"
                    )
                self._subscriptions.add(msg.subscription_id)
            elif isinstance(msg, Unsubscribed):
                subscription_id = self._unsubscribe_requests.pop(msg.request_id, None)
                if subscription_id is None:
                    raise ProtocolError(
                        "received UNSUBSCRIBED for invalid request_id "
                        f"{msg.request_id}"
                    )
                if subscription_id not in self._subscriptions:
                    raise ProtocolError(
                        "received UNSUBSCRIBED for invalid subscription_id "
                        f"{subscription_id}"
                    )
                self._subscriptions.remove(subscription_id)
            elif isinstance(msg, Event):
                if msg.subscription_id not in self._subscriptions:
                    raise ProtocolError(
                        "received EVENT for invalid subscription_id "
                        f"{msg.subscription_id}"
                    )
            elif isinstance(msg, Error):
                self._receive_error(msg)
            elif not isinstance(msg, Goodbye):
                raise ProtocolError(
                    f"received unexpected message type {int(msg.TYPE)}"
                )

    def _receive_error(self, error: Error) -> None:
        pending: dict[int, tuple[set[int] | dict[int, int], str]] = {
            MessageType.CALL: (self._call_requests, "call"),
            MessageType.REGISTER: (self._register_requests, "register"),
            MessageType.UNREGISTER: (self._unregister_requests, "unregister"),
            MessageType.SUBSCRIBE: (self._subscribe_requests, "subscribe"),
            MessageType.UNSUBSCRIBE: (self._unsubscribe_requests, "unsubscribe"),
            MessageType.PUBLISH: (self._publish_requests, "publish"),
        }
        entry = pending.get(error.message_type)
        if entry is None:
            raise ProtocolError(f"unknown error message type {error.message_type}")
        requests, label = entry
        if error.request_id not in requests:
            raise ProtocolError(f"received ERROR for invalid {label} request")
        if isinstance(requests, dict):
            del requests[error.request_id]
        else:
            requests.remove(error.request_id)