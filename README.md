# wampproto

Building blocks for the client side of the WAMP protocol. The package does no
networking of its own. You give it the bytes you received from a transport. It
gives back the bytes to send and keeps track of the protocol state.

## Installation

```
pip install .
```

## Modules

- `wampproto.messages.base` defines the following:
  - `ProtocolError` is the exception raised for every protocol failure.
  - `MessageType` is an `IntEnum` of the WAMP message codes.
  - `ValidationSpec` checks message length.
  - `Message` is the abstract base class of all messages.
- `wampproto.messages.establish` holds `Hello`, `Welcome`, `Abort`,
  `Challenge`, `Authenticate` and `Goodbye`.
- `wampproto.messages.rpc` holds `Call`, `Cancel`, `Error`, `Invocation`,
  `Result` and `Yield`.
- `wampproto.messages.registration` holds `Interrupt`, `Register`,
  `Registered`, `Unregister` and `Unregistered`.
- `wampproto.messages.pubsub` holds `Publish`, `Published`, `Subscribe`,
  `Subscribed`, `Unsubscribe`, `Unsubscribed` and `Event`.

  Every message is a dataclass. Its `marshal()` method returns the message as a
  list, and the class method `parse(data)` builds the message from such a list.
  `parse` raises `ProtocolError` when the length is wrong or a field has the
  wrong type.
- `wampproto.serializers` provides `JSONSerializer`, `CBORSerializer` and
  `MsgPackSerializer`. Each has `serialize(message) -> bytes` and
  `deserialize(payload) -> Message`. `to_message(list)` turns a decoded list
  into the matching message class. The JSON serializer writes byte strings as
  arrays of numbers.
- `wampproto.auth` provides `AnonymousAuthenticator`, `TicketAuthenticator`
  and `WAMPCRAAuthenticator`. It also has the helpers
  `derive_cra_key(secret, salt, iterations, keylen)` and
  `sign_cra_challenge(challenge, key)`.
- `wampproto.joiner` provides `Joiner`, which drives HELLO,
  CHALLENGE/AUTHENTICATE and WELCOME. It also has `get_client_roles()`.
- `wampproto.session` provides `Session`, which checks every message sent or
  received against the outstanding calls, registrations, invocations,
  subscriptions and acknowledged publications.
- `wampproto.details` provides `SessionDetails`, the identity granted to a
  joined session.
- `wampproto.idgen` provides `SessionScopeIDGenerator`. It hands out request
  IDs 1, 2, 3, … and wraps back to 1 after `2**53`. It is thread-safe.
- `wampproto.rawsocket` provides the RawSocket handshake and frame headers:
  - the types `SerializerID`, `MessageKind`, `Handshake` and `MessageHeader`;
  - the functions `send_handshake`, `receive_handshake`,
    `send_message_header` and `receive_message_header`.

## Joining a realm

```python
from wampproto.auth import TicketAuthenticator
from wampproto.joiner import Joiner
from wampproto.serializers import JSONSerializer

joiner = Joiner("realm1", JSONSerializer(), TicketAuthenticator("alice", "token"))
hello = joiner.send_hello()
# Send `hello` over your transport, then pass every reply from the router in:
reply = joiner.receive(data_from_router)
if reply is not None:
    ...  # send the AUTHENTICATE bytes
details = joiner.session_details()  # raises ProtocolError until WELCOME arrives
```

The serializer defaults to `JSONSerializer` and the authenticator defaults to
`AnonymousAuthenticator`. An ABORT from the router raises `ProtocolError`
carrying the abort reason.

## Running a session

```python
from wampproto.idgen import SessionScopeIDGenerator
from wampproto.messages.rpc import Call
from wampproto.serializers import JSONSerializer
from wampproto.session import Session

ids = SessionScopeIDGenerator()
session = Session(JSONSerializer())
data = session.send_message(
    Call(request_id=ids.next_id(), options={}, procedure="com.example.add", args=[1, 2])
)
# later, when the router answers:
message = session.receive(data_from_router)
```

`Session.send_message` accepts the following messages: CALL, YIELD, REGISTER,
UNREGISTER, PUBLISH, SUBSCRIBE, UNSUBSCRIBE, ERROR and GOODBYE. ERROR is
accepted only in reply to an INVOCATION. A PUBLISH is tracked only when its
options contain `"acknowledge": True`.

## RawSocket framing

```python
from wampproto.rawsocket import (
    Handshake, MessageHeader, MessageKind, SerializerID,
    receive_handshake, send_handshake, send_message_header,
)

raw = send_handshake(Handshake(SerializerID.JSON, 1 << 20))  # 4 bytes
handshake = receive_handshake(raw)
header = send_message_header(MessageHeader(MessageKind.WAMP, 42))
```

The maximum message size must be a power of two from 512 up to `1 << 24`.

## What it does not do

- It opens no sockets and runs no event loop. Moving the bytes is up to you.
- It covers the client side only. There is no router or broker/dealer logic.
- The only authentication methods are anonymous, ticket and WAMP-CRA.

## Tests

```
pip install .[test]
pytest
```