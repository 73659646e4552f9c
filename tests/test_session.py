import pytest

from wampproto.messages.base import MessageType, ProtocolError
from wampproto.messages.establish import Goodbye, Hello, Welcome
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
from wampproto.serializers import CBORSerializer, JSONSerializer, MsgPackSerializer
from wampproto.session import Session


@pytest.fixture
def session():
    return Session(JSONSerializer())


def _registered(session, request_id=1, registration_id=100):
    session.send_message(Register(request_id, {}, "io.example.proc"))
    session.receive_message(Registered(request_id, registration_id))


def _subscribed(session, request_id=1, subscription_id=200):
    session.send_message(Subscribe(request_id, {}, "io.example.topic"))
    session.receive_message(Subscribed(request_id, subscription_id))


@pytest.mark.parametrize(
    "serializer", [JSONSerializer(), CBORSerializer(), MsgPackSerializer()]
)
def test_call_and_result_round_trip(serializer):
    session = Session(serializer)
    call = Call(1, {}, "io.example.add", args=[1, 2])
    assert serializer.deserialize(session.send_message(call)) == call

    result = Result(1, {}, args=[3])
    assert session.receive(serializer.serialize(result)) == result
    with pytest.raises(ProtocolError, match="RESULT for invalid request_id 1"):
        session.receive_message(result)


def test_result_without_call_raises(session):
    with pytest.raises(ProtocolError, match="failed to deserialize"):
        session.receive(session.serializer.serialize(Result(5, {})))


def test_invocation_and_yield(session):
    _registered(session)
    session.receive_message(Invocation(9, 100, {}))
    data = session.send_message(Yield(9, {}, args=["ok"]))
    assert session.serializer.deserialize(data) == Yield(9, {}, args=["ok"])


def test_invocation_for_unknown_registration_raises(session):
    with pytest.raises(ProtocolError, match="INVOCATION for invalid request_id 4"):
        session.receive_message(Invocation(4, 100, {}))


def test_registered_without_register_raises(session):
    with pytest.raises(ProtocolError, match="REGISTERED for invalid request_id 2"):
        session.receive_message(Registered(2, 100))


def test_unregister_flow_removes_registration(session):
    _registered(session)
    session.send_message(Unregister(2, 100))
    session.receive_message(Unregistered(2))
    with pytest.raises(ProtocolError, match="INVOCATION"):
        session.receive_message(Invocation(3, 100, {}))


def test_unregistered_for_unknown_request_raises(session):
    with pytest.raises(ProtocolError, match="UNREGISTERED for invalid request_id 8"):
        session.receive_message(Unregistered(8))


def test_unregistered_for_unknown_registration_raises(session):
    session.send_message(Unregister(2, 555))
    with pytest.raises(
        ProtocolError, match="UNREGISTERED for invalid registration_id 555"
    ):
        session.receive_message(Unregistered(2))


def test_acknowledged_publish(session):
    session.send_message(Publish(1, {"acknowledge": True}, "io.example.topic"))
    session.receive_message(Published(1, 42))
    with pytest.raises(ProtocolError, match="PUBLISHED for invalid request_id 1"):
        session.receive_message(Published(1, 42))


def test_unacknowledged_publish_expects_no_reply(session):
    session.send_message(Publish(1, {}, "io.example.topic"))
    with pytest.raises(ProtocolError, match="PUBLISHED"):
        session.receive_message(Published(1, 42))


def test_event_for_subscription(session):
    _subscribed(session)
    event = Event(200, 7, {}, args=["hi"])
    assert session.receive(session.serializer.serialize(event)) == event


def test_event_without_subscription_raises(session):
    with pytest.raises(ProtocolError, match="EVENT for invalid subscription_id 200"):
        session.receive_message(Event(200, 7, {}))


def test_unsubscribe_unknown_subscription_raises(session):
    with pytest.raises(ProtocolError, match="non existent subscription 200"):
        session.send_message(Unsubscribe(2, 200))


def test_unsubscribe_flow_ends_subscription(session):
    _subscribed(session)
    session.send_message(Unsubscribe(2, 200))
    session.receive_message(Unsubscribed(2))
    with pytest.raises(ProtocolError, match="EVENT"):
        session.receive_message(Event(200, 1, {}))


def test_unsubscribed_for_unknown_request_raises(session):
    with pytest.raises(ProtocolError, match="UNSUBSCRIBED for invalid request_id 3"):
        session.receive_message(Unsubscribed(3))


def test_send_error_only_for_invocation(session):
    with pytest.raises(ProtocolError, match="message_type=INVOCATION"):
        session.send_message(Error(MessageType.CALL, 1, {}, "wamp.error.x"))


def test_send_error_for_invocation(session):
    _registered(session)
    session.receive_message(Invocation(9, 100, {}))
    error = Error(MessageType.INVOCATION, 9, {}, "wamp.error.x")
    assert session.serializer.deserialize(session.send_message(error)) == error


def test_received_error_clears_call(session):
    session.send_message(Call(1, {}, "io.example.proc"))
    session.receive_message(Error(MessageType.CALL, 1, {}, "wamp.error.x"))
    with pytest.raises(ProtocolError, match="RESULT"):
        session.receive_message(Result(1, {}))


@pytest.mark.parametrize(
    "message_type, label",
    [
        (MessageType.CALL, "call"),
        (MessageType.REGISTER, "register"),
        (MessageType.UNREGISTER, "unregister"),
        (MessageType.SUBSCRIBE, "subscribe"),
        (MessageType.UNSUBSCRIBE, "unsubscribe"),
        (MessageType.PUBLISH, "publish"),
    ],
)
def test_received_error_for_unknown_request(session, message_type, label):
    with pytest.raises(ProtocolError, match=f"ERROR for invalid {label} request"):
        session.receive_message(Error(message_type, 1, {}, "wamp.error.x"))


def test_received_error_for_unknown_type(session):
    with pytest.raises(ProtocolError, match="unknown error message type"):
        session.receive_message(Error(MessageType.HELLO, 1, {}, "wamp.error.x"))


def test_goodbye_both_ways(session):
    goodbye = Goodbye({}, "wamp.close.normal")
    assert session.serializer.deserialize(session.send_message(goodbye)) == goodbye
    assert session.receive(session.serializer.serialize(goodbye)) == goodbye


def test_send_unsupported_message_raises(session):
    with pytest.raises(ProtocolError, match="send not supported for message of type"):
        session.send_message(Hello("realm1", "alice"))


def test_receive_unexpected_message_raises(session):
    welcome = Welcome(1, "realm1", "alice", "user", {})
    with pytest.raises(ProtocolError, match="received unexpected message type 2"):
        session.receive_message(welcome)