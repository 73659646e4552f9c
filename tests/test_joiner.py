import pytest

from wampproto.auth import (
    AnonymousAuthenticator,
    TicketAuthenticator,
    WAMPCRAAuthenticator,
    sign_cra_challenge,
)
from wampproto.joiner import Joiner, get_client_roles
from wampproto.messages.base import ProtocolError
from wampproto.messages.establish import (
    Abort,
    Authenticate,
    Challenge,
    Goodbye,
    Hello,
    Welcome,
)
from wampproto.serializers import CBORSerializer, JSONSerializer, MsgPackSerializer


def _welcome(session_id=7, realm="realm1", authid="alice", authrole="user"):
    details = {"authid": authid, "authrole": authrole}
    if realm is not None:
        details["realm"] = realm
    return Welcome(
        session_id=session_id,
        realm=realm or "",
        authid=authid,
        auth_role=authrole,
        details=details,
    )


def test_client_roles_have_empty_features():
    roles = get_client_roles()
    assert set(roles) == {"caller", "callee", "publisher", "subscriber"}
    assert all(role == {"features": {}} for role in roles.values())


@pytest.mark.parametrize(
    "serializer", [JSONSerializer(), CBORSerializer(), MsgPackSerializer()]
)
def test_send_hello_encodes_hello(serializer):
    joiner = Joiner("realm1", serializer, AnonymousAuthenticator("alice"))
    hello = serializer.deserialize(joiner.send_hello())
    assert isinstance(hello, Hello)
    assert hello.realm == "realm1"
    assert hello.authid == "alice"
    assert hello.auth_methods == ["anonymous"]
    assert hello.roles == get_client_roles()


def test_welcome_after_hello_joins():
    serializer = JSONSerializer()
    joiner = Joiner("realm1", serializer)
    joiner.send_hello()
    assert joiner.receive(serializer.serialize(_welcome())) is None
    details = joiner.session_details()
    assert details.id == 7
    assert details.realm == "realm1"
    assert details.authid == "alice"
    assert details.auth_role == "user"
    assert details.static_serializer is False


def test_welcome_without_realm_uses_joiner_realm():
    serializer = JSONSerializer()
    joiner = Joiner("myrealm", serializer)
    joiner.send_hello()
    joiner.receive(serializer.serialize(_welcome(realm=None)))
    assert joiner.session_details().realm == "myrealm"


def test_welcome_before_hello_is_rejected():
    joiner = Joiner("realm1")
    with pytest.raises(ProtocolError, match="WELCOME when it was not expected"):
        joiner.receive_message(_welcome())


def test_session_details_before_join_raises():
    joiner = Joiner("realm1")
    joiner.send_hello()
    with pytest.raises(ProtocolError, match="session is not setup yet"):
        joiner.session_details()


def test_ticket_challenge_yields_authenticate():
    serializer = JSONSerializer()
    auth = TicketAuthenticator(authid="alice", ticket="token")
    joiner = Joiner("realm1", serializer, auth)
    hello = serializer.deserialize(joiner.send_hello())
    assert hello.auth_methods == ["ticket"]

    reply = joiner.receive(serializer.serialize(Challenge("ticket", {})))
    authenticate = serializer.deserialize(reply)
    assert isinstance(authenticate, Authenticate)
    assert authenticate.signature == "token"

    assert joiner.receive(serializer.serialize(_welcome())) is None
    assert joiner.session_details().authid == "alice"


def test_wampcra_challenge_signature():
    secret = "secret"
    joiner = Joiner("realm1", authenticator=WAMPCRAAuthenticator("alice", secret))
    joiner.send_hello()
    reply = joiner.receive_message(Challenge("wampcra", {"challenge": "abc"}))
    assert reply == Authenticate(
        signature=sign_cra_challenge("abc", secret.encode()), extra={}
    )


def test_second_challenge_is_rejected():
    joiner = Joiner("realm1", authenticator=TicketAuthenticator("alice", "token"))
    joiner.send_hello()
    joiner.receive_message(Challenge("ticket", {}))
    with pytest.raises(ProtocolError, match="CHALLENGE when it was not expected"):
        joiner.receive_message(Challenge("ticket", {}))


def test_anonymous_challenge_fails_authentication():
    joiner = Joiner("realm1")
    joiner.send_hello()
    with pytest.raises(ProtocolError, match="failed to authenticate"):
        joiner.receive_message(Challenge("ticket", {}))


def test_abort_raises_reason():
    joiner = Joiner("realm1")
    joiner.send_hello()
    with pytest.raises(ProtocolError) as info:
        joiner.receive_message(Abort({}, "wamp.error.no_such_realm"))
    assert str(info.value) == "wamp.error.no_such_realm"


def test_unknown_message_is_rejected():
    joiner = Joiner("realm1")
    joiner.send_hello()
    with pytest.raises(ProtocolError, match="received unknown message type 6"):
        joiner.receive_message(Goodbye({}, "wamp.close.normal"))


def test_undecodable_data_is_rejected():
    joiner = Joiner("realm1")
    joiner.send_hello()
    with pytest.raises(ProtocolError, match="failed to deserialize message"):
        joiner.receive(b"not json")