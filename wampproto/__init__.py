"""Sans-IO client building blocks for WAMP: messages, serializers, auth, session state and RawSocket framing."""

__version__ = "0.1.0"