"""WAMP message classes: base, establish, rpc, registration and pubsub."""