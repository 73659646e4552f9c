[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wampproto"
version = "0.1.0"
description = "Sans-IO WAMP protocol building blocks: messages, serializers, client authentication, session bookkeeping and RawSocket framing"
requires-python = ">=3.10"
keywords = ["wamp", "rpc", "pubsub", "protocol", "rawsocket", "sans-io"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Internet",
]
dependencies = [
    "cbor2",
    "msgpack",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["wampproto"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
