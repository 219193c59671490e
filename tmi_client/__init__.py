"""Client for the Twitch Messaging Interface (TMI).

Basic usage::

    config = SessionConfig(token="oauth:...", nick="madstevebot", rooms=["#madhousesteve"])
    session = await Session.create(config)
    task, stream = session.start()
    async for message in stream:
        print(message.sender, message.params)
"""

from .config import ConfigLoader, SessionConfig, get_configuration  # noqa: F401
from .errors import (  # noqa: F401
    ConfigError,
    InternalError,
    NetworkError,
    ParsingError,
    ProtocolParseError,
    SessionStateError,
    TransportConnectError,
    TransportReadError,
    TransportWriteError,
)
from .irc import (  # noqa: F401
    ConnectionState,
    DecodedMessage,
    MessageStream,
    Session,
    format_line,
    parse_message,
)
from .transport import (  # noqa: F401
    TCPTransport,
    Transport,
    WebSocketTransport,
    create_transport,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ConfigLoader",
    "ConnectionState",
    "DecodedMessage",
    "InternalError",
    "MessageStream",
    "NetworkError",
    "ParsingError",
    "ProtocolParseError",
    "Session",
    "SessionConfig",
    "SessionStateError",
    "TCPTransport",
    "Transport",
    "TransportConnectError",
    "TransportReadError",
    "TransportWriteError",
    "WebSocketTransport",
    "create_transport",
    "format_line",
    "get_configuration",
    "parse_message",
]
