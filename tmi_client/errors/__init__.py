"""Error hierarchy and error logging helpers."""

from .internal import (  # noqa: F401
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

__all__ = [
    "ConfigError",
    "InternalError",
    "NetworkError",
    "ParsingError",
    "ProtocolParseError",
    "SessionStateError",
    "TransportConnectError",
    "TransportReadError",
    "TransportWriteError",
]
