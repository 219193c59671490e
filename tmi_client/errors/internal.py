"""Centralized internal error hierarchy.

These exceptions give the client's failure modes semantic categories so
callers can tell a failed connect apart from a failed write or a line that
does not match the TMI grammar.

Classes:
  InternalError          – Base for all internal errors.
  NetworkError           – Transport level failures.
  TransportConnectError  – The transport could not be opened.
  TransportWriteError    – A send or internal write failed.
  TransportReadError     – A read failed and ended the receive loop.
  ParsingError           – Input that could not be interpreted.
  ProtocolParseError     – A received line does not match the wire grammar.
  SessionStateError      – An operation is not valid in the session's state.
  ConfigError            – Invalid or missing configuration.
"""

from __future__ import annotations

from collections.abc import Mapping


class InternalError(Exception):
    """Base class for all internal errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class NetworkError(InternalError):
    """Exception raised for network or transport layer errors."""


class TransportConnectError(NetworkError):
    """Exception raised when the transport to the TMI endpoint cannot be opened.

    Fatal for the session being created; no retry is attempted.
    """


class TransportWriteError(NetworkError):
    """Exception raised when writing a line to the transport fails.

    Surfaced to the caller of ``send``/``send_to_channel``. It does not stop
    a running receive loop by itself.
    """


class TransportReadError(NetworkError):
    """Exception recorded when a transport read fails."""


class ParsingError(InternalError):
    """Exception raised for input that cannot be parsed."""


class ProtocolParseError(ParsingError):
    """Exception raised when a received line does not match the TMI grammar.

    Args:
        message: Description of the grammar violation.
        line: The offending raw line, stored in ``data["line"]``.
    """

    def __init__(self, message: str, *, line: str) -> None:
        super().__init__(message, data={"line": line})

    @property
    def line(self) -> str:
        return str(self.data.get("line", ""))


class SessionStateError(InternalError):
    """Exception raised when a session operation is invalid in its current state."""


class ConfigError(InternalError):
    """Exception raised for invalid or missing configuration."""


__all__ = [
    "InternalError",
    "NetworkError",
    "TransportConnectError",
    "TransportWriteError",
    "TransportReadError",
    "ParsingError",
    "ProtocolParseError",
    "SessionStateError",
    "ConfigError",
]
