"""IRC subsystem package.

Contains the wire parser, message models, session handshake and the
receive loop for the Twitch Messaging Interface.
"""

from .models import ConnectionState, DecodedMessage  # noqa: F401
from .parser import format_line, parse_message  # noqa: F401
from .receiver import MessageStream, ReceiveLoop, split_lines  # noqa: F401
from .session import Session  # noqa: F401

__all__ = [
    "ConnectionState",
    "DecodedMessage",
    "MessageStream",
    "ReceiveLoop",
    "Session",
    "format_line",
    "parse_message",
    "split_lines",
]
