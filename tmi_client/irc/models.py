"""Shared IRC data models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType


class ConnectionState(Enum):
    DISCONNECTED = auto()
    CONNECTING = auto()
    AUTHENTICATING = auto()
    JOINING = auto()
    READY = auto()


def _freeze(metadata: Mapping[str, str] | None) -> Mapping[str, str]:
    return MappingProxyType(dict(metadata or {}))


@dataclass(frozen=True, slots=True)
class DecodedMessage:
    """The parsed content of one TMI line.

    Attributes:
        sender: Nickname or server host the message originated from.
        command: IRC verb or three digit numeric reply.
        target: Channel or user addressed, ``None`` when the line ends
            after the command.
        params: Trailing parameters with the leading ``:`` removed.
        metadata: Read-only view of the IRCv3 tags.
    """

    sender: str
    command: str
    target: str | None = None
    params: str = ""
    metadata: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "metadata", _freeze(self.metadata))

    @property
    def from_(self) -> str:
        """Alias for ``sender`` matching the IRC notion of the message source."""
        return self.sender

    @property
    def is_privmsg(self) -> bool:
        return self.command == "PRIVMSG"
