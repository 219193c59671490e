"""Protocol definition for byte-stream transports.

A transport carries TMI lines to and from the server. Implementations open a
single connection, hand back whatever text one read produced (which may hold
several CRLF separated lines), and write already terminated lines.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Protocol for TMI transports."""

    @property
    def endpoint(self) -> str:
        """Human readable description of the remote endpoint."""
        ...

    @property
    def is_open(self) -> bool:
        """Whether the connection is currently open."""
        ...

    async def open(self) -> None:
        """Open the connection. Raises on failure."""
        ...

    async def read(self) -> str | None:
        """Read the next unit of text, or ``None`` once the peer closed."""
        ...

    async def write(self, data: str) -> None:
        """Write ``data`` and flush it."""
        ...

    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        ...
