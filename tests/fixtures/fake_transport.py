"""In-memory transport scripted by tests."""

from __future__ import annotations

import asyncio

_EOF = object()


class FakeTransport:
    """Transport double: reads come from a queue, writes are recorded.

    Args:
        open_error: Exception raised by ``open``.
        write_error: Exception raised by every ``write``.
    """

    endpoint = "fake://tmi"

    def __init__(
        self,
        *,
        open_error: BaseException | None = None,
        write_error: BaseException | None = None,
    ) -> None:
        self.open_error = open_error
        self.write_error = write_error
        self.opened = False
        self.closed = False
        self.writes: list[str] = []
        self._reads: asyncio.Queue[object] = asyncio.Queue()

    @property
    def is_open(self) -> bool:
        return self.opened and not self.closed

    @property
    def lines(self) -> list[str]:
        """Written lines without their CRLF terminator."""
        return [w.removesuffix("\r\n") for w in self.writes]

    def feed(self, *chunks: str) -> None:
        for chunk in chunks:
            self._reads.put_nowait(chunk)

    def feed_eof(self) -> None:
        self._reads.put_nowait(_EOF)

    def feed_error(self, error: BaseException) -> None:
        self._reads.put_nowait(error)

    async def open(self) -> None:
        if self.open_error is not None:
            raise self.open_error
        self.opened = True

    async def read(self) -> str | None:
        item = await self._reads.get()
        if item is _EOF:
            return None
        if isinstance(item, BaseException):
            raise item
        return item  # type: ignore[return-value]

    async def write(self, data: str) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.writes.append(data)
        # Yield so concurrent writers get a chance to interleave.
        await asyncio.sleep(0)

    async def close(self) -> None:
        if not self.closed:
            self.closed = True
            self.feed_eof()
