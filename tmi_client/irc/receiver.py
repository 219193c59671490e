"""Receive loop and the message stream it feeds."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from ..constants import LINE_TERMINATOR, TMI_RECEIVE_QUEUE_SIZE
from ..errors.handling import TRANSPORT_EXCEPTIONS
from ..errors.internal import (
    NetworkError,
    ProtocolParseError,
    TransportReadError,
    TransportWriteError,
)
from ..logs.logger import logger
from .models import DecodedMessage
from .parser import parse_message

if TYPE_CHECKING:  # pragma: no cover
    from ..transport.base import Transport

PING_PREFIX = "PING "
PONG_PREFIX = "PONG "

_END = object()


class MessageStream:
    """FIFO of decoded messages ending when the receive loop stops.

    Consume it with ``async for`` or ``await get()``; ``get`` returns
    ``None`` once the stream has ended. ``error`` holds the read failure
    that ended the stream, or ``None`` after a clean close.
    """

    def __init__(self, maxsize: int = TMI_RECEIVE_QUEUE_SIZE) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize)
        self._closed = False
        self._drained = False
        self.error: BaseException | None = None

    @property
    def closed(self) -> bool:
        """True once the producer has closed the stream."""
        return self._closed

    async def put(self, message: DecodedMessage) -> None:
        if self._closed:
            raise RuntimeError("stream is closed")
        await self._queue.put(message)

    async def close(self, error: BaseException | None = None) -> None:
        """Mark the stream ended. Never blocks, even on a full queue."""
        if self._closed:
            return
        self._closed = True
        self.error = error
        if not self._queue.full():
            self._queue.put_nowait(_END)
        # On a full queue get() reports the end once the backlog is drained.

    async def get(self) -> DecodedMessage | None:
        if self._drained:
            return None
        if self._closed and self._queue.empty():
            self._drained = True
            return None
        item = await self._queue.get()
        if item is _END:
            self._drained = True
            return None
        return item  # type: ignore[return-value]

    def __aiter__(self) -> MessageStream:
        return self

    async def __anext__(self) -> DecodedMessage:
        message = await self.get()
        if message is None:
            raise StopAsyncIteration
        return message


def split_lines(chunk: str) -> list[str]:
    """Split one read into protocol lines, dropping terminators and blanks."""
    lines = []
    for line in chunk.rstrip(LINE_TERMINATOR).split("\n"):
        line = line.rstrip("\r")
        if line:
            lines.append(line)
    return lines


class ReceiveLoop:
    """Reads from the transport until it ends, answering PINGs in-line.

    Every other line is parsed and pushed onto ``stream`` in arrival order.
    ``reply`` writes one line through the session's serialised writer.
    """

    def __init__(
        self,
        transport: Transport,
        reply: Callable[[str], Awaitable[None]],
        stream: MessageStream,
        *,
        nick: str | None = None,
    ) -> None:
        self.transport = transport
        self.reply = reply
        self.stream = stream
        self.nick = nick

    async def run(self) -> None:
        logger.log_event(
            "irc", "receive_start", level=logging.DEBUG, user=self.nick
        )
        error: BaseException | None = None
        try:
            while True:
                try:
                    chunk = await self.transport.read()
                except (*TRANSPORT_EXCEPTIONS, ValueError, NetworkError) as e:
                    error = TransportReadError(
                        f"Transport read failed: {type(e).__name__}: {e}",
                        data={"endpoint": self.transport.endpoint},
                    )
                    error.__cause__ = e
                    break
                if chunk is None:
                    break
                for line in split_lines(chunk):
                    await self.handle_line(line)
        finally:
            await self.stream.close(error)
            logger.log_event(
                "irc",
                "receive_end",
                level=logging.WARNING if error else logging.INFO,
                user=self.nick,
                reason=str(error) if error else "stream closed",
            )

    async def handle_line(self, line: str) -> None:
        if line.startswith(PING_PREFIX):
            await self._answer_ping(line)
            return
        try:
            message = parse_message(line)
        except ProtocolParseError as e:
            logger.log_event(
                "irc",
                "parse_error",
                level=logging.WARNING,
                user=self.nick,
                error=str(e),
                line=line,
            )
            return
        await self.stream.put(message)

    async def _answer_ping(self, line: str) -> None:
        pong = PONG_PREFIX + line[len(PING_PREFIX):]
        try:
            await self.reply(pong)
        except TransportWriteError as e:
            logger.log_event(
                "irc", "pong_failed", level=logging.WARNING, user=self.nick, error=str(e)
            )
            return
        logger.log_event("irc", "pong_sent", level=logging.DEBUG, user=self.nick)
