"""TMI session: connect, authenticate, join and send."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType

from ..config.model import SessionConfig
from ..constants import (
    CAPABILITIES,
    LINE_TERMINATOR,
    TMI_CLOSE_TIMEOUT,
    TMI_CONNECT_TIMEOUT,
    TMI_RECEIVE_QUEUE_SIZE,
)
from ..errors.handling import TRANSPORT_EXCEPTIONS, handle_transport_error
from ..errors.internal import (
    SessionStateError,
    TransportConnectError,
    TransportWriteError,
)
from ..logs.logger import logger
from ..transport import Transport, create_transport
from .models import ConnectionState
from .parser import format_line
from .receiver import MessageStream, ReceiveLoop


class Session:
    """One authenticated connection to the Twitch Messaging Interface.

    Build it with ``await Session.create(config)``; the handshake has
    completed by the time it returns. The session exclusively owns its
    transport. Writes from ``send`` and the receive loop's PONG replies are
    serialised one line at a time.

    Example::

        session = await Session.create(config)
        task, stream = session.start()
        async for message in stream:
            ...
    """

    def __init__(self, config: SessionConfig, transport: Transport) -> None:
        self.config = config
        self.transport = transport
        self.state = ConnectionState.DISCONNECTED
        self._write_lock = asyncio.Lock()
        self._receive_task: asyncio.Task[None] | None = None
        self._stream: MessageStream | None = None

    @classmethod
    async def create(
        cls, config: SessionConfig, transport: Transport | None = None
    ) -> Session:
        """Open the transport and run the authentication and join handshake.

        Raises:
            TransportConnectError: The transport could not be opened.
            TransportWriteError: A handshake line could not be written.
        """
        session = cls(config, transport or create_transport(config))
        await session._open()
        try:
            await session.authenticate()
            await session.join_all()
        except Exception:
            await session.close()
            raise
        session._set_state(ConnectionState.READY)
        logger.log_event(
            "irc", "ready", user=config.nick, rooms=len(config.rooms)
        )
        return session

    @property
    def nick(self) -> str:
        return self.config.nick

    @property
    def stream(self) -> MessageStream | None:
        return self._stream

    @property
    def receiving(self) -> bool:
        return self._receive_task is not None and not self._receive_task.done()

    def _set_state(self, new_state: ConnectionState) -> None:
        if self.state != new_state:
            logger.log_event(
                "irc",
                "state_change",
                level=logging.DEBUG,
                user=self.nick,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            self.state = new_state

    async def _open(self) -> None:
        self._set_state(ConnectionState.CONNECTING)
        endpoint = self.transport.endpoint
        logger.log_event(
            "irc",
            "connect_start",
            user=self.nick,
            transport=self.config.transport,
            endpoint=endpoint,
        )
        try:
            await asyncio.wait_for(self.transport.open(), timeout=TMI_CONNECT_TIMEOUT)
        except TRANSPORT_EXCEPTIONS as e:
            self._set_state(ConnectionState.DISCONNECTED)
            logger.log_event(
                "irc",
                "connect_failed",
                level=logging.ERROR,
                user=self.nick,
                endpoint=endpoint,
                error=f"{type(e).__name__}: {e}",
            )
            raise TransportConnectError(
                f"Unable to connect to {endpoint}: {e}", data={"endpoint": endpoint}
            ) from e
        logger.log_event(
            "irc", "connection_established", level=logging.DEBUG, user=self.nick
        )

    async def authenticate(self) -> None:
        """Request capabilities, then send the credential and nickname."""
        self._set_state(ConnectionState.AUTHENTICATING)
        await self.send(format_line("CAP", "REQ", trailing=" ".join(CAPABILITIES)))
        await self.send(format_line("PASS", self.config.token.get_secret_value()))
        await self.send(format_line("NICK", self.nick))
        logger.log_event("irc", "auth_sent", level=logging.DEBUG, user=self.nick)

    async def join_all(self) -> None:
        """Send one JOIN per configured room, in configured order."""
        if not self.config.rooms:
            return
        self._set_state(ConnectionState.JOINING)
        for room in self.config.rooms:
            await self.send(format_line("JOIN", room))
            logger.log_event("irc", "join_sent", user=self.nick, channel=room)

    async def send(self, line: str) -> None:
        """Write one raw line followed by CRLF.

        Raises:
            TransportWriteError: The transport is closed or the write failed.
        """
        if not self.transport.is_open:
            raise TransportWriteError(
                "Session transport is closed",
                data={"operation": "send", "endpoint": self.transport.endpoint},
            )
        await self._write_line(line)

    async def send_to_channel(self, message: str, channel: str) -> None:
        """Send a chat message to ``channel``."""
        await self.send(format_line("PRIVMSG", channel, trailing=message))

    async def _write_line(self, line: str) -> None:
        data = f"{line}{LINE_TERMINATOR}"
        async with self._write_lock:
            await handle_transport_error(
                lambda: self.transport.write(data),
                "send",
                error_cls=TransportWriteError,
            )

    def start(self) -> tuple[asyncio.Task[None], MessageStream]:
        """Start the background receive loop.

        Returns the loop's task and the stream it feeds. The stream ends when
        the transport closes.

        Raises:
            SessionStateError: A receive loop was already started.
        """
        if self._receive_task is not None:
            raise SessionStateError("Receive loop already started for this session")
        stream = MessageStream(TMI_RECEIVE_QUEUE_SIZE)
        loop = ReceiveLoop(self.transport, self._write_line, stream, nick=self.nick)
        self._stream = stream
        self._receive_task = asyncio.create_task(
            loop.run(), name=f"tmi-receive-{self.nick}"
        )
        return self._receive_task, stream

    async def close(self) -> None:
        """Close the transport, which ends a running receive loop."""
        await self.transport.close()
        task = self._receive_task
        if task is not None and not task.done():
            _, pending = await asyncio.wait({task}, timeout=TMI_CLOSE_TIMEOUT)
            if pending:
                # The transport did not unblock the pending read.
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)
        if self.state != ConnectionState.DISCONNECTED:
            self._set_state(ConnectionState.DISCONNECTED)
            logger.log_event(
                "irc", "disconnected", level=logging.WARNING, user=self.nick
            )

    async def __aenter__(self) -> Session:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
