"""WebSocket transport for the TMI endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from websockets.asyncio.client import connect
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK

from ..constants import TMI_WS_SUBPROTOCOL, TMI_WS_URL
from ..logs.logger import logger

if TYPE_CHECKING:
    from websockets.asyncio.client import ClientConnection


class WebSocketTransport:
    """Transport over a TLS WebSocket negotiating the ``tmi`` subprotocol.

    One WebSocket text frame may contain several CRLF separated lines; they
    are returned together by ``read``.

    Attributes:
        url (str): WebSocket URL of the TMI endpoint.
        ws (ClientConnection | None): Active WebSocket connection.
    """

    def __init__(self, url: str = TMI_WS_URL) -> None:
        self.url = url
        self.ws: ClientConnection | None = None

    @property
    def endpoint(self) -> str:
        return self.url

    @property
    def is_open(self) -> bool:
        return self.ws is not None

    async def open(self) -> None:
        await self.close()
        # IRC level PING/PONG keeps the session alive, not WebSocket pings.
        self.ws = await connect(
            self.url,
            subprotocols=[TMI_WS_SUBPROTOCOL],
            ping_interval=None,
        )

    async def read(self) -> str | None:
        if self.ws is None:
            return None
        try:
            data = await self.ws.recv()
        except ConnectionClosedOK:
            return None
        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="replace")
        return data

    async def write(self, data: str) -> None:
        if self.ws is None:
            raise ConnectionResetError("WebSocket not connected")
        await self.ws.send(data)

    async def close(self) -> None:
        ws, self.ws = self.ws, None
        if ws is None:
            return
        try:
            await ws.close(code=1000)
        except (ConnectionClosed, OSError) as e:
            logger.log_event(
                "transport",
                "close_error",
                level=logging.WARNING,
                endpoint=self.url,
                error=str(e),
            )
