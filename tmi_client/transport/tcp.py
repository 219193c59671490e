"""Raw TCP transport for the TMI endpoint."""

from __future__ import annotations

import asyncio
import logging
import ssl

from ..constants import TMI_IRC_HOST, TMI_IRC_PORT
from ..logs.logger import logger


class TCPTransport:
    """Transport over a plain or TLS wrapped TCP stream.

    Reads return one newline terminated line at a time. The reader and
    writer halves of the stream are independent handles.
    """

    def __init__(
        self,
        host: str = TMI_IRC_HOST,
        port: int = TMI_IRC_PORT,
        *,
        use_tls: bool = False,
    ) -> None:
        self.host = host
        self.port = port
        self.use_tls = use_tls
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None

    @property
    def endpoint(self) -> str:
        scheme = "ircs" if self.use_tls else "irc"
        return f"{scheme}://{self.host}:{self.port}"

    @property
    def is_open(self) -> bool:
        return self.writer is not None

    async def open(self) -> None:
        await self.close()
        ssl_context = ssl.create_default_context() if self.use_tls else None
        self.reader, self.writer = await asyncio.open_connection(
            self.host, self.port, ssl=ssl_context
        )

    async def read(self) -> str | None:
        if self.reader is None:
            return None
        data = await self.reader.readline()
        if not data:
            return None
        return data.decode("utf-8", errors="replace")

    async def write(self, data: str) -> None:
        if self.writer is None:
            raise ConnectionResetError("TCP stream not connected")
        self.writer.write(data.encode("utf-8"))
        await self.writer.drain()

    async def close(self) -> None:
        writer, self.writer = self.writer, None
        self.reader = None
        if writer is None:
            return
        try:
            writer.close()
            await writer.wait_closed()
        except OSError as e:
            logger.log_event(
                "transport",
                "close_error",
                level=logging.WARNING,
                endpoint=self.endpoint,
                error=str(e),
            )
