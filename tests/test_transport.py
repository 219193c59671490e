"""Tests for the TCP and WebSocket transports."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from websockets.exceptions import ConnectionClosedOK
from websockets.frames import Close

from tmi_client.config.model import SessionConfig
from tmi_client.constants import TMI_WS_SUBPROTOCOL
from tmi_client.errors.internal import TransportConnectError
from tmi_client.irc.session import Session
from tmi_client.transport import TCPTransport, Transport, WebSocketTransport, create_transport

TOKEN = "oauth:abcdefghijklmnop"


class TestCreateTransport:
    def test_websocket_is_default(self):
        transport = create_transport(SessionConfig(token=TOKEN, nick="bot"))
        assert isinstance(transport, WebSocketTransport)
        assert transport.endpoint.startswith("wss://")

    def test_tcp_plain_and_tls(self):
        plain = create_transport(SessionConfig(token=TOKEN, nick="bot", transport="tcp"))
        tls = create_transport(
            SessionConfig(token=TOKEN, nick="bot", transport="tcp", use_tls=True)
        )
        assert isinstance(plain, TCPTransport)
        assert plain.port == 6667 and not plain.use_tls
        assert tls.port == 6697 and tls.use_tls
        assert tls.endpoint.startswith("ircs://")

    def test_transports_satisfy_protocol(self):
        assert isinstance(TCPTransport(), Transport)
        assert isinstance(WebSocketTransport(), Transport)


class TestTCPTransport:
    @pytest.mark.asyncio
    async def test_round_trip_against_local_server(self):
        received: list[bytes] = []

        async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
            received.append(await reader.readline())
            writer.write(b"PING :tmi.twitch.tv\r\n:tmi.twitch.tv 001 bot :hi\r\n")
            await writer.drain()
            writer.close()

        server = await asyncio.start_server(handle, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        async with server:
            transport = TCPTransport("127.0.0.1", port)
            await transport.open()
            assert transport.is_open
            await transport.write("NICK bot\r\n")

            assert await transport.read() == "PING :tmi.twitch.tv\r\n"
            assert await transport.read() == ":tmi.twitch.tv 001 bot :hi\r\n"
            assert await transport.read() is None

            await transport.close()
            assert not transport.is_open

        assert received == [b"NICK bot\r\n"]

    @pytest.mark.asyncio
    async def test_write_without_connection_raises(self):
        with pytest.raises(ConnectionResetError):
            await TCPTransport().write("NICK bot\r\n")

    @pytest.mark.asyncio
    async def test_refused_connection_surfaces_as_connect_error(self):
        # Bind then release a port so nothing listens on it.
        server = await asyncio.start_server(lambda r, w: None, "127.0.0.1", 0)
        port = server.sockets[0].getsockname()[1]
        server.close()
        await server.wait_closed()

        config = SessionConfig(token=TOKEN, nick="bot", transport="tcp")
        with pytest.raises(TransportConnectError):
            await Session.create(config, TCPTransport("127.0.0.1", port))


class TestWebSocketTransport:
    @pytest.mark.asyncio
    async def test_open_negotiates_tmi_subprotocol(self):
        mock_ws = AsyncMock()
        with patch(
            "tmi_client.transport.websocket.connect", new_callable=AsyncMock
        ) as mock_connect:
            mock_connect.return_value = mock_ws
            transport = WebSocketTransport("wss://example.invalid")
            await transport.open()

        assert transport.ws is mock_ws
        mock_connect.assert_called_once_with(
            "wss://example.invalid",
            subprotocols=[TMI_WS_SUBPROTOCOL],
            ping_interval=None,
        )

    @pytest.mark.asyncio
    async def test_read_returns_frames_and_none_on_clean_close(self):
        transport = WebSocketTransport()
        transport.ws = AsyncMock()
        transport.ws.recv.side_effect = [
            "PING :tmi.twitch.tv\r\n",
            b":tmi.twitch.tv 001 bot :hi\r\n",
            ConnectionClosedOK(Close(1000, ""), Close(1000, ""), rcvd_then_sent=True),
        ]

        assert await transport.read() == "PING :tmi.twitch.tv\r\n"
        assert await transport.read() == ":tmi.twitch.tv 001 bot :hi\r\n"
        assert await transport.read() is None

    @pytest.mark.asyncio
    async def test_write_sends_text_frame(self):
        transport = WebSocketTransport()
        ws = AsyncMock()
        transport.ws = ws

        await transport.write("PONG :tmi.twitch.tv\r\n")

        ws.send.assert_awaited_once_with("PONG :tmi.twitch.tv\r\n")

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        transport = WebSocketTransport()
        ws = AsyncMock()
        transport.ws = ws

        await transport.close()
        await transport.close()

        ws.close.assert_awaited_once_with(code=1000)
        assert not transport.is_open

    @pytest.mark.asyncio
    async def test_write_without_connection_raises(self):
        with pytest.raises(ConnectionResetError):
            await WebSocketTransport().write("NICK bot\r\n")
