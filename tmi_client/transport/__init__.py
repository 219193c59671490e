"""Transports carrying TMI lines over WebSocket or raw TCP."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import (
    TMI_IRC_HOST,
    TMI_IRC_PORT,
    TMI_IRC_TLS_PORT,
    TMI_WS_URL,
    TRANSPORT_TCP,
    TRANSPORT_WEBSOCKET,
)
from ..errors.internal import ConfigError
from .base import Transport
from .tcp import TCPTransport
from .websocket import WebSocketTransport

if TYPE_CHECKING:  # pragma: no cover
    from ..config.model import SessionConfig


def create_transport(config: SessionConfig) -> Transport:
    """Build the transport selected by ``config.transport``."""
    if config.transport == TRANSPORT_WEBSOCKET:
        return WebSocketTransport(TMI_WS_URL)
    if config.transport == TRANSPORT_TCP:
        port = TMI_IRC_TLS_PORT if config.use_tls else TMI_IRC_PORT
        return TCPTransport(TMI_IRC_HOST, port, use_tls=config.use_tls)
    raise ConfigError(
        f"unknown transport {config.transport!r}",
        data={"transport": config.transport},
    )


__all__ = [
    "Transport",
    "TCPTransport",
    "WebSocketTransport",
    "create_transport",
]
