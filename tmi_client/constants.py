"""
Configuration constants for the TMI client

This module contains all configurable constants used throughout the package.
Each constant can be overridden by setting an environment variable with the same name.
"""

import os


def _get_env_int(name: str, default: int) -> int:
    """Retrieve an integer value from an environment variable.

    Attempts to parse the environment variable as an integer. If the variable
    is not set or cannot be parsed, prints a warning and returns the default value.

    Args:
        name: The name of the environment variable to read.
        default: The default integer value to return if parsing fails.

    Returns:
        The parsed integer value from the environment, or the default if unavailable.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            print(
                f"Warning: Invalid integer value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_float(name: str, default: float) -> float:
    """Retrieve a float value from an environment variable.

    Same fallback rules as ``_get_env_int``.
    """
    value = os.getenv(name)
    if value is not None:
        try:
            return float(value)
        except ValueError:
            print(
                f"Warning: Invalid float value for {name}='{value}', using default {default}"
            )
    return default


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


# Endpoints
TMI_WS_URL = _get_env_str("TMI_WS_URL", "wss://irc-ws.chat.twitch.tv:443")
TMI_WS_SUBPROTOCOL = "tmi"
TMI_IRC_HOST = _get_env_str("TMI_IRC_HOST", "irc.chat.twitch.tv")
TMI_IRC_PORT = _get_env_int("TMI_IRC_PORT", 6667)
TMI_IRC_TLS_PORT = _get_env_int("TMI_IRC_TLS_PORT", 6697)

# Seconds allowed for the transport to open; reads and writes are unbounded
TMI_CONNECT_TIMEOUT = _get_env_float("TMI_CONNECT_TIMEOUT", 10.0)
# Seconds close() waits for the receive loop to observe the closed transport
TMI_CLOSE_TIMEOUT = _get_env_float("TMI_CLOSE_TIMEOUT", 5.0)

# 0 means an unbounded receive queue
TMI_RECEIVE_QUEUE_SIZE = _get_env_int("TMI_RECEIVE_QUEUE_SIZE", 0)

# Wire protocol
LINE_TERMINATOR = "\r\n"
CAPABILITIES = (
    "twitch.tv/tags",
    "twitch.tv/commands",
    "twitch.tv/membership",
)
OAUTH_PREFIX = "oauth:"

TRANSPORT_WEBSOCKET = "websocket"
TRANSPORT_TCP = "tcp"
