from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from websockets.exceptions import WebSocketException

from ..logging_config import log_structured_error
from .internal import (
    ConfigError,
    InternalError,
    NetworkError,
    ParsingError,
    SessionStateError,
)

# Exceptions a transport operation may raise from the socket or websocket layer.
TRANSPORT_EXCEPTIONS: tuple[type[BaseException], ...] = (
    OSError,
    EOFError,
    TimeoutError,
    WebSocketException,
)


def classify_error(error: BaseException) -> str:
    """Map an exception to the error category used by structured logging."""
    if isinstance(error, NetworkError | OSError | WebSocketException):
        return "network"
    if isinstance(error, ParsingError):
        return "parsing"
    if isinstance(error, ConfigError):
        return "config"
    if isinstance(error, SessionStateError):
        return "state"
    if isinstance(error, InternalError):
        return "internal"
    return "unknown"


def log_error(message: str, error: BaseException, context: dict | None = None) -> None:
    """Logs an error message with the associated exception details.

    The exception is categorised with ``classify_error`` and recorded through
    ``log_structured_error`` so error rates are aggregated per category.

    Args:
        message: A descriptive message about the error context.
        error: The exception instance to be logged.
        context: Optional additional context data for debugging.
    """
    log_structured_error(
        error_type=classify_error(error),
        message=f"{message}: {str(error)}",
        exception=error,
        context=context,
    )


T = TypeVar("T")


async def handle_transport_error(
    operation: Callable[[], Awaitable[T]],
    context: str,
    error_cls: type[NetworkError] = NetworkError,
) -> T:
    """Run a transport operation and translate raw I/O failures.

    Socket and websocket exceptions are logged and re-raised as ``error_cls``
    with the original exception chained. Internal errors pass through
    untouched.

    Args:
        operation: The async transport operation to execute.
        context: Descriptive context for the operation (e.g. "send").
        error_cls: NetworkError subclass raised on failure.

    Returns:
        The result of the operation if successful.
    """
    try:
        return await operation()
    except InternalError:
        raise
    except TRANSPORT_EXCEPTIONS as e:
        error_context = {"operation": context, "timestamp": time.time()}
        log_error(f"Transport operation failed in {context}", e, context=error_context)
        raise error_cls(
            f"Transport failure in {context}: {type(e).__name__}: {str(e)}",
            data=error_context,
        ) from e


__all__ = [
    "TRANSPORT_EXCEPTIONS",
    "classify_error",
    "handle_transport_error",
    "log_error",
]
