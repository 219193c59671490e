"""Session configuration model and loading."""

from .loader import ConfigLoader, get_configuration  # noqa: F401
from .model import SessionConfig  # noqa: F401

__all__ = ["ConfigLoader", "SessionConfig", "get_configuration"]
