import pytest

from tmi_client.config.model import SessionConfig
from tmi_client.logging_config import error_aggregator
from tests.fixtures.fake_transport import FakeTransport


@pytest.fixture(autouse=True)
def _reset_error_aggregator(monkeypatch):
    """Keep DEBUG output and recorded errors from leaking between tests."""
    monkeypatch.delenv("DEBUG", raising=False)
    error_aggregator.clear()
    yield
    error_aggregator.clear()


@pytest.fixture
def config() -> SessionConfig:
    return SessionConfig(
        token="oauth:abcdefghijklmnop",
        nick="madstevebot",
        rooms=["#a", "#b"],
    )


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()
