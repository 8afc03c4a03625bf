import pytest

from hti.application import Application
from hti.config import AppConfig

from .virtual_terminal import VirtualTerminal


@pytest.fixture
def terminal():
    return VirtualTerminal(columns=20, rows=6)


@pytest.fixture
def app(terminal):
    """An application bound to the test thread, closed after the test."""
    application = Application(terminal=terminal, config=AppConfig(tick_interval=0.0))
    yield application
    application.close()
