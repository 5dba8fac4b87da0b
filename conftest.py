"""
Shared fixtures: every test starts with an empty process-wide bus and
fresh throttle state.
"""

import pytest

from logga.bus import EventBus, default_bus
from logga.handlers import throttle_state


class FakeSink:
    """Sink that records written lines"""

    def __init__(self, interactive=False, color=True):
        self.interactive = interactive
        self.color = color
        self.lines = []

    def is_interactive(self):
        return self.interactive

    def supports_color(self):
        return self.color

    def write(self, line):
        self.lines.append(line)


@pytest.fixture(autouse=True)
def clean_state():
    """Empty the process-wide bus and throttle state around each test"""
    saved = default_bus.handlers()
    default_bus.reset()
    throttle_state.clear()
    yield
    default_bus.reset()
    throttle_state.clear()
    for handler in saved:
        default_bus.register(handler)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def events(bus):
    """List receiving every event published on `bus`"""
    received = []
    bus.register(received.append)
    return received


@pytest.fixture
def json_sink():
    return FakeSink(interactive=False)


@pytest.fixture
def tty_sink():
    return FakeSink(interactive=True)


@pytest.fixture
def console_sink():
    return FakeSink(interactive=True, color=False)
