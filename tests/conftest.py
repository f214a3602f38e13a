import asyncio
import os

import pytest

from plugin_runtime.core.registry import Registry
from plugin_runtime.host import Host
from plugin_runtime.settings import Settings, get_settings


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def notify(self, message, timeout_ms, category):
        self.sent.append((message, timeout_ms, category))


async def feed(lines):
    for line in lines:
        yield line
        await asyncio.sleep(0)


@pytest.fixture(autouse=True)
def _env_setup(monkeypatch):
    # Keep developer env vars out of Settings
    for key in list(os.environ):
        if key.upper() in Settings.model_fields:
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def registry(clock):
    return Registry(clock=clock)


@pytest.fixture()
def settings():
    return Settings(_env_file=None)


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def host(settings, clock, notifier):
    return Host(settings, clock=clock, notifier=notifier)


def console_text(host):
    return [line.text for line in host.windows.console.lines]
