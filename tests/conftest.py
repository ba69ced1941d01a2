from unittest.mock import AsyncMock

import pytest

from pow_box.core.domain.trytes import Hash, Trytes
from tests.helpers import BRANCH, TRUNK


class FakeTimer:
    """Timer controlado por el test: no corre solo, se dispara con `fire()`."""

    def __init__(self, interval_seconds, callback):
        self.interval_seconds = interval_seconds
        self.callback = callback
        self.start_count = 0
        self.stop_count = 0

    def start(self):
        self.start_count += 1

    async def stop(self):
        self.stop_count += 1

    async def fire(self):
        await self.callback()


@pytest.fixture
def fake_timers():
    timers = []

    def factory(interval_seconds, callback):
        timer = FakeTimer(interval_seconds, callback)
        timers.append(timer)
        return timer

    factory.timers = timers
    return factory


@pytest.fixture
def network_client():
    client = AsyncMock()
    client.post_json.return_value = {"jobId": "abc"}
    return client


@pytest.fixture
def trunk():
    return Hash.from_string(TRUNK)


@pytest.fixture
def branch():
    return Hash.from_string(BRANCH)


@pytest.fixture
def two_chunks():
    return [Trytes.from_string("ABC"), Trytes.from_string("XYZ9")]
