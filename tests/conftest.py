from datetime import datetime, timedelta

import pytest

from blind_controller.const import TOPIC_BLIND_CONFIG
from blind_controller.dispatcher import BlindControllerDispatcher

START = datetime.fromisoformat("2025-06-21T12:00:00+00:00")

# Blind facing south with a 1.5m tall window starting 0.5m above the sill.
SOUTH_BLIND = {
    "channel": 1,
    "orientation": 180,
    "top": 2,
    "bottom": 0.5,
    "depth": 1,
    "increment": 25,
    "maxopen": 0,
    "maxclosed": 100,
    "mode": "Summer",
    "altitudethreshold": 10,
}

NORTH_BLIND = {
    "channel": 2,
    "orientation": 0,
    "top": 2,
    "bottom": 0.5,
    "depth": 1,
    "increment": 25,
}


class FakeClock:
    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def tick(self, delta: timedelta) -> None:
        self.now = self.now + delta


@pytest.fixture()
def south_blind():
    return dict(SOUTH_BLIND)


@pytest.fixture()
def north_blind():
    return dict(NORTH_BLIND)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def dispatcher(clock):
    return BlindControllerDispatcher(clock=clock)


@pytest.fixture()
def south_dispatcher(dispatcher):
    dispatcher.handle(TOPIC_BLIND_CONFIG, SOUTH_BLIND)
    return dispatcher
