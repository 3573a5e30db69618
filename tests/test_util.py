import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from blind_controller.log_context_adapter import LogContextAdapter
from blind_controller.util import invert_if_opposite, round_up_to_increment, to_json_safe_dict


def test_round_up_to_increment():
    assert round_up_to_increment(0, 25) == 0
    assert round_up_to_increment(1, 25) == 25
    assert round_up_to_increment(75, 25) == 75
    assert round_up_to_increment(95, 25) == 100
    assert round_up_to_increment(95, 1) == 95
    assert isinstance(round_up_to_increment(95, 10), int)


def test_invert_if_opposite():
    assert invert_if_opposite(70, True) == 30
    assert invert_if_opposite(70, False) == 70
    assert invert_if_opposite(0, True) == 100


@dataclass
class Sample:
    when: datetime
    value: int | None = None


def test_to_json_safe_dict():
    assert to_json_safe_dict(Sample(datetime(2025, 1, 1, tzinfo=UTC))) == {
        "when": '"2025-01-01 00:00:00+00:00"',
        "value": "null",
    }


def test_log_context_adapter(caplog):
    logger = LogContextAdapter(logging.getLogger(__name__))
    with caplog.at_level(logging.DEBUG):
        logger.debug("no channel")
        logger.for_channel(3).debug("value %s", 42)
    assert "[dispatcher] no channel" in caplog.text
    assert "[channel 3] value 42" in caplog.text
    assert logger.channel is None
