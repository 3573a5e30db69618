import json
from collections.abc import Callable
from dataclasses import asdict
from datetime import UTC, datetime
from typing import Any

from numpy import ceil

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


def round_up_to_increment(position: float, increment: int) -> int:
    return int(ceil(position / increment) * increment)


def invert_if_opposite(position: int, opposite: bool) -> int:
    return 100 - position if opposite else position


def to_json_safe_dict(x: Any):
    x = asdict(x)
    return {key: json.dumps(x[key], default=str) for key in x}
