from .calculation import BlindState, SunPosition, Weather, calculate_blind_position
from .config import BlindConfiguration, Mode
from .dispatcher import BlindControllerDispatcher, BlindOutput
from .events import parse_event
from .exceptions import (
    BlindControllerError,
    ConfigNotFoundError,
    MalformedInputError,
    SchemaViolationError,
)
from .geometry import is_sun_in_window, position_from_shadow
from .why import BlindPositionReason

__all__ = [
    "BlindConfiguration",
    "BlindControllerDispatcher",
    "BlindControllerError",
    "BlindOutput",
    "BlindPositionReason",
    "BlindState",
    "ConfigNotFoundError",
    "MalformedInputError",
    "Mode",
    "SchemaViolationError",
    "SunPosition",
    "Weather",
    "calculate_blind_position",
    "is_sun_in_window",
    "parse_event",
    "position_from_shadow",
]
