from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

import voluptuous as vol

from .calculation import SunPosition, Weather
from .config import BlindConfiguration, Mode
from .const import (
    ATTR_ALTITUDE,
    ATTR_ALTITUDE_RADIANS,
    ATTR_AZIMUTH,
    ATTR_AZIMUTH_RADIANS,
    ATTR_BLIND_POSITION,
    ATTR_CLOUDS,
    ATTR_MAX_TEMP,
    ATTR_RESET,
    ATTR_SUN_IN_SKY,
    ATTR_UV_INDEX,
    CONF_ALTITUDE_THRESHOLD,
    CONF_BOTTOM,
    CONF_CHANNEL,
    CONF_CLOUDS_THRESHOLD,
    CONF_CLOUDS_THRESHOLD_POSITION,
    CONF_DEPTH,
    CONF_EXPIRY_PERIOD,
    CONF_INCREMENT,
    CONF_MAXCLOSED,
    CONF_MAXOPEN,
    CONF_MODE,
    CONF_NIGHT_POSITION,
    CONF_NOFFSET,
    CONF_OPPOSITE,
    CONF_ORIENTATION,
    CONF_POFFSET,
    CONF_TEMPERATURE_THRESHOLD,
    CONF_TEMPERATURE_THRESHOLD_POSITION,
    CONF_TOP,
    CONF_UV_INDEX_THRESHOLD,
    CONF_UV_INDEX_THRESHOLD_POSITION,
    DEFAULT_MAXCLOSED,
    DEFAULT_MAXOPEN,
    TOPIC_BLIND_CONFIG,
    TOPIC_BLIND_POSITION,
    TOPIC_BLIND_POSITION_RESET,
    TOPIC_MODE,
    TOPIC_SUN,
    TOPIC_WEATHER,
)
from .exceptions import MalformedInputError, SchemaViolationError


def _whole_number(value: Any) -> int:
    if isinstance(value, bool):
        raise vol.Invalid("expected a whole number")
    try:
        number = float(value)
    except (TypeError, ValueError) as err:
        raise vol.Invalid("expected a whole number") from err
    if not number.is_integer():
        raise vol.Invalid("expected a whole number")
    return int(number)


def _channel(value: Any) -> Any:
    # bool is an int subclass, True would otherwise address channel 1
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise vol.Invalid("expected int or str")
    return value


POSITION = vol.All(_whole_number, vol.Range(min=0, max=100))
CHANNEL = _channel
MODE = vol.All(vol.In([mode.value for mode in Mode]), vol.Coerce(Mode))
EXPIRY_PERIOD = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))


def _number(**kwargs) -> vol.All:
    if kwargs:
        return vol.All(vol.Coerce(float), vol.Range(**kwargs))
    return vol.All(vol.Coerce(float))


SUN_SCHEMA = vol.Schema(
    {
        vol.Required(ATTR_SUN_IN_SKY): bool,
        vol.Optional(ATTR_ALTITUDE): _number(max=90),
        vol.Optional(ATTR_AZIMUTH): _number(min=0, max=360),
        vol.Optional(ATTR_ALTITUDE_RADIANS): _number(),
        vol.Optional(ATTR_AZIMUTH_RADIANS): _number(),
    },
    extra=vol.ALLOW_EXTRA,
)

WEATHER_SCHEMA = vol.Schema(
    {
        vol.Optional(ATTR_CLOUDS): _number(min=0, max=1),
        vol.Optional(ATTR_MAX_TEMP): _number(),
        vol.Optional(ATTR_UV_INDEX): _number(min=0, max=20),
    },
    extra=vol.ALLOW_EXTRA,
)

BLIND_CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_CHANNEL): CHANNEL,
        vol.Required(CONF_ORIENTATION): _number(min=0, max=360),
        vol.Required(CONF_TOP): _number(min=0),
        vol.Required(CONF_BOTTOM): _number(min=0),
        vol.Required(CONF_DEPTH): _number(min=0),
        vol.Required(CONF_INCREMENT): vol.All(_whole_number, vol.Range(min=1, max=100)),
        vol.Optional(CONF_MODE): MODE,
        vol.Optional(CONF_NOFFSET): _number(min=0, max=90),
        vol.Optional(CONF_POFFSET): _number(min=0, max=90),
        vol.Optional(CONF_MAXOPEN): POSITION,
        vol.Optional(CONF_MAXCLOSED): POSITION,
        vol.Optional(CONF_ALTITUDE_THRESHOLD): _number(min=0, max=90),
        vol.Optional(CONF_TEMPERATURE_THRESHOLD): _number(),
        vol.Optional(CONF_TEMPERATURE_THRESHOLD_POSITION): POSITION,
        vol.Optional(CONF_CLOUDS_THRESHOLD): _number(min=0, max=1),
        vol.Optional(CONF_CLOUDS_THRESHOLD_POSITION): POSITION,
        vol.Optional(CONF_UV_INDEX_THRESHOLD): _number(min=0, max=20),
        vol.Optional(CONF_UV_INDEX_THRESHOLD_POSITION): POSITION,
        vol.Optional(CONF_NIGHT_POSITION): POSITION,
        vol.Optional(CONF_EXPIRY_PERIOD): EXPIRY_PERIOD,
        vol.Optional(CONF_OPPOSITE): vol.Boolean(),
    },
    extra=vol.ALLOW_EXTRA,
)

MANUAL_POSITION_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_CHANNEL): CHANNEL,
        vol.Required(ATTR_BLIND_POSITION): POSITION,
        vol.Optional(CONF_EXPIRY_PERIOD): EXPIRY_PERIOD,
    },
    extra=vol.ALLOW_EXTRA,
)

RESET_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_CHANNEL): CHANNEL,
        vol.Required(ATTR_RESET): bool,
    },
    extra=vol.ALLOW_EXTRA,
)

MODE_SCHEMA = vol.Schema({vol.Required(CONF_MODE): MODE}, extra=vol.ALLOW_EXTRA)


@dataclass(frozen=True)
class SunReadingEvent:
    sun_position: SunPosition


@dataclass(frozen=True)
class WeatherReadingEvent:
    weather: Weather


@dataclass(frozen=True)
class BlindConfigEvent:
    config: BlindConfiguration


@dataclass(frozen=True)
class ManualPositionEvent:
    channel: Any
    blind_position: int
    expiry_period: float | None = None


@dataclass(frozen=True)
class ResetEvent:
    channel: Any
    reset: bool = True


@dataclass(frozen=True)
class ModeBroadcastEvent:
    mode: Mode


InboundEvent = (
    SunReadingEvent | WeatherReadingEvent | BlindConfigEvent | ManualPositionEvent | ResetEvent | ModeBroadcastEvent
)


def _validate_sun_params(values: dict[str, Any]) -> dict[str, str] | None:
    if not values.get(ATTR_SUN_IN_SKY):
        return None
    errors = {}
    for key in (ATTR_ALTITUDE, ATTR_AZIMUTH):
        if key not in values:
            errors[key] = "required key not provided"
    return errors or None


def _is_multiple_of(value: int, increment: int) -> bool:
    return value % increment == 0


def _validate_blind_config_params(values: dict[str, Any]) -> dict[str, str] | None:
    errors = {}
    top = values.get(CONF_TOP)
    bottom = values.get(CONF_BOTTOM)
    if top is not None and bottom is not None and top < bottom:
        errors[CONF_TOP] = "top_less_than_bottom"

    maxopen = values.get(CONF_MAXOPEN, DEFAULT_MAXOPEN)
    maxclosed = values.get(CONF_MAXCLOSED, DEFAULT_MAXCLOSED)
    if maxopen > maxclosed:
        errors[CONF_MAXOPEN] = "maxopen_greater_than_maxclosed"

    increment = values.get(CONF_INCREMENT)
    if increment is not None:
        if not _is_multiple_of(100, increment):
            errors[CONF_INCREMENT] = "increment_not_a_divisor_of_100"
        if not _is_multiple_of(maxopen, increment):
            errors.setdefault(CONF_MAXOPEN, "maxopen_not_a_multiple_of_increment")
        if not _is_multiple_of(maxclosed, increment):
            errors[CONF_MAXCLOSED] = "maxclosed_not_a_multiple_of_increment"
    return errors or None


def _error_path(err: vol.Invalid) -> str:
    return ".".join(str(p) for p in err.path) or "payload"


def _valid_fields(schema: vol.Schema, payload: Mapping[str, Any]) -> dict[str, Any]:
    valid = {}
    for marker, validator in schema.schema.items():
        key = marker.schema
        if key not in payload:
            continue
        try:
            valid[key] = vol.Schema(validator)(payload[key])
        except vol.Invalid:
            continue
    return valid


def _validate(
    topic: str,
    schema: vol.Schema,
    payload: Any,
    cross_field_validator: Callable[[dict[str, Any]], dict[str, str] | None] | None = None,
) -> dict[str, Any]:
    if not isinstance(payload, Mapping):
        raise MalformedInputError(f"{topic} payload must be an object, got {type(payload).__name__}")

    # An explicit None is treated the same as an absent field.
    payload = {key: value for key, value in payload.items() if value is not None}

    errors: dict[str, str] = {}
    data = None
    try:
        data = schema(payload)
    except vol.MultipleInvalid as err:
        for error in err.errors:
            errors.setdefault(_error_path(error), error.msg)

    if cross_field_validator is not None:
        values = data if data is not None else _valid_fields(schema, payload)
        for key, msg in (cross_field_validator(values) or {}).items():
            errors.setdefault(key, msg)

    if errors:
        raise SchemaViolationError(topic, errors)
    return data


def _parse_sun(payload: Any) -> SunReadingEvent:
    data = _validate(TOPIC_SUN, SUN_SCHEMA, payload, _validate_sun_params)
    return SunReadingEvent(
        SunPosition(
            sun_in_sky=data[ATTR_SUN_IN_SKY],
            altitude=data.get(ATTR_ALTITUDE),
            azimuth=data.get(ATTR_AZIMUTH),
        )
    )


def _parse_weather(payload: Any) -> WeatherReadingEvent:
    data = _validate(TOPIC_WEATHER, WEATHER_SCHEMA, payload)
    return WeatherReadingEvent(
        Weather(
            clouds=data.get(ATTR_CLOUDS),
            max_temp=data.get(ATTR_MAX_TEMP),
            uv_index=data.get(ATTR_UV_INDEX),
        )
    )


def _parse_blind_config(payload: Any) -> BlindConfigEvent:
    data = _validate(TOPIC_BLIND_CONFIG, BLIND_CONFIG_SCHEMA, payload, _validate_blind_config_params)
    return BlindConfigEvent(BlindConfiguration.from_mapping(data))


def _parse_manual_position(payload: Any) -> ManualPositionEvent:
    data = _validate(TOPIC_BLIND_POSITION, MANUAL_POSITION_SCHEMA, payload)
    return ManualPositionEvent(
        channel=data[CONF_CHANNEL],
        blind_position=data[ATTR_BLIND_POSITION],
        expiry_period=data.get(CONF_EXPIRY_PERIOD),
    )


def _parse_reset(payload: Any) -> ResetEvent:
    data = _validate(TOPIC_BLIND_POSITION_RESET, RESET_SCHEMA, payload)
    return ResetEvent(channel=data[CONF_CHANNEL], reset=data[ATTR_RESET])


def _parse_mode(payload: Any) -> ModeBroadcastEvent:
    data = _validate(TOPIC_MODE, MODE_SCHEMA, payload)
    return ModeBroadcastEvent(mode=data[CONF_MODE])


_PARSERS: dict[str, Callable[[Any], InboundEvent]] = {
    TOPIC_SUN: _parse_sun,
    TOPIC_WEATHER: _parse_weather,
    TOPIC_BLIND_CONFIG: _parse_blind_config,
    TOPIC_BLIND_POSITION: _parse_manual_position,
    TOPIC_BLIND_POSITION_RESET: _parse_reset,
    TOPIC_MODE: _parse_mode,
}


def parse_event(topic: str, payload: Any) -> InboundEvent:
    parser = _PARSERS.get(topic)
    if parser is None:
        raise MalformedInputError(f"Unrecognised topic {topic!r}")
    return parser(payload)
