from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .const import (
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
    DEFAULT_EXPIRY_PERIOD,
    DEFAULT_MAXCLOSED,
    DEFAULT_MAXOPEN,
    DEFAULT_MODE,
    DEFAULT_NOFFSET,
    DEFAULT_OPPOSITE,
    DEFAULT_POFFSET,
    MODE_SUMMER,
    MODE_WINTER,
)


class Mode(enum.StrEnum):
    SUMMER = MODE_SUMMER
    WINTER = MODE_WINTER


def _config_option_or_default(config: Mapping[str, Any], key: str, default: Any) -> Any:
    value = config.get(key, None)
    if value is None:
        return default
    return value


@dataclass(frozen=True)
class BlindConfiguration:
    channel: Any
    orientation: float
    top: float
    bottom: float
    depth: float
    increment: int

    mode: Mode = Mode.SUMMER
    noffset: float = DEFAULT_NOFFSET
    poffset: float = DEFAULT_POFFSET
    maxopen: int = DEFAULT_MAXOPEN
    maxclosed: int = DEFAULT_MAXCLOSED

    # Thresholds are opt-in; None (or zero) disables the check.
    altitude_threshold: float | None = None
    temperature_threshold: float | None = None
    temperature_threshold_position: int = DEFAULT_MAXCLOSED
    clouds_threshold: float | None = None
    clouds_threshold_position: int = DEFAULT_MAXOPEN
    uv_index_threshold: float | None = None
    uv_index_threshold_position: int = DEFAULT_MAXCLOSED

    night_position: int = DEFAULT_MAXCLOSED
    expiry_period: float = DEFAULT_EXPIRY_PERIOD  # minutes
    opposite: bool = DEFAULT_OPPOSITE

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> BlindConfiguration:
        maxopen = _config_option_or_default(config, CONF_MAXOPEN, DEFAULT_MAXOPEN)
        maxclosed = _config_option_or_default(config, CONF_MAXCLOSED, DEFAULT_MAXCLOSED)
        return cls(
            channel=config[CONF_CHANNEL],
            orientation=config[CONF_ORIENTATION],
            top=config[CONF_TOP],
            bottom=config[CONF_BOTTOM],
            depth=config[CONF_DEPTH],
            increment=config[CONF_INCREMENT],
            mode=Mode(_config_option_or_default(config, CONF_MODE, DEFAULT_MODE)),
            noffset=_config_option_or_default(config, CONF_NOFFSET, DEFAULT_NOFFSET),
            poffset=_config_option_or_default(config, CONF_POFFSET, DEFAULT_POFFSET),
            maxopen=maxopen,
            maxclosed=maxclosed,
            altitude_threshold=config.get(CONF_ALTITUDE_THRESHOLD),
            temperature_threshold=config.get(CONF_TEMPERATURE_THRESHOLD),
            temperature_threshold_position=_config_option_or_default(
                config, CONF_TEMPERATURE_THRESHOLD_POSITION, maxclosed
            ),
            clouds_threshold=config.get(CONF_CLOUDS_THRESHOLD),
            clouds_threshold_position=_config_option_or_default(config, CONF_CLOUDS_THRESHOLD_POSITION, maxopen),
            uv_index_threshold=config.get(CONF_UV_INDEX_THRESHOLD),
            uv_index_threshold_position=_config_option_or_default(
                config, CONF_UV_INDEX_THRESHOLD_POSITION, maxclosed
            ),
            night_position=_config_option_or_default(config, CONF_NIGHT_POSITION, maxclosed),
            expiry_period=_config_option_or_default(config, CONF_EXPIRY_PERIOD, DEFAULT_EXPIRY_PERIOD),
            opposite=_config_option_or_default(config, CONF_OPPOSITE, DEFAULT_OPPOSITE),
        )

