from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from numpy import clip

from .config import BlindConfiguration, Mode
from .const import (
    ATTR_BLIND_POSITION,
    ATTR_BLIND_POSITION_EXPIRY,
    ATTR_BLIND_POSITION_REASON_CODE,
    ATTR_BLIND_POSITION_REASON_DESC,
    ATTR_LOGICAL_BLIND_POSITION,
    ATTR_SUN_IN_WINDOW,
    CONF_CHANNEL,
)
from .geometry import is_sun_in_window, position_from_shadow
from .log_context_adapter import LogContextAdapter
from .manual_override_manager import has_expired
from .util import invert_if_opposite
from .why import BlindPositionReason, describe


@dataclass(frozen=True)
class SunPosition:
    sun_in_sky: bool = False
    altitude: float | None = None
    azimuth: float | None = None


@dataclass(frozen=True)
class Weather:
    clouds: float | None = None
    max_temp: float | None = None
    uv_index: float | None = None


@dataclass(frozen=True)
class BlindState:
    channel: Any
    blind_position: int | None = None
    logical_blind_position: int | None = None
    sun_in_window: bool = False
    reason: BlindPositionReason | None = None
    blind_position_expiry: datetime | None = None

    def change_key(self) -> tuple:
        return (self.blind_position, self.sun_in_window, self.reason)

    def as_payload(self) -> dict[str, Any]:
        return {
            CONF_CHANNEL: self.channel,
            ATTR_BLIND_POSITION: self.blind_position,
            ATTR_LOGICAL_BLIND_POSITION: self.logical_blind_position,
            ATTR_SUN_IN_WINDOW: self.sun_in_window,
            ATTR_BLIND_POSITION_REASON_CODE: str(self.reason) if self.reason is not None else None,
            ATTR_BLIND_POSITION_REASON_DESC: describe(self.reason),
            ATTR_BLIND_POSITION_EXPIRY: self.blind_position_expiry,
        }


def _is_threshold_enabled(threshold: float | None) -> bool:
    return threshold is not None and threshold != 0


def calculate_blind_position(
    logger: LogContextAdapter,
    config: BlindConfiguration,
    state: BlindState,
    sun_position: SunPosition,
    weather: Weather | None,
    now: datetime,
) -> BlindState:
    if weather is None:
        weather = Weather()

    def _is_temperature_above_threshold() -> bool:
        if not _is_threshold_enabled(config.temperature_threshold) or weather.max_temp is None:
            return False
        above = weather.max_temp > config.temperature_threshold
        logger.debug(
            "[_is_temperature_above_threshold] maxtemp=%s, threshold=%s -> %s",
            weather.max_temp,
            config.temperature_threshold,
            above,
        )
        return above

    def _is_overcast() -> bool:
        if not _is_threshold_enabled(config.clouds_threshold) or weather.clouds is None:
            return False
        overcast = weather.clouds > config.clouds_threshold
        logger.debug(
            "[_is_overcast] clouds=%s, threshold=%s -> %s",
            weather.clouds,
            config.clouds_threshold,
            overcast,
        )
        return overcast

    def _is_uv_index_above_threshold() -> bool:
        if not _is_threshold_enabled(config.uv_index_threshold) or weather.uv_index is None:
            return False
        above = weather.uv_index > config.uv_index_threshold
        logger.debug(
            "[_is_uv_index_above_threshold] uvindex=%s, threshold=%s -> %s",
            weather.uv_index,
            config.uv_index_threshold,
            above,
        )
        return above

    def _is_below_altitude_threshold() -> bool:
        if not _is_threshold_enabled(config.altitude_threshold):
            return False
        return sun_position.altitude < config.altitude_threshold

    def _is_sun_in_window() -> bool:
        in_window = is_sun_in_window(config.orientation, config.noffset, config.poffset, sun_position.azimuth)
        logger.debug(
            "[_is_sun_in_window] orientation=%s, noffset=%s, poffset=%s, azimuth=%s -> %s",
            config.orientation,
            config.noffset,
            config.poffset,
            sun_position.azimuth,
            in_window,
        )
        return in_window

    def _calculate_percentage() -> int:
        position = position_from_shadow(
            sun_position.altitude, config.depth, config.top, config.bottom, config.increment
        )
        clipped = int(clip(position, config.maxopen, config.maxclosed))
        logger.debug(
            "[_calculate_percentage] altitude=%s, depth=%s -> %s, clipped to [%s, %s] = %s",
            sun_position.altitude,
            config.depth,
            position,
            config.maxopen,
            config.maxclosed,
            clipped,
        )
        return clipped

    def _get_winter_position(in_window: bool) -> tuple[int, BlindPositionReason]:
        if not in_window:
            return config.maxclosed, BlindPositionReason.SUN_NOT_IN_WINDOW
        if _is_overcast():
            return config.clouds_threshold_position, BlindPositionReason.OVERCAST
        if _is_uv_index_above_threshold():
            return config.uv_index_threshold_position, BlindPositionReason.UV_INDEX_ABOVE_THRESHOLD
        return config.maxopen, BlindPositionReason.SUN_IN_WINDOW

    def _get_summer_position(in_window: bool) -> tuple[int, BlindPositionReason]:
        if not in_window:
            return config.maxopen, BlindPositionReason.SUN_NOT_IN_WINDOW
        if _is_below_altitude_threshold():
            logger.debug(
                "[_get_summer_position] altitude %s below threshold %s",
                sun_position.altitude,
                config.altitude_threshold,
            )
            return config.maxopen, BlindPositionReason.SUN_BELOW_ALTITUDE_THRESHOLD
        if _is_overcast():
            return config.clouds_threshold_position, BlindPositionReason.OVERCAST
        if _is_uv_index_above_threshold():
            return config.uv_index_threshold_position, BlindPositionReason.UV_INDEX_ABOVE_THRESHOLD
        return _calculate_percentage(), BlindPositionReason.SUN_IN_WINDOW

    def _get_target_position() -> tuple[int, bool, BlindPositionReason]:
        if not sun_position.sun_in_sky:
            logger.debug("[_get_target_position] Sun below horizon, using night position")
            return config.night_position, False, BlindPositionReason.SUN_BELOW_HORIZON

        if _is_temperature_above_threshold():
            logger.debug("[_get_target_position] Temperature forecast above threshold")
            return (
                config.temperature_threshold_position,
                False,
                BlindPositionReason.TEMPERATURE_ABOVE_THRESHOLD,
            )

        in_window = _is_sun_in_window()
        if config.mode == Mode.WINTER:
            position, reason = _get_winter_position(in_window)
        else:
            position, reason = _get_summer_position(in_window)
        return position, in_window, reason

    if not has_expired(state.blind_position_expiry, now):
        logger.debug(
            "[calculate_blind_position] Under manual control until %s, keeping position %s",
            state.blind_position_expiry,
            state.blind_position,
        )
        return state

    logical_position, sun_in_window, reason = _get_target_position()
    blind_position = invert_if_opposite(logical_position, config.opposite)
    logger.debug(
        "[calculate_blind_position] mode=%s, logical position=%s, position=%s, reason=%s",
        config.mode,
        logical_position,
        blind_position,
        reason,
    )
    return BlindState(
        channel=config.channel,
        blind_position=blind_position,
        logical_blind_position=logical_position,
        sun_in_window=sun_in_window,
        reason=reason,
        blind_position_expiry=None,
    )
