from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from .log_context_adapter import LogContextAdapter
from .util import Clock, invert_if_opposite, utcnow
from .why import BlindPositionReason

MIN_EXPIRY_DELTA = timedelta(microseconds=1)

if TYPE_CHECKING:
    from .calculation import BlindState
    from .config import BlindConfiguration


def has_expired(expiry: datetime | None, now: datetime) -> bool:
    return expiry is None or now > expiry


class ManualOverrideManager:
    _logger: LogContextAdapter
    _clock: Clock

    def __init__(self, logger: LogContextAdapter, clock: Clock | None = None) -> None:
        self._logger = logger
        self._clock = clock or utcnow

    def now(self) -> datetime:
        return self._clock()

    def set_manual_position(
        self,
        config: BlindConfiguration,
        state: BlindState,
        position: int,
        expiry_period: float | None = None,
    ) -> BlindState:
        if expiry_period is None:
            expiry_period = config.expiry_period
        now = self.now()
        expiry = max(now + timedelta(minutes=expiry_period), now + MIN_EXPIRY_DELTA)
        self._logger.debug(
            "[ManualOverrideManager.set_manual_position] Manual position %s for channel %s expires at %s",
            position,
            config.channel,
            expiry,
        )
        return replace(
            state,
            blind_position=invert_if_opposite(position, config.opposite),
            logical_blind_position=position,
            reason=BlindPositionReason.MANUALLY_SET,
            blind_position_expiry=expiry,
        )

    def reset_manual_position(self, state: BlindState) -> BlindState:
        if state.blind_position_expiry is None:
            self._logger.debug(
                "[ManualOverrideManager.reset_manual_position] Channel %s not under manual control",
                state.channel,
            )
        else:
            self._logger.debug(
                "[ManualOverrideManager.reset_manual_position] Clearing manual control of channel %s (was until %s)",
                state.channel,
                state.blind_position_expiry,
            )
        return replace(state, blind_position_expiry=None)

    def is_blind_manual(self, state: BlindState) -> bool:
        return not has_expired(state.blind_position_expiry, self.now())

    def blinds_under_manual_control(self, states: Iterable[BlindState]) -> list[Any]:
        now = self.now()
        return [state.channel for state in states if not has_expired(state.blind_position_expiry, now)]
