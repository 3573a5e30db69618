from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Any

from .calculation import BlindState, SunPosition, Weather, calculate_blind_position
from .config import BlindConfiguration, Mode
from .const import (
    ATTR_ALTITUDE,
    ATTR_AZIMUTH,
    ATTR_BLIND_POSITION,
    ATTR_SUN_IN_WINDOW,
    CONF_CHANNEL,
    TOPIC_BLIND,
)
from .events import (
    BlindConfigEvent,
    InboundEvent,
    ManualPositionEvent,
    ModeBroadcastEvent,
    ResetEvent,
    SunReadingEvent,
    WeatherReadingEvent,
    parse_event,
)
from .exceptions import BlindControllerError, ConfigNotFoundError
from .log_context_adapter import LogContextAdapter
from .manual_override_manager import ManualOverrideManager
from .util import Clock


@dataclass
class BlindOutput:
    payload: dict[str, Any]
    data: dict[str, Any]
    topic: str = TOPIC_BLIND

    @property
    def channel(self) -> Any:
        return self.payload[CONF_CHANNEL]


@dataclass
class _Blind:
    config: BlindConfiguration
    state: BlindState | None = None

    def __post_init__(self) -> None:
        if self.state is None:
            self.state = BlindState(channel=self.config.channel)


OutputListener = Callable[[BlindOutput], None]


class BlindControllerDispatcher:
    def __init__(
        self,
        configs: Iterable[BlindConfiguration] = (),
        clock: Clock | None = None,
        logger: LogContextAdapter | None = None,
    ) -> None:
        self._logger = logger or LogContextAdapter(logging.getLogger(__name__))
        self._manual_overrides = ManualOverrideManager(self._logger, clock)
        self._blinds: dict[Any, _Blind] = {}
        self._sun_position: SunPosition | None = None
        self._weather: Weather | None = None
        self._listeners: list[OutputListener] = []
        for config in configs:
            self._blinds[config.channel] = _Blind(config)

    @property
    def sun_position(self) -> SunPosition | None:
        return self._sun_position

    @property
    def weather(self) -> Weather | None:
        return self._weather

    def add_listener(self, listener: OutputListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def remove_listener() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove_listener

    def channels(self) -> list[Any]:
        return list(self._blinds)

    def _get_blind(self, channel: Any) -> _Blind:
        blind = self._blinds.get(channel)
        if blind is None:
            raise ConfigNotFoundError(channel)
        return blind

    def get_config(self, channel: Any) -> BlindConfiguration:
        return self._get_blind(channel).config

    def get_state(self, channel: Any) -> BlindState:
        return self._get_blind(channel).state

    def blinds_under_manual_control(self) -> list[Any]:
        return self._manual_overrides.blinds_under_manual_control(b.state for b in self._blinds.values())

    def handle(self, topic: str, payload: Any) -> list[BlindOutput]:
        try:
            return self.handle_event(parse_event(topic, payload))
        except BlindControllerError as err:
            self._logger.warning("[handle] Rejected %s event: %s", topic, err)
            raise

    def handle_event(self, event: InboundEvent) -> list[BlindOutput]:
        if isinstance(event, SunReadingEvent):
            self._logger.debug("[handle_event] sun position: %s", event.sun_position)
            self._sun_position = event.sun_position
            outputs = self._run_calc()
        elif isinstance(event, WeatherReadingEvent):
            self._logger.debug("[handle_event] weather: %s", event.weather)
            self._weather = event.weather
            outputs = self._run_calc()
        elif isinstance(event, BlindConfigEvent):
            outputs = self._configure(event.config)
        elif isinstance(event, ModeBroadcastEvent):
            outputs = self._set_mode(event.mode)
        elif isinstance(event, ManualPositionEvent):
            outputs = self._set_manual_position(event)
        elif isinstance(event, ResetEvent):
            outputs = self._reset_manual_position(event)
        else:
            raise TypeError(f"Unsupported event {event!r}")

        for output in outputs:
            for listener in list(self._listeners):
                listener(output)
        return outputs

    def _configure(self, config: BlindConfiguration) -> list[BlindOutput]:
        if config.channel in self._blinds:
            self._logger.info("[_configure] Replacing configuration for channel %s", config.channel)
        else:
            self._logger.info("[_configure] Adding channel %s", config.channel)
        self._blinds[config.channel] = _Blind(config)
        return self._run_calc()

    def _set_mode(self, mode: Mode) -> list[BlindOutput]:
        self._logger.debug("[_set_mode] Setting mode %s on %s channel(s)", mode, len(self._blinds))
        for blind in self._blinds.values():
            blind.config = replace(blind.config, mode=mode)
        return self._run_calc()

    def _set_manual_position(self, event: ManualPositionEvent) -> list[BlindOutput]:
        blind = self._get_blind(event.channel)
        snapshots = self._snapshot()
        blind.state = self._manual_overrides.set_manual_position(
            blind.config, blind.state, event.blind_position, event.expiry_period
        )
        return self._run_calc(snapshots, always_emit=event.channel)

    def _reset_manual_position(self, event: ResetEvent) -> list[BlindOutput]:
        blind = self._get_blind(event.channel)
        if not event.reset:
            self._logger.debug("[_reset_manual_position] reset=false for channel %s, nothing to do", event.channel)
            return []
        snapshots = self._snapshot()
        blind.state = self._manual_overrides.reset_manual_position(blind.state)
        return self._run_calc(snapshots, always_emit=event.channel)

    def _snapshot(self) -> dict[Any, tuple]:
        return {channel: blind.state.change_key() for channel, blind in self._blinds.items()}

    def _run_calc(self, snapshots: dict[Any, tuple] | None = None, always_emit: Any = None) -> list[BlindOutput]:
        if snapshots is None:
            snapshots = self._snapshot()

        if self._sun_position is None:
            self._logger.debug("[_run_calc] No sun position yet, skipping recalculation")
        else:
            now = self._manual_overrides.now()
            for channel, blind in self._blinds.items():
                blind.state = calculate_blind_position(
                    self._logger.for_channel(channel),
                    blind.config,
                    blind.state,
                    self._sun_position,
                    self._weather,
                    now,
                )

        outputs = []
        for channel, blind in self._blinds.items():
            changed = snapshots.get(channel) != blind.state.change_key()
            if changed or channel == always_emit:
                outputs.append(self._make_output(blind.state))
            else:
                self._logger.debug("[_run_calc] channel %s unchanged", channel)
        return outputs

    def _make_output(self, state: BlindState) -> BlindOutput:
        sun_position = self._sun_position
        return BlindOutput(
            payload=state.as_payload(),
            data={
                CONF_CHANNEL: state.channel,
                ATTR_ALTITUDE: sun_position.altitude if sun_position else None,
                ATTR_AZIMUTH: sun_position.azimuth if sun_position else None,
                ATTR_SUN_IN_WINDOW: state.sun_in_window,
                ATTR_BLIND_POSITION: state.blind_position,
            },
        )
