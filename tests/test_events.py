import pytest

from blind_controller.calculation import SunPosition, Weather
from blind_controller.config import Mode
from blind_controller.events import (
    BlindConfigEvent,
    ManualPositionEvent,
    ModeBroadcastEvent,
    ResetEvent,
    SunReadingEvent,
    WeatherReadingEvent,
    parse_event,
)
from blind_controller.exceptions import MalformedInputError, SchemaViolationError


def test_unknown_topic():
    with pytest.raises(MalformedInputError):
        parse_event("moon", {"phase": "full"})


@pytest.mark.parametrize("payload", [None, "sun", 42, ["sunInSky", True]])
def test_payload_must_be_an_object(payload):
    with pytest.raises(MalformedInputError):
        parse_event("sun", payload)


def test_sun_reading():
    event = parse_event("sun", {"sunInSky": True, "altitude": 30, "azimuth": 180, "altitudeRadians": 0.5236})
    assert event == SunReadingEvent(SunPosition(sun_in_sky=True, altitude=30.0, azimuth=180.0))


def test_sun_reading_at_night_needs_no_position():
    event = parse_event("sun", {"sunInSky": False})
    assert event == SunReadingEvent(SunPosition(sun_in_sky=False))
    assert event.sun_position.altitude is None
    assert event.sun_position.azimuth is None


def test_sun_reading_errors_are_all_reported():
    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("sun", {"sunInSky": True, "altitude": 95, "azimuth": 400})
    assert set(excinfo.value.errors) == {"altitude", "azimuth"}

    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("sun", {"sunInSky": True})
    assert set(excinfo.value.errors) == {"altitude", "azimuth"}

    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("sun", {"altitude": 30, "azimuth": 180})
    assert set(excinfo.value.errors) == {"sunInSky"}

    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("sun", {"sunInSky": "yes", "altitude": 30, "azimuth": 180})
    assert set(excinfo.value.errors) == {"sunInSky"}


def test_weather_reading():
    event = parse_event("weather", {"clouds": 0.4, "maxtemp": 28, "uvindex": 5})
    assert event == WeatherReadingEvent(Weather(clouds=0.4, max_temp=28.0, uv_index=5.0))

    assert parse_event("weather", {}) == WeatherReadingEvent(Weather())
    assert parse_event("weather", {"clouds": None, "maxtemp": 21}) == WeatherReadingEvent(Weather(max_temp=21.0))


def test_weather_reading_errors():
    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("weather", {"clouds": 1.5, "uvindex": 25, "maxtemp": "hot"})
    assert set(excinfo.value.errors) == {"clouds", "uvindex", "maxtemp"}


def test_blind_config_defaults():
    event = parse_event(
        "blindConfig",
        {"channel": "1", "orientation": 90, "top": 2, "bottom": 0.5, "depth": 0.6, "increment": 10},
    )
    assert isinstance(event, BlindConfigEvent)
    config = event.config
    assert config.channel == "1"
    assert config.mode == Mode.SUMMER
    assert config.noffset == 90
    assert config.poffset == 90
    assert config.maxopen == 0
    assert config.maxclosed == 100
    assert config.night_position == 100
    assert config.expiry_period == 120
    assert config.altitude_threshold is None
    assert config.temperature_threshold is None
    assert config.temperature_threshold_position == 100
    assert config.clouds_threshold is None
    assert config.clouds_threshold_position == 0
    assert config.uv_index_threshold is None
    assert config.uv_index_threshold_position == 100
    assert not config.opposite


def test_blind_config_position_defaults_follow_limits(south_blind):
    event = parse_event("blindConfig", dict(south_blind, maxopen=25, maxclosed=75))
    assert event.config.night_position == 75
    assert event.config.temperature_threshold_position == 75
    assert event.config.clouds_threshold_position == 25
    assert event.config.uv_index_threshold_position == 75


def test_blind_config_values(south_blind):
    event = parse_event(
        "blindConfig",
        dict(
            south_blind,
            mode="Winter",
            noffset=45,
            poffset=60,
            temperaturethreshold=24,
            temperaturethresholdposition=50,
            cloudsthreshold=0.7,
            cloudsthresholdposition=25,
            uvindexthreshold=7,
            uvindexthresholdposition=75,
            nightposition=0,
            expiryperiod=30,
            opposite="true",
        ),
    )
    config = event.config
    assert config.mode == Mode.WINTER
    assert config.noffset == 45
    assert config.poffset == 60
    assert config.altitude_threshold == 10
    assert config.temperature_threshold == 24
    assert config.temperature_threshold_position == 50
    assert config.clouds_threshold == 0.7
    assert config.clouds_threshold_position == 25
    assert config.uv_index_threshold == 7
    assert config.uv_index_threshold_position == 75
    assert config.night_position == 0
    assert config.expiry_period == 30
    assert config.opposite


def test_blind_config_missing_required_fields():
    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("blindConfig", {"mode": "Summer"})
    assert set(excinfo.value.errors) == {"channel", "orientation", "top", "bottom", "depth", "increment"}


def test_blind_config_cross_field_errors(south_blind):
    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("blindConfig", dict(south_blind, top=0.5, bottom=2, maxopen=75, maxclosed=50))
    assert excinfo.value.errors == {
        "top": "top_less_than_bottom",
        "maxopen": "maxopen_greater_than_maxclosed",
    }


def test_blind_config_increment_errors(south_blind):
    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("blindConfig", dict(south_blind, increment=30, maxclosed=90))
    assert excinfo.value.errors == {"increment": "increment_not_a_divisor_of_100"}

    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("blindConfig", dict(south_blind, maxopen=10, maxclosed=90))
    assert excinfo.value.errors == {
        "maxopen": "maxopen_not_a_multiple_of_increment",
        "maxclosed": "maxclosed_not_a_multiple_of_increment",
    }


def test_blind_config_schema_and_cross_field_errors_together(south_blind):
    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("blindConfig", dict(south_blind, orientation=400, top=0.5, bottom=2, mode="Spring"))
    assert set(excinfo.value.errors) == {"orientation", "mode", "top"}


def test_blind_config_range_errors(south_blind):
    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event(
            "blindConfig",
            dict(south_blind, noffset=120, altitudethreshold=95, cloudsthreshold=2, nightposition=101),
        )
    assert set(excinfo.value.errors) == {"noffset", "altitudethreshold", "cloudsthreshold", "nightposition"}


def test_manual_position():
    assert parse_event("blindPosition", {"channel": 1, "blindPosition": 40}) == ManualPositionEvent(1, 40)
    assert parse_event("blindPosition", {"channel": 1, "blindPosition": 40, "expiryperiod": 5}) == ManualPositionEvent(
        1, 40, 5.0
    )

    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("blindPosition", {"channel": 1, "blindPosition": 101, "expiryperiod": 0})
    assert set(excinfo.value.errors) == {"blindPosition", "expiryperiod"}

    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("blindPosition", {"blindPosition": 50})
    assert set(excinfo.value.errors) == {"channel"}


def test_positions_must_be_whole_numbers(south_blind):
    assert parse_event("blindPosition", {"channel": 1, "blindPosition": "40"}) == ManualPositionEvent(1, 40)
    assert parse_event("blindPosition", {"channel": 1, "blindPosition": 40.0}) == ManualPositionEvent(1, 40)
    assert parse_event("blindConfig", dict(south_blind, increment=25.0)).config.increment == 25

    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("blindPosition", {"channel": 1, "blindPosition": 40.9})
    assert excinfo.value.errors == {"blindPosition": "expected a whole number"}

    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("blindPosition", {"channel": 1, "blindPosition": True})
    assert set(excinfo.value.errors) == {"blindPosition"}

    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("blindConfig", dict(south_blind, increment=2.5, maxclosed=97.5))
    assert set(excinfo.value.errors) == {"increment", "maxclosed"}


@pytest.mark.parametrize("channel", [True, False, 1.5, None, [1]])
def test_channel_must_be_int_or_str(south_blind, channel):
    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("blindPosition", {"channel": channel, "blindPosition": 40})
    assert set(excinfo.value.errors) == {"channel"}

    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("blindConfig", dict(south_blind, channel=channel))
    assert set(excinfo.value.errors) == {"channel"}


def test_reset():
    assert parse_event("blindPositionReset", {"channel": 2, "reset": True}) == ResetEvent(2, True)

    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("blindPositionReset", {"channel": 2})
    assert set(excinfo.value.errors) == {"reset"}


def test_mode_broadcast():
    assert parse_event("mode", {"mode": "Winter"}) == ModeBroadcastEvent(Mode.WINTER)

    with pytest.raises(SchemaViolationError) as excinfo:
        parse_event("mode", {"mode": "Autumn"})
    assert set(excinfo.value.errors) == {"mode"}
