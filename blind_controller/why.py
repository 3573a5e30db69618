import enum


class BlindPositionReason(enum.StrEnum):
    MANUALLY_SET = "01"
    SUN_BELOW_HORIZON = "02"
    SUN_BELOW_ALTITUDE_THRESHOLD = "03"
    SUN_NOT_IN_WINDOW = "04"
    SUN_IN_WINDOW = "05"
    OVERCAST = "06"
    TEMPERATURE_ABOVE_THRESHOLD = "07"
    UV_INDEX_ABOVE_THRESHOLD = "08"


REASON_DESCRIPTIONS: dict[BlindPositionReason, str] = {
    BlindPositionReason.MANUALLY_SET: "Manually set",
    BlindPositionReason.SUN_BELOW_HORIZON: "Sun below horizon",
    BlindPositionReason.SUN_BELOW_ALTITUDE_THRESHOLD: "Sun below altitude threshold",
    BlindPositionReason.SUN_NOT_IN_WINDOW: "Sun not in window",
    BlindPositionReason.SUN_IN_WINDOW: "Sun in window",
    BlindPositionReason.OVERCAST: "Overcast conditions",
    BlindPositionReason.TEMPERATURE_ABOVE_THRESHOLD: "Temperature forecast above threshold",
    BlindPositionReason.UV_INDEX_ABOVE_THRESHOLD: "UV index above threshold",
}


def describe(reason: BlindPositionReason | None) -> str | None:
    if reason is None:
        return None
    return REASON_DESCRIPTIONS[reason]
