from numpy import ceil, radians, tan

from .util import round_up_to_increment


def is_sun_in_window(orientation: float, noffset: float, poffset: float, azimuth: float) -> bool:
    low = orientation - noffset
    high = orientation + poffset
    if low < 0:
        return (360 + low <= azimuth <= 360) or (0 <= azimuth <= high)
    if high > 360:
        return (0 <= azimuth <= high - 360) or (low <= azimuth <= 360)
    return low <= azimuth <= high


def shadow_height(altitude: float, depth: float) -> float:
    return float(tan(radians(altitude)) * depth)


def position_from_shadow(altitude: float, depth: float, top: float, bottom: float, increment: int) -> int:
    height = shadow_height(altitude, depth)
    if height <= bottom:
        return 100
    if height >= top:
        return 0
    position = ceil(100 * (1 - (height - bottom) / (top - bottom)))
    return round_up_to_increment(position, increment)
