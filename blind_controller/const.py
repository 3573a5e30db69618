NAME = "blind_controller"

TOPIC_SUN = "sun"
TOPIC_WEATHER = "weather"
TOPIC_BLIND_CONFIG = "blindConfig"
TOPIC_BLIND_POSITION = "blindPosition"
TOPIC_BLIND_POSITION_RESET = "blindPositionReset"
TOPIC_MODE = "mode"
TOPIC_BLIND = "blind"

# Blind configuration
CONF_CHANNEL = "channel"
CONF_MODE = "mode"
CONF_ORIENTATION = "orientation"
CONF_NOFFSET = "noffset"
CONF_POFFSET = "poffset"
CONF_TOP = "top"
CONF_BOTTOM = "bottom"
CONF_DEPTH = "depth"
CONF_INCREMENT = "increment"
CONF_MAXOPEN = "maxopen"
CONF_MAXCLOSED = "maxclosed"
CONF_ALTITUDE_THRESHOLD = "altitudethreshold"
CONF_TEMPERATURE_THRESHOLD = "temperaturethreshold"
CONF_TEMPERATURE_THRESHOLD_POSITION = "temperaturethresholdposition"
CONF_CLOUDS_THRESHOLD = "cloudsthreshold"
CONF_CLOUDS_THRESHOLD_POSITION = "cloudsthresholdposition"
CONF_UV_INDEX_THRESHOLD = "uvindexthreshold"
CONF_UV_INDEX_THRESHOLD_POSITION = "uvindexthresholdposition"
CONF_NIGHT_POSITION = "nightposition"
CONF_EXPIRY_PERIOD = "expiryperiod"
CONF_OPPOSITE = "opposite"

# Sun readings
ATTR_SUN_IN_SKY = "sunInSky"
ATTR_ALTITUDE = "altitude"
ATTR_AZIMUTH = "azimuth"
ATTR_ALTITUDE_RADIANS = "altitudeRadians"
ATTR_AZIMUTH_RADIANS = "azimuthRadians"

# Weather readings
ATTR_CLOUDS = "clouds"
ATTR_MAX_TEMP = "maxtemp"
ATTR_UV_INDEX = "uvindex"

# Manual position / reset
ATTR_BLIND_POSITION = "blindPosition"
ATTR_RESET = "reset"

# Output payload
ATTR_LOGICAL_BLIND_POSITION = "logicalBlindPosition"
ATTR_SUN_IN_WINDOW = "sunInWindow"
ATTR_BLIND_POSITION_REASON_CODE = "blindPositionReasonCode"
ATTR_BLIND_POSITION_REASON_DESC = "blindPositionReasonDesc"
ATTR_BLIND_POSITION_EXPIRY = "blindPositionExpiry"

MODE_SUMMER = "Summer"
MODE_WINTER = "Winter"

DEFAULT_NOFFSET = 90
DEFAULT_POFFSET = 90
DEFAULT_MAXOPEN = 0
DEFAULT_MAXCLOSED = 100
DEFAULT_MODE = MODE_SUMMER
DEFAULT_EXPIRY_PERIOD = 120  # minutes
DEFAULT_OPPOSITE = False
