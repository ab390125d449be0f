from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


SECONDS_PER_DAY = 86_400.0
EARTH_RADIUS_KM = 6371.0

DISCLAIMER = (
    "EXPERIMENTAL PROBABILITIES - Educational use only. "
    "NOT for safety-critical decisions."
)
AFTERSHOCK_DISCLAIMER = (
    "EXPERIMENTAL AFTERSHOCK PROBABILITIES - Educational use only. "
    "NOT for safety-critical decisions."
)
