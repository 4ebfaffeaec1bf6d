from enum import StrEnum


class ShortCode:
    """Short code generation parameters."""

    LENGTH = 8  # Characters kept from the URL-safe base64 SHA-256 digest
    # Substitutions applied (in order) to the truncated code
    SUBSTITUTIONS = (('_', 'a'), ('-', 'b'))


class Defaults:
    """Default configuration values."""

    TOP_DOMAINS_LIMIT = 3  # Number of domains reported by the metrics endpoint
    REDIRECT_PATH_PREFIX = '/r/'  # Path prefix of public short URLs
    LOCAL_BASE_URL = 'http://localhost:3000'  # Fallback base URL for local invocations


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        BASE_URL = 'BASE_URL'
        TOP_DOMAINS_LIMIT = 'TOP_DOMAINS_LIMIT'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
ROUTE_NOT_FOUND = 'ROUTE_NOT_FOUND'
METHOD_NOT_ALLOWED = 'METHOD_NOT_ALLOWED'
INVALID_JSON = 'INVALID_JSON'
MISSING_URL = 'MISSING_URL'
INVALID_URL = 'INVALID_URL'
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'

# Log events
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
TOP_DOMAINS_SUCCESS = 'TOP_DOMAINS_SUCCESS'
