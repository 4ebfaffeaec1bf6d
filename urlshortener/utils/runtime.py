import os

from urlshortener.constants import ENV


def running_locally() -> bool:
    """Return True if running in SAM local invoke/api, False otherwise."""
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'
