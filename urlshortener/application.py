"""Composition root

`create_application()` is the only place where the store and the service are
constructed. Callers (the Lambda entry point, tests) keep the returned
Application and pass it to whatever needs it; there is no module-level store.

Example:
    >>> from urlshortener.application import create_application
    >>> application = create_application({'base_url': None, 'top_domains_limit': 3})
    >>> application.shortener.shorten('https://example.com')
    'EAaArVRs'
    >>> application.dao.top_domains(application.config['top_domains_limit'])
    [DomainCountModel(domain='example.com', count=1)]
"""

from dataclasses import dataclass

from urlshortener.types import LambdaConfiguration
from urlshortener.dao import ShortURLBaseDAO, ShortURLMemoryDAO
from urlshortener.service import URLShortener
from urlshortener.utils.config import validate_config


@dataclass(frozen=True)
class Application:
    config: LambdaConfiguration
    dao: ShortURLBaseDAO
    shortener: URLShortener


def create_application(config: LambdaConfiguration, dao: ShortURLBaseDAO | None = None) -> Application:
    """Wire a store and a URLShortener together

    Args:
        config (dict):
            Configuration section ('base_url', 'top_domains_limit').
        dao (ShortURLBaseDAO | None):
            Store to use. A new ShortURLMemoryDAO if None.

    Returns:
        Application: configuration, store and service sharing the same store.

    Raises:
        BadConfigurationError:
            If the configuration section is invalid.
    """
    dao = dao if dao is not None else ShortURLMemoryDAO()
    return Application(config=validate_config(config), dao=dao, shortener=URLShortener(dao))
