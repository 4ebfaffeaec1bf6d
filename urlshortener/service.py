"""URL shortening service

The service validates URLs, derives their shortcodes, deduplicates repeated
submissions and keeps domain metrics up to date. It holds no mutable state of
its own: every mapping and counter lives in the DAO it was constructed with,
so a single instance can be shared by any number of threads.

Classes:
    URLShortener:
        Coordinates validation, shortcode generation and DAO updates.

Example:
    >>> from urlshortener.dao import ShortURLMemoryDAO
    >>> from urlshortener.service import URLShortener

    >>> shortener = URLShortener(ShortURLMemoryDAO())
    >>> shortener.shorten('https://example.com/test')
    'm4bHI5oT'
    >>> shortener.expand('m4bHI5oT')
    'https://example.com/test'
    >>> shortener.expand('nonexistent') is None
    True
"""

import logging

from urlshortener.models import DomainCountModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.utils.shortener import generate_shortcode, validate_url, extract_domain


logger = logging.getLogger(__name__)


class URLShortener:
    """Shorten and expand URLs on top of a ShortURLBaseDAO.

    Attributes:
        dao (ShortURLBaseDAO):
            Store holding mappings and domain counters.

    Methods:
        shorten(target: str) -> str:
            Return the shortcode of a URL, creating the mapping on first use.
            Raises ValidationError for URLs that cannot be shortened.

        expand(shortcode: str) -> str | None:
            Return the URL behind a shortcode, None if unknown.

        top_domains(n: int) -> list[DomainCountModel]:
            Return the n most shortened domains.
    """

    def __init__(self, dao: ShortURLBaseDAO):
        self.dao = dao

    def shorten(self, target: str) -> str:
        """Shorten a URL

        Procedure:
        - Step 1: Validate the URL (http/https scheme, non-empty host)
        - Step 2: Return the existing shortcode if this exact URL was shortened before
        - Step 3: Generate the shortcode from the URL hash
        - Step 4: Count the URL's domain (skipped if no domain can be extracted)
        - Step 5: Store the mapping

        Args:
            target (str):
                URL to shorten, stored and hashed verbatim.

        Returns:
            str: 8-character shortcode.

        Raises:
            ValidationError:
                If the URL is malformed, not http(s) or has no host.

        Example:
            >>> shortener.shorten('ftp://example.com')
            Traceback (most recent call last):
                ...
            urlshortener.exceptions.ValidationError: URL must have http or https scheme
        """
        # 1- Validate URL
        validate_url(target)

        # 2- Deduplicate: same URL string, same shortcode, no metric update
        shortcode = self.dao.find_shortcode(target)
        if shortcode is not None:
            logger.debug('URL already shortened.', extra={'shortcode': shortcode})
            return shortcode

        # 3- Generate shortcode
        shortcode = generate_shortcode(target)

        # 4- Update domain metrics
        domain = extract_domain(target)
        if domain:
            self.dao.increment_domain_count(domain)
        else:
            logger.debug('No domain extracted from URL, skipping domain metrics.', extra={'shortcode': shortcode})

        # 5- Store mapping
        self.dao.save(shortcode, target)
        logger.info('Shortened URL.', extra={'shortcode': shortcode, 'domain': domain})
        return shortcode

    def expand(self, shortcode: str) -> str | None:
        return self.dao.find(shortcode)

    def top_domains(self, n: int) -> list[DomainCountModel]:
        return self.dao.top_domains(n)
