"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (in-memory today; a persistent or
distributed store would be another subclass).

Responsibilities:
    - Keep the shortcode -> target and target -> shortcode indexes in sync.
    - Count how many distinct URLs were shortened per domain.
    - Rank domains by their counters.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from urlshortener.dao import ShortURLMemoryDAO

        >>> dao = ShortURLMemoryDAO()
        >>> dao.save('m4bHI5oT', 'https://example.com/test')
        <ShortURLMemoryDAO>

        >>> dao.find('m4bHI5oT')
        'https://example.com/test'

        >>> dao.find_shortcode('https://example.com/test')
        'm4bHI5oT'

        >>> dao.increment_domain_count('example.com')
        1
        >>> dao.top_domains(3)
        [DomainCountModel(domain='example.com', count=1)]
"""

from abc import ABC, abstractmethod

from urlshortener.models import DomainCountModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        save(shortcode: str, target: str) -> ShortURLBaseDAO:
            Store both directions of a shortcode <-> target mapping atomically.

        find(shortcode: str) -> str | None:
            Return the target URL for a shortcode, None if unknown.

        find_shortcode(target: str) -> str | None:
            Return the shortcode already issued for a target URL, None if unknown.

        increment_domain_count(domain: str) -> int:
            Increment (creating at 1) the counter of a domain.

        top_domains(n: int) -> list[DomainCountModel]:
            Return at most n domains ranked by count.

        count() -> int:
            Return the number of stored mappings.

    Subclassing:
        Datastore-specific implementations must extend this class and implement all
        abstract methods. Lookups never raise for unknown keys; absence is None.

    NOTE:
        - Mappings never expire and cannot be deleted.
        - Two different targets truncated to the same shortcode are not detected here.
          The later save() overwrites the shortcode -> target entry.
    """

    @abstractmethod
    def save(self, shortcode: str, target: str) -> 'ShortURLBaseDAO':
        """Store a shortcode <-> target mapping.

        Both index entries must become visible to readers at once.

        Args:
            shortcode (str):
                Short identifier of the mapping.

            target (str):
                Original long URL.

        Returns:
            ShortURLBaseDAO: self (for method chaining)
        """
        pass

    @abstractmethod
    def find(self, shortcode: str) -> str | None:
        """Retrieve the target URL for a shortcode.

        Args:
            shortcode (str):
                Short identifier to look up.

        Returns:
            str | None: The target URL if found, otherwise None.
        """
        pass

    @abstractmethod
    def find_shortcode(self, target: str) -> str | None:
        """Retrieve the shortcode previously issued for a target URL.

        Targets are compared as exact strings.

        Args:
            target (str):
                Original long URL to look up.

        Returns:
            str | None: The shortcode if found, otherwise None.
        """
        pass

    @abstractmethod
    def increment_domain_count(self, domain: str) -> int:
        """Increment the counter of a domain.

        Args:
            domain (str):
                Host portion of a shortened URL.

        Returns:
            int: The counter value after incrementing.
        """
        pass

    @abstractmethod
    def top_domains(self, n: int) -> list[DomainCountModel]:
        """Rank domains by their counters.

        Args:
            n (int):
                Maximum number of domains to return.

        Returns:
            list[DomainCountModel]:
                Domains sorted by count (descending), then by name (ascending).
                Holds every domain when n exceeds the number of tracked domains.
        """
        pass

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored shortcode -> target mappings."""
        pass
