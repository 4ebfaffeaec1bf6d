"""Data Access Object (DAO) implementation for managing shortened URLs in memory

This module provides a thread-safe, process-local implementation of ShortURLBaseDAO.
Nothing survives a restart and nothing is shared between instances.

Responsibilities:
    - Keep the shortcode -> target and target -> shortcode indexes in sync;
    - Count distinct shortened URLs per domain;
    - Rank domains by count with a deterministic tie-break;
    - Serialize writers against readers with a reader-writer lock.

Classes:
    ShortURLMemoryDAO:
        DAO for storing and retrieving short URL mappings in Python dictionaries.

Example:
    >>> from urlshortener.dao.memory import ShortURLMemoryDAO

    >>> dao = ShortURLMemoryDAO()
    >>> dao.save('EAaArVRs', 'https://example.com')
    <ShortURLMemoryDAO>
    >>> dao.find('EAaArVRs')
    'https://example.com'
    >>> dao.find('nonexistent') is None
    True

    >>> for domain in ('a.com', 'a.com', 'b.com'):
    ...     _ = dao.increment_domain_count(domain)
    >>> dao.top_domains(1)
    [DomainCountModel(domain='a.com', count=2)]
"""

from beartype import beartype

from urlshortener.models import DomainCountModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.memory.helpers import ReadWriteLock, read_locked, write_locked


class ShortURLMemoryDAO(ShortURLBaseDAO):
    """In-memory Data Access Object (DAO) for managing short URL mappings

    This class implements the ShortURLBaseDAO interface with three dictionaries
    guarded by a single ReadWriteLock.

    Attributes:
        _targets (dict[str, str]):
            shortcode -> target index.
        _shortcodes (dict[str, str]):
            target -> shortcode index.
        _domain_counts (dict[str, int]):
            domain -> number of distinct shortened URLs.
        _lock (ReadWriteLock):
            Shared by every method; writes are exclusive, reads are concurrent.

    Methods:
        save(shortcode: str, target: str) -> ShortURLMemoryDAO:
            Store both index entries inside one write section.

        find(shortcode: str) -> str | None:
            Lookup in the shortcode -> target index.

        find_shortcode(target: str) -> str | None:
            Lookup in the target -> shortcode index.

        increment_domain_count(domain: str) -> int:
            Increment a domain counter, creating it at 1.

        top_domains(n: int) -> list[DomainCountModel]:
            Snapshot and rank domain counters.

        count() -> int:
            Number of shortcode -> target entries.
    """

    def __init__(self):
        self._targets: dict[str, str] = {}
        self._shortcodes: dict[str, str] = {}
        self._domain_counts: dict[str, int] = {}
        self._lock = ReadWriteLock()

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'

    @write_locked
    @beartype
    def save(self, shortcode: str, target: str) -> 'ShortURLMemoryDAO':
        """Store a shortcode <-> target mapping

        Both dictionaries are updated while the write lock is held, so a reader
        never sees the mapping in one index but not in the other.

        NOTE: a shortcode already mapped to another target (8-character prefix
              collision) is overwritten. The old target keeps its reverse entry.

        Args:
            shortcode (str):
                Short identifier of the mapping.
            target (str):
                Original long URL.

        Returns:
            ShortURLMemoryDAO: self (for method chaining)

        Example:
            >>> dao.save('m4bHI5oT', 'https://example.com/test')
            <ShortURLMemoryDAO>
        """
        self._targets[shortcode] = target
        self._shortcodes[target] = shortcode
        return self

    @read_locked
    @beartype
    def find(self, shortcode: str) -> str | None:
        return self._targets.get(shortcode)

    @read_locked
    @beartype
    def find_shortcode(self, target: str) -> str | None:
        return self._shortcodes.get(target)

    @write_locked
    @beartype
    def increment_domain_count(self, domain: str) -> int:
        """Increment the counter of a domain

        Args:
            domain (str):
                Host portion of a shortened URL, e.g. 'example.com'.

        Returns:
            int:
                The counter value after incrementing.

        Example:
            >>> dao.increment_domain_count('example.com')
            1
            >>> dao.increment_domain_count('example.com')
            2
        """
        self._domain_counts[domain] = self._domain_counts.get(domain, 0) + 1
        return self._domain_counts[domain]

    @read_locked
    @beartype
    def top_domains(self, n: int) -> list[DomainCountModel]:
        """Rank domains by how many distinct URLs were shortened for them

        Ties on count are broken by domain name (ascending) so results are
        reproducible regardless of insertion order.

        Args:
            n (int):
                Maximum number of domains to return. Values <= 0 return [].

        Returns:
            list[DomainCountModel]:
                At most n domains, highest count first.

        Example:
            >>> dao.top_domains(2)
            [DomainCountModel(domain='a.com', count=3), DomainCountModel(domain='b.com', count=2)]
        """
        if n <= 0:
            return []

        ranked = sorted(self._domain_counts.items(), key=lambda item: (-item[1], item[0]))
        return [DomainCountModel(domain=domain, count=count) for domain, count in ranked[:n]]

    @read_locked
    def count(self) -> int:
        return len(self._targets)
