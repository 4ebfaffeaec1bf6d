import functools
import threading
from contextlib import contextmanager
from collections.abc import Iterator


__all__ = ['ReadWriteLock', 'read_locked', 'write_locked']


class ReadWriteLock:
    """Many concurrent readers OR one exclusive writer.

    Writers are preferred: once a writer is waiting, new readers queue behind it,
    so a steady stream of lookups cannot starve inserts.

    Example:
        >>> lock = ReadWriteLock()
        >>> with lock.read():
        ...     pass
        >>> with lock.write():
        ...     pass
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


def read_locked[F](method: F) -> F:
    """Run a DAO method while holding the instance's lock in shared (read) mode

    Example:
        >>> @read_locked
        ... def find(self, shortcode):
        ...     return self._targets.get(shortcode)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock.read():
            return method(self, *args, **kwargs)

    return wrapper


def write_locked[F](method: F) -> F:
    """Run a DAO method while holding the instance's lock in exclusive (write) mode

    Example:
        >>> @write_locked
        ... def save(self, shortcode, target):
        ...     self._targets[shortcode] = target
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock.write():
            return method(self, *args, **kwargs)

    return wrapper
