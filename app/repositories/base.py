"""Repository base class used by all concrete repositories."""
import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """Writer-preferring reader/writer lock.

    Any number of readers may hold the lock together; a writer holds it
    alone.  Once a writer is waiting, new readers queue behind it so a
    steady stream of reads cannot starve writes.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
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
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class BaseRepository:
    """Provides the shared read/write discipline for an in-memory store.

    Sub-classes keep their records in ``self._data`` and wrap every access
    in :meth:`_reading` or :meth:`_writing`.  Work done inside those blocks
    must stay in memory: no I/O and no logging while the lock is held.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()

    def _reading(self):
        return self._lock.read_locked()

    def _writing(self):
        return self._lock.write_locked()
