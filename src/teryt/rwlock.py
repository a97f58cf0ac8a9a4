"""
Reader/writer lock guarding the in-memory datasets.

Any number of readers may hold the lock at once; a writer holds it alone.
Once a writer is waiting, new readers queue behind it so a reload is never
starved by a steady stream of searches.
"""

import contextlib
import threading


class ReadWriteLock:

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read called without a matching acquire_read")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write called without a matching acquire_write")
            self._writer = False
            self._cond.notify_all()

    @contextlib.contextmanager
    def read_locked(self):
        """Holds the lock in shared mode for the duration of a with block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextlib.contextmanager
    def write_locked(self):
        """Holds the lock in exclusive mode for the duration of a with block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
