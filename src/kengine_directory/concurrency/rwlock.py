"""
Reader/writer lock

Allows any number of concurrent readers or a single writer. Waiting writers
block new readers so that a writer cannot be starved by a stream of reads.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass
class LockStats:
    """Snapshot of lock usage"""

    name: str
    active_readers: int
    writer_active: bool
    waiting_writers: int
    total_reads: int
    total_writes: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary"""
        return {
            "name": self.name,
            "active_readers": self.active_readers,
            "writer_active": self.writer_active,
            "waiting_writers": self.waiting_writers,
            "total_reads": self.total_reads,
            "total_writes": self.total_writes,
        }


class ReadWriteLock:
    """
    Writer-preferring reader/writer lock

    Use the ``read_lock()`` and ``write_lock()`` context managers:

        with lock.read_lock():
            ...  # shared access

        with lock.write_lock():
            ...  # exclusive access

    The lock is not reentrant.
    """

    def __init__(self, name: str = "unnamed"):
        self.name = name
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

        self._total_reads = 0
        self._total_writes = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
            self._total_reads += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError(f"Lock '{self.name}' released without a reader")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
            self._total_writes += 1
        logger.debug(f"Lock '{self.name}' acquired for writing")

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError(f"Lock '{self.name}' released without a writer")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_lock(self):
        """Hold the lock in shared mode for the duration of the block"""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_lock(self):
        """Hold the lock in exclusive mode for the duration of the block"""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    def stats(self) -> LockStats:
        """Get current lock statistics"""
        with self._cond:
            return LockStats(
                name=self.name,
                active_readers=self._readers,
                writer_active=self._writer,
                waiting_writers=self._waiting_writers,
                total_reads=self._total_reads,
                total_writes=self._total_writes,
            )
