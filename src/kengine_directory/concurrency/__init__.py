"""
Concurrency primitives for kengine_directory

Provides the reader/writer lock guarding the namespace directory.
"""

from .rwlock import LockStats, ReadWriteLock

__all__ = [
    "LockStats",
    "ReadWriteLock",
]
