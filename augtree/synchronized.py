"""
Lock-guarded IntervalTree for adopters that share one tree across threads.
"""

import threading
from typing import Generic, Optional

from .interval_tree import IntervalTree, T


class SynchronizedIntervalTree(Generic[T]):
    """
    Serialises every operation on an IntervalTree behind one lock.

    Queries run under the same lock as inserts because insertion rewrites
    the highest values the query prunes on.
    """

    def __init__(self, tree: Optional[IntervalTree[T]] = None):
        self._tree: IntervalTree[T] = tree if tree is not None else IntervalTree()
        self._lock = threading.RLock()

    def insert(self, start: T, end: T):
        with self._lock:
            self._tree.insert(start, end)

    def remove(self, start: T, end: T) -> bool:
        with self._lock:
            return self._tree.remove(start, end)

    def query(self, point: T) -> list[tuple[T, T]]:
        with self._lock:
            return self._tree.query(point)

    def height(self) -> int:
        with self._lock:
            return self._tree.height()

    def snapshot(self) -> list[tuple[T, T]]:
        """Intervals in start order, copied out under the lock."""
        with self._lock:
            return list(self._tree.traverse())

    def verify_integrity(self):
        with self._lock:
            self._tree.verify_integrity()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tree)
