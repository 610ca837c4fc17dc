"""
Reachability index.

Caches, per head commit, the set of commits reachable from it. History
is immutable, so an entry never needs invalidation: when HEAD moves the
new head is simply a new key.
"""

import logging
import threading
from typing import Dict, FrozenSet, Optional

from .exit_codes import GitCommandError

logger = logging.getLogger(__name__)

EMPTY: FrozenSet[str] = frozenset()


class ReachabilityIndex:
    """
    Thread safe compute-if-absent cache of reachable commit sets.

    Concurrent callers asking for the same head share a single walk:
    the first caller computes the set while the others wait on the
    per-head lock and then read the cached result.

    Example:
        index = ReachabilityIndex()
        reachable = index.reachable(repo, repo.head())
        assert repo.head() in reachable
    """

    def __init__(self):
        self._entries: Dict[str, FrozenSet[str]] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._lock = threading.Lock()
        self.walks = 0

    def reachable(self, repository, head_id: Optional[str]) -> FrozenSet[str]:
        """
        Get the commits reachable from head_id, head included.

        Args:
            repository: Repository to walk
            head_id: Commit to start from; None means no commits

        Returns:
            Frozen set of commit ids (empty if head_id is None or
            the walk failed)
        """
        if head_id is None:
            return EMPTY

        cached = self._entries.get(head_id)
        if cached is not None:
            return cached

        with self._lock:
            key_lock = self._locks.setdefault(head_id, threading.Lock())

        with key_lock:
            cached = self._entries.get(head_id)
            if cached is not None:
                return cached
            result = self._walk(repository, head_id)
            with self._lock:
                self._entries[head_id] = result
                self._locks.pop(head_id, None)
            return result

    def _walk(self, repository, head_id: str) -> FrozenSet[str]:
        with self._lock:
            self.walks += 1
        try:
            commits = frozenset(repository.ancestry(head_id))
        except GitCommandError as e:
            logger.warning(f"Cannot walk history from {head_id}: {e}")
            return EMPTY
        logger.debug(f"{len(commits)} commits reachable from {head_id}")
        return commits

    def __contains__(self, head_id: str) -> bool:
        return head_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Drop all cached entries."""
        with self._lock:
            self._entries.clear()


_default_index = ReachabilityIndex()


def default_index() -> ReachabilityIndex:
    """The process wide index shared by evaluators that are not given one."""
    return _default_index
