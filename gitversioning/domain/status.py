"""
Working tree status domain object.

Parses the output of ``git status --porcelain=v1 -z`` into path sets
per change category. Each porcelain entry has a two letter code XY
where X is the index (staged) state and Y the work tree state.
"""

from dataclasses import dataclass, fields
from typing import FrozenSet, Optional, Dict, List, Iterator

# Unmerged combinations, see git-status(1)
CONFLICT_CODES = {'DD', 'AU', 'UD', 'UA', 'DU', 'AA', 'UU'}


@dataclass(frozen=True)
class WorkingTreeStatus:
    """
    Changed paths grouped by category.

    Paths are relative to the work tree root and use forward slashes.

    Attributes:
        modified: Tracked files changed in the work tree but not staged
        untracked: Files not known to git
        uncommitted: Files with staged changes of any kind
        missing: Tracked files deleted from the work tree but not staged
        conflicting: Files with unresolved merge conflicts
        added: Files staged as new
        removed: Files staged for removal
    """

    modified: FrozenSet[str] = frozenset()
    untracked: FrozenSet[str] = frozenset()
    uncommitted: FrozenSet[str] = frozenset()
    missing: FrozenSet[str] = frozenset()
    conflicting: FrozenSet[str] = frozenset()
    added: FrozenSet[str] = frozenset()
    removed: FrozenSet[str] = frozenset()

    @classmethod
    def from_porcelain(cls, output: Optional[str]) -> 'WorkingTreeStatus':
        """
        Parse NUL separated porcelain v1 output.

        Args:
            output: Raw stdout of ``git status --porcelain=v1 -z``

        Returns:
            Parsed WorkingTreeStatus
        """
        categories: Dict[str, set] = {f.name: set() for f in fields(cls)}
        if not output:
            return cls()

        entries = output.split('\0')
        i = 0
        while i < len(entries):
            entry = entries[i]
            i += 1
            if len(entry) < 4:
                continue

            code, path = entry[:2], entry[3:]
            x, y = code[0], code[1]

            if code == '!!':
                continue
            if code == '??':
                categories['untracked'].add(path)
                continue
            if code in CONFLICT_CODES:
                categories['conflicting'].add(path)
                continue

            # Renames and copies are followed by the source path
            if x in 'RC' or y in 'RC':
                source = entries[i] if i < len(entries) else ''
                i += 1
                if x == 'R' and source:
                    categories['removed'].add(source)
                    categories['uncommitted'].add(source)

            if x != ' ':
                categories['uncommitted'].add(path)
                if x == 'A' or x in 'RC':
                    categories['added'].add(path)
                elif x == 'D':
                    categories['removed'].add(path)

            if y in 'MT':
                categories['modified'].add(path)
            elif y == 'D':
                categories['missing'].add(path)
            elif y == 'A':
                # intent to add (git add -N)
                categories['added'].add(path)
                categories['uncommitted'].add(path)

        return cls(**{name: frozenset(paths) for name, paths in categories.items()})

    def categories(self) -> Iterator[tuple]:
        """Yield (category name, paths) pairs."""
        for f in fields(self):
            yield f.name, getattr(self, f.name)

    def paths(self) -> FrozenSet[str]:
        """All changed paths regardless of category."""
        result = set()
        for _, paths in self.categories():
            result.update(paths)
        return frozenset(result)

    def touches(self, prefix: Optional[str]) -> bool:
        """
        Check whether any change lies under the given path prefix.

        Args:
            prefix: Sub-directory relative to the work tree root, or
                None/"" for the whole tree

        Returns:
            True if a changed path equals the prefix or lies below it
        """
        return bool(self.paths_under(prefix))

    def paths_under(self, prefix: Optional[str]) -> List[str]:
        """Sorted changed paths that lie under the given prefix."""
        prefix = (prefix or '').strip('/')
        if prefix in ('', '.'):
            return sorted(self.paths())
        return sorted(
            p for p in self.paths()
            if p == prefix or p.startswith(prefix + '/')
        )

    @property
    def clean(self) -> bool:
        return not self.paths()

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert to dictionary for JSON serialization."""
        return {name: sorted(paths) for name, paths in self.categories()}
