"""
Domain layer for gitversioning.

Contains pure domain objects with no I/O or side effects:
- TagRef: A tag reference (name and target object id)
- Commit / AnnotatedTag / OtherObject: Objects a tag can point to
- VersionedTag / VersionedCommit: Candidate and winning version tags
- WorkingTreeStatus: Changed paths grouped by category

These objects are immutable and provide serialization methods
for JSON output where the CLI needs them.
"""

from .objects import TagRef, Commit, AnnotatedTag, OtherObject, GitObject, TAG_NAMESPACE
from .version import VersionedTag, VersionedCommit, VersionInfo, NO_VERSION
from .status import WorkingTreeStatus

__all__ = [
    'TagRef',
    'Commit',
    'AnnotatedTag',
    'OtherObject',
    'GitObject',
    'TAG_NAMESPACE',
    'VersionedTag',
    'VersionedCommit',
    'VersionInfo',
    'NO_VERSION',
    'WorkingTreeStatus',
]
