"""
Version value objects produced while evaluating a repository.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any

import semver

from .objects import TagRef

NO_VERSION = "0.0.0"


@dataclass(frozen=True)
class VersionedTag:
    """
    A tag whose name yielded a parseable version.

    Attributes:
        ref: The tag reference
        tag: Tag name without namespace
        raw: Version text as extracted by the tag filter
        version: Parsed semantic version used for ordering
    """

    ref: TagRef
    tag: str
    raw: str
    version: semver.Version


@dataclass(frozen=True)
class VersionedCommit:
    """
    The winning tag resolved to its commit.

    The sentinel for "no reachable version tag" has commit and tag set
    to None and the version "0.0.0".
    """

    commit: Optional[str]
    tag: Optional[str]
    raw: str
    version: semver.Version

    @classmethod
    def none_found(cls) -> 'VersionedCommit':
        return cls(
            commit=None,
            tag=None,
            raw=NO_VERSION,
            version=semver.Version.parse(NO_VERSION)
        )

    @property
    def found(self) -> bool:
        return self.commit is not None and self.tag is not None


@dataclass(frozen=True)
class VersionInfo:
    """Outcome of a version evaluation, as reported by the CLI."""

    version: str
    base_version: str
    tag: Optional[str] = None
    commit: Optional[str] = None
    dirty: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'version': self.version,
            'base_version': self.base_version,
            'tag': self.tag,
            'commit': self.commit,
            'dirty': self.dirty,
        }
