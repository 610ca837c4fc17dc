"""
Tag resolution service for gitversioning.

Finds the latest version tag of a repository that is reachable from
HEAD. Tags are ranked by the version they encode, highest first, and
the first one whose commit is an ancestor of HEAD wins. A higher
version tagged on an unmerged branch therefore never shadows the
latest version of the current branch.
"""

from typing import FrozenSet, Iterator, List, Optional, Tuple
import re
import logging

import semver

from ..domain import (
    AnnotatedTag,
    Commit,
    OtherObject,
    TagRef,
    VersionedCommit,
    VersionedTag,
)
from ..exit_codes import GitCommandError, VersionParseError
from ..tag_filter import DefaultTagFilter

logger = logging.getLogger(__name__)


# Leading numeric components; the remainder is pre-release/build text
NUMERIC_PREFIX = re.compile(r"^([0-9]+)((?:\.[0-9]+){0,2})(.*)$", re.DOTALL)


def parse_version(tag: str, text: str) -> semver.Version:
    """
    Parse a version extracted from a tag, accepting missing components.

    Numeric components may carry leading zeros ("2024.01.05"), they
    are compared by value.

    Args:
        tag: Tag name the version came from (for error reporting)
        text: Extracted version (e.g., "1.2", "1.0.0-rc1")

    Returns:
        Parsed semantic version

    Raises:
        VersionParseError: If text is not a (loose) semantic version
    """
    normalized = text
    match = NUMERIC_PREFIX.match(text or '')
    if match:
        numbers = [match.group(1)] + [n for n in match.group(2).split('.') if n]
        normalized = '.'.join(str(int(n)) for n in numbers) + match.group(3)
    try:
        return semver.Version.parse(normalized, optional_minor_and_patch=True)
    except (ValueError, TypeError) as e:
        raise VersionParseError(tag, text) from e


class TagResolver:
    """
    Service for finding the latest reachable version tag.

    Example:
        resolver = TagResolver(repo, DefaultTagFilter().prepend("v"))
        latest = resolver.latest_version_tagged(index.reachable(repo, repo.head()))
        print(latest.tag, latest.version)
    """

    def __init__(self, repository, tag_filter=None):
        """
        Initialize TagResolver.

        Args:
            repository: Repository to inspect
            tag_filter: Filter extracting versions from tag names
                (DefaultTagFilter if None)
        """
        self.repository = repository
        self.tag_filter = tag_filter or DefaultTagFilter()

    def versioned(self, ref: TagRef) -> Optional[VersionedTag]:
        """Apply the tag filter to a ref and parse the extracted version."""
        tag = ref.short_name
        text = self.tag_filter.version(tag)
        if text is None:
            return None
        return VersionedTag(ref=ref, tag=tag, raw=text, version=parse_version(tag, text))

    def candidates(self) -> List[VersionedTag]:
        """
        List version tags, highest version first.

        Tags encoding the same version keep the order in which the
        repository lists them (by ref name).

        Raises:
            VersionParseError: If an extracted version does not parse
            GitCommandError: If the tags cannot be listed
        """
        found = []
        for ref in self.repository.tag_refs():
            candidate = self.versioned(ref)
            if candidate is None:
                logger.debug(f"Ignoring tag {ref.short_name}: no version")
                continue
            found.append(candidate)
        # sorted() is stable, so equal versions keep listing order
        return sorted(found, key=lambda c: c.version, reverse=True)

    def find_commit(self, ref: TagRef) -> Optional[str]:
        """
        Resolve a tag ref to the commit it designates.

        Annotated tags are dereferenced exactly once; their target must
        be a commit. Refs to other kinds of objects yield None, as do
        objects that cannot be read.
        """
        try:
            obj = self.repository.read_object(ref.target)
        except GitCommandError as e:
            logger.debug(f"Cannot read target of {ref.short_name}: {e}")
            return None

        if isinstance(obj, Commit):
            return obj.id
        if isinstance(obj, AnnotatedTag):
            if obj.target_kind != 'commit':
                logger.debug(f"Tag {ref.short_name} annotates a {obj.target_kind}, not a commit")
                return None
            return obj.target
        if isinstance(obj, OtherObject):
            logger.debug(f"Tag {ref.short_name} points to a {obj.kind}")
            return None
        raise TypeError(f"Unexpected git object: {obj!r}")

    def resolved(self, candidates: List[VersionedTag]) -> Iterator[Tuple[VersionedTag, str]]:
        """Yield candidates with their commits, skipping unresolvable ones."""
        for candidate in candidates:
            commit = self.find_commit(candidate.ref)
            if commit is not None:
                yield candidate, commit

    def latest_version_tagged(self, reachable: FrozenSet[str]) -> VersionedCommit:
        """
        Select the highest version tag whose commit is reachable.

        Args:
            reachable: Commits reachable from HEAD

        Returns:
            The winning tag and commit, or VersionedCommit.none_found()
        """
        for candidate, commit in self.resolved(self.candidates()):
            if commit not in reachable:
                logger.debug(f"Skipping {candidate.tag}: not reachable from HEAD")
                continue
            logger.debug(f"Latest version tag is {candidate.tag} ({commit[:12]})")
            return VersionedCommit(
                commit=commit,
                tag=candidate.tag,
                raw=candidate.raw,
                version=candidate.version
            )
        return VersionedCommit.none_found()
