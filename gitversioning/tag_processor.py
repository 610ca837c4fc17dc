"""
Tag processors turn the winning version tag into the final version string.

A tag processor is called with the repository, the sub-directory that
is relevant for versioning, the commit and name of the latest
reachable version tag (both None if there is none) and the version
extracted from that tag ("0.0.0" if there is none).

Built-in processors:
- MavenStyleTagProcessor: "1.2.3" for a clean tagged tree,
  "1.2.3-SNAPSHOT" otherwise
- Pep440TagProcessor: "1.2.3" for a clean tagged tree,
  "1.2.4.dev4" otherwise (4 commits since the tag)
"""

from pathlib import Path
from typing import Callable, Optional
import logging

from packaging.version import Version, InvalidVersion

from .dirty import is_dirty
from .exit_codes import ConfigError

SNAPSHOT_SUFFIX = "-SNAPSHOT"


class TagProcessor:
    """Generates a version from information retrieved from a repository."""

    def version(
        self,
        repository,
        sub_dir: Optional[Path],
        commit: Optional[str],
        tag_name: Optional[str],
        version: str
    ) -> str:
        raise NotImplementedError


class TagProcessorBase(TagProcessor):
    """Base class for tag processors that care about work tree changes."""

    def __init__(self):
        self.log = logging.getLogger(f"{__name__}.{type(self).__name__}")

    @staticmethod
    def is_dirty(repository, sub_dir: Optional[Path]) -> bool:
        """Check if sub_dir has changes since the last commit."""
        return is_dirty(repository, sub_dir)

    def is_release(self, repository, sub_dir, commit, tag_name) -> bool:
        """A release is a found tag with no changes in sub_dir."""
        if commit is None or tag_name is None:
            self.log.debug("No version tag reachable from HEAD")
            return False
        if self.is_dirty(repository, sub_dir):
            self.log.debug(f"Changes since {tag_name}")
            return False
        return True


class MavenStyleTagProcessor(TagProcessorBase):
    """
    Appends a snapshot suffix unless the tree is a clean, tagged release.

    Example:
        processor = MavenStyleTagProcessor()
        processor.version(repo, None, None, None, "0.0.0")  # -> "0.0.0-SNAPSHOT"
    """

    def __init__(self, suffix: str = SNAPSHOT_SUFFIX):
        super().__init__()
        self.suffix = suffix

    def version(self, repository, sub_dir, commit, tag_name, version) -> str:
        if self.is_release(repository, sub_dir, commit, tag_name):
            return version
        return version + self.suffix


class Pep440TagProcessor(TagProcessorBase):
    """
    Renders the version in PEP 440 form for Python packaging.

    A clean, tagged tree yields the normalized tag version. Otherwise the
    result is a development release of the next version, numbered by the
    commits since the tag, so it sorts above the tag: "1.2.3" becomes
    "1.2.4.dev2" and "1.0.0-rc1" becomes "1.0.0rc2.dev2". Without any tag
    the count covers the whole history ("0.0.0.dev7").
    """

    def version(self, repository, sub_dir, commit, tag_name, version) -> str:
        try:
            base = Version(version)
        except InvalidVersion as e:
            raise ConfigError(f"Version {version!r} is not a valid PEP 440 version") from e

        if self.is_release(repository, sub_dir, commit, tag_name):
            return str(base)

        distance = 0
        if repository.head() is not None:
            distance = repository.commits_since(commit)

        if commit is None:
            return str(Version(f"{base}.dev{distance}"))
        if base.pre is not None:
            label, number = base.pre
            return str(Version(f"{base.base_version}{label}{number + 1}.dev{distance}"))
        major, minor, micro = (list(base.release) + [0, 0])[:3]
        return str(Version(f"{major}.{minor}.{micro + 1}.dev{distance}"))


class CallableTagProcessor(TagProcessor):
    """Adapts a plain function to a TagProcessor."""

    def __init__(self, func: Callable[..., str]):
        self.func = func

    def version(self, repository, sub_dir, commit, tag_name, version) -> str:
        return self.func(repository, sub_dir, commit, tag_name, version)
