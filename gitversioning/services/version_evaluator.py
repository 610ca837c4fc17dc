"""
Version evaluation service for gitversioning.

The VersionEvaluator is the facade a build process uses to obtain the
version of a source tree:

    version = (VersionEvaluator.for_repository(repo)
               .sub_directory("core")
               .tag_filter(DefaultTagFilter().prepend("v"))
               .version())

Evaluation resolves HEAD, looks up the commits reachable from it,
selects the latest reachable version tag and lets the tag processor
turn it into the final version string.
"""

from pathlib import Path
from typing import Optional, Union
import logging

from ..dirty import is_dirty
from ..domain import VersionedCommit, VersionInfo
from ..exit_codes import CommandError, ConfigError, VersioningError
from ..reachability import ReachabilityIndex, default_index
from ..tag_filter import DefaultTagFilter
from ..tag_processor import MavenStyleTagProcessor
from .tag_resolver import TagResolver

logger = logging.getLogger(__name__)


class VersionEvaluator:
    """A configurable version evaluator bound to a repository."""

    @staticmethod
    def for_repository(repository, registry=None, name: Optional[str] = None) -> 'VersionEvaluator':
        """
        Create a version evaluator for the repository.

        The implementation is the registry's evaluator provider with the
        highest precedence, or the one registered under name.

        Args:
            repository: Repository to evaluate
            registry: ProviderRegistry to use (default registry if None)
            name: Provider name to select explicitly
        """
        if registry is None:
            from ..registry import default_registry
            registry = default_registry()
        return registry.evaluator_provider(name)(repository)

    def sub_directory(self, sub_directory: Optional[Union[str, Path]]) -> 'VersionEvaluator':
        """Set the sub-directory whose changes make the version dirty."""
        raise NotImplementedError

    def tag_filter(self, tag_filter) -> 'VersionEvaluator':
        """Set the tag filter."""
        raise NotImplementedError

    def tag_processor(self, tag_processor) -> 'VersionEvaluator':
        """Set the tag processor."""
        raise NotImplementedError

    def version(self) -> str:
        """Return the evaluated version."""
        raise NotImplementedError

    def describe(self) -> VersionInfo:
        """Return the evaluated version with the tag, commit and dirty state."""
        raise NotImplementedError


class DefaultVersionEvaluator(VersionEvaluator):
    """
    Evaluates the latest version tag on the current branch.

    Holds no state between calls apart from the reachability index,
    which is shared with other evaluators unless one is injected.
    """

    def __init__(self, repository, index: Optional[ReachabilityIndex] = None):
        """
        Initialize DefaultVersionEvaluator.

        Args:
            repository: Repository to evaluate (borrowed, never modified)
            index: Reachability cache (process wide default if None)
        """
        self.repository = repository
        self.index = index if index is not None else default_index()
        self._sub_directory: Optional[Path] = None
        self._tag_filter = DefaultTagFilter()
        self._tag_processor = MavenStyleTagProcessor()

    def sub_directory(self, sub_directory):
        if sub_directory is None:
            self._sub_directory = None
            return self
        try:
            self._sub_directory = self.repository.relative_path(sub_directory)
        except ValueError as e:
            raise ConfigError(
                f"Sub-directory {sub_directory} is outside of {self.repository.work_tree}"
            ) from e
        return self

    def tag_filter(self, tag_filter):
        self._tag_filter = tag_filter
        return self

    def tag_processor(self, tag_processor):
        self._tag_processor = tag_processor
        return self

    @property
    def directory(self) -> Optional[Path]:
        return self._sub_directory

    def latest_version_tagged(self) -> VersionedCommit:
        """Find the latest version tag reachable from HEAD."""
        reachable = self.index.reachable(self.repository, self.repository.head())
        return TagResolver(self.repository, self._tag_filter).latest_version_tagged(reachable)

    def _evaluate(self, with_dirty: bool = False) -> VersionInfo:
        try:
            latest = self.latest_version_tagged()
            version = self._tag_processor.version(
                self.repository,
                self._sub_directory,
                latest.commit,
                latest.tag,
                latest.raw
            )
            dirty = is_dirty(self.repository, self._sub_directory) if with_dirty else False
        except CommandError as e:
            raise VersioningError(str(e), e.exit_code) from e
        except (OSError, ValueError) as e:
            raise VersioningError(f"Cannot evaluate version: {e}") from e
        return VersionInfo(
            version=version,
            base_version=latest.raw,
            tag=latest.tag,
            commit=latest.commit,
            dirty=dirty
        )

    def version(self) -> str:
        result = self._evaluate().version
        logger.debug(f"Version of {self.repository.work_tree} is {result}")
        return result

    def describe(self) -> VersionInfo:
        """
        Evaluate the version together with the data it was derived from.

        Returns:
            VersionInfo with version, base version, tag, commit and
            dirty state of the sub-directory
        """
        return self._evaluate(with_dirty=True)
