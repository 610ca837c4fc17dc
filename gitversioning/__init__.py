"""
gitversioning - Derive project versions from git history.

gitversioning finds the latest tag that encodes a version and is
reachable from HEAD, and turns it into the version of the source tree.
No version file has to be maintained by hand.

Quick Start:
    import gitversioning

    # Version of the repository containing the current directory
    gitversioning.derive_version()                 # "1.4.0" or "1.4.0-SNAPSHOT"

    # Only tags like "v1.4.0", only changes below "core" count
    gitversioning.derive_version(".", tag_prefix="v", sub_directory="core")

    # Build tool integration
    repo = gitversioning.Repository.open(".")
    version = (gitversioning.VersionEvaluator.for_repository(repo)
               .sub_directory("core")
               .tag_filter(gitversioning.DefaultTagFilter().prepend("v"))
               .version())

Strategies:
    TagFilter - Extracts the version from a tag name
        DefaultTagFilter: regex with one capture group
    TagProcessor - Turns the winning tag into the final version
        MavenStyleTagProcessor: "-SNAPSHOT" suffix unless clean release
        Pep440TagProcessor: ".devN" development releases

Both can be replaced by any object with the same method, or registered
in a ProviderRegistry and selected by name.
"""

__version__ = "0.3.0"

# High-level API
from .api import create, derive_version, describe

# Domain objects
from .domain import (
    TagRef,
    Commit,
    AnnotatedTag,
    OtherObject,
    VersionedTag,
    VersionedCommit,
    VersionInfo,
    WorkingTreeStatus,
)

# Infrastructure
from .infra import GitClient, Repository

# Engine
from .reachability import ReachabilityIndex, default_index
from .tag_filter import TagFilter, DefaultTagFilter, CallableTagFilter, VERSION_PATTERN
from .tag_processor import (
    TagProcessor,
    TagProcessorBase,
    MavenStyleTagProcessor,
    Pep440TagProcessor,
    CallableTagProcessor,
)
from .dirty import is_dirty
from .services import VersionEvaluator, DefaultVersionEvaluator, TagResolver
from .registry import ProviderRegistry, default_registry, create_default_registry

# Errors
from .exit_codes import (
    CommandError,
    VersioningError,
    ConfigError,
    TagFilterError,
    VersionParseError,
    GitCommandError,
    NotAGitRepositoryError,
)

__all__ = [
    # Version
    "__version__",
    # High-level API
    "create",
    "derive_version",
    "describe",
    # Domain objects
    "TagRef",
    "Commit",
    "AnnotatedTag",
    "OtherObject",
    "VersionedTag",
    "VersionedCommit",
    "VersionInfo",
    "WorkingTreeStatus",
    # Infrastructure
    "GitClient",
    "Repository",
    # Engine
    "ReachabilityIndex",
    "default_index",
    "TagFilter",
    "DefaultTagFilter",
    "CallableTagFilter",
    "VERSION_PATTERN",
    "TagProcessor",
    "TagProcessorBase",
    "MavenStyleTagProcessor",
    "Pep440TagProcessor",
    "CallableTagProcessor",
    "is_dirty",
    "VersionEvaluator",
    "DefaultVersionEvaluator",
    "TagResolver",
    "ProviderRegistry",
    "default_registry",
    "create_default_registry",
    # Errors
    "CommandError",
    "VersioningError",
    "ConfigError",
    "TagFilterError",
    "VersionParseError",
    "GitCommandError",
    "NotAGitRepositoryError",
]
