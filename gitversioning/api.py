"""
High-level API for gitversioning.

Example:
    import gitversioning

    # Version of the repository containing the current directory
    print(gitversioning.derive_version())

    # Only changes below "core" make the version a snapshot
    print(gitversioning.derive_version("~/projects/app", sub_directory="core",
                                       tag_prefix="v"))

    # Structured result
    info = gitversioning.describe("~/projects/app")
    print(info.tag, info.commit, info.dirty)
"""

from pathlib import Path
from typing import Optional, Union

from .config import load_config, build_tag_filter, build_tag_processor
from .domain import VersionInfo
from .infra import GitClient, Repository
from .reachability import ReachabilityIndex
from .services import VersionEvaluator

PathLike = Union[str, Path]


def create(
    path: PathLike = ".",
    sub_directory: Optional[PathLike] = None,
    tag_prefix: Optional[str] = None,
    pattern: Optional[str] = None,
    processor: Optional[str] = None,
    suffix: Optional[str] = None,
    index: Optional[ReachabilityIndex] = None,
    registry=None,
    git: Optional[GitClient] = None,
) -> VersionEvaluator:
    """
    Create a configured version evaluator for the repository at path.

    Arguments that are None fall back to the configuration of the
    work tree (pyproject.toml, .gitversioning.*, environment).

    Args:
        path: Any path inside the work tree
        sub_directory: Sub-directory relevant for dirtiness, relative
            to the work tree root (absolute paths are made relative)
        tag_prefix: Regex prefix version tags must start with (e.g. "v")
        pattern: Version pattern with one capture group
        processor: Registered tag processor name ("maven", "pep440")
        suffix: Suffix appended by the maven processor
        index: Reachability cache to use (shared default if None)
        registry: ProviderRegistry to use (default registry if None)
        git: GitClient to use

    Returns:
        A VersionEvaluator ready for version()
    """
    repository = Repository.open(path, git=git)
    config = load_config(repository.work_tree, overrides={
        'tag_prefix': tag_prefix,
        'pattern': pattern,
        'processor': processor,
        'snapshot_suffix': suffix,
        'sub_directory': str(sub_directory) if sub_directory is not None else None,
    })

    if registry is None:
        from .registry import default_registry
        registry = default_registry()

    evaluator = VersionEvaluator.for_repository(repository, registry=registry)
    if index is not None and hasattr(evaluator, 'index'):
        evaluator.index = index
    sub_dir = config.get('sub_directory')
    if sub_dir:
        evaluator.sub_directory(Path(sub_dir).expanduser())
    return (evaluator
            .tag_filter(build_tag_filter(config))
            .tag_processor(build_tag_processor(config, registry)))


def derive_version(path: PathLike = ".", **options) -> str:
    """Derive the version of the repository at path (see create())."""
    return create(path, **options).version()


def describe(path: PathLike = ".", **options) -> VersionInfo:
    """Derive the version together with the tag, commit and dirty state."""
    return create(path, **options).describe()
