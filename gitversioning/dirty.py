"""
Dirty classification of a work tree, scoped to a sub-directory.
"""

from pathlib import Path, PurePosixPath
from typing import Optional, Union
import logging

logger = logging.getLogger(__name__)


def as_prefix(sub_directory: Optional[Union[str, Path]]) -> str:
    """Convert a work tree relative sub-directory to a status path prefix."""
    if sub_directory is None:
        return ''
    prefix = PurePosixPath(Path(sub_directory).as_posix()).as_posix()
    return '' if prefix == '.' else prefix.strip('/')


def is_dirty(repository, sub_directory: Optional[Union[str, Path]] = None) -> bool:
    """
    Check whether the work tree has changes under sub_directory.

    Every status category counts: modified, untracked, staged,
    missing, conflicting, added and removed. The status is read on
    every call.

    Args:
        repository: Repository to inspect
        sub_directory: Path relative to the work tree root, or None
            for the whole tree

    Returns:
        True if any changed path lies under sub_directory

    Raises:
        GitCommandError: If the status cannot be read
    """
    prefix = as_prefix(sub_directory)
    status = repository.status()
    changed = status.paths_under(prefix)
    if changed:
        logger.debug(f"Work tree dirty under '{prefix or '.'}': {', '.join(changed[:5])}")
    return bool(changed)
