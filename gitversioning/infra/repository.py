"""
Repository handle for gitversioning.

A Repository binds a work tree path to a GitClient. It is borrowed by
the version engine for the duration of a query and never modified.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union
import logging

from ..domain import TagRef, GitObject, WorkingTreeStatus
from ..exit_codes import NotAGitRepositoryError
from .git_client import GitClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repository:
    """
    Read-only handle to a git work tree.

    Example:
        repo = Repository.open("~/projects/myproject")
        head = repo.head()

    Attributes:
        work_tree: Absolute path of the work tree root
        git: Client used to run git commands
    """

    work_tree: Path
    git: GitClient = field(default_factory=GitClient, compare=False)

    @classmethod
    def open(cls, path: Union[str, Path] = ".", git: Optional[GitClient] = None) -> 'Repository':
        """
        Open the repository containing path.

        Args:
            path: Any path inside the work tree
            git: Client to use (creates default if None)

        Returns:
            Repository rooted at the work tree top level

        Raises:
            NotAGitRepositoryError: If path is not inside a work tree
        """
        git = git or GitClient()
        path = Path(path).expanduser()
        if not path.is_dir():
            raise NotAGitRepositoryError(str(path))
        top = git.toplevel(str(path))
        if top is None:
            raise NotAGitRepositoryError(str(path))
        logger.debug(f"Opened repository at {top}")
        return cls(work_tree=Path(top).resolve(), git=git)

    @property
    def path(self) -> str:
        return str(self.work_tree)

    def head(self) -> Optional[str]:
        """Commit id of HEAD, or None if there are no commits yet."""
        return self.git.resolve(self.path, "HEAD")

    def resolve(self, ref: str) -> Optional[str]:
        return self.git.resolve(self.path, ref)

    def tag_refs(self) -> List[TagRef]:
        return self.git.tag_refs(self.path)

    def read_object(self, object_id: str) -> GitObject:
        return self.git.read_object(self.path, object_id)

    def ancestry(self, head: str) -> List[str]:
        return self.git.rev_list(self.path, head)

    def commits_since(self, since: Optional[str], head: str = "HEAD") -> int:
        return self.git.count_commits(self.path, since, head)

    def status(self) -> WorkingTreeStatus:
        return self.git.status(self.path)

    def relative_path(self, path: Union[str, Path]) -> Path:
        """
        Express path relative to the work tree root.

        Relative paths are taken as relative to the work tree root.

        Raises:
            ValueError: If path lies outside the work tree
        """
        path = Path(path)
        if not path.is_absolute():
            path = self.work_tree / path
        return path.resolve().relative_to(self.work_tree)
