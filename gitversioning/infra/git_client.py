"""
Git client infrastructure for gitversioning.

Provides a clean abstraction over git command execution.
All git operations go through this client, making them:
- Easy to mock for testing
- Consistent in error handling
- Isolated from business logic

Only read-only commands are issued. Status is queried with
--no-optional-locks so that it never rewrites the index file.
"""

import subprocess
from typing import Optional, List, Tuple, Sequence
import logging

from ..domain import TagRef, Commit, AnnotatedTag, OtherObject, GitObject, WorkingTreeStatus
from ..exit_codes import GitCommandError

logger = logging.getLogger(__name__)


class GitClient:
    """
    Abstraction over git commands.

    Provides methods for the git queries the version engine needs,
    with consistent error handling and return types.

    Example:
        client = GitClient()
        head = client.resolve("/path/to/repo", "HEAD")
        if head is None:
            print("Repository has no commits yet")
    """

    def __init__(self, timeout: int = 30, executable: str = "git"):
        """
        Initialize GitClient.

        Args:
            timeout: Command timeout in seconds (default: 30)
            executable: Git executable to run (default: "git")
        """
        self.timeout = timeout
        self.executable = executable

    def _run(
        self,
        args: Sequence[str],
        cwd: str,
        check: bool = False,
        strip: bool = True
    ) -> Tuple[Optional[str], int]:
        """
        Run a git command.

        Args:
            args: Git arguments (e.g., ['rev-parse', 'HEAD'])
            cwd: Working directory
            check: Raise GitCommandError on failure
            strip: Strip surrounding whitespace from stdout

        Returns:
            Tuple of (stdout, returncode)
        """
        cmd = [self.executable] + list(args)
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                errors="surrogateescape",
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: {' '.join(cmd)}")
            if check:
                raise GitCommandError(cmd, -1, "timed out")
            return None, -1
        except OSError as e:
            logger.error(f"Git command failed: {' '.join(cmd)} - {e}")
            if check:
                raise GitCommandError(cmd, -1, str(e)) from e
            return None, -1

        if check and result.returncode != 0:
            raise GitCommandError(cmd, result.returncode, result.stderr)

        output = result.stdout
        if output and strip:
            output = output.strip()
        return output if output else None, result.returncode

    def toplevel(self, path: str) -> Optional[str]:
        """Get the work tree root containing path, or None if not in a work tree."""
        output, code = self._run(['rev-parse', '--show-toplevel'], cwd=path)
        if code == 0 and output:
            return output
        return None

    def resolve(self, path: str, ref: str = "HEAD") -> Optional[str]:
        """
        Resolve a ref to a commit id.

        Args:
            path: Path to git repository
            ref: Ref or revision expression (default: "HEAD")

        Returns:
            Full commit id, or None if the ref does not resolve
            (e.g. HEAD of a repository without commits)
        """
        output, code = self._run(
            ['rev-parse', '--verify', '--quiet', f'{ref}^{{commit}}'],
            cwd=path
        )
        if code == 0 and output:
            return output
        return None

    def tag_refs(self, path: str) -> List[TagRef]:
        """
        List all tag references.

        Args:
            path: Path to git repository

        Returns:
            List of TagRef, in ref name order
        """
        output, _ = self._run(
            ['for-each-ref', '--format=%(refname)%00%(objectname)', 'refs/tags'],
            cwd=path,
            check=True
        )
        if not output:
            return []

        refs = []
        for line in output.split('\n'):
            if '\0' not in line:
                continue
            name, target = line.split('\0', 1)
            refs.append(TagRef(name=name.strip(), target=target.strip()))
        return refs

    def read_object(self, path: str, object_id: str) -> GitObject:
        """
        Read an object's kind and, for tag objects, its target.

        Args:
            path: Path to git repository
            object_id: Object id to inspect

        Returns:
            Commit, AnnotatedTag or OtherObject

        Raises:
            GitCommandError: If the object cannot be read
        """
        kind, _ = self._run(['cat-file', '-t', object_id], cwd=path, check=True)
        if kind == 'commit':
            return Commit(id=object_id)
        if kind != 'tag':
            return OtherObject(id=object_id, kind=kind or 'unknown')

        body, _ = self._run(['cat-file', 'tag', object_id], cwd=path, check=True, strip=False)
        target = None
        target_kind = 'unknown'
        for line in (body or '').split('\n'):
            if not line:
                break  # end of header
            key, _, value = line.partition(' ')
            if key == 'object':
                target = value.strip()
            elif key == 'type':
                target_kind = value.strip()
        if target is None:
            return OtherObject(id=object_id, kind='tag')
        return AnnotatedTag(id=object_id, target=target, target_kind=target_kind)

    def rev_list(self, path: str, head: str) -> List[str]:
        """
        Walk the ancestry of head.

        Args:
            path: Path to git repository
            head: Commit id to start from

        Returns:
            Ids of head and all its ancestors, each listed once

        Raises:
            GitCommandError: If the walk fails
        """
        output, _ = self._run(['rev-list', head], cwd=path, check=True)
        if not output:
            return []
        return [line.strip() for line in output.split('\n') if line.strip()]

    def count_commits(self, path: str, since: Optional[str], head: str = "HEAD") -> int:
        """
        Count commits reachable from head but not from since.

        Args:
            path: Path to git repository
            since: Commit to exclude with its ancestors (None counts all)
            head: Commit to count from

        Returns:
            Number of commits
        """
        spec = f'{since}..{head}' if since else head
        output, _ = self._run(['rev-list', '--count', spec], cwd=path, check=True)
        try:
            return int(output or 0)
        except ValueError:
            return 0

    def status(self, path: str) -> WorkingTreeStatus:
        """
        Get the working tree status.

        Args:
            path: Path to git repository

        Returns:
            WorkingTreeStatus with changed paths per category

        Raises:
            GitCommandError: If status cannot be read (corrupt index, etc.)
        """
        output, _ = self._run(
            ['--no-optional-locks', 'status', '--porcelain=v1', '-z',
             '--untracked-files=all'],
            cwd=path,
            check=True,
            strip=False
        )
        return WorkingTreeStatus.from_porcelain(output)
