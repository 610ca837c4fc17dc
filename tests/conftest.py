"""
Shared fixtures for gitversioning tests.

GitRepo builds throw-away repositories with the git executable so that
the engine can be tested against real history.
"""

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from gitversioning.infra import Repository
from gitversioning.reachability import ReachabilityIndex


GIT_ENV = {
    'GIT_AUTHOR_NAME': 'Test User',
    'GIT_AUTHOR_EMAIL': 'test@example.com',
    'GIT_COMMITTER_NAME': 'Test User',
    'GIT_COMMITTER_EMAIL': 'test@example.com',
    'GIT_CONFIG_NOSYSTEM': '1',
}


class GitRepo:
    """A scratch git repository with helpers to build history."""

    def __init__(self, path: Path):
        self.path = path
        self.env = dict(os.environ, **GIT_ENV)
        self.env['GIT_CONFIG_GLOBAL'] = os.devnull
        self.counter = 0
        self.path.mkdir(parents=True, exist_ok=True)
        self.git('init', '-q')
        self.git('config', 'commit.gpgsign', 'false')
        self.git('config', 'tag.gpgsign', 'false')
        self.git('symbolic-ref', 'HEAD', 'refs/heads/main')

    def git(self, *args) -> str:
        result = subprocess.run(
            ['git'] + list(args),
            cwd=self.path,
            env=self.env,
            capture_output=True,
            text=True,
            check=True
        )
        return result.stdout.strip()

    def write(self, relpath: str, content: str = None) -> Path:
        self.counter += 1
        file_path = self.path / relpath
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content if content is not None else f"change {self.counter}\n")
        return file_path

    def commit(self, relpath: str = 'README.md', message: str = None) -> str:
        """Change relpath, commit it and return the new commit id."""
        self.write(relpath)
        self.git('add', '-A')
        self.git('commit', '-q', '-m', message or f"commit {self.counter}")
        return self.head()

    def head(self) -> str:
        return self.git('rev-parse', 'HEAD')

    def tag(self, name: str, target: str = 'HEAD', annotated: bool = False) -> None:
        if annotated:
            self.git('tag', '-a', name, '-m', f"Release {name}", target)
        else:
            self.git('tag', name, target)

    def branch(self, name: str) -> None:
        self.git('checkout', '-q', '-b', name)

    def checkout(self, name: str) -> None:
        self.git('checkout', '-q', name)

    def repository(self) -> Repository:
        return Repository.open(self.path)


@pytest.fixture
def git_repo(tmp_path):
    """An empty git repository on branch main."""
    if shutil.which('git') is None:
        pytest.skip("git executable not available")
    return GitRepo(tmp_path / 'repo')


@pytest.fixture
def index():
    """A fresh reachability index, isolated from the process wide one."""
    return ReachabilityIndex()
