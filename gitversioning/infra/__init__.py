"""
Infrastructure layer for gitversioning.

Contains abstractions for external systems:
- GitClient: Git command execution
- Repository: A work tree bound to a GitClient

These provide clean interfaces that can be mocked for testing.
"""

from .git_client import GitClient
from .repository import Repository

__all__ = [
    'GitClient',
    'Repository',
]
