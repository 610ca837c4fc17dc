"""
Service layer for gitversioning.

Contains logic that orchestrates domain objects and infrastructure:
- TagResolver: Finds the latest version tag reachable from HEAD
- VersionEvaluator: Facade producing the version string

Services are the primary API for the CLI and for build hooks.
"""

from .tag_resolver import TagResolver, parse_version
from .version_evaluator import VersionEvaluator, DefaultVersionEvaluator

__all__ = [
    'TagResolver',
    'parse_version',
    'VersionEvaluator',
    'DefaultVersionEvaluator',
]
