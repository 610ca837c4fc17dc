"""
Tag filters map a tag name to the version it encodes.

A filter returns the version substring of a tag name, or None if the
tag is not a version tag. Any object with a matching ``version``
method can be used as a filter.
"""

import re
from typing import Callable, Optional, Pattern

from .exit_codes import TagFilterError

# One to three dot separated numbers, optionally followed by a
# hyphenated pre-release suffix.
VERSION_PATTERN = r"([0-9]+(?:\.[0-9]+){0,2}(?:-[a-zA-Z0-9+\-_]+)?)"


class TagFilter:
    """Maps a tag name to an optional version string."""

    def version(self, tag_name: str) -> Optional[str]:
        raise NotImplementedError


class DefaultTagFilter(TagFilter):
    """
    Regex based tag filter.

    The pattern must have exactly one capture group, which matches the
    version. The first match anywhere in the tag name is used.

    Example:
        tag_filter = DefaultTagFilter().prepend("v")
        tag_filter.version("v2.0.0")   # -> "2.0.0"
        tag_filter.version("2.0.0")    # -> None
    """

    def __init__(self, pattern: str = VERSION_PATTERN):
        self._pattern = pattern
        self._compiled: Optional[Pattern[str]] = None

    @property
    def pattern_text(self) -> str:
        return self._pattern

    def pattern(self, pattern: str) -> 'DefaultTagFilter':
        """Replace the pattern."""
        self._pattern = pattern
        self._compiled = None
        return self

    def prepend(self, prefix: str) -> 'DefaultTagFilter':
        """
        Prepend a prefix to the current pattern.

        The prefix is a regular expression fragment; "v" restricts the
        filter to tags like "v1.2.3".
        """
        self._pattern = prefix + self._pattern
        self._compiled = None
        return self

    def _compile(self) -> Pattern[str]:
        if self._compiled is None:
            try:
                compiled = re.compile(self._pattern)
            except re.error as e:
                raise TagFilterError(f"Invalid tag pattern {self._pattern!r}: {e}") from e
            if compiled.groups < 1:
                raise TagFilterError(
                    f"Tag pattern {self._pattern!r} has no capture group for the version"
                )
            self._compiled = compiled
        return self._compiled

    def version(self, tag_name: str) -> Optional[str]:
        match = self._compile().search(tag_name)
        if match:
            return match.group(1)
        return None

    def __repr__(self) -> str:
        return f"DefaultTagFilter({self._pattern!r})"


class CallableTagFilter(TagFilter):
    """Adapts a plain function to a TagFilter."""

    def __init__(self, func: Callable[[str], Optional[str]]):
        self.func = func

    def version(self, tag_name: str) -> Optional[str]:
        return self.func(tag_name)
