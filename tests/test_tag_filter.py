"""Tests for tag filters."""

import re
from unittest.mock import patch

import pytest

from gitversioning.exit_codes import TagFilterError, ConfigError
from gitversioning.tag_filter import (
    CallableTagFilter,
    DefaultTagFilter,
    TagFilter,
    VERSION_PATTERN,
)


class TestDefaultTagFilter:
    """Tests for the regex based default filter."""

    @pytest.mark.parametrize("tag,expected", [
        ("1.2.3", "1.2.3"),
        ("v1.2.3", "1.2.3"),
        ("1.2", "1.2"),
        ("7", "7"),
        ("release-2.0.1", "2.0.1"),
        ("v1.0.0-rc1", "1.0.0-rc1"),
        ("v1.0.0-beta_2+build", "1.0.0-beta_2+build"),
        ("1.2.3.4", "1.2.3"),
        ("latest", None),
        ("", None),
    ])
    def test_default_pattern(self, tag, expected):
        assert DefaultTagFilter().version(tag) == expected

    def test_first_match_is_used(self):
        assert DefaultTagFilter().version("java11-3.2.1") == "11-3"

    def test_prefix_matches_prefixed_tag(self):
        tag_filter = DefaultTagFilter().prepend("v")
        assert tag_filter.version("v2.0.0") == "2.0.0"

    def test_prefix_rejects_bare_tag(self):
        tag_filter = DefaultTagFilter().prepend("v")
        assert tag_filter.version("2.0.0") is None

    def test_anchored_prefix(self):
        tag_filter = DefaultTagFilter().prepend("^core/v")
        assert tag_filter.version("core/v1.4") == "1.4"
        assert tag_filter.version("ui/core/v1.4") is None

    def test_prepend_composes(self):
        tag_filter = DefaultTagFilter().prepend("v").prepend("^release-")
        assert tag_filter.pattern_text == "^release-v" + VERSION_PATTERN
        assert tag_filter.version("release-v3.1") == "3.1"
        assert tag_filter.version("v3.1") is None

    def test_pattern_replaces(self):
        tag_filter = DefaultTagFilter().pattern(r"^r(\d+)$")
        assert tag_filter.version("r12") == "12"
        assert tag_filter.version("v1.0") is None

    def test_prepend_after_use_recompiles(self):
        tag_filter = DefaultTagFilter()
        assert tag_filter.version("2.0.0") == "2.0.0"
        tag_filter.prepend("v")
        assert tag_filter.version("2.0.0") is None

    def test_pattern_compiled_once(self):
        tag_filter = DefaultTagFilter().prepend("v")
        with patch("gitversioning.tag_filter.re.compile", wraps=re.compile) as compile_:
            for tag in ["v1.0", "v1.1", "x", "v2.0"]:
                tag_filter.version(tag)
        assert compile_.call_count == 1

    def test_invalid_pattern(self):
        tag_filter = DefaultTagFilter().pattern("v(")
        with pytest.raises(TagFilterError):
            tag_filter.version("v1.0")

    def test_pattern_without_group(self):
        tag_filter = DefaultTagFilter().pattern(r"v\d+")
        with pytest.raises(ConfigError):
            tag_filter.version("v1")

    def test_is_tag_filter(self):
        assert isinstance(DefaultTagFilter(), TagFilter)


class TestCallableTagFilter:
    def test_wraps_function(self):
        tag_filter = CallableTagFilter(lambda name: name[4:] if name.startswith("rel-") else None)
        assert tag_filter.version("rel-1.0") == "1.0"
        assert tag_filter.version("1.0") is None

    def test_base_filter_is_abstract(self):
        with pytest.raises(NotImplementedError):
            TagFilter().version("1.0")
