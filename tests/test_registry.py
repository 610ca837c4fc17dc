"""Tests for the provider registry."""

from unittest.mock import MagicMock, patch

import pytest

from gitversioning.exit_codes import ConfigError
from gitversioning.registry import (
    ProviderRegistry,
    TAG_PROCESSOR_GROUP,
    create_default_registry,
    default_registry,
)
from gitversioning.services import DefaultVersionEvaluator, VersionEvaluator
from gitversioning.tag_processor import MavenStyleTagProcessor, Pep440TagProcessor


class TestProviderRegistry:
    """Tests for registration and precedence."""

    def test_highest_precedence_wins(self):
        registry = ProviderRegistry()
        registry.register_tag_processor("low", lambda: "low", precedence=1)
        registry.register_tag_processor("high", lambda: "high", precedence=5)
        assert registry.tag_processor() == "high"

    def test_first_registered_wins_tie(self):
        registry = ProviderRegistry()
        registry.register_tag_processor("first", lambda: "first")
        registry.register_tag_processor("second", lambda: "second")
        assert registry.tag_processor() == "first"

    def test_select_by_name(self):
        registry = ProviderRegistry()
        registry.register_tag_processor("a", lambda: "a", precedence=10)
        registry.register_tag_processor("b", lambda: "b")
        assert registry.tag_processor("b") == "b"

    def test_unknown_name(self):
        registry = ProviderRegistry()
        registry.register_tag_processor("a", lambda: "a")
        with pytest.raises(ConfigError, match="available: a"):
            registry.tag_processor("zzz")

    def test_empty_registry(self):
        with pytest.raises(ConfigError):
            ProviderRegistry().evaluator_provider()

    def test_options_filtered_by_signature(self):
        registry = ProviderRegistry()
        registry.register_tag_processor("maven", MavenStyleTagProcessor)
        registry.register_tag_processor("pep440", Pep440TagProcessor)
        maven = registry.tag_processor("maven", suffix="-dev")
        assert maven.suffix == "-dev"
        # Pep440TagProcessor takes no suffix
        assert isinstance(registry.tag_processor("pep440", suffix="-dev"), Pep440TagProcessor)

    def test_var_keyword_factory_gets_all_options(self):
        factory = MagicMock()
        registry = ProviderRegistry()
        registry.register_tag_processor("m", factory)
        registry.tag_processor("m", suffix="x", other=1)
        factory.assert_called_once_with(suffix="x", other=1)

    def test_names_in_precedence_order(self):
        registry = ProviderRegistry()
        registry.register_tag_processor("a", object)
        registry.register_tag_processor("b", object, precedence=3)
        registry.register_tag_processor("c", object)
        assert registry.tag_processor_names() == ["b", "a", "c"]

    def test_reregistering_replaces(self):
        registry = ProviderRegistry()
        registry.register_tag_processor("a", lambda: 1)
        registry.register_tag_processor("a", lambda: 2)
        assert registry.tag_processor("a") == 2

    def test_load_entry_points(self):
        good = MagicMock()
        good.name = "dated"
        good.load.return_value = object
        bad = MagicMock()
        bad.name = "broken"
        bad.load.side_effect = ImportError("no module")

        def fake_entry_points(group):
            return [good, bad] if group == TAG_PROCESSOR_GROUP else []

        registry = ProviderRegistry()
        with patch("gitversioning.registry.entry_points", side_effect=fake_entry_points):
            assert registry.load_entry_points() == 1
        assert registry.tag_processor_names() == ["dated"]


class TestDefaultRegistry:
    def test_builtins(self):
        registry = create_default_registry()
        assert registry.tag_processor_names() == ["maven", "pep440"]
        assert isinstance(registry.tag_processor(), MavenStyleTagProcessor)
        assert registry.evaluator_provider() is DefaultVersionEvaluator

    def test_shared(self):
        assert default_registry() is default_registry()

    def test_for_repository_uses_registry(self):
        repo = MagicMock()
        evaluator = VersionEvaluator.for_repository(repo, registry=create_default_registry())
        assert isinstance(evaluator, DefaultVersionEvaluator)
        assert evaluator.repository is repo

    def test_for_repository_by_name(self):
        custom = MagicMock()
        registry = create_default_registry()
        registry.register_evaluator_provider("custom", custom)
        repo = MagicMock()
        assert VersionEvaluator.for_repository(repo, registry, "custom") is custom.return_value
        custom.assert_called_once_with(repo)
