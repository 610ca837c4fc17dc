"""
Explicit registry of pluggable implementations.

Hosts register version evaluator providers and tag processor factories
under a name with an integer precedence. Lookups without a name return
the entry with the highest precedence; among equal precedences the one
registered first wins.

Example:
    registry = ProviderRegistry()
    registry.register_tag_processor("dated", DatedTagProcessor, precedence=10)
    evaluator = VersionEvaluator.for_repository(repo, registry=registry)
"""

from dataclasses import dataclass
from importlib.metadata import entry_points
import inspect
from typing import Any, Callable, Dict, List, Optional
import logging
import threading

from .exit_codes import ConfigError

logger = logging.getLogger(__name__)

TAG_PROCESSOR_GROUP = "gitversioning.tag_processors"
EVALUATOR_GROUP = "gitversioning.evaluators"


@dataclass(frozen=True)
class Registration:
    """A named factory with its precedence."""
    name: str
    factory: Callable[..., Any]
    precedence: int = 0
    order: int = 0


def _accepted(factory: Callable[..., Any], options: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only the options factory accepts as keyword arguments."""
    try:
        params = inspect.signature(factory).parameters.values()
    except (TypeError, ValueError):
        return dict(options)
    if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params):
        return dict(options)
    names = {p.name for p in params if p.kind in (inspect.Parameter.KEYWORD_ONLY,
                                                 inspect.Parameter.POSITIONAL_OR_KEYWORD)}
    dropped = sorted(set(options) - names)
    if dropped:
        logger.debug(f"{getattr(factory, '__name__', factory)} ignores options {dropped}")
    return {k: v for k, v in options.items() if k in names}


class ProviderRegistry:
    """
    Holds evaluator providers and tag processor factories.

    An evaluator provider is called with the repository and returns a
    VersionEvaluator. A tag processor factory is called with keyword
    options (e.g. suffix) and returns a TagProcessor.
    """

    def __init__(self):
        self._evaluators: Dict[str, Registration] = {}
        self._processors: Dict[str, Registration] = {}
        self._counter = 0
        self._lock = threading.Lock()

    def _add(self, table: Dict[str, Registration], name: str, factory, precedence: int) -> None:
        with self._lock:
            self._counter += 1
            table[name] = Registration(name, factory, precedence, self._counter)

    @staticmethod
    def _select(table: Dict[str, Registration], kind: str, name: Optional[str]) -> Registration:
        if name is not None:
            if name not in table:
                available = ', '.join(sorted(table)) or 'none'
                raise ConfigError(f"Unknown {kind} '{name}' (available: {available})")
            return table[name]
        if not table:
            raise ConfigError(f"No {kind} registered")
        return min(table.values(), key=lambda r: (-r.precedence, r.order))

    def register_evaluator_provider(self, name: str, provider: Callable[..., Any],
                                    precedence: int = 0) -> None:
        """Register a VersionEvaluator provider."""
        self._add(self._evaluators, name, provider, precedence)

    def register_tag_processor(self, name: str, factory: Callable[..., Any],
                               precedence: int = 0) -> None:
        """Register a TagProcessor factory."""
        self._add(self._processors, name, factory, precedence)

    def evaluator_provider(self, name: Optional[str] = None) -> Callable[..., Any]:
        """Get the named provider, or the one with the highest precedence."""
        return self._select(self._evaluators, "evaluator provider", name).factory

    def tag_processor(self, name: Optional[str] = None, **options) -> Any:
        """
        Create a tag processor.

        Args:
            name: Registered name (highest precedence if None)
            **options: Passed to the factory; options it does not
                accept are dropped

        Returns:
            A new TagProcessor
        """
        factory = self._select(self._processors, "tag processor", name).factory
        return factory(**_accepted(factory, options))

    def tag_processor_names(self) -> List[str]:
        return [r.name for r in sorted(self._processors.values(), key=lambda r: (-r.precedence, r.order))]

    def load_entry_points(self) -> int:
        """
        Register factories advertised by installed packages.

        Entry points in the "gitversioning.tag_processors" and
        "gitversioning.evaluators" groups are registered under their
        entry point name with precedence 0.

        Returns:
            Number of entries loaded
        """
        loaded = 0
        for group, register in ((TAG_PROCESSOR_GROUP, self.register_tag_processor),
                                (EVALUATOR_GROUP, self.register_evaluator_provider)):
            for ep in entry_points(group=group):
                try:
                    factory = ep.load()
                except (ImportError, AttributeError) as e:
                    logger.warning(f"Cannot load {group} entry point {ep.name}: {e}")
                    continue
                register(ep.name, factory)
                loaded += 1
        return loaded


def create_default_registry() -> ProviderRegistry:
    """A registry with the built-in implementations."""
    from .tag_processor import MavenStyleTagProcessor, Pep440TagProcessor
    from .services.version_evaluator import DefaultVersionEvaluator

    registry = ProviderRegistry()
    registry.register_evaluator_provider("default", DefaultVersionEvaluator)
    registry.register_tag_processor("maven", MavenStyleTagProcessor, precedence=10)
    registry.register_tag_processor("pep440", Pep440TagProcessor)
    return registry


_default_registry: Optional[ProviderRegistry] = None
_default_lock = threading.Lock()


def default_registry() -> ProviderRegistry:
    """The shared registry used when none is injected."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = create_default_registry()
        return _default_registry
