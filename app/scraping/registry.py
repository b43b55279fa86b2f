"""
Extraction strategy registry selected by URL.
"""

from __future__ import annotations

import importlib
from collections.abc import Iterable, Sequence

from app.scraping.base import ExtractionStrategy
from app.scraping.strategies import CTFTimeEventListStrategy, KeywordPageStrategy
from app.scraping.types import CompetitionRecord


class StrategyRegistry:
    """
    Ordered strategy registry with a catch-all fallback.

    Registered strategies are consulted before the built-ins; the first one
    whose `matches(url)` is true extracts the page.
    """

    def __init__(
        self,
        strategies: Sequence[ExtractionStrategy] | None = None,
        *,
        fallback: ExtractionStrategy | None = None,
    ) -> None:
        builtins: list[ExtractionStrategy] = [CTFTimeEventListStrategy()]
        self._strategies: list[ExtractionStrategy] = [*(strategies or []), *builtins]
        self._fallback = fallback or KeywordPageStrategy()

    @property
    def strategies(self) -> tuple[ExtractionStrategy, ...]:
        return tuple(self._strategies)

    def register(self, strategy: ExtractionStrategy) -> None:
        """
        Add `strategy` ahead of everything already registered.
        """

        if not isinstance(strategy, ExtractionStrategy):
            raise TypeError("Strategies must inherit from ExtractionStrategy.")
        self._strategies.insert(0, strategy)

    def register_paths(self, paths: Iterable[str]) -> None:
        # Reversed so the first configured path ends up first.
        for path in reversed(list(paths)):
            self.register(self._load_dynamic_class(path)())

    def resolve(self, url: str) -> ExtractionStrategy:
        for strategy in self._strategies:
            if strategy.matches(url):
                return strategy
        return self._fallback

    def extract(self, html: str, url: str) -> list[CompetitionRecord]:
        return self.resolve(url).extract(html, url)

    @staticmethod
    def _load_dynamic_class(path: str) -> type[ExtractionStrategy]:
        if ":" not in path:
            raise ValueError(f"Invalid strategy class '{path}'. Use 'module.path:ClassName'.")

        module_path, class_name = path.split(":", 1)
        module = importlib.import_module(module_path)
        loaded = getattr(module, class_name, None)
        if loaded is None:
            raise ValueError(f"Unable to resolve strategy class '{path}'.")
        if not isinstance(loaded, type) or not issubclass(loaded, ExtractionStrategy):
            raise ValueError(f"Class '{path}' must inherit from ExtractionStrategy.")
        return loaded
