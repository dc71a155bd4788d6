"""Resolver tying classification, chain building and memoization together."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Sequence, Union

import structlog

from .cache import ChainCache, Clock
from .chain import build_chain
from .classifier import classify
from .entries import coerce_entries, extract_entries, order_by_priority
from .settings import EngineSettings, load_settings
from .stats import InheritanceStats, calculate_stats
from .types import (
    SCOPE_LOCAL,
    SCOPE_PROJECT,
    SCOPE_USER,
    ClassificationResult,
    ConfigEntry,
    InheritanceChain,
    SourceInfo,
)

logger = structlog.get_logger(__name__)


class Resolver:
    """Resolve configuration ownership across user and project scopes.

    A Resolver owns one ChainCache, so independent resolvers never share
    memoized state. Call ``clear_cache`` whenever the underlying
    configuration files are known to have changed.
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        *,
        clock: Optional[Clock] = None,
    ):
        """Initialize Resolver.

        Args:
            settings: Cache bounds and scope priorities; defaults if None.
            clock: Optional millisecond clock for the chain cache.
        """
        self.settings = settings or EngineSettings()
        self.cache = ChainCache(
            max_entries=self.settings.max_entries,
            ttl_ms=self.settings.ttl_ms,
            clock=clock,
        )

    @classmethod
    def from_settings_file(cls, path: Optional[Union[str, Path]] = None) -> "Resolver":
        """Create a Resolver from confscope.yaml (searched for if no path)."""
        settings = load_settings(path)
        logger.debug(
            "resolver.settings_loaded",
            max_entries=settings.max_entries,
            ttl_ms=settings.ttl_ms,
        )
        return cls(settings)

    def classify(self, user_entries: Any, project_entries: Any) -> ClassificationResult:
        return classify(user_entries, project_entries)

    def build_chain(self, entries: Any) -> InheritanceChain:
        return build_chain(entries)

    def calculate_inheritance_chain(self, entries: Any) -> InheritanceChain:
        """Memoized ``build_chain``; use this on hot paths."""
        return self.cache.calculate_inheritance_chain(entries)

    def clear_cache(self) -> None:
        self.cache.clear()

    def source_for(self, scope: str, path: str = "") -> SourceInfo:
        """Tag for ``scope`` using this resolver's priorities."""
        return SourceInfo.for_scope(scope, path, self.settings.priorities)

    def scope_entries(
        self,
        scope: str,
        data: Dict[str, Any],
        *,
        path: str = "",
        include: Optional[Union[str, Pattern[str]]] = None,
        depth: Optional[int] = 0,
    ) -> List[ConfigEntry]:
        """Extract entries for ``scope`` from a parsed configuration document.

        See ``extract_entries`` for how keys, ``include`` and ``depth`` work.
        """
        return extract_entries(
            data, self.source_for(scope, path), include=include, depth=depth
        )

    def resolve(
        self,
        user_entries: Any,
        project_entries: Any,
        local_entries: Sequence[Any] = (),
    ) -> InheritanceChain:
        """Compute the memoized effective chain over all scopes.

        Entries missing a source are tagged with their scope, then all
        entries are ordered by ascending priority before the chain is built.
        """
        tagged: List[ConfigEntry] = []
        for scope, raw, name in (
            (SCOPE_USER, user_entries, "user_entries"),
            (SCOPE_PROJECT, project_entries, "project_entries"),
            (SCOPE_LOCAL, local_entries, "local_entries"),
        ):
            source = self.source_for(scope)
            for entry in coerce_entries(raw, name):
                if entry.source is None:
                    entry = ConfigEntry(entry.key, entry.value, source)
                tagged.append(entry)
        return self.calculate_inheritance_chain(order_by_priority(tagged))

    def stats(self, user_entries: Any, project_entries: Any) -> InheritanceStats:
        return calculate_stats(self.classify(user_entries, project_entries))
