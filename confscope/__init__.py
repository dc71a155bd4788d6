"""Confscope - configuration inheritance resolution.

Explain how user-wide and project-local configuration combine: which
values are inherited, which are overridden and which belong to the project
alone, with memoized resolution of the effective configuration.
"""

from .core.cache import ChainCache
from .core.chain import (
    build_chain,
    find_conflicting_keys,
    get_config_source,
    get_config_value,
    get_source_hierarchy,
)
from .core.classifier import classify
from .core.entries import extract_entries, order_by_priority
from .core.equality import deep_equal
from .core.errors import CacheConfigError, ConfscopeError, InvalidEntriesError, SettingsError
from .core.resolver import Resolver
from .core.settings import EngineSettings, load_settings
from .core.stats import calculate_stats
from .core.types import (
    UNDEFINED,
    ClassificationResult,
    ConfigEntry,
    InheritanceChain,
    InheritedEntry,
    OverriddenEntry,
    ProjectSpecificEntry,
    SourceInfo,
)

__all__ = [
    "ChainCache",
    "build_chain",
    "get_config_source",
    "get_config_value",
    "get_source_hierarchy",
    "find_conflicting_keys",
    "classify",
    "extract_entries",
    "order_by_priority",
    "deep_equal",
    "CacheConfigError",
    "ConfscopeError",
    "InvalidEntriesError",
    "SettingsError",
    "Resolver",
    "EngineSettings",
    "load_settings",
    "calculate_stats",
    "UNDEFINED",
    "ClassificationResult",
    "ConfigEntry",
    "InheritanceChain",
    "InheritedEntry",
    "OverriddenEntry",
    "ProjectSpecificEntry",
    "SourceInfo",
]
