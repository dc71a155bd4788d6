from .cache import ChainCache, content_hash
from .chain import (
    build_chain,
    find_conflicting_keys,
    get_config_source,
    get_config_value,
    get_source_hierarchy,
)
from .classifier import classify
from .entries import extract_entries
from .equality import deep_equal
from .resolver import Resolver
from .settings import EngineSettings, find_settings_file, load_settings

__all__ = [
    "ChainCache",
    "content_hash",
    "build_chain",
    "find_conflicting_keys",
    "get_config_source",
    "get_config_value",
    "get_source_hierarchy",
    "classify",
    "extract_entries",
    "deep_equal",
    "Resolver",
    "EngineSettings",
    "find_settings_file",
    "load_settings",
]
