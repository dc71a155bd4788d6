"""Folding source-tagged entries into an inheritance chain."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .entries import coerce_entries
from .types import ConfigEntry, InheritanceChain, JSONValue


def build_chain(entries: Any) -> InheritanceChain:
    """Build an inheritance chain from entries ordered by ascending priority.

    Entries are folded left to right; a later entry for the same key
    overwrites the earlier value. Priority fields are not consulted, so the
    caller must pass entries already in priority order.

    Args:
        entries: Sequence of ConfigEntry objects (or entry mappings).

    Returns:
        InheritanceChain holding the entries and the resolved values.

    Raises:
        InvalidEntriesError: If ``entries`` is not a sequence of entries.
    """
    ordered = coerce_entries(entries)
    resolved: Dict[str, JSONValue] = {}
    for entry in ordered:
        # last writer wins
        resolved[entry.key] = entry.value
    return InheritanceChain(entries=ordered, resolved=resolved)


def get_config_value(key: str, chain: InheritanceChain, default: Optional[Any] = None) -> Any:
    """Return the resolved value for ``key`` or ``default``."""
    return chain.resolved.get(key, default)


def get_config_source(key: str, chain: InheritanceChain) -> Optional[str]:
    """Return the scope type of the entry that won resolution for ``key``."""
    entry = chain.provenance(key)
    if entry is None or entry.source is None:
        return None
    return entry.source.type


def _entries_of(entries: Any) -> List[ConfigEntry]:
    if isinstance(entries, InheritanceChain):
        return entries.entries
    return coerce_entries(entries)


def get_source_hierarchy(entries: Any) -> Dict[str, List[str]]:
    """Group entry keys by the scope type that supplied them.

    Args:
        entries: An InheritanceChain or a sequence of entries.

    Returns:
        Mapping of scope type to keys, both in first-seen order. A key that
        a scope sets twice is listed twice; entries without a source are
        left out.
    """
    hierarchy: Dict[str, List[str]] = {}
    for entry in _entries_of(entries):
        if entry.source is None:
            continue
        hierarchy.setdefault(entry.source.type, []).append(entry.key)
    return hierarchy


def find_conflicting_keys(entries: Any) -> List[str]:
    """Keys set by more than one entry, in first-seen order."""
    counts: Dict[str, int] = {}
    for entry in _entries_of(entries):
        counts[entry.key] = counts.get(entry.key, 0) + 1
    return [key for key, count in counts.items() if count > 1]
