"""Adapters that turn caller data into ConfigEntry lists."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any, Iterable, Iterator, List, Optional, Pattern, Tuple, Union

from .errors import InvalidEntriesError
from .types import AGENT_PREFIX, MCP_PREFIX, UNDEFINED, ConfigEntry, SourceInfo

MCP_ALIASES = ("mcpServers", "mcp_servers")
AGENT_ALIASES = ("subAgents", "sub_agents", "agents")
SECTION_ALIASES = frozenset(MCP_ALIASES + AGENT_ALIASES)


def _coerce_source(raw: Any, name: str, index: int) -> Optional[SourceInfo]:
    if raw is None or isinstance(raw, SourceInfo):
        return raw
    if isinstance(raw, Mapping) and isinstance(raw.get("type"), str):
        priority = raw.get("priority", 0)
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise InvalidEntriesError(
                f"{name}[{index}].source.priority must be an integer, got {type(priority).__name__}"
            )
        return SourceInfo(type=raw["type"], path=str(raw.get("path", "")), priority=priority)
    raise InvalidEntriesError(f"{name}[{index}].source must be a SourceInfo or a mapping with a 'type'")


def coerce_entries(entries: Any, name: str = "entries") -> List[ConfigEntry]:
    """Validate caller input and normalise it to a list of ConfigEntry.

    Accepts ConfigEntry objects or mappings shaped like
    ``{"key": str, "value": ..., "source": {...}}``. A mapping without
    ``"value"`` becomes an entry whose value is UNDEFINED.

    Args:
        entries: Sequence of entries supplied by the caller.
        name: Argument name used in error messages.

    Returns:
        A new list of ConfigEntry objects in the given order.

    Raises:
        InvalidEntriesError: If ``entries`` is not a sequence (strings and
            mappings are rejected) or an element is not an entry.
    """
    if isinstance(entries, (str, bytes, Mapping)) or not isinstance(entries, Sequence):
        raise InvalidEntriesError(
            f"{name} must be a sequence of configuration entries, got {type(entries).__name__}"
        )

    result: List[ConfigEntry] = []
    for index, item in enumerate(entries):
        if isinstance(item, ConfigEntry):
            result.append(item)
            continue
        if isinstance(item, Mapping) and isinstance(item.get("key"), str):
            result.append(
                ConfigEntry(
                    key=item["key"],
                    value=item.get("value", UNDEFINED),
                    source=_coerce_source(item.get("source"), name, index),
                )
            )
            continue
        raise InvalidEntriesError(
            f"{name}[{index}] must be a ConfigEntry or a mapping with a string 'key', "
            f"got {type(item).__name__}"
        )
    return result


def _expand(key: str, value: Any, depth: Optional[int]) -> Iterator[Tuple[str, Any]]:
    # depth None expands every non-empty mapping down to its leaves
    if isinstance(value, Mapping) and value and (depth is None or depth > 0):
        remaining = None if depth is None else depth - 1
        for child, child_value in value.items():
            yield from _expand(f"{key}.{child}", child_value, remaining)
    else:
        yield key, value


def _section(config: Mapping, aliases: Tuple[str, ...]) -> Mapping:
    for alias in aliases:
        value = config.get(alias)
        if value is None:
            continue
        if not isinstance(value, Mapping):
            raise InvalidEntriesError(f"'{alias}' must be a mapping of name to definition")
        return value
    return {}


def extract_entries(
    config: Mapping,
    source: Optional[SourceInfo] = None,
    *,
    include: Optional[Union[str, Pattern[str]]] = None,
    depth: Optional[int] = 0,
) -> List[ConfigEntry]:
    """Turn a parsed configuration document into entries.

    Every top-level setting becomes one entry. MCP servers (``mcpServers``
    or ``mcp_servers``) become ``mcpServers.<name>`` and sub-agents
    (``subAgents``, ``sub_agents`` or ``agents``) become ``subAgents.<name>``,
    so a server or agent is compared as a whole. Settings come first, then
    servers, then agents, each in document order.

    Args:
        config: Parsed document (e.g. the result of ``json.load``).
        source: Source to tag every entry with.
        include: Regular expression an entry key must match to be kept.
        depth: How many further levels of mapping values to split into
            dotted keys; 0 keeps the granularity above, None splits down
            to the leaves.

    Returns:
        Entries in the order described above.

    Raises:
        InvalidEntriesError: If ``config`` or a server/agent section is not
            a mapping, ``depth`` is negative, or ``include`` does not
            compile.
    """
    if not isinstance(config, Mapping):
        raise InvalidEntriesError(
            f"configuration document must be a mapping, got {type(config).__name__}"
        )
    if depth is not None and depth < 0:
        raise InvalidEntriesError(f"depth must not be negative, got {depth}")
    try:
        pattern = re.compile(include) if isinstance(include, str) else include
    except re.error as e:
        raise InvalidEntriesError(f"invalid include pattern {include!r}: {e}") from e

    named: List[Tuple[str, Any]] = [
        (str(key), value) for key, value in config.items() if key not in SECTION_ALIASES
    ]
    for prefix, aliases in ((MCP_PREFIX, MCP_ALIASES), (AGENT_PREFIX, AGENT_ALIASES)):
        named.extend((f"{prefix}{name}", value) for name, value in _section(config, aliases).items())

    entries: List[ConfigEntry] = []
    for key, value in named:
        for flat_key, flat_value in _expand(key, value, depth):
            if pattern is None or pattern.search(flat_key):
                entries.append(ConfigEntry(key=flat_key, value=flat_value, source=source))
    return entries


def order_by_priority(entries: Iterable[ConfigEntry]) -> List[ConfigEntry]:
    """Sort entries by ascending source priority, keeping input order on ties.

    Entries without a source sort before every sourced entry.
    """
    return sorted(
        entries,
        key=lambda e: (e.source is not None, e.source.priority if e.source is not None else 0),
    )
