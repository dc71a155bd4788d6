"""Type definitions for the confscope inheritance engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


class _Undefined:
    """Marker for a value that is absent, as opposed to an explicit null."""

    _instance: Optional["_Undefined"] = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Undefined":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "_Undefined":
        return self

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()

# JSON-compatible value, plus UNDEFINED for a key present without a value
JSONValue = Any

SCOPE_USER = "user"
SCOPE_PROJECT = "project"
SCOPE_LOCAL = "local"

DEFAULT_PRIORITIES: Dict[str, int] = {
    SCOPE_USER: 1,
    SCOPE_PROJECT: 2,
    SCOPE_LOCAL: 3,
}

INHERITED = "inherited"
OVERRIDE = "override"
PROJECT_SPECIFIC = "project-specific"

# key prefixes for per-server and per-agent entries
MCP_PREFIX = "mcpServers."
AGENT_PREFIX = "subAgents."


@dataclass(frozen=True)
class SourceInfo:
    """Origin of a configuration entry.

    Attributes:
        type: Scope the entry came from ('user', 'project' or 'local').
        path: Path of the file the entry was parsed from.
        priority: Higher priority wins when scopes define the same key.
    """

    type: str
    path: str = ""
    priority: int = 0

    @classmethod
    def for_scope(cls, scope: str, path: str = "", priorities: Optional[Dict[str, int]] = None) -> "SourceInfo":
        """Build a SourceInfo using the priority assigned to ``scope``."""
        table = DEFAULT_PRIORITIES if priorities is None else priorities
        return cls(type=scope, path=path, priority=table.get(scope, 0))

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "path": self.path, "priority": self.priority}


@dataclass(frozen=True)
class ConfigEntry:
    """A single flattened configuration item.

    Attributes:
        key: Dot-delimited path into the original nested configuration.
        value: JSON-compatible value, None for null or UNDEFINED when absent.
        source: Optional origin of the entry.
    """

    key: str
    value: JSONValue = UNDEFINED
    source: Optional[SourceInfo] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"key": self.key}
        if self.value is not UNDEFINED:
            data["value"] = self.value
        if self.source is not None:
            data["source"] = self.source.to_dict()
        return data


@dataclass(frozen=True)
class InheritedEntry:
    """Value unchanged from the user scope, or present only there."""

    key: str
    value: JSONValue

    @property
    def classification(self) -> str:
        return INHERITED

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "value": _jsonable(self.value), "classification": INHERITED}


@dataclass(frozen=True)
class OverriddenEntry:
    """Project value that supersedes a different user value."""

    key: str
    value: JSONValue
    original_value: JSONValue

    @property
    def classification(self) -> str:
        return OVERRIDE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "value": _jsonable(self.value),
            "originalValue": _jsonable(self.original_value),
            "classification": OVERRIDE,
        }


@dataclass(frozen=True)
class ProjectSpecificEntry:
    """Key that exists only in the project scope."""

    key: str
    value: JSONValue

    @property
    def classification(self) -> str:
        return PROJECT_SPECIFIC

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "value": _jsonable(self.value), "classification": PROJECT_SPECIFIC}


ClassifiedEntry = Union[InheritedEntry, OverriddenEntry, ProjectSpecificEntry]


@dataclass
class ClassificationResult:
    """Outcome of classifying user entries against project entries.

    Every key present in either input appears in exactly one of the lists.
    """

    inherited: List[InheritedEntry] = field(default_factory=list)
    overridden: List[OverriddenEntry] = field(default_factory=list)
    project_specific: List[ProjectSpecificEntry] = field(default_factory=list)

    def all(self) -> List[ClassifiedEntry]:
        """Return every classified entry, bucket by bucket."""
        return [*self.inherited, *self.overridden, *self.project_specific]

    def by_key(self) -> Dict[str, ClassifiedEntry]:
        """Index classified entries by configuration key."""
        return {entry.key: entry for entry in self.all()}

    def __len__(self) -> int:
        return len(self.inherited) + len(self.overridden) + len(self.project_specific)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "inherited": [e.to_dict() for e in self.inherited],
            "overridden": [e.to_dict() for e in self.overridden],
            "projectSpecific": [e.to_dict() for e in self.project_specific],
        }


@dataclass
class InheritanceChain:
    """Ordered, source-tagged entries plus the folded key -> value view.

    Attributes:
        entries: Entries in ascending priority order, as given by the caller.
        resolved: Final value per key; later entries win.
    """

    entries: List[ConfigEntry] = field(default_factory=list)
    resolved: Dict[str, JSONValue] = field(default_factory=dict)

    def provenance(self, key: str) -> Optional[ConfigEntry]:
        """Return the entry whose value won resolution for ``key``."""
        for entry in reversed(self.entries):
            if entry.key == key:
                return entry
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "resolved": {k: _jsonable(v) for k, v in self.resolved.items()},
        }


@dataclass(frozen=True)
class CacheRecord:
    """A memoized chain and the time (ms) it was stored."""

    key: str
    value: InheritanceChain
    timestamp: float


def _jsonable(value: JSONValue) -> JSONValue:
    # UNDEFINED has no JSON form; render it as null for display
    return None if value is UNDEFINED else value
