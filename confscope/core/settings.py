"""Engine settings loaded from confscope.yaml files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import structlog
import yaml

from .cache import DEFAULT_MAX_ENTRIES, DEFAULT_TTL_MS
from .errors import SettingsError
from .types import DEFAULT_PRIORITIES

logger = structlog.get_logger(__name__)

SETTINGS_FILENAME = "confscope.yaml"


@dataclass(frozen=True)
class EngineSettings:
    """Tunable bounds and scope priorities for a Resolver.

    Attributes:
        max_entries: Maximum number of memoized chains.
        ttl_ms: Lifetime of a memoized chain in milliseconds.
        priorities: Priority per scope type; higher wins.
    """

    max_entries: int = DEFAULT_MAX_ENTRIES
    ttl_ms: float = DEFAULT_TTL_MS
    priorities: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_PRIORITIES))

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> "EngineSettings":
        """Create settings from a parsed confscope.yaml document.

        Args:
            d: Mapping with optional ``cache`` and ``scopes`` sections.

        Returns:
            EngineSettings, with defaults for anything not given.

        Raises:
            SettingsError: If a section or value has the wrong type.
        """
        if not d:
            return EngineSettings()
        if not isinstance(d, dict):
            raise SettingsError(f"settings must be a mapping, got {type(d).__name__}")

        cache = d.get("cache")
        if cache is None:
            cache = {}
        if not isinstance(cache, dict):
            raise SettingsError("'cache' must be a mapping")
        max_entries = cache.get("max_entries", DEFAULT_MAX_ENTRIES)
        if isinstance(max_entries, bool) or not isinstance(max_entries, int) or max_entries < 1:
            raise SettingsError(f"cache.max_entries must be a positive integer, got {max_entries!r}")
        ttl_ms = cache.get("ttl_ms", DEFAULT_TTL_MS)
        if isinstance(ttl_ms, bool) or not isinstance(ttl_ms, (int, float)) or ttl_ms <= 0:
            raise SettingsError(f"cache.ttl_ms must be a positive number, got {ttl_ms!r}")

        scopes = d.get("scopes")
        if scopes is None:
            scopes = {}
        if not isinstance(scopes, dict):
            raise SettingsError("'scopes' must be a mapping of scope name to priority")
        priorities = dict(DEFAULT_PRIORITIES)
        for name, priority in scopes.items():
            if isinstance(priority, bool) or not isinstance(priority, int):
                raise SettingsError(f"scopes.{name} must be an integer priority, got {priority!r}")
            priorities[str(name)] = priority

        return EngineSettings(max_entries=max_entries, ttl_ms=ttl_ms, priorities=priorities)


def find_settings_file(start: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Return the nearest confscope.yaml in ``start`` or one of its parents."""
    here = Path(start) if start is not None else Path.cwd()
    for directory in (here, *here.parents):
        candidate = directory / SETTINGS_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_settings(path: Optional[Union[str, Path]] = None) -> EngineSettings:
    """Read engine settings from ``path``, or from the nearest confscope.yaml.

    A missing or unreadable file gives the defaults.

    Raises:
        SettingsError: If the file is not valid YAML or holds bad values.
    """
    settings_path = Path(path) if path is not None else find_settings_file()
    if settings_path is None or not settings_path.is_file():
        return EngineSettings()
    try:
        document = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid {SETTINGS_FILENAME} at {settings_path}: {e}") from e
    except OSError as e:
        logger.warning("settings.unreadable", path=str(settings_path), error=str(e))
        return EngineSettings()
    logger.debug("settings.loaded", path=str(settings_path))
    return EngineSettings.from_dict(document)
