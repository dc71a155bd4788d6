"""Exceptions raised by confscope."""

from __future__ import annotations


class ConfscopeError(Exception):
    """Base exception for confscope."""

    pass


class InvalidEntriesError(ConfscopeError, TypeError):
    """Raised when entry input is not a sequence of configuration entries."""

    pass


class CacheConfigError(ConfscopeError, ValueError):
    """Raised when a chain cache is given invalid bounds."""

    pass


class SettingsError(ConfscopeError, ValueError):
    """Raised when the engine settings file is malformed."""

    pass
