"""Classification of project entries against user entries."""

from __future__ import annotations

from typing import Any, Dict, Set

import structlog

from .entries import coerce_entries
from .equality import deep_equal
from .types import (
    ClassificationResult,
    InheritedEntry,
    JSONValue,
    OverriddenEntry,
    ProjectSpecificEntry,
)

logger = structlog.get_logger(__name__)


def classify(user_entries: Any, project_entries: Any) -> ClassificationResult:
    """Classify every key as inherited, overridden or project-specific.

    Project entries are scanned first, so keys shared by both scopes come
    before user-only keys in ``inherited``. A user-only key counts as
    inherited: the project leaves its value unchanged.

    Runs in O(n + m) using a key index over the user entries.

    Args:
        user_entries: Entries from the user-wide configuration.
        project_entries: Entries from the project-local configuration.

    Returns:
        ClassificationResult partitioning the union of both key sets.

    Raises:
        InvalidEntriesError: If either argument is not a sequence of entries.
    """
    user = coerce_entries(user_entries, "user_entries")
    project = coerce_entries(project_entries, "project_entries")

    user_index: Dict[str, JSONValue] = {}
    for entry in user:
        user_index[entry.key] = entry.value

    result = ClassificationResult()
    seen: Set[str] = set()

    for entry in project:
        seen.add(entry.key)
        if entry.key not in user_index:
            result.project_specific.append(ProjectSpecificEntry(entry.key, entry.value))
            continue
        original = user_index[entry.key]
        if deep_equal(entry.value, original):
            result.inherited.append(InheritedEntry(entry.key, entry.value))
        else:
            result.overridden.append(OverriddenEntry(entry.key, entry.value, original))

    for entry in user:
        if entry.key not in seen:
            seen.add(entry.key)
            result.inherited.append(InheritedEntry(entry.key, entry.value))

    logger.debug(
        "classify.done",
        inherited=len(result.inherited),
        overridden=len(result.overridden),
        project_specific=len(result.project_specific),
    )
    return result
