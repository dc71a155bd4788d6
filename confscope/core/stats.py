"""Summary statistics over a classification result."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from .types import AGENT_PREFIX, MCP_PREFIX, ClassificationResult, ClassifiedEntry


@dataclass(frozen=True)
class BucketStats:
    count: int = 0
    percentage: float = 0.0


@dataclass(frozen=True)
class QuickStats:
    """Highlights for display.

    Attributes:
        most_inherited_mcp: MCP server with the most inherited keys.
        most_added_agent: Agent with the most project-specific keys.
    """

    most_inherited_mcp: Optional[str] = None
    most_added_agent: Optional[str] = None


@dataclass(frozen=True)
class InheritanceStats:
    total_count: int = 0
    inherited: BucketStats = field(default_factory=BucketStats)
    overridden: BucketStats = field(default_factory=BucketStats)
    project_specific: BucketStats = field(default_factory=BucketStats)
    quick_stats: QuickStats = field(default_factory=QuickStats)

    def to_dict(self) -> Dict[str, object]:
        return {
            "totalCount": self.total_count,
            "inherited": vars(self.inherited),
            "overridden": vars(self.overridden),
            "projectSpecific": vars(self.project_specific),
            "quickStats": {
                "mostInheritedMcp": self.quick_stats.most_inherited_mcp,
                "mostAddedAgent": self.quick_stats.most_added_agent,
            },
        }


def _bucket(count: int, total: int) -> BucketStats:
    if total == 0:
        return BucketStats()
    return BucketStats(count=count, percentage=round(count / total * 100, 2))


def _most_common_name(entries: Iterable[ClassifiedEntry], prefix: str) -> Optional[str]:
    counts: Dict[str, int] = {}
    for entry in entries:
        if not entry.key.startswith(prefix):
            continue
        name = entry.key[len(prefix):].split(".", 1)[0]
        if name:
            counts[name] = counts.get(name, 0) + 1
    best: Optional[str] = None
    best_count = 0
    # dicts keep first-seen order, so ties go to the earliest name
    for name, count in counts.items():
        if count > best_count:
            best, best_count = name, count
    return best


def calculate_stats(result: ClassificationResult) -> InheritanceStats:
    """Count and summarise classified entries.

    Args:
        result: Output of ``classify``.

    Returns:
        InheritanceStats with counts, percentages rounded to two decimals
        and quick stats. An empty result gives all-zero stats.
    """
    total = len(result)
    return InheritanceStats(
        total_count=total,
        inherited=_bucket(len(result.inherited), total),
        overridden=_bucket(len(result.overridden), total),
        project_specific=_bucket(len(result.project_specific), total),
        quick_stats=QuickStats(
            most_inherited_mcp=_most_common_name(result.inherited, MCP_PREFIX),
            most_added_agent=_most_common_name(result.project_specific, AGENT_PREFIX),
        ),
    )
