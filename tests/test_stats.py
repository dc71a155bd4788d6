"""Unit tests for inheritance statistics."""

from __future__ import annotations

from confscope.core.classifier import classify
from confscope.core.entries import extract_entries
from confscope.core.stats import calculate_stats
from confscope.core.types import ClassificationResult, ConfigEntry


def entries(*pairs):
    return [ConfigEntry(key=k, value=v) for k, v in pairs]


class TestCalculateStats:
    """Test suite for calculate_stats."""

    def test_empty(self):
        """Test that an empty result gives zeroed stats."""
        stats = calculate_stats(ClassificationResult())
        assert stats.total_count == 0
        assert stats.inherited.count == 0
        assert stats.inherited.percentage == 0.0
        assert stats.quick_stats.most_inherited_mcp is None
        assert stats.quick_stats.most_added_agent is None

    def test_counts_and_percentages(self):
        """Test per-bucket counts and rounding."""
        result = classify(
            entries(("a", 1), ("b", 2), ("c", 3)),
            entries(("a", 1), ("b", 20), ("d", 4)),
        )
        stats = calculate_stats(result)
        assert stats.total_count == 4
        assert stats.inherited.count == 2
        assert stats.inherited.percentage == 50.0
        assert stats.overridden.count == 1
        assert stats.overridden.percentage == 25.0
        assert stats.project_specific.count == 1

    def test_percentages_rounded(self):
        """Test rounding to two decimals."""
        result = classify(entries(("a", 1), ("b", 2)), entries(("c", 3)))
        stats = calculate_stats(result)
        assert stats.inherited.percentage == 66.67
        assert stats.project_specific.percentage == 33.33

    def test_quick_stats(self):
        """Test most inherited MCP server and most added agent."""
        user = entries(
            ("mcpServers.alpha.command", "a"),
            ("mcpServers.beta.command", "b"),
            ("mcpServers.beta.args", ["x"]),
        )
        project = entries(
            ("subAgents.reviewer.model", "opus"),
            ("subAgents.writer.model", "haiku"),
            ("subAgents.writer.tools", ["Read"]),
        )
        stats = calculate_stats(classify(user, project))
        assert stats.quick_stats.most_inherited_mcp == "beta"
        assert stats.quick_stats.most_added_agent == "writer"

    def test_quick_stats_on_extracted_documents(self):
        """Test quick stats over per-server and per-agent entries."""
        user = extract_entries({"mcpServers": {"fs": {"command": "npx"}}})
        project = extract_entries({"agents": {"reviewer": {"model": "opus"}}})
        stats = calculate_stats(classify(user, project))
        assert stats.quick_stats.most_inherited_mcp == "fs"
        assert stats.quick_stats.most_added_agent == "reviewer"

    def test_to_dict(self):
        """Test the serialised form."""
        stats = calculate_stats(classify(entries(("a", 1)), []))
        assert stats.to_dict() == {
            "totalCount": 1,
            "inherited": {"count": 1, "percentage": 100.0},
            "overridden": {"count": 0, "percentage": 0.0},
            "projectSpecific": {"count": 0, "percentage": 0.0},
            "quickStats": {"mostInheritedMcp": None, "mostAddedAgent": None},
        }
