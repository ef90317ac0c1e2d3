"""Utility functions for notelint package."""

from .format import (
    format_search_results,
    format_hierarchy_path,
    format_detailed_hierarchy,
    format_lint_report,
    format_toc_entries,
    format_stats,
    interactive_result_viewer,
)

__all__ = [
    "format_search_results",
    "format_hierarchy_path",
    "format_detailed_hierarchy",
    "format_lint_report",
    "format_toc_entries",
    "format_stats",
    "interactive_result_viewer",
]
