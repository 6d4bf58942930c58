"""Candidate filtering for path suggestions."""

from revenue_paths.filtering.engine import FilterEngine, FilterResult

__all__ = ["FilterEngine", "FilterResult"]
