"""Scenario path engine: counting, best-first paths and two-tier trees."""

from revenue_paths.engine.counting import PathCounter, SuffixBounds, count_paths
from revenue_paths.engine.paths import build_path_tree
from revenue_paths.engine.resolver import closed_outcome, resolved_outcome
from revenue_paths.engine.tiers import Combination, build_two_tier_tree, combination_search
from revenue_paths.engine.types import DecisionTree, PathCounts, TreeNode

__all__ = [
    "Combination",
    "DecisionTree",
    "PathCounter",
    "PathCounts",
    "SuffixBounds",
    "TreeNode",
    "build_path_tree",
    "build_two_tier_tree",
    "closed_outcome",
    "combination_search",
    "count_paths",
    "resolved_outcome",
]
