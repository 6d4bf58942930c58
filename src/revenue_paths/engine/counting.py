"""
Exact counting of win/loss assignments that reach a revenue target.

Counts are Python ints, so 2**n stays exact for any n; there is no cap on
the number of opportunities beyond recursion depth.
"""

import math
from dataclasses import dataclass
from typing import Sequence

from revenue_paths.models.opportunity import Opportunity

from .resolver import Selections, resolved_outcome, viable_outcomes
from .types import PathCounts

# max_revenue is summed back to front while path revenue accumulates front to
# back; with fractional values the two can differ in the last bits.
_BOUND_REL_TOL = 1e-9


@dataclass(frozen=True)
class SuffixBounds:
    """
    Per-index optimistic bounds over opportunities[i:].
    max_revenue[i]: best revenue still obtainable (forced losses add nothing).
    combinations[i]: number of assignments (1 per forced, 2 per free).
    Both lists have len(opportunities) + 1 entries.
    """

    max_revenue: list[float]
    combinations: list[int]

    @classmethod
    def compute(cls, opportunities: Sequence[Opportunity], selections: Selections) -> "SuffixBounds":
        n = len(opportunities)
        max_revenue = [0.0] * (n + 1)
        combinations = [1] * (n + 1)
        for i in range(n - 1, -1, -1):
            opp = opportunities[i]
            forced = resolved_outcome(opp, selections)
            max_revenue[i] = max_revenue[i + 1] + (0.0 if forced == "loss" else opp.value)
            combinations[i] = combinations[i + 1] * (1 if forced is not None else 2)
        return cls(max_revenue=max_revenue, combinations=combinations)

    def infeasible(self, index: int, revenue: float, target: float) -> bool:
        """
        True when even winning every remaining deal falls short.
        A bound within float tolerance of target is not pruned; the forward
        walk decides those.
        """
        best = revenue + self.max_revenue[index]
        return best < target and not math.isclose(best, target, rel_tol=_BOUND_REL_TOL)


class PathCounter:
    """
    Memoized counter over one ordered opportunity sequence.
    The memo lives as long as the instance; build one per query set.
    """

    def __init__(
        self,
        opportunities: Sequence[Opportunity],
        selections: Selections,
        target: float,
    ):
        self.opportunities = list(opportunities)
        self.selections = selections
        self.target = target
        self.bounds = SuffixBounds.compute(self.opportunities, selections)
        self._memo: dict[tuple[int, float], tuple[int, int]] = {}

    def count_from(self, index: int, revenue: float) -> tuple[int, int]:
        """(success, failure) over all assignments of opportunities[index:]."""
        if revenue >= self.target:
            return self.bounds.combinations[index], 0
        if self.bounds.infeasible(index, revenue, self.target):
            return 0, self.bounds.combinations[index]
        if index >= len(self.opportunities):
            return 0, 1

        key = (index, revenue)
        cached = self._memo.get(key)
        if cached is not None:
            return cached

        opp = self.opportunities[index]
        success = failure = 0
        for outcome in viable_outcomes(opp, self.selections):
            next_revenue = revenue + opp.value if outcome == "win" else revenue
            s, f = self.count_from(index + 1, next_revenue)
            success += s
            failure += f

        self._memo[key] = (success, failure)
        return success, failure

    def counts(self, starting_revenue: float = 0.0, index: int = 0) -> PathCounts:
        success, failure = self.count_from(index, starting_revenue)
        return PathCounts(success=success, failure=failure)


def count_paths(
    opportunities: Sequence[Opportunity],
    selections: Selections,
    target: float,
    starting_revenue: float = 0.0,
) -> PathCounts:
    """
    Count assignments whose revenue reaches target.
    Pruning only skips subtrees whose outcome is already determined,
    so results equal brute-force enumeration.
    """
    return PathCounter(opportunities, selections, target).counts(starting_revenue)
