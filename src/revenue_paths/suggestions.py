"""Short lists of deals that together cover the remaining target."""

from typing import Mapping, Sequence

from pydantic import BaseModel

from revenue_paths.filtering import FilterEngine
from revenue_paths.models.opportunity import Opportunity, Outcome
from revenue_paths.models.profile import PathFilters
from revenue_paths.scenario import effective_status

MAX_PATHS = 6

# Combinations overshooting the target by this factor are not worth showing
_OVERSHOOT_FACTOR = 2


class PathSuggestion(BaseModel):
    """A set of open deals whose combined value reaches the remaining target."""

    opportunities: list[Opportunity]
    total: float


def suggest_paths(
    opportunities: Sequence[Opportunity],
    selections: Mapping[str, Outcome],
    remaining_target: float,
    filters: PathFilters | None = None,
    max_paths: int = MAX_PATHS,
) -> list[PathSuggestion]:
    """
    Backtracking over open, filtered deals ordered by start date.
    Returns up to max_paths non-empty subsets in discovery order.
    """
    engine = FilterEngine(filters or PathFilters())
    candidates = sorted(
        (
            opp
            for opp in engine.filter_passed(list(opportunities))
            if effective_status(opp, selections.get(opp.id)) == "open"
        ),
        key=lambda o: o.start_date,
    )
    ceiling = remaining_target * _OVERSHOOT_FACTOR
    results: list[PathSuggestion] = []
    current: list[Opportunity] = []

    def backtrack(start: int, total: float) -> None:
        if len(results) >= max_paths:
            return
        if total >= remaining_target and current:
            results.append(PathSuggestion(opportunities=list(current), total=total))
            return
        for i in range(start, len(candidates)):
            nxt = candidates[i]
            next_total = total + nxt.value
            if next_total > ceiling:
                continue
            current.append(nxt)
            backtrack(i + 1, next_total)
            current.pop()
            if len(results) >= max_paths:
                return

    backtrack(0, 0.0)
    return results
