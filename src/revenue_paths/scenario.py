"""Scenario totals for the current set of selections."""

from typing import Literal, Mapping, Optional, Sequence

from pydantic import BaseModel

from revenue_paths.engine.resolver import closed_outcome
from revenue_paths.models.opportunity import Opportunity, Outcome, QuarterlyRevenue

EffectiveStatus = Literal["won", "lost", "open"]

# percent_of_target is capped so a blowout scenario stays on the scoreboard
_MAX_PERCENT_OF_TARGET = 200.0


class ScenarioSummary(BaseModel):
    """Revenue won under a scenario, against the target."""

    total_won: float
    percent_of_target: float
    remaining_target: float
    quarterly_totals: QuarterlyRevenue


def effective_status(opp: Opportunity, selection: Optional[Outcome]) -> EffectiveStatus:
    """Closed deals keep their outcome; otherwise the selection, else open."""
    outcome = closed_outcome(opp) or selection
    if outcome == "win":
        return "won"
    if outcome == "loss":
        return "lost"
    return "open"


def summarize_scenario(
    opportunities: Sequence[Opportunity],
    selections: Mapping[str, Outcome],
    revenue_target: float,
) -> ScenarioSummary:
    """Sum value and quarterly revenue of every deal won in this scenario."""
    total_won = 0.0
    q1 = q2 = q3 = q4 = 0.0
    for opp in opportunities:
        if effective_status(opp, selections.get(opp.id)) != "won":
            continue
        total_won += opp.value
        q1 += opp.quarterly_revenue.q1
        q2 += opp.quarterly_revenue.q2
        q3 += opp.quarterly_revenue.q3
        q4 += opp.quarterly_revenue.q4

    remaining = max(revenue_target - total_won, 0.0)
    percent = min(total_won / revenue_target * 100, _MAX_PERCENT_OF_TARGET) if revenue_target > 0 else 0.0
    return ScenarioSummary(
        total_won=total_won,
        percent_of_target=percent,
        remaining_target=remaining,
        quarterly_totals=QuarterlyRevenue(q1=q1, q2=q2, q3=q3, q4=q4),
    )
