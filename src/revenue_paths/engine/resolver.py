"""Outcome resolution: closed deals and user-forced selections."""

from typing import Mapping, Optional

from revenue_paths.models.opportunity import Opportunity, Outcome

Selections = Mapping[str, Outcome]

OUTCOMES: tuple[Outcome, Outcome] = ("win", "loss")


def closed_outcome(opportunity: Opportunity) -> Optional[Outcome]:
    """Outcome fixed by closure, or None while the deal is open."""
    if not opportunity.closed:
        return None
    return "win" if opportunity.stage == "closed-won" else "loss"


def resolved_outcome(opportunity: Opportunity, selections: Selections) -> Optional[Outcome]:
    """
    Closed outcome first, then the user's selection.
    None means both outcomes must be explored.
    """
    closed = closed_outcome(opportunity)
    if closed is not None:
        return closed
    return selections.get(opportunity.id)


def viable_outcomes(opportunity: Opportunity, selections: Selections) -> tuple[Outcome, ...]:
    """Outcomes to branch on, win first."""
    forced = resolved_outcome(opportunity, selections)
    if forced is not None:
        return (forced,)
    return OUTCOMES


def branch_factor(opportunity: Opportunity, outcome: Outcome) -> float:
    """
    Probability multiplier for taking outcome on this opportunity.
    Forced steps use the same p_win rule, so a selection never raises a path's probability.
    """
    return opportunity.p_win if outcome == "win" else 1.0 - opportunity.p_win
