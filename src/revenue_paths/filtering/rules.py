"""Filter rules: each returns (passed, explanation, rule_id)."""

from revenue_paths.models.opportunity import Opportunity
from revenue_paths.models.profile import PathFilters


def apply_p_win_rule(opp: Opportunity, filters: PathFilters) -> tuple[bool, str, str]:
    """Win probability must be at least min_p_win."""
    if filters.min_p_win <= 0:
        return True, "Win probability filter not set", "p_win"
    if opp.p_win >= filters.min_p_win:
        return True, f"pWin {opp.p_win:.0%} >= {filters.min_p_win:.0%}", "p_win"
    return False, f"Excluded: pWin {opp.p_win:.0%} below {filters.min_p_win:.0%}", "p_win"


def apply_stage_rule(opp: Opportunity, filters: PathFilters) -> tuple[bool, str, str]:
    """Stage must be one of the selected stages, when any are selected."""
    if not filters.stages:
        return True, "Stage filter not set", "stage"
    if opp.stage in filters.stages:
        return True, f"Matches stage: {opp.stage}", "stage"
    return False, f"Excluded: stage {opp.stage} not in {filters.stages}", "stage"


def apply_owner_rule(opp: Opportunity, filters: PathFilters) -> tuple[bool, str, str]:
    """Owner must match exactly, when an owner is selected."""
    if not filters.owner:
        return True, "Owner filter not set", "owner"
    if opp.owner == filters.owner:
        return True, f"Matches owner: {opp.owner}", "owner"
    return False, f"Excluded: owner {opp.owner or '(none)'} is not {filters.owner}", "owner"


def apply_priority_rule(opp: Opportunity, filters: PathFilters) -> tuple[bool, str, str]:
    """
    top: top-priority deals only.
    portfolio: top- or portfolio-priority deals.
    """
    if filters.priority == "any":
        return True, "Priority filter not set", "priority"
    if filters.priority == "top":
        passed = opp.top_priority
    else:
        passed = opp.top_priority or opp.portfolio_priority
    if passed:
        return True, f"Meets {filters.priority} priority", "priority"
    return False, f"Excluded: not a {filters.priority} priority deal", "priority"
