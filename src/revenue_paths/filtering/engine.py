"""Filter engine with pluggable rules and explanation trail."""

from typing import Callable, Optional

from pydantic import BaseModel, Field

from revenue_paths.models.opportunity import Opportunity
from revenue_paths.models.profile import PathFilters

from .rules import apply_owner_rule, apply_p_win_rule, apply_priority_rule, apply_stage_rule


class FilterResult(BaseModel):
    """Result of filtering an opportunity against path filters."""

    passed: bool = Field(..., description="All rules passed")
    explanations: list[str] = Field(default_factory=list)
    opportunity: Opportunity = Field(..., description="The opportunity that was filtered")
    excluded_by_rule: Optional[str] = Field(
        default=None,
        description="First rule that excluded (p_win|stage|owner|priority)",
    )


RuleFn = Callable[[Opportunity, PathFilters], tuple[bool, str, str]]


class FilterEngine:
    """
    Applies path filters to opportunities.
    Every rule runs so the explanation trail is complete.
    """

    def __init__(self, filters: PathFilters):
        self.filters = filters
        self._rules: list[RuleFn] = [
            apply_p_win_rule,
            apply_stage_rule,
            apply_owner_rule,
            apply_priority_rule,
        ]

    def filter(self, opp: Opportunity) -> FilterResult:
        """Apply all rules and return FilterResult with explanation trail."""
        explanations: list[str] = []
        all_passed = True
        excluded_by: Optional[str] = None

        for rule_fn in self._rules:
            passed, explanation, rule_id = rule_fn(opp, self.filters)
            explanations.append(explanation)
            if not passed:
                all_passed = False
                if excluded_by is None:
                    excluded_by = rule_id

        return FilterResult(
            passed=all_passed,
            explanations=explanations,
            opportunity=opp,
            excluded_by_rule=excluded_by,
        )

    def filter_many(self, opportunities: list[Opportunity]) -> list[FilterResult]:
        """Filter multiple opportunities; returns all with full results."""
        return [self.filter(opp) for opp in opportunities]

    def filter_passed(self, opportunities: list[Opportunity]) -> list[Opportunity]:
        """Return only the opportunities that passed every rule, in input order."""
        return [r.opportunity for r in self.filter_many(opportunities) if r.passed]
