"""Pipeline orchestration: load → prepare workspace → count / build trees."""

import logging
from pathlib import Path
from typing import Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from revenue_paths.connectors import ConnectorRegistry, LocalCsvConnector
from revenue_paths.engine import DecisionTree, PathCounts, build_path_tree, build_two_tier_tree, count_paths
from revenue_paths.models.opportunity import Opportunity, Outcome
from revenue_paths.models.profile import ExplorerProfile

logger = logging.getLogger(__name__)


class Workspace(BaseModel):
    """Open deals to explore plus revenue already banked."""

    opportunities: list[Opportunity] = Field(default_factory=list)
    revenue_target: float = 0.0
    backlog_revenue: float = 0.0
    truncated_count: int = 0


def _priority_key(opp: Opportunity) -> tuple[float, float, str]:
    return (-opp.expected_value, -opp.value, opp.name)


def prepare_workspace(
    opportunities: Sequence[Opportunity],
    revenue_target: float,
    *,
    max_open: int = 30,
    fiscal_year: Optional[int] = None,
) -> Workspace:
    """
    Bank closed-won revenue and keep the max_open most valuable open deals.
    Open deals are ranked by expected value, then value, then name.
    """
    backlog_revenue = sum(
        opp.value
        for opp in opportunities
        if opp.closed
        and opp.stage == "closed-won"
        and (fiscal_year is None or opp.start_date.year == fiscal_year)
    )
    open_opps = sorted((o for o in opportunities if not o.closed), key=_priority_key)
    truncated = max(len(open_opps) - max_open, 0)
    if truncated:
        logger.info("Exploring %d open opportunities; %d lower-ranked dropped", max_open, truncated)
    return Workspace(
        opportunities=open_opps[:max_open],
        revenue_target=revenue_target,
        backlog_revenue=backlog_revenue,
        truncated_count=truncated,
    )


def load_opportunities(profile: ExplorerProfile, input_path: Optional[Path] = None) -> list[Opportunity]:
    """Load from an explicit CSV path, else from the profile's configured source."""
    if input_path is not None:
        connector = LocalCsvConnector(input_path)
    else:
        connector = ConnectorRegistry.get(profile.source.type, **profile.source.connector_kwargs())
    opportunities = connector.fetch_all()
    logger.info("Loaded %d opportunities from %s", len(opportunities), connector.source_id)
    return opportunities


def load_workspace(profile: ExplorerProfile, input_path: Optional[Path] = None) -> Workspace:
    """Load and prepare in one step using the profile's limits."""
    return prepare_workspace(
        load_opportunities(profile, input_path),
        profile.revenue_target,
        max_open=profile.max_open_opportunities,
        fiscal_year=profile.fiscal_year,
    )


def run_counts(workspace: Workspace, selections: Mapping[str, Outcome]) -> PathCounts:
    """Exact success counts for the workspace's open deals."""
    return count_paths(
        workspace.opportunities,
        selections,
        workspace.revenue_target,
        workspace.backlog_revenue,
    )


def run_path_tree(
    workspace: Workspace,
    selections: Mapping[str, Outcome],
    profile: ExplorerProfile,
) -> DecisionTree:
    """Top-K most probable winning paths."""
    return build_path_tree(
        workspace.opportunities,
        selections,
        workspace.revenue_target,
        workspace.backlog_revenue,
        top_k=profile.top_k,
    )


def run_two_tier_tree(
    workspace: Workspace,
    selections: Mapping[str, Outcome],
    profile: ExplorerProfile,
) -> DecisionTree:
    """Priority prefix tree with capped backlog combinations."""
    return build_two_tier_tree(
        workspace.opportunities,
        selections,
        workspace.revenue_target,
        workspace.backlog_revenue,
        priority_size=profile.priority_size,
        backlog_cap=profile.backlog_cap,
        backlog_strategy=profile.backlog_strategy,
    )
