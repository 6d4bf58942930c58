"""Data models for opportunities and explorer configuration."""

from revenue_paths.models.opportunity import Opportunity, Outcome, QuarterlyRevenue, Stage
from revenue_paths.models.profile import ExplorerProfile, PathFilters, SourceSettings
from revenue_paths.models.raw import RawOpportunity

__all__ = [
    "ExplorerProfile",
    "Opportunity",
    "Outcome",
    "PathFilters",
    "QuarterlyRevenue",
    "RawOpportunity",
    "SourceSettings",
    "Stage",
]
