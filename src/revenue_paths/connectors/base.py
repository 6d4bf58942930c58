"""Abstract base class for opportunity sources."""

from abc import ABC, abstractmethod

from revenue_paths.models.opportunity import Opportunity
from revenue_paths.models.raw import RawOpportunity

from .parsers import row_to_opportunity


class BaseConnector(ABC):
    """
    Standard interface for pipeline sources.
    Connectors fetch raw rows; mapping to Opportunity is shared.
    """

    source_id: str = ""

    @abstractmethod
    def search(self) -> list[RawOpportunity]:
        """
        Fetch all data rows (header excluded) in source order.
        """
        pass

    def normalize(self, raw: RawOpportunity) -> Opportunity:
        """
        Convert raw row to Opportunity.
        """
        return row_to_opportunity(raw)

    def fetch_all(self) -> list[Opportunity]:
        """
        Fetch and normalize every row, ordered by start date.
        """
        opportunities = [self.normalize(r) for r in self.search()]
        return sorted(opportunities, key=lambda o: o.start_date)

    def get(self, opportunity_id: str) -> Opportunity | None:
        """Look up one opportunity by id."""
        for opp in self.fetch_all():
            if opp.id == opportunity_id:
                return opp
        return None
