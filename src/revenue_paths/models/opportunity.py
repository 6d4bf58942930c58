"""Opportunity model shared by ingestion and the path engine."""

from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Outcome = Literal["win", "loss"]

Stage = Literal[
    "identify",
    "qualify",
    "capture",
    "propose",
    "awaiting-award",
    "closed-won",
    "closed-lost",
    "closed-no-bid",
    "closed-canceled",
]


class QuarterlyRevenue(BaseModel):
    """Revenue recognized per fiscal quarter if the deal is won."""

    model_config = ConfigDict(frozen=True)

    q1: float = 0.0
    q2: float = 0.0
    q3: float = 0.0
    q4: float = 0.0


class Opportunity(BaseModel):
    """
    A pending (or closed) deal.
    Out-of-range value or p_win is rejected here; the engine trusts these fields.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Deterministic ID: {account}-{name}-{row}")
    account: str = ""
    name: str = ""

    value: float = Field(..., ge=0, description="Total contract value")
    p_win: float = Field(..., ge=0, le=1, description="Probability of winning, 0-1")
    start_date: date = Field(default_factory=date.today)

    closed: bool = False
    stage: Stage = "identify"

    top_priority: bool = False
    portfolio_priority: bool = False
    owner: Optional[str] = None
    period_months: Optional[float] = None
    quarterly_revenue: QuarterlyRevenue = Field(default_factory=QuarterlyRevenue)

    @property
    def expected_value(self) -> float:
        """Probability-weighted value used for ranking."""
        return self.value * self.p_win
