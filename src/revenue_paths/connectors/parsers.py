"""Parsing utilities for pipeline spreadsheet rows."""

import math
import re
from datetime import date, datetime
from typing import Optional

from revenue_paths.models.opportunity import Opportunity, QuarterlyRevenue, Stage
from revenue_paths.models.raw import RawOpportunity

from .constants import (
    ACCOUNT,
    CLOSED,
    NAME,
    OWNER,
    P_WIN,
    PERIOD_MONTHS,
    PORTFOLIO_PRIORITY,
    Q1,
    Q2,
    Q3,
    Q4,
    STAGE,
    START_DATE,
    TOP_PRIORITY,
    VALUE,
)

_TRUE_VALUES = ("true", "1", "yes", "y")

# Free-text stage label -> canonical stage
_STAGE_ALIASES: dict[str, Stage] = {
    "identify": "identify",
    "lead": "identify",
    "qualify": "qualify",
    "qualified": "qualify",
    "capture": "capture",
    "propose": "propose",
    "proposal": "propose",
    "awaiting award": "awaiting-award",
    "award": "awaiting-award",
    "closed won": "closed-won",
    "won": "closed-won",
    "closed lost": "closed-lost",
    "lost": "closed-lost",
    "closed no-bid": "closed-no-bid",
    "closed no bid": "closed-no-bid",
    "no-bid": "closed-no-bid",
    "no bid": "closed-no-bid",
    "closed canceled": "closed-canceled",
    "closed cancelled": "closed-canceled",
    "canceled": "closed-canceled",
    "cancelled": "closed-canceled",
}

DATE_FORMATS = ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y")
_CURRENCY_CHARS = re.compile(r"[$,]")


def to_boolean(value: Optional[str]) -> bool:
    """Spreadsheet truthiness: true/1/yes/y, case-insensitive."""
    if not value:
        return False
    return value.strip().lower() in _TRUE_VALUES


def to_number(value: Optional[str]) -> float:
    """Parse a currency-ish cell ("$1,200,000"); 0 when unparseable."""
    if value is None:
        return 0.0
    cleaned = _CURRENCY_CHARS.sub("", value).strip()
    if not cleaned:
        return 0.0
    try:
        parsed = float(cleaned)
    except ValueError:
        return 0.0
    if not math.isfinite(parsed):
        return 0.0
    return parsed


def normalize_stage(value: Optional[str]) -> Stage:
    """Map a stage label to a canonical stage; unknown labels become identify."""
    normalized = (value or "").strip().lower()
    return _STAGE_ALIASES.get(normalized, "identify")


def normalize_p_win(value: Optional[str]) -> float:
    """Accept 0-1 fractions or 0-100 percentages; clamp into [0, 1]."""
    raw = to_number(value)
    if raw > 1:
        return min(raw / 100, 1.0)
    return min(max(raw, 0.0), 1.0)


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse a date cell; None when empty or in an unknown format."""
    if not value or not value.strip():
        return None
    value = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value[:19], fmt).date()
        except (ValueError, TypeError):
            continue
    return None


def _text(raw: RawOpportunity, index: int) -> Optional[str]:
    cell = raw.cell(index)
    if cell is None:
        return None
    return cell.strip() or None


def row_to_opportunity(raw: RawOpportunity) -> Opportunity:
    """
    Map one spreadsheet row to an Opportunity.
    Negative values are floored at 0 so the row passes model validation.
    """
    n = raw.row_number
    account = _text(raw, ACCOUNT) or f"Row {n}"
    name = _text(raw, NAME) or f"Opportunity {n}"
    top_priority = to_boolean(raw.cell(TOP_PRIORITY))
    period = _text(raw, PERIOD_MONTHS)

    return Opportunity(
        id=f"{account}-{name}-{n}",
        account=account,
        name=name,
        value=max(to_number(raw.cell(VALUE)), 0.0),
        p_win=normalize_p_win(raw.cell(P_WIN)),
        start_date=parse_date(raw.cell(START_DATE)) or date.today(),
        closed=to_boolean(raw.cell(CLOSED)),
        stage=normalize_stage(raw.cell(STAGE)),
        top_priority=top_priority,
        portfolio_priority=to_boolean(raw.cell(PORTFOLIO_PRIORITY)) or top_priority,
        owner=_text(raw, OWNER),
        period_months=to_number(period) if period else None,
        quarterly_revenue=QuarterlyRevenue(
            q1=to_number(raw.cell(Q1)),
            q2=to_number(raw.cell(Q2)),
            q3=to_number(raw.cell(Q3)),
            q4=to_number(raw.cell(Q4)),
        ),
    )


def drop_blank_rows(rows: list[list[str]]) -> list[list[str]]:
    """Remove rows whose cells are all empty or whitespace."""
    return [row for row in rows if any(cell.strip() for cell in row)]
