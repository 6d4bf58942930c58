"""Unit tests for spreadsheet row parsing."""

from datetime import date

import pytest

from revenue_paths.connectors.parsers import (
    drop_blank_rows,
    normalize_p_win,
    normalize_stage,
    parse_date,
    row_to_opportunity,
    to_boolean,
    to_number,
)
from revenue_paths.models.raw import RawOpportunity


class TestScalarParsers:
    """Tests for cell-level helpers."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", " Y "])
    def test_truthy(self, value: str) -> None:
        """Spreadsheet truthy values."""
        assert to_boolean(value) is True

    @pytest.mark.parametrize("value", [None, "", "no", "0", "false", "x"])
    def test_falsy(self, value) -> None:
        """Anything else is false."""
        assert to_boolean(value) is False

    def test_to_number_strips_currency(self) -> None:
        """$ and thousands separators are ignored."""
        assert to_number("$1,250,000") == 1_250_000
        assert to_number("  42.5 ") == 42.5

    @pytest.mark.parametrize("value", [None, "", "n/a", "80%", "nan", "inf"])
    def test_to_number_unparseable(self, value) -> None:
        """Unparseable or non-finite cells become 0."""
        assert to_number(value) == 0.0

    def test_normalize_p_win(self) -> None:
        """Percentages are scaled, fractions kept, out-of-range clamped."""
        assert normalize_p_win("0.35") == 0.35
        assert normalize_p_win("35") == 0.35
        assert normalize_p_win("250") == 1.0
        assert normalize_p_win("-3") == 0.0
        assert normalize_p_win(None) == 0.0

    @pytest.mark.parametrize(
        ("label", "stage"),
        [
            ("Lead", "identify"),
            ("Qualified", "qualify"),
            ("Proposal", "propose"),
            ("Awaiting Award", "awaiting-award"),
            ("Closed Won", "closed-won"),
            ("lost", "closed-lost"),
            ("No Bid", "closed-no-bid"),
            ("Cancelled", "closed-canceled"),
            ("something else", "identify"),
            (None, "identify"),
        ],
    )
    def test_normalize_stage(self, label, stage: str) -> None:
        """Stage aliases map to canonical stages."""
        assert normalize_stage(label) == stage

    def test_parse_date_formats(self) -> None:
        """ISO, slash and US formats parse; junk does not."""
        assert parse_date("2026-03-09T14:00:00") == date(2026, 3, 9)
        assert parse_date("2026-03-09") == date(2026, 3, 9)
        assert parse_date("2026/03/09") == date(2026, 3, 9)
        assert parse_date("03/09/2026") == date(2026, 3, 9)
        assert parse_date("soon") is None
        assert parse_date("  ") is None

    def test_drop_blank_rows(self) -> None:
        """Rows with only whitespace are removed."""
        assert drop_blank_rows([["a"], ["", " "], []]) == [["a"]]


class TestRowToOpportunity:
    """Tests for row_to_opportunity."""

    def test_maps_full_row(self, sample_pipeline_rows: list[list[str]]) -> None:
        """All columns map onto the model."""
        opp = row_to_opportunity(RawOpportunity(cells=sample_pipeline_rows[1], row_number=2))
        assert opp.id == "Globex-Pilot-2"
        assert opp.account == "Globex"
        assert opp.value == 1_000_000
        assert opp.p_win == 0.5
        assert opp.start_date == date(2026, 3, 1)
        assert opp.stage == "propose"
        assert opp.closed is False
        assert opp.top_priority is False
        assert opp.portfolio_priority is True
        assert opp.owner == "Lee"
        assert opp.period_months == 6
        assert opp.quarterly_revenue.q2 == 500_000

    def test_top_priority_implies_portfolio(self, sample_pipeline_rows: list[list[str]]) -> None:
        """A top-priority deal is also a portfolio-priority deal."""
        opp = row_to_opportunity(RawOpportunity(cells=sample_pipeline_rows[3], row_number=4))
        assert opp.top_priority is True
        assert opp.portfolio_priority is True
        assert opp.p_win == 0.8

    def test_closed_won_row(self, sample_pipeline_rows: list[list[str]]) -> None:
        """Closed flag and stage come through for won deals."""
        opp = row_to_opportunity(RawOpportunity(cells=sample_pipeline_rows[0], row_number=1))
        assert opp.closed is True
        assert opp.stage == "closed-won"
        assert opp.p_win == 1.0

    def test_short_row_defaults(self) -> None:
        """Missing cells fall back to placeholders and zeros."""
        opp = row_to_opportunity(RawOpportunity(cells=[], row_number=7))
        assert opp.id == "Row 7-Opportunity 7-7"
        assert opp.value == 0
        assert opp.p_win == 0
        assert opp.owner is None
        assert opp.start_date == date.today()

    def test_negative_value_floored(self) -> None:
        """Negative values in the sheet are floored at zero."""
        opp = row_to_opportunity(RawOpportunity(cells=["A", "B", "-500"], row_number=1))
        assert opp.value == 0
