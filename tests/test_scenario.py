"""Unit tests for scenario summaries and selection encoding."""

import pytest

from revenue_paths.models.opportunity import Opportunity, QuarterlyRevenue
from revenue_paths.scenario import effective_status, summarize_scenario
from revenue_paths.selections import format_selections, parse_selections


def _make_opp(opp_id: str, value: float, **kwargs) -> Opportunity:
    return Opportunity(id=opp_id, name=opp_id, value=value, p_win=0.5, **kwargs)


@pytest.fixture
def deals() -> list[Opportunity]:
    return [
        _make_opp(
            "won",
            4_000_000,
            closed=True,
            stage="closed-won",
            quarterly_revenue=QuarterlyRevenue(q1=1_000_000, q2=1_000_000, q3=1_000_000, q4=1_000_000),
        ),
        _make_opp("lost", 9_000_000, closed=True, stage="closed-lost"),
        _make_opp("open", 2_000_000, quarterly_revenue=QuarterlyRevenue(q3=2_000_000)),
    ]


class TestEffectiveStatus:
    """Tests for effective_status."""

    def test_closed_ignores_selection(self, deals: list[Opportunity]) -> None:
        """Closed deals keep their real outcome."""
        assert effective_status(deals[0], "loss") == "won"
        assert effective_status(deals[1], "win") == "lost"

    def test_open_follows_selection(self, deals: list[Opportunity]) -> None:
        """Open deals follow the selection, else stay open."""
        assert effective_status(deals[2], "win") == "won"
        assert effective_status(deals[2], "loss") == "lost"
        assert effective_status(deals[2], None) == "open"


class TestSummarizeScenario:
    """Tests for summarize_scenario."""

    def test_closed_won_only(self, deals: list[Opportunity]) -> None:
        """Without selections only closed-won revenue counts."""
        summary = summarize_scenario(deals, {}, 5_000_000)
        assert summary.total_won == 4_000_000
        assert summary.percent_of_target == 80.0
        assert summary.remaining_target == 1_000_000
        assert summary.quarterly_totals.q1 == 1_000_000

    def test_selected_win_adds_quarterly(self, deals: list[Opportunity]) -> None:
        """A selected win adds value and quarterly revenue."""
        summary = summarize_scenario(deals, {"open": "win"}, 5_000_000)
        assert summary.total_won == 6_000_000
        assert summary.remaining_target == 0
        assert summary.quarterly_totals.q3 == 3_000_000

    def test_percent_capped(self, deals: list[Opportunity]) -> None:
        """percent_of_target is capped at 200."""
        assert summarize_scenario(deals, {}, 1_000_000).percent_of_target == 200.0

    def test_zero_target(self, deals: list[Opportunity]) -> None:
        """A zero target reports 0 percent."""
        assert summarize_scenario(deals, {}, 0).percent_of_target == 0.0


class TestSelectionCodec:
    """Tests for parse_selections / format_selections."""

    def test_parse(self) -> None:
        """Pairs decode; ids may contain colons and dashes."""
        assert parse_selections("Acme-Renewal-1:win,Ops:EU-2:loss") == {
            "Acme-Renewal-1": "win",
            "Ops:EU-2": "loss",
        }

    def test_parse_ignores_malformed(self) -> None:
        """Unknown outcomes and missing ids are skipped."""
        assert parse_selections("a:maybe,:win,b,c:loss") == {"c": "loss"}

    def test_parse_empty(self) -> None:
        """None and empty strings decode to no selections."""
        assert parse_selections(None) == {}
        assert parse_selections("") == {}

    def test_format_round_trip(self) -> None:
        """format_selections produces what parse_selections reads."""
        selections = {"a": "win", "b": "loss"}
        assert format_selections(selections) == "a:win,b:loss"
        assert parse_selections(format_selections(selections)) == selections
