"""Pytest fixtures for revenue-paths tests."""

import csv
from io import StringIO
from pathlib import Path

import pytest

PIPELINE_HEADER = [
    "Account",
    "Opportunity",
    "TCV",
    "pWin",
    "Start Date",
    "Top Priority",
    "Portfolio Priority",
    "FY26 Factored",
    "Q1",
    "Q2",
    "Q3",
    "Q4",
    "Owner",
    "BAP Stage",
    "Closed",
    "Period Months",
]


def _build_csv(rows: list[list[str]]) -> str:
    """Build CSV string from header + rows."""
    out = StringIO()
    writer = csv.writer(out)
    writer.writerow(PIPELINE_HEADER)
    writer.writerows(rows)
    return out.getvalue()


@pytest.fixture
def sample_pipeline_rows() -> list[list[str]]:
    """Pipeline export rows: one closed-won deal and three open ones."""
    return [
        ["Acme", "Renewal", "$4,000,000", "100", "2026-01-15", "yes", "no", "", "1000000", "1000000", "1000000", "1000000", "Dana", "Closed Won", "TRUE", "12"],
        ["Globex", "Pilot", "$1,000,000", "50", "2026-03-01", "no", "yes", "", "0", "500000", "500000", "0", "Lee", "Proposal", "FALSE", "6"],
        ["Initech", "Expansion", "$2,500,000", "0.3", "2026-02-01", "no", "no", "", "", "", "", "", "Lee", "qualify", "no", ""],
        ["Umbrella", "Lab", "$800,000", "80", "2026-05-10", "y", "", "", "", "", "", "", "Dana", "Awaiting Award", "0", ""],
        ["", "", "", "", "", "", "", "", "", "", "", "", "", "", "", ""],
    ]


@pytest.fixture
def sample_pipeline_csv_content(sample_pipeline_rows: list[list[str]]) -> str:
    """Full CSV content with header and data rows."""
    return _build_csv(sample_pipeline_rows)


@pytest.fixture
def pipeline_csv(tmp_path: Path, sample_pipeline_csv_content: str) -> Path:
    """Sample pipeline CSV written to disk."""
    path = tmp_path / "pipeline.csv"
    path.write_text(sample_pipeline_csv_content, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep REVENUE_PATHS_* from the developer's shell out of tests."""
    for name in (
        "REVENUE_PATHS_REVENUE_TARGET",
        "REVENUE_PATHS_CSV_PATH",
        "REVENUE_PATHS_SHEETS_ID",
        "REVENUE_PATHS_SHEETS_RANGE",
        "REVENUE_PATHS_GOOGLE_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
