"""Unit tests for ExplorerProfile."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from revenue_paths.models.profile import DEFAULT_REVENUE_TARGET, ExplorerProfile


class TestExplorerProfile:
    """Tests for ExplorerProfile model."""

    def test_defaults(self) -> None:
        """Empty mapping yields defaults."""
        profile = ExplorerProfile.from_mapping({})
        assert profile.revenue_target == DEFAULT_REVENUE_TARGET
        assert profile.top_k == 20
        assert profile.backlog_cap == 6
        assert profile.max_open_opportunities == 30
        assert profile.backlog_strategy == "first-found"
        assert profile.source.type == "local-csv"

    def test_from_yaml_loads_nested(self, tmp_path: Path) -> None:
        """from_yaml loads target/search/filters/source sections."""
        yaml_content = """
profile_id: fy26
target:
  revenue_target: 12000000
  fiscal_year: 2026
search:
  top_k: 10
  priority_size: 5
  backlog_cap: 3
  backlog_strategy: best-first
filters:
  min_p_win: 0.2
  priority: portfolio
  stages: [propose, awaiting-award]
source:
  type: google-sheets
  spreadsheet_id: sheet-123
  sheet_range: "Pipeline!A1:P"
  api_key: key
"""
        path = tmp_path / "profile.yaml"
        path.write_text(yaml_content)
        profile = ExplorerProfile.from_yaml(path)
        assert profile.profile_id == "fy26"
        assert profile.revenue_target == 12_000_000
        assert profile.fiscal_year == 2026
        assert profile.top_k == 10
        assert profile.priority_size == 5
        assert profile.backlog_cap == 3
        assert profile.backlog_strategy == "best-first"
        assert profile.filters.min_p_win == 0.2
        assert profile.filters.priority == "portfolio"
        assert profile.filters.stages == ["propose", "awaiting-award"]
        assert profile.source.type == "google-sheets"
        assert profile.source.connector_kwargs() == {
            "spreadsheet_id": "sheet-123",
            "sheet_range": "Pipeline!A1:P",
            "api_key": "key",
        }

    def test_from_yaml_loads_flat(self, tmp_path: Path) -> None:
        """from_yaml supports flat structure."""
        path = tmp_path / "flat.yaml"
        path.write_text("revenue_target: 5000000\ntop_k: 3\ncsv_path: data/pipeline.csv\n")
        profile = ExplorerProfile.from_yaml(path)
        assert profile.revenue_target == 5_000_000
        assert profile.top_k == 3
        assert profile.source.connector_kwargs() == {"path": "data/pipeline.csv"}

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables override file values."""
        monkeypatch.setenv("REVENUE_PATHS_REVENUE_TARGET", "7500000")
        monkeypatch.setenv("REVENUE_PATHS_SHEETS_ID", "env-sheet")
        profile = ExplorerProfile.from_mapping({"revenue_target": 1})
        assert profile.revenue_target == 7_500_000
        assert profile.source.type == "google-sheets"
        assert profile.source.spreadsheet_id == "env-sheet"

    def test_bad_env_target_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unparseable target from the environment falls back to the file."""
        monkeypatch.setenv("REVENUE_PATHS_REVENUE_TARGET", "lots")
        assert ExplorerProfile.from_mapping({"revenue_target": 3}).revenue_target == 3

    def test_rejects_zero_top_k(self) -> None:
        """top_k must be positive."""
        with pytest.raises(ValidationError):
            ExplorerProfile.from_mapping({"top_k": 0})

    def test_rejects_unknown_filter_stage(self) -> None:
        """A misspelled stage in filters fails at load time."""
        with pytest.raises(ValidationError):
            ExplorerProfile.from_mapping({"filters": {"stages": ["proposal-sent"]}})
