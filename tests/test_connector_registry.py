"""Unit tests for ConnectorRegistry."""

from pathlib import Path

import pytest

from revenue_paths.connectors.registry import ConnectorRegistry


class TestConnectorRegistry:
    """Tests for ConnectorRegistry."""

    def test_get_local_csv(self, pipeline_csv: Path) -> None:
        """Registry returns the CSV connector for 'local-csv'."""
        connector = ConnectorRegistry.get("local-csv", path=pipeline_csv)
        assert connector.source_id == "local-csv"

    def test_get_case_insensitive(self, pipeline_csv: Path) -> None:
        """Registry is case-insensitive."""
        connector = ConnectorRegistry.get("Local-CSV", path=pipeline_csv)
        assert connector.source_id == "local-csv"

    def test_get_google_sheets(self) -> None:
        """Registry returns the Sheets connector for 'google-sheets'."""
        connector = ConnectorRegistry.get(
            "google-sheets", spreadsheet_id="s", sheet_range="A1:P", api_key="k"
        )
        assert connector.source_id == "google-sheets"

    def test_unknown_source_raises(self) -> None:
        """Unknown source raises ValueError."""
        with pytest.raises(ValueError, match="Unknown source: salesforce"):
            ConnectorRegistry.get("salesforce")

    def test_available_sources(self) -> None:
        """available_sources lists both connectors."""
        assert ConnectorRegistry.available_sources() == ["local-csv", "google-sheets"]
