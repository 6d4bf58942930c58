"""Explorer profile: revenue target, search limits, filters and data source."""

import os
from pathlib import Path
from typing import Literal, Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for profile loading. Run: poetry install"
    ) from e
from pydantic import BaseModel, Field

from revenue_paths.models.opportunity import Stage

DEFAULT_REVENUE_TARGET = 10_000_000.0

# Environment variable -> flat profile key
_ENV_OVERRIDES: list[tuple[str, str]] = [
    ("REVENUE_PATHS_REVENUE_TARGET", "revenue_target"),
    ("REVENUE_PATHS_CSV_PATH", "csv_path"),
    ("REVENUE_PATHS_SHEETS_ID", "spreadsheet_id"),
    ("REVENUE_PATHS_SHEETS_RANGE", "sheet_range"),
    ("REVENUE_PATHS_GOOGLE_API_KEY", "api_key"),
]


class PathFilters(BaseModel):
    """Filters applied to candidates before suggesting paths."""

    min_p_win: float = Field(default=0.0, ge=0, le=1)
    stages: Optional[list[Stage]] = None
    owner: Optional[str] = None
    priority: Literal["any", "top", "portfolio"] = "any"


class SourceSettings(BaseModel):
    """Where opportunities are loaded from."""

    type: Literal["local-csv", "google-sheets"] = "local-csv"
    csv_path: Optional[str] = None
    spreadsheet_id: Optional[str] = None
    sheet_range: Optional[str] = None
    api_key: Optional[str] = None

    def connector_kwargs(self) -> dict:
        """Keyword arguments for ConnectorRegistry.get."""
        if self.type == "google-sheets":
            return {
                "spreadsheet_id": self.spreadsheet_id,
                "sheet_range": self.sheet_range,
                "api_key": self.api_key,
            }
        return {"path": self.csv_path}


class ExplorerProfile(BaseModel):
    """Caller-owned constants for the path engine plus surrounding settings."""

    profile_id: str = Field(default="default", description="Unique identifier")

    revenue_target: float = Field(default=DEFAULT_REVENUE_TARGET, ge=0)
    fiscal_year: Optional[int] = Field(
        default=None,
        description="Only closed-won deals starting in this year count as backlog",
    )
    max_open_opportunities: int = Field(default=30, ge=1)

    top_k: int = Field(default=20, ge=1, description="Paths kept by the best-first builder")
    backlog_cap: int = Field(default=6, ge=1, description="Combinations per priority leaf")
    priority_size: int = Field(default=8, ge=0, description="Explicitly branched prefix length")
    backlog_strategy: Literal["first-found", "best-first"] = "first-found"

    filters: PathFilters = Field(default_factory=PathFilters)
    source: SourceSettings = Field(default_factory=SourceSettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ExplorerProfile":
        """Load profile from YAML file. Supports nested (target/search/filters/source) or flat structure."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        return cls.from_mapping(data)

    @classmethod
    def from_mapping(cls, data: dict) -> "ExplorerProfile":
        """Build a profile from parsed YAML, then apply environment overrides."""
        target = data.get("target", {})
        search = data.get("search", {})
        source = data.get("source", {})

        def _get(key: str, nested: dict, top: dict, default=None):
            return nested.get(key, top.get(key, default))

        flat: dict = {"profile_id": data.get("profile_id", "default")}
        for key in ("revenue_target", "fiscal_year"):
            value = _get(key, target, data)
            if value is not None:
                flat[key] = value
        for key in ("max_open_opportunities", "top_k", "backlog_cap", "priority_size", "backlog_strategy"):
            value = _get(key, search, data)
            if value is not None:
                flat[key] = value

        flat["filters"] = data.get("filters") or {}
        src: dict = {}
        for key in ("type", "csv_path", "spreadsheet_id", "sheet_range", "api_key"):
            value = _get(key, source, data)
            if value is not None:
                src[key] = value
        flat["source"] = src

        _apply_env_overrides(flat)
        return cls.model_validate(flat)


def _apply_env_overrides(flat: dict) -> None:
    """Environment wins over file values; a sheets id switches the source type."""
    for env_name, key in _ENV_OVERRIDES:
        value = os.environ.get(env_name)
        if not value:
            continue
        if key == "revenue_target":
            try:
                flat[key] = float(value)
            except ValueError:
                continue
        else:
            flat["source"][key] = value
    if os.environ.get("REVENUE_PATHS_SHEETS_ID") and not os.environ.get("REVENUE_PATHS_CSV_PATH"):
        flat["source"]["type"] = "google-sheets"
