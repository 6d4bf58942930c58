"""Registry for discovering and instantiating connectors."""

from typing import Type

from revenue_paths.connectors.base import BaseConnector
from revenue_paths.connectors.local_csv import LocalCsvConnector
from revenue_paths.connectors.sheets import GoogleSheetsConnector


class ConnectorRegistry:
    """Discovers and provides opportunity sources."""

    _connectors: dict[str, Type[BaseConnector]] = {
        "local-csv": LocalCsvConnector,
        "google-sheets": GoogleSheetsConnector,
    }

    @classmethod
    def get(cls, source_id: str, **kwargs) -> BaseConnector:
        """Get a connector instance for the given source. kwargs passed to connector __init__."""
        connector_cls = cls._connectors.get(source_id.lower())
        if not connector_cls:
            raise ValueError(f"Unknown source: {source_id}. Available: {list(cls._connectors.keys())}")
        return connector_cls(**kwargs)

    @classmethod
    def available_sources(cls) -> list[str]:
        """Return list of available source identifiers."""
        return list(cls._connectors.keys())
