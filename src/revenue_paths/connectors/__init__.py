"""Opportunity sources: CSV exports and Google Sheets."""

from revenue_paths.connectors.base import BaseConnector
from revenue_paths.connectors.local_csv import LocalCsvConnector
from revenue_paths.connectors.registry import ConnectorRegistry
from revenue_paths.connectors.sheets import GoogleSheetsConnector

__all__ = ["BaseConnector", "ConnectorRegistry", "GoogleSheetsConnector", "LocalCsvConnector"]
