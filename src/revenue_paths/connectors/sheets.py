"""Google Sheets connector using the Sheets v4 values API."""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from revenue_paths.models.raw import RawOpportunity

from .base import BaseConnector
from .parsers import drop_blank_rows

logger = logging.getLogger(__name__)


class GoogleSheetsConnector(BaseConnector):
    """
    Connector for a read-only pipeline sheet.
    Authenticates with an API key; the first row of the range is the header.
    """

    source_id = "google-sheets"

    SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"

    def __init__(
        self,
        spreadsheet_id: Optional[str] = None,
        sheet_range: Optional[str] = None,
        api_key: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ):
        if not spreadsheet_id or not sheet_range or not api_key:
            raise ValueError("Missing Google Sheets configuration: spreadsheet_id, sheet_range and api_key are required")
        self.spreadsheet_id = spreadsheet_id
        self.sheet_range = sheet_range
        self.api_key = api_key
        self._client = client or httpx.Client(timeout=30.0)

    def _values_url(self) -> str:
        return f"{self.SHEETS_API_BASE}/{self.spreadsheet_id}/values/{quote(self.sheet_range, safe='')}"

    def _fetch_values(self) -> list[list[str]]:
        """Fetch the raw cell grid for the configured range."""
        response = self._client.get(self._values_url(), params={"key": self.api_key})
        response.raise_for_status()
        payload = response.json()
        return payload.get("values") or []

    def search(self) -> list[RawOpportunity]:
        """Return data rows from the sheet, header dropped."""
        rows = drop_blank_rows([[str(c) for c in row] for row in self._fetch_values()])
        if not rows:
            logger.warning("Sheet %s range %s returned no rows", self.spreadsheet_id, self.sheet_range)
            return []
        records = rows[1:]
        logger.debug("Read %d data rows from sheet %s", len(records), self.spreadsheet_id)
        return [RawOpportunity(cells=row, row_number=i + 1) for i, row in enumerate(records)]
