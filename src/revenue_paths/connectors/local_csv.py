"""CSV connector for pipeline exports on disk or behind a URL."""

import csv
import logging
from io import StringIO
from pathlib import Path
from typing import Optional

import httpx

from revenue_paths.models.raw import RawOpportunity

from .base import BaseConnector
from .parsers import drop_blank_rows

logger = logging.getLogger(__name__)


class LocalCsvConnector(BaseConnector):
    """
    Reads a pipeline CSV export.
    path may be a filesystem path or an http(s) URL.
    """

    source_id = "local-csv"

    DEFAULT_HEADERS = {
        "User-Agent": "revenue-paths/0.1",
        "Accept": "text/csv, text/plain, */*",
    }

    def __init__(self, path: str | Path | None = None, client: Optional[httpx.Client] = None):
        if not path:
            raise ValueError("Missing local CSV configuration: path is required")
        self.path = str(path)
        self._client = client

    def _is_remote(self) -> bool:
        return self.path.startswith(("http://", "https://"))

    def _fetch_csv(self) -> str:
        """Read CSV content from disk or URL."""
        if self._is_remote():
            client = self._client or httpx.Client(
                timeout=60.0,
                follow_redirects=True,
                headers=self.DEFAULT_HEADERS,
            )
            response = client.get(self.path)
            response.raise_for_status()
            return response.text
        return Path(self.path).read_text(encoding="utf-8-sig")

    def _parse_csv_rows(self, csv_content: str) -> list[list[str]]:
        """Parse CSV with proper handling of quoted multiline fields."""
        return list(csv.reader(StringIO(csv_content)))

    def search(self) -> list[RawOpportunity]:
        """Return data rows, header and blank rows dropped."""
        rows = drop_blank_rows(self._parse_csv_rows(self._fetch_csv()))
        if not rows:
            logger.warning("CSV %s has no rows", self.path)
            return []
        records = rows[1:]
        logger.debug("Read %d data rows from %s", len(records), self.path)
        return [RawOpportunity(cells=row, row_number=i + 1) for i, row in enumerate(records)]
