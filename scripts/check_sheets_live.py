#!/usr/bin/env python3
"""Quick live check of the Google Sheets connector.

Run:
  REVENUE_PATHS_SHEETS_ID=... REVENUE_PATHS_SHEETS_RANGE='Pipeline!A1:P' \
  REVENUE_PATHS_GOOGLE_API_KEY=... poetry run python scripts/check_sheets_live.py
"""

import os

from revenue_paths.connectors import GoogleSheetsConnector
from revenue_paths.engine import count_paths
from revenue_paths.pipeline import prepare_workspace


def main() -> None:
    connector = GoogleSheetsConnector(
        spreadsheet_id=os.environ.get("REVENUE_PATHS_SHEETS_ID"),
        sheet_range=os.environ.get("REVENUE_PATHS_SHEETS_RANGE"),
        api_key=os.environ.get("REVENUE_PATHS_GOOGLE_API_KEY"),
    )
    print(f"Fetching sheet {connector.spreadsheet_id} ({connector.sheet_range})...")
    opportunities = connector.fetch_all()
    print(f"Got {len(opportunities)} opportunities")
    for i, opp in enumerate(opportunities[:5], 1):
        print(f"  {i}. {opp.name} [{opp.stage}] value={opp.value:,.0f} pWin={opp.p_win:.0%}")

    target = float(os.environ.get("REVENUE_PATHS_REVENUE_TARGET", "10000000"))
    workspace = prepare_workspace(opportunities, target)
    counts = count_paths(workspace.opportunities, {}, target, workspace.backlog_revenue)
    print(f"\n{counts.success} of {counts.total} scenarios reach {target:,.0f} ({counts.percent_success:.1f}%)")


if __name__ == "__main__":
    main()
