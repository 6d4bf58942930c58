"""Raw spreadsheet row before mapping to an Opportunity."""

from pydantic import BaseModel, Field


class RawOpportunity(BaseModel):
    """
    One data row from a sheet or CSV export.
    Cells are kept positional; the column layout lives in the parsers.
    """

    cells: list[str] = Field(default_factory=list)
    row_number: int = Field(..., ge=1, description="1-based position among data rows")

    def cell(self, index: int) -> str | None:
        """Return the cell at index, or None when the row is short."""
        if index < len(self.cells):
            return self.cells[index]
        return None
