"""Report service for rendering decision reports."""

from pathlib import Path
from typing import Optional
from reports.pdf import create_year_report


class ReportService:
    """Service for producing yearly PDF reports."""

    def __init__(self, decisions, export_dir: Path):
        """Initialize the report service.

        Args:
            decisions: DecisionService used to select the year's decisions.
            export_dir: Default directory reports are written to.
        """
        self.decisions = decisions
        self.export_dir = export_dir

    def export_year(self, year: int, output_dir: Optional[Path] = None) -> Path:
        """Render every decision dated in the given year.

        Args:
            year: Calendar year to report on.
            output_dir: Directory for the PDF, defaults to the export directory.

        Returns:
            Path to Decisions_<year>.pdf.

        Raises:
            ExportFailed: If the year has no decisions or rendering fails.
        """
        decisions = self.decisions.find_all(year=year)
        return create_year_report(decisions, year, output_dir or self.export_dir)
