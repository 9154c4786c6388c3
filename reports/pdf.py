"""Yearly PDF report of financial decisions, rendered with reportlab."""

from datetime import date
from pathlib import Path
from typing import List

from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from errors import ExportFailed
from logger import get_logger
from models.decision import FinancialDecision

logger = get_logger()

PAGE_WIDTH, PAGE_HEIGHT = letter  # 612 x 792 points
MARGIN = 72
TITLE_FONT = ("Helvetica-Bold", 24)
BODY_FONT = ("Helvetica", 12)
LINE_HEIGHT = 15
TITLE_SPACING = 50
BLOCK_HEIGHT = 150
BLOCK_SPACING = 10
# Start a new page once fewer than this many points remain below the cursor
PAGE_BREAK_THRESHOLD = 200


def report_title(year: int) -> str:
    return f"My Financial Decisions {year}"


def _sort_key(decision: FinancialDecision):
    return (decision.date is None, decision.date or date.max)


def format_decision(decision: FinancialDecision) -> List[str]:
    """Build the text lines describing one decision."""
    lines = [decision.title or "Untitled"]
    if decision.date:
        lines.append(f"Date: {decision.date.strftime('%b %d, %Y')}")
    if decision.chosen_option:
        lines.append(f"Chosen: {decision.chosen_option}")
    if decision.is_rated:
        lines.append(f"Success Rating: {decision.success_rating}/10")
    if decision.actual_outcome:
        lines.append(f"Outcome: {decision.actual_outcome}")
    return lines


def create_year_report(
    decisions: List[FinancialDecision], year: int, output_dir: Path
) -> Path:
    """Render decisions of a year into Decisions_<year>.pdf.

    Decisions are laid out oldest first, one fixed-height block each, with a
    page break whenever the cursor gets too close to the bottom margin.

    Args:
        decisions: Decisions to include (already filtered to the year).
        year: Year shown in the title and the file name.
        output_dir: Directory the PDF is written to.

    Returns:
        Path to the written PDF.

    Raises:
        ExportFailed: If there is nothing to render or writing fails.
    """
    if not decisions:
        raise ExportFailed("No decisions found for selected year")

    output_path = Path(output_dir) / f"Decisions_{year}.pdf"
    text_width = PAGE_WIDTH - 2 * MARGIN

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        pdf = canvas.Canvas(str(output_path), pagesize=letter)
        pdf.setCreator("Quandary")
        pdf.setAuthor("User")
        pdf.setTitle(report_title(year))

        # reportlab's origin is bottom-left; track distance from the top
        y_position = MARGIN
        pdf.setFont(*TITLE_FONT)
        pdf.drawString(MARGIN, PAGE_HEIGHT - y_position - TITLE_FONT[1], report_title(year))
        y_position += TITLE_SPACING

        for decision in sorted(decisions, key=_sort_key):
            if y_position > PAGE_HEIGHT - PAGE_BREAK_THRESHOLD:
                pdf.showPage()
                y_position = MARGIN

            pdf.setFont(*BODY_FONT)
            line_y = y_position + BODY_FONT[1]
            block_bottom = y_position + BLOCK_HEIGHT
            for line in format_decision(decision):
                for wrapped in simpleSplit(line, BODY_FONT[0], BODY_FONT[1], text_width):
                    if line_y > block_bottom:
                        break
                    pdf.drawString(MARGIN, PAGE_HEIGHT - line_y, wrapped)
                    line_y += LINE_HEIGHT

            y_position += BLOCK_HEIGHT + BLOCK_SPACING

        pdf.save()
    except OSError as e:
        raise ExportFailed(f"Could not write {output_path}: {e}") from e

    logger.info(f"Wrote report for {year} with {len(decisions)} decisions to {output_path}")
    return output_path
