#!/usr/bin/env python3

import sys
from datetime import date
from pathlib import Path
from errors import AppError
from logger import get_logger
from tasks import BackgroundRunner

logger = get_logger()


def cmd_pdf(args, services):
    """Render a year's decisions to a PDF report."""
    year = args.year or date.today().year
    output_dir = Path(args.output_dir) if args.output_dir else None

    logger.info(f"Creating PDF for {year}...")
    with BackgroundRunner() as runner:
        future = runner.submit(services.reports.export_year, year, output_dir)
        try:
            path = future.result()
        except AppError as e:
            logger.error(str(e))
            years = services.decisions.available_years()
            if years:
                logger.info(f"Years with decisions: {', '.join(str(y) for y in years)}")
            sys.exit(1)

    logger.info(f"✓ Report written to {path}")


def setup_parser(subparsers):
    """Setup report subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "report",
        help="Yearly PDF reports",
        description="Export a year's decisions as a PDF",
    )

    report_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available report commands",
        dest="subcommand",
        required=True,
    )

    pdf_parser = report_subparsers.add_parser("pdf", help="Export a year as PDF")
    pdf_parser.add_argument("--year", type=int, help="Year to export (default: current)")
    pdf_parser.add_argument("--output-dir", help="Directory for the PDF")
    pdf_parser.set_defaults(func=cmd_pdf)
