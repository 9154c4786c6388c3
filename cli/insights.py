#!/usr/bin/env python3

from logger import get_logger
from tools.decisions import NOT_AVAILABLE, get_dashboard_summary, get_year_summary

logger = get_logger()


def _percent(rate):
    return f"{int(rate * 100)}%"


def cmd_summary(args, services):
    """Show success statistics overall or for one year."""
    if args.year is not None:
        summary = get_year_summary(services, args.year)
        heading = f"Success Insights {args.year}"
    else:
        summary = get_dashboard_summary(services, args.search or "")
        heading = "Success Insights"

    logger.info(f"\n{heading}")
    logger.info("=" * 80)
    logger.info(f"Total: {summary['total']}")
    logger.info(f"Rated: {summary['rated']}")
    logger.info(f"Avg Success: {_percent(summary['success_rate'])}")
    logger.info(f"Best Month: {summary['best_month']}")

    if summary["by_month"]:
        logger.info("\nBy month:")
        for month, rate in summary["by_month"].items():
            logger.info(f"  {month:<10} {_percent(rate)}")

    if summary["by_category"]:
        logger.info("\nBy category:")
        for name, rate in summary["by_category"].items():
            logger.info(f"  {name:<25} {_percent(rate)}")

    if summary["pattern"] != NOT_AVAILABLE:
        logger.info(f"\nPatterns: {summary['pattern']}")

    if summary.get("recent"):
        logger.info("\nRecent decisions:")
        for decision in summary["recent"]:
            rating = f"{decision.success_rating}/10" if decision.is_rated else "unrated"
            logger.info(f"  {decision.title} ({rating})")


def setup_parser(subparsers):
    """Setup insights subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "insights",
        help="Success statistics",
        description="Show success rates by month and category",
    )

    insights_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available insight commands",
        dest="subcommand",
        required=True,
    )

    summary_parser = insights_subparsers.add_parser(
        "summary", help="Show the success summary"
    )
    summary_parser.add_argument("--year", type=int, help="Limit to one year")
    summary_parser.add_argument("--search", help="Filter the recent decisions list")
    summary_parser.set_defaults(func=cmd_summary)
