#!/usr/bin/env python3

import sys
from errors import AppError
from logger import get_logger

logger = get_logger()


def cmd_reset(args, services):
    """Delete every decision and category after confirmation."""
    logger.info(f"Database: {services.config.db_path}")

    if not args.yes:
        response = input(
            "\nThis will permanently delete all your decisions and categories. "
            "This action cannot be undone. Continue? (yes/no): "
        )
        if response.strip().lower() != "yes":
            logger.info("Reset cancelled.")
            return

    try:
        services.reset_all_data()
    except AppError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info("✓ All data deleted.")


def setup_parser(subparsers):
    """Setup reset command parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "reset",
        help="Delete all data",
        description="Permanently delete all decisions and categories",
    )
    parser.add_argument(
        "--yes", action="store_true", help="Skip the confirmation prompt"
    )
    parser.set_defaults(func=cmd_reset)
