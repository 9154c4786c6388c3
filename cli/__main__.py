#!/usr/bin/env python3
"""
Quandary CLI - Unified command-line interface for the financial decision journal.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    categories   Manage categories
    decisions    Record, rate and browse decisions
    insights     Success statistics
    backup       Export and restore JSON backups
    report       Yearly PDF reports
    migrate      Database migrations
    reset        Delete all decisions and categories

Examples:
    python -m cli migrate apply
    python -m cli categories create
    python -m cli decisions create
    python -m cli decisions list --search car --year 2025
    python -m cli decisions outcome <decision-id> 8 --actual "Saved $2k"
    python -m cli backup export
    python -m cli report pdf --year 2025
"""

import sys
import argparse
from cli import categories, decisions, insights, backup, report, migrate, reset
from config import load_config
from errors import AppError
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Quandary - Personal financial decision journal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    categories.setup_parser(subparsers)
    decisions.setup_parser(subparsers)
    insights.setup_parser(subparsers)
    backup.setup_parser(subparsers)
    report.setup_parser(subparsers)
    migrate.setup_parser(subparsers)
    reset.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            if args.command == "migrate":
                # Migrate commands need db_manager for raw database operations
                args.func(args, DatabaseManager(config))
            else:
                services = Services(config)
                # A store that cannot be opened blocks every other command
                services.db_manager.verify()
                args.func(args, services)
        except AppError as e:
            print(str(e))
            sys.exit(1)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
