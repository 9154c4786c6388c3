#!/usr/bin/env python3

import sys
from pathlib import Path
from errors import AppError
from logger import get_logger
from tasks import BackgroundRunner

logger = get_logger()


def cmd_export(args, services):
    """Write a JSON backup of all decisions and categories."""
    try:
        path = services.backup.export_to_file(Path(args.output) if args.output else None)
    except AppError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"✓ Backup written to {path}")


def cmd_import(args, services):
    """Restore a JSON backup into the database."""
    path = Path(args.file)
    if not path.exists():
        logger.error(f"File not found: {args.file}")
        sys.exit(1)

    logger.info(f"Importing backup from {path}...")
    with BackgroundRunner() as runner:
        future = runner.submit(services.backup.import_from_file, path)
        try:
            result = future.result()
        except AppError as e:
            logger.error(str(e))
            sys.exit(1)

    logger.info(
        f"✓ Restored {result.categories} categories and {result.decisions} decisions"
    )
    logger.info("  Note: restoring the same backup again creates duplicates.")


def setup_parser(subparsers):
    """Setup backup subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "backup",
        help="Export and restore backups",
        description="Export all data to JSON or restore it from a JSON backup",
    )

    backup_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available backup commands",
        dest="subcommand",
        required=True,
    )

    export_parser = backup_subparsers.add_parser("export", help="Create a backup")
    export_parser.add_argument(
        "--output", help="Backup file path (defaults to the export directory)"
    )
    export_parser.set_defaults(func=cmd_export)

    import_parser = backup_subparsers.add_parser("import", help="Restore a backup")
    import_parser.add_argument("file", help="Path to a JSON backup file")
    import_parser.set_defaults(func=cmd_import)
