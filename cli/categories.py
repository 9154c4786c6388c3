#!/usr/bin/env python3

import sys
from errors import AppError
from logger import get_logger
from models.category import DEFAULT_ACCENT_COLOR, DEFAULT_ICON_NAME
from tools.decisions import success_rate

logger = get_logger()


def _require(services, category_id):
    category = services.categories.find(category_id)
    if not category:
        logger.error(f"Category with ID {category_id} not found.")
        sys.exit(1)
    return category


def cmd_list(args, services):
    """List all categories in the database."""
    categories = services.categories.find_all()

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        logger.info(f"ID: {category.id}")
        logger.info(f"Name: {category.name}")
        logger.info(f"Icon: {category.icon_name}  Color: #{category.accent_color}")
        logger.info(f"Decisions: {services.categories.count_decisions(category.id)}")
        logger.info("-" * 80)

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_create(args, services):
    """Interactively create a new category."""
    print("\nCreate New Category")
    print("=" * 80)

    name = args.name or input("Category name (e.g., Housing): ").strip()
    icon_name = (
        args.icon
        or input(f"Icon name (press Enter for '{DEFAULT_ICON_NAME}'): ").strip()
        or DEFAULT_ICON_NAME
    )
    accent_color = (
        args.color
        or input(f"Accent color hex (press Enter for {DEFAULT_ACCENT_COLOR}): ").strip()
        or DEFAULT_ACCENT_COLOR
    )

    try:
        category = services.categories.create(
            name, icon_name, accent_color.lstrip("#").upper()
        )
    except AppError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"\n✓ Category created successfully with ID: {category.id}")
    logger.info(f"  Name: {category.name}")


def cmd_update(args, services):
    """Rename or restyle a category."""
    category = _require(services, args.category_id)

    try:
        updated = services.categories.update(
            category.id,
            args.name if args.name is not None else category.name,
            args.icon or category.icon_name,
            (args.color or category.accent_color).lstrip("#").upper(),
        )
    except AppError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"✓ Category '{updated.name}' updated.")


def cmd_delete(args, services):
    """Delete a category by ID, keeping its decisions uncategorized."""
    category = _require(services, args.category_id)
    count = services.categories.count_decisions(category.id)

    logger.info("\nCategory to delete:")
    logger.info(f"  ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    logger.info(
        f"  This will remove the category from {count} associated decision(s)."
    )

    if not args.yes:
        confirm = (
            input("\nAre you sure you want to delete this category? (yes/no): ")
            .strip()
            .lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    try:
        if services.categories.delete(category.id):
            logger.info(f"✓ Category '{category.name}' deleted successfully.")
        else:
            logger.error("Failed to delete category.")
            sys.exit(1)
    except AppError as e:
        logger.error(str(e))
        sys.exit(1)


def cmd_stats(args, services):
    """Show decision count and average success for one category."""
    category = _require(services, args.category_id)
    decisions = services.decisions.find_all(category_id=category.id)

    logger.info(f"\n{category.name}")
    logger.info("=" * 80)
    logger.info(f"{len(decisions)} decisions")
    if any(d.is_rated for d in decisions):
        logger.info(f"{int(success_rate(decisions) * 100)}% average success")

    for decision in decisions:
        rating = f"{decision.success_rating}/10" if decision.is_rated else "unrated"
        when = decision.date.isoformat() if decision.date else "no date"
        logger.info(f"  {when}  {decision.title}  ({rating})")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Create, list, update and delete decision categories",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    # categories create
    create_parser = categories_subparsers.add_parser(
        "create", help="Create a new category (prompts for missing fields)"
    )
    create_parser.add_argument("--name", help="Category name")
    create_parser.add_argument("--icon", help="Icon name")
    create_parser.add_argument("--color", help="Accent color as hex, e.g. 4A90E2")
    create_parser.set_defaults(func=cmd_create)

    # categories update
    update_parser = categories_subparsers.add_parser(
        "update", help="Update a category"
    )
    update_parser.add_argument("category_id", help="ID of the category to update")
    update_parser.add_argument("--name", help="New name")
    update_parser.add_argument("--icon", help="New icon name")
    update_parser.add_argument("--color", help="New accent color")
    update_parser.set_defaults(func=cmd_update)

    # categories delete
    delete_parser = categories_subparsers.add_parser(
        "delete", help="Delete a category by ID"
    )
    delete_parser.add_argument("category_id", help="ID of the category to delete")
    delete_parser.add_argument(
        "--yes", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=cmd_delete)

    # categories stats
    stats_parser = categories_subparsers.add_parser(
        "stats", help="Show decisions and success rate for a category"
    )
    stats_parser.add_argument("category_id", help="ID of the category")
    stats_parser.set_defaults(func=cmd_stats)
