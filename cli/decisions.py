#!/usr/bin/env python3

import sys
from datetime import date
from errors import AppError
from logger import get_logger
from models.decision import DEFAULT_EMOTIONAL_STATE
from tools.decisions import filter_decisions, reflection_candidates

logger = get_logger()


def _print_decision_line(decision):
    when = decision.date.isoformat() if decision.date else "no date"
    rating = f"{decision.success_rating}/10" if decision.is_rated else "unrated"
    category = decision.category.name if decision.category else "Uncategorized"
    logger.info(f"{when}  {decision.title}  [{category}]  {rating}")
    logger.info(f"    ID: {decision.id}")


def _require(services, decision_id):
    decision = services.decisions.find(decision_id)
    if not decision:
        logger.error(f"Decision with ID {decision_id} not found.")
        sys.exit(1)
    return decision


def _resolve_category(services, category_ref):
    """Find a category by ID or, failing that, by name."""
    if not category_ref:
        return None
    category = services.categories.find(category_ref) or services.categories.find_by_name(
        category_ref
    )
    if not category:
        logger.error(f"Category '{category_ref}' not found.")
        sys.exit(1)
    return category


def cmd_list(args, services):
    """List decisions on the timeline, optionally filtered."""
    category = _resolve_category(services, args.category)
    decisions = filter_decisions(
        services.decisions.find_all(),
        search_text=args.search or "",
        category=category,
        year=args.year,
    )

    if not decisions:
        logger.info("No decisions found.")
        logger.info("Try adjusting your filters or create a new decision.")
        return

    logger.info("\nDecisions:")
    logger.info("=" * 80)
    for decision in decisions:
        _print_decision_line(decision)

    logger.info(f"\nTotal decisions: {len(decisions)}")
    years = services.decisions.available_years()
    if years:
        logger.info(f"Years: {', '.join(str(y) for y in years)}")


def cmd_show(args, services):
    """Show every field of one decision."""
    decision = _require(services, args.decision_id)

    logger.info(f"\n{decision.title}")
    logger.info("=" * 80)
    logger.info(f"ID: {decision.id}")
    logger.info(f"Date: {decision.date.isoformat() if decision.date else 'none'}")
    logger.info(
        f"Category: {decision.category.name if decision.category else 'Uncategorized'}"
    )
    logger.info("Options:")
    for option in decision.options:
        marker = "*" if option == decision.chosen_option else "-"
        logger.info(f"  {marker} {option}")
    if decision.chosen_option:
        logger.info(f"Chosen: {decision.chosen_option}")
    for label, value in (
        ("Pros", decision.pros),
        ("Cons", decision.cons),
        ("Expected outcome", decision.expected_outcome),
        ("Actual outcome", decision.actual_outcome),
        ("Note", decision.note),
    ):
        if value:
            logger.info(f"{label}: {value}")
    logger.info(f"Emotional state: {decision.emotional_state}/10")
    if decision.is_rated:
        logger.info(f"Success rating: {decision.success_rating}/10")
    else:
        logger.info("Success rating: not yet rated")


def cmd_create(args, services):
    """Interactively record a new decision."""
    print("\nNew Financial Decision")
    print("=" * 80)

    title = input("Title: ").strip()

    date_input = input("Date (YYYY-MM-DD, press Enter for today): ").strip()
    try:
        decision_date = date.fromisoformat(date_input) if date_input else date.today()
    except ValueError:
        logger.error("Date must be in YYYY-MM-DD format.")
        sys.exit(1)

    category = _resolve_category(
        services, input("Category ID or name (optional): ").strip()
    )

    print("Options considered (one per line, empty line to finish):")
    options = []
    while True:
        option = input(f"  Option {len(options) + 1}: ").strip()
        if not option:
            break
        options.append(option)

    chosen_option = input("Chosen option (optional): ").strip()
    pros = input("Pros (optional): ").strip()
    cons = input("Cons (optional): ").strip()
    expected_outcome = input("Expected outcome (optional): ").strip()

    emotional_input = input(
        f"Emotional state 1-10 (press Enter for {DEFAULT_EMOTIONAL_STATE}): "
    ).strip()
    try:
        emotional_state = (
            int(emotional_input) if emotional_input else DEFAULT_EMOTIONAL_STATE
        )
    except ValueError:
        logger.error("Emotional state must be a number.")
        sys.exit(1)

    note = input("Note (optional): ").strip()

    try:
        decision = services.decisions.create(
            title=title,
            decision_date=decision_date,
            options=options,
            chosen_option=chosen_option,
            category=category,
            pros=pros,
            cons=cons,
            expected_outcome=expected_outcome,
            emotional_state=emotional_state,
            note=note,
        )
    except AppError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"\n✓ Decision recorded with ID: {decision.id}")


def cmd_outcome(args, services):
    """Record how a decision turned out."""
    decision = _require(services, args.decision_id)

    try:
        updated = services.decisions.record_outcome(
            decision.id, args.rating, args.actual
        )
    except AppError as e:
        logger.error(str(e))
        sys.exit(1)

    if updated.success_rating >= 8:
        logger.info(f"✓ Great outcome! '{updated.title}' rated {updated.success_rating}/10.")
    else:
        logger.info(f"✓ Outcome saved: '{updated.title}' rated {updated.success_rating}/10.")
        logger.info("  What would you do differently next time? Add it as a note.")


def cmd_delete(args, services):
    """Delete a decision by ID."""
    decision = _require(services, args.decision_id)

    if not args.yes:
        confirm = (
            input(
                f'\nAre you sure you want to delete "{decision.title}"? '
                "This action cannot be undone. (yes/no): "
            )
            .strip()
            .lower()
        )
        if confirm != "yes":
            logger.info("Deletion cancelled.")
            return

    try:
        services.decisions.delete(decision.id)
    except AppError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"✓ Decision '{decision.title}' deleted successfully.")


def cmd_reflections(args, services):
    """List decisions with notes or low ratings."""
    decisions = reflection_candidates(services.decisions.find_all())

    if not decisions:
        logger.info("No reflections yet. Add notes or rate your decisions.")
        return

    logger.info("\nReflections:")
    logger.info("=" * 80)
    for decision in decisions:
        _print_decision_line(decision)
        if decision.note:
            logger.info(f"    Note: {decision.note}")


def setup_parser(subparsers):
    """Setup decisions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "decisions",
        help="Record and browse decisions",
        description="Record, rate, browse and delete financial decisions",
    )

    decisions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available decision commands",
        dest="subcommand",
        required=True,
    )

    # decisions list
    list_parser = decisions_subparsers.add_parser(
        "list", help="List decisions, newest first"
    )
    list_parser.add_argument("--search", help="Text to search for")
    list_parser.add_argument("--category", help="Category ID or name")
    list_parser.add_argument("--year", type=int, help="Only decisions from this year")
    list_parser.set_defaults(func=cmd_list)

    # decisions show
    show_parser = decisions_subparsers.add_parser("show", help="Show one decision")
    show_parser.add_argument("decision_id", help="ID of the decision")
    show_parser.set_defaults(func=cmd_show)

    # decisions create
    create_parser = decisions_subparsers.add_parser(
        "create", help="Record a new decision interactively"
    )
    create_parser.set_defaults(func=cmd_create)

    # decisions outcome
    outcome_parser = decisions_subparsers.add_parser(
        "outcome", help="Rate how a decision turned out"
    )
    outcome_parser.add_argument("decision_id", help="ID of the decision")
    outcome_parser.add_argument("rating", type=int, help="Success rating from 1 to 10")
    outcome_parser.add_argument("--actual", help="What actually happened")
    outcome_parser.set_defaults(func=cmd_outcome)

    # decisions delete
    delete_parser = decisions_subparsers.add_parser(
        "delete", help="Delete a decision by ID"
    )
    delete_parser.add_argument("decision_id", help="ID of the decision to delete")
    delete_parser.add_argument(
        "--yes", action="store_true", help="Skip the confirmation prompt"
    )
    delete_parser.set_defaults(func=cmd_delete)

    # decisions reflections
    reflections_parser = decisions_subparsers.add_parser(
        "reflections", help="Decisions with notes or low ratings"
    )
    reflections_parser.set_defaults(func=cmd_reflections)
