"""Decision service for database operations."""

import json
from datetime import date
from typing import List, Optional
from errors import DeleteFailed, SaveFailed, StoreError, ValidationFailed
from logger import get_logger
from models.category import Category
from models.decision import FinancialDecision, DEFAULT_EMOTIONAL_STATE
from validation import clean_options, validate_decision, validate_success_rating

logger = get_logger()

# SQL Query Constants
_DECISION_FIELDS = """id, title, date, category_id, options, chosen_option, pros, cons,
    expected_outcome, actual_outcome, success_rating, emotional_state, note"""

_DECISION_SELECT = f"""
    SELECT d.id, d.title, d.date, d.category_id, d.options, d.chosen_option,
           d.pros, d.cons, d.expected_outcome, d.actual_outcome,
           d.success_rating, d.emotional_state, d.note,
           c.name, c.icon_name, c.accent_color
    FROM financial_decisions d
    LEFT JOIN categories c ON c.id = d.category_id
"""

# Newest first, undated records last
_DECISION_ORDER = "ORDER BY d.date IS NULL, d.date DESC, d.created_at DESC"

# Automatically generate placeholders from field count
_DECISION_INSERT_PLACEHOLDERS = (
    f"({', '.join(['?'] * len(_DECISION_FIELDS.split(',')))})"
)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    return value if value else None


class DecisionService:
    """Service for managing financial decisions."""

    def __init__(self, db_manager):
        """Initialize the decision service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(
        self, category_id: Optional[str] = None, year: Optional[int] = None
    ) -> List[FinancialDecision]:
        """Get decisions, newest first.

        Args:
            category_id: Only return decisions filed under this category.
            year: Only return decisions dated in this calendar year.

        Returns:
            List of FinancialDecision objects with their categories attached.
        """
        clauses = []
        params = []
        if category_id is not None:
            clauses.append("d.category_id = ?")
            params.append(category_id)
        if year is not None:
            clauses.append("substr(d.date, 1, 4) = ?")
            params.append(f"{year:04d}")

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"{_DECISION_SELECT} {where} {_DECISION_ORDER}", tuple(params)
            )
            return [self._row_to_decision(row) for row in cursor.fetchall()]

    def find(self, decision_id: str) -> Optional[FinancialDecision]:
        """Get a single decision by ID.

        Args:
            decision_id: The decision ID to find.

        Returns:
            FinancialDecision if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"{_DECISION_SELECT} WHERE d.id = ?", (decision_id,)
            )
            row = cursor.fetchone()
            return self._row_to_decision(row) if row else None

    def create(
        self,
        title: str,
        decision_date: date,
        options: List[str],
        chosen_option: str = "",
        category: Optional[Category] = None,
        pros: Optional[str] = None,
        cons: Optional[str] = None,
        expected_outcome: Optional[str] = None,
        emotional_state: int = DEFAULT_EMOTIONAL_STATE,
        note: Optional[str] = None,
    ) -> FinancialDecision:
        """Record a new, not yet rated decision.

        Args:
            title: Short description (1-200 characters).
            decision_date: When the decision was made or is planned.
            options: Options considered; empty entries are dropped.
            chosen_option: The option picked, or "" if undecided.
            category: Optional category the decision is filed under.
            pros: Arguments in favour.
            cons: Arguments against.
            expected_outcome: What the user expects to happen.
            emotional_state: Self-reported emotional level, 1-10.
            note: Free-text note (up to 2000 characters).

        Returns:
            The created FinancialDecision.

        Raises:
            ValidationFailed: If any field is invalid. Nothing is written.
            SaveFailed: If the store rejects the write.
        """
        decision = FinancialDecision.new(
            title=title,
            date=decision_date,
            options=list(options),
            chosen_option=chosen_option or "",
            category=category,
            pros=pros,
            cons=cons,
            expected_outcome=expected_outcome,
            emotional_state=emotional_state,
            note=note,
        )
        self._validate(decision)
        self._normalize(decision)
        self.insert(decision)

        logger.debug(f"Created decision '{decision.title}' ({decision.id})")
        return decision

    def insert(self, decision: FinancialDecision) -> FinancialDecision:
        """Insert an already-built decision without validating it.

        Used by the backup importer, which joins the caller's unit of work.

        Raises:
            SaveFailed: If the store rejects the write.
        """
        data = decision.to_dict()
        fields = [f.strip() for f in _DECISION_FIELDS.split(",")]
        try:
            with self.db_manager.transaction() as conn:
                conn.execute(
                    f"""
                    INSERT INTO financial_decisions ({_DECISION_FIELDS})
                    VALUES {_DECISION_INSERT_PLACEHOLDERS}
                    """,
                    tuple(data[name] for name in fields),
                )
        except StoreError as e:
            raise SaveFailed(e.message) from e
        return decision

    def update(self, decision: FinancialDecision) -> FinancialDecision:
        """Save edits to an existing decision.

        The outcome fields (success rating and actual outcome) are left as
        stored; use record_outcome to change them.

        Args:
            decision: Decision carrying the edited fields.

        Returns:
            The updated FinancialDecision.

        Raises:
            ValidationFailed: If any field is invalid. Nothing is written.
            SaveFailed: If the decision does not exist or the write fails.
        """
        self._validate(decision)
        self._normalize(decision)

        try:
            with self.db_manager.transaction() as conn:
                cursor = conn.execute(
                    """
                    UPDATE financial_decisions
                    SET title = ?, date = ?, category_id = ?, options = ?,
                        chosen_option = ?, pros = ?, cons = ?, expected_outcome = ?,
                        emotional_state = ?, note = ?
                    WHERE id = ?
                    """,
                    (
                        decision.title,
                        decision.date.isoformat(),
                        decision.category_id,
                        json.dumps(decision.options),
                        decision.chosen_option,
                        decision.pros,
                        decision.cons,
                        decision.expected_outcome,
                        decision.emotional_state,
                        decision.note,
                        decision.id,
                    ),
                )
                rowcount = cursor.rowcount
        except StoreError as e:
            raise SaveFailed(e.message) from e

        if rowcount == 0:
            raise SaveFailed(f"Decision with ID {decision.id} not found")

        return self.find(decision.id)

    def record_outcome(
        self,
        decision_id: str,
        success_rating: int,
        actual_outcome: Optional[str] = None,
    ) -> FinancialDecision:
        """Rate a decision in hindsight.

        Args:
            decision_id: The decision to rate.
            success_rating: Rating from 1 to 10.
            actual_outcome: What actually happened; empty clears it.

        Returns:
            The updated FinancialDecision.

        Raises:
            ValidationFailed: If the rating is outside 1-10.
            SaveFailed: If the decision does not exist or the write fails.
        """
        validation = validate_success_rating(success_rating, allow_unrated=False)
        if not validation.is_valid:
            raise ValidationFailed(validation.error_message)

        try:
            with self.db_manager.transaction() as conn:
                cursor = conn.execute(
                    """
                    UPDATE financial_decisions
                    SET success_rating = ?, actual_outcome = ?
                    WHERE id = ?
                    """,
                    (success_rating, _blank_to_none(actual_outcome), decision_id),
                )
                rowcount = cursor.rowcount
        except StoreError as e:
            raise SaveFailed(e.message) from e

        if rowcount == 0:
            raise SaveFailed(f"Decision with ID {decision_id} not found")

        logger.debug(f"Recorded outcome {success_rating}/10 for {decision_id}")
        return self.find(decision_id)

    def delete(self, decision_id: str) -> bool:
        """Delete a decision by ID.

        Returns:
            True if the decision was deleted, False if not found.

        Raises:
            DeleteFailed: If the store rejects the delete.
        """
        try:
            with self.db_manager.transaction() as conn:
                cursor = conn.execute(
                    "DELETE FROM financial_decisions WHERE id = ?", (decision_id,)
                )
                return cursor.rowcount > 0
        except StoreError as e:
            raise DeleteFailed(e.message) from e

    def delete_all(self) -> int:
        """Delete every decision.

        Returns:
            Number of decisions deleted.
        """
        try:
            with self.db_manager.transaction() as conn:
                cursor = conn.execute("DELETE FROM financial_decisions")
                return cursor.rowcount
        except StoreError as e:
            raise DeleteFailed(e.message) from e

    def available_years(self) -> List[int]:
        """Get the distinct years that have dated decisions, newest first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT DISTINCT CAST(substr(date, 1, 4) AS INTEGER) AS year
                FROM financial_decisions
                WHERE date IS NOT NULL
                ORDER BY year DESC
                """
            )
            return [row[0] for row in cursor.fetchall()]

    def _validate(self, decision: FinancialDecision) -> None:
        if decision.date is None:
            raise ValidationFailed("Date is required")

        validation = validate_decision(
            title=decision.title,
            decision_date=decision.date,
            options=decision.options,
            note=decision.note,
            emotional_state=decision.emotional_state,
        )
        if not validation.is_valid:
            raise ValidationFailed(validation.error_message)

    def _normalize(self, decision: FinancialDecision) -> None:
        decision.options = clean_options(decision.options)
        decision.pros = _blank_to_none(decision.pros)
        decision.cons = _blank_to_none(decision.cons)
        decision.expected_outcome = _blank_to_none(decision.expected_outcome)
        decision.note = _blank_to_none(decision.note)

    def _row_to_decision(self, row: tuple) -> FinancialDecision:
        """Convert a joined database row to a FinancialDecision.

        Args:
            row: Row from _DECISION_SELECT.

        Returns:
            FinancialDecision object.
        """
        category = None
        if row[3] is not None:
            category = Category(
                id=row[3], name=row[13], icon_name=row[14], accent_color=row[15]
            )

        return FinancialDecision(
            id=row[0],
            title=row[1],
            date=date.fromisoformat(row[2]) if row[2] else None,
            category=category,
            options=json.loads(row[4]) if row[4] else [],
            chosen_option=row[5],
            pros=row[6],
            cons=row[7],
            expected_outcome=row[8],
            actual_outcome=row[9],
            success_rating=row[10],
            emotional_state=row[11],
            note=row[12],
        )
