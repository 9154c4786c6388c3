"""Backup service: export and restore the whole dataset as a JSON document.

Document layout::

    {
      "decisions": [{"id", "title", "date", "categoryId", "options",
                     "chosenOption", "pros", "cons", "expectedOutcome",
                     "actualOutcome", "successRating", "emotionalState",
                     "note"}, ...],
      "categories": [{"id", "name", "iconName", "accentColor"}, ...],
      "exportDate": "2025-01-15T09:30:00Z"
    }

Scalar fields are always written, with "" standing in for missing values.
Restoring is tolerant per field but all-or-nothing for the document as a
whole.
"""

import json
import os
import sqlite3
import tempfile
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from errors import AppError, ExportFailed, ImportFailed
from logger import get_logger
from models.category import Category
from models.decision import FinancialDecision, DEFAULT_EMOTIONAL_STATE, UNRATED

logger = get_logger()


class BackupDocument(BaseModel):
    """Top-level shape a backup must have before anything is restored."""

    decisions: List[Dict[str, Any]]
    categories: List[Dict[str, Any]]
    exportDate: Optional[Any] = None


@dataclass
class ImportResult:
    """Counts of records created by a restore."""

    categories: int
    decisions: int


def format_timestamp(moment: datetime) -> str:
    """Format an aware datetime as ISO-8601 in UTC with a 'Z' suffix."""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO-8601 date or datetime string into a calendar date.

    Returns:
        The date, or None if the value is missing or unreadable.
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def encode_category(category: Category) -> Dict[str, Any]:
    return {
        "id": category.id or "",
        "name": category.name or "",
        "iconName": category.icon_name or "",
        "accentColor": category.accent_color or "",
    }


def encode_decision(decision: FinancialDecision) -> Dict[str, Any]:
    return {
        "id": decision.id or "",
        "title": decision.title or "",
        "date": decision.date.isoformat() if decision.date else "",
        "categoryId": decision.category_id or "",
        "options": list(decision.options or []),
        "chosenOption": decision.chosen_option or "",
        "pros": decision.pros or "",
        "cons": decision.cons or "",
        "expectedOutcome": decision.expected_outcome or "",
        "actualOutcome": decision.actual_outcome or "",
        "successRating": decision.success_rating if decision.is_rated else UNRATED,
        "emotionalState": decision.emotional_state,
        "note": decision.note or "",
    }


def _string(data: dict, key: str, default: Optional[str] = "") -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else default


def _optional_text(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) and value else None


def _int_in_range(data: dict, key: str, low: int, high: int, default: int) -> int:
    value = data.get(key)
    # bool is an int subclass but never a rating
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, float) and not value.is_integer():
        return default
    value = int(value)
    return value if low <= value <= high else default


def decode_category(data: Dict[str, Any]) -> Category:
    """Build a new Category from a serialized entry.

    The restored category always receives a fresh ID.
    """
    return Category(
        id=str(uuid.uuid4()),
        name=_string(data, "name"),
        icon_name=_string(data, "iconName"),
        accent_color=_string(data, "accentColor"),
    )


def decode_decision(
    data: Dict[str, Any], category_map: Dict[str, Category]
) -> FinancialDecision:
    """Build a new FinancialDecision from a serialized entry.

    Args:
        data: One element of the document's "decisions" array.
        category_map: Serialized category ID -> restored Category.

    Returns:
        A decision with a fresh ID. Unknown category IDs leave it
        uncategorized; unreadable dates leave it undated.
    """
    options = data.get("options")
    options = [o for o in options if isinstance(o, str)] if isinstance(options, list) else []

    category_id = data.get("categoryId")
    category = category_map.get(category_id) if isinstance(category_id, str) else None

    return FinancialDecision(
        id=str(uuid.uuid4()),
        title=_string(data, "title"),
        date=parse_date(data.get("date")),
        category=category,
        options=options,
        chosen_option=_string(data, "chosenOption"),
        pros=_optional_text(data, "pros"),
        cons=_optional_text(data, "cons"),
        expected_outcome=_optional_text(data, "expectedOutcome"),
        actual_outcome=_optional_text(data, "actualOutcome"),
        success_rating=_int_in_range(data, "successRating", 0, 10, UNRATED),
        emotional_state=_int_in_range(
            data, "emotionalState", 1, 10, DEFAULT_EMOTIONAL_STATE
        ),
        note=_optional_text(data, "note"),
    )


class BackupService:
    """Service for exporting and restoring backups."""

    def __init__(self, db_manager, categories, decisions, export_dir: Path):
        """Initialize the backup service.

        Args:
            db_manager: Database manager providing the unit of work.
            categories: CategoryService used to read and restore categories.
            decisions: DecisionService used to read and restore decisions.
            export_dir: Default directory for backup files.
        """
        self.db_manager = db_manager
        self.categories = categories
        self.decisions = decisions
        self.export_dir = export_dir

    def export_document(self) -> Dict[str, Any]:
        """Serialize every decision and category.

        Raises:
            ExportFailed: If the store cannot be read.
        """
        try:
            decisions = self.decisions.find_all()
            categories = self.categories.find_all()
        except sqlite3.Error as e:
            raise ExportFailed(str(e)) from e

        return {
            "decisions": [encode_decision(d) for d in decisions],
            "categories": [encode_category(c) for c in categories],
            "exportDate": format_timestamp(datetime.now(timezone.utc)),
        }

    def export_to_file(self, path: Optional[Path] = None) -> Path:
        """Write a backup file.

        The document is written to a temporary file next to the destination
        and renamed into place, so a failure never leaves a partial backup.

        Args:
            path: Destination file. Defaults to
                  export_dir/DecisionsBackup_<unix timestamp>.json.

        Returns:
            Path of the written backup.

        Raises:
            ExportFailed: If the store cannot be read or the file cannot be written.
        """
        document = self.export_document()

        if path is None:
            timestamp = int(datetime.now(timezone.utc).timestamp())
            path = self.export_dir / f"DecisionsBackup_{timestamp}.json"
        path = Path(path)

        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=path.parent, suffix=".tmp", delete=False
            ) as f:
                tmp_name = f.name
                json.dump(document, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise ExportFailed(str(e)) from e

        logger.info(
            f"Exported {len(document['decisions'])} decisions and "
            f"{len(document['categories'])} categories to {path}"
        )
        return path

    def import_document(self, document: Any) -> ImportResult:
        """Restore a parsed backup document into the store.

        Categories are restored first so decisions can be linked to them by
        their serialized IDs. Every restored record gets a new ID, so
        restoring the same backup twice creates duplicates.

        Args:
            document: Parsed JSON document.

        Returns:
            ImportResult with the number of restored records.

        Raises:
            ImportFailed: If the document is malformed or the store rejects
                          the restore. Nothing is written in either case.
        """
        if not isinstance(document, dict):
            raise ImportFailed("Backup must be a JSON object")

        try:
            backup = BackupDocument.model_validate(document)
        except ValidationError as e:
            missing = sorted(
                {str(err["loc"][0]) for err in e.errors() if err["loc"]}
            )
            raise ImportFailed(
                f"Backup is missing or has invalid sections: {', '.join(missing)}"
            ) from e

        category_map: Dict[str, Category] = {}
        restored_categories = [decode_category(c) for c in backup.categories]
        for raw, category in zip(backup.categories, restored_categories):
            if isinstance(raw.get("id"), str):
                category_map[raw["id"]] = category

        restored_decisions = [
            decode_decision(d, category_map) for d in backup.decisions
        ]

        try:
            with self.db_manager.transaction():
                for category in restored_categories:
                    self.categories.insert(category)
                for decision in restored_decisions:
                    self.decisions.insert(decision)
        except AppError as e:
            raise ImportFailed(e.message) from e

        logger.info(
            f"Imported {len(restored_categories)} categories and "
            f"{len(restored_decisions)} decisions"
        )
        return ImportResult(
            categories=len(restored_categories), decisions=len(restored_decisions)
        )

    def import_from_file(self, path: Path) -> ImportResult:
        """Read and restore a backup file.

        Raises:
            ImportFailed: If the file cannot be read or parsed, or the restore fails.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ImportFailed(f"Could not read {path}: {e}") from e

        return self.import_document(document)
