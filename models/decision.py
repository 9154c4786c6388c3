from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
import json
import uuid

from models.category import Category

UNRATED = 0
DEFAULT_EMOTIONAL_STATE = 5


@dataclass
class FinancialDecision:
    id: str  # UUID string
    title: str
    date: Optional[date]  # None only for imported records with unreadable dates
    options: List[str] = field(default_factory=list)
    chosen_option: str = ""
    category: Optional[Category] = None
    pros: Optional[str] = None
    cons: Optional[str] = None
    expected_outcome: Optional[str] = None
    actual_outcome: Optional[str] = None
    success_rating: int = UNRATED  # 0 = not yet rated, otherwise 1-10
    emotional_state: int = DEFAULT_EMOTIONAL_STATE  # 1-10
    note: Optional[str] = None

    @classmethod
    def new(cls, title: str, date: Optional[date], **fields) -> "FinancialDecision":
        """Create a FinancialDecision with a freshly generated ID."""
        return cls(id=str(uuid.uuid4()), title=title, date=date, **fields)

    @property
    def category_id(self) -> Optional[str]:
        return self.category.id if self.category else None

    @property
    def is_rated(self) -> bool:
        return self.success_rating > UNRATED

    @property
    def year(self) -> Optional[int]:
        return self.date.year if self.date else None

    def to_dict(self) -> dict:
        """Convert decision to dictionary for database storage."""
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat() if self.date else None,
            "category_id": self.category_id,
            "options": json.dumps(self.options),
            "chosen_option": self.chosen_option,
            "pros": self.pros,
            "cons": self.cons,
            "expected_outcome": self.expected_outcome,
            "actual_outcome": self.actual_outcome,
            "success_rating": self.success_rating,
            "emotional_state": self.emotional_state,
            "note": self.note,
        }
