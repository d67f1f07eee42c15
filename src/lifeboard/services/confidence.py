"""Confidence scoring for quick-add parsing.

Every parse starts at 50 points and each rule that matches adds a fixed
weight. Points are never subtracted. The public score is points / 100,
capped at 1.0. Below the threshold (70 by default) the parser attaches
suggestions for the fields it could not fill in.
"""

from dataclasses import dataclass, field
from datetime import date

BASE_SCORE = 50

# Fixed weight per rule, in points
WEIGHTS: dict[str, int] = {
    "category": 20,
    "date": 15,
    "time": 10,
    "event_inference": 10,  # time match promoted the item to an event
    "priority": 10,
    "recurrence": 15,
    "location": 10,
    "type": 10,
}

SUGGEST_DUE_DATE = "Add due date"
SUGGEST_CATEGORY = "Specify category"
SUGGEST_TIME = "Add time"


@dataclass
class ConfidenceBreakdown:
    """Detailed breakdown of confidence score components."""

    base_score: int = BASE_SCORE
    bonuses: dict[str, int] = field(default_factory=dict)

    def add(self, rule: str, points: int | None = None) -> None:
        """Record the weight for a matched rule.

        A rule only scores once per parse.
        """
        if rule in self.bonuses:
            return
        self.bonuses[rule] = WEIGHTS[rule] if points is None else points

    @property
    def points(self) -> int:
        """Uncapped total in points."""
        return self.base_score + sum(self.bonuses.values())

    @property
    def total(self) -> float:
        """Calculate total confidence score (0.0-1.0)."""
        return min(100, self.points) / 100

    def to_dict(self) -> dict:
        """Return breakdown as dictionary."""
        return {
            "base_score": self.base_score,
            **self.bonuses,
            "points": self.points,
            "total": self.total,
        }


def generate_suggestions(
    points: int,
    due_date: date | None,
    category_id: str | None,
    is_event: bool,
    start_time: str | None,
    threshold: int = 70,
) -> list[str]:
    """Hints for fields that were not extracted, only for low-confidence parses."""
    suggestions: list[str] = []
    if points >= threshold:
        return suggestions

    if due_date is None:
        suggestions.append(SUGGEST_DUE_DATE)
    if category_id is None:
        suggestions.append(SUGGEST_CATEGORY)
    if is_event and not start_time:
        suggestions.append(SUGGEST_TIME)
    return suggestions
