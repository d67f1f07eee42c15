"""Quick-add text parsing.

QuickAddParser runs a preset's extractors over the input and returns a
ParsedItem with the cleaned title, the extracted fields, a confidence score
and suggestions for what is missing.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

from lifeboard.config import settings
from lifeboard.schemas import Category, Priority, RecurrenceRule
from lifeboard.services.confidence import ConfidenceBreakdown, generate_suggestions
from lifeboard.services.extractors import ParseContext
from lifeboard.services.presets import ParserPreset, get_preset
from lifeboard.services.timezone import TimezoneService
from lifeboard.services.timezone import now as current_time

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_EDGE_SEPARATORS = re.compile(r"^[-:\s]+|[-:\s]+$")


def clean_title(text: str) -> str:
    """Collapse whitespace and trim separators (``-``, ``:``) at both ends."""
    title = _WHITESPACE.sub(" ", text)
    return _EDGE_SEPARATORS.sub("", title).strip()


class UnknownItemTypeError(ValueError):
    """Raised when a type hint is not one of the preset's item types."""


@dataclass
class ParsedItem:
    title: str
    item_type: str
    confidence: float
    category_id: str | None = None
    due_date: date | None = None
    start_time: str | None = None
    priority: Priority = Priority.MEDIUM
    recurrence_rule: RecurrenceRule | None = None
    location: str | None = None
    suggestions: list[str] = field(default_factory=list)
    extras: dict[str, Any] = field(default_factory=dict)
    breakdown: ConfidenceBreakdown = field(default_factory=ConfidenceBreakdown)
    raw_text: str = ""
    preset: str = "general"

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "item_type": self.item_type,
            "category_id": self.category_id,
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "start_time": self.start_time,
            "priority": self.priority.value,
            "recurrence_rule": self.recurrence_rule.value if self.recurrence_rule else None,
            "location": self.location,
            "confidence": self.confidence,
            "suggestions": list(self.suggestions),
            "extras": dict(self.extras),
            "preset": self.preset,
        }


class QuickAddParser:
    """Turns free quick-add text into a ParsedItem.

    The parser is stateless between calls. Rules run in the preset's order and
    each one stops at its first match, so an earlier rule can claim a fragment
    that a later rule would have read differently ("day after tomorrow" is
    read as "tomorrow"). That ordering is intentional and stable.
    """

    def __init__(
        self,
        preset: ParserPreset | str | None = None,
        timezone: str | None = None,
        confidence_threshold: int | None = None,
    ):
        if preset is None:
            preset = settings.default_preset
        self.preset = get_preset(preset) if isinstance(preset, str) else preset
        self._clock = TimezoneService(timezone) if timezone else None
        self.confidence_threshold = (
            settings.confidence_threshold if confidence_threshold is None else confidence_threshold
        )

    def parse(
        self,
        text: str,
        type_hint: str | Enum | None = None,
        categories: Sequence[Category] = (),
        now: datetime | None = None,
    ) -> ParsedItem:
        if not isinstance(text, str):
            raise TypeError(f"quick-add text must be a str, not {type(text).__name__}")

        if isinstance(type_hint, Enum):
            type_hint = type_hint.value
        if type_hint is not None and type_hint not in self.preset.item_types:
            raise UnknownItemTypeError(
                f"{type_hint!r} is not a {self.preset.name} item type "
                f"(expected one of: {', '.join(self.preset.item_types)})"
            )

        ctx = ParseContext(
            raw_text=text,
            now=now or self._now(),
            item_type=self.preset.default_type,
            type_hint=type_hint,
            categories=categories,
        )

        for extractor in self.preset.extractors:
            extractor.apply(ctx)

        breakdown = ctx.breakdown
        suggestions = generate_suggestions(
            breakdown.points,
            due_date=ctx.due_date,
            category_id=ctx.category_id,
            is_event=self.preset.is_event(ctx.item_type),
            start_time=ctx.start_time,
            threshold=self.confidence_threshold,
        )

        item = ParsedItem(
            title=clean_title(ctx.text),
            item_type=ctx.item_type,
            confidence=breakdown.total,
            category_id=ctx.category_id,
            due_date=ctx.due_date,
            start_time=ctx.start_time,
            priority=ctx.priority,
            recurrence_rule=ctx.recurrence_rule,
            location=ctx.location,
            suggestions=suggestions,
            extras=dict(ctx.extras),
            breakdown=breakdown,
            raw_text=text,
            preset=self.preset.name,
        )
        logger.debug(
            "Parsed %r as %s (confidence %.2f, preset %s)",
            text,
            item.item_type,
            item.confidence,
            self.preset.name,
        )
        return item

    def _now(self) -> datetime:
        if self._clock is not None:
            return self._clock.now()
        return current_time()


def parse_quick_add(
    text: str,
    type_hint: str | Enum | None = None,
    categories: Sequence[Category] = (),
    preset: ParserPreset | str | None = None,
    now: datetime | None = None,
) -> ParsedItem:
    """Convenience function to parse a single quick-add entry.

    Args:
        text: The raw quick-add input
        type_hint: Item type picked explicitly by the user, if any
        categories: The user's categories, in display order
        preset: Preset name or instance (default from settings)
        now: Reference time for relative dates (default: now in user timezone)

    Returns:
        ParsedItem with extracted fields, confidence and suggestions
    """
    return QuickAddParser(preset=preset).parse(text, type_hint, categories, now)
