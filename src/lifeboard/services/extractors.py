"""Extraction rules for quick-add parsing.

Each extractor looks at a ParseContext and, on its first match, fills in one
field. Extractors that strip (date, time, location and the domain extras)
search the working text and cut the matched fragment out of it, so later
rules never see it again. The others (category, priority, recurrence, type)
read the raw input and leave the text alone.

A parser preset is just an ordered list of these.
"""

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any

from lifeboard.schemas import Category, Priority, RecurrenceRule
from lifeboard.services.confidence import ConfidenceBreakdown

logger = logging.getLogger(__name__)


@dataclass
class ParseContext:
    """Working state for a single parse call."""

    raw_text: str
    now: datetime
    item_type: str
    type_hint: str | None = None
    categories: Sequence[Category] = ()
    text: str = ""
    type_locked: bool = False
    category_id: str | None = None
    due_date: date | None = None
    start_time: str | None = None
    priority: Priority = Priority.MEDIUM
    recurrence_rule: RecurrenceRule | None = None
    location: str | None = None
    extras: dict[str, Any] = field(default_factory=dict)
    breakdown: ConfidenceBreakdown = field(default_factory=ConfidenceBreakdown)

    def __post_init__(self) -> None:
        if not self.text:
            self.text = self.raw_text
        if self.type_hint is not None:
            self.item_type = self.type_hint
            self.type_locked = True

    @property
    def lower(self) -> str:
        return self.raw_text.lower()

    @property
    def today(self) -> date:
        return self.now.date()

    def cut(self, match: re.Match) -> None:
        """Remove a match (found in the working text) from the working text."""
        self.text = self.text[: match.start()] + self.text[match.end() :]


class Extractor:
    """Base class for a single pipeline rule."""

    name = "extractor"

    def apply(self, ctx: ParseContext) -> bool:
        """Run the rule. Returns True when it matched."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class CategoryExtractor(Extractor):
    """First known category mentioned in the input wins."""

    name = "category"

    def apply(self, ctx: ParseContext) -> bool:
        text = ctx.lower
        for category in ctx.categories:
            if self._mentions(text, category.name.lower()):
                ctx.category_id = category.id
                ctx.breakdown.add("category")
                logger.debug("Matched category %r", category.name)
                return True
        return False

    @staticmethod
    def _mentions(text: str, name: str) -> bool:
        if not name:
            return False
        for marker in (f"#{name}", f"{name}:", f"for {name}", f"{name} "):
            if marker in text:
                return True
        return re.search(rf"\b{re.escape(name)}\b", text) is not None


WEEKDAYS = [
    ("monday", "mon"),
    ("tuesday", "tue"),
    ("wednesday", "wed"),
    ("thursday", "thu"),
    ("friday", "fri"),
    ("saturday", "sat"),
    ("sunday", "sun"),
]

DATE_PATTERNS: list[tuple[str, str, int | None]] = [
    (r"\b(today|now)\b", "offset", 0),
    (r"\b(tomorrow|tmrw)\b", "offset", 1),
    # Shadowed: "tomorrow" above matches first, so this reads as one day ahead
    (r"\b(day after tomorrow)\b", "offset", 2),
    (r"\b(next week)\b", "offset", 7),
    *[(rf"\b({full}|{short})\b", "weekday", num) for num, (full, short) in enumerate(WEEKDAYS)],
    (r"(\d{1,2})/(\d{1,2})", "month_day", None),
    (r"\b(in (\d+) days?)\b", "relative", None),
]


class DateExtractor(Extractor):
    """Resolve the first date phrase against ``now``."""

    name = "date"

    def __init__(self, patterns: Sequence[tuple[str, str, int | None]] = DATE_PATTERNS):
        self.patterns = [(re.compile(p, re.IGNORECASE), kind, arg) for p, kind, arg in patterns]

    def apply(self, ctx: ParseContext) -> bool:
        for pattern, kind, arg in self.patterns:
            match = pattern.search(ctx.text)
            if not match:
                continue
            resolved = self._resolve(ctx.today, match, kind, arg)
            if resolved is None:
                continue
            ctx.due_date = resolved
            ctx.cut(match)
            ctx.breakdown.add("date")
            logger.debug("Matched date %r -> %s", match.group(0), resolved.isoformat())
            return True
        return False

    @staticmethod
    def _resolve(today: date, match: re.Match, kind: str, arg: int | None) -> date | None:
        if kind == "offset":
            return today + timedelta(days=arg or 0)

        if kind == "weekday":
            days_ahead = (arg - today.weekday()) % 7
            return today + timedelta(days=days_ahead or 7)

        if kind == "relative":
            return today + timedelta(days=int(match.group(2)))

        if kind == "month_day":
            month, day = int(match.group(1)), int(match.group(2))
            try:
                resolved = date(today.year, month, day)
                if resolved < today:
                    resolved = date(today.year + 1, month, day)
            except ValueError:
                return None
            return resolved

        return None


TIME_PATTERNS: list[tuple[str, int]] = [
    (r"\b(\d{1,2}):(\d{2})\s*(am|pm)\b", re.IGNORECASE),
    (r"\b(\d{1,2})\s*(am|pm)\b", re.IGNORECASE),
    (r"\b(\d{1,2}):(\d{2})\b", 0),
    (r"\b(morning)\b", re.IGNORECASE),
    (r"\b(afternoon)\b", re.IGNORECASE),
    (r"\b(evening)\b", re.IGNORECASE),
    (r"\b(night)\b", re.IGNORECASE),
]


class TimeExtractor(Extractor):
    """Keep the matched time fragment as-is.

    When ``event_type`` is set and the caller gave no type hint, a time
    match also turns the item into that type.
    """

    name = "time"

    def __init__(
        self,
        event_type: str | None = None,
        patterns: Sequence[tuple[str, int]] = TIME_PATTERNS,
    ):
        self.event_type = event_type
        self.patterns = [re.compile(p, flags) for p, flags in patterns]

    def apply(self, ctx: ParseContext) -> bool:
        for pattern in self.patterns:
            match = pattern.search(ctx.text)
            if not match:
                continue
            ctx.start_time = match.group(0)
            ctx.cut(match)
            ctx.breakdown.add("time")
            logger.debug("Matched time %r", ctx.start_time)

            if self.event_type and ctx.type_hint is None:
                ctx.item_type = self.event_type
                ctx.type_locked = True
                ctx.breakdown.add("event_inference")
            return True
        return False


HIGH_PRIORITY = ["urgent", "asap", "critical", "important", "emergency", "!!!", "high priority"]
LOW_PRIORITY = ["later", "sometime", "eventually", "low priority", "when free"]


class PriorityExtractor(Extractor):
    """High indicators are checked before low ones. Words stay in the title."""

    name = "priority"

    def __init__(
        self,
        high: Sequence[str] = HIGH_PRIORITY,
        low: Sequence[str] = LOW_PRIORITY,
    ):
        self.levels = [(Priority.HIGH, tuple(high)), (Priority.LOW, tuple(low))]

    def apply(self, ctx: ParseContext) -> bool:
        text = ctx.lower
        for level, indicators in self.levels:
            if any(indicator in text for indicator in indicators):
                ctx.priority = level
                ctx.breakdown.add("priority")
                logger.debug("Matched priority %s", level.value)
                return True
        return False


RECURRENCE_PATTERNS: list[tuple[str, RecurrenceRule]] = [
    (r"\b(every day|daily)\b", RecurrenceRule.DAILY),
    (r"\b(every week|weekly)\b", RecurrenceRule.WEEKLY),
    (r"\b(every month|monthly)\b", RecurrenceRule.MONTHLY),
    (
        r"\b(every (monday|tuesday|wednesday|thursday|friday|saturday|sunday))\b",
        RecurrenceRule.WEEKLY,
    ),
    (r"\b(weekdays?)\b", RecurrenceRule.WEEKDAYS),
    (r"\b(weekends?)\b", RecurrenceRule.WEEKENDS),
]


class RecurrenceExtractor(Extractor):
    name = "recurrence"

    def __init__(self, patterns: Sequence[tuple[str, RecurrenceRule]] = RECURRENCE_PATTERNS):
        self.patterns = [(re.compile(p, re.IGNORECASE), rule) for p, rule in patterns]

    def apply(self, ctx: ParseContext) -> bool:
        for pattern, rule in self.patterns:
            if pattern.search(ctx.raw_text):
                ctx.recurrence_rule = rule
                ctx.breakdown.add("recurrence")
                logger.debug("Matched recurrence %s", rule.value)
                return True
        return False


LocationRule = tuple[str, Callable[[re.Match], str]]

LOCATION_PATTERNS: list[LocationRule] = [
    (r"(?:\bat|@)\s+([^,\n]+)", lambda m: m.group(1).strip()),
    (
        r"\b(?:in|on)\s+(room|office|building|hall)\s+([A-Z0-9-]+)",
        lambda m: f"{m.group(1)} {m.group(2)}",
    ),
    (r"\b(gym|home|work|office|school|mall|store)\b", lambda m: m.group(0)),
]

ROOM_PATTERN: LocationRule = (
    r"\b(?:room|rm|hall|building|bldg)\s+[A-Z0-9-]+",
    lambda m: m.group(0),
)

CONFERENCE_ROOM_PATTERN: LocationRule = (
    r"\b(?:room|conference)\s+([A-Z0-9-]+)",
    lambda m: m.group(0),
)


class LocationExtractor(Extractor):
    name = "location"

    def __init__(self, patterns: Sequence[LocationRule] = LOCATION_PATTERNS):
        self.patterns = [(re.compile(p, re.IGNORECASE), value) for p, value in patterns]

    def apply(self, ctx: ParseContext) -> bool:
        for pattern, value in self.patterns:
            match = pattern.search(ctx.text)
            if not match:
                continue
            location = value(match)
            if not location:
                continue
            ctx.location = location
            ctx.cut(match)
            ctx.breakdown.add("location")
            logger.debug("Matched location %r", location)
            return True
        return False


@dataclass(frozen=True)
class TypeBucket:
    """Keywords that classify an item as ``item_type``.

    ``unless`` lists words that veto the bucket even when a keyword hits.
    """

    item_type: str
    keywords: tuple[str, ...]
    unless: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        if any(word in text for word in self.unless):
            return False
        return any(keyword in text for keyword in self.keywords)


TYPE_BUCKETS = [
    TypeBucket("event", ("meeting", "appointment", "call", "conference", "interview", "dinner", "lunch")),
    TypeBucket("note", ("note:", "remember:", "thoughts:", "ideas:", "memo:")),
    TypeBucket("idea", ("idea:", "brainstorm", "concept", "innovation", "inspiration")),
    TypeBucket("task", ("buy", "get", "pick up", "complete", "finish", "do", "make")),
]


class TypeClassifier(Extractor):
    """Keyword buckets, first hit wins. Skipped once the type is fixed."""

    name = "type"

    def __init__(self, buckets: Sequence[TypeBucket] = TYPE_BUCKETS):
        self.buckets = tuple(buckets)

    def apply(self, ctx: ParseContext) -> bool:
        if ctx.type_locked:
            return False

        text = ctx.lower
        for bucket in self.buckets:
            if bucket.matches(text):
                ctx.item_type = bucket.item_type
                ctx.breakdown.add("type")
                logger.debug("Classified as %s", bucket.item_type)
                return True
        return False


class FieldExtractor(Extractor):
    """Pull one domain-specific value into ``ctx.extras`` and strip it.

    Subclasses set ``name`` (the extras key), ``PATTERN`` and ``FLAGS`` and override
    ``value`` when the match needs converting.
    """

    name = ""
    PATTERN = ""
    FLAGS = re.IGNORECASE

    def __init__(self) -> None:
        self.pattern = re.compile(self.PATTERN, self.FLAGS)

    def value(self, match: re.Match) -> Any:
        return match.group(1)

    def apply(self, ctx: ParseContext) -> bool:
        match = self.pattern.search(ctx.text)
        if not match:
            return False
        ctx.extras[self.name] = self.value(match)
        ctx.cut(match)
        logger.debug("Matched %s %r", self.name, ctx.extras[self.name])
        return True


class CourseCodeExtractor(FieldExtractor):
    """Leading course code such as ``CS101`` or ``Math 204``."""

    name = "course"
    PATTERN = r"^([A-Z]{2,4}\s*\d{3}[A-Z]?|\w+\s+\d{3}[A-Z]?)"


class ProjectTagExtractor(FieldExtractor):
    """``[Project name]`` anywhere, or a leading ``<word> project``."""

    name = "project"
    PATTERN = r"\[([^\]]+)\]|^(\w+\s*project)"

    def value(self, match: re.Match) -> str:
        return (match.group(1) or match.group(2)).strip()


class ClientExtractor(FieldExtractor):
    name = "client"
    PATTERN = r"\b(?i:for|with|client)\s+([A-Z][a-zA-Z]*(?:[ \t]+[A-Z][a-zA-Z]*)*)"
    FLAGS = 0


class QuantityExtractor(FieldExtractor):
    name = "quantity"
    PATTERN = r"\b(\d+)\s*(x|pcs?|pieces?|bottles?|box(?:es)?|kg|lbs?|oz|ml|liters?|l)\b"

    def value(self, match: re.Match) -> int:
        return int(match.group(1))


class BrandExtractor(FieldExtractor):
    name = "brand"
    PATTERN = r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)\s+(?i:brand|by)\b"
    FLAGS = 0


class ServingsExtractor(FieldExtractor):
    name = "servings_per_day"
    PATTERN = r"(\d+)\s*(per day|daily|/day)"

    def value(self, match: re.Match) -> int:
        return int(match.group(1))
