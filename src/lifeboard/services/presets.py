"""Domain presets for the quick-add parser.

The general quick-add bar and the school, work and shopping pages all run
the same engine. A preset only decides which extractors run, in which
order, which type keywords apply, and how each resulting type is stored.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from lifeboard.schemas import ItemType, RecordKind, ShoppingCategory
from lifeboard.services.extractors import (
    CONFERENCE_ROOM_PATTERN,
    LOCATION_PATTERNS,
    ROOM_PATTERN,
    BrandExtractor,
    CategoryExtractor,
    ClientExtractor,
    CourseCodeExtractor,
    DateExtractor,
    Extractor,
    LocationExtractor,
    PriorityExtractor,
    ProjectTagExtractor,
    QuantityExtractor,
    RecurrenceExtractor,
    ServingsExtractor,
    TimeExtractor,
    TypeBucket,
    TypeClassifier,
)


@dataclass(frozen=True)
class ParserPreset:
    name: str
    default_type: str
    extractors: tuple[Extractor, ...]
    # Types that become calendar events
    event_types: frozenset[str] = frozenset()
    record_kinds: dict[str, RecordKind] = field(default_factory=dict)
    # Minutes per event type; missing types use the configured default
    event_durations: dict[str, int] = field(default_factory=dict)
    default_event_time: str | None = None
    decorate_title: Callable[[str, dict], str] | None = None

    @property
    def item_types(self) -> list[str]:
        return list(self.record_kinds)

    def record_kind(self, item_type: str) -> RecordKind:
        return self.record_kinds.get(item_type, self.record_kinds[self.default_type])

    def is_event(self, item_type: str) -> bool:
        return item_type in self.event_types


def _school_title(title: str, extras: dict) -> str:
    course = extras.get("course")
    return f"{course}: {title}" if course else title


def _work_title(title: str, extras: dict) -> str:
    if extras.get("project"):
        title = f"[{extras['project']}] {title}"
    if extras.get("client"):
        title = f"{title} ({extras['client']})"
    return title


GENERAL = ParserPreset(
    name="general",
    default_type=ItemType.TASK.value,
    extractors=(
        CategoryExtractor(),
        DateExtractor(),
        TimeExtractor(event_type=ItemType.EVENT.value),
        PriorityExtractor(),
        RecurrenceExtractor(),
        LocationExtractor(),
        TypeClassifier(),
    ),
    event_types=frozenset({ItemType.EVENT.value}),
    record_kinds={
        ItemType.TASK.value: RecordKind.TASK,
        ItemType.EVENT.value: RecordKind.EVENT,
        ItemType.NOTE.value: RecordKind.NOTE,
        ItemType.IDEA.value: RecordKind.NOTE,
    },
)

SCHOOL = ParserPreset(
    name="school",
    default_type="assignment",
    extractors=(
        CourseCodeExtractor(),
        CategoryExtractor(),
        DateExtractor(),
        TimeExtractor(),
        PriorityExtractor(high=["urgent", "important"], low=[]),
        RecurrenceExtractor(),
        LocationExtractor([*LOCATION_PATTERNS, ROOM_PATTERN]),
        TypeClassifier(
            [
                TypeBucket("exam", ("exam", "test", "quiz")),
                TypeBucket("lecture", ("lecture", "class", "seminar")),
            ]
        ),
    ),
    event_types=frozenset({"lecture", "exam"}),
    record_kinds={
        "assignment": RecordKind.TASK,
        "lecture": RecordKind.EVENT,
        "exam": RecordKind.EVENT,
    },
    event_durations={"lecture": 90, "exam": 120},
    decorate_title=_school_title,
)

WORK = ParserPreset(
    name="work",
    default_type="task",
    extractors=(
        ProjectTagExtractor(),
        CategoryExtractor(),
        DateExtractor(),
        TimeExtractor(event_type="meeting"),
        # "priority" also hits "low priority", so high wins there
        PriorityExtractor(high=["urgent", "asap", "priority"], low=["low priority", "when time"]),
        RecurrenceExtractor(),
        LocationExtractor([*LOCATION_PATTERNS, CONFERENCE_ROOM_PATTERN]),
        ClientExtractor(),
        TypeClassifier(
            [
                TypeBucket("meeting", ("meeting", "call", "standup")),
                TypeBucket("project", ("project",), unless=("task",)),
            ]
        ),
    ),
    event_types=frozenset({"meeting"}),
    record_kinds={
        "task": RecordKind.TASK,
        "meeting": RecordKind.EVENT,
        "project": RecordKind.PROJECT,
    },
    event_durations={"meeting": 60},
    default_event_time="10:00",
    decorate_title=_work_title,
)

SHOPPING = ParserPreset(
    name="shopping",
    default_type="item",
    extractors=(
        QuantityExtractor(),
        BrandExtractor(),
        ServingsExtractor(),
        CategoryExtractor(),
        PriorityExtractor(high=["urgent", "asap", "need now"], low=["when convenient", "low priority"]),
        TypeClassifier(
            [
                TypeBucket("supplement", ("vitamin", "supplement", "protein", "pills", "capsules")),
                TypeBucket("clothing", ("shirt", "pants", "shoes", "jacket", "dress")),
                TypeBucket("food", ("milk", "bread", "eggs", "fruit", "vegetables")),
            ]
        ),
    ),
    record_kinds={
        "item": RecordKind.TASK,
        "supplement": RecordKind.SUPPLEMENT,
        "food": RecordKind.TASK,
        "clothing": RecordKind.TASK,
    },
)

SHOPPING_CATEGORIES: dict[str, ShoppingCategory] = {
    "supplement": ShoppingCategory.SUPPLEMENTS,
    "clothing": ShoppingCategory.CLOTHING,
    "food": ShoppingCategory.FOOD,
    "item": ShoppingCategory.OTHER,
}

PRESETS: dict[str, ParserPreset] = {
    preset.name: preset for preset in (GENERAL, SCHOOL, WORK, SHOPPING)
}


def get_preset(name: str) -> ParserPreset:
    """Look up a preset by name. Raises KeyError for unknown names."""
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown parser preset: {name!r} (known: {', '.join(PRESETS)})") from None


def preset_names() -> Sequence[str]:
    return list(PRESETS)
