"""Turn parsed quick-add items into the records the app persists.

The parser only knows a date and a raw time fragment; this module combines
them into start/end timestamps, resolves the category to file under, and
shapes the title and description the way each page stores them.
"""

import logging
from collections.abc import Sequence
from datetime import timedelta

from lifeboard.config import settings
from lifeboard.schemas import (
    Category,
    EventRecord,
    NoteRecord,
    ProjectRecord,
    Record,
    RecordKind,
    ShoppingCategory,
    SupplementRecord,
    TaskRecord,
)
from lifeboard.services.parser import ParsedItem
from lifeboard.services.presets import SHOPPING_CATEGORIES, ParserPreset, get_preset
from lifeboard.services.timezone import TimezoneService, get_timezone_service, to_24h

logger = logging.getLogger(__name__)

DEFAULT_SUPPLEMENT_SERVINGS = 30
DEFAULT_SERVINGS_PER_DAY = 1


class MissingCategoryError(ValueError):
    """Raised when a record needs a category and none can be resolved."""


class RecordBuilder:
    """Builds persistence payloads from ParsedItem objects for one preset."""

    def __init__(
        self,
        preset: ParserPreset | str | None = None,
        default_category_id: str | None = None,
        timezone: str | None = None,
    ):
        if preset is None:
            preset = settings.default_preset
        self.preset = get_preset(preset) if isinstance(preset, str) else preset
        self.default_category_id = default_category_id
        self._clock = TimezoneService(timezone) if timezone else get_timezone_service()

    def build(self, item: ParsedItem, categories: Sequence[Category] = ()) -> Record:
        kind = self.preset.record_kind(item.item_type)
        category_id = self.resolve_category(item, categories)
        logger.debug("Building %s record for %r", kind.value, item.title)

        if kind == RecordKind.EVENT:
            return self._event(item, self._require(category_id, kind))
        if kind == RecordKind.NOTE:
            return NoteRecord(category_id=self._require(category_id, kind), content_md=item.title)
        if kind == RecordKind.SUPPLEMENT:
            return SupplementRecord(
                name=item.title,
                category_id=category_id,
                quantity_servings=item.extras.get("quantity") or DEFAULT_SUPPLEMENT_SERVINGS,
                servings_per_day=item.extras.get("servings_per_day") or DEFAULT_SERVINGS_PER_DAY,
            )
        if kind == RecordKind.PROJECT:
            client = item.extras.get("client")
            return ProjectRecord(
                name=item.title,
                description=f"Client: {client}" if client else None,
            )
        return TaskRecord(
            title=self.title(item),
            category_id=category_id,
            description=self.description(item),
            due_date=item.due_date,
            priority=item.priority,
            recur_rule=item.recurrence_rule,
        )

    def resolve_category(self, item: ParsedItem, categories: Sequence[Category] = ()) -> str | None:
        """Matched category, then the page default, then the first known one."""
        if item.category_id:
            return item.category_id
        if self.default_category_id:
            return self.default_category_id
        if categories:
            return categories[0].id
        return None

    def title(self, item: ParsedItem) -> str:
        if self.preset.decorate_title is None:
            return item.title
        return self.preset.decorate_title(item.title, item.extras)

    def description(self, item: ParsedItem) -> str | None:
        extras = item.extras
        if self.preset.name == "shopping":
            label = SHOPPING_CATEGORIES.get(item.item_type, ShoppingCategory.OTHER)
            parts = [f"Category: {label.value}"]
            if extras.get("brand"):
                parts.append(f"Brand: {extras['brand']}")
            if extras.get("quantity"):
                parts.append(f"Quantity: {extras['quantity']}")
            return ", ".join(parts)
        if extras.get("course"):
            return f"Course: {extras['course']}"
        if extras.get("project"):
            return f"Project: {extras['project']}"
        return None

    def _event(self, item: ParsedItem, category_id: str) -> EventRecord:
        day = item.due_date or self._clock.today()
        hour, minute = to_24h(item.start_time) or self._default_time()
        start_at = self._clock.combine(day, hour, minute)
        duration = self.preset.event_durations.get(
            item.item_type, settings.default_event_duration_minutes
        )
        return EventRecord(
            title=self.title(item),
            category_id=category_id,
            start_at=start_at,
            end_at=start_at + timedelta(minutes=duration),
            description=self.description(item),
            location=item.location,
            recur_rule=item.recurrence_rule,
        )

    def _default_time(self) -> tuple[int, int]:
        default = self.preset.default_event_time
        if default:
            return to_24h(default) or settings.default_event_hour_minute
        return settings.default_event_hour_minute

    @staticmethod
    def _require(category_id: str | None, kind: RecordKind) -> str:
        if category_id is None:
            raise MissingCategoryError(f"Cannot create a {kind.value} record without a category")
        return category_id


def build_record(
    item: ParsedItem,
    categories: Sequence[Category] = (),
    default_category_id: str | None = None,
) -> Record:
    """Build the record for an item using the preset that parsed it."""
    builder = RecordBuilder(item.preset, default_category_id=default_category_id)
    return builder.build(item, categories)
