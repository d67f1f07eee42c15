import argparse
import json
import logging
import sys
from datetime import datetime

from lifeboard.config import settings
from lifeboard.schemas import Category
from lifeboard.sentry import capture_exception, init_sentry, set_context
from lifeboard.sentry import flush as sentry_flush
from lifeboard.services.parser import ParsedItem, QuickAddParser, UnknownItemTypeError
from lifeboard.services.presets import get_preset, preset_names
from lifeboard.services.records import MissingCategoryError, RecordBuilder


def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _categories(names: list[str] | None) -> list[Category]:
    return [Category(id=f"cat-{index}", name=name) for index, name in enumerate(names or [], 1)]


def _parse(args: argparse.Namespace, categories: list[Category]) -> ParsedItem:
    now = datetime.fromisoformat(args.now) if args.now else None
    parser = QuickAddParser(preset=args.preset)
    set_context("quick_add", {"preset": args.preset, "type_hint": args.type})
    return parser.parse(args.text, type_hint=args.type, categories=categories, now=now)


def _type_error(error: UnknownItemTypeError) -> int:
    print(f"Error: {error}", file=sys.stderr)
    return 1


def parse_command(args: argparse.Namespace) -> int:
    try:
        item = _parse(args, _categories(args.category))
    except UnknownItemTypeError as e:
        return _type_error(e)
    print(json.dumps(item.to_dict(), indent=2))
    return 0


def record_command(args: argparse.Namespace) -> int:
    categories = _categories(args.category)
    try:
        item = _parse(args, categories)
    except UnknownItemTypeError as e:
        return _type_error(e)
    builder = RecordBuilder(preset=args.preset, default_category_id=args.default_category)
    try:
        record = builder.build(item, categories)
    except MissingCategoryError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Pass --category or --default-category", file=sys.stderr)
        return 1
    print(record.model_dump_json(indent=2))
    return 0


def check_config() -> int:
    print("Lifeboard Configuration Check\n")

    checks = [
        ("User timezone", settings.user_timezone),
        ("Log level", settings.log_level),
        ("Default preset", settings.default_preset),
        ("Suggestion threshold", f"{settings.confidence_threshold}%"),
        ("Default event time", settings.default_event_time),
        ("Default event duration", f"{settings.default_event_duration_minutes} min"),
        ("Sentry DSN", "OK" if settings.has_sentry else "MISSING"),
    ]
    for name, value in checks:
        print(f"  {name}: {value}")

    print()
    if settings.default_preset not in preset_names():
        print(f"Unknown DEFAULT_PRESET {settings.default_preset!r}. Known: {', '.join(preset_names())}")
        return 1
    print("Configuration OK.")
    return 0


def _item_types() -> list[str]:
    types = {item_type for name in preset_names() for item_type in get_preset(name).item_types}
    return sorted(types)


def _add_parse_options(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument("text", help="Quick-add text to parse")
    subparser.add_argument(
        "--preset",
        choices=preset_names(),
        default=settings.default_preset,
        help="Parser preset (default: %(default)s)",
    )
    subparser.add_argument(
        "--type",
        choices=_item_types(),
        help="Explicit item type for the preset, skips type detection",
    )
    subparser.add_argument(
        "--category",
        action="append",
        help="Known category name (repeatable, ids are cat-1, cat-2, ...)",
    )
    subparser.add_argument("--now", help="Reference time as ISO 8601 (default: current time)")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Lifeboard quick-add parser")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    parse_parser = subparsers.add_parser("parse", help="Parse text and show the result")
    _add_parse_options(parse_parser)

    record_parser = subparsers.add_parser("record", help="Parse text and show the record to create")
    _add_parse_options(record_parser)
    record_parser.add_argument("--default-category", help="Category id used when none matches")

    subparsers.add_parser("check", help="Check configuration")

    args = parser.parse_args(argv)

    setup_logging()

    # Initialize Sentry for error tracking (disabled if no DSN configured)
    init_sentry()

    try:
        if args.command == "parse":
            return parse_command(args)
        elif args.command == "record":
            return record_command(args)
        elif args.command == "check":
            return check_config()
        else:
            parser.print_help()
            return 0
    except Exception as e:
        capture_exception(e)
        raise
    finally:
        # Flush any pending Sentry events before exit
        sentry_flush(timeout=2.0)


if __name__ == "__main__":
    sys.exit(main())
