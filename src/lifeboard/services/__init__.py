"""Lifeboard services module.

Quick-add parsing, the domain presets that configure it, confidence scoring,
and record building. Imports are lazy so that importing one service does not
pull in the rest.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORTS: dict[str, tuple[str, str]] = {
    # Parser
    "ParsedItem": ("lifeboard.services.parser", "ParsedItem"),
    "QuickAddParser": ("lifeboard.services.parser", "QuickAddParser"),
    "UnknownItemTypeError": ("lifeboard.services.parser", "UnknownItemTypeError"),
    "clean_title": ("lifeboard.services.parser", "clean_title"),
    "parse_quick_add": ("lifeboard.services.parser", "parse_quick_add"),
    # Extractors
    "Extractor": ("lifeboard.services.extractors", "Extractor"),
    "ParseContext": ("lifeboard.services.extractors", "ParseContext"),
    "TypeBucket": ("lifeboard.services.extractors", "TypeBucket"),
    # Presets
    "ParserPreset": ("lifeboard.services.presets", "ParserPreset"),
    "PRESETS": ("lifeboard.services.presets", "PRESETS"),
    "get_preset": ("lifeboard.services.presets", "get_preset"),
    # Confidence
    "ConfidenceBreakdown": ("lifeboard.services.confidence", "ConfidenceBreakdown"),
    "generate_suggestions": ("lifeboard.services.confidence", "generate_suggestions"),
    # Records
    "MissingCategoryError": ("lifeboard.services.records", "MissingCategoryError"),
    "RecordBuilder": ("lifeboard.services.records", "RecordBuilder"),
    "build_record": ("lifeboard.services.records", "build_record"),
    # Timezone
    "TimezoneService": ("lifeboard.services.timezone", "TimezoneService"),
    "get_timezone_service": ("lifeboard.services.timezone", "get_timezone_service"),
    "reset_timezone_service": ("lifeboard.services.timezone", "reset_timezone_service"),
    "now": ("lifeboard.services.timezone", "now"),
    "today": ("lifeboard.services.timezone", "today"),
    "to_24h": ("lifeboard.services.timezone", "to_24h"),
}

__all__ = list(_EXPORTS.keys())


def __getattr__(name: str) -> Any:
    if name not in _EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    module_name, attr_name = _EXPORTS[name]
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(_EXPORTS.keys()))
