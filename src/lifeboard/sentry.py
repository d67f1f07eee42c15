"""Sentry error tracking for Lifeboard.

Usage:
    from lifeboard.sentry import init_sentry
    init_sentry()

    from lifeboard.sentry import capture_exception
    try:
        risky_operation()
    except Exception as e:
        capture_exception(e)
        raise
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from lifeboard.config import settings

if TYPE_CHECKING:
    from sentry_sdk._types import Event, Hint

logger = logging.getLogger(__name__)

# Module state
_initialized = False

# Errors caused by what the user typed, not by a bug
USER_INPUT_ERRORS = ("MissingCategoryError", "UnknownItemTypeError")


def init_sentry(
    dsn: str | None = None,
    environment: str | None = None,
    release: str | None = None,
    traces_sample_rate: float = 0.0,
) -> bool:
    """Initialize Sentry SDK for error tracking.

    Args:
        dsn: Sentry DSN. Defaults to settings.sentry_dsn.
             Empty DSN disables Sentry (safe for development).
        environment: Environment name. Defaults to settings.sentry_environment.
        release: Release version. If None, auto-detected from package version.
        traces_sample_rate: Sample rate for performance tracing (0.0-1.0).

    Returns:
        True if Sentry was initialized, False if skipped.
    """
    global _initialized

    if _initialized:
        logger.debug("Sentry already initialized")
        return True

    dsn = settings.sentry_dsn if dsn is None else dsn
    if not dsn:
        logger.debug("No SENTRY_DSN configured, error tracking disabled")
        return False

    if release is None:
        from importlib.metadata import PackageNotFoundError, version

        try:
            release = f"lifeboard@{version('lifeboard')}"
        except PackageNotFoundError:
            release = "lifeboard@unknown"

    sentry_sdk.init(
        dsn=dsn,
        environment=environment or settings.sentry_environment,
        release=release,
        traces_sample_rate=traces_sample_rate,
        integrations=[LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)],
        send_default_pii=False,
        before_send=_before_send,
    )

    _initialized = True
    logger.info("Sentry initialized: release=%s", release)
    return True


def _before_send(event: Event, hint: Hint) -> Event | None:
    """Drop events for rejected user input."""
    if "exc_info" in hint:
        exc_type, _, _ = hint["exc_info"]
        if exc_type.__name__ in USER_INPUT_ERRORS:
            return None
    return event


def capture_exception(exception: BaseException | None = None) -> str | None:
    """Capture an exception and send to Sentry.

    Returns:
        Event ID if captured, None otherwise.
    """
    if not _initialized:
        return None
    return sentry_sdk.capture_exception(exception)


def set_context(name: str, data: dict[str, Any]) -> None:
    if not _initialized:
        return
    sentry_sdk.set_context(name, data)


def flush(timeout: float = 2.0) -> None:
    """Flush pending Sentry events before shutdown."""
    if not _initialized:
        return
    sentry_sdk.flush(timeout=timeout)


def is_enabled() -> bool:
    """Check if Sentry is enabled and initialized."""
    return _initialized
