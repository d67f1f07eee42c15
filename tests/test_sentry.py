"""Tests for Sentry error tracking integration."""

from unittest.mock import patch

import lifeboard.sentry
from lifeboard.sentry import (
    _before_send,
    capture_exception,
    flush,
    init_sentry,
    is_enabled,
    set_context,
)
from lifeboard.services.parser import UnknownItemTypeError
from lifeboard.services.records import MissingCategoryError


class TestSentryInit:
    """Test Sentry initialization."""

    def setup_method(self) -> None:
        """Reset module state before each test."""
        lifeboard.sentry._initialized = False

    def teardown_method(self) -> None:
        lifeboard.sentry._initialized = False

    def test_is_enabled_before_init(self) -> None:
        assert is_enabled() is False

    def test_init_without_dsn_returns_false(self) -> None:
        with patch("lifeboard.sentry.sentry_sdk.init") as mock_init:
            assert init_sentry(dsn="") is False
        mock_init.assert_not_called()
        assert is_enabled() is False

    def test_init_with_dsn(self) -> None:
        with patch("lifeboard.sentry.sentry_sdk.init") as mock_init:
            result = init_sentry(
                dsn="https://test@sentry.io/12345",
                environment="testing",
                release="lifeboard@1.2.3",
            )
        assert result is True
        assert is_enabled() is True
        kwargs = mock_init.call_args.kwargs
        assert kwargs["environment"] == "testing"
        assert kwargs["release"] == "lifeboard@1.2.3"
        assert kwargs["send_default_pii"] is False
        assert kwargs["before_send"] is _before_send

    def test_init_twice_is_noop(self) -> None:
        with patch("lifeboard.sentry.sentry_sdk.init") as mock_init:
            init_sentry(dsn="https://test@sentry.io/12345", release="lifeboard@1")
            assert init_sentry(dsn="https://test@sentry.io/12345") is True
        assert mock_init.call_count == 1

    def test_release_detected_when_missing(self) -> None:
        with patch("lifeboard.sentry.sentry_sdk.init") as mock_init:
            init_sentry(dsn="https://test@sentry.io/12345")
        assert mock_init.call_args.kwargs["release"].startswith("lifeboard@")


class TestBeforeSend:
    def test_user_input_errors_dropped(self) -> None:
        error = MissingCategoryError("no category")
        hint = {"exc_info": (MissingCategoryError, error, None)}
        assert _before_send({"message": "x"}, hint) is None

    def test_unknown_type_errors_dropped(self) -> None:
        error = UnknownItemTypeError("bad hint")
        hint = {"exc_info": (UnknownItemTypeError, error, None)}
        assert _before_send({"message": "x"}, hint) is None

    def test_other_errors_kept(self) -> None:
        error = RuntimeError("boom")
        event = {"message": "boom"}
        assert _before_send(event, {"exc_info": (RuntimeError, error, None)}) is event

    def test_events_without_exception_kept(self) -> None:
        event = {"message": "hello"}
        assert _before_send(event, {}) is event


class TestHelpers:
    def setup_method(self) -> None:
        lifeboard.sentry._initialized = False

    def teardown_method(self) -> None:
        lifeboard.sentry._initialized = False

    def test_helpers_noop_when_disabled(self) -> None:
        with patch("lifeboard.sentry.sentry_sdk") as mock_sdk:
            assert capture_exception(ValueError("x")) is None
            set_context("parse", {"preset": "general"})
            flush()
        mock_sdk.capture_exception.assert_not_called()
        mock_sdk.set_context.assert_not_called()
        mock_sdk.flush.assert_not_called()

    def test_helpers_forward_when_enabled(self) -> None:
        lifeboard.sentry._initialized = True
        with patch("lifeboard.sentry.sentry_sdk") as mock_sdk:
            mock_sdk.capture_exception.return_value = "event-id"
            assert capture_exception(ValueError("x")) == "event-id"
            set_context("parse", {"preset": "general"})
            flush(timeout=1.0)
        mock_sdk.set_context.assert_called_once_with("parse", {"preset": "general"})
        mock_sdk.flush.assert_called_once_with(timeout=1.0)
