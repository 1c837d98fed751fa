"""
Tests for error handling utilities.
"""

import pytest

from feedback_notifier.utils.error_handling import (
    ConfigError,
    ErrorCategory,
    ErrorSeverity,
    ErrorTracker,
    LocalQueryError,
    MalformedRecordError,
    NotificationDeliveryError,
    NotifierError,
    RemoteFetchError,
)


class TestErrorHierarchy:
    """Test cases for the exception classes."""

    @pytest.mark.parametrize(
        "error_class,category,fatal",
        [
            (ConfigError, ErrorCategory.CONFIGURATION, True),
            (LocalQueryError, ErrorCategory.LOCAL_QUERY, True),
            (RemoteFetchError, ErrorCategory.NETWORK, True),
            (MalformedRecordError, ErrorCategory.PARSING, False),
            (NotificationDeliveryError, ErrorCategory.NOTIFICATION, False),
        ],
    )
    def test_categories(self, error_class, category, fatal):
        error = error_class("boom")

        assert isinstance(error, NotifierError)
        assert error.category == category
        assert error.fatal is fatal


class TestErrorTracker:
    """Test cases for ErrorTracker."""

    def test_record_error(self):
        tracker = ErrorTracker()

        error_info = tracker.record_error(
            component="update_feed",
            category=ErrorCategory.PARSING,
            severity=ErrorSeverity.LOW,
            message="Update record has no alias",
            context={"page": 1},
        )

        assert error_info.component == "update_feed"
        assert error_info.exception_type == "Unknown"
        assert error_info.traceback == ""
        assert error_info.context == {"page": 1}
        assert len(tracker.errors) == 1

    def test_record_exception(self):
        tracker = ErrorTracker()

        try:
            raise MalformedRecordError("Update U-1 has no submitter")
        except MalformedRecordError as e:
            error_info = tracker.record_exception("update_feed", e)

        assert error_info.category == ErrorCategory.PARSING
        assert error_info.exception_type == "MalformedRecordError"
        assert "MalformedRecordError" in error_info.traceback
        assert tracker.count(ErrorCategory.PARSING) == 1
        assert tracker.count(ErrorCategory.NOTIFICATION) == 0

    def test_max_errors(self):
        tracker = ErrorTracker(max_errors=2)

        for n in range(3):
            tracker.record_exception("notifier", NotificationDeliveryError(f"failed {n}"))

        assert [e.message for e in tracker.errors] == ["failed 1", "failed 2"]

    def test_error_stats(self):
        tracker = ErrorTracker()
        tracker.record_exception("update_feed", MalformedRecordError("bad record"))
        tracker.record_exception(
            "notifier", NotificationDeliveryError("no bus"), severity=ErrorSeverity.MEDIUM
        )

        stats = tracker.get_error_stats()

        assert stats["total_errors"] == 2
        assert stats["component_error_counts"] == {"update_feed": 1, "notifier": 1}
        assert stats["severity_breakdown"]["medium"] == 1
        assert stats["category_breakdown"]["parsing"] == 1
        assert stats["error_counts"]["notifier.notification.medium"] == 1
