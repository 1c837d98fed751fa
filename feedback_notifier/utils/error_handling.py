"""
Error handling utilities for the Bodhi feedback notifier.

This module defines the exception hierarchy used across the pipeline and
an error tracker that collects the non-fatal errors of a single run so
they can be reported in the run summary.
"""

import traceback
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .logging import get_logger


class ErrorSeverity(Enum):
    """Error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification."""

    CONFIGURATION = "configuration"
    LOCAL_QUERY = "local_query"
    NETWORK = "network"
    PARSING = "parsing"
    NOTIFICATION = "notification"
    SYSTEM = "system"


class NotifierError(Exception):
    """Base class for all errors raised by the notifier."""

    category = ErrorCategory.SYSTEM
    fatal = True


class ConfigError(NotifierError):
    """Configuration is missing or invalid."""

    category = ErrorCategory.CONFIGURATION


class LocalQueryError(NotifierError):
    """The local package database could not be queried."""

    category = ErrorCategory.LOCAL_QUERY


class RemoteFetchError(NotifierError):
    """The update feed could not be fetched or understood."""

    category = ErrorCategory.NETWORK


class MalformedRecordError(NotifierError):
    """A single update record from the feed cannot be interpreted."""

    category = ErrorCategory.PARSING
    fatal = False


class NotificationDeliveryError(NotifierError):
    """A single notification could not be delivered."""

    category = ErrorCategory.NOTIFICATION
    fatal = False


@dataclass
class ErrorInfo:
    """Information about an error occurrence."""

    timestamp: datetime
    component: str
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    exception_type: str
    traceback: str
    context: Dict[str, Any]


class ErrorTracker:
    """
    Collects errors recorded during a run.

    One tracker is created per run and handed to the components that can
    hit non-fatal errors, so nothing outlives the process.
    """

    def __init__(self, max_errors: int = 1000):
        """
        Initialize error tracker.

        Args:
            max_errors: Maximum number of errors to keep in memory
        """
        self.max_errors = max_errors
        self.errors: List[ErrorInfo] = []
        self.error_counts: Dict[str, int] = {}
        self.component_errors: Dict[str, List[ErrorInfo]] = {}
        self.logger = get_logger("error_tracker")

    def record_error(
        self,
        component: str,
        category: ErrorCategory,
        severity: ErrorSeverity,
        message: str,
        exception: Optional[Exception] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> ErrorInfo:
        """
        Record an error occurrence.

        Args:
            component: Component where error occurred
            category: Error category
            severity: Error severity
            message: Error message
            exception: Exception object if available
            context: Additional context information

        Returns:
            ErrorInfo object
        """
        error_info = ErrorInfo(
            timestamp=datetime.now(),
            component=component,
            category=category,
            severity=severity,
            message=message,
            exception_type=type(exception).__name__ if exception else "Unknown",
            traceback="".join(traceback.format_exception(exception))
            if exception
            else "",
            context=context or {},
        )

        self.errors.append(error_info)
        if len(self.errors) > self.max_errors:
            self.errors.pop(0)

        error_key = f"{component}.{category.value}.{severity.value}"
        self.error_counts[error_key] = self.error_counts.get(error_key, 0) + 1

        self.component_errors.setdefault(component, []).append(error_info)

        self.logger.warning(
            f"Error recorded: {message}",
            extra={
                "component": component,
                "category": category.value,
                "severity": severity.value,
                "exception_type": error_info.exception_type,
                "context": context,
            },
        )

        return error_info

    def record_exception(
        self,
        component: str,
        exception: NotifierError,
        severity: ErrorSeverity = ErrorSeverity.LOW,
        context: Optional[Dict[str, Any]] = None,
    ) -> ErrorInfo:
        """Record a notifier exception using its own category."""
        return self.record_error(
            component=component,
            category=exception.category,
            severity=severity,
            message=str(exception),
            exception=exception,
            context=context,
        )

    def count(self, category: ErrorCategory) -> int:
        """Number of recorded errors in a category."""
        return len([e for e in self.errors if e.category == category])

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics."""
        return {
            "total_errors": len(self.errors),
            "error_counts": self.error_counts.copy(),
            "component_error_counts": {
                component: len(errors)
                for component, errors in self.component_errors.items()
            },
            "severity_breakdown": {
                severity.value: len([e for e in self.errors if e.severity == severity])
                for severity in ErrorSeverity
            },
            "category_breakdown": {
                category.value: self.count(category) for category in ErrorCategory
            },
        }
