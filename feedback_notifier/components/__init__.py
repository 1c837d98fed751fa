"""
Core components for the Bodhi feedback notifier.

This module contains the components that query installed packages,
fetch the testing feed, select relevant updates and notify the user.
"""

from .installed_packages import RpmPackageSource
from .notification_formatter import NotificationFormatter
from .notifier import BaseNotifier, ConsoleNotifier, DesktopNotifier, NotifierFactory
from .relevance_filter import RelevanceFilter, filter_updates
from .update_feed import BodhiUpdateFeed

__all__ = [
    "RpmPackageSource",
    "BodhiUpdateFeed",
    "RelevanceFilter",
    "filter_updates",
    "NotificationFormatter",
    "BaseNotifier",
    "DesktopNotifier",
    "ConsoleNotifier",
    "NotifierFactory",
]
