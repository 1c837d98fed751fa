"""
Protocol interfaces for the Bodhi feedback notifier.

This module defines the protocol interfaces that establish the system
boundaries between the sources, the relevance filter and the notifier,
and allow each of them to be replaced in tests.
"""

from typing import TYPE_CHECKING, List, Protocol, Set

from .models.alert import FormattedAlert
from .models.delivery import DeliveryResult
from .models.package import InstalledPackage
from .models.update import ActionableUpdate, CandidateUpdate

if TYPE_CHECKING:
    from .models.config import Configuration


class IInstalledPackageSource(Protocol):
    """Protocol for querying the local package database."""

    def get_installed_packages(self) -> Set[InstalledPackage]:
        """Return every installed package."""
        ...

    def detect_release(self) -> str:
        """Return the Bodhi release name of the running system."""
        ...


class IUpdateFeedSource(Protocol):
    """Protocol for fetching candidate updates from the testing feed."""

    def fetch_updates(self, release: str) -> List[CandidateUpdate]:
        """Return the updates currently in testing for ``release``."""
        ...


class INotificationFormatter(Protocol):
    """Protocol for rendering actionable updates."""

    def format_alert(self, actionable: ActionableUpdate) -> FormattedAlert:
        """Render one actionable update as a notification."""
        ...


class INotifier(Protocol):
    """Protocol for delivering notifications."""

    def send_alert(self, alert: FormattedAlert) -> DeliveryResult:
        """Deliver one notification."""
        ...

    def test_connection(self) -> bool:
        """Check that notifications can be delivered at all."""
        ...


class IConfigurationManager(Protocol):
    """Protocol for loading system configuration."""

    def load_config(self) -> "Configuration":
        """Load and validate configuration."""
        ...
