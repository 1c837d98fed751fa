"""
Notification delivery for the Bodhi feedback notifier.

This module delivers formatted notifications to the desktop, or to the
console for dry runs. Every notification is delivered independently: a
failure is reported in its DeliveryResult and never stops the others.
"""

import html
import logging
import shlex
import shutil
import subprocess
import sys
from abc import abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional, TextIO

from ..interfaces import INotifier
from ..models.alert import FormattedAlert
from ..models.delivery import DeliveryResult
from ..utils.error_handling import (
    ErrorTracker,
    NotificationDeliveryError,
)

logger = logging.getLogger(__name__)


class BaseNotifier(INotifier):
    """Base class for notifiers with common result handling."""

    def send_alert(self, alert: FormattedAlert) -> DeliveryResult:
        """
        Send one notification.

        Args:
            alert: Formatted notification to send

        Returns:
            DeliveryResult: Result of delivery attempt
        """
        try:
            self._send_message(alert)
        except NotificationDeliveryError as e:
            logger.error(f"Failed to deliver notification '{alert.title}': {e}")
            result = DeliveryResult(
                success=False,
                delivery_time=datetime.now(),
                error_message=str(e)[:500] or "Unknown delivery error",
            )
            result.validate()
            return result

        logger.info(f"Notification delivered: {alert.title}")
        result = DeliveryResult(
            success=True, delivery_time=datetime.now(), error_message=None
        )
        result.validate()
        return result

    def notify_all(
        self,
        alerts: Iterable[FormattedAlert],
        error_tracker: Optional[ErrorTracker] = None,
    ) -> List[DeliveryResult]:
        """Send every alert in order, whatever happens to the previous ones."""
        results = []
        for alert in alerts:
            result = self.send_alert(alert)
            if not result.success and error_tracker is not None:
                error_tracker.record_exception(
                    "notifier",
                    NotificationDeliveryError(result.error_message),
                    context={"title": alert.title, "url": alert.url},
                )
            results.append(result)
        return results

    @abstractmethod
    def _send_message(self, alert: FormattedAlert) -> None:
        """
        Notifier-specific sending implementation.

        Raises:
            NotificationDeliveryError: If sending fails
        """

    @abstractmethod
    def test_connection(self) -> bool:
        """Check that notifications can be delivered."""


class DesktopNotifier(BaseNotifier):
    """
    Freedesktop notifications through ``notify-send``.

    Each notification is shown by a detached helper that waits for the
    user to activate it and then opens the update URL with ``xdg-open``,
    so the run itself never blocks on the desktop session.
    """

    def __init__(
        self,
        app_name: str = "Bodhi Feedback",
        icon: str = "dialog-information",
        notify_command: str = "notify-send",
        open_command: str = "xdg-open",
    ):
        """
        Initialize the desktop notifier.

        Args:
            app_name: Application name shown by the notification server
            icon: Icon name or path
            notify_command: notify-send executable
            open_command: Command that opens a URL in the default handler
        """
        self.app_name = app_name
        self.icon = icon
        self.notify_command = notify_command
        self.open_command = open_command

    def build_command(self, alert: FormattedAlert) -> List[str]:
        """Build the helper command line for one notification."""
        body = (
            f"{html.escape(alert.message)}\n"
            f'<a href="{html.escape(alert.url)}">{html.escape(alert.url)}</a>'
        )
        notify = [
            self.notify_command,
            f"--app-name={self.app_name}",
            f"--icon={self.icon}",
            "--wait",
            "--action=default=Open update",
            alert.title,
            body,
        ]
        script = (
            f"action=$({shlex.join(notify)}) && "
            f'[ "$action" = default ] && '
            f"exec {shlex.join([self.open_command, alert.url])}"
        )
        return ["sh", "-c", script]

    def _send_message(self, alert: FormattedAlert) -> None:
        if shutil.which(self.notify_command) is None:
            raise NotificationDeliveryError(f"{self.notify_command} is not installed")

        command = self.build_command(alert)
        logger.debug(f"Spawning notification helper for {alert.url}")

        try:
            subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            raise NotificationDeliveryError(
                f"Failed to start notification helper: {e}"
            ) from e

    def test_connection(self) -> bool:
        """Check that notify-send and the URL opener are available."""
        for command in (self.notify_command, self.open_command):
            if shutil.which(command) is None:
                logger.error(f"{command} not found in PATH")
                return False
        return True


class ConsoleNotifier(BaseNotifier):
    """Prints notifications instead of showing them (dry run)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def _send_message(self, alert: FormattedAlert) -> None:
        stream = self.stream or sys.stdout
        try:
            stream.write(f"{alert.title}\n{alert.message}\n{alert.url}\n\n")
            stream.flush()
        except (OSError, ValueError) as e:
            raise NotificationDeliveryError(f"Failed to write notification: {e}") from e

    def test_connection(self) -> bool:
        return True


class NotifierFactory:
    """Factory for creating notifiers."""

    @staticmethod
    def create_notifier(kind: str = "desktop", **options) -> BaseNotifier:
        """
        Create a notifier.

        Args:
            kind: "desktop" or "console"
            options: Notifier-specific keyword arguments

        Raises:
            ValueError: If the kind is not supported
        """
        kind = kind.lower()

        if kind == "desktop":
            return DesktopNotifier(**options)
        elif kind == "console":
            return ConsoleNotifier(**options)
        else:
            raise ValueError(f"Unsupported notifier: {kind}")
