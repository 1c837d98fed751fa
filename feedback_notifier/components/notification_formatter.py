"""
Notification formatting component for the Bodhi feedback notifier.

Turns an actionable update into the summary, body and activation URL
of a desktop notification.
"""

from ..interfaces import INotificationFormatter
from ..models.alert import FormattedAlert
from ..models.update import ActionableUpdate

MAX_TITLE_LENGTH = 200
MAX_UPDATE_TITLE_LENGTH = 120


class NotificationFormatter(INotificationFormatter):
    """Formats actionable updates into notifications."""

    def format_alert(self, actionable: ActionableUpdate) -> FormattedAlert:
        """
        Format an actionable update into a notification.

        Args:
            actionable: The update to format

        Returns:
            FormattedAlert: Notification ready for delivery
        """
        alert = FormattedAlert(
            title=self._create_title(actionable),
            message=self._create_message(actionable),
            url=actionable.url,
        )

        alert.validate()
        return alert

    def _create_title(self, actionable: ActionableUpdate) -> str:
        title = f"{actionable.update_id} is ready for feedback"
        if len(title) > MAX_TITLE_LENGTH:
            title = title[: MAX_TITLE_LENGTH - 3] + "..."
        return title

    def _create_message(self, actionable: ActionableUpdate) -> str:
        update = actionable.update
        lines = []

        packages = actionable.covered_packages or update.package_names
        label = "Package" if len(packages) == 1 else "Packages"
        lines.append(f"{label}: {', '.join(packages)}")

        if update.title and update.title.strip():
            update_title = update.title.strip()
            if len(update_title) > MAX_UPDATE_TITLE_LENGTH:
                update_title = update_title[: MAX_UPDATE_TITLE_LENGTH - 3] + "..."
            lines.append(update_title)

        submitted = f"Submitted by {update.submitter}"
        if update.submitted_at is not None:
            submitted += f" on {update.submitted_at.strftime('%Y-%m-%d')}"
        lines.append(submitted)

        lines.append(f"Karma: {update.karma:+d}" if update.karma else "Karma: 0")

        return "\n".join(lines)
