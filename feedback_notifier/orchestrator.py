"""
Run orchestrator for the Bodhi feedback notifier.

This module wires configuration, the installed package source, the
update feed, the relevance filter and the notifier into a single pass.
Every collaborator is created per run unless one is injected.
"""

from pathlib import Path
from typing import List, Optional, Union

from .components.installed_packages import RpmPackageSource
from .components.notification_formatter import NotificationFormatter
from .components.notifier import BaseNotifier, NotifierFactory
from .components.relevance_filter import RelevanceFilter, to_actionable
from .components.update_feed import BodhiUpdateFeed
from .interfaces import (
    IConfigurationManager,
    IInstalledPackageSource,
    INotificationFormatter,
    IUpdateFeedSource,
)
from .models.alert import FormattedAlert
from .models.config import Configuration
from .models.delivery import RunSummary
from .models.filter import FilterResult
from .models.update import ActionableUpdate
from .services.config_manager import ConfigurationManager
from .utils.error_handling import (
    ErrorCategory,
    ErrorTracker,
    MalformedRecordError,
)
from .utils.logging import get_logger, set_log_level


class RunOrchestrator:
    """
    Coordinates one notification run.

    Fatal errors from configuration or the sources propagate to the
    caller before anything is filtered; delivery problems are recorded
    and do not stop the run.
    """

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        release: Optional[str] = None,
        dry_run: bool = False,
        verbose: bool = False,
        config_manager: Optional[IConfigurationManager] = None,
        package_source: Optional[IInstalledPackageSource] = None,
        update_feed: Optional[IUpdateFeedSource] = None,
        formatter: Optional[INotificationFormatter] = None,
        notifier: Optional[BaseNotifier] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            config_path: Path to configuration file. If None, uses default paths.
            release: Bodhi release to query, overriding config and detection
            dry_run: Print notifications instead of showing them
            verbose: Keep DEBUG logging regardless of the configured level
        """
        self.logger = get_logger("orchestrator")
        self.error_tracker = ErrorTracker()

        self.config_path = config_path
        self.release = release
        self.dry_run = dry_run
        self.verbose = verbose

        self._config_manager = config_manager
        self._package_source = package_source
        self._update_feed = update_feed
        self._formatter = formatter
        self._notifier = notifier

    def _load_config(self) -> Configuration:
        if self._config_manager is None:
            self._config_manager = ConfigurationManager(self.config_path)

        config = self._config_manager.load_config()
        if not self.verbose:
            set_log_level(config.log_level)

        self.logger.info(
            "Configuration loaded",
            extra={
                "username": config.identity.username,
                "interests": sorted(config.identity.interests),
            },
        )
        return config

    def _setup_components(self, config: Configuration) -> None:
        if self._package_source is None:
            self._package_source = RpmPackageSource()

        if self._update_feed is None:
            self._update_feed = BodhiUpdateFeed(
                base_url=config.bodhi_url,
                timeout=config.timeout,
                rows_per_page=config.rows_per_page,
                error_tracker=self.error_tracker,
            )

        if self._formatter is None:
            self._formatter = NotificationFormatter()

        if self._notifier is None:
            self._notifier = NotifierFactory.create_notifier(
                "console" if self.dry_run else "desktop"
            )
            if not self._notifier.test_connection():
                self.logger.warning("Notification service may be unavailable")

    def _resolve_release(self, config: Configuration) -> str:
        release = self.release or config.release
        if release:
            return release
        return self._package_source.detect_release()

    def _log_results(self, results: List[FilterResult]) -> None:
        for result in results:
            if result.passes_filters:
                self.logger.info(
                    f"Update {result.update.update_id} needs feedback",
                    extra={"packages": list(result.covered_packages)},
                )
            else:
                self.logger.debug(
                    f"Skipping update {result.update.update_id}",
                    extra={"reason": result.skip_reason.value},
                )

    def _format_alerts(self, actionable: List[ActionableUpdate]) -> List[FormattedAlert]:
        alerts = []
        for update in actionable:
            try:
                alerts.append(self._formatter.format_alert(update))
            except ValueError as e:
                self.error_tracker.record_exception(
                    "formatter",
                    MalformedRecordError(f"Update {update.update_id}: {e}"),
                    context={"url": update.url},
                )
        return alerts

    def run(self) -> RunSummary:
        """
        Execute one run.

        Returns:
            RunSummary: Counters for the completed run

        Raises:
            ConfigError, LocalQueryError, RemoteFetchError: On fatal errors
        """
        config = self._load_config()
        self._setup_components(config)

        release = self._resolve_release(config)
        installed = self._package_source.get_installed_packages()
        candidates = self._update_feed.fetch_updates(release)

        relevance_filter = RelevanceFilter(installed, config.identity)
        results = relevance_filter.evaluate_all(candidates)
        self._log_results(results)
        actionable = to_actionable(results)

        alerts = self._format_alerts(actionable)
        deliveries = self._notifier.notify_all(alerts, self.error_tracker)

        summary = RunSummary(
            installed=len(installed),
            candidates=len(candidates),
            actionable=len(actionable),
            notified=len([d for d in deliveries if d.success]),
            failed=len([d for d in deliveries if not d.success]),
            malformed=self.error_tracker.count(ErrorCategory.PARSING),
        )

        self.logger.info(
            "Run completed",
            extra={
                "release": release,
                "installed": summary.installed,
                "candidates": summary.candidates,
                "actionable": summary.actionable,
                "notified": summary.notified,
                "failed": summary.failed,
                "malformed": summary.malformed,
                "errors": self.error_tracker.get_error_stats()["category_breakdown"],
            },
        )
        return summary
