"""
Bodhi update feed client.

Fetches the updates currently in testing for a release and turns them
into CandidateUpdate records. Fetching is single-shot: any network or
format failure aborts the run with RemoteFetchError, while individual
records that cannot be interpreted are logged and skipped.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests
from dateutil import parser as date_parser

from .. import __version__
from ..interfaces import IUpdateFeedSource
from ..models.config import DEFAULT_BODHI_URL
from ..models.package import PackageBuild
from ..models.update import CandidateUpdate
from ..utils.error_handling import (
    ErrorTracker,
    MalformedRecordError,
    RemoteFetchError,
)

logger = logging.getLogger(__name__)


class BodhiUpdateFeed(IUpdateFeedSource):
    """Reads testing updates from the Bodhi REST API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BODHI_URL,
        timeout: int = 30,
        rows_per_page: int = 100,
        max_pages: int = 50,
        error_tracker: Optional[ErrorTracker] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the feed client.

        Args:
            base_url: Bodhi server URL
            timeout: Request timeout in seconds
            rows_per_page: Page size requested from Bodhi (max 100)
            max_pages: Upper bound on the number of pages read
            error_tracker: Collects skipped records
            session: HTTP session to use, mainly for tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.rows_per_page = rows_per_page
        self.max_pages = max_pages
        self.error_tracker = error_tracker
        self.malformed_count = 0

        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": f"bodhi-feedback-notifier/{__version__}",
                "Accept": "application/json",
            }
        )

    def fetch_updates(self, release: str) -> List[CandidateUpdate]:
        """
        Return all testing updates for ``release``, in feed order.

        Raises:
            RemoteFetchError: If any page cannot be fetched or understood
        """
        updates: List[CandidateUpdate] = []
        page = 1
        pages = 1

        while page <= pages and page <= self.max_pages:
            data = self._fetch_page(release, page)

            for record in data["updates"]:
                update = self._parse_record(record)
                if update is not None:
                    updates.append(update)

            pages = data.get("pages") or 1
            if not isinstance(pages, int):
                raise RemoteFetchError(f"Unexpected 'pages' value from Bodhi: {pages!r}")
            page += 1

        if pages > self.max_pages:
            logger.warning(
                f"Bodhi reported {pages} pages, only the first {self.max_pages} were read"
            )

        logger.info(f"Fetched {len(updates)} testing updates for {release}")
        return updates

    def _fetch_page(self, release: str, page: int) -> Dict[str, Any]:
        """Fetch and sanity-check one page of results."""
        url = f"{self.base_url}/updates/"
        params = {
            "releases": release,
            "status": "testing",
            "content_type": "rpm",
            "rows_per_page": self.rows_per_page,
            "page": page,
        }
        logger.debug(f"Fetching Bodhi updates page {page} for {release}")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.Timeout as e:
            raise RemoteFetchError(f"Timeout fetching updates from {url}") from e

        except requests.exceptions.ConnectionError as e:
            raise RemoteFetchError(f"Connection error fetching updates from {url}: {e}") from e

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            raise RemoteFetchError(f"HTTP error {status} fetching updates from {url}") from e

        except requests.exceptions.RequestException as e:
            raise RemoteFetchError(f"Error fetching updates from {url}: {e}") from e

        except ValueError as e:
            raise RemoteFetchError(f"Bodhi returned invalid JSON: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("updates"), list):
            raise RemoteFetchError("Bodhi response does not contain an 'updates' list")

        return data

    def _parse_record(self, record: Any) -> Optional[CandidateUpdate]:
        """Parse one record, skipping it with a warning if it is malformed."""
        try:
            return self.parse_update(record)
        except MalformedRecordError as e:
            self.malformed_count += 1
            logger.warning(f"Skipping malformed update record: {e}")
            if self.error_tracker is not None:
                self.error_tracker.record_exception("update_feed", e)
            return None

    def parse_update(self, record: Any) -> CandidateUpdate:
        """
        Convert a Bodhi update record into a CandidateUpdate.

        Raises:
            MalformedRecordError: If the record lacks an alias or submitter,
                or a field has the wrong type
        """
        if not isinstance(record, dict):
            raise MalformedRecordError(f"Update record is not an object: {record!r}")

        alias = record.get("alias")
        if not isinstance(alias, str) or not alias.strip():
            raise MalformedRecordError("Update record has no alias")

        submitter = _user_name(record.get("user"))
        if not submitter:
            raise MalformedRecordError(f"Update {alias} has no submitter")

        raw_comments = _list_field(alias, record, "comments")
        commenters = frozenset(
            name
            for name in (
                _user_name(comment.get("user"))
                for comment in raw_comments
                if isinstance(comment, dict)
            )
            if name
        )

        builds = tuple(self._parse_builds(alias, _list_field(alias, record, "builds")))
        if not builds:
            logger.warning(f"Update {alias} has no usable builds")

        title = record.get("title")
        update = CandidateUpdate(
            update_id=alias,
            builds=builds,
            submitter=submitter,
            commenters=commenters,
            url=record.get("url") or f"{self.base_url}/updates/{alias}",
            title=title if isinstance(title, str) else None,
            submitted_at=_parse_date(record.get("date_submitted")),
            karma=record.get("karma") or 0,
        )

        try:
            update.validate()
        except ValueError as e:
            raise MalformedRecordError(f"Update {alias}: {e}") from e

        return update

    def _parse_builds(self, alias: str, raw_builds: List[Any]) -> List[PackageBuild]:
        builds = []
        for raw_build in raw_builds:
            if not isinstance(raw_build, dict):
                logger.warning(f"Ignoring non-object build in update {alias}")
                continue
            try:
                builds.append(
                    PackageBuild.from_nvr(
                        raw_build.get("nvr") or "", epoch=int(raw_build.get("epoch") or 0)
                    )
                )
            except (TypeError, ValueError) as e:
                logger.warning(f"Ignoring build in update {alias}: {e}")
        return builds


def _user_name(user: Any) -> Optional[str]:
    if isinstance(user, dict):
        name = user.get("name")
        if isinstance(name, str) and name.strip():
            return name
    return None


def _parse_date(value: Any) -> Optional[datetime]:
    if not value:
        return None
    try:
        return date_parser.parse(value)
    except (TypeError, ValueError, OverflowError):
        logger.debug(f"Unparsable date in update record: {value!r}")
        return None


def _list_field(alias: str, record: Dict[str, Any], key: str) -> List[Any]:
    value = record.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedRecordError(
            f"Update {alias} has a non-list '{key}' field: {type(value).__name__}"
        )
    return value
