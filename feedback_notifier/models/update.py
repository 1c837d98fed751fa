"""
Update data models for the Bodhi feedback notifier.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, Optional, Tuple
from urllib.parse import urlparse

from .package import PackageBuild


@dataclass(frozen=True)
class CandidateUpdate:
    """A pending update in the testing repository."""

    update_id: str
    builds: Tuple[PackageBuild, ...]
    submitter: str
    commenters: FrozenSet[str]
    url: str
    title: Optional[str] = None
    submitted_at: Optional[datetime] = None
    karma: int = 0

    @property
    def package_names(self) -> Tuple[str, ...]:
        return tuple(build.name for build in self.builds)

    def validate(self) -> bool:
        """Validate the candidate update data."""
        if not self.update_id or not self.update_id.strip():
            raise ValueError("Update ID cannot be empty")

        if not self.submitter or not self.submitter.strip():
            raise ValueError("Update submitter cannot be empty")

        if not isinstance(self.builds, tuple):
            raise ValueError("Update builds must be a tuple")

        if not isinstance(self.commenters, frozenset):
            raise ValueError("Update commenters must be a frozenset")

        if not isinstance(self.url, str):
            raise ValueError(f"Invalid URL format: {self.url!r}")

        parsed_url = urlparse(self.url)
        if parsed_url.scheme not in ["http", "https"] or not parsed_url.netloc:
            raise ValueError(f"Invalid URL format: {self.url}")

        if isinstance(self.karma, bool) or not isinstance(self.karma, int):
            raise ValueError(f"Update karma must be an integer, got: {self.karma!r}")

        return True


@dataclass(frozen=True)
class ActionableUpdate:
    """A candidate update the local user should give feedback on."""

    update: CandidateUpdate
    covered_packages: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def update_id(self) -> str:
        return self.update.update_id

    @property
    def url(self) -> str:
        return self.update.url
