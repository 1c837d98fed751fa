"""
Configuration models for the system.
"""

import re
from dataclasses import dataclass, field
from typing import FrozenSet, Optional
from urllib.parse import urlparse

DEFAULT_BODHI_URL = "https://bodhi.fedoraproject.org"

_RELEASE_PATTERN = re.compile(r"^(F\d+|EPEL-\d+(\.\d+)?N?|ELN)[CFM]?$")


@dataclass(frozen=True)
class IdentityContext:
    """The local user and the packages they care about."""

    username: str
    interests: FrozenSet[str] = field(default_factory=frozenset)

    def validate(self) -> bool:
        """Validate identity configuration."""
        if not isinstance(self.username, str) or not self.username.strip():
            raise ValueError("Username cannot be empty")

        if not isinstance(self.interests, frozenset):
            raise ValueError("Interests must be a frozenset")

        for name in self.interests:
            if not isinstance(name, str) or not name.strip():
                raise ValueError("All interests must be non-empty strings")

        return True


@dataclass(frozen=True)
class Configuration:
    """System configuration."""

    identity: IdentityContext
    release: Optional[str] = None
    bodhi_url: str = DEFAULT_BODHI_URL
    timeout: int = 30
    rows_per_page: int = 100
    log_level: str = "INFO"

    def validate(self) -> bool:
        """Validate system configuration."""
        self.identity.validate()

        if self.release is not None:
            if not isinstance(self.release, str) or not _RELEASE_PATTERN.match(
                self.release
            ):
                raise ValueError(
                    f"Release must look like 'F40' or 'EPEL-9', got: {self.release!r}"
                )

        parsed_url = urlparse(self.bodhi_url or "")
        if parsed_url.scheme not in ["http", "https"] or not parsed_url.netloc:
            raise ValueError(f"Bodhi URL must use HTTP or HTTPS: {self.bodhi_url}")

        if not isinstance(self.timeout, int) or self.timeout <= 0:
            raise ValueError("Timeout must be a positive integer")

        if not isinstance(self.rows_per_page, int) or not (
            1 <= self.rows_per_page <= 100
        ):
            raise ValueError("Rows per page must be an integer between 1 and 100")

        if self.log_level.upper() not in ["DEBUG", "INFO", "WARNING", "ERROR"]:
            raise ValueError(f"Unknown log level: {self.log_level}")

        return True
