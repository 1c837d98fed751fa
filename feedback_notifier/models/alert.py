"""
Notification formatting models.
"""

from dataclasses import dataclass
from urllib.parse import urlparse


@dataclass(frozen=True)
class FormattedAlert:
    """Notification ready for delivery."""

    title: str
    message: str
    url: str

    def validate(self) -> bool:
        """Validate formatted alert data."""
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValueError("title cannot be empty")

        if len(self.title) > 200:
            raise ValueError("title too long (max 200 characters)")

        if not isinstance(self.message, str) or not self.message.strip():
            raise ValueError("message cannot be empty")

        parsed_url = urlparse(self.url or "")
        if not parsed_url.scheme or not parsed_url.netloc:
            raise ValueError(f"Invalid URL format: {self.url}")

        return True
