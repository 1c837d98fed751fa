"""
Filter result models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .update import CandidateUpdate


class SkipReason(Enum):
    """Why a candidate update was not kept."""

    NOT_INSTALLED = "not_installed"
    SELF_SUBMITTED = "self_submitted"
    ALREADY_COMMENTED = "already_commented"
    NOT_INTERESTING = "not_interesting"
    DUPLICATE = "duplicate"


@dataclass(frozen=True)
class FilterResult:
    """Result of applying the relevance rules to one candidate update."""

    update: CandidateUpdate
    passes_filters: bool
    skip_reason: Optional[SkipReason] = None
    covered_packages: Tuple[str, ...] = field(default_factory=tuple)
