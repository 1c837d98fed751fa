"""
Data models for the Bodhi feedback notifier.

This module contains the data classes used throughout the application
for representing installed packages, candidate updates, configuration
and delivery state.
"""

from .alert import FormattedAlert
from .config import DEFAULT_BODHI_URL, Configuration, IdentityContext
from .delivery import DeliveryResult, RunSummary
from .filter import FilterResult, SkipReason
from .package import InstalledPackage, PackageBuild
from .update import ActionableUpdate, CandidateUpdate

__all__ = [
    "InstalledPackage",
    "PackageBuild",
    "CandidateUpdate",
    "ActionableUpdate",
    "FilterResult",
    "SkipReason",
    "FormattedAlert",
    "DeliveryResult",
    "RunSummary",
    "Configuration",
    "IdentityContext",
    "DEFAULT_BODHI_URL",
]
