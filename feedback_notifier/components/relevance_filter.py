"""Relevance filter selecting the testing updates a user should review.

Everything in this module is pure: results depend only on the arguments,
nothing is logged or fetched, and bad candidate records are skipped
rather than raised.
"""

from typing import Dict, Iterable, List, Sequence, Set, Tuple

from ..models.config import IdentityContext
from ..models.filter import FilterResult, SkipReason
from ..models.package import InstalledPackage, PackageBuild
from ..models.update import ActionableUpdate, CandidateUpdate
from ..utils.error_handling import ConfigError


class RelevanceFilter:
    """Applies the relevance rules for one run."""

    def __init__(
        self, installed: Iterable[InstalledPackage], identity: IdentityContext
    ):
        """Initialize the filter with the installed set and the local identity."""
        try:
            identity.validate()
        except ValueError as e:
            raise ConfigError(str(e)) from e

        self.identity = identity
        self.installed = self._build_lookup(installed)

    @staticmethod
    def _build_lookup(
        installed: Iterable[InstalledPackage],
    ) -> Dict[Tuple[str, str], InstalledPackage]:
        """Index installed packages by (name, arch); the newest EVR wins."""
        lookup: Dict[Tuple[str, str], InstalledPackage] = {}
        for package in installed:
            existing = lookup.get(package.key)
            if existing is None or package.evr > existing.evr:
                lookup[package.key] = package
        return lookup

    def covered_builds(self, candidate: CandidateUpdate) -> List[PackageBuild]:
        """Builds of ``candidate`` that are at least as new as what is installed."""
        covered = []
        for build in candidate.builds or ():
            package = self.installed.get(build.key)
            if package is not None and build.is_newer_or_equal(package):
                covered.append(build)
        return covered

    def evaluate(self, candidate: CandidateUpdate) -> FilterResult:
        """Apply the relevance rules to a single candidate."""
        covered = self.covered_builds(candidate)
        if not covered:
            return FilterResult(candidate, False, SkipReason.NOT_INSTALLED)

        covered_names = tuple(sorted({build.name for build in covered}))
        username = self.identity.username

        if candidate.submitter == username:
            return FilterResult(
                candidate, False, SkipReason.SELF_SUBMITTED, covered_names
            )

        if username in (candidate.commenters or ()):
            return FilterResult(
                candidate, False, SkipReason.ALREADY_COMMENTED, covered_names
            )

        if self.identity.interests and not self.identity.interests.intersection(
            covered_names
        ):
            return FilterResult(
                candidate, False, SkipReason.NOT_INTERESTING, covered_names
            )

        return FilterResult(candidate, True, None, covered_names)

    def evaluate_all(self, candidates: Sequence[CandidateUpdate]) -> List[FilterResult]:
        """Evaluate candidates in order; repeated update IDs are marked as duplicates."""
        seen: Set[str] = set()
        results = []
        for candidate in candidates:
            if candidate.update_id in seen:
                results.append(FilterResult(candidate, False, SkipReason.DUPLICATE))
                continue
            seen.add(candidate.update_id)
            results.append(self.evaluate(candidate))
        return results


def to_actionable(results: Iterable[FilterResult]) -> List[ActionableUpdate]:
    """Keep the passing results, preserving their order."""
    return [
        ActionableUpdate(update=result.update, covered_packages=result.covered_packages)
        for result in results
        if result.passes_filters
    ]


def filter_updates(
    installed: Iterable[InstalledPackage],
    candidates: Sequence[CandidateUpdate],
    identity: IdentityContext,
) -> List[ActionableUpdate]:
    """Return the actionable updates in first-seen order."""
    return to_actionable(RelevanceFilter(installed, identity).evaluate_all(candidates))
