"""
Pytest configuration and shared fixtures.

This module provides common fixtures for the Bodhi feedback notifier
test suite.
"""

from datetime import datetime

import pytest

from feedback_notifier.models.alert import FormattedAlert
from feedback_notifier.models.config import Configuration, IdentityContext
from feedback_notifier.models.package import InstalledPackage, PackageBuild
from feedback_notifier.models.update import ActionableUpdate, CandidateUpdate


@pytest.fixture
def make_update():
    """Factory for CandidateUpdate records."""

    def _make_update(
        update_id="FEDORA-2024-0001",
        builds=(("foo", "1.1", "1"),),
        submitter="alice",
        commenters=(),
        arch="src",
        **kwargs,
    ):
        return CandidateUpdate(
            update_id=update_id,
            builds=tuple(
                PackageBuild(name=n, version=v, release=r, arch=arch)
                for n, v, r in builds
            ),
            submitter=submitter,
            commenters=frozenset(commenters),
            url=kwargs.pop(
                "url", f"https://bodhi.fedoraproject.org/updates/{update_id}"
            ),
            **kwargs,
        )

    return _make_update


@pytest.fixture
def installed_foo():
    """A system with only foo-1.0-1 installed."""
    return {InstalledPackage(name="foo", version="1.0", release="1", arch="src")}


@pytest.fixture
def bob():
    """Identity without interests."""
    return IdentityContext(username="bob")


@pytest.fixture
def sample_configuration(bob):
    """Create a sample Configuration for testing."""
    return Configuration(identity=bob, release="F40")


@pytest.fixture
def sample_update(make_update):
    """Create a sample CandidateUpdate for testing."""
    return make_update(
        update_id="FEDORA-2024-abc123",
        builds=(("foo", "1.1", "1.fc40"),),
        title="foo-1.1-1.fc40",
        submitted_at=datetime(2024, 5, 1, 12, 0, 0),
        karma=2,
    )


@pytest.fixture
def sample_actionable(sample_update):
    """Create a sample ActionableUpdate for testing."""
    return ActionableUpdate(update=sample_update, covered_packages=("foo",))


@pytest.fixture
def sample_formatted_alert():
    """Create a sample FormattedAlert for testing."""
    return FormattedAlert(
        title="FEDORA-2024-abc123 is ready for feedback",
        message="Package: foo\nSubmitted by alice\nKarma: 0",
        url="https://bodhi.fedoraproject.org/updates/FEDORA-2024-abc123",
    )
