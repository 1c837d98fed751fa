"""Unit tests for data models."""

from datetime import datetime

import pytest

from feedback_notifier.models.alert import FormattedAlert
from feedback_notifier.models.config import Configuration, IdentityContext
from feedback_notifier.models.delivery import DeliveryResult
from feedback_notifier.models.package import InstalledPackage, PackageBuild


class TestInstalledPackage:
    """Test cases for InstalledPackage."""

    def test_from_source_rpm(self):
        package = InstalledPackage.from_source_rpm("bash-5.2.26-3.fc40.src.rpm")

        assert package == InstalledPackage("bash", "5.2.26", "3.fc40", "src")
        assert package.key == ("bash", "src")
        assert package.validate() is True

    def test_from_source_rpm_with_epoch(self):
        package = InstalledPackage.from_source_rpm("vim-9.1.300-1.fc40.src.rpm", epoch=2)

        assert package.epoch == 2
        assert str(package.evr) == "2:9.1.300-1.fc40"

    def test_validate_empty_name(self):
        with pytest.raises(ValueError, match="name cannot be empty"):
            InstalledPackage("", "1.0", "1", "src").validate()

    def test_hashable(self):
        packages = {
            InstalledPackage("foo", "1.0", "1", "src"),
            InstalledPackage("foo", "1.0", "1", "src"),
        }
        assert len(packages) == 1


class TestPackageBuild:
    """Test cases for PackageBuild."""

    def test_from_nvr(self):
        build = PackageBuild.from_nvr("python-requests-2.31.0-1.fc40", epoch=0)

        assert build.name == "python-requests"
        assert build.arch == "src"
        assert build.nvr == "python-requests-2.31.0-1.fc40"

    def test_from_nvr_invalid(self):
        with pytest.raises(ValueError):
            PackageBuild.from_nvr("foo-1.0")

    def test_is_newer_or_equal(self):
        installed = InstalledPackage("foo", "1.0", "1.fc40", "src")

        assert PackageBuild("foo", "1.0", "1.fc40").is_newer_or_equal(installed)
        assert PackageBuild("foo", "1.0", "2.fc40").is_newer_or_equal(installed)
        assert not PackageBuild("foo", "1.0~rc1", "1.fc40").is_newer_or_equal(installed)


class TestCandidateUpdate:
    """Test cases for CandidateUpdate."""

    def test_validate(self, sample_update):
        assert sample_update.validate() is True
        assert sample_update.package_names == ("foo",)

    def test_validate_missing_submitter(self, make_update):
        with pytest.raises(ValueError, match="submitter"):
            make_update(submitter="").validate()

    def test_validate_bad_url(self, make_update):
        with pytest.raises(ValueError, match="Invalid URL"):
            make_update(url="not a url").validate()

    @pytest.mark.parametrize("url", ["/updates/U1", 5, "ftp://bodhi.fedoraproject.org/U1"])
    def test_validate_relative_or_non_string_url(self, make_update, url):
        with pytest.raises(ValueError, match="Invalid URL"):
            make_update(url=url).validate()

    def test_validate_karma_type(self, make_update):
        with pytest.raises(ValueError, match="karma"):
            make_update(karma="2").validate()


class TestIdentityAndConfiguration:
    """Test cases for configuration models."""

    def test_identity_defaults(self):
        identity = IdentityContext("bob")

        assert identity.interests == frozenset()
        assert identity.validate() is True

    def test_identity_empty_username(self):
        with pytest.raises(ValueError, match="Username"):
            IdentityContext("  ").validate()

    def test_configuration_defaults(self, sample_configuration):
        assert sample_configuration.bodhi_url == "https://bodhi.fedoraproject.org"
        assert sample_configuration.validate() is True

    @pytest.mark.parametrize("release", ["F40", "F41C", "EPEL-9", "EPEL-8N", "ELN"])
    def test_valid_releases(self, bob, release):
        assert Configuration(identity=bob, release=release).validate() is True

    @pytest.mark.parametrize("release", ["40", "fedora", "F"])
    def test_invalid_releases(self, bob, release):
        with pytest.raises(ValueError, match="Release"):
            Configuration(identity=bob, release=release).validate()

    def test_invalid_timeout(self, bob):
        with pytest.raises(ValueError, match="Timeout"):
            Configuration(identity=bob, timeout=0).validate()

    def test_invalid_bodhi_url(self, bob):
        with pytest.raises(ValueError, match="Bodhi URL"):
            Configuration(identity=bob, bodhi_url="ftp://example.com").validate()


class TestResultModels:
    """Test cases for alert and delivery results."""

    def test_formatted_alert_validate(self, sample_formatted_alert):
        assert sample_formatted_alert.validate() is True

    def test_formatted_alert_empty_title(self):
        with pytest.raises(ValueError, match="title"):
            FormattedAlert(title=" ", message="body", url="https://example.com").validate()

    def test_delivery_result_requires_error_message(self):
        with pytest.raises(ValueError, match="error_message"):
            DeliveryResult(
                success=False, delivery_time=datetime.now(), error_message=None
            ).validate()
