"""
Unit tests for the rpm-backed installed package source.
"""

import subprocess
from unittest.mock import Mock, patch

import pytest

from feedback_notifier.components.installed_packages import QUERY_FORMAT, RpmPackageSource
from feedback_notifier.models.package import InstalledPackage
from feedback_notifier.utils.error_handling import LocalQueryError


def completed(stdout="", returncode=0, stderr=""):
    result = Mock()
    result.stdout = stdout
    result.stderr = stderr
    result.returncode = returncode
    return result


class TestRpmPackageSource:
    """Test cases for RpmPackageSource."""

    def test_init(self):
        source = RpmPackageSource()

        assert source.rpm_command == "rpm"
        assert source.timeout == 60

    @patch("subprocess.run")
    def test_get_installed_packages(self, mock_run):
        """Test parsing of the rpm query output."""
        mock_run.return_value = completed(
            "bash-5.2.26-3.fc40.src.rpm\t0\n"
            "python-requests-2.31.0-1.fc40.src.rpm\t0\n"
            "python-requests-2.31.0-1.fc40.src.rpm\t0\n"
            "vim-9.1.300-1.fc40.src.rpm\t2\n"
        )

        packages = RpmPackageSource().get_installed_packages()

        assert packages == {
            InstalledPackage("bash", "5.2.26", "3.fc40", "src"),
            InstalledPackage("python-requests", "2.31.0", "1.fc40", "src"),
            InstalledPackage("vim", "9.1.300", "1.fc40", "src", epoch=2),
        }
        mock_run.assert_called_once_with(
            ["rpm", "--query", "--all", "--queryformat", QUERY_FORMAT],
            capture_output=True,
            text=True,
            timeout=60,
        )

    @patch("subprocess.run")
    def test_skips_packages_without_source(self, mock_run):
        """Test that gpg-pubkey style entries are ignored."""
        mock_run.return_value = completed("(none)\t0\n\nbash-5.2.26-3.fc40.src.rpm\t0\n")

        packages = RpmPackageSource().get_installed_packages()

        assert {p.name for p in packages} == {"bash"}

    @patch("subprocess.run")
    def test_skips_unparsable_lines(self, mock_run):
        mock_run.return_value = completed("garbage\t0\nbash-5.2.26-3.fc40.src.rpm\t0\n")

        packages = RpmPackageSource().get_installed_packages()

        assert {p.name for p in packages} == {"bash"}

    @patch("subprocess.run")
    def test_rpm_missing(self, mock_run):
        mock_run.side_effect = FileNotFoundError("rpm")

        with pytest.raises(LocalQueryError, match="not available"):
            RpmPackageSource().get_installed_packages()

    @patch("subprocess.run")
    def test_rpm_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="rpm", timeout=60)

        with pytest.raises(LocalQueryError, match="timed out"):
            RpmPackageSource().get_installed_packages()

    @patch("subprocess.run")
    def test_rpm_failure(self, mock_run):
        mock_run.return_value = completed(returncode=1, stderr="error: rpmdb open failed")

        with pytest.raises(LocalQueryError, match="rpmdb open failed"):
            RpmPackageSource().get_installed_packages()

    @patch("subprocess.run")
    def test_detect_release(self, mock_run):
        mock_run.return_value = completed("40\n")

        assert RpmPackageSource().detect_release() == "F40"
        assert mock_run.call_args[0][0] == ["rpm", "--eval", "%{fedora}"]

    @patch("subprocess.run")
    def test_detect_release_not_fedora(self, mock_run):
        """Test that an unexpanded macro is reported as an error."""
        mock_run.return_value = completed("%{fedora}\n")

        with pytest.raises(LocalQueryError, match="Fedora release"):
            RpmPackageSource().detect_release()
