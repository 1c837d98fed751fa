"""
Installed package source backed by the local rpm database.

Installed packages are reported as their *source* packages, since Bodhi
updates are made of source builds: ``python3-requests`` and
``python3-requests+socks`` both map to the ``python-requests`` source.
"""

import logging
import subprocess
from typing import List, Optional, Set

from ..interfaces import IInstalledPackageSource
from ..models.package import InstalledPackage
from ..utils.error_handling import LocalQueryError

logger = logging.getLogger(__name__)

QUERY_FORMAT = "%{SOURCERPM}\\t%{EPOCHNUM}\\n"


class RpmPackageSource(IInstalledPackageSource):
    """Queries installed packages and the running release through ``rpm``."""

    def __init__(self, rpm_command: str = "rpm", timeout: int = 60):
        """
        Initialize the package source.

        Args:
            rpm_command: rpm executable to run
            timeout: Seconds to wait for each rpm invocation
        """
        self.rpm_command = rpm_command
        self.timeout = timeout

    def _run_rpm(self, arguments: List[str]) -> str:
        """Run rpm and return its standard output."""
        command = [self.rpm_command] + arguments
        logger.debug(f"Running rpm command: {' '.join(command)}")

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise LocalQueryError(f"rpm is not available: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise LocalQueryError(f"rpm timed out after {self.timeout}s") from e
        except OSError as e:
            raise LocalQueryError(f"Failed to run rpm: {e}") from e

        if result.returncode != 0:
            raise LocalQueryError(
                f"rpm exited with status {result.returncode}: {result.stderr.strip()}"
            )

        return result.stdout

    def get_installed_packages(self) -> Set[InstalledPackage]:
        """
        Return the source packages of everything installed.

        Raises:
            LocalQueryError: If rpm is missing or fails
        """
        output = self._run_rpm(["--query", "--all", "--queryformat", QUERY_FORMAT])

        packages: Set[InstalledPackage] = set()
        for line in output.splitlines():
            package = self._parse_line(line)
            if package is not None:
                packages.add(package)

        logger.info(f"Found {len(packages)} installed source packages")
        return packages

    def _parse_line(self, line: str) -> Optional[InstalledPackage]:
        """Parse one ``SOURCERPM<TAB>EPOCHNUM`` line."""
        line = line.strip()
        if not line:
            return None

        source_rpm, _, epoch = line.partition("\t")
        # gpg-pubkey and similar pseudo packages have no source rpm
        if source_rpm == "(none)":
            return None

        try:
            package = InstalledPackage.from_source_rpm(
                source_rpm, epoch=int(epoch) if epoch.strip().isdigit() else 0
            )
            package.validate()
            return package
        except ValueError as e:
            logger.warning(f"Skipping unparsable rpm query line {line!r}: {e}")
            return None

    def detect_release(self) -> str:
        """
        Return the Bodhi release name, e.g. ``F40``.

        Raises:
            LocalQueryError: If the release cannot be determined
        """
        release_num = self._run_rpm(["--eval", "%{fedora}"]).strip()

        if not release_num.isdigit():
            raise LocalQueryError(
                f"Unable to determine the Fedora release (rpm returned {release_num!r})"
            )

        release = f"F{release_num}"
        logger.info(f"Detected release {release}")
        return release
