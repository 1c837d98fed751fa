"""
Package data models for the Bodhi feedback notifier.
"""

from dataclasses import dataclass
from typing import Tuple

from ..utils.rpm_version import RPMVersion, parse_nvr, parse_rpm_filename


@dataclass(frozen=True)
class InstalledPackage:
    """A package present in the local rpm database."""

    name: str
    version: str
    release: str
    arch: str
    epoch: int = 0

    @classmethod
    def from_source_rpm(cls, filename: str, epoch: int = 0) -> "InstalledPackage":
        """Build from a source rpm file name such as ``foo-1.0-1.fc40.src.rpm``."""
        nevra = parse_rpm_filename(filename)
        return cls(
            name=nevra.name,
            version=nevra.version,
            release=nevra.release,
            arch=nevra.arch,
            epoch=epoch or nevra.epoch,
        )

    @property
    def key(self) -> Tuple[str, str]:
        return (self.name, self.arch)

    @property
    def evr(self) -> RPMVersion:
        return RPMVersion(self.epoch, self.version, self.release)

    def validate(self) -> bool:
        """Validate the installed package data."""
        for field_name in ("name", "version", "release", "arch"):
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"Package {field_name} cannot be empty")

        if not isinstance(self.epoch, int) or self.epoch < 0:
            raise ValueError("Package epoch must be a non-negative integer")

        return True


@dataclass(frozen=True)
class PackageBuild:
    """A build bundled in an update. Bodhi builds are source builds."""

    name: str
    version: str
    release: str
    arch: str = "src"
    epoch: int = 0

    @classmethod
    def from_nvr(cls, nvr: str, epoch: int = 0, arch: str = "src") -> "PackageBuild":
        """Build from a ``name-version-release`` string."""
        name, version, release = parse_nvr(nvr)
        return cls(name=name, version=version, release=release, arch=arch, epoch=epoch)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.name, self.arch)

    @property
    def evr(self) -> RPMVersion:
        return RPMVersion(self.epoch, self.version, self.release)

    @property
    def nvr(self) -> str:
        return f"{self.name}-{self.version}-{self.release}"

    def is_newer_or_equal(self, installed: InstalledPackage) -> bool:
        """True if installing this build would not downgrade ``installed``."""
        return self.evr >= installed.evr
