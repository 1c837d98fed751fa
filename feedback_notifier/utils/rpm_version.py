"""RPM version comparison and NEVRA parsing helpers.

Implements the ``rpmvercmp`` ordering used by rpm and dnf:

* versions are split into runs of ASCII digits or ASCII letters, every
  other character is a separator;
* numeric runs compare numerically and are newer than alphabetic runs;
* ``~`` sorts before everything, including the end of the string, so
  ``1.0~rc1`` is older than ``1.0``;
* ``^`` sorts after the end of the string but before any further run,
  so ``1.0`` < ``1.0^git1`` < ``1.0.1``;
* when one side runs out of runs first, the longer side is newer.

A full EVR comparison looks at epoch, then version, then release.
"""

import functools
import re
from typing import NamedTuple, Tuple

_DIGITS = re.compile(r"[0-9]+")
_LETTERS = re.compile(r"[a-zA-Z]+")
_ALNUM = frozenset("0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")


def _skip_separators(value: str, pos: int) -> int:
    while pos < len(value) and value[pos] not in _ALNUM and value[pos] not in "~^":
        pos += 1
    return pos


def rpmvercmp(a: str, b: str) -> int:
    """Compare two version (or release) strings.

    Returns -1 if ``a`` is older than ``b``, 0 if they are equivalent and
    1 if ``a`` is newer.
    """
    if a == b:
        return 0

    one = two = 0
    while one < len(a) or two < len(b):
        one = _skip_separators(a, one)
        two = _skip_separators(b, two)

        # tilde: pre-release marker, older than anything else
        a_tilde = one < len(a) and a[one] == "~"
        b_tilde = two < len(b) and b[two] == "~"
        if a_tilde or b_tilde:
            if not a_tilde:
                return 1
            if not b_tilde:
                return -1
            one += 1
            two += 1
            continue

        # caret: newer than the end of the string, older than anything else
        a_caret = one < len(a) and a[one] == "^"
        b_caret = two < len(b) and b[two] == "^"
        if a_caret or b_caret:
            if one >= len(a):
                return -1
            if two >= len(b):
                return 1
            if not a_caret:
                return 1
            if not b_caret:
                return -1
            one += 1
            two += 1
            continue

        if one >= len(a) or two >= len(b):
            break

        is_numeric = a[one].isdigit()
        pattern = _DIGITS if is_numeric else _LETTERS
        match_a = pattern.match(a, one)
        match_b = pattern.match(b, two)

        # segments of different types: numeric wins
        if match_b is None:
            return 1 if is_numeric else -1

        seg_a = match_a.group()
        seg_b = match_b.group()

        if is_numeric:
            seg_a = seg_a.lstrip("0")
            seg_b = seg_b.lstrip("0")
            if len(seg_a) != len(seg_b):
                return 1 if len(seg_a) > len(seg_b) else -1

        if seg_a != seg_b:
            return 1 if seg_a > seg_b else -1

        one = match_a.end()
        two = match_b.end()

    if one >= len(a) and two >= len(b):
        return 0
    return -1 if one >= len(a) else 1


def compare_evr(a: Tuple[int, str, str], b: Tuple[int, str, str]) -> int:
    """Compare two ``(epoch, version, release)`` tuples.

    An empty release sorts before any non-empty release.
    """
    epoch_a, epoch_b = int(a[0] or 0), int(b[0] or 0)
    if epoch_a != epoch_b:
        return 1 if epoch_a > epoch_b else -1

    result = rpmvercmp(a[1] or "", b[1] or "")
    if result != 0:
        return result

    return rpmvercmp(a[2] or "", b[2] or "")


@functools.total_ordering
class RPMVersion:
    """An epoch/version/release triple ordered with ``rpmvercmp``."""

    __slots__ = ("epoch", "version", "release")

    def __init__(self, epoch: int = 0, version: str = "", release: str = ""):
        self.epoch = int(epoch or 0)
        self.version = version
        self.release = release

    @classmethod
    def parse(cls, evr: str) -> "RPMVersion":
        """Parse ``[epoch:]version[-release]``."""
        evr = evr.strip()
        if not evr:
            raise ValueError("Version string cannot be empty")

        epoch = 0
        if ":" in evr:
            epoch_str, evr = evr.split(":", 1)
            if not epoch_str.isdigit():
                raise ValueError(f"Invalid epoch in version string: {epoch_str!r}")
            epoch = int(epoch_str)

        version, _, release = evr.partition("-")
        if not version:
            raise ValueError(f"Missing version in version string: {evr!r}")

        return cls(epoch, version, release)

    def as_tuple(self) -> Tuple[int, str, str]:
        return (self.epoch, self.version, self.release)

    def __eq__(self, other):
        if not isinstance(other, RPMVersion):
            return NotImplemented
        return compare_evr(self.as_tuple(), other.as_tuple()) == 0

    def __lt__(self, other):
        if not isinstance(other, RPMVersion):
            return NotImplemented
        return compare_evr(self.as_tuple(), other.as_tuple()) < 0

    def __str__(self):
        evr = f"{self.version}-{self.release}" if self.release else self.version
        return f"{self.epoch}:{evr}" if self.epoch else evr

    def __repr__(self):
        return f"RPMVersion({self.epoch!r}, {self.version!r}, {self.release!r})"


def compare_versions(a: str, b: str) -> int:
    """Compare two ``[epoch:]version[-release]`` strings."""
    return compare_evr(RPMVersion.parse(a).as_tuple(), RPMVersion.parse(b).as_tuple())


class NEVRA(NamedTuple):
    """Name, epoch, version, release and architecture of a package."""

    name: str
    epoch: int
    version: str
    release: str
    arch: str


def parse_nvr(nvr: str) -> Tuple[str, str, str]:
    """Split ``name-version-release`` into its parts.

    The name itself may contain dashes; version and release may not.
    """
    parts = nvr.strip().rsplit("-", 2)
    if len(parts) != 3 or not all(parts):
        raise ValueError(f"Unexpected NVR format: {nvr!r}")
    name, version, release = parts
    return name, version, release


def parse_nevra(nevra: str) -> NEVRA:
    """Split ``name-[epoch:]version-release.arch`` into its parts."""
    nevr, dot, arch = nevra.strip().rpartition(".")
    if not dot or not nevr or not arch:
        raise ValueError(f"Unexpected NEVRA format: {nevra!r}")

    parts = nevr.rsplit("-", 2)
    if len(parts) != 3 or not all(parts):
        raise ValueError(f"Unexpected NEVRA format: {nevra!r}")
    name, epoch_version, release = parts

    epoch = 0
    version = epoch_version
    if ":" in epoch_version:
        epoch_str, version = epoch_version.split(":", 1)
        if not epoch_str.isdigit() or not version:
            raise ValueError(f"Unexpected NEVRA format: {nevra!r}")
        epoch = int(epoch_str)

    return NEVRA(name, epoch, version, release, arch)


def parse_rpm_filename(filename: str) -> NEVRA:
    """Parse an rpm file name such as ``foo-1.0-1.fc40.src.rpm``."""
    filename = filename.strip()
    if not filename.endswith(".rpm"):
        raise ValueError(f"Not an rpm file name: {filename!r}")
    return parse_nevra(filename[: -len(".rpm")])
