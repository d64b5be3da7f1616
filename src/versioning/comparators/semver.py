"""Semantic-versioning comparator backed by semantic_version."""

from functools import lru_cache
from typing import Optional

import semantic_version

from ..version import ArtifactVersion
from .base import VersionComparator


@lru_cache(maxsize=4096)
def _semver(text: str) -> Optional[semantic_version.Version]:
    """Parse strictly, then leniently; None when neither works."""
    try:
        return semantic_version.Version(text)
    except ValueError:
        pass
    try:
        return semantic_version.Version.coerce(text)
    except ValueError:
        return None


class SemverVersionComparator(VersionComparator):
    """Comparator using SemVer 2.0 precedence.

    Versions that do not even coerce to SemVer are kept unparsed and sort
    before every valid version, lexicographically among themselves.
    """

    name = "semver"

    def parse(self, text: str) -> ArtifactVersion:
        canonical = (text or "").strip()
        if not canonical:
            raise ValueError("Empty version string")
        ver = _semver(canonical)
        if ver is None:
            return ArtifactVersion.fallback(canonical)
        qualifier = ".".join(ver.prerelease) if ver.prerelease else None
        return ArtifactVersion(canonical, ver.major, ver.minor, ver.patch, None, qualifier)

    def compare(self, a: ArtifactVersion, b: ArtifactVersion) -> int:
        left, right = _semver(a.text), _semver(b.text)
        if left is None or right is None:
            if left is None and right is None:
                return (a.text > b.text) - (a.text < b.text)
            return -1 if left is None else 1
        if left < right:
            return -1
        if right < left:
            return 1
        return 0

    def is_snapshot(self, version: ArtifactVersion) -> bool:
        ver = _semver(version.text)
        return bool(ver is not None and ver.prerelease)
