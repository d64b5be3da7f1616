"""PEP 440 comparator backed by packaging.version."""

from functools import lru_cache
from typing import Optional

from packaging import version

from ..version import ArtifactVersion
from .base import VersionComparator


@lru_cache(maxsize=4096)
def _pep440(text: str) -> Optional[version.Version]:
    try:
        return version.Version(text)
    except version.InvalidVersion:
        return None


def _qualifier(ver: version.Version) -> Optional[str]:
    parts = []
    if ver.pre is not None:
        parts.append(f"{ver.pre[0]}{ver.pre[1]}")
    if ver.post is not None:
        parts.append(f"post{ver.post}")
    if ver.dev is not None:
        parts.append(f"dev{ver.dev}")
    if ver.local:
        parts.append(ver.local)
    return "-".join(parts) if parts else None


class Pep440VersionComparator(VersionComparator):
    """Comparator for Python distributions using PEP 440 ordering."""

    name = "pep440"

    def parse(self, text: str) -> ArtifactVersion:
        canonical = (text or "").strip()
        if not canonical:
            raise ValueError("Empty version string")
        ver = _pep440(canonical)
        if ver is None:
            return ArtifactVersion.fallback(canonical)
        release = tuple(ver.release) + (0, 0, 0)
        return ArtifactVersion(canonical, release[0], release[1], release[2], None, _qualifier(ver))

    def compare(self, a: ArtifactVersion, b: ArtifactVersion) -> int:
        left, right = _pep440(a.text), _pep440(b.text)
        if left is None or right is None:
            if left is None and right is None:
                return (a.text > b.text) - (a.text < b.text)
            return -1 if left is None else 1
        if left < right:
            return -1
        if left > right:
            return 1
        return 0

    def is_snapshot(self, version: ArtifactVersion) -> bool:  # pylint: disable=redefined-outer-name
        ver = _pep440(version.text)
        return bool(ver is not None and ver.is_prerelease)
