"""Version comparators for different versioning schemes."""

from typing import Dict

from .base import VersionComparator
from .maven import MavenVersionComparator
from .numeric import NumericVersionComparator
from .pep440 import Pep440VersionComparator
from .semver import SemverVersionComparator

_COMPARATORS: Dict[str, VersionComparator] = {
    c.name: c
    for c in (
        MavenVersionComparator(),
        NumericVersionComparator(),
        SemverVersionComparator(),
        Pep440VersionComparator(),
    )
}


def get_comparator(name: str) -> VersionComparator:
    """Return the shared comparator registered under ``name``.

    Raises:
        ValueError: if no comparator has that name
    """
    key = (name or "").strip().lower()
    try:
        return _COMPARATORS[key]
    except KeyError:
        raise ValueError(
            f"Unknown version comparator '{name}' (expected one of: {', '.join(sorted(_COMPARATORS))})"
        ) from None


__all__ = [
    "VersionComparator",
    "MavenVersionComparator",
    "NumericVersionComparator",
    "SemverVersionComparator",
    "Pep440VersionComparator",
    "get_comparator",
]
