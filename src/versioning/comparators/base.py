"""Abstract base class for version comparators."""

from abc import ABC, abstractmethod
from functools import cmp_to_key
from typing import Iterable, List, Union

from ..version import ArtifactVersion

VersionLike = Union[str, ArtifactVersion]


class VersionComparator(ABC):
    """Ordering and decomposition rules for one versioning scheme.

    Implementations are stateless and safe to share between threads.
    """

    name: str = ""

    @abstractmethod
    def parse(self, text: str) -> ArtifactVersion:
        """Decompose a version string.

        Args:
            text: Version string as published

        Returns:
            ArtifactVersion; strings the scheme cannot read become unparsed
            versions rather than errors.

        Raises:
            ValueError: if ``text`` is empty
        """

    @abstractmethod
    def compare(self, a: ArtifactVersion, b: ArtifactVersion) -> int:
        """Return -1, 0 or 1 as ``a`` is older than, equal to or newer than ``b``."""

    @abstractmethod
    def is_snapshot(self, version: ArtifactVersion) -> bool:
        """Return True if ``version`` is a pre-release/unstable build."""

    def version(self, value: VersionLike) -> ArtifactVersion:
        """Return ``value`` as an ArtifactVersion, parsing strings."""
        if isinstance(value, ArtifactVersion):
            return value
        return self.parse(value)

    def sort_key(self):
        """Key function ordering versions ascending under this comparator."""
        return cmp_to_key(self.compare)

    def sort(self, versions: Iterable[VersionLike]) -> List[ArtifactVersion]:
        """Return versions sorted ascending."""
        return sorted((self.version(v) for v in versions), key=self.sort_key())

    def is_newer(self, candidate: ArtifactVersion, current: ArtifactVersion) -> bool:
        """True when ``candidate`` sorts strictly after ``current``."""
        return self.compare(current, candidate) < 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
