"""Metadata provider interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from versioning.bounds import BoundedVersionSet, VersionPool
from versioning.comparators.base import VersionComparator
from versioning.models import RangeSpec


class MetadataProvider(ABC):
    """Supplies the known versions of a component."""

    name: str = ""

    @abstractmethod
    def get_versions(self, coordinate: str) -> List[str]:
        """Raw version strings for ``coordinate`` (groupId:artifactId).

        Raises:
            MetadataRetrievalError: if the versions cannot be retrieved
        """

    def pool(
        self,
        coordinate: str,
        comparator: VersionComparator,
        spec: Optional[RangeSpec] = None,
    ) -> VersionPool:
        """Versions as a sorted pool, restricted to ``spec`` when it restricts."""
        pool = VersionPool.build(self.get_versions(coordinate), comparator)
        if spec is None or not spec.restricted:
            return pool
        kept = BoundedVersionSet(pool).versions_in_spec(spec, include_snapshots=True)
        return VersionPool(kept, comparator, pool.rejected)
