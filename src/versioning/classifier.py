"""Three-tier update classification for a component."""

from typing import Iterable, Optional, Union

from .bounds import BoundedVersionSet, DecisionTrace, VersionPool
from .comparators.base import VersionComparator, VersionLike
from .models import Bound, Range, UpdateDetails, UpdateSegment, UpdateSummary
from .ranges import RangeBuilder

PoolLike = Union[VersionPool, Iterable[VersionLike]]


class UpdateClassifier:
    """Computes the newest incremental, minor and major update of a component.

    ``show_all`` makes every component reportable, with or without updates.
    """

    def __init__(self, comparator: VersionComparator, show_all: bool = False):
        self.comparator = comparator
        self.show_all = show_all
        self.ranges = RangeBuilder(comparator)

    def _versions(self, pool: PoolLike) -> BoundedVersionSet:
        return BoundedVersionSet(VersionPool.of(pool, self.comparator))

    def summarize(
        self,
        component: str,
        current: VersionLike,
        pool: PoolLike,
        include_snapshots: bool = False,
        trace: Optional[DecisionTrace] = None,
    ) -> UpdateSummary:
        """Newest version in each tier range of ``current``.

        Args:
            component: groupId:artifactId
            current: Version in use
            pool: Known versions of the component
            include_snapshots: Consider snapshot versions
            trace: Optional collector for excluded candidates of the major tier

        Returns:
            UpdateSummary; a tier with no qualifying version is None. A tier
            value may equal ``current`` when nothing newer exists in it.
        """
        current = self.comparator.version(current)
        versions = self._versions(pool)
        tiers = self.ranges.tier_ranges(current)
        return UpdateSummary(
            component=component,
            current=current,
            latest_incremental=versions.newest_in_range(tiers[UpdateSegment.INCREMENTAL], include_snapshots),
            latest_minor=versions.newest_in_range(tiers[UpdateSegment.MINOR], include_snapshots),
            latest_major=versions.newest_in_range(tiers[UpdateSegment.MAJOR], include_snapshots, trace),
        )

    def has_updates(self, summary: UpdateSummary) -> bool:
        """Whether the component should be reported.

        Always True with ``show_all``, and always True for a current version
        whose whole string is its qualifier (nothing could be decomposed).
        Otherwise True when any tier holds a version strictly newer than
        current.
        """
        if self.show_all or summary.current.unparsed:
            return True
        tiers = (summary.latest_incremental, summary.latest_minor, summary.latest_major)
        return any(t is not None and self.comparator.is_newer(t, summary.current) for t in tiers)

    def details(
        self, current: VersionLike, pool: PoolLike, include_snapshots: bool = False
    ) -> UpdateDetails:
        """Oldest and newest strictly-newer version of each tier."""
        current = self.comparator.version(current)
        versions = self._versions(pool)
        values = {}
        for segment, rng in self.ranges.tier_ranges(current).items():
            newer = Range(Bound(current, False), rng.upper)
            values[f"next_{segment.value}"] = versions.oldest_in_range(newer, include_snapshots)
            values[f"latest_{segment.value}"] = versions.newest_in_range(newer, include_snapshots)
        all_newer = versions.versions_in_bounds(current, None, include_snapshots, include_lower=False)
        return UpdateDetails(
            current=current,
            next_version=all_newer[0] if all_newer else None,
            all_newer=all_newer,
            **values,
        )
