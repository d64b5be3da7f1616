"""Bounded, snapshot-filtered queries over a component's known versions.

A :class:`VersionPool` is sorted once under the component's comparator;
:class:`BoundedVersionSet` answers bound queries by binary search on that
order, so no query re-sorts or rescans the whole pool.
"""
from __future__ import annotations

from bisect import bisect_left, bisect_right
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple, Union

from .comparators.base import VersionComparator, VersionLike
from .models import Bound, Range, RangeSpec
from .version import ArtifactVersion

# Exclusion reasons recorded in a DecisionTrace.
BELOW_LOWER = "below_lower"
AT_LOWER = "at_lower"
ABOVE_UPPER = "above_upper"
AT_UPPER = "at_upper"
SNAPSHOT = "snapshot"
EMPTY_RANGE = "empty_range"


@dataclass(frozen=True)
class TraceEntry:
    """One candidate and the rule that excluded it."""
    version: ArtifactVersion
    reason: str


class DecisionTrace:
    """Collects why candidates were excluded from a bound query."""

    def __init__(self) -> None:
        self.entries: List[TraceEntry] = []

    def exclude(self, version: ArtifactVersion, reason: str) -> None:
        self.entries.append(TraceEntry(version, reason))

    def excluded(self, reason: Optional[str] = None) -> List[ArtifactVersion]:
        """Excluded versions, optionally only those excluded for ``reason``."""
        return [e.version for e in self.entries if reason is None or e.reason == reason]

    def reason_for(self, version: VersionLike) -> Optional[str]:
        text = str(version)
        for entry in self.entries:
            if entry.version.text == text:
                return entry.reason
        return None

    def lines(self) -> List[str]:
        return [f"{e.version} excluded: {e.reason}" for e in self.entries]

    def __iter__(self) -> Iterator[TraceEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class VersionPool:
    """Ascending, de-duplicated versions of one component.

    Read-only once built. Entries that cannot be parsed at all (empty
    strings) are kept aside in ``rejected``.
    """

    def __init__(
        self,
        versions: Iterable[ArtifactVersion],
        comparator: VersionComparator,
        rejected: Tuple[str, ...] = (),
    ):
        self.comparator = comparator
        self.rejected = rejected
        self._versions: Tuple[ArtifactVersion, ...] = tuple(versions)
        key = comparator.sort_key()
        self._keys = [key(v) for v in self._versions]

    @classmethod
    def build(cls, raw: Iterable[VersionLike], comparator: VersionComparator) -> "VersionPool":
        """Parse, de-duplicate by canonical string and sort ascending."""
        seen = set()
        parsed: List[ArtifactVersion] = []
        rejected: List[str] = []
        for item in raw or ():
            try:
                ver = comparator.version(item)
            except ValueError:
                rejected.append(str(item))
                continue
            if ver.text in seen:
                continue
            seen.add(ver.text)
            parsed.append(ver)
        return cls(comparator.sort(parsed), comparator, tuple(rejected))

    @classmethod
    def of(
        cls,
        pool: Union["VersionPool", Iterable[VersionLike], None],
        comparator: VersionComparator,
    ) -> "VersionPool":
        """Return ``pool`` unchanged if already a pool, else build one."""
        if isinstance(pool, VersionPool):
            return pool
        return cls.build(pool or (), comparator)

    @property
    def versions(self) -> Tuple[ArtifactVersion, ...]:
        return self._versions

    def key(self, version: ArtifactVersion):
        """Comparator key for ``version``, comparable with the pool's keys."""
        return self.comparator.sort_key()(version)

    @property
    def keys(self) -> List:
        return self._keys

    def __len__(self) -> int:
        return len(self._versions)

    def __iter__(self) -> Iterator[ArtifactVersion]:
        return iter(self._versions)

    def __getitem__(self, index):
        return self._versions[index]

    def __contains__(self, item: object) -> bool:
        text = str(item).strip()
        return any(v.text == text for v in self._versions)

    def __repr__(self) -> str:
        return f"VersionPool([{', '.join(v.text for v in self._versions)}])"


def contains(comparator: VersionComparator, rng: Range, version: ArtifactVersion) -> bool:
    """True when ``version`` lies within ``rng`` under ``comparator``."""
    return _bound_reason(comparator, rng, version) is None


def _bound_reason(
    comparator: VersionComparator, rng: Range, version: ArtifactVersion
) -> Optional[str]:
    if rng.lower.bounded:
        cmp = comparator.compare(version, rng.lower.value)
        if cmp < 0:
            return BELOW_LOWER
        if cmp == 0 and not rng.lower.inclusive:
            return AT_LOWER
    if rng.upper.bounded:
        cmp = comparator.compare(version, rng.upper.value)
        if cmp > 0:
            return ABOVE_UPPER
        if cmp == 0 and not rng.upper.inclusive:
            return AT_UPPER
    return None


class BoundedVersionSet:
    """Answers "which versions lie within these bounds" for one pool."""

    def __init__(self, pool: VersionPool):
        self.pool = pool
        self.comparator = pool.comparator

    def _version(self, value: Optional[VersionLike]) -> Optional[ArtifactVersion]:
        if value is None:
            return None
        return self.comparator.version(value)

    def _slice(
        self,
        lower: Optional[ArtifactVersion],
        upper: Optional[ArtifactVersion],
        include_lower: bool,
        include_upper: bool,
    ) -> Tuple[int, int]:
        keys = self.pool.keys
        start, end = 0, len(keys)
        if lower is not None:
            key = self.pool.key(lower)
            start = bisect_left(keys, key) if include_lower else bisect_right(keys, key)
        if upper is not None:
            key = self.pool.key(upper)
            end = bisect_right(keys, key) if include_upper else bisect_left(keys, key)
        return start, max(start, end)

    def versions(self, include_snapshots: bool = True) -> Tuple[ArtifactVersion, ...]:
        """All known versions ascending, optionally without snapshots."""
        return tuple(v for v in self.pool if include_snapshots or not self.comparator.is_snapshot(v))

    def contains_version(self, version: VersionLike) -> bool:
        """True when the exact version string is known."""
        return str(version).strip() in self.pool

    def versions_in_bounds(
        self,
        lower: Optional[VersionLike] = None,
        upper: Optional[VersionLike] = None,
        include_snapshots: bool = False,
        include_lower: bool = True,
        include_upper: bool = False,
        trace: Optional[DecisionTrace] = None,
    ) -> Tuple[ArtifactVersion, ...]:
        """Versions within the bounds, ascending.

        Args:
            lower: Lower bound, or None for unbounded
            upper: Upper bound, or None for unbounded
            include_snapshots: Keep snapshot versions
            include_lower: Lower bound is inclusive
            include_upper: Upper bound is inclusive
            trace: Optional collector of excluded candidates and reasons

        Returns:
            Tuple of versions; empty when nothing qualifies or when the lower
            bound lies above the upper bound.
        """
        low, high = self._version(lower), self._version(upper)
        if low is not None and high is not None and self.comparator.compare(low, high) > 0:
            if trace is not None:
                for ver in self.pool:
                    trace.exclude(ver, EMPTY_RANGE)
            return ()

        if trace is not None:
            return self._traced(low, high, include_snapshots, include_lower, include_upper, trace)

        start, end = self._slice(low, high, include_lower, include_upper)
        return tuple(
            v for v in self.pool.versions[start:end]
            if include_snapshots or not self.comparator.is_snapshot(v)
        )

    def _traced(self, low, high, include_snapshots, include_lower, include_upper, trace):
        rng = Range(Bound(low, include_lower), Bound(high, include_upper))
        out = []
        for ver in self.pool:
            reason = _bound_reason(self.comparator, rng, ver)
            if reason is None and not include_snapshots and self.comparator.is_snapshot(ver):
                reason = SNAPSHOT
            if reason is None:
                out.append(ver)
            else:
                trace.exclude(ver, reason)
        return tuple(out)

    def newest(
        self,
        lower: Optional[VersionLike] = None,
        upper: Optional[VersionLike] = None,
        include_snapshots: bool = False,
        include_lower: bool = True,
        include_upper: bool = False,
        trace: Optional[DecisionTrace] = None,
    ) -> Optional[ArtifactVersion]:
        """Newest version within the bounds, or None."""
        if trace is not None:
            found = self.versions_in_bounds(lower, upper, include_snapshots, include_lower, include_upper, trace)
            return found[-1] if found else None
        return self._extreme(lower, upper, include_snapshots, include_lower, include_upper, newest=True)

    def oldest(
        self,
        lower: Optional[VersionLike] = None,
        upper: Optional[VersionLike] = None,
        include_snapshots: bool = False,
        include_lower: bool = True,
        include_upper: bool = False,
        trace: Optional[DecisionTrace] = None,
    ) -> Optional[ArtifactVersion]:
        """Oldest version within the bounds, or None."""
        if trace is not None:
            found = self.versions_in_bounds(lower, upper, include_snapshots, include_lower, include_upper, trace)
            return found[0] if found else None
        return self._extreme(lower, upper, include_snapshots, include_lower, include_upper, newest=False)

    def _extreme(self, lower, upper, include_snapshots, include_lower, include_upper, newest):
        low, high = self._version(lower), self._version(upper)
        if low is not None and high is not None and self.comparator.compare(low, high) > 0:
            return None
        start, end = self._slice(low, high, include_lower, include_upper)
        indexes = range(end - 1, start - 1, -1) if newest else range(start, end)
        for index in indexes:
            ver = self.pool[index]
            if include_snapshots or not self.comparator.is_snapshot(ver):
                return ver
        return None

    def versions_in_range(
        self, rng: Range, include_snapshots: bool = False, trace: Optional[DecisionTrace] = None
    ) -> Tuple[ArtifactVersion, ...]:
        return self.versions_in_bounds(
            rng.lower.value, rng.upper.value, include_snapshots,
            rng.lower.inclusive, rng.upper.inclusive, trace,
        )

    def newest_in_range(
        self, rng: Range, include_snapshots: bool = False, trace: Optional[DecisionTrace] = None
    ) -> Optional[ArtifactVersion]:
        return self.newest(
            rng.lower.value, rng.upper.value, include_snapshots,
            rng.lower.inclusive, rng.upper.inclusive, trace,
        )

    def oldest_in_range(
        self, rng: Range, include_snapshots: bool = False, trace: Optional[DecisionTrace] = None
    ) -> Optional[ArtifactVersion]:
        return self.oldest(
            rng.lower.value, rng.upper.value, include_snapshots,
            rng.lower.inclusive, rng.upper.inclusive, trace,
        )

    def versions_in_spec(
        self, spec: Optional[RangeSpec], include_snapshots: bool = False
    ) -> Tuple[ArtifactVersion, ...]:
        """Versions matching any range of ``spec``; unrestricted specs match all."""
        if spec is None or not spec.restricted:
            return self.versions(include_snapshots)
        matched = set()
        for rng in spec.ranges:
            matched.update(v.text for v in self.versions_in_range(rng, include_snapshots))
        return tuple(v for v in self.pool if v.text in matched)

    def newest_in_spec(
        self, spec: Optional[RangeSpec], include_snapshots: bool = False
    ) -> Optional[ArtifactVersion]:
        found = self.versions_in_spec(spec, include_snapshots)
        return found[-1] if found else None

    def oldest_in_spec(
        self, spec: Optional[RangeSpec], include_snapshots: bool = False
    ) -> Optional[ArtifactVersion]:
        found = self.versions_in_spec(spec, include_snapshots)
        return found[0] if found else None


