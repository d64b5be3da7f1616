"""Single best version selection, optionally reactor aware."""

from typing import Iterable, Optional, Tuple, Union

from .bounds import BoundedVersionSet, DecisionTrace, VersionPool
from .comparators.base import VersionComparator, VersionLike
from .models import Range, RangeSpec, Recommendation, UpdateSegment
from .ranges import RangeBuilder
from .reactor import REPOSITORY, MergeDecision, ReactorMergePolicy
from .version import ArtifactVersion

PoolLike = Union[VersionPool, Iterable[VersionLike]]


class LatestVersionResolver:
    """Recommends one version for a component.

    Without a configured restriction every known version is a candidate,
    including ones older than current. A winner that compares equal to the
    current version is no winner.
    """

    def __init__(
        self,
        comparator: VersionComparator,
        search_reactor: bool = False,
        prefer_reactor: bool = False,
    ):
        self.comparator = comparator
        self.search_reactor = search_reactor
        self.policy = ReactorMergePolicy(comparator, prefer_reactor)
        self.ranges = RangeBuilder(comparator)

    def repository_winner(
        self,
        current: VersionLike,
        pool: PoolLike,
        spec: Optional[RangeSpec] = None,
        include_snapshots: bool = False,
        trace: Optional[DecisionTrace] = None,
    ) -> Optional[ArtifactVersion]:
        """Newest allowed repository version, or None when it is the current one."""
        current = self.comparator.version(current)
        versions = BoundedVersionSet(VersionPool.of(pool, self.comparator))
        restricted = spec is not None and spec.restricted
        if trace is not None and (not restricted or len(spec.ranges) == 1):
            newest = versions.newest_in_range(spec.ranges[0] if restricted else Range(), include_snapshots, trace)
        else:
            newest = versions.newest_in_spec(spec, include_snapshots)
        if newest is None or self.comparator.compare(newest, current) == 0:
            return None
        return newest

    def recommend(
        self,
        component: str,
        current: VersionLike,
        pool: PoolLike,
        reactor_pool: Optional[PoolLike] = None,
        spec: Optional[RangeSpec] = None,
        include_snapshots: bool = False,
        trace: Optional[DecisionTrace] = None,
    ) -> Tuple[Recommendation, Optional[MergeDecision]]:
        """Recommendation for ``component`` and the merge decision when the reactor was searched."""
        current = self.comparator.version(current)
        winner = self.repository_winner(current, pool, spec, include_snapshots, trace)
        decision = None
        source = REPOSITORY if winner is not None else None
        if self.search_reactor and reactor_pool is not None:
            decision = self.policy.merge(current, winner, reactor_pool, spec, include_snapshots)
            winner, source = decision.winner, decision.source
        segment = self.ranges.classify_segment(current, winner) if winner is not None else UpdateSegment.NONE
        return Recommendation(component, current, winner, source, segment), decision
