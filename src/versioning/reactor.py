"""Precedence between repository and reactor candidates."""

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from .bounds import BoundedVersionSet, VersionPool
from .comparators.base import VersionComparator, VersionLike
from .models import RangeSpec
from .version import ArtifactVersion

REPOSITORY = "repository"
REACTOR = "reactor"


@dataclass(frozen=True)
class MergeDecision:
    """Final winner of a merge, where it came from and why."""
    winner: Optional[ArtifactVersion]
    source: Optional[str]
    reason: str
    from_reactor: Optional[ArtifactVersion] = None


class ReactorMergePolicy:
    """Folds the newest locally built version into a repository decision.

    The reactor only replaces the repository winner when it is strictly
    newer, when there is no repository winner, or when ``prefer_reactor``
    is set. On a tie the repository winner stands.
    """

    def __init__(self, comparator: VersionComparator, prefer_reactor: bool = False):
        self.comparator = comparator
        self.prefer_reactor = prefer_reactor

    def newest_in_reactor(
        self,
        reactor_pool: Union[VersionPool, Iterable[VersionLike], None],
        spec: Optional[RangeSpec] = None,
        include_snapshots: bool = False,
    ) -> Optional[ArtifactVersion]:
        """Newest reactor version allowed by ``spec`` and the snapshot policy."""
        if reactor_pool is None:
            return None
        pool = VersionPool.of(reactor_pool, self.comparator)
        return BoundedVersionSet(pool).newest_in_spec(spec, include_snapshots)

    def choose(
        self,
        current: VersionLike,
        repository_winner: Optional[VersionLike],
        from_reactor: Optional[VersionLike],
    ) -> MergeDecision:
        """Apply the precedence rules to already selected candidates."""
        current = self.comparator.version(current)
        repo = self.comparator.version(repository_winner) if repository_winner is not None else None
        local = self.comparator.version(from_reactor) if from_reactor is not None else None

        if local is None:
            return MergeDecision(repo, REPOSITORY if repo is not None else None, "no reactor candidate")
        if repo is None and self.comparator.compare(local, current) == 0:
            return MergeDecision(None, None, "reactor only has the current version", local)
        if self.prefer_reactor:
            return MergeDecision(local, REACTOR, "reactor preferred", local)
        if repo is None:
            return MergeDecision(local, REACTOR, "reactor is the only candidate", local)
        if self.comparator.compare(repo, local) < 0:
            return MergeDecision(local, REACTOR, f"reactor {local} is newer than repository {repo}", local)
        return MergeDecision(repo, REPOSITORY, f"repository {repo} is not older than reactor {local}", local)

    def merge(
        self,
        current: VersionLike,
        repository_winner: Optional[VersionLike],
        reactor_pool: Union[VersionPool, Iterable[VersionLike], None],
        spec: Optional[RangeSpec] = None,
        include_snapshots: bool = False,
    ) -> MergeDecision:
        """Pick the reactor candidate under the repository query's constraints, then choose."""
        from_reactor = self.newest_in_reactor(reactor_pool, spec, include_snapshots)
        return self.choose(current, repository_winner, from_reactor)
