"""Data models for version bounds, update summaries and batch outcomes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .version import ArtifactVersion


class EvaluationMode(Enum):
    """How a component is evaluated."""
    SUMMARY = "summary"  # latest incremental/minor/major
    LATEST = "latest"  # single best version, reactor aware


class UpdateSegment(Enum):
    """Magnitude of a candidate update relative to the current version."""
    NONE = "none"
    INCREMENTAL = "incremental"
    MINOR = "minor"
    MAJOR = "major"


class FailureKind(Enum):
    """Why a component produced no result."""
    RETRIEVAL = "retrieval"  # skip the component, keep going
    MISSING_VERSION = "missing_version"  # skip the component, keep going
    CONFIGURATION = "configuration"  # abort the whole batch

    @property
    def aborts_batch(self) -> bool:
        """True when the failure must stop every evaluation."""
        return self is FailureKind.CONFIGURATION


@dataclass(frozen=True)
class Bound:
    """One end of a range; ``value`` None means unbounded."""
    value: Optional[ArtifactVersion] = None
    inclusive: bool = True

    @property
    def bounded(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class Range:
    """Lower and upper bound pair."""
    lower: Bound = Bound()
    upper: Bound = Bound(inclusive=False)

    def __str__(self) -> str:
        if (
            self.lower.bounded
            and self.lower == self.upper
            and self.lower.inclusive
        ):
            return f"[{self.lower.value}]"
        left = "[" if self.lower.bounded and self.lower.inclusive else "("
        right = "]" if self.upper.bounded and self.upper.inclusive else ")"
        low = str(self.lower.value) if self.lower.bounded else ""
        high = str(self.upper.value) if self.upper.bounded else ""
        return f"{left}{low},{high}{right}"


@dataclass(frozen=True)
class RangeSpec:
    """A parsed range specification: a union of ranges.

    A bare version (``1.0``) is a recommendation only; it restricts nothing.
    """
    spec: str
    ranges: Tuple[Range, ...] = ()
    recommended: Optional[ArtifactVersion] = None

    @property
    def restricted(self) -> bool:
        return bool(self.ranges)


@dataclass(frozen=True)
class UpdateSummary:
    """Newest version per update tier for one component."""
    component: str
    current: ArtifactVersion
    latest_incremental: Optional[ArtifactVersion] = None
    latest_minor: Optional[ArtifactVersion] = None
    latest_major: Optional[ArtifactVersion] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation used by exports."""
        return {
            "component": self.component,
            "current": str(self.current),
            "latest_incremental": _opt(self.latest_incremental),
            "latest_minor": _opt(self.latest_minor),
            "latest_major": _opt(self.latest_major),
        }


@dataclass(frozen=True)
class UpdateDetails:
    """Next and latest version for each update tier."""
    current: ArtifactVersion
    next_incremental: Optional[ArtifactVersion] = None
    latest_incremental: Optional[ArtifactVersion] = None
    next_minor: Optional[ArtifactVersion] = None
    latest_minor: Optional[ArtifactVersion] = None
    next_major: Optional[ArtifactVersion] = None
    latest_major: Optional[ArtifactVersion] = None
    next_version: Optional[ArtifactVersion] = None
    all_newer: Tuple[ArtifactVersion, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation used by exports."""
        data = {
            f"{kind}_{segment.value}": _opt(getattr(self, f"{kind}_{segment.value}"))
            for segment in (UpdateSegment.INCREMENTAL, UpdateSegment.MINOR, UpdateSegment.MAJOR)
            for kind in ("next", "latest")
        }
        data["next_version"] = _opt(self.next_version)
        data["all_newer"] = [str(v) for v in self.all_newer]
        return data


@dataclass(frozen=True)
class Recommendation:
    """Single-best-version result: current -> recommended."""
    component: str
    current: ArtifactVersion
    recommended: Optional[ArtifactVersion] = None
    source: Optional[str] = None  # "repository" | "reactor"
    segment: UpdateSegment = UpdateSegment.NONE

    @property
    def has_update(self) -> bool:
        return self.recommended is not None and self.recommended != self.current

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation used by exports."""
        return {
            "component": self.component,
            "current": str(self.current),
            "recommended": _opt(self.recommended),
            "source": self.source,
            "segment": self.segment.value,
        }


@dataclass
class ComponentRequest:
    """Evaluation input for one component."""
    coordinate: str  # groupId:artifactId
    current_version: Optional[str]
    source: str = "cli"  # "cli" | "list" | "config"
    raw_token: Optional[str] = None


@dataclass(frozen=True)
class Failure:
    """Why a component (or the whole batch) produced no result."""
    kind: FailureKind
    coordinate: Optional[str]
    message: str


@dataclass
class ComponentOutcome:
    """Result of evaluating one component.

    Exactly one of summary, recommendation or failure is set; details
    accompany a summary.
    """
    request: ComponentRequest
    summary: Optional[UpdateSummary] = None
    recommendation: Optional[Recommendation] = None
    details: Optional[UpdateDetails] = None
    failure: Optional[Failure] = None
    has_updates: bool = False
    trace: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass
class BatchReport:
    """Outcomes of a batch in request order, or the reason it was aborted."""
    outcomes: List[ComponentOutcome] = field(default_factory=list)
    aborted: Optional[Failure] = None

    @property
    def failures(self) -> List[Failure]:
        return [o.failure for o in self.outcomes if o.failure is not None]

    @property
    def updates(self) -> List[ComponentOutcome]:
        """Successful outcomes that should be reported."""
        return [o for o in self.outcomes if o.ok and o.has_updates]


def _opt(value: Optional[ArtifactVersion]) -> Optional[str]:
    return str(value) if value is not None else None
