"""Update-tier ranges and range specification parsing."""

from typing import Dict, List, Optional

from .bounds import contains
from .comparators.base import VersionComparator, VersionLike
from .errors import InvalidRangeSpecification
from .models import Bound, Range, RangeSpec, UpdateSegment
from .version import ArtifactVersion

_RANGE_CHARS = "[](),"


class RangeBuilder:
    """Derives the incremental, minor and major ranges of a current version.

    Each range is ``[current, upper)``. A version whose numeric segments are
    unknown cannot be placed in a tier, so all three degrade to the open
    range ``[current,)``.
    """

    def __init__(self, comparator: VersionComparator):
        self.comparator = comparator

    def _open(self, current: ArtifactVersion) -> Range:
        return Range(Bound(current, True), Bound(None, False))

    def _upto(self, current: ArtifactVersion, upper: str) -> Range:
        return Range(Bound(current, True), Bound(self.comparator.parse(upper), False))

    def incremental_range(self, current: VersionLike) -> Range:
        current = self.comparator.version(current)
        if current.unparsed:
            return self._open(current)
        return self._upto(current, f"{current.major}.{current.minor + 1}.0")

    def minor_range(self, current: VersionLike) -> Range:
        current = self.comparator.version(current)
        if current.unparsed:
            return self._open(current)
        return self._upto(current, f"{current.major + 1}.0.0")

    def major_range(self, current: VersionLike) -> Range:
        return self._open(self.comparator.version(current))

    def tier_ranges(self, current: VersionLike) -> Dict[UpdateSegment, Range]:
        """Ranges keyed by tier, narrowest first."""
        current = self.comparator.version(current)
        return {
            UpdateSegment.INCREMENTAL: self.incremental_range(current),
            UpdateSegment.MINOR: self.minor_range(current),
            UpdateSegment.MAJOR: self.major_range(current),
        }

    def classify_segment(self, current: VersionLike, candidate: VersionLike) -> UpdateSegment:
        """Smallest tier whose range holds ``candidate``.

        NONE when the candidate is not strictly newer than ``current``.
        """
        current = self.comparator.version(current)
        candidate = self.comparator.version(candidate)
        if not self.comparator.is_newer(candidate, current):
            return UpdateSegment.NONE
        for segment, rng in self.tier_ranges(current).items():
            if contains(self.comparator, rng, candidate):
                return segment
        return UpdateSegment.MAJOR


def _parse_version(text: str, spec: str, comparator: VersionComparator) -> ArtifactVersion:
    value = text.strip()
    if not value:
        raise InvalidRangeSpecification(spec, "empty version")
    if any(c in value for c in _RANGE_CHARS):
        raise InvalidRangeSpecification(spec, f"unexpected range characters in '{value}'")
    return comparator.parse(value)


def parse_bound_version(text: Optional[str], comparator: VersionComparator) -> Optional[ArtifactVersion]:
    """Parse a configured lower/upper bound; None or blank means unbounded."""
    if text is None:
        return None
    if not str(text).strip():
        raise InvalidRangeSpecification(str(text), "bound must not be blank")
    return _parse_version(str(text), str(text), comparator)


def _parse_restriction(token: str, spec: str, comparator: VersionComparator) -> Range:
    lower_inclusive = token.startswith("[")
    upper_inclusive = token.endswith("]")
    inner = token[1:-1].strip()

    if "," not in inner:
        # Exact version: "[1.0]"
        if not (lower_inclusive and upper_inclusive):
            raise InvalidRangeSpecification(spec, f"single version must be surrounded by []: {token}")
        ver = _parse_version(inner, spec, comparator)
        return Range(Bound(ver, True), Bound(ver, True))

    low_text, high_text = inner.split(",", 1)
    if "," in high_text:
        raise InvalidRangeSpecification(spec, f"too many commas in {token}")
    low = _parse_version(low_text, spec, comparator) if low_text.strip() else None
    high = _parse_version(high_text, spec, comparator) if high_text.strip() else None

    if low is not None and high is not None:
        cmp = comparator.compare(low, high)
        if cmp > 0:
            raise InvalidRangeSpecification(spec, f"range defies version ordering: {token}")
        if cmp == 0 and not (lower_inclusive and upper_inclusive):
            raise InvalidRangeSpecification(spec, f"range cannot have identical boundaries: {token}")

    return Range(
        Bound(low, lower_inclusive if low is not None else False),
        Bound(high, upper_inclusive if high is not None else False),
    )


def _check_overlap(ranges: List[Range], spec: str, comparator: VersionComparator) -> None:
    for previous, following in zip(ranges, ranges[1:]):
        if not previous.upper.bounded or not following.lower.bounded:
            raise InvalidRangeSpecification(spec, "ranges overlap")
        cmp = comparator.compare(previous.upper.value, following.lower.value)
        if cmp > 0 or (cmp == 0 and previous.upper.inclusive and following.lower.inclusive):
            raise InvalidRangeSpecification(spec, "ranges overlap")


def parse_range_spec(spec: str, comparator: VersionComparator) -> RangeSpec:
    """Parse Maven range notation into a RangeSpec.

    Accepts ``[1.0]``, ``[1.0,2.0)``, ``(,1.0]``, ``[1.5,)`` and unions such as
    ``(,1.0],[1.2,)``. A bare version like ``1.0`` is only a recommendation
    and restricts nothing.

    Raises:
        InvalidRangeSpecification: on malformed, reversed or overlapping ranges
    """
    text = (spec or "").strip()
    if not text:
        raise InvalidRangeSpecification(spec or "", "empty specification")

    if text[0] not in "[(":
        return RangeSpec(spec=text, recommended=_parse_version(text, text, comparator))

    ranges: List[Range] = []
    remaining = text
    while remaining.startswith(("[", "(")):
        closes = [i for i in (remaining.find("]"), remaining.find(")")) if i >= 0]
        if not closes:
            raise InvalidRangeSpecification(text, "unbounded range, missing closing bracket")
        end = min(closes)
        ranges.append(_parse_restriction(remaining[: end + 1], text, comparator))
        remaining = remaining[end + 1:].strip()
        if remaining.startswith(","):
            remaining = remaining[1:].strip()
            if not remaining:
                raise InvalidRangeSpecification(text, "trailing comma")

    if remaining:
        raise InvalidRangeSpecification(text, "only fully-qualified sets allowed in multiple set scenario")

    _check_overlap(ranges, text, comparator)
    return RangeSpec(spec=text, ranges=tuple(ranges))


def spec_from_bounds(
    lower: Optional[ArtifactVersion],
    upper: Optional[ArtifactVersion],
    include_lower: bool = True,
    include_upper: bool = False,
) -> RangeSpec:
    """Single-range RangeSpec for explicitly configured bounds."""
    rng = Range(Bound(lower, include_lower), Bound(upper, include_upper))
    return RangeSpec(spec=str(rng), ranges=(rng,))


def parse_declared_version(text: str, comparator: VersionComparator) -> RangeSpec:
    """Read a declared current version the way Maven reads a dependency version.

    A value starting with ``[`` or ``(`` is a range the current version must
    be resolved from; anything else is the current version itself, kept as
    the recommendation.

    Raises:
        InvalidRangeSpecification: if a declared range is malformed
    """
    value = (text or "").strip()
    if value[:1] in ("[", "("):
        return parse_range_spec(value, comparator)
    return RangeSpec(spec=value, recommended=comparator.parse(value))
