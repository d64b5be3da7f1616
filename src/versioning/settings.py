"""Engine-wide and per-component evaluation settings."""

from dataclasses import dataclass, field, fields
from typing import Dict, List, Optional

from constants import Constants

from .comparators import get_comparator
from .comparators.base import VersionComparator
from .errors import InvalidRangeSpecification
from .models import RangeSpec
from .ranges import parse_bound_version, parse_declared_version, parse_range_spec, spec_from_bounds


@dataclass
class ComponentSettings:
    """Overrides for one component; None means "use the engine default"."""
    coordinate: Optional[str] = None
    comparator: Optional[str] = None
    include_snapshots: Optional[bool] = None
    lower_bound: Optional[str] = None
    upper_bound: Optional[str] = None
    include_lower: Optional[bool] = None
    include_upper: Optional[bool] = None
    range: Optional[str] = None
    search_reactor: Optional[bool] = None
    prefer_reactor: Optional[bool] = None


@dataclass(frozen=True)
class EffectiveSettings:
    """Fully resolved settings for evaluating one component."""
    comparator: VersionComparator
    include_snapshots: bool = False
    search_reactor: bool = False
    prefer_reactor: bool = False
    spec: Optional[RangeSpec] = None
    declared: Optional[RangeSpec] = None


@dataclass
class EngineSettings:
    """Global defaults plus per-component overrides."""
    comparator: str = Constants.DEFAULT_COMPARATOR
    include_snapshots: bool = False
    show_all: bool = False
    search_reactor: bool = False
    prefer_reactor: bool = False
    components: Dict[str, ComponentSettings] = field(default_factory=dict)
    excludes: List[str] = field(default_factory=list)

    def is_excluded(self, coordinate: str) -> bool:
        return coordinate in self.excludes

    def for_component(self, coordinate: str) -> ComponentSettings:
        return self.components.get(coordinate) or ComponentSettings(coordinate=coordinate)

    def resolve(self, coordinate: str, current_version: Optional[str] = None) -> EffectiveSettings:
        """Merge overrides with defaults and parse any configured restriction.

        ``current_version`` is the declared version of the request; a
        declared range is parsed into ``declared``.

        Raises:
            InvalidRangeSpecification: if a bound, range or declared range does
                not parse, or both a range and explicit bounds are configured
            ValueError: if the comparator name is unknown
        """
        own = self.for_component(coordinate)
        comparator = get_comparator(own.comparator or self.comparator)

        def pick(name: str, default):
            value = getattr(own, name)
            return default if value is None else value

        spec = None
        has_bounds = own.lower_bound is not None or own.upper_bound is not None
        if own.range is not None:
            if has_bounds:
                raise InvalidRangeSpecification(
                    own.range, f"{coordinate} configures both a range and lower/upper bounds"
                )
            spec = parse_range_spec(own.range, comparator)
        elif has_bounds:
            spec = spec_from_bounds(
                parse_bound_version(own.lower_bound, comparator),
                parse_bound_version(own.upper_bound, comparator),
                pick("include_lower", True),
                pick("include_upper", False),
            )

        declared = None
        if (current_version or "").strip():
            declared = parse_declared_version(current_version, comparator)
        return EffectiveSettings(
            comparator=comparator,
            include_snapshots=pick("include_snapshots", self.include_snapshots),
            search_reactor=pick("search_reactor", self.search_reactor),
            prefer_reactor=pick("prefer_reactor", self.prefer_reactor),
            spec=spec,
            declared=declared,
        )

    def override(self, **values) -> None:
        """Apply non-None values on top of the current defaults."""
        names = {f.name for f in fields(self)}
        for name, value in values.items():
            if name not in names:
                raise AttributeError(name)
            if value is not None:
                setattr(self, name, value)
