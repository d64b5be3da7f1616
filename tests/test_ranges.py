"""Tests for update-tier ranges and range specifications."""

import random

import pytest

from versioning.bounds import BoundedVersionSet, VersionPool
from versioning.comparators import MavenVersionComparator, SemverVersionComparator
from versioning.errors import InvalidRangeSpecification
from versioning.models import UpdateSegment
from versioning.ranges import RangeBuilder, parse_bound_version, parse_declared_version, parse_range_spec

MAVEN = MavenVersionComparator()


@pytest.fixture
def builder():
    """Range builder using Maven ordering."""
    return RangeBuilder(MAVEN)


class TestTierRanges:
    """Tests for incremental/minor/major ranges."""

    def test_ranges_for_plain_version(self, builder):
        """Test the three ranges of a plain triple."""
        assert str(builder.incremental_range("1.2.3")) == "[1.2.3,1.3.0)"
        assert str(builder.minor_range("1.2.3")) == "[1.2.3,2.0.0)"
        assert str(builder.major_range("1.2.3")) == "[1.2.3,)"

    def test_ranges_keep_qualified_current(self, builder):
        """Test that a qualified current version stays the lower bound."""
        assert str(builder.incremental_range("1.2.3-beta-1")) == "[1.2.3-beta-1,1.3.0)"

    def test_unparsed_current_degrades_to_major(self, builder):
        """Test that all tiers fall back to [current,) for an unparsed version."""
        for rng in builder.tier_ranges("weird.version.x").values():
            assert str(rng) == "[weird.version.x,)"

    def test_ranges_with_other_comparator(self):
        """Test that upper bounds are parsed with the component's comparator."""
        semver = RangeBuilder(SemverVersionComparator())
        assert str(semver.incremental_range("1.4.2")) == "[1.4.2,1.5.0)"

    @pytest.mark.parametrize("seed", [5, 13, 21])
    def test_nesting(self, builder, seed):
        """Test that incremental results are within minor, and minor within major."""
        rng = random.Random(seed)
        raw = [f"{rng.randint(0, 2)}.{rng.randint(0, 3)}.{rng.randint(0, 5)}" for _ in range(50)]
        versions = BoundedVersionSet(VersionPool.build(raw, MAVEN))
        for current in rng.sample(raw, 10):
            tiers = builder.tier_ranges(current)
            incremental = set(versions.versions_in_range(tiers[UpdateSegment.INCREMENTAL]))
            minor = set(versions.versions_in_range(tiers[UpdateSegment.MINOR]))
            major = set(versions.versions_in_range(tiers[UpdateSegment.MAJOR]))
            assert incremental <= minor <= major


class TestClassifySegment:
    """Tests for classify_segment."""

    @pytest.mark.parametrize("candidate,expected", [
        ("1.2.4", UpdateSegment.INCREMENTAL),
        ("1.2.3-sp-1", UpdateSegment.INCREMENTAL),
        ("1.3.0", UpdateSegment.MINOR),
        ("1.9.9", UpdateSegment.MINOR),
        ("2.0.0", UpdateSegment.MAJOR),
        ("1.2.3", UpdateSegment.NONE),
        ("1.2.3.0", UpdateSegment.NONE),
        ("1.0.0", UpdateSegment.NONE),
    ])
    def test_segments(self, builder, candidate, expected):
        """Test the magnitude of a candidate relative to 1.2.3."""
        assert builder.classify_segment("1.2.3", candidate) is expected


class TestParseRangeSpec:
    """Tests for Maven range specification parsing."""

    def test_half_open_range(self):
        """Test a single half-open range."""
        spec = parse_range_spec("[1.0,2.0)", MAVEN)
        assert spec.restricted
        (rng,) = spec.ranges
        assert rng.lower.value.text == "1.0" and rng.lower.inclusive
        assert rng.upper.value.text == "2.0" and not rng.upper.inclusive
        assert str(rng) == "[1.0,2.0)"

    def test_exact_version(self):
        """Test that [1.0] pins one version."""
        (rng,) = parse_range_spec("[1.0]", MAVEN).ranges
        assert rng.lower == rng.upper
        assert str(rng) == "[1.0]"

    def test_unbounded_sides(self):
        """Test open lower and upper ends."""
        low, high = parse_range_spec("(,1.0], [1.2,)", MAVEN).ranges
        assert not low.lower.bounded
        assert str(low) == "(,1.0]"
        assert not high.upper.bounded
        assert str(high) == "[1.2,)"

    def test_bare_version_is_recommendation(self):
        """Test that a bare version restricts nothing."""
        spec = parse_range_spec("1.0", MAVEN)
        assert not spec.restricted
        assert spec.recommended.text == "1.0"

    @pytest.mark.parametrize("text", [
        "",
        "[1.0",
        "(1.0)",
        "[2.0,1.0]",
        "[1.0,1.0)",
        "[1.0,2.0),",
        "[1.0,2.0]x",
        "[1.0,,2.0]",
        "[1.0,2.0],[1.5,3.0]",
        "[1.0,),[2.0,3.0]",
        "1.0,2.0",
    ])
    def test_invalid_specs(self, text):
        """Test that malformed specifications raise InvalidRangeSpecification."""
        with pytest.raises(InvalidRangeSpecification):
            parse_range_spec(text, MAVEN)


class TestParseBoundVersion:
    """Tests for configured bound parsing."""

    def test_none_is_unbounded(self):
        """Test that a missing bound is None."""
        assert parse_bound_version(None, MAVEN) is None

    def test_plain_version(self):
        """Test a plain version bound."""
        assert parse_bound_version("2.0", MAVEN).text == "2.0"

    @pytest.mark.parametrize("text", ["", "  ", "[2.0", "2.0)"])
    def test_invalid(self, text):
        """Test that blank or range-like bounds are rejected."""
        with pytest.raises(InvalidRangeSpecification):
            parse_bound_version(text, MAVEN)


class TestParseDeclaredVersion:
    """Tests for declared current versions."""

    def test_plain_version(self):
        """Test that a plain declared version is kept as the recommendation."""
        spec = parse_declared_version("1.10", MAVEN)
        assert not spec.restricted
        assert spec.recommended.text == "1.10"

    def test_declared_range(self):
        """Test that a bracketed declaration is a restriction."""
        spec = parse_declared_version("[1.0,2.0)", MAVEN)
        assert spec.restricted
        assert str(spec.ranges[0]) == "[1.0,2.0)"

    def test_unparsed_plain_version(self):
        """Test that a version Maven cannot decompose is still accepted."""
        assert parse_declared_version("RELEASE", MAVEN).recommended.unparsed

    @pytest.mark.parametrize("text", ["[1.0", "(1.0)", "[2.0,1.0]"])
    def test_malformed_range(self, text):
        """Test that a malformed declared range is rejected."""
        with pytest.raises(InvalidRangeSpecification):
            parse_declared_version(text, MAVEN)
