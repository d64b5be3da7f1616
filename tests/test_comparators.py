"""Tests for the version comparators."""

import pytest

from versioning.comparators import (
    MavenVersionComparator,
    NumericVersionComparator,
    Pep440VersionComparator,
    SemverVersionComparator,
    get_comparator,
)


@pytest.fixture
def maven():
    """Maven comparator."""
    return MavenVersionComparator()


def _cmp(comparator, left, right):
    return comparator.compare(comparator.parse(left), comparator.parse(right))


class TestMavenComparator:
    """Tests for Maven comparable-version ordering."""

    ASCENDING = [
        "1.0-alpha-1",
        "1.0-beta-1",
        "1.0-rc-1",
        "1.0-SNAPSHOT",
        "1.0",
        "1.0-sp-1",
        "1.0.1",
        "1.1",
        "1.10",
        "2.0",
    ]

    def test_sort_order(self, maven):
        """Test that qualifiers and numbers sort the Maven way."""
        ordered = maven.sort(reversed(self.ASCENDING))
        assert [v.text for v in ordered] == self.ASCENDING

    @pytest.mark.parametrize("left,right", [
        ("1.0", "1.0.0"),
        ("1.0", "1.0-final"),
        ("1.0", "1.0-ga"),
        ("1.0", "1.0-release"),
        ("1.0-cr-1", "1.0-rc-1"),
        ("1.0a1", "1.0-alpha-1"),
        ("1.0-SNAPSHOT", "1.0-snapshot"),
    ])
    def test_equivalent_versions(self, maven, left, right):
        """Test that aliases and trailing zeros compare equal."""
        assert _cmp(maven, left, right) == 0
        assert _cmp(maven, right, left) == 0

    def test_numeric_segments_compare_numerically(self, maven):
        """Test that 1.10 is newer than 1.9."""
        assert _cmp(maven, "1.9", "1.10") == -1
        assert _cmp(maven, "1.10", "1.9") == 1

    def test_is_newer(self, maven):
        """Test the strict newer helper."""
        assert maven.is_newer(maven.parse("2.0"), maven.parse("1.0"))
        assert not maven.is_newer(maven.parse("1.0.0"), maven.parse("1.0"))

    @pytest.mark.parametrize("text,expected", [
        ("1.0-SNAPSHOT", True),
        ("1.0-snapshot", True),
        ("1.0-20240102.123456-3", True),
        ("1.0", False),
        ("1.0-rc-1", False),
    ])
    def test_is_snapshot(self, maven, text, expected):
        """Test snapshot detection including timestamped snapshots."""
        assert maven.is_snapshot(maven.parse(text)) is expected


class TestNumericComparator:
    """Tests for the plain numeric comparator."""

    def test_ordering(self):
        """Test numeric, missing and textual segments."""
        numeric = NumericVersionComparator()
        assert _cmp(numeric, "1.9", "1.10") == -1
        assert _cmp(numeric, "1.0", "1.0.0") == 0
        assert _cmp(numeric, "1.0-beta", "1.0") == -1

    def test_snapshot(self):
        """Test that snapshots are detected like Maven ones."""
        numeric = NumericVersionComparator()
        assert numeric.is_snapshot(numeric.parse("2.0-SNAPSHOT"))


class TestSemverComparator:
    """Tests for the semantic_version backed comparator."""

    def test_prerelease_before_release(self):
        """Test SemVer precedence of pre-releases."""
        semver = SemverVersionComparator()
        assert _cmp(semver, "1.0.0-alpha", "1.0.0") == -1
        assert _cmp(semver, "1.0.0-alpha", "1.0.0-beta") == -1

    def test_parse_decomposes(self):
        """Test decomposition of a SemVer string."""
        ver = SemverVersionComparator().parse("1.2.3-rc.1")
        assert (ver.major, ver.minor, ver.incremental) == (1, 2, 3)
        assert ver.qualifier == "rc.1"

    def test_partial_version_is_coerced(self):
        """Test that 1.2 is read as 1.2.0."""
        semver = SemverVersionComparator()
        ver = semver.parse("1.2")
        assert (ver.major, ver.minor, ver.incremental) == (1, 2, 0)
        assert _cmp(semver, "1.2", "1.2.0") == 0

    def test_unparsable_sorts_first(self):
        """Test that garbage sorts before any valid version."""
        semver = SemverVersionComparator()
        assert semver.parse("garbage").unparsed
        assert _cmp(semver, "garbage", "0.0.1") == -1

    def test_snapshot_is_prerelease(self):
        """Test that pre-releases count as snapshots."""
        semver = SemverVersionComparator()
        assert semver.is_snapshot(semver.parse("1.0.0-rc.1"))
        assert not semver.is_snapshot(semver.parse("1.0.0"))


class TestPep440Comparator:
    """Tests for the packaging backed comparator."""

    def test_ordering(self):
        """Test PEP 440 ordering of pre, post and dev releases."""
        pep = Pep440VersionComparator()
        assert _cmp(pep, "1.0rc1", "1.0") == -1
        assert _cmp(pep, "1.0.dev1", "1.0rc1") == -1
        assert _cmp(pep, "1.0.post1", "1.0") == 1

    def test_snapshot_is_prerelease(self):
        """Test that dev and pre releases count as snapshots, post releases do not."""
        pep = Pep440VersionComparator()
        assert pep.is_snapshot(pep.parse("1.0.dev1"))
        assert pep.is_snapshot(pep.parse("2.0b1"))
        assert not pep.is_snapshot(pep.parse("1.0.post1"))

    def test_invalid_is_unparsed(self):
        """Test that invalid versions fall back and sort first."""
        pep = Pep440VersionComparator()
        assert pep.parse("not a version").unparsed
        assert _cmp(pep, "not a version", "0.1") == -1


class TestGetComparator:
    """Tests for comparator lookup by name."""

    @pytest.mark.parametrize("name,cls", [
        ("maven", MavenVersionComparator),
        ("MAVEN", MavenVersionComparator),
        ("numeric", NumericVersionComparator),
        ("semver", SemverVersionComparator),
        ("pep440", Pep440VersionComparator),
    ])
    def test_known_names(self, name, cls):
        """Test lookup of each registered comparator."""
        assert isinstance(get_comparator(name), cls)

    def test_unknown_name(self):
        """Test that unknown names raise ValueError."""
        with pytest.raises(ValueError):
            get_comparator("calver")
