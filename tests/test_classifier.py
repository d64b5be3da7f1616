"""Tests for three-tier update classification."""

import pytest

from versioning.bounds import VersionPool
from versioning.classifier import UpdateClassifier
from versioning.comparators import MavenVersionComparator

MAVEN = MavenVersionComparator()
POOL = ["1.0.0", "1.0.1", "1.0.2", "1.1.0", "1.2.0-SNAPSHOT", "2.0.0", "2.1.0"]


@pytest.fixture
def classifier():
    """Classifier without show-all."""
    return UpdateClassifier(MAVEN)


def _texts(summary):
    return tuple(
        None if v is None else v.text
        for v in (summary.latest_incremental, summary.latest_minor, summary.latest_major)
    )


class TestSummarize:
    """Tests for summarize."""

    def test_latest_per_tier(self, classifier):
        """Test the newest version in each tier range."""
        summary = classifier.summarize("g:a", "1.0.1", POOL)
        assert summary.component == "g:a"
        assert summary.current.text == "1.0.1"
        assert _texts(summary) == ("1.0.2", "1.1.0", "2.1.0")
        assert classifier.has_updates(summary)

    def test_snapshots_when_allowed(self, classifier):
        """Test that snapshots count only when included."""
        summary = classifier.summarize("g:a", "1.0.1", POOL, include_snapshots=True)
        assert summary.latest_minor.text == "1.2.0-SNAPSHOT"

    def test_up_to_date(self, classifier):
        """Test that a current version at the top has no updates."""
        summary = classifier.summarize("g:a", "2.1.0", POOL)
        assert _texts(summary) == ("2.1.0", "2.1.0", "2.1.0")
        assert not classifier.has_updates(summary)

    def test_empty_pool(self, classifier):
        """Test that an empty pool gives empty tiers and no updates."""
        summary = classifier.summarize("g:a", "1.0", [])
        assert _texts(summary) == (None, None, None)
        assert not classifier.has_updates(summary)

    def test_accepts_prebuilt_pool(self, classifier):
        """Test that a VersionPool is used directly."""
        pool = VersionPool.build(POOL, MAVEN)
        assert classifier.summarize("g:a", "1.0.1", pool) == classifier.summarize("g:a", "1.0.1", POOL)

    def test_idempotent(self, classifier):
        """Test that classifying twice yields identical summaries."""
        first = classifier.summarize("g:a", "1.0.1", POOL)
        second = classifier.summarize("g:a", "1.0.1", POOL)
        assert first == second
        assert first.to_dict() == second.to_dict()


class TestHasUpdates:
    """Tests for has_updates ordering."""

    def test_show_all_forces_true(self):
        """Test that show-all reports components without updates."""
        classifier = UpdateClassifier(MAVEN, show_all=True)
        summary = classifier.summarize("g:a", "2.1.0", POOL)
        assert classifier.has_updates(summary)

    def test_unparsed_current_is_reported(self, classifier):
        """Test that a version that cannot be decomposed is always reported."""
        summary = classifier.summarize("g:a", "weird.version.x", [])
        assert summary.current.unparsed
        assert classifier.has_updates(summary)

    def test_only_major_newer(self, classifier):
        """Test that a newer major alone is an update."""
        summary = classifier.summarize("g:a", "1.1.0", ["1.1.0", "3.0.0"])
        assert _texts(summary) == ("1.1.0", "1.1.0", "3.0.0")
        assert classifier.has_updates(summary)


class TestDetails:
    """Tests for the next/latest details."""

    def test_next_and_latest(self, classifier):
        """Test oldest and newest strictly newer versions per tier."""
        details = classifier.details("1.0.1", POOL)
        assert details.next_incremental.text == "1.0.2"
        assert details.latest_incremental.text == "1.0.2"
        assert details.next_minor.text == "1.0.2"
        assert details.latest_minor.text == "1.1.0"
        assert details.next_major.text == "1.0.2"
        assert details.latest_major.text == "2.1.0"
        assert details.next_version.text == "1.0.2"
        assert [v.text for v in details.all_newer] == ["1.0.2", "1.1.0", "2.0.0", "2.1.0"]

    def test_nothing_newer(self, classifier):
        """Test that the current version itself is never a next version."""
        details = classifier.details("2.1.0", POOL)
        assert details.next_version is None
        assert details.latest_major is None
        assert details.all_newer == ()
