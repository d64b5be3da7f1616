"""Tests for configuration loading."""

import json

import pytest

from config import load_config
from constants import Constants
from versioning.errors import ConfigError
from versioning.settings import EngineSettings

YAML_CONFIG = """
defaults:
  comparator: maven
  include_snapshots: true
  search_reactor: true
repository_url: https://repo.example/maven2
components:
  - coordinate: org.example:lib
    version: 1.0
    upper_bound: 2.0.0
    include_upper: false
    versions: [1.0, 1.5, 2.0.0]
  - coordinate: org.example:util
    comparator: semver
    range: "[1.0.0,2.0.0)"
reactor:
  - org.example:lib:1.6.0-SNAPSHOT
excludes:
  - org.example:internal
"""


def write(tmp_path, name, content):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


class TestLoadConfig:
    """Tests for load_config."""

    def test_yaml(self, tmp_path):
        """Test a complete YAML configuration."""
        loaded = load_config(write(tmp_path, "depwatch.yml", YAML_CONFIG))
        settings = loaded.settings
        assert settings.include_snapshots is True
        assert settings.search_reactor is True
        assert settings.prefer_reactor is False
        assert loaded.repository_url == "https://repo.example/maven2"
        assert settings.excludes == ["org.example:internal"]
        assert loaded.reactor == ["org.example:lib:1.6.0-SNAPSHOT"]

        lib = settings.components["org.example:lib"]
        assert lib.upper_bound == "2.0.0"
        assert lib.include_upper is False
        assert lib.include_lower is None
        assert settings.components["org.example:util"].comparator == "semver"

        assert [(r.coordinate, r.current_version, r.source) for r in loaded.requests] == [
            ("org.example:lib", "1.0", "config"),
            ("org.example:util", None, "config"),
        ]
        assert loaded.versions == {"org.example:lib": ["1.0", "1.5", "2.0.0"]}

    def test_resolved_settings(self, tmp_path):
        """Test that loaded settings resolve into effective settings."""
        settings = load_config(write(tmp_path, "depwatch.yml", YAML_CONFIG)).settings
        lib = settings.resolve("org.example:lib")
        assert lib.include_snapshots is True
        assert str(lib.spec.ranges[0]) == "(,2.0.0)"
        util = settings.resolve("org.example:util")
        assert util.comparator.name == "semver"
        assert str(util.spec.ranges[0]) == "[1.0.0,2.0.0)"

    def test_json(self, tmp_path):
        """Test that .json files are read as JSON."""
        data = {"defaults": {"show_all": True}, "components": [{"coordinate": "g:a", "version": "1.0"}]}
        loaded = load_config(write(tmp_path, "depwatch.json", json.dumps(data)))
        assert loaded.settings.show_all is True
        assert loaded.requests[0].current_version == "1.0"

    def test_empty_file(self, tmp_path):
        """Test that an empty file gives defaults."""
        loaded = load_config(write(tmp_path, "empty.yml", ""))
        assert loaded.requests == []
        assert loaded.settings.comparator == "maven"

    @pytest.mark.parametrize("content", [
        "- just\n- a list\n",
        "unknown_key: 1\n",
        "defaults:\n  include_snapshots: 'yes'\n",
        "defaults:\n  colour: blue\n",
        "defaults:\n  comparator: calver\n",
        "components: g:a\n",
        "components:\n  - version: 1.0\n",
        "components:\n  - coordinate: g:a:1.0\n",
        "components:\n  - coordinate: g:a\n    comparator: calver\n",
        "components:\n  - coordinate: g:a\n    extra: true\n",
        "components:\n  - coordinate: g:a\n    versions: 1.0\n",
        "excludes: g:a\n",
        "defaults: [1]\n",
        "defaults:\n  show_all: [true\n",
    ])
    def test_invalid(self, tmp_path, content):
        """Test that ill-typed or malformed configuration raises ConfigError."""
        with pytest.raises(ConfigError):
            load_config(write(tmp_path, "bad.yml", content))

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises ConfigError."""
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "nope.yml"))


class TestVersionScalars:
    """Tests for version values written without quotes."""

    def test_unquoted_yaml_versions_keep_their_text(self, tmp_path):
        """Test that 1.10 stays 1.10 instead of becoming the number 1.1."""
        content = (
            "components:\n"
            "  - coordinate: g:a\n"
            "    version: 1.10\n"
            "    upper_bound: 2.0\n"
            "    versions: [1.9, 1.10, 1.11, 2]\n"
        )
        loaded = load_config(write(tmp_path, "depwatch.yml", content))
        assert loaded.requests[0].current_version == "1.10"
        assert loaded.versions["g:a"] == ["1.9", "1.10", "1.11", "2"]
        assert loaded.settings.components["g:a"].upper_bound == "2.0"

    def test_booleans_still_typed(self, tmp_path):
        """Test that flags are still read as booleans."""
        loaded = load_config(write(tmp_path, "depwatch.yml", "defaults:\n  show_all: true\n"))
        assert loaded.settings.show_all is True

    @pytest.mark.parametrize("entry", [
        {"coordinate": "g:a", "version": 1.1},
        {"coordinate": "g:a", "version": "1.0", "versions": [1.1]},
        {"coordinate": "g:a", "version": "1.0", "lower_bound": 1},
    ])
    def test_json_numbers_rejected(self, tmp_path, entry):
        """Test that JSON numbers are refused with a hint to quote them."""
        path = write(tmp_path, "depwatch.json", json.dumps({"components": [entry]}))
        with pytest.raises(ConfigError, match="quote"):
            load_config(path)


class TestDefaultComparator:
    """Tests for the engine comparator default."""

    def test_default_comparator(self):
        """Test that the engine default comes from the constants."""
        assert EngineSettings().comparator == Constants.DEFAULT_COMPARATOR
