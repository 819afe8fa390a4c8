"""Tests for the build metadata schema."""

import json

import pytest
import yaml
from pydantic import ValidationError

from buildstamp.core.metadata import BuildMetadata, is_valid_prefix


def sample_metadata(**overrides):
    data = {
        "build_date": "2024-01-15T10:30:00Z",
        "git_commit": "abc1234",
        "git_commit_full": "abc1234" + "0" * 33,
        "git_commit_msg": "Fix bug",
        "git_commit_msg_full": "Fix bug\n\nDetails",
        "git_branch": "main",
        "git_state": "clean",
        "git_summary": "v1.0.0",
    }
    data.update(overrides)
    return BuildMetadata(**data)


class TestBuildMetadata:
    """Test BuildMetadata model."""

    def test_populate_by_symbol_name(self):
        """Test fields can be given by their symbol names."""
        metadata = BuildMetadata(
            BuildDate="2024-01-15T10:30:00Z",
            GitCommit="abc1234",
            GitCommitFull="abc1234def",
            GitCommitMsg="m",
            GitCommitMsgFull="m",
            GitBranch="main",
            GitState="dirty",
            GitSummary="abc1234-dirty",
            Version="1.0.0",
        )
        assert metadata.git_state == "dirty"
        assert metadata.version == "1.0.0"

    def test_build_date_validation(self):
        """Test non-UTC or non-RFC 3339 dates are rejected."""
        with pytest.raises(ValidationError):
            sample_metadata(build_date="2024-01-15 10:30:00")
        with pytest.raises(ValidationError):
            sample_metadata(build_date="2024-01-15T10:30:00+02:00")

    def test_to_assignments(self):
        """Test keys are prefix.FieldName and Version is omitted when unset."""
        assignments = sample_metadata().to_assignments("example.com/app")

        assert assignments["example.com/app.GitCommit"] == "abc1234"
        assert assignments["example.com/app.BuildDate"] == "2024-01-15T10:30:00Z"
        assert len(assignments) == 8
        assert "example.com/app.Version" not in assignments

    def test_to_assignments_with_version(self):
        """Test Version is included once set."""
        assignments = sample_metadata(version="2.0.0").to_assignments()
        assert assignments["main.Version"] == "2.0.0"
        assert len(assignments) == 9

    def test_empty_version_kept(self):
        """Test an explicitly empty version still produces the key."""
        assert sample_metadata(version="").to_assignments()["main.Version"] == ""

    def test_to_yaml(self):
        """Test YAML output holds the prefixed assignments."""
        data = yaml.safe_load(sample_metadata().to_yaml("build"))
        assert data["build.GitCommit"] == "abc1234"
        assert "build.Version" not in data
        assert len(data) == 8

    def test_to_json(self):
        """Test JSON output holds the prefixed assignments, sorted by key."""
        output = sample_metadata(version="1.0").to_json()
        data = json.loads(output)

        assert data["main.GitBranch"] == "main"
        assert data["main.Version"] == "1.0"
        assert list(data) == sorted(data)


class TestIsValidPrefix:
    """Test symbol prefix validation."""

    def test_valid(self):
        for prefix in ["main", "github.com/acme/tool/version", "pkg_v2"]:
            assert is_valid_prefix(prefix)

    def test_invalid(self):
        for prefix in ["", "two words", "a=b", "it's", 'say"x"', "tab\there"]:
            assert not is_valid_prefix(prefix)
