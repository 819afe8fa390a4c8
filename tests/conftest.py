"""Pytest configuration and shared fixtures for buildstamp tests."""

import pytest

from tests.git_helpers import commit_file, init_repo


@pytest.fixture
def empty_repo(tmp_path):
    """A git repository with no commits."""
    return init_repo(tmp_path / "empty")


@pytest.fixture
def git_repo(tmp_path):
    """
    A git repository with a single commit on main.

    The commit message has a subject with a quote and a hyphen, and a body,
    so escaping is visible in collected values.
    """
    repo = init_repo(tmp_path / "repo")
    commit_file(
        repo,
        "main.go",
        "package main\n",
        "Don't re-run setup\n\nLonger body - with details.",
    )
    return repo


@pytest.fixture
def not_a_repo(tmp_path):
    """A plain directory outside any checkout."""
    plain = tmp_path / "plain"
    plain.mkdir()
    return plain
