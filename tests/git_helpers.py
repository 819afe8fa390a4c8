"""Helpers for building throwaway git repositories in tests."""

import shutil
import subprocess

import pytest

requires_git = pytest.mark.skipif(
    shutil.which("git") is None, reason="git executable not available"
)


def run_git(repo, *args):
    """Run a git command in repo and return stripped stdout."""
    result = subprocess.run(
        ["git", *args], cwd=repo, check=True, capture_output=True, text=True
    )
    return result.stdout.strip()


def init_repo(path):
    """Initialize (or reconfigure) a repository on main with a test identity."""
    path.mkdir(parents=True, exist_ok=True)
    run_git(path, "init")
    run_git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    run_git(path, "config", "user.name", "Test User")
    run_git(path, "config", "user.email", "test@example.com")
    run_git(path, "config", "commit.gpgsign", "false")
    run_git(path, "config", "tag.gpgsign", "false")
    return path


def commit_file(repo, name, content, message):
    """Write a file and commit it."""
    (repo / name).write_text(content)
    run_git(repo, "add", name)
    run_git(repo, "commit", "-m", message)
