"""Read-only git queries against a single checkout."""

import logging
import subprocess
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

# Reported by branch() when HEAD does not point at a named branch
DETACHED_BRANCH = "HEAD"


class QueryError(Exception):
    """A single repository query could not be answered."""

    def __init__(self, query: str, detail: str):
        self.query = query
        self.detail = detail
        super().__init__(f"git {query} failed: {detail}")


class GitRepository:
    """
    Answers read-only questions about one git checkout.

    Every query shells out to ``git`` with the checkout as working directory
    and returns stripped output. Nothing here writes to the repository.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize repository reader.

        Args:
            path: Root (or any directory inside) of the checkout
        """
        self.path = Path(path)

    def _run(self, query: str, *args: str) -> str:
        """Run a git command and return its stripped stdout.

        Raises:
            QueryError: If git is missing or exits non-zero
        """
        cmd = ["git", *args]
        try:
            result = subprocess.run(
                cmd, cwd=self.path, capture_output=True, text=True
            )
        except OSError as e:
            logger.debug("Cannot run %s in %s: %s", cmd, self.path, e)
            raise QueryError(query, str(e)) from e

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exit status {result.returncode}"
            logger.debug("%s in %s: %s", " ".join(cmd), self.path, detail)
            raise QueryError(query, detail)

        return result.stdout.strip()

    def branch(self) -> str:
        """Return the current branch name, or ``HEAD`` when detached.

        Never raises: a checkout that cannot be read reports the same
        placeholder as a detached one.
        """
        try:
            name = self._run("branch", "symbolic-ref", "-q", "--short", "HEAD")
        except QueryError:
            return DETACHED_BRANCH
        return name or DETACHED_BRANCH

    def commit(self) -> str:
        """Return the abbreviated id of HEAD."""
        return self._run("commit", "rev-parse", "--short", "HEAD")

    def commit_full(self) -> str:
        """Return the full id of HEAD."""
        return self._run("commit-full", "rev-parse", "HEAD")

    def commit_msg(self) -> str:
        """Return the subject line of the HEAD commit message."""
        return self._run("commit-msg", "log", "-1", "--format=%s")

    def commit_full_msg(self) -> str:
        """Return the complete HEAD commit message."""
        return self._run("commit-full-msg", "log", "-1", "--format=%B")

    def state(self) -> str:
        """
        Summarize working-tree cleanliness and upstream divergence.

        Returns:
            ``clean`` or ``dirty``, followed by ``+ahead``, ``+behind`` or
            ``+diverged`` when an upstream is configured and the branch is
            not level with it (e.g. ``dirty+ahead``)

        Raises:
            QueryError: If HEAD does not resolve (no commits, not a checkout)
        """
        self._run("state", "rev-parse", "--verify", "-q", "HEAD")
        porcelain = self._run("state", "status", "--porcelain")
        state = "dirty" if porcelain else "clean"

        divergence = self._divergence()
        if divergence:
            state = f"{state}+{divergence}"
        return state

    def _divergence(self) -> str:
        """Compare HEAD against its upstream; empty when level or untracked."""
        try:
            counts = self._run(
                "state",
                "rev-list",
                "--left-right",
                "--count",
                "@{upstream}...HEAD",
            )
        except QueryError:
            # No upstream configured
            return ""

        behind, ahead = (int(n) for n in counts.split())
        if ahead and behind:
            return "diverged"
        if ahead:
            return "ahead"
        if behind:
            return "behind"
        return ""

    def summary(self) -> str:
        """
        Describe HEAD relative to the nearest tag.

        Falls back to the abbreviated commit id when no tag is reachable,
        and appends ``-dirty`` for uncommitted changes
        (e.g. ``v1.2.0-3-gabc1234-dirty``).
        """
        return self._run("summary", "describe", "--tags", "--dirty", "--always")
