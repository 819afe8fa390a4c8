"""Collect build metadata from a checkout into symbol assignments."""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from .directives import Directive, DirectiveKey, find_directive
from .escaping import escape_value
from .git import GitRepository, QueryError
from .metadata import DEFAULT_PACKAGE, BuildMetadata, is_valid_prefix

logger = logging.getLogger(__name__)

VERSION_FILE = "VERSION"


class CollectionError(Exception):
    """Build metadata could not be collected; nothing is returned."""

    def __init__(self, field: str, cause: Exception):
        self.field = field
        self.cause = cause
        super().__init__(f"failed to get {field}: {cause}")


def build_date() -> str:
    """Return the current UTC time in RFC 3339 layout (e.g. 2024-01-15T10:30:00Z)."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def version_from_file(directory: Union[str, Path]) -> Optional[str]:
    """
    Read the fallback version from ``<directory>/VERSION``.

    Args:
        directory: Checkout root

    Returns:
        Trimmed file contents, or None if the file is missing or blank

    Raises:
        CollectionError: If the file exists but cannot be read
    """
    path = Path(directory) / VERSION_FILE
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No version file at %s", path)
        return None
    except (OSError, UnicodeDecodeError) as e:
        raise CollectionError(f"version file {path}", e) from e

    return content.strip() or None


def resolve_prefix(directives: Optional[Iterable[Directive]]) -> str:
    """Return the -pkg directive value if usable, else the default prefix."""
    prefix = find_directive(directives, DirectiveKey.PACKAGE)
    if prefix is None:
        return DEFAULT_PACKAGE
    if not is_valid_prefix(prefix):
        logger.warning(
            "Ignoring malformed package %r, using %r", prefix, DEFAULT_PACKAGE
        )
        return DEFAULT_PACKAGE
    return prefix


def resolve_version(
    directory: Union[str, Path], directives: Optional[Iterable[Directive]]
) -> Optional[str]:
    """An explicit -version directive wins; otherwise fall back to VERSION."""
    override = find_directive(directives, DirectiveKey.VERSION)
    if override is not None:
        return override
    return version_from_file(directory)


def collect_metadata(
    directory: Union[str, Path],
    directives: Optional[Iterable[Directive]] = None,
) -> tuple[BuildMetadata, str]:
    """
    Query the checkout and assemble its build metadata.

    Fails fast: the first query that cannot be answered aborts the whole
    collection.

    Args:
        directory: Checkout directory
        directives: Caller overrides (-pkg, -version)

    Returns:
        Tuple of (metadata, resolved symbol prefix)

    Raises:
        CollectionError: If any git query fails or VERSION is unreadable
    """
    directives = list(directives or [])
    prefix = resolve_prefix(directives)
    repo = GitRepository(directory)

    queries = [
        ("commit", repo.commit),
        ("full commit", repo.commit_full),
        ("commit message", repo.commit_msg),
        ("commit full message", repo.commit_full_msg),
        ("repository state", repo.state),
        ("repository summary", repo.summary),
    ]
    answers = {}
    for field, query in queries:
        try:
            answers[field] = query()
        except QueryError as e:
            raise CollectionError(field, e) from e

    metadata = BuildMetadata(
        build_date=build_date(),
        git_commit=answers["commit"],
        git_commit_full=answers["full commit"],
        git_commit_msg=escape_value(answers["commit message"]),
        git_commit_msg_full=escape_value(answers["commit full message"]),
        git_branch=repo.branch(),
        git_state=answers["repository state"],
        git_summary=answers["repository summary"],
        version=resolve_version(directory, directives),
    )
    logger.debug("Collected metadata for %s: %s", directory, metadata)
    return metadata, prefix


def collect_values(
    directory: Union[str, Path],
    directives: Optional[Iterable[Directive]] = None,
) -> dict[str, str]:
    """
    Collect the assignment map (``prefix.Field -> value``) for a checkout.

    Raises:
        CollectionError: If collection fails; no partial map is returned
    """
    metadata, prefix = collect_metadata(directory, directives)
    return metadata.to_assignments(prefix)
