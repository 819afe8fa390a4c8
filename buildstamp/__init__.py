"""Buildstamp - Version-control metadata for build-time symbol injection."""

__version__ = "0.1.0"

from .core.collector import CollectionError, collect_values
from .core.git import GitRepository, QueryError

__all__ = ["CollectionError", "GitRepository", "QueryError", "collect_values"]
