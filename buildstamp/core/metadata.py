"""Build metadata schema and conversion to symbol assignments."""

import json
import re
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Prefix used when no -pkg directive is supplied
DEFAULT_PACKAGE = "main"

_PREFIX_PATTERN = re.compile(r"^[^\s='\"]+$")


def is_valid_prefix(prefix: str) -> bool:
    """Check that a symbol prefix can be used in a ``-X prefix.Name=...`` flag."""
    return bool(_PREFIX_PATTERN.match(prefix))


class BuildMetadata(BaseModel):
    """
    Metadata injected into a binary.

    Field aliases are the symbol names the values are assigned to, so
    ``model_dump(by_alias=True)`` yields ``{"GitCommit": ..., ...}``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    build_date: str = Field(
        ..., alias="BuildDate", description="Build time (RFC 3339, UTC)"
    )
    git_commit: str = Field(..., alias="GitCommit", description="Short commit id")
    git_commit_full: str = Field(
        ..., alias="GitCommitFull", description="Full commit id"
    )
    git_commit_msg: str = Field(
        ..., alias="GitCommitMsg", description="Escaped commit subject"
    )
    git_commit_msg_full: str = Field(
        ..., alias="GitCommitMsgFull", description="Escaped full commit message"
    )
    git_branch: str = Field(..., alias="GitBranch", description="Branch or HEAD")
    git_state: str = Field(..., alias="GitState", description="clean/dirty state")
    git_summary: str = Field(
        ..., alias="GitSummary", description="Tag-based describe output"
    )
    version: Optional[str] = Field(
        None, alias="Version", description="Semantic version if resolvable"
    )

    @field_validator("build_date")
    @classmethod
    def validate_build_date(cls, v: str) -> str:
        """Validate build date is a UTC RFC 3339 timestamp."""
        if not re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$", v):
            raise ValueError(f"BuildDate must be RFC 3339 UTC: {v}")
        return v

    def to_assignments(self, prefix: str = DEFAULT_PACKAGE) -> dict[str, str]:
        """
        Build the fully-qualified assignment map.

        Args:
            prefix: Symbol prefix (package) the fields live in

        Returns:
            Mapping of ``prefix.FieldName`` to value; ``Version`` only when set
        """
        data = self.model_dump(by_alias=True, exclude_none=True)
        return {f"{prefix}.{name}": value for name, value in data.items()}

    def _sorted_assignments(self, prefix: str) -> dict[str, str]:
        assignments = self.to_assignments(prefix)
        return {key: assignments[key] for key in sorted(assignments)}

    def to_yaml(self, prefix: str = DEFAULT_PACKAGE) -> str:
        """
        Serialize the assignment map to YAML, sorted by key.

        Args:
            prefix: Symbol prefix (package) the fields live in

        Returns:
            YAML string representation
        """
        data = self._sorted_assignments(prefix)
        return yaml.dump(data, default_flow_style=False, sort_keys=False)

    def to_json(self, prefix: str = DEFAULT_PACKAGE, indent: int = 2) -> str:
        """Serialize the assignment map to JSON, sorted by key."""
        return json.dumps(self._sorted_assignments(prefix), indent=indent)
