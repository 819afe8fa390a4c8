"""Typer-based CLI application for buildstamp."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer

from buildstamp import __version__
from buildstamp.core.collector import CollectionError, collect_metadata
from buildstamp.core.directives import Directive, DirectiveKey
from buildstamp.core.ldflags import format_ldflags
from buildstamp.core.metadata import BuildMetadata

app = typer.Typer(
    name="buildstamp",
    help="Version-control metadata for build-time symbol injection",
    add_completion=False,
)


class OutputFormat(str, Enum):
    """Output formats for the values command."""

    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


DirectoryArg = Annotated[
    Path, typer.Argument(help="Checkout directory to read metadata from")
]
PackageOpt = Annotated[
    Optional[str],
    typer.Option(
        "--pkg",
        envvar="BUILDSTAMP_PKG",
        help="Symbol prefix (package) to assign into (default: main)",
    ),
]
VersionOpt = Annotated[
    Optional[str],
    typer.Option(
        "--set-version",
        envvar="BUILDSTAMP_VERSION",
        help="Version override (default: contents of DIRECTORY/VERSION)",
    ),
]
LogLevelOpt = Annotated[
    str,
    typer.Option(
        help="Logging level (debug, info, warn, error)",
        case_sensitive=False,
        hidden=True,
    ),
]


def version_callback(value: bool):
    """Display version and exit."""
    if value:
        typer.echo(f"buildstamp v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
):
    """Buildstamp - Stamp binaries with the source state that built them.

    Reads commit, branch, tag summary, working-tree state and version from a
    git checkout and renders them as symbol assignments for the linker.
    """
    pass


def configure_logging(log_level: str) -> None:
    """Configure root logging from a --log-level value.

    Raises:
        typer.Exit: If the level is not recognized
    """
    log_level_upper = log_level.upper()
    if log_level_upper not in ["DEBUG", "INFO", "WARN", "WARNING", "ERROR"]:
        typer.echo(
            f"❌ Invalid log level: {log_level}. "
            "Must be debug, info, warn, or error.",
            err=True,
        )
        raise typer.Exit(1)

    # Map WARN to WARNING for Python logging
    if log_level_upper == "WARN":
        log_level_upper = "WARNING"

    logging.basicConfig(
        level=getattr(logging, log_level_upper),
        format="%(message)s",
    )


def build_directives(
    pkg: Optional[str], set_version: Optional[str]
) -> list[Directive]:
    """Translate CLI options into collector directives."""
    directives = []
    if pkg is not None:
        directives.append(Directive(key=DirectiveKey.PACKAGE, value=pkg))
    if set_version is not None:
        directives.append(Directive(key=DirectiveKey.VERSION, value=set_version))
    return directives


def collect_or_exit(
    directory: Path, directives: list[Directive]
) -> tuple[BuildMetadata, str]:
    """Collect metadata and prefix, reporting failures and exiting non-zero."""
    directory = directory.expanduser()
    if not directory.is_dir():
        typer.echo(f"❌ Directory does not exist: {directory}", err=True)
        raise typer.Exit(1)

    try:
        return collect_metadata(directory, directives)
    except CollectionError as e:
        typer.echo(
            f"❌ Failed to collect build metadata for {directory}: {e}", err=True
        )
        logging.getLogger(__name__).debug("Collection failed", exc_info=True)
        raise typer.Exit(1) from e


@app.command()
def values(
    directory: DirectoryArg = Path("."),
    pkg: PackageOpt = None,
    set_version: VersionOpt = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", help="Output format", case_sensitive=False),
    ] = OutputFormat.TEXT,
    log_level: LogLevelOpt = "warn",
):
    """Print the symbol assignments for a checkout."""
    configure_logging(log_level)
    metadata, prefix = collect_or_exit(
        directory, build_directives(pkg, set_version)
    )

    if output_format == OutputFormat.JSON:
        typer.echo(metadata.to_json(prefix))
    elif output_format == OutputFormat.YAML:
        typer.echo(metadata.to_yaml(prefix).rstrip())
    else:
        assignments = metadata.to_assignments(prefix)
        for key in sorted(assignments):
            typer.echo(f"{key}={assignments[key]}")


@app.command()
def ldflags(
    directory: DirectoryArg = Path("."),
    pkg: PackageOpt = None,
    set_version: VersionOpt = None,
    log_level: LogLevelOpt = "warn",
):
    """Print -X linker flags for go build -ldflags."""
    configure_logging(log_level)
    metadata, prefix = collect_or_exit(
        directory, build_directives(pkg, set_version)
    )
    typer.echo(format_ldflags(metadata.to_assignments(prefix)))
