"""Render symbol assignments as Go linker flags."""

from collections.abc import Mapping


def format_ldflags(values: Mapping[str, str]) -> str:
    """
    Render assignments as ``-X 'key=value'`` flags.

    Keys are sorted so the same metadata always yields the same string.
    Values are emitted as given; message fields arrive already escaped.
    GitBranch and GitSummary are not, so a branch or tag name containing
    ``'`` ends the quoted value early.

    Args:
        values: Assignment map from collect_values()

    Returns:
        Space-separated flags, suitable for ``go build -ldflags``

    Examples:
        >>> format_ldflags({"main.GitCommit": "abc1234"})
        "-X 'main.GitCommit=abc1234'"
    """
    return " ".join(f"-X '{key}={values[key]}'" for key in sorted(values))
