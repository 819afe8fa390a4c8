"""Caller-supplied override directives (symbol prefix and version)."""

import logging
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class DirectiveKey(str, Enum):
    """Recognized directive flags."""

    PACKAGE = "-pkg"
    VERSION = "-version"


class Directive(BaseModel):
    """A single override supplied by the caller."""

    key: DirectiveKey = Field(..., description="Which value is overridden")
    value: str = Field(..., description="Override value (free text)")


def _match_key(arg: str) -> tuple[Optional[DirectiveKey], Optional[str]]:
    """Split ``-pkg``/``--pkg=x`` style arguments into (key, inline value)."""
    flag, sep, inline = arg.partition("=")
    if flag.startswith("--"):
        flag = flag[1:]
    for key in DirectiveKey:
        if flag == key.value:
            return key, inline if sep else None
    return None, None


def parse_directives(args: Sequence[str]) -> tuple[list[Directive], list[str]]:
    """
    Pull override directives out of an argument list.

    Recognizes ``-pkg VALUE``, ``-pkg=VALUE``, ``-version VALUE`` and
    ``-version=VALUE`` (double-dash spellings too). Everything else is
    passed through untouched and in order.

    Meant for callers that wrap ``go build`` and receive directives mixed
    into the build's own arguments; the CLI builds directives from its
    ``--pkg``/``--set-version`` options instead.

    Args:
        args: Ordered argument list

    Returns:
        Tuple of (directives in order of appearance, remaining arguments)
    """
    directives: list[Directive] = []
    remaining: list[str] = []

    i = 0
    while i < len(args):
        arg = args[i]
        key, inline = _match_key(arg)
        if key is None:
            remaining.append(arg)
        elif inline is not None:
            directives.append(Directive(key=key, value=inline))
        elif i + 1 < len(args):
            directives.append(Directive(key=key, value=args[i + 1]))
            i += 1
        else:
            logger.warning("Ignoring %s: no value given", arg)
        i += 1

    return directives, remaining


def find_directive(
    directives: Optional[Iterable[Directive]], key: DirectiveKey
) -> Optional[str]:
    """Return the value of the last directive with the given key, if any."""
    value = None
    for directive in directives or ():
        if directive.key == key:
            value = directive.value
    return value
