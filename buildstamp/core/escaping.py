"""Escaping of free-text values for single-quoted linker arguments."""

# Applied in order; unescaping walks the table in reverse
_ESCAPES = (
    ("'", "\\'"),
    ("-", "\\-"),
)


def escape_value(text: str) -> str:
    """Escape single quotes and hyphens in a free-text value.

    Args:
        text: Raw value (e.g. a commit message)

    Returns:
        Text with every ``'`` replaced by ``\\'`` and every ``-`` by ``\\-``

    Examples:
        >>> escape_value("it's-a-test")
        "it\\\\'s\\\\-a\\\\-test"
        >>> escape_value("plain text")
        'plain text'
    """
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


def unescape_value(text: str) -> str:
    """Reverse escape_value()."""
    for raw, escaped in reversed(_ESCAPES):
        text = text.replace(escaped, raw)
    return text
