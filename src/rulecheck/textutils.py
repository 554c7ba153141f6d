from __future__ import annotations

LINE_BREAK = "\n"
LINE_BREAKS = frozenset({"\n", "\r\n", "\r", "\n\r"})
ELLIPSIS = "..."
DEFAULT_PREVIEW_LENGTH = 200


def abbreviate(value: str, max_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """Shorten value to at most max_length characters, ending with '...'."""
    if max_length < len(ELLIPSIS) + 1:
        raise ValueError(f"max_length must be at least {len(ELLIPSIS) + 1}")
    if len(value) <= max_length:
        return value
    return value[: max_length - len(ELLIPSIS)] + ELLIPSIS


def count_line_breaks(value: str) -> int:
    """Return the number of newline characters in value."""
    return value.count(LINE_BREAK)


def is_whitespace(value: str) -> bool:
    """Whitespace-only (or empty) strings count as whitespace tokens."""
    return not value.strip()
