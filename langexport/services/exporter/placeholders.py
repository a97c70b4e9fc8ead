"""Structural check of ``{...}`` placeholders in translation values."""

from __future__ import annotations

from langexport.core.errors import PlaceholderError

UNMATCHED_CLOSING = "unmatched closing brace"
UNMATCHED_OPENING = "unmatched opening brace"


def placeholder_issue(value: str) -> str | None:
    """Return why the braces in ``value`` are unbalanced, or ``None``.

    Only nesting depth is checked, not what sits between the braces.
    """

    depth = 0
    for ch in value:
        if ch == "{":
            depth += 1
        elif ch == "}":
            if depth == 0:
                return UNMATCHED_CLOSING
            depth -= 1
    if depth != 0:
        return UNMATCHED_OPENING
    return None


def validate_placeholders(value: str) -> None:
    """Raise ``PlaceholderError`` when ``value`` has unbalanced braces."""

    issue = placeholder_issue(value)
    if issue is not None:
        raise PlaceholderError(issue, value)
