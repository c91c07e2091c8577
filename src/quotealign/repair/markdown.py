# FILE: src/quotealign/repair/markdown.py
"""
Markdown fix-ups at the edges of a matched span.
"""

import re

from quotealign.grammar import MD_MARKER_CHARS

# Rest of a link target: "https://example.com)"
_LINK_TARGET_RE = re.compile(r"[^)]+\)")

# Marker runs are measured from the anchored end, never searched for
_MARKER_RUN_RE = re.compile(f"{MD_MARKER_CHARS}+")


def _leading_marker_run(text: str) -> str:
    match = _MARKER_RUN_RE.match(text)
    return match.group(0) if match else ""


def _trailing_marker_run(text: str) -> str:
    return _leading_marker_run(text[::-1])[::-1]


def complete_link(text: str, after: str) -> str:
    """
    "[text](" + "https://x) now" -> "[text](https://x)"
    "[text](" + "https://x" -> "[text](" (no closing paren, nothing added)
    """
    if not text.endswith("]("):
        return text

    match = _LINK_TARGET_RE.match(after)
    if match is None:
        return text
    return text + match.group(0)


def restore_block_marker(text: str, before: str) -> str:
    """
    Carries over heading/bullet/numbering punctuation that sits on the same
    source line right before the match, e.g. "## " or "- " or "1. ".
    """
    last_line = before[before.rfind("\n") + 1 :]
    return _trailing_marker_run(last_line) + text


def trim_marker_lines(text: str) -> str:
    """Drops a marker-only line dangling at the very end or very start."""
    tail = _trailing_marker_run(text)
    newline = tail.find("\n")
    if -1 < newline < len(tail) - 1:
        text = text[: len(text) - len(tail) + newline]

    head = _leading_marker_run(text)
    newline = head.rfind("\n")
    if newline > 0:
        text = text[newline + 1 :]

    return text
