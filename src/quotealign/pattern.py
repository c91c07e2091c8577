# FILE: src/quotealign/pattern.py
"""
Turns a plain fragment into a regex over the rich text and locates it.

The fragment's alphanumeric runs are kept literally. Every run of anything
else (spaces, punctuation, and any tags that survived into the selection)
becomes a wildcard that matches an arbitrary mix of tags, link tails and
non-alphanumeric characters in the rich text.
"""

import re
from collections import Counter
from typing import Optional

import structlog

from quotealign.grammar import (
    END_TAG,
    MD_LINK_TAIL,
    NON_ALPHANUMERIC,
    PUNCTUATION,
    PUNCTUATION_CHARS,
    TAG,
    find_tags,
    is_start_tag,
    tag_name,
)
from quotealign.models import MatchSpan

logger = structlog.get_logger(__name__)

# Tags, link tails and other non-alphanumerics, in any mix.
# Possessive: the run is tokenised left to right and never re-split, so a
# failed search costs linear time per start position. A bracketed word in
# the rendered text ("[sic]") is always read as a tag here.
IGNORER = f"(?:{TAG}|{MD_LINK_TAIL}|{NON_ALPHANUMERIC})++"

# Start tag with at least one non-punctuation character in its body and no
# "[" inside it, so it never overlaps a run of single punctuation characters
_WORDY_START_TAG = rf"\[(?=[^/\[\]\n]*[^/\[\]\n{PUNCTUATION_CHARS}])[^/\[\]\n]+\](?!\()"

# Opening tags and punctuation just before the selection ("[b]", "**", "(")
INCLUDE_AT_START = f"(?:{_WORDY_START_TAG}|{PUNCTUATION})*"

# Closing tags, link tails and emphasis markers just after the selection
INCLUDE_AT_END = f"(?:{END_TAG}|{MD_LINK_TAIL}|[_*~])*+"

# Runs in the *fragment* to be replaced by IGNORER
_IGNORER_RUN_RE = re.compile(f"(?:{TAG}|{MD_LINK_TAIL}|{NON_ALPHANUMERIC})++")

# Tokens of the closing run, read the way IGNORER reads them
_CLOSING_TOKEN_RE = re.compile(f"(?P<tag>{TAG})|{MD_LINK_TAIL}|.", re.DOTALL)


def build_pattern_source(plain_fragment: str) -> str:
    """
    Builds the regex source for `plain_fragment`.

    "hello, world" -> INCLUDE_AT_START + "hello" + IGNORER + "world" + (?P<closing>INCLUDE_AT_END)

    Everything after the last literal lands in the `closing` group, including
    a trailing IGNORER when the fragment ends in noise.
    """
    runs = list(_IGNORER_RUN_RE.finditer(plain_fragment))

    closing = INCLUDE_AT_END
    if runs and runs[-1].end() == len(plain_fragment):
        closing = IGNORER + INCLUDE_AT_END
        plain_fragment = plain_fragment[: runs.pop().start()]

    parts = [INCLUDE_AT_START]

    last_idx = 0
    for match in runs:
        parts.append(re.escape(plain_fragment[last_idx : match.start()]))
        parts.append(IGNORER)
        last_idx = match.end()

    parts.append(re.escape(plain_fragment[last_idx:]))
    parts.append(f"(?P<closing>{closing})")

    return "".join(parts)


def compile_fragment(plain_fragment: str) -> re.Pattern:
    return re.compile(build_pattern_source(plain_fragment))


def _unopened_closer_offset(body: str, closing: str) -> Optional[int]:
    """
    Offset in `closing` of the first end tag with no opener in `body` (or
    earlier in `closing`), or None if every end tag there closes something.
    """
    open_counts = Counter()

    def _track(tag):
        # True if `tag` opens something or closes an open tag
        name = tag_name(tag)
        if is_start_tag(tag):
            if name is not None:
                open_counts[name] += 1
            return True
        if open_counts[name]:
            open_counts[name] -= 1
            return True
        return False

    for tag in find_tags(body):
        _track(tag)

    for token in _CLOSING_TOKEN_RE.finditer(closing):
        tag = token.group("tag")
        if tag is not None and not _track(tag):
            return token.start()

    return None


def locate_span(rich_text: str, pattern: re.Pattern) -> Optional[MatchSpan]:
    """
    Runs `pattern` once over `rich_text`.
    Returns None if nothing matched or the match is only whitespace.

    End tags swept up after the last word that close nothing inside the
    match are cut from `text`, along with whatever follows them. They belong
    to an enclosing pair, so `after` starts past them and they take no part
    in later repairs.
    """
    match = pattern.search(rich_text)
    if match is None:
        return None

    start, end = match.start(), match.end()
    closing_start = match.start("closing")

    text = match.group(0)
    offset = _unopened_closer_offset(rich_text[start:closing_start], match.group("closing"))
    if offset is not None:
        logger.debug(f"Dropped unopened closing tags: '{match.group('closing')[offset:]}'")
        text = rich_text[start : closing_start + offset]

    text = text.strip()
    if not text:
        return None

    logger.debug(f"Fragment located at [{start}, {end})")

    return MatchSpan(
        start=start,
        end=end,
        text=text,
        before=rich_text[:start],
        after=rich_text[end:],
    )
