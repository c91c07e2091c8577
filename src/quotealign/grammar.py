# FILE: src/quotealign/grammar.py
"""
Lexical grammar for bracket tags and the markdown noise around them.

Everything here is a regex source string or a small predicate over a single
tag token. Nothing builds a tree: a tag is just the matched substring.
"""

import re
from typing import List, Optional

# [b], [url=...], [quote="name" post_id=1]
START_TAG = r"\[[^/\]\n]+\](?!\()"
# [/b], [/url], [/quote]
END_TAG = r"\[/\w+\](?!\()"
TAG = f"(?:{START_TAG}|{END_TAG})"

# ](https://example.com), latter half of [text](https://...) or ![alt](https://...)
MD_LINK_TAIL = r"\]\([^)]+\)"

# Anything that is not a Unicode letter or digit
NON_ALPHANUMERIC = r"[\W_]"

# Unicode letters only (no digits, no underscore)
LETTER = r"[^\W\d_]"

# Unicode punctuation (general category P*). The stdlib `re` module has no
# \p{P}, so the class lists ASCII punctuation plus the Latin-1, General
# Punctuation, CJK and fullwidth punctuation code points.
PUNCTUATION_CHARS = (
    r"""!"#%&'()*,\-./:;?@\[\\\]_{}"""
    r"\u00a1\u00a7\u00ab\u00b6\u00b7\u00bb\u00bf"
    r"\u2010-\u2027\u2030-\u2043\u2045-\u2051\u2053-\u205e"
    r"\u3001-\u3003\u3008-\u3011\u3014-\u301f"
    r"\uff01-\uff03\uff05-\uff0a\uff0c-\uff0f\uff1a\uff1b\uff1f\uff20"
    r"\uff3b-\uff3d\uff3f\uff5b\uff5d\uff5f-\uff65"
)
PUNCTUATION = f"[{PUNCTUATION_CHARS}]"

# Characters that make up markdown block markers: headings, bullets,
# numbered lists, rules, fences.
MD_MARKER_CHARS = r"[\s*#0-9.`\-+~]"

_TAG_RE = re.compile(TAG)
_START_TAG_NAME_RE = re.compile(r"^\w+")


def find_tags(text: str) -> List[str]:
    """Returns every tag token in `text`, left to right."""
    return _TAG_RE.findall(text)


def is_end_tag(tag: str) -> bool:
    return tag[1:2] == "/"


def is_start_tag(tag: str) -> bool:
    return not is_end_tag(tag)


def tag_name(tag: str) -> Optional[str]:
    """
    Extracts the tag name.
    [quote=foo] -> "quote", [/quote] -> "quote", [*] -> None
    """
    if is_end_tag(tag):
        return tag[2:-1]

    match = _START_TAG_NAME_RE.match(tag[1:])
    return match.group(0) if match else None


def tags_match(tag1: Optional[str], tag2: Optional[str]) -> bool:
    """
    True if one tag opens and the other closes the same name, in either order.
    A missing partner never matches.
    """
    if tag1 is None or tag2 is None:
        return False

    tags = [tag1, tag2]
    start_tag = next((t for t in tags if is_start_tag(t)), None)
    end_tag = next((t for t in tags if is_end_tag(t)), None)

    if start_tag is None or end_tag is None:
        return False

    name = tag_name(start_tag)
    return name is not None and name == tag_name(end_tag)
