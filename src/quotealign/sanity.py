import re
from typing import Dict, List

import structlog

from quotealign.grammar import LETTER, find_tags, is_start_tag, tag_name

logger = structlog.get_logger(__name__)

# (label, opening, closing): counts must agree over the whole string
_BALANCED_PAIRS = [
    # parens, ignoring emoticons
    ("parens", re.compile(r"(?<!;:-)\("), re.compile(r"\)")),
    # square brackets, ignoring emoticons
    ("brackets", re.compile(r"(?<!;:-)\["), re.compile(r"\]")),
    # bold/italic markdown: ***x***, **x**, *x*
    ("emphasis-3", re.compile(f"[_*]{{3}}{LETTER}"), re.compile(f"{LETTER}[_*]{{3}}")),
    ("emphasis-2", re.compile(f"[_*]{{2}}{LETTER}"), re.compile(f"{LETTER}[_*]{{2}}")),
    ("emphasis-1", re.compile(f"[_*]{LETTER}"), re.compile(f"{LETTER}[_*]")),
    # strikethrough markdown
    ("strikethrough", re.compile(f"~~{LETTER}"), re.compile(f"{LETTER}~~")),
]


def unclosed_start_tags(text: str) -> List[str]:
    """
    Start tags in `text` with no later end tag of the same name.
    Stray end tags are tolerated. Nameless tags such as [*] never need closing.
    """
    open_tags: Dict[str, List[str]] = {}

    for tag in find_tags(text):
        name = tag_name(tag)
        if name is None:
            continue

        if is_start_tag(tag):
            open_tags.setdefault(name, []).append(tag)
        elif open_tags.get(name):
            open_tags[name].pop()

    return [tag for tags in open_tags.values() for tag in tags]


def is_balanced(text: str) -> bool:
    """
    Structural sanity check over a repaired span.
    Returns False at the first imbalance found.
    """
    for label, opening, closing in _BALANCED_PAIRS:
        num_open = len(opening.findall(text))
        num_close = len(closing.findall(text))
        if num_open != num_close:
            logger.debug(f"Unbalanced {label}: {num_open} opening vs {num_close} closing")
            return False

    unclosed = unclosed_start_tags(text)
    if unclosed:
        logger.debug(f"Unclosed tags: {unclosed}")
        return False

    return True
