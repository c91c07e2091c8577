# FILE: src/quotealign/repair/tags.py

from typing import List, Optional

import structlog

from quotealign.grammar import find_tags, is_end_tag, is_start_tag, tags_match
from quotealign.models import MatchSpan

logger = structlog.get_logger(__name__)


def _peek(tags: List[str], idx: int = 0) -> Optional[str]:
    return tags[idx] if idx < len(tags) else None


def balance_tags(span: MatchSpan) -> str:
    """
    Grows the matched text so tags cut off at its edges get their partners back.

    Three greedy passes, each working outward from the edge and stopping for
    good at the first tag that does not pair:
    1. End tags at the start of the match pull in the start tags just before it.
    2. Start tags at the end of the match pull in the end tags just after it.
    3. Start tags still before the match are paired positionally with end
       tags still after it, wrapping the match.

    Example:
        before="[i]quick ", text="brown[/i] fox[/b]"  ->  "[i]brown[/i] fox[/b]"
    """
    matched = span.text

    tags_within = find_tags(matched)
    # Closest to the match first
    tags_before = list(reversed(find_tags(span.before)))
    tags_after = find_tags(span.after)

    # 1. Orphan end tags at the start
    for tag in tags_within:
        if is_end_tag(tag) and tags_match(tag, _peek(tags_before)):
            matched = tags_before.pop(0) + matched
        else:
            break

    # 2. Orphan start tags at the end
    for tag in reversed(tags_within):
        if is_start_tag(tag) and tags_match(tag, _peek(tags_after)):
            matched += tags_after.pop(0)
        else:
            break

    # 3. Enclosing tags the selection did not reach
    wrapped = 0
    for idx, tag in enumerate(tags_before):
        partner = _peek(tags_after, idx)
        if is_start_tag(tag) and tags_match(tag, partner):
            matched = tag + matched + partner
            wrapped += 1
        else:
            break

    if matched != span.text:
        logger.debug(f"Tag repair grew match by {len(matched) - len(span.text)} chars ({wrapped} enclosing pairs)")

    return matched
