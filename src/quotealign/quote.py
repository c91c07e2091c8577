# FILE: src/quotealign/quote.py
"""
Assembling quote blocks around aligned content and laying them out for the
reply editor.

Producing the opening/closing wrapper from post metadata is up to the caller;
it is passed in as a `QuoteWrapper`.
"""

import re
from typing import Callable, Optional

import structlog

from quotealign.engine import align_quote
from quotealign.models import PostReference

logger = structlog.get_logger(__name__)

# (content, post) -> "[quote=...]content[/quote]"
QuoteWrapper = Callable[[str, PostReference], str]

_QUOTE_BLOCK_RE = re.compile(r"^(\s*\[quote[^\]]*\])(.+)(\[/quote\]\s*)$", re.DOTALL)

# Blank line between a quote and the surrounding editor text
_SEPARATOR_NEWLINES = 2


def is_quote_block(text: str) -> bool:
    return _QUOTE_BLOCK_RE.match(text) is not None


def coerce_multi_line(quote_block: str) -> str:
    """
    Puts the wrapper tags of a one-line quote on their own lines.

    "[quote=a]hello[/quote]" -> "[quote=a]\\nhello\\n[/quote]"

    Blocks that already span several lines, or that have no recognisable
    wrapper, are only trimmed.
    """
    trimmed = quote_block.strip()

    if "\n" in trimmed:
        return trimmed

    head_end = trimmed.find("]")
    tail_start = trimmed.rfind("[/")

    if head_end == -1 or tail_start <= head_end:
        return trimmed

    return "\n".join(
        [
            trimmed[: head_end + 1],
            trimmed[head_end + 1 : tail_start],
            trimmed[tail_start:],
        ]
    )


def quote_to_partial(rich_quote: str, selected_text: str) -> str:
    """
    Narrows a full quote block down to the part matching `selected_text`,
    keeping the original wrapper.
    """
    match = _QUOTE_BLOCK_RE.match(rich_quote)

    if not match:
        logger.debug("Not a quote block, leaving as is")
        return rich_quote.strip()

    start_tag, content, end_tag = match.groups()

    return coerce_multi_line("\n".join([start_tag, align_quote(content, selected_text), end_tag]))


def build_quote(content: str, post: PostReference, wrapper: QuoteWrapper) -> str:
    return coerce_multi_line(wrapper(content, post))


def quote_selection(rich_text: str, selected_text: str, post: PostReference, wrapper: QuoteWrapper) -> str:
    """
    Quotes the selected part of a post, or the whole post when nothing is selected.
    """
    content = align_quote(rich_text, selected_text) if selected_text.strip() else rich_text
    return build_quote(content, post, wrapper)


def pad_for_insertion(quote: str, text_before: str, text_after: str) -> str:
    """
    Adds the newlines needed to set `quote` apart from the editor text on
    either side of the caret. Nothing is added at the very start or end.
    """
    start_padding = 0
    if text_before:
        existing = len(text_before) - len(text_before.rstrip("\n"))
        start_padding = max(0, _SEPARATOR_NEWLINES - existing)

    end_padding = 0
    if text_after:
        existing = len(text_after) - len(text_after.lstrip("\n"))
        end_padding = max(0, _SEPARATOR_NEWLINES - existing)

    return "\n" * start_padding + quote + "\n" * end_padding


def seed_reply(
    message: str,
    selected_text: Optional[str] = None,
    post: Optional[PostReference] = None,
    wrapper: Optional[QuoteWrapper] = None,
) -> str:
    """
    Initial text for a reply editor.

    - post and wrapper known: a fresh quote of `selected_text`
    - only a selection: the prefilled quote in `message` narrowed to it
    - neither: `message`, with a prefilled quote laid out on several lines
    """
    if post is not None and wrapper is not None and selected_text:
        quote = build_quote(selected_text, post, wrapper) + "\n\n"
    elif selected_text:
        quote = quote_to_partial(message, selected_text) + "\n\n"
    elif is_quote_block(message):
        quote = coerce_multi_line(message) + "\n\n"
    else:
        quote = message

    # Whitespace-only leftovers (e.g. an empty prefill) become nothing
    return quote if quote.strip() else ""
