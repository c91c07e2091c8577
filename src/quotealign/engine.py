import structlog

from quotealign.models import AbstainReason, AlignmentResult
from quotealign.pattern import compile_fragment, locate_span
from quotealign.repair import balance_tags, complete_link, restore_block_marker, trim_marker_lines
from quotealign.sanity import is_balanced

logger = structlog.get_logger(__name__)


def align(rich_text: str, plain_fragment: str) -> AlignmentResult:
    """
    Finds the span of `rich_text` whose rendering is `plain_fragment` and
    repairs its edges so it can be quoted on its own.

    Never raises. When no match is found, the repaired span fails the sanity
    check, or anything goes wrong along the way, the result carries the
    trimmed fragment instead and `aligned` is False.
    """
    fallback = plain_fragment.strip()

    if not fallback:
        return AlignmentResult(text="", aligned=False, reason=AbstainReason.EMPTY_FRAGMENT)

    try:
        span = locate_span(rich_text, compile_fragment(plain_fragment))

        if span is None:
            logger.debug(f"Fragment not found in rich text: '{fallback[:50]}...'")
            return AlignmentResult(text=fallback, aligned=False, reason=AbstainReason.NO_MATCH)

        matched = balance_tags(span)
        matched = complete_link(matched, span.after)
        matched = restore_block_marker(matched, span.before)
        result = trim_marker_lines(matched)

        if not is_balanced(result):
            logger.debug(f"Rejected unbalanced span: '{result[:50]}...'")
            return AlignmentResult(text=fallback, aligned=False, reason=AbstainReason.UNBALANCED)

        return AlignmentResult(text=result.strip(), aligned=True)

    except Exception as e:
        logger.warning(f"Alignment failed, falling back to plain fragment: {e}", exc_info=True)
        return AlignmentResult(
            text=fallback,
            aligned=False,
            reason=AbstainReason.ERROR,
            error=str(e),
        )


def align_quote(rich_text: str, plain_fragment: str) -> str:
    """
    Returns the rich-text span matching `plain_fragment`, or the trimmed
    fragment itself if alignment abstains.
    """
    return align(rich_text, plain_fragment).text
