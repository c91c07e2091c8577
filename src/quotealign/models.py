from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AbstainReason(str, Enum):
    EMPTY_FRAGMENT = "EMPTY_FRAGMENT"
    NO_MATCH = "NO_MATCH"
    UNBALANCED = "UNBALANCED"
    ERROR = "ERROR"


class MatchSpan(BaseModel):
    """
    The first place a compiled fragment pattern matched inside the rich text.
    """

    # Half-open range into the rich text, covering the untrimmed match
    start: int
    end: int
    # The matched substring, trimmed of surrounding whitespace
    text: str
    before: str
    after: str


class AlignmentResult(BaseModel):
    """
    Outcome of aligning a plain fragment against rich text.
    `text` is always safe to use, whether or not alignment succeeded.
    """

    text: str
    aligned: bool
    reason: Optional[AbstainReason] = None
    # Message of an unexpected exception, kept for diagnostics only
    error: Optional[str] = None


class PostReference(BaseModel):
    """
    Identifies the quoted post. Supplied by the rendering layer as plain data.
    """

    post_id: int
    user_id: int
    author: str = Field(min_length=1)
    # Unix timestamp of the post
    time: int
