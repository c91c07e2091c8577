from importlib.metadata import PackageNotFoundError, version

from quotealign.engine import align, align_quote
from quotealign.models import AbstainReason, AlignmentResult, PostReference
from quotealign.quote import coerce_multi_line, quote_to_partial

try:
    __version__ = version("quotealign")
except PackageNotFoundError:
    # Package is not installed (e.g., running from source/dev)
    __version__ = "0.0.0-dev"

__all__ = [
    "align",
    "align_quote",
    "coerce_multi_line",
    "quote_to_partial",
    "AbstainReason",
    "AlignmentResult",
    "PostReference",
    "__version__",
]
