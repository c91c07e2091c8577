from quotealign.repair.markdown import complete_link, restore_block_marker, trim_marker_lines
from quotealign.repair.tags import balance_tags

__all__ = [
    "balance_tags",
    "complete_link",
    "restore_block_marker",
    "trim_marker_lines",
]
