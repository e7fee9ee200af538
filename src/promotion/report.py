"""Plain-text rendering of the promotion buckets."""

from __future__ import annotations

from typing import List

from .divergence import PromotionBuckets

NEED_CHANGE_HEADER = "Repositories that have changes:"
NO_CHANGE_HEADER = "Repositories that have no changes:"
ERRORS_HEADER = "Repositories with errors detecting changes:"
DONE_LINE = "Done"


def format_report(buckets: PromotionBuckets) -> str:
    """Render the three sections in fixed order, closed by the `Done` line."""
    lines: List[str] = [NEED_CHANGE_HEADER, ""]
    lines.extend(buckets.need_change)
    lines.extend(["", "", NO_CHANGE_HEADER, ""])
    lines.extend(buckets.no_change)
    lines.extend(["", "", ERRORS_HEADER, ""])
    lines.extend(buckets.errors)
    lines.append(DONE_LINE)
    return "\n".join(lines) + "\n"


__all__ = [
    "NEED_CHANGE_HEADER",
    "NO_CHANGE_HEADER",
    "ERRORS_HEADER",
    "DONE_LINE",
    "format_report",
]
