"""Text helpers for box labels: wrapping, count formatting, exclusion lists."""

import textwrap
from typing import Optional, Sequence

# Layout engine does not reflow text inside fixed-size boxes, so labels are
# wrapped before they are embedded.
EXCLUSION_WRAP = 35
PREVIOUS_WRAP = 40
REMOVED_WRAP = 42
NEW_STUDIES_WRAP = 40
TOTALS_WRAP = 33


def wrap_text(text: Optional[str], width: int) -> str:
    """Greedy word wrap; lines never exceed ``width`` unless a single word does."""
    if not text:
        return ""
    return textwrap.fill(
        " ".join(str(text).split()),
        width=width,
        break_long_words=False,
        break_on_hyphens=False,
    )


def format_count(n: Optional[int]) -> str:
    """Format a count with thousands separators; missing counts render as NA."""
    if n is None:
        return "NA"
    return f"{n:,}"


def count_suffix(n: Optional[int]) -> str:
    return f"(n = {format_count(n)})"


def labelled_count(text: str, n: Optional[int]) -> str:
    """``Text (n = N)`` on one line."""
    return f"{text} {count_suffix(n)}"


def stacked_count(text: str, n: Optional[int]) -> str:
    """``Text`` with the count on its own line below."""
    return f"{text}\n{count_suffix(n)}"


def line_breaks(lines: Sequence[str]) -> int:
    """Number of line breaks when ``lines`` are joined with newlines."""
    return "\n".join(lines).count("\n")
