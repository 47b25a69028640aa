"""Box label assembly.

Each helper returns the complete text for one box. Lines for absent counts
are dropped; the remaining lines keep their fixed order.
"""

from typing import List, Optional, Sequence

from ..core.models import ExclusionReason, FlowDiagramInput
from ..core.text import (
    EXCLUSION_WRAP,
    NEW_STUDIES_WRAP,
    PREVIOUS_WRAP,
    REMOVED_WRAP,
    TOTALS_WRAP,
    count_suffix,
    labelled_count,
    line_breaks,
    stacked_count,
    wrap_text,
)

IDENTIFIED_HEADER = "Records identified from:"
REMOVED_HEADER = "Records removed before screening:"


def _present(lines: Sequence[Optional[str]]) -> List[str]:
    return [line for line in lines if line]


def _inline(text: str, n: Optional[int], width: Optional[int] = None) -> Optional[str]:
    if n is None:
        return None
    line = labelled_count(text, n)
    return wrap_text(line, width) if width else line


def _stacked(text: str, n: Optional[int], width: int) -> Optional[str]:
    if n is None:
        return None
    return stacked_count(wrap_text(text, width), n)


def previous_label(data: FlowDiagramInput) -> str:
    """Studies and reports from the previous review, separated by a blank line."""
    parts = _present([
        _inline(data.previous_studies_text, data.previous_studies, PREVIOUS_WRAP),
        _stacked(data.previous_reports_text, data.previous_reports, PREVIOUS_WRAP),
    ])
    return "\n\n".join(parts)


def identified_label(data: FlowDiagramInput) -> str:
    lines = _present([
        _inline(data.database_results_text, data.database_results),
        _inline(data.register_results_text, data.register_results),
    ])
    return "\n".join([IDENTIFIED_HEADER] + lines)


def other_identified_label(data: FlowDiagramInput) -> str:
    lines = _present([
        _inline(data.website_results_text, data.website_results),
        _inline(data.organisation_results_text, data.organisation_results),
        _inline(data.citations_results_text, data.citations_results),
    ])
    return "\n".join([IDENTIFIED_HEADER] + lines)


def removed_label(data: FlowDiagramInput) -> str:
    """Records removed before screening; a literal zero when nothing was reported."""
    lines = _present([
        _inline(data.duplicates_text, data.duplicates, REMOVED_WRAP),
        _inline(data.excluded_automatic_text, data.excluded_automatic, REMOVED_WRAP),
        _inline(data.excluded_other_text, data.excluded_other, REMOVED_WRAP),
    ])
    if not lines:
        lines = [count_suffix(0)]
    return "\n".join([REMOVED_HEADER] + lines)


def count_label(text: str, n: Optional[int]) -> str:
    """Label with the count on its own line; a missing count shows as NA."""
    return stacked_count(text, n)


def is_bare_count(rows: Sequence[ExclusionReason]) -> bool:
    """True when the exclusion table is a single count rather than reasons."""
    return len(rows) == 1 and rows[0].reason == str(rows[0].n)


def wrapped_reasons(rows: Sequence[ExclusionReason]) -> List[str]:
    return [wrap_text(row.reason, EXCLUSION_WRAP) for row in rows]


def exclusion_breaks(rows: Sequence[ExclusionReason]) -> int:
    """Line breaks the reason column occupies once wrapped."""
    return line_breaks(wrapped_reasons(rows))


def exclusion_label(text: str, rows: Sequence[ExclusionReason]) -> str:
    if is_bare_count(rows):
        return f"{text}\n{count_suffix(sum(row.n for row in rows))}"
    items = "".join(
        f"\n{reason} {count_suffix(row.n)}"
        for reason, row in zip(wrapped_reasons(rows), rows)
    )
    return f"{text}:{items}"


def new_included_label(data: FlowDiagramInput) -> str:
    return "\n".join(_present([
        _stacked(data.new_studies_text, data.new_studies, NEW_STUDIES_WRAP),
        _stacked(data.new_reports_text, data.new_reports, NEW_STUDIES_WRAP),
    ]))


def total_included_label(data: FlowDiagramInput) -> str:
    return "\n".join([
        wrap_text(labelled_count(data.total_studies_text, data.total_studies), TOTALS_WRAP),
        wrap_text(labelled_count(data.total_reports_text, data.total_reports), TOTALS_WRAP),
    ])
