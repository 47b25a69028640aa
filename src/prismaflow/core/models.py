"""Core domain models for flow diagram data and rendering options."""

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .exceptions import ExclusionFormatError


# Scalar count fields, in template order.
COUNT_FIELDS: List[str] = [
    "previous_studies",
    "previous_reports",
    "register_results",
    "database_results",
    "website_results",
    "organisation_results",
    "citations_results",
    "duplicates",
    "excluded_automatic",
    "excluded_other",
    "records_screened",
    "records_excluded",
    "dbr_sought_reports",
    "dbr_notretrieved_reports",
    "other_sought_reports",
    "other_notretrieved_reports",
    "dbr_assessed",
    "other_assessed",
    "new_studies",
    "new_reports",
    "total_studies",
    "total_reports",
]

EXCLUSION_FIELDS: List[str] = ["dbr_excluded", "other_excluded"]

PREVIOUS_FIELDS = ("previous_studies", "previous_reports")
OTHER_FIELDS = ("website_results", "organisation_results", "citations_results")

# Wing title boxes keyed by their template box name.
TITLE_BOXES: Dict[str, str] = {
    "prevstud": "previous_text",
    "newstud": "newstud_text",
    "othstud": "other_text",
}

# Counts may use thousands separators: "1,200".
_COUNT = r"\d{1,3}(?:,\d{3})+|\d+"
_BARE_COUNT_RE = re.compile(rf"^(?:{_COUNT})$")
_ENTRY_RE = re.compile(rf"^(?P<reason>.+?),\s*(?P<n>{_COUNT})$")
_TRAILING_COUNT_RE = re.compile(r",\s*\d+$")


class ExclusionReason(BaseModel):
    """One row of an exclusion table."""

    model_config = ConfigDict(frozen=True)

    reason: str
    n: int = Field(..., ge=0)


def parse_exclusion_reasons(value: Any, field: str = "excluded") -> List[ExclusionReason]:
    """Parse exclusion reasons from the template encoding.

    Accepts ``"Wrong design,12; Wrong population,1,200"``, a bare count
    (``20`` or ``"20"``) which becomes a single row whose reason is the
    number itself, or an already structured list. A reason that still ends
    in ``,<digits>`` after the count is split off is ambiguous and rejected.
    """
    if value is None:
        return []
    if isinstance(value, bool):
        raise ExclusionFormatError(field, str(value), "expected a count or reason list")
    if isinstance(value, int):
        return [ExclusionReason(reason=str(value), n=value)]
    if isinstance(value, (list, tuple)):
        return [
            item if isinstance(item, ExclusionReason) else ExclusionReason.model_validate(item)
            for item in value
        ]
    text = str(value).strip()
    if not text:
        return []
    if _BARE_COUNT_RE.match(text):
        n = int(text.replace(",", ""))
        return [ExclusionReason(reason=str(n), n=n)]
    rows: List[ExclusionReason] = []
    for entry in text.split(";"):
        entry = entry.strip()
        if not entry:
            continue
        match = _ENTRY_RE.match(entry)
        if not match:
            raise ExclusionFormatError(field, text, f"no count in {entry!r}")
        reason = match.group("reason").strip()
        if not reason or _TRAILING_COUNT_RE.search(reason):
            raise ExclusionFormatError(field, text, f"ambiguous count in {entry!r}")
        rows.append(ExclusionReason(reason=reason, n=int(match.group("n").replace(",", ""))))
    return rows


class FlowDiagramInput(BaseModel):
    """Counts, box text, tooltips and hyperlinks for one flow diagram.

    Counts left as ``None`` suppress their text line. Label defaults follow
    the PRISMA 2020 template wording.
    """

    model_config = ConfigDict(frozen=True)

    # Counts
    previous_studies: Optional[int] = Field(None, ge=0)
    previous_reports: Optional[int] = Field(None, ge=0)
    register_results: Optional[int] = Field(None, ge=0)
    database_results: Optional[int] = Field(None, ge=0)
    website_results: Optional[int] = Field(None, ge=0)
    organisation_results: Optional[int] = Field(None, ge=0)
    citations_results: Optional[int] = Field(None, ge=0)
    duplicates: Optional[int] = Field(None, ge=0)
    excluded_automatic: Optional[int] = Field(None, ge=0)
    excluded_other: Optional[int] = Field(None, ge=0)
    records_screened: Optional[int] = Field(None, ge=0)
    records_excluded: Optional[int] = Field(None, ge=0)
    dbr_sought_reports: Optional[int] = Field(None, ge=0)
    dbr_notretrieved_reports: Optional[int] = Field(None, ge=0)
    other_sought_reports: Optional[int] = Field(None, ge=0)
    other_notretrieved_reports: Optional[int] = Field(None, ge=0)
    dbr_assessed: Optional[int] = Field(None, ge=0)
    other_assessed: Optional[int] = Field(None, ge=0)
    new_studies: Optional[int] = Field(None, ge=0)
    new_reports: Optional[int] = Field(None, ge=0)
    total_studies: Optional[int] = Field(None, ge=0)
    total_reports: Optional[int] = Field(None, ge=0)

    # Exclusion tables
    dbr_excluded: List[ExclusionReason] = Field(default_factory=list)
    other_excluded: List[ExclusionReason] = Field(default_factory=list)

    # Wing titles
    previous_text: str = "Previous studies"
    newstud_text: str = "Identification of new studies via databases and registers"
    other_text: str = "Identification of new studies via other methods"

    # Box text
    previous_studies_text: str = "Studies included in previous version of review"
    previous_reports_text: str = "Reports of studies included in previous version of review"
    register_results_text: str = "Registers"
    database_results_text: str = "Databases"
    website_results_text: str = "Websites"
    organisation_results_text: str = "Organisations"
    citations_results_text: str = "Citation searching"
    duplicates_text: str = "Duplicate records"
    excluded_automatic_text: str = "Records marked as ineligible by automation tools"
    excluded_other_text: str = "Records removed for other reasons"
    records_screened_text: str = "Records screened"
    records_excluded_text: str = "Records excluded"
    dbr_sought_reports_text: str = "Reports sought for retrieval"
    dbr_notretrieved_reports_text: str = "Reports not retrieved"
    other_sought_reports_text: str = "Reports sought for retrieval"
    other_notretrieved_reports_text: str = "Reports not retrieved"
    dbr_assessed_text: str = "Reports assessed for eligibility"
    dbr_excluded_text: str = "Reports excluded"
    other_assessed_text: str = "Reports assessed for eligibility"
    other_excluded_text: str = "Reports excluded"
    new_studies_text: str = "New studies included in review"
    new_reports_text: str = "Reports of new included studies"
    total_studies_text: str = "Total studies included in review"
    total_reports_text: str = "Reports of total included studies"

    # Interactivity
    tooltips: List[str] = Field(default_factory=list)
    urls: Dict[str, str] = Field(default_factory=dict)

    @field_validator("dbr_excluded", "other_excluded", mode="before")
    @classmethod
    def _parse_exclusions(cls, v: Any, info: ValidationInfo) -> List[ExclusionReason]:
        return parse_exclusion_reasons(v, field=info.field_name)

    def tooltip(self, index: int) -> str:
        """Tooltip by 1-based position; positions past the end are blank."""
        if 1 <= index <= len(self.tooltips):
            return self.tooltips[index - 1]
        return ""

    def has_previous(self) -> bool:
        return any(getattr(self, f) is not None for f in PREVIOUS_FIELDS)

    def has_other(self) -> bool:
        return any(getattr(self, f) is not None for f in OTHER_FIELDS)


class DiagramOptions(BaseModel):
    """Rendering parameters for a flow diagram."""

    model_config = ConfigDict(frozen=True)

    font: str = "Helvetica"
    fontsize: int = Field(12, gt=0)
    title_colour: str = "Goldenrod1"
    greybox_colour: str = "Gainsboro"
    main_colour: str = "Black"
    arrow_colour: str = "Black"
    arrow_head: str = "normal"
    arrow_tail: str = "none"
    interactive: bool = False
    previous: bool = True
    other: bool = True
