"""Read flow diagram data from the CSV template.

The template has one row per field, keyed by the ``data`` column, with the
count in ``n``, an optional label override in ``boxtext``, and two
auxiliary columns: ``tooltips`` (19 non-blank values, in box order) and
``box``/``url`` (the hyperlink table, one URL per distinct box).
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd  # type: ignore

from ..core.exceptions import InvalidCountError, MissingFieldError
from ..core.models import (
    COUNT_FIELDS,
    EXCLUSION_FIELDS,
    TITLE_BOXES,
    FlowDiagramInput,
    parse_exclusion_reasons,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)

REQUIRED_COLUMNS = ["data", "boxtext", "n"]
OPTIONAL_COLUMNS = ["node", "box", "tooltips", "url"]

_COUNT_RE = re.compile(r"^\d+(\.0+)?$")


def parse_count(field: str, value: Optional[str]) -> Optional[int]:
    """Parse a count cell; blank means absent. Thousands separators are accepted."""
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.upper() in ("NA", "NAN"):
        return None
    cleaned = text.replace(",", "").replace(" ", "")
    if not _COUNT_RE.match(cleaned):
        raise InvalidCountError(field, text)
    return int(float(cleaned))


def _normalise(df: pd.DataFrame) -> pd.DataFrame:
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise MissingFieldError(missing[0])
    df = df.copy()
    for col in OPTIONAL_COLUMNS:
        if col not in df.columns:
            df[col] = ""
    df = df.fillna("").astype(str)
    for col in df.columns:
        df[col] = df[col].str.strip()
    return df


def _field_row(df: pd.DataFrame, field: str) -> pd.Series:
    matches = df[df["data"] == field]
    if matches.empty:
        raise MissingFieldError(field)
    return matches.iloc[0]


def _box_text(df: pd.DataFrame, box: str) -> Optional[str]:
    matches = df[df["box"] == box]
    if matches.empty:
        return None
    return matches.iloc[0]["boxtext"] or None


def _tooltips(df: pd.DataFrame) -> List[str]:
    return [tip for tip in df["tooltips"] if tip]


def _urls(df: pd.DataFrame) -> Dict[str, str]:
    urls: Dict[str, str] = {}
    first_rows = df[df["box"] != ""].drop_duplicates(subset="box", keep="first")
    for box, url in zip(first_rows["box"], first_rows["url"]):
        if url:
            urls[box] = url
    return urls


def read_prisma_data(source: Union[str, Path, pd.DataFrame]) -> FlowDiagramInput:
    """Parse the CSV template into a :class:`FlowDiagramInput`.

    Args:
        source: Path to the CSV file or an already loaded DataFrame.

    Returns:
        The flow diagram input record.

    Raises:
        MissingFieldError: A required column or field row is absent.
        InvalidCountError: A count is not a whole number.
        ExclusionFormatError: Exclusion reasons are not ``reason,count`` pairs.
    """
    if isinstance(source, pd.DataFrame):
        raw = source
        origin = "DataFrame"
    else:
        raw = pd.read_csv(source, dtype=str, keep_default_na=False)
        origin = str(source)
    df = _normalise(raw)

    values: Dict[str, Any] = {}
    for field in COUNT_FIELDS:
        row = _field_row(df, field)
        values[field] = parse_count(field, row["n"])
        if row["boxtext"]:
            values[f"{field}_text"] = row["boxtext"]

    for field in EXCLUSION_FIELDS:
        row = _field_row(df, field)
        values[field] = parse_exclusion_reasons(row["n"], field=field)
        if row["boxtext"]:
            values[f"{field}_text"] = row["boxtext"]

    for box, attr in TITLE_BOXES.items():
        text = _box_text(df, box)
        if text:
            values[attr] = text

    values["tooltips"] = _tooltips(df)
    values["urls"] = _urls(df)

    data = FlowDiagramInput(**values)
    if len(data.tooltips) != 19:
        logger.warning(
            f"Expected 19 tooltips, found {len(data.tooltips)} in {origin}",
            extra={"source": origin, "tooltips": len(data.tooltips)},
        )
    logger.info(f"Loaded flow diagram data from {origin}", extra={"source": origin, "links": len(data.urls)})
    return data
