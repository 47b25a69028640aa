"""The packaged CSV data template."""

import shutil
from pathlib import Path
from typing import Union

import pandas as pd  # type: ignore

TEMPLATE_PATH = Path(__file__).resolve().parent.parent / "data" / "PRISMA.csv"

TEMPLATE_COLUMNS = ["data", "node", "box", "boxtext", "tooltips", "url", "n"]


def blank_template() -> pd.DataFrame:
    """Return the template as a DataFrame of strings (blank cells are empty strings)."""
    return pd.read_csv(TEMPLATE_PATH, dtype=str, keep_default_na=False)


def template_bytes() -> bytes:
    return TEMPLATE_PATH.read_bytes()


def write_template(path: Union[str, Path]) -> Path:
    """Copy the template to ``path``, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(TEMPLATE_PATH, path)
    return path
