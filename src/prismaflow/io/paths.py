"""Output directory and file path management."""

from pathlib import Path
from datetime import datetime
from typing import Optional

from ..config.settings import settings


def create_output_dir(name: str = "prisma", timestamp: Optional[datetime] = None) -> Path:
    if timestamp is None:
        timestamp = datetime.now()
    dirname = f"{name}_{timestamp.strftime('%Y%m%d_%H%M%S')}"
    dirpath = settings.output_dir / dirname
    dirpath.mkdir(parents=True, exist_ok=True)
    return dirpath


def default_output_path(fmt: str = "html", timestamp: Optional[datetime] = None) -> Path:
    """Timestamped ``flowdiagram.<fmt>`` inside a fresh output directory."""
    return create_output_dir("prisma", timestamp) / f"flowdiagram.{fmt}"
