"""
Exceptions raised while reading flow diagram data and building diagrams.
"""

from typing import Optional


class FlowDiagramError(Exception):
    """Base exception for flow diagram errors."""

    pass


class MissingFieldError(FlowDiagramError):
    """Raised when a required row is absent from the data template."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Required field '{field}' not found in flow diagram data")


class InvalidCountError(FlowDiagramError):
    """Raised when a count value cannot be parsed as a whole number."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid count for '{field}': {value!r}")


class ExclusionFormatError(FlowDiagramError):
    """Raised when exclusion reasons are not encoded as 'reason,count; reason,count'."""

    def __init__(self, field: str, value: str, detail: Optional[str] = None):
        self.field = field
        self.value = value
        message = f"Malformed exclusion reasons for '{field}': {value!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class GraphStructureError(FlowDiagramError):
    """Raised when the diagram graph model would become inconsistent."""

    pass


class RenderError(FlowDiagramError):
    """Raised when the Graphviz renderer is unavailable or fails."""

    pass
