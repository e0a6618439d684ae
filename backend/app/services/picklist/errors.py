"""Exceptions raised while building pick list reports."""

from __future__ import annotations


class PickListError(Exception):
    """Base class for pick list report failures."""


class FilterValidationError(PickListError):
    """A user supplied filter value could not be interpreted."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class ReportGenerationError(PickListError):
    """The report could not be produced; details are only logged."""

    def __init__(self, message: str = "report generation failed") -> None:
        super().__init__(message)


class QueryError(ReportGenerationError):
    """The label store rejected or failed the aggregation query."""


class ExportError(ReportGenerationError):
    """The pivot workbook could not be serialised."""
