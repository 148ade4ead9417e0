"""Exceptions raised by civic_intake."""


class CivicIntakeError(Exception):
    """Base class for all civic_intake errors."""


class TableError(CivicIntakeError, ValueError):
    """Raised when static scoring tables are invalid."""


class ReportNotFoundError(CivicIntakeError, KeyError):
    """Raised when a report id is not held by the intake desk."""

    def __init__(self, report_id: str):
        self.report_id = report_id
        super().__init__(f"Report not found: {report_id}")

    def __str__(self) -> str:
        return f"Report not found: {self.report_id}"
