"""Report loading and in-memory intake desk."""

from civic_intake.data.loader import ReportLoader
from civic_intake.data.report_store import ReportStore

__all__ = ["ReportLoader", "ReportStore"]
