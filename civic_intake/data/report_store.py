"""In-memory intake desk for submitted reports, with filtering and edits."""

import itertools
import threading
from collections import Counter
from datetime import datetime
from typing import Optional

from civic_intake.classifier.scorer import PriorityScorer, get_default_scorer
from civic_intake.exceptions import ReportNotFoundError
from civic_intake.log import get_logger
from civic_intake.schema import IncidentReport, Priority, ReportStatus, StoredReport

logger = get_logger(__name__)

REPORT_FIELDS = ("type", "description", "location", "has_evidence")


class ReportStore:
    """Report storage for the lifetime of the process.

    Every report is classified on submission and reclassified whenever its
    content is edited. Nothing is written to disk.
    """

    def __init__(self, scorer: Optional[PriorityScorer] = None):
        """Initialize store with a scorer.

        Args:
            scorer: Scorer used to classify reports. Uses the default scorer if None.
        """
        self.scorer = scorer or get_default_scorer()
        self._reports: dict[str, StoredReport] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _next_id(self) -> str:
        return f"REP-{next(self._ids):04d}"

    def submit(self, report: IncidentReport) -> StoredReport:
        """Classify a report and add it to the desk."""
        classification = self.scorer.classify(report)
        with self._lock:
            stored = StoredReport(id=self._next_id(), report=report, classification=classification)
            self._reports[stored.id] = stored

        logger.info(
            "Report submitted",
            extra={"report_id": stored.id, "priority": classification.priority.value},
        )
        return stored

    def get(self, report_id: str) -> StoredReport:
        """Get a report by ID."""
        try:
            return self._reports[report_id]
        except KeyError:
            raise ReportNotFoundError(report_id) from None

    def get_all(self) -> list[StoredReport]:
        """All reports in submission order."""
        return list(self._reports.values())

    def search(
        self,
        term: str = "",
        priority: Optional[Priority] = None,
        status: Optional[ReportStatus] = None,
    ) -> list[StoredReport]:
        """Filter reports using AND logic.

        Args:
            term: Case-insensitive substring matched against id, type,
                description, location, priority and status. Empty matches all.
            priority: Include only reports classified with this priority.
            status: Include only reports in this status.
        """
        needle = term.strip().lower()
        results = []
        for stored in self._reports.values():
            if needle and needle not in stored.search_text():
                continue
            if priority is not None and stored.classification.priority != priority:
                continue
            if status is not None and stored.status != status:
                continue
            results.append(stored)
        return results

    def update(
        self,
        report_id: str,
        status: Optional[ReportStatus] = None,
        **changes,
    ) -> StoredReport:
        """Edit a report's fields and/or status.

        Changing any report field reclassifies the report. Edited fields are
        validated like a new submission; a ValidationError leaves the stored
        report untouched.
        """
        unknown = set(changes) - set(REPORT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown report fields: {sorted(unknown)}")

        with self._lock:
            stored = self.get(report_id)
            updates: dict = {"updated_at": datetime.now()}

            content = {key: value for key, value in changes.items() if value is not None}
            if content:
                report = IncidentReport.model_validate({**stored.report.model_dump(), **content})
                updates["report"] = report
                updates["classification"] = self.scorer.classify(report)

            if status is not None:
                updates["status"] = status

            stored = stored.model_copy(update=updates)
            self._reports[report_id] = stored

        logger.info(
            "Report updated",
            extra={
                "report_id": report_id,
                "fields": sorted(changes),
                "status": stored.status.value,
            },
        )
        return stored

    def delete(self, report_id: str) -> None:
        """Remove a report from the desk."""
        with self._lock:
            if report_id not in self._reports:
                raise ReportNotFoundError(report_id)
            del self._reports[report_id]
        logger.info("Report deleted", extra={"report_id": report_id})

    def stats(self) -> dict:
        """Counts of held reports by priority and by status."""
        by_priority = Counter(r.classification.priority.value for r in self._reports.values())
        by_status = Counter(r.status.value for r in self._reports.values())
        return {
            "total": len(self._reports),
            "by_priority": {p.value: by_priority.get(p.value, 0) for p in Priority},
            "by_status": {s.value: by_status.get(s.value, 0) for s in ReportStatus},
        }

    def __len__(self) -> int:
        return len(self._reports)
