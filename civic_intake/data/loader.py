"""Reading incident reports from JSONL and writing classification results."""

import json
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from civic_intake.log import get_logger
from civic_intake.schema import ClassificationResult, IncidentReport

logger = get_logger(__name__)


class ReportLoader:
    """Load incident reports for batch scoring."""

    def __init__(self, data_dir: Optional[Path] = None):
        """Initialize loader with data directory."""
        from civic_intake.config import get_settings

        settings = get_settings()
        self.data_dir = data_dir or settings.sample_data_dir

    def load_jsonl(self, path: Path, skip_invalid: bool = False) -> list[IncidentReport]:
        """Load reports from a JSONL file.

        Keys may be camelCase (``hasEvidence``) or snake_case. Invalid lines
        raise unless ``skip_invalid`` is set, in which case they are logged
        and dropped.
        """
        reports = []
        with open(path, encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    reports.append(IncidentReport.model_validate(json.loads(line)))
                except (json.JSONDecodeError, ValidationError) as e:
                    if not skip_invalid:
                        raise ValueError(f"{path}:{line_no}: invalid report: {e}") from e
                    logger.warning("Skipping invalid report at %s:%d: %s", path, line_no, e)
        return reports

    def load_all(self, pattern: str = "*.jsonl", skip_invalid: bool = False) -> list[IncidentReport]:
        """Load all reports from data directory matching pattern."""
        reports = []
        for path in sorted(self.data_dir.glob(pattern)):
            reports.extend(self.load_jsonl(path, skip_invalid=skip_invalid))
        return reports

    def save_results(
        self,
        reports: Iterable[IncidentReport],
        results: Iterable[ClassificationResult],
        path: Path,
    ) -> None:
        """Write each report alongside its classification to a JSONL file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            for report, result in zip(reports, results):
                record = {
                    "report": report.model_dump(by_alias=True),
                    "classification": result.model_dump(mode="json"),
                }
                f.write(json.dumps(record, ensure_ascii=False) + "\n")
