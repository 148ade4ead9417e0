"""Tests for JSONL report loading."""

import json

import pytest

from civic_intake.classifier.scorer import PriorityScorer
from civic_intake.data.loader import ReportLoader
from civic_intake.schema import IncidentReport


def write_lines(path, lines):
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


class TestReportLoader:
    """Tests for ReportLoader."""

    def test_load_camel_and_snake_case(self, tmp_path):
        path = tmp_path / "reports.jsonl"
        write_lines(
            path,
            [
                json.dumps({"type": "fire", "location": "centro", "hasEvidence": True}),
                "",
                json.dumps({"type": "noise", "has_evidence": True}),
            ],
        )

        reports = ReportLoader(data_dir=tmp_path).load_jsonl(path)

        assert len(reports) == 2
        assert reports[0].has_evidence is True
        assert reports[1].has_evidence is True

    def test_invalid_line_raises(self, tmp_path):
        path = tmp_path / "reports.jsonl"
        write_lines(path, [json.dumps({"type": "fire"}), "{not json"])

        with pytest.raises(ValueError, match=":2:"):
            ReportLoader(data_dir=tmp_path).load_jsonl(path)

    def test_missing_type_raises(self, tmp_path):
        path = tmp_path / "reports.jsonl"
        write_lines(path, [json.dumps({"description": "no type"})])

        with pytest.raises(ValueError):
            ReportLoader(data_dir=tmp_path).load_jsonl(path)

    def test_skip_invalid(self, tmp_path):
        path = tmp_path / "reports.jsonl"
        write_lines(path, [json.dumps({"type": "fire"}), "{not json", json.dumps({"type": "tree"})])

        reports = ReportLoader(data_dir=tmp_path).load_jsonl(path, skip_invalid=True)
        assert [r.type for r in reports] == ["fire", "tree"]

    def test_load_all(self, tmp_path):
        write_lines(tmp_path / "a.jsonl", [json.dumps({"type": "fire"})])
        write_lines(tmp_path / "b.jsonl", [json.dumps({"type": "water"})])

        reports = ReportLoader(data_dir=tmp_path).load_all()
        assert [r.type for r in reports] == ["fire", "water"]

    def test_save_results(self, tmp_path):
        reports = [IncidentReport(type="fire", description="humo", has_evidence=True)]
        results = PriorityScorer().classify_batch(reports)
        out = tmp_path / "out" / "results.jsonl"

        ReportLoader(data_dir=tmp_path).save_results(reports, results, out)

        record = json.loads(out.read_text(encoding="utf-8").strip())
        assert record["report"]["hasEvidence"] is True
        assert record["report"]["description"] == "humo"
        assert record["classification"]["priority"] == results[0].priority.value
