"""Incident priority classifier module."""

from civic_intake.classifier.scorer import PriorityScorer, classify_report, get_default_scorer
from civic_intake.classifier.tables import ScoringTables, default_tables, load_tables

__all__ = [
    "PriorityScorer",
    "ScoringTables",
    "classify_report",
    "default_tables",
    "get_default_scorer",
    "load_tables",
]
