"""Priority scorer: network probabilities rescaled by a rule-based base score."""

import math
from functools import lru_cache
from typing import Iterable, Optional

import numpy as np

from civic_intake.classifier.encoding import EncodedReport, encode_report
from civic_intake.classifier.network import forward
from civic_intake.classifier.tables import ScoringTables, WeightTable, default_tables, load_tables
from civic_intake.config import get_settings
from civic_intake.log import get_logger
from civic_intake.schema import (
    ClassificationResult,
    IncidentReport,
    Priority,
    PriorityProbabilities,
    ScoringTrace,
    ZoneTier,
)

logger = get_logger(__name__)

PRIORITIES: list[Priority] = list(Priority)

HIGH_SCORE_THRESHOLD = 0.65
LOW_SCORE_THRESHOLD = 0.45

# Multipliers for (Low, Medium, High)
HIGH_SCORE_FACTORS = np.array([0.3, 0.7, 1.8])
LOW_SCORE_FACTORS = np.array([2.0, 0.6, 0.2])
MIDDLE_SCORE_FACTORS = np.array([1.0, 1.2, 1.0])

SEVERE_KEYWORD_BONUS = 0.4
URGENT_KEYWORD_BONUS = 0.2
ZONE_BONUS = {ZoneTier.CRITICAL: 0.3, ZoneTier.MEDIUM: 0.1, ZoneTier.LOW: 0.0}
EVIDENCE_BONUS = 0.1


def base_score(encoded: EncodedReport, weights: WeightTable) -> float:
    """Rule-based score in [0, 1] built from type weight and keyword/zone/evidence bonuses."""
    score = weights.type_weight(encoded.incident_type)

    hits = encoded.keyword_hits
    if "emergency" in hits or "danger" in hits:
        score += SEVERE_KEYWORD_BONUS
    elif "urgent" in hits or "fallen" in hits:
        score += URGENT_KEYWORD_BONUS

    score += ZONE_BONUS[encoded.zone_tier]

    if encoded.has_evidence:
        score += EVIDENCE_BONUS

    return min(score, 1.0)


def adjust_probabilities(probabilities: np.ndarray, score: float) -> np.ndarray:
    """Rescale Low/Medium/High probabilities by the base score band and renormalise.

    Both thresholds are exclusive: a score of exactly 0.45 or 0.65 is in the
    middle band.
    """
    if score > HIGH_SCORE_THRESHOLD:
        factors = HIGH_SCORE_FACTORS
    elif score < LOW_SCORE_THRESHOLD:
        factors = LOW_SCORE_FACTORS
    else:
        factors = MIDDLE_SCORE_FACTORS

    adjusted = probabilities * factors
    return adjusted / adjusted.sum()


def to_percent(probability: float) -> int:
    """Round a probability to a whole percentage, halves rounding up."""
    return int(math.floor(probability * 100 + 0.5))


def decide(probabilities: np.ndarray) -> ClassificationResult:
    """Pick the most probable priority; the first maximum wins ties.

    Percentages are rounded independently, so they need not add up to 100.
    """
    winner = int(np.argmax(probabilities))
    return ClassificationResult(
        priority=PRIORITIES[winner],
        confidence=to_percent(probabilities[winner]),
        probabilities=PriorityProbabilities(
            low=to_percent(probabilities[0]),
            medium=to_percent(probabilities[1]),
            high=to_percent(probabilities[2]),
        ),
    )


class PriorityScorer:
    """Classifies incident reports as Low, Medium or High priority.

    Stateless apart from the read-only tables it is built with, so a single
    instance can be shared across threads.
    """

    def __init__(self, tables: Optional[ScoringTables] = None):
        self.tables = tables or default_tables()

    def explain(self, report: IncidentReport) -> ScoringTrace:
        """Classify a report and return every intermediate value."""
        encoded = encode_report(report, self.tables)
        hidden, network_probs = forward(encoded.features)
        score = base_score(encoded, self.tables.weights)
        adjusted = adjust_probabilities(network_probs, score)
        result = decide(adjusted)

        logger.debug(
            "Classified report",
            extra={
                "network_probabilities": network_probs.tolist(),
                "base_score": score,
                "adjusted_probabilities": adjusted.tolist(),
                "priority": result.priority.value,
            },
        )

        return ScoringTrace(
            features=encoded.features.tolist(),
            zone_tier=encoded.zone_tier,
            hidden=hidden.tolist(),
            network_probabilities=network_probs.tolist(),
            base_score=score,
            adjusted_probabilities=adjusted.tolist(),
            result=result,
        )

    def classify(self, report: IncidentReport) -> ClassificationResult:
        """Assign a priority to a report."""
        return self.explain(report).result

    def classify_batch(self, reports: Iterable[IncidentReport]) -> list[ClassificationResult]:
        """Classify multiple reports."""
        return [self.classify(report) for report in reports]


@lru_cache
def get_default_scorer() -> PriorityScorer:
    """Process-wide scorer built from settings (tables file if configured)."""
    settings = get_settings()
    if settings.scoring_tables_path:
        logger.info("Loading scoring tables from %s", settings.scoring_tables_path)
        return PriorityScorer(load_tables(settings.scoring_tables_path))
    return PriorityScorer()


def classify_report(report: IncidentReport) -> ClassificationResult:
    """Classify a report with the default scorer."""
    return get_default_scorer().classify(report)
