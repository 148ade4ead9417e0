"""Feature encoding for incident reports.

Layout of the encoded vector (19 values, order is significant because the
hidden layer weights each position by its index):

    [0:9]   incident type one-hot, IncidentType order
    [9:14]  urgency keyword bag, URGENCY_KEYWORDS order
    [14:17] zone tier one-hot, ZoneTier order
    [17]    evidence flag
    [18]    normalised zone history
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from civic_intake.classifier.tables import (
    URGENCY_KEYWORDS,
    ZONE_TIER_KEYWORDS,
    ScoringTables,
    ZoneHistoryTable,
    resolve_incident_type,
)
from civic_intake.log import get_logger
from civic_intake.schema import IncidentReport, IncidentType, ZoneTier

logger = get_logger(__name__)

INCIDENT_TYPES: list[IncidentType] = list(IncidentType)
ZONE_TIERS: list[ZoneTier] = list(ZoneTier)
FEATURE_SIZE = len(INCIDENT_TYPES) + len(URGENCY_KEYWORDS) + len(ZONE_TIERS) + 2


@dataclass(frozen=True)
class EncodedReport:
    """Feature vector plus the categorical values derived while building it."""

    features: np.ndarray
    incident_type: Optional[IncidentType]
    zone_tier: ZoneTier
    keyword_hits: frozenset[str]
    has_evidence: bool


def one_hot(value: object, categories: Sequence[object]) -> np.ndarray:
    """One-hot vector over ``categories``; all zeros when ``value`` is not among them."""
    return np.array([1.0 if category == value else 0.0 for category in categories])


def keyword_hits(description: str) -> frozenset[str]:
    """Canonical urgency keywords found in a description (case-insensitive substring)."""
    text = (description or "").lower()
    return frozenset(
        keyword
        for keyword, spellings in URGENCY_KEYWORDS.items()
        if any(spelling in text for spelling in spellings)
    )


def bag_of_words(description: str) -> np.ndarray:
    """Binary keyword vector in URGENCY_KEYWORDS order."""
    hits = keyword_hits(description)
    return np.array([1.0 if keyword in hits else 0.0 for keyword in URGENCY_KEYWORDS])


def zone_tier(location: str) -> ZoneTier:
    """Bucket a free-text location into a zone tier."""
    text = (location or "").lower()
    for tier, keywords in ZONE_TIER_KEYWORDS.items():
        if any(keyword in text for keyword in keywords):
            return tier
    return ZoneTier.LOW


def history_feature(tier: ZoneTier, history: ZoneHistoryTable) -> float:
    """Historical complaint count for the tier, normalised by the table maximum."""
    return history.normalized(tier.value)


def encode_report(report: IncidentReport, tables: ScoringTables) -> EncodedReport:
    """Encode a report into the fixed-order feature vector."""
    incident_type = resolve_incident_type(report.type)
    hits = keyword_hits(report.description)
    tier = zone_tier(report.location)

    features = np.concatenate(
        [
            one_hot(incident_type, INCIDENT_TYPES),
            bag_of_words(report.description),
            one_hot(tier, ZONE_TIERS),
            np.array([1.0 if report.has_evidence else 0.0]),
            np.array([history_feature(tier, tables.history)]),
        ]
    )

    logger.debug(
        "Encoded report",
        extra={
            "incident_type": incident_type.value if incident_type else None,
            "keywords": sorted(hits),
            "zone_tier": tier.value,
            "features": features.tolist(),
        },
    )

    return EncodedReport(
        features=features,
        incident_type=incident_type,
        zone_tier=tier,
        keyword_hits=hits,
        has_evidence=report.has_evidence,
    )
