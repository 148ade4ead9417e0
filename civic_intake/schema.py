"""Pydantic models for incident reports and classification results."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class IncidentType(str, Enum):
    """Incident kinds accepted by the intake form, in encoding order."""

    POTHOLE = "pothole"
    STREETLIGHT = "streetlight"
    WASTE = "waste"
    TRAFFIC_SIGNAL = "traffic-signal"
    WATER = "water"
    TREE = "tree"
    VANDALISM = "vandalism"
    NOISE = "noise"
    FIRE = "fire"


class ZoneTier(str, Enum):
    """Coarse location buckets, in encoding order."""

    CRITICAL = "critical"
    MEDIUM = "medium"
    LOW = "low"


class Priority(str, Enum):
    """Priority labels, in argmax tie-break order."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ReportStatus(str, Enum):
    """Processing status of a submitted report."""

    RECEIVED = "received"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    REJECTED = "rejected"


class IncidentReport(BaseModel):
    """A citizen complaint as submitted through the intake form."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = Field(..., description="Incident kind, e.g. 'pothole' or 'baches'")
    description: str = Field(default="", description="Free-text description")
    location: str = Field(default="", description="Free-text location or zone name")
    has_evidence: bool = Field(
        default=False, alias="hasEvidence", description="Photo or video attached"
    )


class PriorityProbabilities(BaseModel):
    """Rounded per-class percentages."""

    low: int = Field(..., ge=0, le=100)
    medium: int = Field(..., ge=0, le=100)
    high: int = Field(..., ge=0, le=100)


class ClassificationResult(BaseModel):
    """Priority assigned to a report."""

    priority: Priority
    confidence: int = Field(..., ge=0, le=100)
    probabilities: PriorityProbabilities


class ScoringTrace(BaseModel):
    """Every intermediate value computed while classifying one report."""

    features: list[float]
    zone_tier: ZoneTier
    hidden: list[float]
    network_probabilities: list[float]
    base_score: float
    adjusted_probabilities: list[float]
    result: ClassificationResult


class StoredReport(BaseModel):
    """A report held by the intake desk together with its classification."""

    id: str
    report: IncidentReport
    classification: ClassificationResult
    status: ReportStatus = ReportStatus.RECEIVED
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

    def search_text(self) -> str:
        """Text the report desk filter matches against."""
        parts = [
            self.id,
            self.report.type,
            self.report.description,
            self.report.location,
            self.classification.priority.value,
            self.status.value,
        ]
        return " ".join(parts).lower()
