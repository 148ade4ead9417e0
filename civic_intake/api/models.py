"""API request and response models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from civic_intake.schema import ClassificationResult, ReportStatus, ScoringTrace, StoredReport


class ReportRequest(BaseModel):
    """Request body for /classify and /reports."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(..., min_length=1, max_length=50, description="Incident type")
    description: str = Field(default="", max_length=5000, description="Incident description")
    location: str = Field(default="", max_length=200, description="Incident location")
    has_evidence: bool = Field(default=False, alias="hasEvidence")


class ReportUpdateRequest(BaseModel):
    """Request body for PATCH /reports/{id}. Omitted fields are left unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=5000)
    location: Optional[str] = Field(default=None, max_length=200)
    has_evidence: Optional[bool] = Field(default=None, alias="hasEvidence")
    status: Optional[ReportStatus] = None


class ClassifyResponse(BaseModel):
    """Response body for /classify endpoint."""

    success: bool
    result: Optional[ClassificationResult] = None
    error: Optional[str] = None


class ExplainResponse(BaseModel):
    """Response body for /classify/explain endpoint."""

    success: bool
    trace: Optional[ScoringTrace] = None
    error: Optional[str] = None


class ReportResponse(BaseModel):
    """Response body for single-report endpoints."""

    success: bool
    report: Optional[StoredReport] = None
    error: Optional[str] = None


class ReportListResponse(BaseModel):
    """Response body for GET /reports."""

    success: bool
    reports: list[StoredReport] = Field(default_factory=list)
    total: int = 0


class StatsResponse(BaseModel):
    """Response body for /reports/stats endpoint."""

    total: int
    by_priority: dict[str, int]
    by_status: dict[str, int]


class LoginRequest(BaseModel):
    """Request body for /login endpoint."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=100)


class LoginResponse(BaseModel):
    """Response body for /login endpoint."""

    success: bool
    error: Optional[str] = None


class HealthResponse(BaseModel):
    """Response body for /health endpoint."""

    status: str
    version: str
    report_count: int
