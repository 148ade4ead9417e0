"""FastAPI application for complaint intake and priority scoring."""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Query, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from civic_intake import __version__
from civic_intake.api.models import (
    ClassifyResponse,
    ExplainResponse,
    HealthResponse,
    LoginRequest,
    LoginResponse,
    ReportListResponse,
    ReportRequest,
    ReportResponse,
    ReportUpdateRequest,
    StatsResponse,
)
from civic_intake.auth import verify_credentials
from civic_intake.classifier.scorer import PriorityScorer, get_default_scorer
from civic_intake.config import get_settings
from civic_intake.data.report_store import ReportStore
from civic_intake.exceptions import ReportNotFoundError
from civic_intake.log import configure_logging, get_logger
from civic_intake.schema import IncidentReport, Priority, ReportStatus

logger = get_logger(__name__)
security = HTTPBasic()

# Global instances
store: Optional[ReportStore] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize components on startup."""
    global store

    configure_logging()
    store = ReportStore(scorer=get_default_scorer())
    logger.info("Report desk ready", extra={"version": __version__})

    yield

    logger.info("Shutting down", extra={"reports_held": len(store)})


def get_scorer() -> PriorityScorer:
    return get_default_scorer()


def get_store() -> ReportStore:
    global store
    if store is None:
        store = ReportStore(scorer=get_default_scorer())
    return store


def require_operator(credentials: HTTPBasicCredentials = Depends(security)) -> str:
    """Reject requests without valid operator credentials."""
    if not verify_credentials(credentials.username, credentials.password):
        logger.warning("Rejected operator credentials", extra={"username": credentials.username})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username


def to_incident_report(request: ReportRequest) -> IncidentReport:
    return IncidentReport(
        type=request.type,
        description=request.description,
        location=request.location,
        has_evidence=request.has_evidence,
    )


app = FastAPI(
    title="Civic Intake API",
    description="Municipal complaint intake with rule-adjusted priority scoring",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
async def health_check(report_store: ReportStore = Depends(get_store)):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        report_count=len(report_store),
    )


@app.post("/classify", response_model=ClassifyResponse)
async def classify(request: ReportRequest, scorer: PriorityScorer = Depends(get_scorer)):
    """Classify a report without storing it."""
    result = scorer.classify(to_incident_report(request))
    return ClassifyResponse(success=True, result=result)


@app.post("/classify/explain", response_model=ExplainResponse)
async def explain(request: ReportRequest, scorer: PriorityScorer = Depends(get_scorer)):
    """Classify a report and return every intermediate scoring value."""
    trace = scorer.explain(to_incident_report(request))
    return ExplainResponse(success=True, trace=trace)


@app.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest):
    """Check operator credentials. No session is created."""
    if verify_credentials(request.username, request.password):
        return LoginResponse(success=True)
    return LoginResponse(success=False, error="Invalid credentials")


@app.post("/reports", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def submit_report(request: ReportRequest, report_store: ReportStore = Depends(get_store)):
    """Submit a report: classify it and add it to the desk."""
    stored = report_store.submit(to_incident_report(request))
    return ReportResponse(success=True, report=stored)


@app.get("/reports", response_model=ReportListResponse)
async def list_reports(
    q: str = "",
    priority: Optional[Priority] = None,
    report_status: Optional[ReportStatus] = Query(default=None, alias="status"),
    report_store: ReportStore = Depends(get_store),
):
    """List reports, optionally filtered by text, priority and status."""
    reports = report_store.search(term=q, priority=priority, status=report_status)
    return ReportListResponse(success=True, reports=reports, total=len(reports))


@app.get("/reports/stats", response_model=StatsResponse)
async def report_stats(report_store: ReportStore = Depends(get_store)):
    """Counts of held reports by priority and status."""
    return StatsResponse(**report_store.stats())


@app.get("/reports/{report_id}", response_model=ReportResponse)
async def get_report(report_id: str, report_store: ReportStore = Depends(get_store)):
    """Get a report by ID."""
    try:
        return ReportResponse(success=True, report=report_store.get(report_id))
    except ReportNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.patch("/reports/{report_id}", response_model=ReportResponse)
async def update_report(
    report_id: str,
    request: ReportUpdateRequest,
    report_store: ReportStore = Depends(get_store),
    operator: str = Depends(require_operator),
):
    """Edit a report. Content changes trigger reclassification."""
    changes = request.model_dump(exclude={"status"}, exclude_none=True)
    try:
        stored = report_store.update(report_id, status=request.status, **changes)
    except ReportNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info("Report edited by operator", extra={"report_id": report_id, "operator": operator})
    return ReportResponse(success=True, report=stored)


@app.delete("/reports/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_report(
    report_id: str,
    report_store: ReportStore = Depends(get_store),
    operator: str = Depends(require_operator),
):
    """Delete a report."""
    try:
        report_store.delete(report_id)
    except ReportNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info("Report deleted by operator", extra={"report_id": report_id, "operator": operator})


def run() -> None:
    """Serve the API on the configured host and port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
