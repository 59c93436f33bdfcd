"""
Case Analysis & Triage - FastAPI Application

HTTP surface over the triage pipeline for the UI layer:
- Case submission, lookup, patient history
- Clinician review and report attachment
- Cephalometric landmark detection and analysis
"""
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from medtriage.config import Settings
from medtriage.core.cases import (
    AnalysisDispatcher,
    CaseLifecycleController,
    CaseStore,
    InMemoryCaseStore,
)
from medtriage.core.cephalometry import (
    CephalometricLandmark,
    Point,
    analysis_to_dict,
    analyze,
    detect_landmarks,
)
from medtriage.core.clinical.base import DOMAIN_SCAN_TYPES, ImagePayload
from medtriage.core.llm import InferenceProvider, create_inference_provider
from medtriage.models import (
    CaseCreateRequest,
    CephalometricAnalysisRequest,
    CephalometricResponse,
    HealthResponse,
    ImageInput,
    LandmarkDetectionRequest,
    ReportsRequest,
    ReviewRequest,
)
from medtriage.utils import TriageError, get_logger, setup_logging

logger = get_logger(__name__)

API_VERSION = "1.0.0"

# Error code → HTTP status
_STATUS_BY_CODE = {
    "CASE_NOT_FOUND": 404,
    "INVALID_TRANSITION": 409,
    "VALIDATION_ERROR": 422,
    "DEGENERATE_GEOMETRY": 422,
    "UNSUPPORTED_DOMAIN": 422,
    "INFERENCE_ERROR": 502,
    "NORMALIZATION_ERROR": 502,
    "CONFIGURATION_ERROR": 500,
}


def _image(image: ImageInput) -> ImagePayload:
    return ImagePayload(data_url=image.data_url, mime_type=image.mime_type, name=image.name)


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[InferenceProvider] = None,
    store: Optional[CaseStore] = None,
) -> FastAPI:
    """
    Build the application.

    The inference provider is constructed once here (or injected) and shared
    by every request.
    """
    settings = settings or Settings()
    setup_logging(settings.log_level, settings.log_file)

    provider = provider or create_inference_provider(settings)
    controller = CaseLifecycleController(store or InMemoryCaseStore())
    dispatcher = AnalysisDispatcher(provider, controller)

    app = FastAPI(
        title="Case Analysis & Triage API",
        description="Scan triage and cephalometric analysis for clinical decision support",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.provider = provider
    app.state.controller = controller
    app.state.dispatcher = dispatcher
    app.state.started_at = datetime.now()

    @app.exception_handler(TriageError)
    async def triage_error_handler(request: Request, exc: TriageError):
        status_code = _STATUS_BY_CODE.get(exc.code, 500)
        if status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=status_code, content=exc.to_dict())

    # ---- Health ----

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        now = datetime.now()
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            timestamp=now,
            uptime_seconds=(now - app.state.started_at).total_seconds(),
            inference_provider=app.state.provider.name,
        )

    @app.get("/api/v1/domains", tags=["Cases"])
    async def list_domains():
        """Health domains and the scan types each accepts."""
        return {
            "domains": [
                {"health_domain": domain.value, "scan_types": [s.value for s in scan_types]}
                for domain, scan_types in DOMAIN_SCAN_TYPES.items()
            ]
        }

    # ---- Cases ----

    @app.post("/api/v1/cases", status_code=201, tags=["Cases"])
    async def submit_case(request: CaseCreateRequest):
        """
        Create a case for a new scan and run automatic analysis.

        The returned case is REVIEW_PENDING on success and ANALYSIS_FAILED
        when inference failed.
        """
        case = await app.state.dispatcher.submit_scan(
            request.health_domain,
            request.scan_type,
            _image(request.image),
            patient_id=request.patient_id,
        )
        return case.to_dict()

    @app.get("/api/v1/cases/{case_id}", tags=["Cases"])
    async def get_case(case_id: str, include_image: bool = False):
        return app.state.controller.get_case(case_id).to_dict(include_image_data=include_image)

    @app.get("/api/v1/patients/{patient_id}/cases", tags=["Cases"])
    async def list_patient_cases(patient_id: str, exclude_case_id: Optional[str] = None):
        """Patient history, newest first."""
        cases = app.state.controller.list_patient_cases(patient_id, exclude_case_id=exclude_case_id)
        return {"patient_id": patient_id, "cases": [c.to_dict() for c in cases]}

    @app.post("/api/v1/cases/{case_id}/review", tags=["Review"])
    async def review_case(case_id: str, request: ReviewRequest):
        case = app.state.controller.record_review(
            case_id,
            request.decision,
            note=request.note,
            override_reason=request.override_reason,
        )
        return case.to_dict()

    @app.post("/api/v1/cases/{case_id}/reports", tags=["Review"])
    async def attach_reports(case_id: str, request: ReportsRequest):
        case = app.state.controller.attach_reports(
            case_id,
            clinical_report=request.clinical_report,
            patient_report=request.patient_report,
        )
        return case.to_dict()

    # ---- Cephalometry ----

    @app.post("/api/v1/cephalometric/analysis", response_model=CephalometricResponse, tags=["Cephalometry"])
    async def cephalometric_analysis(request: CephalometricAnalysisRequest):
        """Recompute all measurement batteries from a landmark set."""
        landmarks = [
            CephalometricLandmark(name=lm.name, point=Point(lm.point.x, lm.point.y))
            for lm in request.landmarks
        ]
        return CephalometricResponse(
            landmarks=[lm.to_dict() for lm in landmarks],
            analysis=analysis_to_dict(analyze(landmarks)),
        )

    @app.post("/api/v1/cephalometric/landmarks", response_model=CephalometricResponse, tags=["Cephalometry"])
    async def cephalometric_detection(request: LandmarkDetectionRequest):
        """AI landmark detection; returns a fresh pixel-space landmark set and its analysis."""
        landmarks: List[CephalometricLandmark] = await detect_landmarks(
            app.state.provider,
            _image(request.image),
            request.width,
            request.height,
            landmark_names=request.landmark_names,
        )
        return CephalometricResponse(
            landmarks=[lm.to_dict() for lm in landmarks],
            analysis=analysis_to_dict(analyze(landmarks)),
        )

    logger.info(f"API ready (inference provider: {provider.name})")
    return app


# ---- Run with uvicorn ----
# uvicorn medtriage.main:create_app --factory
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("medtriage.main:create_app", factory=True, host="0.0.0.0", port=8000)
