"""API schemas."""
from .schemas import (
    CaseCreateRequest,
    CephalometricAnalysisRequest,
    CephalometricResponse,
    HealthResponse,
    ImageInput,
    LandmarkDetectionRequest,
    LandmarkInput,
    PointInput,
    ReportsRequest,
    ReviewRequest,
)

__all__ = [
    "CaseCreateRequest",
    "CephalometricAnalysisRequest",
    "CephalometricResponse",
    "HealthResponse",
    "ImageInput",
    "LandmarkDetectionRequest",
    "LandmarkInput",
    "PointInput",
    "ReportsRequest",
    "ReviewRequest",
]
