"""
API request/response schemas.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from medtriage.core.cases.models import ClinicianDecision
from medtriage.core.clinical.base import HealthDomain, ScanType


class ImageInput(BaseModel):
    """Scan image as a data URL."""
    data_url: str = Field(..., min_length=1, description="data:<mime>;base64,<body>")
    mime_type: str = Field(..., description="Declared MIME type, e.g. image/png")
    name: str = Field(default="scan", description="Original file name")


class CaseCreateRequest(BaseModel):
    """Submit a new scan for analysis."""
    health_domain: HealthDomain
    scan_type: ScanType
    image: ImageInput
    patient_id: Optional[str] = Field(default=None, description="Generated when omitted")


class ReviewRequest(BaseModel):
    """Clinician decision on a case awaiting review."""
    decision: ClinicianDecision
    note: Optional[str] = None
    override_reason: Optional[str] = None


class ReportsRequest(BaseModel):
    """Externally generated report texts."""
    clinical_report: Optional[str] = None
    patient_report: Optional[str] = None


class PointInput(BaseModel):
    x: float
    y: float


class LandmarkInput(BaseModel):
    name: str
    point: PointInput


class CephalometricAnalysisRequest(BaseModel):
    landmarks: List[LandmarkInput] = Field(default_factory=list)


class LandmarkDetectionRequest(BaseModel):
    image: ImageInput
    width: float = Field(..., gt=0, description="Image width in pixels")
    height: float = Field(..., gt=0, description="Image height in pixels")
    landmark_names: Optional[List[str]] = None


class CephalometricResponse(BaseModel):
    landmarks: List[Dict[str, Any]] = Field(default_factory=list)
    analysis: Dict[str, List[Dict[str, Any]]] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: datetime
    uptime_seconds: float
    inference_provider: str
