"""
Inference Payload Schemas

Tagged, validated shapes of what the inference provider returns. Each shape
is parsed from provider JSON here and converted to the canonical result only
by the normalizer.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from .base import Recommendation


class BoundingBoxSchema(BaseModel):
    x_min: float = Field(..., ge=0.0, le=1.0)
    y_min: float = Field(..., ge=0.0, le=1.0)
    x_max: float = Field(..., ge=0.0, le=1.0)
    y_max: float = Field(..., ge=0.0, le=1.0)

    @model_validator(mode="after")
    def check_order(self) -> "BoundingBoxSchema":
        if self.x_min > self.x_max or self.y_min > self.y_max:
            raise ValueError("bounding box minimum exceeds maximum")
        return self


# ---- Generic findings (already canonical) ----

class GenericFinding(BaseModel):
    id: str
    label: str
    description: str
    bounding_box: BoundingBoxSchema
    confidence: float = Field(..., ge=0.0, le=1.0)


class GenericFindingsPayload(BaseModel):
    """Provider output that already matches the canonical result shape."""
    kind: Literal["generic"] = "generic"
    risk_score: float = Field(..., ge=0.0, le=100.0, description="Overall risk score from 0 to 100.")
    recommendation: Recommendation
    clinical_summary: str = Field(..., description="Detailed summary for a clinician.")
    patient_summary: str = Field(..., description="Simplified summary for a patient.")
    findings: List[GenericFinding] = Field(default_factory=list)
    bi_rads: Optional[int] = Field(default=None, ge=0, le=6, description="BI-RADS score for breast scans only.")


# ---- Breast imaging ----

class BreastFindingLabel(str, Enum):
    MASS = "Mass"
    CALCIFICATION = "Calcification"
    ASYMMETRY = "Asymmetry"
    ARCHITECTURAL_DISTORTION = "Architectural Distortion"


class BreastFinding(BaseModel):
    id: str
    label: BreastFindingLabel
    description: str
    bounding_box: BoundingBoxSchema
    malignancy_probability: float = Field(..., ge=0.0, le=1.0)


class BreastImagingPayload(BaseModel):
    """BI-RADS assessment with per-finding malignancy probabilities."""
    kind: Literal["breast_imaging"] = "breast_imaging"
    bi_rads_score: int = Field(..., ge=0, le=6)
    findings: List[BreastFinding] = Field(default_factory=list)
    clinical_summary: str


# ---- Placeholder (no analysis route for the domain) ----

class PlaceholderPayload(BaseModel):
    """Stands in for inference output when a domain has no analysis route."""
    kind: Literal["placeholder"] = "placeholder"
    health_domain: str
    scan_type: str


# ---- Cephalometric landmarks ----

class NormalizedPoint(BaseModel):
    x: float = Field(..., ge=0.0, le=1.0, description="X-coordinate, normalized between 0 and 1.")
    y: float = Field(..., ge=0.0, le=1.0, description="Y-coordinate, normalized between 0 and 1.")


class DetectedLandmark(BaseModel):
    name: str
    point: NormalizedPoint


class LandmarkPayload(BaseModel):
    """Landmarks in normalized [0, 1] image coordinates."""
    kind: Literal["landmarks"] = "landmarks"
    landmarks: List[DetectedLandmark] = Field(default_factory=list)
