"""
Clinical Decision Layer — Base Types

Defines the canonical result shape every domain's inference is normalized
into, plus the enumerations shared by cases, routes and the HTTP layer.
These are domain-agnostic and consumed by the priority classifier and UI.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class HealthDomain(str, Enum):
    """Clinical area a case belongs to."""
    BREAST_HEALTH = "Breast Health"
    REPRODUCTIVE_HEALTH = "Reproductive Health"
    PREGNANCY = "Pregnancy & Maternal Care"
    BONE_HEALTH = "Bone & Joint Health"
    CARDIOVASCULAR = "Cardiovascular Health"
    SKIN_HEALTH = "Skin & Hair Health"
    NUTRITION = "Nutrition & Lifestyle"
    MENTAL_HEALTH = "Mental Health"
    CERVICAL_HEALTH = "Cervical & Ovarian Health"
    PREVENTIVE_HEALTH = "General Preventive Health"
    DENTAL_ORTHODONTICS = "Dental & Orthodontics"
    BREAST_CANCER_ANALYSIS = "Breast Cancer Analysis"


class ScanType(str, Enum):
    MAMMOGRAM = "Mammogram"
    ULTRASOUND = "Ultrasound"
    MRI = "MRI"
    PAP_SMEAR = "Pap Smear"
    DEXA_SCAN = "DEXA Scan"
    ECG = "ECG"
    SKIN_PHOTO = "Skin Photo"
    MEAL_PHOTO = "Meal Photo"
    CEPHALOMETRIC_XRAY = "Cephalometric X-ray"
    BREAST_IMAGE = "Breast Image"


class Recommendation(str, Enum):
    BIOPSY = "Biopsy"
    MRI = "MRI"
    SHORT_FOLLOW_UP = "Short-term Follow-up"
    ROUTINE = "Routine Screening"
    CLINICAL_CORRELATION = "Clinical Correlation"
    NO_ACTION = "No Action Required"
    REFERRAL = "Referral to Specialist"


class CasePriority(str, Enum):
    """
    Triage priority driving the order of the clinician review queue.

    HIGH   – review first
    MEDIUM – review after HIGH
    LOW    – routine queue
    """
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# Domains with an empty list accept no uploads
DOMAIN_SCAN_TYPES: Dict[HealthDomain, List[ScanType]] = {
    HealthDomain.BREAST_CANCER_ANALYSIS: [ScanType.BREAST_IMAGE],
    HealthDomain.DENTAL_ORTHODONTICS: [ScanType.CEPHALOMETRIC_XRAY],
    HealthDomain.BREAST_HEALTH: [ScanType.MAMMOGRAM, ScanType.ULTRASOUND, ScanType.MRI],
    HealthDomain.SKIN_HEALTH: [ScanType.SKIN_PHOTO],
    HealthDomain.CARDIOVASCULAR: [ScanType.ECG],
    HealthDomain.BONE_HEALTH: [ScanType.DEXA_SCAN],
    HealthDomain.REPRODUCTIVE_HEALTH: [ScanType.ULTRASOUND],
    HealthDomain.PREGNANCY: [ScanType.ULTRASOUND],
    HealthDomain.NUTRITION: [ScanType.MEAL_PHOTO],
    HealthDomain.MENTAL_HEALTH: [],
    HealthDomain.CERVICAL_HEALTH: [ScanType.PAP_SMEAR],
    HealthDomain.PREVENTIVE_HEALTH: [],
}

BI_RADS_CATEGORIES: Dict[int, Dict[str, str]] = {
    0: {"name": "Incomplete", "description": "Need additional imaging evaluation."},
    1: {"name": "Negative", "description": "There is nothing to comment on."},
    2: {"name": "Benign", "description": "A definite benign finding is present."},
    3: {"name": "Probably Benign", "description": "A finding has a very high probability of being benign."},
    4: {"name": "Suspicious", "description": "Finding is suspicious for malignancy."},
    5: {"name": "Highly Suggestive of Malignancy", "description": "Finding has a high probability of being cancer."},
    6: {"name": "Known Biopsy-Proven Malignancy", "description": "Malignancy proven by a prior biopsy."},
}


def scan_types_for(domain: HealthDomain) -> List[ScanType]:
    return list(DOMAIN_SCAN_TYPES.get(domain, []))


@dataclass(frozen=True)
class ImagePayload:
    """Scan image carried as a data URL, with its declared MIME type and file name."""
    data_url: str
    mime_type: str
    name: str

    @property
    def base64_data(self) -> str:
        """The base64 body of the data URL (everything after the first comma)."""
        _, sep, body = self.data_url.partition(",")
        return body if sep else self.data_url

    def to_dict(self) -> Dict[str, str]:
        return {"data_url": self.data_url, "mime_type": self.mime_type, "name": self.name}


@dataclass(frozen=True)
class BoundingBox:
    """Normalized region, all coordinates in [0, 1]."""
    x_min: float
    y_min: float
    x_max: float
    y_max: float

    def __post_init__(self):
        for value in (self.x_min, self.y_min, self.x_max, self.y_max):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Bounding box coordinate {value} outside [0, 1]")
        if self.x_min > self.x_max or self.y_min > self.y_max:
            raise ValueError("Bounding box minimum exceeds maximum")

    def to_dict(self) -> Dict[str, float]:
        return {
            "x_min": self.x_min,
            "y_min": self.y_min,
            "x_max": self.x_max,
            "y_max": self.y_max,
        }


@dataclass(frozen=True)
class Finding:
    """One localized region of interest."""
    id: str
    label: str
    description: str
    bounding_box: BoundingBox
    confidence: float

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Finding confidence {self.confidence} outside [0, 1]")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "bounding_box": self.bounding_box.to_dict(),
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class CanonicalAnalysisResult:
    """
    The single normalized result shape all downstream logic consumes.

    ``bi_rads`` is only set by breast-imaging domains. ``is_placeholder``
    marks results produced for domains without an analysis route.
    """
    risk_score: float
    recommendation: Recommendation
    clinical_summary: str
    patient_summary: str
    findings: List[Finding] = field(default_factory=list)
    bi_rads: Optional[int] = None
    is_placeholder: bool = False

    def __post_init__(self):
        if self.risk_score is None or not 0.0 <= self.risk_score <= 100.0:
            raise ValueError(f"Risk score {self.risk_score} outside [0, 100]")
        if self.findings is None:
            raise ValueError("Findings must be a list, not None")
        if self.bi_rads is not None and self.bi_rads not in BI_RADS_CATEGORIES:
            raise ValueError(f"BI-RADS category {self.bi_rads} outside 0-6")

    @property
    def bi_rads_category(self) -> Optional[str]:
        if self.bi_rads is None:
            return None
        return BI_RADS_CATEGORIES[self.bi_rads]["name"]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "risk_score": self.risk_score,
            "recommendation": self.recommendation.value,
            "clinical_summary": self.clinical_summary,
            "patient_summary": self.patient_summary,
            "findings": [f.to_dict() for f in self.findings],
            "bi_rads": self.bi_rads,
            "bi_rads_category": self.bi_rads_category,
            "is_placeholder": self.is_placeholder,
        }
