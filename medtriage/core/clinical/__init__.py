"""
Clinical Decision Layer

Normalizes domain inference payloads and assigns triage priority.

Usage:
    from medtriage.core.clinical import normalize, classify

    result = normalize(payload, HealthDomain.BREAST_CANCER_ANALYSIS)
    priority = classify(result)
"""
from .base import (
    BI_RADS_CATEGORIES,
    DOMAIN_SCAN_TYPES,
    BoundingBox,
    CanonicalAnalysisResult,
    CasePriority,
    Finding,
    HealthDomain,
    ImagePayload,
    Recommendation,
    ScanType,
    scan_types_for,
)
from .payloads import (
    BreastImagingPayload,
    GenericFindingsPayload,
    LandmarkPayload,
    PlaceholderPayload,
)
from .normalizer import normalize
from .priority import classify

__all__ = [
    "BI_RADS_CATEGORIES",
    "DOMAIN_SCAN_TYPES",
    "BoundingBox",
    "CanonicalAnalysisResult",
    "CasePriority",
    "Finding",
    "HealthDomain",
    "ImagePayload",
    "Recommendation",
    "ScanType",
    "scan_types_for",
    "BreastImagingPayload",
    "GenericFindingsPayload",
    "LandmarkPayload",
    "PlaceholderPayload",
    "normalize",
    "classify",
]
