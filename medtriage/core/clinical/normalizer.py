"""
Result Normalizer

The one place where domain-specific inference payloads are reconciled into
CanonicalAnalysisResult. Downstream consumers (priority classifier, HTTP
layer) never see a domain payload.
"""
from __future__ import annotations

from typing import Callable, Dict, Optional, Union

from medtriage.utils import NormalizationError, get_logger
from .base import (
    BoundingBox,
    CanonicalAnalysisResult,
    Finding,
    HealthDomain,
    Recommendation,
)
from .payloads import (
    BoundingBoxSchema,
    BreastImagingPayload,
    GenericFindingsPayload,
    PlaceholderPayload,
)

logger = get_logger(__name__)

# BI-RADS at or above this warrants biopsy
BIOPSY_BI_RADS = 4

DomainPayload = Union[GenericFindingsPayload, BreastImagingPayload, PlaceholderPayload]


def _box(schema: BoundingBoxSchema) -> BoundingBox:
    return BoundingBox(
        x_min=schema.x_min,
        y_min=schema.y_min,
        x_max=schema.x_max,
        y_max=schema.y_max,
    )


def breast_patient_summary(finding_count: int, bi_rads_score: int) -> str:
    return (
        f"The analysis identified {finding_count} area(s) of interest. "
        f"The overall assessment category is BI-RADS {bi_rads_score}. "
        "Please discuss the detailed findings with your doctor."
    )


def _from_generic(payload: GenericFindingsPayload) -> CanonicalAnalysisResult:
    return CanonicalAnalysisResult(
        risk_score=payload.risk_score,
        recommendation=payload.recommendation,
        clinical_summary=payload.clinical_summary,
        patient_summary=payload.patient_summary,
        findings=[
            Finding(
                id=f.id,
                label=f.label,
                description=f.description,
                bounding_box=_box(f.bounding_box),
                confidence=f.confidence,
            )
            for f in payload.findings
        ],
        bi_rads=payload.bi_rads,
    )


def _from_breast_imaging(payload: BreastImagingPayload) -> CanonicalAnalysisResult:
    risk_score = max((f.malignancy_probability * 100 for f in payload.findings), default=0.0)
    recommendation = (
        Recommendation.BIOPSY if payload.bi_rads_score >= BIOPSY_BI_RADS else Recommendation.ROUTINE
    )
    return CanonicalAnalysisResult(
        risk_score=risk_score,
        recommendation=recommendation,
        clinical_summary=payload.clinical_summary,
        patient_summary=breast_patient_summary(len(payload.findings), payload.bi_rads_score),
        findings=[
            Finding(
                id=f.id,
                label=f.label.value,
                description=f.description,
                bounding_box=_box(f.bounding_box),
                confidence=f.malignancy_probability,
            )
            for f in payload.findings
        ],
        bi_rads=payload.bi_rads_score,
    )


def _from_placeholder(payload: PlaceholderPayload) -> CanonicalAnalysisResult:
    return CanonicalAnalysisResult(
        risk_score=0.0,
        recommendation=Recommendation.CLINICAL_CORRELATION,
        clinical_summary=(
            f"Automated analysis is not available for {payload.health_domain} "
            f"({payload.scan_type}). Manual review of the scan is required."
        ),
        patient_summary=(
            "Your scan has been received and will be reviewed directly by a clinician."
        ),
        findings=[],
        is_placeholder=True,
    )


_NORMALIZERS: Dict[type, Callable[..., CanonicalAnalysisResult]] = {
    GenericFindingsPayload: _from_generic,
    BreastImagingPayload: _from_breast_imaging,
    PlaceholderPayload: _from_placeholder,
}


def normalize(payload: DomainPayload, health_domain: Optional[HealthDomain] = None) -> CanonicalAnalysisResult:
    """
    Map a domain payload to the canonical result.

    Raises NormalizationError for a payload type with no registered mapping.
    """
    converter = _NORMALIZERS.get(type(payload))
    if converter is None:
        domain = health_domain.value if health_domain else "unknown"
        raise NormalizationError(
            f"No normalizer for payload type {type(payload).__name__}",
            details={"health_domain": domain},
        )

    result = converter(payload)
    logger.debug(
        f"Normalized {type(payload).__name__} "
        f"[{health_domain.value if health_domain else 'unknown'}]: "
        f"risk={result.risk_score:.1f}, findings={len(result.findings)}"
    )
    return result
