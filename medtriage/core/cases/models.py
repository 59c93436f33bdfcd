"""
Case data model.

A Case is an immutable record; every change produces a new Case through
the store so a reader never observes a half-applied update.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from medtriage.core.clinical.base import (
    CanonicalAnalysisResult,
    CasePriority,
    HealthDomain,
    ImagePayload,
    ScanType,
)


class CaseStatus(str, Enum):
    """
    Lifecycle state of a case.

    PENDING_ANALYSIS  – created, awaiting automatic analysis
    ANALYSIS_FAILED   – inference failed; terminal for automatic processing
    REVIEW_PENDING    – result attached, waiting for a clinician
    REVIEW_COMPLETED  – clinician has signed off
    """
    PENDING_ANALYSIS = "PENDING_ANALYSIS"
    ANALYSIS_FAILED = "ANALYSIS_FAILED"
    REVIEW_PENDING = "REVIEW_PENDING"
    REVIEW_COMPLETED = "REVIEW_COMPLETED"


class ClinicianDecision(str, Enum):
    ACCEPTED = "Accepted"
    OVERRIDDEN = "Overridden"
    DEFERRED = "Deferred"


# States in which a case carries an analysis result
RESULT_STATES = frozenset({CaseStatus.REVIEW_PENDING, CaseStatus.REVIEW_COMPLETED})


@dataclass(frozen=True)
class Case:
    """A unit of clinical work: one scan of one patient."""
    # ── Core identity ─────────────────────────────────────────────────────
    case_id: str
    patient_id: str
    created_at: datetime

    # ── Lifecycle ─────────────────────────────────────────────────────────
    status: CaseStatus
    priority: CasePriority

    # ── Scan ──────────────────────────────────────────────────────────────
    health_domain: HealthDomain
    scan_type: ScanType
    image: ImagePayload

    # ── Analysis ──────────────────────────────────────────────────────────
    analysis_result: Optional[CanonicalAnalysisResult] = None
    failure_reason: Optional[str] = None

    # ── Clinician annotations ─────────────────────────────────────────────
    clinician_note: Optional[str] = None
    clinician_decision: Optional[ClinicianDecision] = None
    override_reason: Optional[str] = None

    # ── Generated reports ─────────────────────────────────────────────────
    clinical_report: Optional[str] = None
    patient_report: Optional[str] = None

    def __post_init__(self):
        has_result = self.analysis_result is not None
        if has_result != (self.status in RESULT_STATES):
            raise ValueError(
                f"Case {self.case_id}: status {self.status.value} "
                f"{'must not' if has_result else 'must'} carry an analysis result"
            )

    def to_dict(self, include_image_data: bool = False) -> Dict[str, Any]:
        image = self.image.to_dict()
        if not include_image_data:
            image.pop("data_url")
        return {
            "case_id": self.case_id,
            "patient_id": self.patient_id,
            "created_at": self.created_at.isoformat(),
            "status": self.status.value,
            "priority": self.priority.value,
            "health_domain": self.health_domain.value,
            "scan_type": self.scan_type.value,
            "image": image,
            "analysis_result": self.analysis_result.to_dict() if self.analysis_result else None,
            "failure_reason": self.failure_reason,
            "clinician_note": self.clinician_note,
            "clinician_decision": self.clinician_decision.value if self.clinician_decision else None,
            "override_reason": self.override_reason,
            "clinical_report": self.clinical_report,
            "patient_report": self.patient_report,
        }
