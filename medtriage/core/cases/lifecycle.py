"""
Case Lifecycle Controller

Owns the case state machine:

    PENDING_ANALYSIS ──► REVIEW_PENDING ──► REVIEW_COMPLETED
           │                (dispatcher)       (clinician)
           └──────────► ANALYSIS_FAILED
                          (dispatcher)

No other transition is legal. Every transition is a single conditional
store update, so a case is always in exactly one of the four states and
a completed review is never reverted.
"""
from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from medtriage.core.clinical.base import (
    CanonicalAnalysisResult,
    CasePriority,
    HealthDomain,
    ImagePayload,
    ScanType,
    scan_types_for,
)
from medtriage.utils import CaseValidationError, InvalidTransitionError, get_logger
from .models import RESULT_STATES, Case, CaseStatus, ClinicianDecision
from .store import CaseStore

logger = get_logger(__name__)


def _generate_patient_id() -> str:
    return f"P{int(time.time() * 1000)}"


class CaseLifecycleController:
    """State machine for cases, persisted through a CaseStore."""

    def __init__(self, store: CaseStore):
        self.store = store

    # ── Creation & lookup ────────────────────────────────────────────────

    def create_case(
        self,
        health_domain: HealthDomain,
        scan_type: ScanType,
        image: ImagePayload,
        patient_id: Optional[str] = None,
    ) -> Case:
        """
        Create a case in PENDING_ANALYSIS with LOW priority and no result.

        Raises CaseValidationError when the scan type is not valid for the
        domain (including domains that accept no scans at all).
        """
        allowed = scan_types_for(health_domain)
        if scan_type not in allowed:
            raise CaseValidationError(
                f"Scan type '{scan_type.value}' is not valid for {health_domain.value}",
                field_name="scan_type",
                details={"allowed": [s.value for s in allowed]},
            )

        case = Case(
            case_id=str(uuid.uuid4()),
            patient_id=patient_id or _generate_patient_id(),
            created_at=datetime.now(timezone.utc),
            status=CaseStatus.PENDING_ANALYSIS,
            priority=CasePriority.LOW,
            health_domain=health_domain,
            scan_type=scan_type,
            image=image,
        )
        self.store.create(case)
        logger.info(
            f"Case {case.case_id} created for patient {case.patient_id} "
            f"[{health_domain.value} / {scan_type.value}]"
        )
        return case

    def get_case(self, case_id: str) -> Case:
        return self.store.get(case_id)

    def list_patient_cases(self, patient_id: str, exclude_case_id: Optional[str] = None) -> List[Case]:
        """Patient history, newest first, optionally without the case being viewed."""
        cases = [c for c in self.store.list_by_patient(patient_id) if c.case_id != exclude_case_id]
        return list(reversed(cases))

    # ── Automatic analysis outcomes (dispatcher only) ────────────────────

    def commit_analysis(
        self,
        case_id: str,
        result: CanonicalAnalysisResult,
        priority: CasePriority,
    ) -> Case:
        """PENDING_ANALYSIS → REVIEW_PENDING with result and priority, in one update."""
        case = self.store.update(
            case_id,
            {
                "analysis_result": result,
                "priority": priority,
                "status": CaseStatus.REVIEW_PENDING,
                "failure_reason": None,
            },
            expected_status=CaseStatus.PENDING_ANALYSIS,
        )
        logger.info(
            f"Case {case_id} → {CaseStatus.REVIEW_PENDING.value} "
            f"(priority={priority.value}, risk={result.risk_score:.1f})"
        )
        return case

    def mark_failed(self, case_id: str, reason: str) -> Case:
        """PENDING_ANALYSIS → ANALYSIS_FAILED. No result is stored."""
        case = self.store.update(
            case_id,
            {"status": CaseStatus.ANALYSIS_FAILED, "failure_reason": reason},
            expected_status=CaseStatus.PENDING_ANALYSIS,
        )
        logger.warning(f"Case {case_id} → {CaseStatus.ANALYSIS_FAILED.value}: {reason}")
        return case

    # ── Clinician actions ────────────────────────────────────────────────

    def record_review(
        self,
        case_id: str,
        decision: ClinicianDecision,
        note: Optional[str] = None,
        override_reason: Optional[str] = None,
    ) -> Case:
        """
        Record a clinician decision on a REVIEW_PENDING case.

        Accepted and Overridden complete the review; Deferred keeps the case
        in the review queue. Overriding requires a reason.
        """
        if decision == ClinicianDecision.OVERRIDDEN and not (override_reason and override_reason.strip()):
            raise CaseValidationError(
                "An override reason is required when overriding the analysis",
                field_name="override_reason",
            )

        changes = {
            "clinician_decision": decision,
            "override_reason": override_reason if decision == ClinicianDecision.OVERRIDDEN else None,
        }
        if note is not None:
            changes["clinician_note"] = note
        if decision != ClinicianDecision.DEFERRED:
            changes["status"] = CaseStatus.REVIEW_COMPLETED

        case = self.store.update(case_id, changes, expected_status=CaseStatus.REVIEW_PENDING)
        logger.info(f"Case {case_id} reviewed: {decision.value} → {case.status.value}")
        return case

    def attach_reports(
        self,
        case_id: str,
        clinical_report: Optional[str] = None,
        patient_report: Optional[str] = None,
    ) -> Case:
        """Store externally generated report texts on a case that has a result."""
        case = self.store.get(case_id)
        if case.status not in RESULT_STATES:
            raise InvalidTransitionError(
                f"Case '{case_id}' has no analysis result to report on",
                case_id=case_id,
                current_status=case.status.value,
            )

        changes = {}
        if clinical_report is not None:
            changes["clinical_report"] = clinical_report
        if patient_report is not None:
            changes["patient_report"] = patient_report
        if not changes:
            return case
        return self.store.update(case_id, changes)
