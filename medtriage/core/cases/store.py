"""
Case Store

Persistence boundary for cases. The pipeline needs atomic create and atomic
partial update per record, point lookup, and per-patient listing by
creation time. ``InMemoryCaseStore`` is the process-local implementation;
a database-backed store subclasses ``CaseStore``.
"""
from __future__ import annotations

import dataclasses
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from medtriage.utils import CaseNotFoundError, CaseValidationError, InvalidTransitionError, get_logger
from .models import Case, CaseStatus

logger = get_logger(__name__)


class CaseStore(ABC):
    """Interface every case store implements."""

    @abstractmethod
    def create(self, case: Case) -> Case:
        """Persist a new case; a duplicate id raises CaseValidationError."""

    @abstractmethod
    def get(self, case_id: str) -> Case:
        """Return the case or raise CaseNotFoundError."""

    @abstractmethod
    def update(
        self,
        case_id: str,
        changes: Dict[str, Any],
        expected_status: Optional[CaseStatus] = None,
    ) -> Case:
        """
        Apply ``changes`` as one atomic replacement of the record.

        When ``expected_status`` is given the update only applies if the
        stored case is still in that status; otherwise InvalidTransitionError.
        """

    @abstractmethod
    def list_by_patient(self, patient_id: str) -> List[Case]:
        """All cases of a patient, oldest first."""


class InMemoryCaseStore(CaseStore):
    """Thread-safe dict-backed store (replace with a database in production)."""

    def __init__(self):
        self._cases: Dict[str, Case] = {}
        self._lock = threading.Lock()

    def create(self, case: Case) -> Case:
        with self._lock:
            if case.case_id in self._cases:
                raise CaseValidationError(
                    f"Case '{case.case_id}' already exists",
                    field_name="case_id",
                )
            self._cases[case.case_id] = case
        return case

    def get(self, case_id: str) -> Case:
        with self._lock:
            case = self._cases.get(case_id)
        if case is None:
            raise CaseNotFoundError(case_id)
        return case

    def update(
        self,
        case_id: str,
        changes: Dict[str, Any],
        expected_status: Optional[CaseStatus] = None,
    ) -> Case:
        with self._lock:
            current = self._cases.get(case_id)
            if current is None:
                raise CaseNotFoundError(case_id)
            if expected_status is not None and current.status != expected_status:
                raise InvalidTransitionError(
                    f"Case '{case_id}' is {current.status.value}, expected {expected_status.value}",
                    case_id=case_id,
                    current_status=current.status.value,
                )
            # Case validates its own invariants, so a bad change never lands
            updated = dataclasses.replace(current, **changes)
            self._cases[case_id] = updated
        return updated

    def list_by_patient(self, patient_id: str) -> List[Case]:
        with self._lock:
            cases = [c for c in self._cases.values() if c.patient_id == patient_id]
        return sorted(cases, key=lambda c: c.created_at)

    def __len__(self) -> int:
        return len(self._cases)
