"""
Analysis Dispatcher

Central pipeline for one case: route by domain → await inference once →
normalize → classify → commit through the lifecycle controller.

Usage:
    dispatcher = AnalysisDispatcher(provider, controller)
    case = await dispatcher.submit_scan(HealthDomain.BREAST_HEALTH, ScanType.MAMMOGRAM, image)
    case.status   # REVIEW_PENDING or ANALYSIS_FAILED
"""
from __future__ import annotations

from typing import Dict, Optional

from medtriage.core.clinical.base import HealthDomain, ImagePayload, ScanType
from medtriage.core.llm.base import InferenceProvider
from medtriage.utils import InvalidTransitionError, UnsupportedDomainError, get_case_logger, get_logger
from .lifecycle import CaseLifecycleController
from .models import Case, CaseStatus
from .routes import PLACEHOLDER_ROUTE, DomainRoute, get_route

logger = get_logger(__name__)


class AnalysisDispatcher:
    """
    Runs automatic analysis for PENDING_ANALYSIS cases.

    Holds no per-case state, so several cases may be processed concurrently.
    A failed analysis is never retried here; an operator re-submits the scan.
    """

    def __init__(
        self,
        provider: InferenceProvider,
        controller: CaseLifecycleController,
        routes: Optional[Dict[HealthDomain, DomainRoute]] = None,
    ):
        self.provider = provider
        self.controller = controller
        self.routes = routes

    def resolve_route(self, domain: HealthDomain) -> DomainRoute:
        try:
            return get_route(domain, self.routes)
        except UnsupportedDomainError as exc:
            logger.warning(f"{exc.message} - using placeholder result")
            return PLACEHOLDER_ROUTE

    async def process_case(self, case_id: str) -> Case:
        """
        Analyse a PENDING_ANALYSIS case and commit the outcome.

        Raises InvalidTransitionError if the case is in any other state.
        Inference, parsing and normalization failures move the case to
        ANALYSIS_FAILED and are not re-raised.
        """
        case = self.controller.get_case(case_id)
        if case.status != CaseStatus.PENDING_ANALYSIS:
            raise InvalidTransitionError(
                f"Case '{case_id}' is {case.status.value}; only "
                f"{CaseStatus.PENDING_ANALYSIS.value} cases can be analysed",
                case_id=case_id,
                current_status=case.status.value,
            )

        case_log = get_case_logger(__name__, case_id)
        route = self.resolve_route(case.health_domain)
        case_log.info(f"Dispatching via route '{route.name}' ({self.provider.name})")

        try:
            payload = await route.analyze(self.provider, case)
            result = route.normalize(payload, case.health_domain)
            priority = route.classify(result)
        except Exception as exc:
            case_log.error(f"Analysis failed: {exc}", exc_info=True)
            return self.controller.mark_failed(case_id, str(exc) or type(exc).__name__)

        return self.controller.commit_analysis(case_id, result, priority)

    async def submit_scan(
        self,
        health_domain: HealthDomain,
        scan_type: ScanType,
        image: ImagePayload,
        patient_id: Optional[str] = None,
    ) -> Case:
        """Create a case for a new scan and analyse it straight away."""
        case = self.controller.create_case(health_domain, scan_type, image, patient_id=patient_id)
        return await self.process_case(case.case_id)
