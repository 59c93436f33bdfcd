"""
Unit Tests for the Analysis Dispatcher

Routing, failure handling, placeholders and concurrent processing.
"""
import asyncio
from typing import List

import pytest

from medtriage.core.cases import (
    DOMAIN_ROUTES,
    PLACEHOLDER_ROUTE,
    AnalysisDispatcher,
    CaseStatus,
    get_route,
)
from medtriage.core.clinical import CasePriority, HealthDomain, Recommendation, ScanType, classify
from medtriage.core.llm import InferenceProvider, SimulatedInferenceProvider
from medtriage.utils import InferenceError, InvalidTransitionError, UnsupportedDomainError


class FailingProvider(InferenceProvider):
    """Provider whose every call raises."""

    name = "failing"

    def __init__(self, exc: Exception):
        self.exc = exc

    async def analyze_scan(self, image, domain, scan_type, include_bi_rads=False):
        raise self.exc

    async def analyze_breast_image(self, image):
        raise self.exc

    async def detect_landmarks(self, image, landmark_names):
        raise self.exc


class RecordingProvider(SimulatedInferenceProvider):
    """Simulated provider that records which calls were made."""

    def __init__(self):
        super().__init__(seed=1)
        self.calls: List[str] = []

    async def analyze_scan(self, image, domain, scan_type, include_bi_rads=False):
        self.calls.append(f"analyze_scan:{include_bi_rads}")
        return await super().analyze_scan(image, domain, scan_type, include_bi_rads)

    async def analyze_breast_image(self, image):
        self.calls.append("analyze_breast_image")
        return await super().analyze_breast_image(image)


class TestRoutes:

    def test_registered_domains(self):
        assert set(DOMAIN_ROUTES) == {
            HealthDomain.BREAST_HEALTH,
            HealthDomain.BREAST_CANCER_ANALYSIS,
            HealthDomain.SKIN_HEALTH,
        }

    def test_unknown_domain_raises(self):
        with pytest.raises(UnsupportedDomainError):
            get_route(HealthDomain.CARDIOVASCULAR)

    def test_dispatcher_falls_back_to_placeholder(self, dispatcher):
        assert dispatcher.resolve_route(HealthDomain.CARDIOVASCULAR) is PLACEHOLDER_ROUTE


@pytest.mark.asyncio
class TestProcessCase:
    """Tests for the per-case pipeline."""

    async def test_breast_imaging_is_high_priority(self, dispatcher, sample_image):
        case = await dispatcher.submit_scan(
            HealthDomain.BREAST_CANCER_ANALYSIS, ScanType.BREAST_IMAGE, sample_image
        )

        assert case.status == CaseStatus.REVIEW_PENDING
        assert case.priority == CasePriority.HIGH
        assert case.analysis_result.bi_rads == 4
        assert case.analysis_result.recommendation == Recommendation.BIOPSY
        assert case.analysis_result.risk_score == pytest.approx(85.0)

    async def test_breast_scan_requests_bi_rads(self, controller, sample_image):
        provider = RecordingProvider()
        dispatcher = AnalysisDispatcher(provider, controller)

        case = await dispatcher.submit_scan(HealthDomain.BREAST_HEALTH, ScanType.MAMMOGRAM, sample_image)

        assert provider.calls == ["analyze_scan:True"]
        assert case.analysis_result.bi_rads in (1, 2, 4)
        assert case.priority == classify(case.analysis_result)

    async def test_skin_photo_has_no_bi_rads(self, controller, sample_image):
        provider = RecordingProvider()
        dispatcher = AnalysisDispatcher(provider, controller)

        case = await dispatcher.submit_scan(HealthDomain.SKIN_HEALTH, ScanType.SKIN_PHOTO, sample_image)

        assert provider.calls == ["analyze_scan:False"]
        assert case.analysis_result.bi_rads is None
        assert case.priority in (CasePriority.HIGH, CasePriority.LOW)

    async def test_placeholder_makes_no_provider_call(self, controller, sample_image):
        provider = RecordingProvider()
        dispatcher = AnalysisDispatcher(provider, controller)

        case = await dispatcher.submit_scan(
            HealthDomain.DENTAL_ORTHODONTICS, ScanType.CEPHALOMETRIC_XRAY, sample_image
        )

        assert provider.calls == []
        assert case.status == CaseStatus.REVIEW_PENDING
        assert case.priority == CasePriority.LOW
        assert case.analysis_result.is_placeholder
        assert case.analysis_result.risk_score == 0.0

    async def test_custom_routes(self, controller, sample_image):
        provider = RecordingProvider()
        dispatcher = AnalysisDispatcher(provider, controller, routes={})

        case = await dispatcher.submit_scan(HealthDomain.SKIN_HEALTH, ScanType.SKIN_PHOTO, sample_image)

        assert provider.calls == []
        assert case.analysis_result.is_placeholder

    async def test_provider_failure_marks_case_failed(self, controller, sample_image):
        dispatcher = AnalysisDispatcher(FailingProvider(InferenceError("quota exceeded", provider="failing")), controller)

        case = await dispatcher.submit_scan(HealthDomain.SKIN_HEALTH, ScanType.SKIN_PHOTO, sample_image)

        assert case.status == CaseStatus.ANALYSIS_FAILED
        assert case.analysis_result is None
        assert case.failure_reason == "quota exceeded"
        assert controller.get_case(case.case_id).status == CaseStatus.ANALYSIS_FAILED

    async def test_unexpected_error_without_message(self, controller, sample_image):
        dispatcher = AnalysisDispatcher(FailingProvider(RuntimeError()), controller)

        case = await dispatcher.submit_scan(
            HealthDomain.BREAST_CANCER_ANALYSIS, ScanType.BREAST_IMAGE, sample_image
        )

        assert case.status == CaseStatus.ANALYSIS_FAILED
        assert case.failure_reason == "RuntimeError"

    async def test_only_pending_cases(self, dispatcher, sample_image):
        case = await dispatcher.submit_scan(HealthDomain.SKIN_HEALTH, ScanType.SKIN_PHOTO, sample_image)

        with pytest.raises(InvalidTransitionError):
            await dispatcher.process_case(case.case_id)

    async def test_concurrent_cases(self, controller, sample_image):
        dispatcher = AnalysisDispatcher(SimulatedInferenceProvider(seed=3, latency_seconds=0.01), controller)
        cases = [
            controller.create_case(HealthDomain.SKIN_HEALTH, ScanType.SKIN_PHOTO, sample_image, patient_id="P-7")
            for _ in range(5)
        ]

        processed = await asyncio.gather(*(dispatcher.process_case(c.case_id) for c in cases))

        assert {c.case_id for c in processed} == {c.case_id for c in cases}
        assert all(c.status == CaseStatus.REVIEW_PENDING for c in processed)
        assert all(c.priority == classify(c.analysis_result) for c in processed)


class TestProviderInterface:
    """InferenceProvider is abstract; a partial implementation cannot be built."""

    def test_base_class_not_instantiable(self):
        with pytest.raises(TypeError):
            InferenceProvider()

    def test_missing_method_rejected_at_construction(self):
        class ScanOnlyProvider(InferenceProvider):
            async def analyze_scan(self, image, domain, scan_type, include_bi_rads=False):
                raise NotImplementedError

        with pytest.raises(TypeError, match="detect_landmarks"):
            ScanOnlyProvider()

    def test_complete_double_is_instantiable(self):
        assert FailingProvider(RuntimeError()).name == "failing"
