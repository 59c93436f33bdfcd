"""
Unit Tests for the Priority Classifier
"""
import pytest

from medtriage.core.clinical import CanonicalAnalysisResult, CasePriority, Recommendation, classify


def _result(risk_score: float, bi_rads=None) -> CanonicalAnalysisResult:
    return CanonicalAnalysisResult(
        risk_score=risk_score,
        recommendation=Recommendation.ROUTINE,
        clinical_summary="",
        patient_summary="",
        bi_rads=bi_rads,
    )


class TestClassify:
    """Thresholds are strict: 75 is MEDIUM, 40 is LOW."""

    @pytest.mark.parametrize("risk,expected", [
        (100, CasePriority.HIGH),
        (75.1, CasePriority.HIGH),
        (75, CasePriority.MEDIUM),
        (40.1, CasePriority.MEDIUM),
        (40, CasePriority.LOW),
        (0, CasePriority.LOW),
    ])
    def test_risk_thresholds(self, risk, expected):
        assert classify(_result(risk)) == expected

    @pytest.mark.parametrize("bi_rads,expected", [
        (6, CasePriority.HIGH),
        (4, CasePriority.HIGH),
        (3, CasePriority.LOW),
        (0, CasePriority.LOW),
    ])
    def test_bi_rads_escalates(self, bi_rads, expected):
        assert classify(_result(10, bi_rads=bi_rads)) == expected

    def test_bi_rads_four_at_zero_risk(self):
        """The BI-RADS gate applies even when the risk score is at its floor."""
        assert classify(_result(0, bi_rads=4)) == CasePriority.HIGH

    def test_bi_rads_does_not_lower_priority(self):
        assert classify(_result(60, bi_rads=2)) == CasePriority.MEDIUM
