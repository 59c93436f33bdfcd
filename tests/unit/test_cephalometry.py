"""
Unit Tests for the Cephalometric Analyzer

Steiner battery computation, interpretation and omission rules.
"""
import pytest

from medtriage.core.cephalometry import (
    LANDMARK_DESCRIPTIONS,
    REQUIRED_LANDMARKS,
    STEINER_ANALYSIS,
    CephalometricLandmark,
    Interpretation,
    MeasurementUnit,
    Point,
    analysis_to_dict,
    analyze,
    angle,
)
from medtriage.core.cephalometry.analyzer import _classify_anb, _classify_jaw_position
from medtriage.core.cephalometry.landmarks import A_POINT, B_POINT, NASION, SELLA, find_point


def _by_name(analysis):
    return {m.name: m for m in analysis[STEINER_ANALYSIS]}


class TestSteinerAnalysis:
    """Tests for the Steiner battery."""

    def test_produces_sna_snb_anb(self, steiner_landmarks):
        analysis = analyze(steiner_landmarks)

        assert list(analysis) == [STEINER_ANALYSIS]
        assert [m.name for m in analysis[STEINER_ANALYSIS]] == ["SNA", "SNB", "ANB"]

    def test_sna_is_angle_at_nasion(self, steiner_landmarks):
        measurements = _by_name(analyze(steiner_landmarks))
        expected = angle(Point(150, 80), Point(100, 100), Point(160, 120))

        assert measurements["SNA"].value == pytest.approx(expected)
        assert measurements["SNA"].value == pytest.approx(82.235, abs=0.01)

    def test_anb_is_difference(self, steiner_landmarks):
        measurements = _by_name(analyze(steiner_landmarks))
        sna, snb, anb = measurements["SNA"], measurements["SNB"], measurements["ANB"]

        assert abs(anb.value - (sna.value - snb.value)) < 1e-9

    def test_interpretations(self, steiner_landmarks):
        measurements = _by_name(analyze(steiner_landmarks))

        assert measurements["SNA"].interpretation == Interpretation.NORMAL
        assert measurements["SNB"].interpretation == Interpretation.RETRUSIVE
        assert measurements["ANB"].interpretation == Interpretation.SKELETAL_CLASS_II

    def test_units_and_ranges(self, steiner_landmarks):
        measurements = _by_name(analyze(steiner_landmarks))

        assert all(m.unit == MeasurementUnit.DEGREES for m in measurements.values())
        assert measurements["SNA"].normal_range == "82° ± 2°"
        assert measurements["SNB"].normal_range == "80° ± 2°"
        assert measurements["ANB"].normal_range == "2° ± 2°"

    def test_idempotent(self, steiner_landmarks):
        assert analyze(steiner_landmarks) == analyze(list(steiner_landmarks))

    @pytest.mark.parametrize("scale", [1e-200, 1e200])
    def test_scale_invariant(self, steiner_landmarks, scale):
        """Angular measurements do not depend on coordinate magnitude."""
        scaled = [
            CephalometricLandmark(lm.name, Point(lm.point.x * scale, lm.point.y * scale))
            for lm in steiner_landmarks
        ]
        expected = _by_name(analyze(steiner_landmarks))
        measurements = _by_name(analyze(scaled))

        for name in ("SNA", "SNB", "ANB"):
            assert measurements[name].value == pytest.approx(expected[name].value, abs=1e-9)

    def test_extra_landmarks_ignored(self, steiner_landmarks):
        extra = steiner_landmarks + [CephalometricLandmark("Menton (Me)", Point(150, 300))]
        assert analyze(extra) == analyze(steiner_landmarks)


class TestOmission:
    """A battery is left out when it cannot be computed."""

    def test_missing_landmark(self, steiner_landmarks):
        without_b = [lm for lm in steiner_landmarks if lm.name != B_POINT]
        assert analyze(without_b) == {}

    def test_empty_landmarks(self):
        assert analyze([]) == {}

    def test_degenerate_geometry(self, steiner_landmarks):
        """A-point placed on Nasion leaves SNA undefined."""
        landmarks = [
            CephalometricLandmark(A_POINT, Point(150, 80)) if lm.name == A_POINT else lm
            for lm in steiner_landmarks
        ]
        assert analyze(landmarks) == {}


class TestClassifiers:
    """Threshold edges are exclusive."""

    @pytest.mark.parametrize("value,expected", [
        (84.0, Interpretation.NORMAL),
        (84.01, Interpretation.PROTRUSIVE),
        (80.0, Interpretation.NORMAL),
        (79.99, Interpretation.RETRUSIVE),
    ])
    def test_sna(self, value, expected):
        assert _classify_jaw_position(value, 84.0, 80.0) == expected

    @pytest.mark.parametrize("value,expected", [
        (4.0, Interpretation.NORMAL),
        (4.5, Interpretation.SKELETAL_CLASS_II),
        (0.0, Interpretation.NORMAL),
        (-0.5, Interpretation.SKELETAL_CLASS_III),
    ])
    def test_anb(self, value, expected):
        assert _classify_anb(value) == expected


class TestLandmarks:
    """Tests for the landmark vocabulary."""

    def test_required_landmarks_have_descriptions(self):
        assert len(REQUIRED_LANDMARKS) == 10
        assert all(name in LANDMARK_DESCRIPTIONS for name in REQUIRED_LANDMARKS)
        assert REQUIRED_LANDMARKS[:4] == [SELLA, NASION, A_POINT, B_POINT]

    def test_find_point(self, steiner_landmarks):
        assert find_point(steiner_landmarks, NASION) == Point(150, 80)
        assert find_point(steiner_landmarks, "Porion (Po)") is None

    def test_description(self):
        assert "sella turcica" in CephalometricLandmark(SELLA, Point(0, 0)).description
        assert CephalometricLandmark("Custom", Point(0, 0)).description is None


class TestSerialization:

    def test_analysis_to_dict(self, steiner_landmarks):
        data = analysis_to_dict(analyze(steiner_landmarks))
        anb = data[STEINER_ANALYSIS][2]

        assert anb["name"] == "ANB"
        assert anb["unit"] == "degrees"
        assert anb["interpretation"] == "Skeletal Class II"
