"""
Cephalometric Analyzer

Turns a landmark set into named batteries of interpreted measurements.

Design principles:
  - Each battery is computed by one pure function:
    (landmarks) -> Optional[List[CephalometricMeasurement]]
  - A battery whose landmarks are missing, or whose geometry is degenerate,
    is left out of the output entirely rather than emitted with nulls.
  - Thresholds are module-level constants so they can be reviewed without
    hunting through logic.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional

from medtriage.utils import DegenerateGeometryError, get_logger
from .geometry import angle
from .landmarks import A_POINT, B_POINT, NASION, SELLA, CephalometricLandmark, find_point

logger = get_logger(__name__)

STEINER_ANALYSIS = "Steiner Analysis"

# ── Steiner thresholds (degrees) ─────────────────────────────────────────────
SNA_PROTRUSIVE = 84.0   # > 84  maxilla forward
SNA_RETRUSIVE = 80.0    # < 80  maxilla back
SNB_PROTRUSIVE = 82.0
SNB_RETRUSIVE = 78.0
ANB_CLASS_II = 4.0      # > 4
ANB_CLASS_III = 0.0     # < 0


class MeasurementUnit(str, Enum):
    DEGREES = "degrees"
    MILLIMETERS = "mm"


class Interpretation(str, Enum):
    """Categorical reading of a measurement against its normative range."""
    NORMAL = "Normal"
    PROTRUSIVE = "Protrusive"
    RETRUSIVE = "Retrusive"
    HIGH_ANGLE = "High Angle"
    LOW_ANGLE = "Low Angle"
    SKELETAL_CLASS_II = "Skeletal Class II"
    SKELETAL_CLASS_III = "Skeletal Class III"


@dataclass(frozen=True)
class CephalometricMeasurement:
    """One named, interpreted measurement."""
    name: str
    value: float
    unit: MeasurementUnit
    normal_range: Optional[str] = None
    interpretation: Optional[Interpretation] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "unit": self.unit.value,
            "normal_range": self.normal_range,
            "interpretation": self.interpretation.value if self.interpretation else None,
        }


CephalometricAnalysis = Dict[str, List[CephalometricMeasurement]]


def _classify_jaw_position(value: float, protrusive: float, retrusive: float) -> Interpretation:
    if value > protrusive:
        return Interpretation.PROTRUSIVE
    if value < retrusive:
        return Interpretation.RETRUSIVE
    return Interpretation.NORMAL


def _classify_anb(value: float) -> Interpretation:
    if value > ANB_CLASS_II:
        return Interpretation.SKELETAL_CLASS_II
    if value < ANB_CLASS_III:
        return Interpretation.SKELETAL_CLASS_III
    return Interpretation.NORMAL


# ── Battery: Steiner (angular) ───────────────────────────────────────────────

def steiner_analysis(landmarks: List[CephalometricLandmark]) -> Optional[List[CephalometricMeasurement]]:
    """
    SNA, SNB and ANB.

    SNA and SNB are the angles at Nasion between Sella and A-point / B-point.
    ANB is the plain difference SNA - SNB, not a separately measured angle.
    """
    s = find_point(landmarks, SELLA)
    n = find_point(landmarks, NASION)
    a = find_point(landmarks, A_POINT)
    b = find_point(landmarks, B_POINT)

    if s is None or n is None or a is None or b is None:
        return None

    sna = angle(n, s, a)
    snb = angle(n, s, b)
    anb = sna - snb

    return [
        CephalometricMeasurement(
            name="SNA",
            value=sna,
            unit=MeasurementUnit.DEGREES,
            normal_range="82° ± 2°",
            interpretation=_classify_jaw_position(sna, SNA_PROTRUSIVE, SNA_RETRUSIVE),
        ),
        CephalometricMeasurement(
            name="SNB",
            value=snb,
            unit=MeasurementUnit.DEGREES,
            normal_range="80° ± 2°",
            interpretation=_classify_jaw_position(snb, SNB_PROTRUSIVE, SNB_RETRUSIVE),
        ),
        CephalometricMeasurement(
            name="ANB",
            value=anb,
            unit=MeasurementUnit.DEGREES,
            normal_range="2° ± 2°",
            interpretation=_classify_anb(anb),
        ),
    ]


# ── Registry: battery name → evaluator ──────────────────────────────────────
_BATTERIES: Dict[str, Callable[[List[CephalometricLandmark]], Optional[List[CephalometricMeasurement]]]] = {
    STEINER_ANALYSIS: steiner_analysis,
}


def analyze(landmarks: Iterable[CephalometricLandmark]) -> CephalometricAnalysis:
    """
    Compute every registered battery the landmark set supports.

    Pure and idempotent: the same landmarks always give the same analysis.
    """
    landmark_list = list(landmarks)
    analysis: CephalometricAnalysis = {}

    for name, evaluator in _BATTERIES.items():
        try:
            measurements = evaluator(landmark_list)
        except DegenerateGeometryError as exc:
            logger.warning(f"Cephalometric [{name}]: omitted, {exc.message}")
            continue

        if measurements is None:
            logger.debug(f"Cephalometric [{name}]: required landmarks missing, omitted")
            continue

        analysis[name] = measurements

    return analysis


def analysis_to_dict(analysis: CephalometricAnalysis) -> Dict[str, List[Dict[str, Any]]]:
    return {name: [m.to_dict() for m in measurements] for name, measurements in analysis.items()}
