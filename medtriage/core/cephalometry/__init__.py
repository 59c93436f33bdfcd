"""
Cephalometric Analysis Engine

Landmarks in, interpreted measurements out.

Usage:
    from medtriage.core.cephalometry import analyze, CephalometricLandmark, Point

    analysis = analyze(landmarks)     # {"Steiner Analysis": [SNA, SNB, ANB]}
"""
from .geometry import Point, angle, distance
from .landmarks import (
    LANDMARK_DESCRIPTIONS,
    REQUIRED_LANDMARKS,
    CephalometricLandmark,
)
from .analyzer import (
    STEINER_ANALYSIS,
    CephalometricAnalysis,
    CephalometricMeasurement,
    Interpretation,
    MeasurementUnit,
    analysis_to_dict,
    analyze,
)
from .detection import denormalize_landmarks, detect_landmarks

__all__ = [
    "Point",
    "angle",
    "distance",
    "LANDMARK_DESCRIPTIONS",
    "REQUIRED_LANDMARKS",
    "CephalometricLandmark",
    "STEINER_ANALYSIS",
    "CephalometricAnalysis",
    "CephalometricMeasurement",
    "Interpretation",
    "MeasurementUnit",
    "analysis_to_dict",
    "analyze",
    "denormalize_landmarks",
    "detect_landmarks",
]
