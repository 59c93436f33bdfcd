"""
medtriage: case analysis, triage and cephalometric analysis for clinical
decision support.

    from medtriage import (
        AnalysisDispatcher, CaseLifecycleController, InMemoryCaseStore,
        create_inference_provider, analyze,
    )
"""
from medtriage.core.cases import (
    AnalysisDispatcher,
    Case,
    CaseLifecycleController,
    CaseStatus,
    ClinicianDecision,
    InMemoryCaseStore,
)
from medtriage.core.cephalometry import CephalometricLandmark, Point, analyze
from medtriage.core.clinical import (
    CanonicalAnalysisResult,
    CasePriority,
    HealthDomain,
    ImagePayload,
    ScanType,
    classify,
    normalize,
)
from medtriage.core.llm import create_inference_provider

__version__ = "1.0.0"

__all__ = [
    "AnalysisDispatcher",
    "Case",
    "CaseLifecycleController",
    "CaseStatus",
    "ClinicianDecision",
    "InMemoryCaseStore",
    "CephalometricLandmark",
    "Point",
    "analyze",
    "CanonicalAnalysisResult",
    "CasePriority",
    "HealthDomain",
    "ImagePayload",
    "ScanType",
    "classify",
    "normalize",
    "create_inference_provider",
]
