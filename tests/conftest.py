"""
Pytest Configuration and Fixtures

Shared fixtures for triage pipeline tests.
"""
import pytest
from pathlib import Path
import sys
from typing import List

# Add package root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from medtriage.core.cases import AnalysisDispatcher, CaseLifecycleController, InMemoryCaseStore
from medtriage.core.cephalometry import CephalometricLandmark, Point
from medtriage.core.cephalometry.landmarks import A_POINT, B_POINT, NASION, SELLA
from medtriage.core.clinical.base import ImagePayload
from medtriage.core.llm import SimulatedInferenceProvider


@pytest.fixture
def sample_image() -> ImagePayload:
    """A tiny PNG data URL."""
    return ImagePayload(
        data_url="data:image/png;base64,iVBORw0KGgoAAAANSUhEUgAAAAE=",
        mime_type="image/png",
        name="scan.png",
    )


@pytest.fixture
def steiner_landmarks() -> List[CephalometricLandmark]:
    """S, N, A, B in pixel coordinates."""
    return [
        CephalometricLandmark(SELLA, Point(100, 100)),
        CephalometricLandmark(NASION, Point(150, 80)),
        CephalometricLandmark(A_POINT, Point(160, 120)),
        CephalometricLandmark(B_POINT, Point(140, 130)),
    ]


@pytest.fixture
def store() -> InMemoryCaseStore:
    return InMemoryCaseStore()


@pytest.fixture
def controller(store) -> CaseLifecycleController:
    return CaseLifecycleController(store)


@pytest.fixture
def simulated_provider() -> SimulatedInferenceProvider:
    """Seeded provider for reproducible runs."""
    return SimulatedInferenceProvider(seed=42)


@pytest.fixture
def dispatcher(simulated_provider, controller) -> AnalysisDispatcher:
    return AnalysisDispatcher(simulated_provider, controller)
