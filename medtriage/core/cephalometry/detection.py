"""
AI landmark detection.

The provider answers in normalized [0, 1] coordinates; landmarks are scaled
to image pixels here before anyone stores them. A detection always yields a
complete replacement set, never a merge with earlier placements.
"""
from __future__ import annotations

from typing import List, Optional

from medtriage.core.clinical.base import ImagePayload
from medtriage.core.clinical.payloads import LandmarkPayload
from medtriage.core.llm.base import InferenceProvider
from medtriage.utils import CaseValidationError, get_logger
from .geometry import Point
from .landmarks import REQUIRED_LANDMARKS, CephalometricLandmark

logger = get_logger(__name__)


def denormalize_landmarks(payload: LandmarkPayload, width: float, height: float) -> List[CephalometricLandmark]:
    """Scale normalized landmark coordinates to an image of ``width`` x ``height`` pixels."""
    if width <= 0 or height <= 0:
        raise CaseValidationError(
            f"Image dimensions must be positive, got {width}x{height}",
            field_name="image_size",
        )
    return [
        CephalometricLandmark(
            name=lm.name,
            point=Point(lm.point.x, lm.point.y).scaled(width, height),
        )
        for lm in payload.landmarks
    ]


async def detect_landmarks(
    provider: InferenceProvider,
    image: ImagePayload,
    width: float,
    height: float,
    landmark_names: Optional[List[str]] = None,
) -> List[CephalometricLandmark]:
    """Run AI detection and return the landmark set in pixel coordinates."""
    names = list(landmark_names or REQUIRED_LANDMARKS)
    payload = await provider.detect_landmarks(image, names)
    landmarks = denormalize_landmarks(payload, width, height)

    missing = set(names) - {lm.name for lm in landmarks}
    if missing:
        logger.warning(f"Landmark detection missed {len(missing)} landmark(s): {sorted(missing)}")
    logger.info(f"Detected {len(landmarks)} landmark(s) on {image.name}")
    return landmarks
