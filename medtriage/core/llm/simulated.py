"""
Simulated Inference Provider

Development-mode stand-in for a real provider. Returns canned payloads of
the same tagged shapes so the whole pipeline can run offline. Selected once
at construction, never mixed with real calls.
"""
import asyncio
import random
from typing import List, Optional

from medtriage.core.clinical.base import HealthDomain, ImagePayload, Recommendation, ScanType
from medtriage.core.clinical.payloads import (
    BreastImagingPayload,
    GenericFindingsPayload,
    LandmarkPayload,
)
from medtriage.utils import get_logger
from .base import InferenceProvider

logger = get_logger(__name__)


def _box(x_min: float, y_min: float, x_max: float, y_max: float) -> dict:
    return {"x_min": x_min, "y_min": y_min, "x_max": x_max, "y_max": y_max}


class SimulatedInferenceProvider(InferenceProvider):
    """
    Canned inference results.

    Args:
        seed: Seed for the internal RNG, for reproducible runs
        latency_seconds: Artificial delay per call
    """

    name = "simulated"

    def __init__(self, seed: Optional[int] = None, latency_seconds: float = 0.0):
        self._rng = random.Random(seed)
        self.latency_seconds = latency_seconds

    async def _delay(self) -> None:
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)

    async def analyze_scan(
        self,
        image: ImagePayload,
        domain: HealthDomain,
        scan_type: ScanType,
        include_bi_rads: bool = False,
    ) -> GenericFindingsPayload:
        await self._delay()
        seed = self._rng.random()
        logger.debug(f"Simulated scan analysis for {domain.value} ({scan_type.value})")

        if domain == HealthDomain.SKIN_HEALTH:
            suspicious = seed > 0.6
            data = {
                "risk_score": 78 if suspicious else 15,
                "recommendation": Recommendation.REFERRAL if suspicious else Recommendation.ROUTINE,
                "clinical_summary": (
                    "Asymmetric lesion with color variegation, suspicious for melanoma."
                    if suspicious else "Benign nevus, no atypical features noted."
                ),
                "patient_summary": (
                    "We noticed a spot that has some concerning features. "
                    "It's best to have a dermatologist look at it."
                    if suspicious else
                    "The spot on your skin appears to be a common mole and doesn't look concerning."
                ),
                "findings": [{
                    "id": "s1", "label": "Lesion", "description": "7mm macule",
                    "bounding_box": _box(0.4, 0.4, 0.6, 0.6), "confidence": 0.9,
                }],
            }
        elif seed < 0.3:
            data = {
                "risk_score": 5,
                "recommendation": Recommendation.ROUTINE,
                "clinical_summary": "No suspicious findings.",
                "patient_summary": "Your screening results appear normal.",
                "findings": [],
                "bi_rads": 1,
            }
        elif seed < 0.7:
            data = {
                "risk_score": 10,
                "recommendation": Recommendation.ROUTINE,
                "clinical_summary": "Benign cyst identified.",
                "patient_summary": "We found a non-cancerous cyst.",
                "findings": [{
                    "id": "f1", "label": "Benign Mass", "description": "8mm oval mass.",
                    "bounding_box": _box(0.4, 0.5, 0.5, 0.6), "confidence": 0.95,
                }],
                "bi_rads": 2,
            }
        else:
            data = {
                "risk_score": 82,
                "recommendation": Recommendation.BIOPSY,
                "clinical_summary": "Suspicious mass with irregular margins.",
                "patient_summary": "Your scan shows a concerning area that needs a closer look.",
                "findings": [{
                    "id": "f2", "label": "Suspicious Mass", "description": "15mm irregular mass.",
                    "bounding_box": _box(0.65, 0.3, 0.78, 0.42), "confidence": 0.88,
                }],
                "bi_rads": 4,
            }

        if not include_bi_rads:
            data.pop("bi_rads", None)
        return GenericFindingsPayload.model_validate(data)

    async def analyze_breast_image(self, image: ImagePayload) -> BreastImagingPayload:
        await self._delay()
        return BreastImagingPayload.model_validate({
            "bi_rads_score": 4,
            "findings": [
                {
                    "id": "m1", "label": "Mass",
                    "description": "Irregular, spiculated mass in the upper outer quadrant.",
                    "bounding_box": _box(0.25, 0.3, 0.45, 0.5),
                    "malignancy_probability": 0.85,
                },
                {
                    "id": "c1", "label": "Calcification",
                    "description": "Pleomorphic microcalcifications cluster.",
                    "bounding_box": _box(0.6, 0.65, 0.7, 0.75),
                    "malignancy_probability": 0.60,
                },
            ],
            "clinical_summary": (
                "Suspicious findings noted. An irregular mass and a cluster of pleomorphic "
                "microcalcifications are identified, warranting further investigation."
            ),
        })

    async def detect_landmarks(self, image: ImagePayload, landmark_names: List[str]) -> LandmarkPayload:
        await self._delay()
        return LandmarkPayload.model_validate({
            "landmarks": [
                {
                    "name": name,
                    "point": {
                        "x": 0.5 + (self._rng.random() - 0.5) * 0.4,
                        "y": 0.5 + (self._rng.random() - 0.5) * 0.4,
                    },
                }
                for name in landmark_names
            ]
        })
