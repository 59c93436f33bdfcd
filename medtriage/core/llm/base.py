"""
Inference Provider Interface

The single asynchronous boundary of the pipeline. A provider is constructed
once by the caller and handed to the dispatcher; swapping credentials means
constructing a new provider.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from medtriage.core.clinical.base import HealthDomain, ImagePayload, ScanType
from medtriage.core.clinical.payloads import (
    BreastImagingPayload,
    GenericFindingsPayload,
    LandmarkPayload,
)


class InferenceProvider(ABC):
    """
    Analyses scan images and returns tagged, validated payloads.

    Implementations raise InferenceError on any provider failure or
    unparseable response.
    """

    name: str = "base"

    @abstractmethod
    async def analyze_scan(
        self,
        image: ImagePayload,
        domain: HealthDomain,
        scan_type: ScanType,
        include_bi_rads: bool = False,
    ) -> GenericFindingsPayload:
        """Full canonical-shaped analysis of a scan."""

    @abstractmethod
    async def analyze_breast_image(self, image: ImagePayload) -> BreastImagingPayload:
        """BI-RADS assessment with per-finding malignancy probabilities."""

    @abstractmethod
    async def detect_landmarks(self, image: ImagePayload, landmark_names: List[str]) -> LandmarkPayload:
        """Locate cephalometric landmarks in normalized [0, 1] coordinates."""
