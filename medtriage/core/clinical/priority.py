"""
Priority Classifier

Maps a canonical result to a triage priority. Rules are evaluated in order,
first match wins:

  1. risk > 75, or BI-RADS present and >= 4  → HIGH
  2. risk > 40                                → MEDIUM
  3. otherwise                                → LOW
"""
from __future__ import annotations

from .base import CanonicalAnalysisResult, CasePriority

HIGH_RISK_THRESHOLD = 75.0
MEDIUM_RISK_THRESHOLD = 40.0
HIGH_BI_RADS = 4


def classify(result: CanonicalAnalysisResult) -> CasePriority:
    if result.risk_score > HIGH_RISK_THRESHOLD or (
        result.bi_rads is not None and result.bi_rads >= HIGH_BI_RADS
    ):
        return CasePriority.HIGH
    if result.risk_score > MEDIUM_RISK_THRESHOLD:
        return CasePriority.MEDIUM
    return CasePriority.LOW
