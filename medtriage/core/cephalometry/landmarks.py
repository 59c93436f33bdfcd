"""
Cephalometric Landmark Vocabulary

The fixed set of named anatomical points placed on a lateral skull
radiograph, with short educational definitions.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from .geometry import Point

SELLA = "Sella (S)"
NASION = "Nasion (N)"
A_POINT = "A-point (A)"
B_POINT = "B-point (B)"
POGONION = "Pogonion (Pog)"
MENTON = "Menton (Me)"
GONION = "Gonion (Go)"
GNATHION = "Gnathion (Gn)"
PORION = "Porion (Po)"
ORBITALE = "Orbitale (Or)"

LANDMARK_DESCRIPTIONS: Dict[str, str] = {
    SELLA: "The geometric center of the sella turcica (pituitary fossa), a key cranial base landmark.",
    NASION: "The most anterior point on the frontonasal suture in the median plane. "
            "It represents the junction of the frontal and nasal bones.",
    A_POINT: "The deepest point on the anterior contour of the maxilla between the anterior "
             "nasal spine and the crest of the maxillary alveolar process.",
    B_POINT: "The deepest point on the anterior contour of the mandible between the chin "
             "(pogonion) and the alveolar process.",
    POGONION: "The most anterior point on the contour of the chin (mandibular symphysis).",
    MENTON: "The most inferior point on the mandibular symphysis (the chin).",
    GONION: "The most posterior and inferior point on the angle of the mandible.",
    GNATHION: "A point on the chin determined by the intersection of the facial plane "
              "and the mandibular plane.",
    PORION: "The most superior point of the external auditory meatus (the ear canal opening).",
    ORBITALE: "The lowest point on the inferior margin of the orbit (the eye socket).",
}

# Detection order
REQUIRED_LANDMARKS: List[str] = list(LANDMARK_DESCRIPTIONS)


@dataclass(frozen=True)
class CephalometricLandmark:
    """A named anatomical point in image pixel coordinates."""
    name: str
    point: Point

    @property
    def description(self) -> Optional[str]:
        return LANDMARK_DESCRIPTIONS.get(self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "point": self.point.to_dict()}


def find_point(landmarks: Iterable[CephalometricLandmark], name: str) -> Optional[Point]:
    """Return the point of the first landmark named exactly ``name``."""
    for landmark in landmarks:
        if landmark.name == name:
            return landmark.point
    return None
