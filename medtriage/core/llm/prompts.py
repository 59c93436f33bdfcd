"""
Prompt templates for the scan-analysis calls.
"""
from typing import List

from medtriage.core.clinical.base import HealthDomain, ScanType

BREAST_SCAN_PROMPT = (
    "You are a world-class AI radiology assistant specializing in breast imaging. "
    "Analyze the provided {scan_type}, identify findings, provide a BI-RADS score, "
    "a risk score (0-100), summaries, and a recommendation."
)

SKIN_PHOTO_PROMPT = (
    "You are an expert AI dermatology assistant. Analyze the provided skin photo. "
    "Identify any lesions, assess their characteristics (asymmetry, border, color, diameter, "
    "evolution), provide a risk score (0-100) for malignancy, a clear recommendation, and "
    "summaries for clinicians and patients. The patient summary should be reassuring but clear."
)

GENERIC_SCAN_PROMPT = (
    "You are an AI clinical imaging assistant for {domain}. Analyze the provided {scan_type}, "
    "identify findings, provide a risk score (0-100), summaries for clinicians and patients, "
    "and a recommendation."
)

BREAST_IMAGE_PROMPT = (
    "You are an AI radiology assistant. Analyze this breast imaging scan (mammogram, "
    "ultrasound, or MRI). Identify all suspicious regions such as masses, calcifications, "
    "asymmetries, or architectural distortions. For each finding, provide a label, a short "
    "description, a bounding box, and a malignancy probability score (0.0 to 1.0). Finally, "
    "provide an overall BI-RADS assessment score and a clinical summary of your findings."
)

LANDMARK_PROMPT = (
    "You are a specialist in orthodontic imaging. Analyze this cephalometric X-ray and "
    "identify the precise coordinates for the following landmarks: {landmarks}. The image "
    "dimensions are normalized from 0 to 1. Provide the coordinates for each landmark."
)

JSON_INSTRUCTION = (
    "Respond with a single JSON document only, no prose or markdown, matching this JSON schema:\n"
    "{schema}"
)


def scan_prompt(domain: HealthDomain, scan_type: ScanType) -> str:
    if domain == HealthDomain.BREAST_HEALTH:
        return BREAST_SCAN_PROMPT.format(scan_type=scan_type.value)
    if domain == HealthDomain.SKIN_HEALTH:
        return SKIN_PHOTO_PROMPT
    return GENERIC_SCAN_PROMPT.format(domain=domain.value, scan_type=scan_type.value)


def landmark_prompt(landmark_names: List[str]) -> str:
    return LANDMARK_PROMPT.format(landmarks=", ".join(landmark_names))
