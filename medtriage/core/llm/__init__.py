"""
Inference Providers

Gemini-backed and simulated implementations of the InferenceProvider
interface, plus the settings-driven factory that picks one.
"""
from .base import InferenceProvider
from .gemini_client import GeminiConfig, GeminiInferenceProvider, GeminiModel
from .simulated import SimulatedInferenceProvider
from .factory import create_inference_provider

__all__ = [
    "InferenceProvider",
    "GeminiConfig",
    "GeminiInferenceProvider",
    "GeminiModel",
    "SimulatedInferenceProvider",
    "create_inference_provider",
]
