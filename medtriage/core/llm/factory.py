"""
Provider selection. The inference strategy is chosen once, here, from
settings; nothing downstream branches on real vs simulated.
"""
from typing import Optional

from medtriage.config import INFERENCE_GEMINI, INFERENCE_SIMULATED, Settings
from medtriage.utils import ConfigurationError, get_logger
from .base import InferenceProvider
from .gemini_client import GeminiConfig, GeminiInferenceProvider
from .simulated import SimulatedInferenceProvider

logger = get_logger(__name__)


def create_inference_provider(settings: Optional[Settings] = None) -> InferenceProvider:
    """
    Build the configured inference provider.

    Raises ConfigurationError for an unknown mode, for simulated inference in
    production, and for Gemini without an API key.
    """
    settings = settings or Settings()

    if settings.inference_mode == INFERENCE_SIMULATED:
        if settings.is_production:
            raise ConfigurationError(
                "Simulated inference is development-only and cannot run in production",
                setting="INFERENCE_MODE",
            )
        logger.warning("Using SIMULATED inference provider - results are not real analyses")
        return SimulatedInferenceProvider(
            seed=settings.simulated_seed,
            latency_seconds=settings.simulated_latency_seconds,
        )

    if settings.inference_mode == INFERENCE_GEMINI:
        return GeminiInferenceProvider(GeminiConfig(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            request_timeout_seconds=int(settings.request_timeout_seconds),
        ))

    raise ConfigurationError(
        f"Unknown inference mode: {settings.inference_mode}. "
        f"Valid: {[INFERENCE_GEMINI, INFERENCE_SIMULATED]}",
        setting="INFERENCE_MODE",
    )
