"""
Triage Pipeline — Configuration

Centralised settings for inference mode, credentials and logging.
Loads secrets from the project-level .env file.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")

INFERENCE_GEMINI = "gemini"
INFERENCE_SIMULATED = "simulated"

ENV_DEVELOPMENT = "development"
ENV_PRODUCTION = "production"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw not in (None, "") else default


@dataclass
class Settings:
    """Runtime settings, read from the environment at construction."""
    environment: str = field(default_factory=lambda: os.getenv("MEDTRIAGE_ENV", ENV_DEVELOPMENT).lower())
    inference_mode: str = field(default_factory=lambda: os.getenv("INFERENCE_MODE", INFERENCE_SIMULATED).lower())

    gemini_api_key: Optional[str] = field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    )
    gemini_model: str = field(default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.5-flash"))
    request_timeout_seconds: float = field(default_factory=lambda: _env_float("REQUEST_TIMEOUT_SECONDS", 60.0))

    simulated_latency_seconds: float = field(default_factory=lambda: _env_float("SIMULATED_LATENCY_SECONDS", 0.0))
    simulated_seed: Optional[int] = None

    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE") or None)

    @property
    def is_production(self) -> bool:
        return self.environment == ENV_PRODUCTION


settings = Settings()
