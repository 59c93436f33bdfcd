"""
Utilities Package - Logging and Exception Handling
"""
from .logging import CaseLogAdapter, get_case_logger, get_logger, setup_logging
from .exceptions import (
    TriageError,
    DegenerateGeometryError,
    InferenceError,
    NormalizationError,
    UnsupportedDomainError,
    CaseNotFoundError,
    InvalidTransitionError,
    CaseValidationError,
    ConfigurationError,
)

__all__ = [
    "CaseLogAdapter",
    "get_case_logger",
    "get_logger",
    "setup_logging",
    "TriageError",
    "DegenerateGeometryError",
    "InferenceError",
    "NormalizationError",
    "UnsupportedDomainError",
    "CaseNotFoundError",
    "InvalidTransitionError",
    "CaseValidationError",
    "ConfigurationError",
]
