"""
Custom Exception Hierarchy

Provides specific exception types for the triage pipeline with
structured error information.
"""
from typing import Optional, Dict, Any


class TriageError(Exception):
    """Base exception for all triage pipeline errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class DegenerateGeometryError(TriageError):
    """Two or more points coincide (or are not finite), so an angle is undefined."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="DEGENERATE_GEOMETRY",
            details=details
        )


class InferenceError(TriageError):
    """The inference provider failed or returned an unparseable payload."""

    def __init__(
        self,
        message: str,
        provider: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INFERENCE_ERROR",
            details={"provider": provider, **(details or {})}
        )
        self.provider = provider


class NormalizationError(InferenceError):
    """A payload reached the normalizer in a shape it does not recognise."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message=message, provider="normalizer", details=details)
        self.code = "NORMALIZATION_ERROR"


class UnsupportedDomainError(TriageError):
    """No analysis route is registered for a health domain."""

    def __init__(
        self,
        message: str,
        domain: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="UNSUPPORTED_DOMAIN",
            details={"health_domain": domain, **(details or {})}
        )
        self.domain = domain


class CaseNotFoundError(TriageError):
    """Lookup of an unknown case identifier."""

    def __init__(self, case_id: str):
        super().__init__(
            message=f"Case '{case_id}' not found",
            code="CASE_NOT_FOUND",
            details={"case_id": case_id}
        )
        self.case_id = case_id


class InvalidTransitionError(TriageError):
    """A lifecycle transition that the case state machine does not allow."""

    def __init__(
        self,
        message: str,
        case_id: str,
        current_status: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INVALID_TRANSITION",
            details={"case_id": case_id, "status": current_status, **(details or {})}
        )
        self.case_id = case_id
        self.current_status = current_status


class CaseValidationError(TriageError):
    """Case input that violates a data-model invariant."""

    def __init__(
        self,
        message: str,
        field_name: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field_name, **(details or {})}
        )
        self.field_name = field_name


class ConfigurationError(TriageError):
    """Settings that cannot produce a working pipeline."""

    def __init__(
        self,
        message: str,
        setting: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details={"setting": setting, **(details or {})}
        )
        self.setting = setting
