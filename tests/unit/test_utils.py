"""
Unit Tests for Logging and Exception Utilities
"""
import logging

from medtriage.utils import (
    CaseNotFoundError,
    InvalidTransitionError,
    NormalizationError,
    get_case_logger,
)
from medtriage.utils.logging import StructuredFormatter


class TestExceptions:

    def test_to_dict(self):
        error = CaseNotFoundError("abc")
        assert error.to_dict() == {
            "error": "CASE_NOT_FOUND",
            "message": "Case 'abc' not found",
            "details": {"case_id": "abc"},
        }

    def test_transition_details(self):
        error = InvalidTransitionError("nope", case_id="c1", current_status="REVIEW_COMPLETED")
        assert error.details == {"case_id": "c1", "status": "REVIEW_COMPLETED"}

    def test_normalization_error_code(self):
        error = NormalizationError("bad payload")
        assert error.code == "NORMALIZATION_ERROR"
        assert error.details["provider"] == "normalizer"


class TestLogging:

    def test_case_logger_attaches_case_id(self):
        adapter = get_case_logger("medtriage.test", "c-42")
        msg, kwargs = adapter.process("analysis started", {"extra": {"provider": "gemini"}})

        assert msg == "analysis started"
        assert kwargs["extra"] == {"case_id": "c-42", "provider": "gemini"}

    def test_formatter_without_color(self):
        record = logging.LogRecord("medtriage.test", logging.WARNING, __file__, 1, "low disk", None, None)
        line = StructuredFormatter(use_color=False).format(record)

        assert "\033[" not in line
        assert "WARNING" in line
        assert "[medtriage.test] low disk" in line

    def test_formatter_tags_case_id(self):
        record = logging.LogRecord("medtriage.dispatch", logging.INFO, __file__, 1, "dispatching", None, None)
        record.case_id = "c-42"
        line = StructuredFormatter(use_color=False).format(record)

        assert "[medtriage.dispatch] [case c-42] dispatching" in line

    def test_case_logger_end_to_end(self, caplog):
        with caplog.at_level(logging.INFO, logger="medtriage.test"):
            get_case_logger("medtriage.test", "c-7").info("priority assigned")

        record = caplog.records[-1]
        assert record.case_id == "c-7"
        assert record.getMessage() == "priority assigned"
        assert "[case c-7]" in StructuredFormatter(use_color=False).format(record)
