"""
Unit tests for the error handler middleware.
"""

from app.domain.models.base import DomainException, ValidationError
from app.infrastructure.rendering import TaskRenderError
from app.infrastructure.web.middleware.error_handler import ErrorHandlerMiddleware


class TestFormatErrorResponse:
    """Test cases for ErrorHandlerMiddleware.format_error_response."""

    def setup_method(self):
        """Set up test fixtures."""
        self.middleware = ErrorHandlerMiddleware(app=None)

    def test_validation_error(self):
        """Test domain validation errors map to 400 with their field."""
        status_code, body = self.middleware.format_error_response(
            ValidationError("Invalid timestamp: yesterday", "timestamp")
        )

        assert status_code == 400
        assert body.message == "Invalid timestamp: yesterday"
        assert body.details == {"code": "VALIDATION_ERROR", "field": "timestamp"}

    def test_render_error(self):
        """Test other domain errors map to 500 with their code."""
        status_code, body = self.middleware.format_error_response(TaskRenderError("task.html missing"))

        assert status_code == 500
        assert body.details == {"code": "RENDER_ERROR"}

    def test_domain_exception_default_code(self):
        status_code, body = self.middleware.format_error_response(DomainException("not allowed"))

        assert status_code == 500
        assert body.details["code"] == "DomainException"

    def test_value_error(self):
        status_code, body = self.middleware.format_error_response(ValueError("bad value"))

        assert status_code == 400
        assert body.message == "bad value"

    def test_timeout(self):
        status_code, _ = self.middleware.format_error_response(TimeoutError())

        assert status_code == 408

    def test_unexpected_error(self):
        """Test unknown errors do not leak their message."""
        status_code, body = self.middleware.format_error_response(RuntimeError("secret"))

        assert status_code == 500
        assert body.message == "An unexpected error occurred"
