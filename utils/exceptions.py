"""
Unified exception hierarchy for the tutor service.

All domain exceptions inherit from TutorError and carry:
- error_code: machine-readable string (e.g. "MISSING_FIELDS")
- status_code: HTTP status code
- message: human-readable description, safe to return to clients
- context: optional structured metadata dict (logged, never returned)
"""

from typing import Optional, Dict, Any


class TutorError(Exception):
    """Base exception for all tutor domain errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.context = context or {}
        super().__init__(message)


class ValidationError(TutorError):
    """400-level validation / bad-request errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "MISSING_FIELDS",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, status_code=400, context=context)


class InvalidArgumentError(ValidationError):
    """A field is present but outside its allowed range."""

    def __init__(
        self,
        message: str,
        error_code: str = "INVALID_ARGUMENT",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, context=context)


class GenerationError(TutorError):
    """500-level generation failures: model output broke its format contract."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERATION_FAILED",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code=error_code, status_code=500, context=context)


class QuizDecodeError(GenerationError):
    """Model output could not be decoded into a three-question quiz."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code="QUIZ_DECODE_FAILED", context=context)


class UpstreamError(TutorError):
    """500-level failures talking to the model, embedding or vector services."""

    def __init__(
        self,
        service: str,
        message: str,
        error_code: str = "UPSTREAM_ERROR",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.service = service
        ctx = {"service": service}
        if context:
            ctx.update(context)
        super().__init__(message, error_code=error_code, status_code=500, context=ctx)
