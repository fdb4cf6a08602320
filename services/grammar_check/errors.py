"""Failure kinds surfaced by the grammar check pipeline."""


class GrammarCheckError(Exception):
    """Base class for pipeline failures."""

    error_code = "grammar_check_error"

    def __init__(self, message: str, *, details: list[dict] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class ValidationError(GrammarCheckError):
    """The request failed shape or range constraints."""

    error_code = "validation_error"


class ExternalServiceError(GrammarCheckError):
    """The model provider call failed."""

    error_code = "external_service_error"


class MalformedModelResponse(GrammarCheckError):
    """The model replied but no parseable JSON object was found."""

    error_code = "malformed_model_response"


class InternalError(GrammarCheckError):
    """Any other unexpected failure."""

    error_code = "internal_error"
