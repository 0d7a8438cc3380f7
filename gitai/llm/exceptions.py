"""LLM-related exception classes.

Contains all exception classes for completion-service operations:
- CompletionServiceError: Base exception for text-generation failures
- MissingAPIKeyError: Raised when API key is not set
- EmptyResponseError: Raised when the service returns no usable message
"""


class CompletionServiceError(Exception):
    """Base exception for completion-service errors."""

    pass


class MissingAPIKeyError(CompletionServiceError):
    """Raised when the required API key is not set."""

    pass


class EmptyResponseError(CompletionServiceError):
    """Raised when the response has an unexpected shape or no message."""

    pass
