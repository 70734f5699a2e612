class FilterStudioError(Exception):
    """Base exception for the filter studio."""


class ConfigurationError(FilterStudioError):
    """Raised when required configuration is missing or invalid."""


class AppNotInitializedError(FilterStudioError):
    """Raised when a session is requested before initialization."""


class UnreadableFileError(FilterStudioError):
    """Raised when an uploaded file cannot be turned into an image handle."""


class FilterGenerationError(FilterStudioError):
    """Base exception for failures while generating a filter."""


class ServiceUnavailableError(FilterGenerationError):
    """Raised when the generation service call itself fails."""


class EmptyResponseError(FilterGenerationError):
    """Raised when the service returns an empty payload."""


class MalformedResponseError(FilterGenerationError):
    """Raised when the payload is not a JSON object."""


class InvalidFilterValueError(FilterGenerationError):
    """Raised when the payload lacks a usable filter string."""
