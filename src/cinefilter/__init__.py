"""
Cinematic filter studio: upload a photo, ask an LLM for a CSS filter,
preview the result.
"""
from .app import FilterStudioApp
from .config import FilterStudioConfig
from .exceptions import (
    FilterStudioError,
    ConfigurationError,
    AppNotInitializedError,
    UnreadableFileError,
    FilterGenerationError,
    ServiceUnavailableError,
    EmptyResponseError,
    MalformedResponseError,
    InvalidFilterValueError,
)
from .filter_client import FilterServiceClient
from .session import FilterSession, SessionStatus, SessionView

__all__ = [
    "FilterStudioApp",
    "FilterStudioConfig",
    "FilterStudioError",
    "ConfigurationError",
    "AppNotInitializedError",
    "UnreadableFileError",
    "FilterGenerationError",
    "ServiceUnavailableError",
    "EmptyResponseError",
    "MalformedResponseError",
    "InvalidFilterValueError",
    "FilterServiceClient",
    "FilterSession",
    "SessionStatus",
    "SessionView",
]
