"""
Configuration validation utilities.

Every check fails fast with a ConfigurationError carrying remediation hints,
so a missing credential is reported at startup rather than on first request.
"""
import os
import warnings
from typing import Optional
from .exceptions import ConfigurationError


PROVIDER_KEY_ENV = {
    "google": "GOOGLE_API_KEY",
    "openai": "OPENAI_API_KEY",
    "groq": "GROQ_API_KEY",
}


def get_required_env(key: str, description: str = None) -> str:
    """
    Get required environment variable with validation.

    :param key: Environment variable name
    :param description: Human-readable description for error messages
    :return: Environment variable value
    :raises: ConfigurationError if not set or a placeholder
    """
    value = os.getenv(key)

    if not value or not value.strip():
        desc = description or key
        raise ConfigurationError(
            f"{key} is required but not set.\n"
            f"Please set it using one of these methods:\n"
            f"  1. Environment variable: export {key}='your-value'\n"
            f"  2. .env file: Create .env in the working directory with {key}=your-value\n\n"
            f"Description: {desc}"
        )

    if _is_placeholder(value):
        raise ConfigurationError(
            f"{key} appears to be a placeholder value.\n"
            f"Please set a real value. Current value: {_mask_secret(value)}"
        )

    return value.strip()


def get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get optional environment variable.

    :param key: Environment variable name
    :param default: Default value if not set
    :return: Environment variable value or default
    """
    value = os.getenv(key, default)

    if value and _is_placeholder(value):
        warnings.warn(
            f"{key} appears to be a placeholder. Using default.",
            UserWarning
        )
        return default

    return value


def get_float_env(key: str, default: float) -> float:
    """Read a float setting, rejecting values that do not parse."""
    raw = get_optional_env(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}.") from None


def get_int_env(key: str, default: int) -> int:
    """Read a positive integer setting."""
    raw = get_optional_env(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}.") from None
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive, got {value}.")
    return value


def validate_provider(provider: str) -> str:
    """
    Normalize and check the LLM provider name.

    :param provider: Provider name from configuration
    :return: Lower-cased provider name
    :raises: ConfigurationError if the provider is unknown
    """
    normalized = (provider or "").strip().lower()
    if normalized not in PROVIDER_KEY_ENV:
        raise ConfigurationError(
            f"Unknown LLM provider: {provider!r}. "
            f"Supported providers: {', '.join(sorted(PROVIDER_KEY_ENV))}"
        )
    return normalized


def validate_api_key(key: str, key_name: str, min_length: int = 20) -> str:
    """
    Validate API key format.

    :param key: API key to validate
    :param key_name: Name of the key (for error messages)
    :param min_length: Minimum expected length
    :return: Validated key
    :raises: ConfigurationError if invalid
    """
    if not key:
        raise ConfigurationError(f"{key_name} is required.")

    if _is_placeholder(key):
        raise ConfigurationError(
            f"{key_name} appears to be a placeholder. "
            f"Please set a real API key."
        )

    if len(key) < min_length:
        raise ConfigurationError(
            f"{key_name} appears to be invalid (too short: {len(key)} chars). "
            f"Expected at least {min_length} characters."
        )

    return key


def validate_temperature(temperature: float) -> float:
    """Sampling temperature must lie in [0, 2]."""
    if not 0.0 <= temperature <= 2.0:
        raise ConfigurationError(
            f"LLM_TEMPERATURE must be between 0 and 2, got {temperature}."
        )
    return temperature


def _is_placeholder(value: str) -> bool:
    """Check if value is a placeholder."""
    if not value:
        return False

    placeholder_patterns = [
        "your_",
        "your-",
        "placeholder",
        "xxx",
        "replace",
        "changeme",
        "todo",
    ]

    value_lower = value.lower()
    return any(pattern in value_lower for pattern in placeholder_patterns)


def _mask_secret(secret: str, show_chars: int = 4) -> str:
    """
    Mask secret for safe display in error messages.

    :param secret: Secret to mask
    :param show_chars: Number of characters to show at start/end
    :return: Masked secret
    """
    if not secret or len(secret) <= show_chars * 2:
        return "***"

    return f"{secret[:show_chars]}...{secret[-show_chars:]}"
