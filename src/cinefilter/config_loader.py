"""
Configuration loader with validation.

The credential is read once here and injected everywhere else through
FilterStudioConfig; nothing downstream touches the environment.
"""
from dotenv import load_dotenv
from .config import FilterStudioConfig
from .config_validator import (
    PROVIDER_KEY_ENV,
    get_float_env,
    get_int_env,
    get_optional_env,
    get_required_env,
    validate_api_key,
    validate_provider,
    validate_temperature,
)


def load_config_from_env(use_dotenv: bool = True) -> FilterStudioConfig:
    """
    Load configuration from environment variables with validation.

    Usage:
        config = load_config_from_env()
        app = FilterStudioApp(config)
        app.initialize()

    :param use_dotenv: Load a local .env file first (disable in production)
    :return: Validated FilterStudioConfig instance
    :raises: ConfigurationError if the credential is missing or a value is invalid
    """
    if use_dotenv:
        load_dotenv()

    provider = validate_provider(get_optional_env("LLM_PROVIDER", default="google"))
    key_env = PROVIDER_KEY_ENV[provider]

    api_key = validate_api_key(
        get_required_env(
            key_env,
            description=f"API key for the {provider} filter-generation service",
        ),
        key_env,
    )

    return FilterStudioConfig(
        api_key=api_key,
        llm_provider=provider,
        llm_model=get_optional_env("LLM_MODEL", default=_default_model(provider)),
        temperature=validate_temperature(get_float_env("LLM_TEMPERATURE", 0.5)),
        max_image_bytes=get_int_env("MAX_IMAGE_BYTES", 10 * 1024 * 1024),
        verbose=(get_optional_env("VERBOSE", "false") or "false").lower() == "true",
    )


def create_config_for_production() -> FilterStudioConfig:
    """
    Create configuration for production deployment.

    Assumes all variables are set by the deployment platform; no .env loading.
    """
    return load_config_from_env(use_dotenv=False)


def _default_model(provider: str) -> str:
    return {
        "google": "gemini-2.5-flash",
        "openai": "gpt-4o-mini",
        "groq": "llama-3.1-8b-instant",
    }[provider]
