import logging
from typing import Any

from langchain_google_genai import ChatGoogleGenerativeAI

from .exceptions import ConfigurationError

# Optional providers
try:
    from langchain_groq import ChatGroq
except ImportError:
    ChatGroq = None

try:
    from langchain_openai import ChatOpenAI
except ImportError:
    ChatOpenAI = None

logger = logging.getLogger(__name__)

# How each provider is asked to constrain its reply to the response schema.
# All of these leave the raw JSON text on the message content.
STRUCTURED_OUTPUT_METHODS = {
    "google": "json_schema",
    "openai": "json_schema",
    "groq": "json_mode",
}


def get_llm_instance(provider: str, model: str, api_key: str, temperature: float = 0.5) -> Any:
    """
    Factory to return a ready-to-use chat model for the given provider.

    :param provider: 'google', 'openai' or 'groq'
    :param model: Model name
    :param api_key: Credential for the provider (injected, never read here)
    :param temperature: Sampling temperature
    :return: LangChain chat model
    """
    provider = provider.lower()

    if provider == "google":
        return ChatGoogleGenerativeAI(
            model=model,
            google_api_key=api_key,
            temperature=temperature,
        )

    elif provider == "openai":
        if ChatOpenAI is None:
            raise ImportError("langchain_openai not installed. Install with: pip install cinefilter[openai]")
        return ChatOpenAI(
            model=model,
            api_key=api_key,
            temperature=temperature,
            streaming=False,
        )

    elif provider == "groq":
        if ChatGroq is None:
            raise ImportError("langchain_groq not installed. Install with: pip install cinefilter[groq]")
        return ChatGroq(
            model=model,
            api_key=api_key,
            temperature=temperature,
            streaming=False,
        )

    else:
        raise ConfigurationError(f"Unknown LLM provider: {provider}")


def structured_output_method(provider: str) -> str:
    """Return the structured-output method used for a provider."""
    method = STRUCTURED_OUTPUT_METHODS.get(provider.lower())
    if method is None:
        logger.warning(f"No structured-output method known for '{provider}', using json_mode")
        return "json_mode"
    return method
