from dataclasses import dataclass


@dataclass
class FilterStudioConfig:
    # Credential
    api_key: str

    # LLM
    llm_provider: str = 'google'
    llm_model: str = 'gemini-2.5-flash'
    temperature: float = 0.5  # low: consistent filter values over creative ones

    # Ingestion
    max_image_bytes: int = 10 * 1024 * 1024

    # Diagnostics
    verbose: bool = False
