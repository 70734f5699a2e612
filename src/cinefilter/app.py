"""
Public application facade for the filter studio.

This is the single stable entry point for the library. Configuration is
validated by an explicit initialize() step; no session can be created
before it has succeeded.
"""
import logging
from typing import Any, Optional, Tuple

from .config import FilterStudioConfig
from .config_loader import load_config_from_env
from .exceptions import AppNotInitializedError, ConfigurationError
from .filter_client import FilterServiceClient
from .ingestion import ImageIngestAdapter
from .llm_factory import get_llm_instance, structured_output_method
from .session import FilterSession, FilterSessionManager

logger = logging.getLogger(__name__)


class FilterStudioApp:
    """
    Public application facade.

    Usage:
        app = FilterStudioApp()
        app.initialize()
        session = app.create_session()
    """

    def __init__(self, config: Optional[FilterStudioConfig] = None, llm: Any = None):
        """
        :param config: Injected configuration; loaded from the environment when omitted
        :param llm: Optional pre-built chat model (dependency injection/testing)
        """
        self._config = config
        self._llm = llm
        self._client: Optional[FilterServiceClient] = None
        self._sessions: Optional[FilterSessionManager] = None

    @property
    def config(self) -> Optional[FilterStudioConfig]:
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    def initialize(self) -> None:
        """
        Validate configuration and wire the filter client.

        :raises: ConfigurationError if the credential is missing or invalid
        """
        if self._client:
            return

        if self._config is None:
            self._config = load_config_from_env()
        elif not self._config.api_key:
            raise ConfigurationError("api_key is required.")

        if self._config.verbose:
            logging.getLogger("cinefilter").setLevel(logging.DEBUG)

        if self._llm is None:
            self._llm = get_llm_instance(
                provider=self._config.llm_provider,
                model=self._config.llm_model,
                api_key=self._config.api_key,
                temperature=self._config.temperature,
            )

        self._client = FilterServiceClient(
            self._llm,
            structured_method=structured_output_method(self._config.llm_provider),
        )
        self._sessions = FilterSessionManager(self._build_session)
        logger.info(f"Filter studio initialized ({self._config.llm_provider}/{self._config.llm_model})")

    def try_initialize(self) -> Tuple[bool, Optional[str]]:
        """
        initialize() reporting the outcome instead of raising.

        :return: Tuple of (ok, error_message)
        """
        try:
            self.initialize()
        except ConfigurationError as e:
            logger.error(f"Initialization failed: {e}")
            return False, str(e)
        return True, None

    def create_session(self) -> FilterSession:
        """
        Create a fresh, unregistered session.

        :raises: AppNotInitializedError if initialize() has not succeeded
        """
        self._require_initialized()
        return self._build_session(None)

    def get_session(self, session_id: str = "default") -> FilterSession:
        """Get or create the session registered under an id."""
        self._require_initialized()
        return self._sessions.get_session(session_id)

    def end_session(self, session_id: str) -> None:
        self._require_initialized()
        self._sessions.clear_session(session_id)

    def _build_session(self, session_id: Optional[str]) -> FilterSession:
        return FilterSession(
            self._client,
            ingest_adapter=ImageIngestAdapter(max_image_bytes=self._config.max_image_bytes),
            session_id=session_id,
        )

    def _require_initialized(self) -> None:
        if not self._client:
            raise AppNotInitializedError("App not initialized. Call initialize() first.")
