"""
Per-session bookkeeping.

Sessions share nothing; each id maps to its own FilterSession.
"""
from typing import Callable, Dict

from .controller import FilterSession


class FilterSessionManager:
    """
    Manages FilterSession instances per session ID.
    """

    def __init__(self, session_factory: Callable[[str], FilterSession]):
        """
        :param session_factory: Builds a new session for a given id
        """
        self._session_factory = session_factory
        self._sessions: Dict[str, FilterSession] = {}

    def get_session(self, session_id: str) -> FilterSession:
        """
        Get or create the session for an id.

        :param session_id: Session identifier
        :return: FilterSession instance
        """
        if session_id not in self._sessions:
            self._sessions[session_id] = self._session_factory(session_id)
        return self._sessions[session_id]

    def has_session(self, session_id: str) -> bool:
        return session_id in self._sessions

    def clear_session(self, session_id: str) -> None:
        """Forget a session."""
        if session_id in self._sessions:
            del self._sessions[session_id]

    def clear_all(self) -> None:
        """Forget all sessions."""
        self._sessions.clear()
