"""
Session orchestration: state, transitions, controller and the view
exposed to the rendering layer.
"""
from .state import SessionState, SessionStatus
from .view import SessionView, IDENTITY_FILTER
from .controller import FilterSession
from .manager import FilterSessionManager

__all__ = [
    "SessionState",
    "SessionStatus",
    "SessionView",
    "IDENTITY_FILTER",
    "FilterSession",
    "FilterSessionManager",
]
