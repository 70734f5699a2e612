"""
Session state and its transitions.

Every transition is a pure function from (state, event data) to a new
state. An event that is not legal in the current state returns the state
object unchanged, so callers can detect a no-op with an identity check.

request_id is a monotonically increasing token. It is bumped whenever a
request starts or interest in an outstanding request is dropped, and a
completion is only applied if it carries the current token.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple


class SessionStatus(str, Enum):
    IDLE = "idle"
    READY = "ready"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionState:
    image: Optional[str] = None
    filter: Optional[str] = None
    pending: bool = False
    error: Optional[str] = None
    request_id: int = 0

    @property
    def status(self) -> SessionStatus:
        if self.image is None:
            return SessionStatus.IDLE
        if self.pending:
            return SessionStatus.REQUESTING
        if self.filter is not None:
            return SessionStatus.SUCCEEDED
        if self.error is not None:
            return SessionStatus.FAILED
        return SessionStatus.READY

    def can_request(self) -> bool:
        """True when requestFilter would start a new request."""
        return self.image is not None and not self.pending


def image_loaded(state: SessionState, image: str) -> SessionState:
    """
    A new image replaces the current one.

    Any result, error or outstanding request belongs to the previous image
    and is dropped.
    """
    return SessionState(
        image=image,
        request_id=state.request_id + 1 if state.pending else state.request_id,
    )


def ingestion_failed(state: SessionState, message: str) -> SessionState:
    """
    A failed upload leaves the image untouched and reports the error.

    Like a successful upload it supersedes the previous outcome.
    """
    return replace(
        state,
        filter=None,
        pending=False,
        error=message,
        request_id=state.request_id + 1 if state.pending else state.request_id,
    )


def request_filter(state: SessionState) -> Tuple[SessionState, Optional[int]]:
    """
    Start a request.

    :return: (new_state, token). token is None when the event is a no-op
             (no image loaded, or a request already outstanding).
    """
    if not state.can_request():
        return state, None

    token = state.request_id + 1
    return replace(state, filter=None, error=None, pending=True, request_id=token), token


def request_succeeded(state: SessionState, token: int, css_filter: str) -> SessionState:
    if not _is_current(state, token):
        return state
    return replace(state, filter=css_filter, error=None, pending=False)


def request_failed(state: SessionState, token: int, message: str) -> SessionState:
    if not _is_current(state, token):
        return state
    return replace(state, filter=None, error=message, pending=False)


def reset(state: SessionState) -> SessionState:
    """Back to an empty session. The token moves on so late results are ignored."""
    return SessionState(request_id=state.request_id + 1)


def _is_current(state: SessionState, token: int) -> bool:
    return state.pending and token == state.request_id
