from dataclasses import dataclass
from typing import Optional

from .state import SessionState, SessionStatus

IDENTITY_FILTER = "none"


@dataclass(frozen=True)
class SessionView:
    """
    Read-only snapshot handed to the rendering layer.

    css_filter is applied verbatim as a style value; can_request drives the
    enabled state of the trigger control.
    """
    image: Optional[str]
    filter: Optional[str]
    pending: bool
    error: Optional[str]
    status: SessionStatus

    @classmethod
    def from_state(cls, state: SessionState) -> "SessionView":
        return cls(
            image=state.image,
            filter=state.filter,
            pending=state.pending,
            error=state.error,
            status=state.status,
        )

    @property
    def css_filter(self) -> str:
        return self.filter or IDENTITY_FILTER

    @property
    def can_request(self) -> bool:
        return self.image is not None and not self.pending

    @property
    def show_uploader(self) -> bool:
        return self.image is None
