"""
Session controller.

Owns one SessionState, feeds events through the pure transitions in
state.py and notifies subscribers with a fresh SessionView after every
change. All mutation happens on the event loop thread; the generation
call is the only await inside a transition sequence.
"""
import logging
import uuid
from typing import Awaitable, Callable, List, Optional, Sequence

from ..exceptions import FilterGenerationError, UnreadableFileError
from ..filter_client import FilterServiceClient
from ..ingestion import ImageFile, ImageIngestAdapter
from . import state as transitions
from .state import SessionState
from .view import SessionView

logger = logging.getLogger(__name__)

Subscriber = Callable[[SessionView], None]

FAILURE_PREFIX = "Failed to apply filter."


class FilterSession:
    """
    One upload-through-reset interaction cycle.

    Usage:
        session = FilterSession(client)
        session.subscribe(render)
        session.load_image(handle)
        await session.request_filter()
    """

    def __init__(
        self,
        client: FilterServiceClient,
        ingest_adapter: Optional[ImageIngestAdapter] = None,
        session_id: Optional[str] = None,
    ):
        self.session_id = session_id or uuid.uuid4().hex
        self._client = client
        self._ingest_adapter = ingest_adapter or ImageIngestAdapter()
        self._state = SessionState()
        self._subscribers: List[Subscriber] = []

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def view(self) -> SessionView:
        return SessionView.from_state(self._state)

    @property
    def is_busy(self) -> bool:
        """Derived flag used to disable the trigger control."""
        return self._state.pending

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback invoked with a SessionView after each change.

        :return: Function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ----------------------------
    # Events
    # ----------------------------
    def load_image(self, image: str) -> None:
        """imageLoaded event."""
        self._apply(transitions.image_loaded(self._state, image), "imageLoaded")

    async def load_image_file(self, image_file: ImageFile) -> bool:
        """
        Ingest a file and fire imageLoaded, or record the ingestion error.

        :return: True if an image was loaded
        """
        return await self._ingest(self._ingest_adapter.aingest(image_file))

    async def load_selection(self, files: Sequence[ImageFile]) -> bool:
        """Picker path: only the first file is ingested; empty selection is a no-op."""
        return await self._ingest(self._ingest_adapter.aingest_selection(files))

    async def load_drop(self, files: Sequence[ImageFile]) -> bool:
        """Drop path: same policy as the picker."""
        return await self._ingest(self._ingest_adapter.aingest_drop(files))

    async def request_filter(self) -> None:
        """
        requestFilter event.

        No-op without an image or while a request is outstanding. The result
        is applied only if no reset or newer request happened meanwhile.
        If the request is interrupted (e.g. cancelled) it is failed so that
        pending never stays set.
        """
        new_state, token = transitions.request_filter(self._state)
        if token is None:
            logger.debug(f"[{self.session_id}] requestFilter ignored in state {self._state.status.value}")
            return

        try:
            self._apply(new_state, "requestFilter")
            css_filter = await self._client.agenerate()
        except FilterGenerationError as e:
            self._complete(transitions.request_failed, token, f"{FAILURE_PREFIX} {e}", "requestFailed")
        except Exception as e:
            logger.error(f"[{self.session_id}] Unexpected error from filter client: {e}", exc_info=True)
            self._complete(
                transitions.request_failed,
                token,
                f"{FAILURE_PREFIX} An unknown error occurred. {e}".rstrip(),
                "requestFailed",
            )
        else:
            self._complete(transitions.request_succeeded, token, css_filter, "requestSucceeded")
        finally:
            if self._state.pending and self._state.request_id == token:
                logger.warning(f"[{self.session_id}] Request {token} interrupted before completing")
                self._complete(
                    transitions.request_failed,
                    token,
                    f"{FAILURE_PREFIX} The request was interrupted.",
                    "requestFailed",
                )

    def reset(self) -> None:
        """reset event."""
        self._apply(transitions.reset(self._state), "reset")

    # ----------------------------
    # Internals
    # ----------------------------
    async def _ingest(self, ingestion: Awaitable[Optional[str]]) -> bool:
        # A reset or new request during ingestion moves the token on
        token = self._state.request_id
        try:
            image = await ingestion
        except UnreadableFileError as e:
            if self._state.request_id != token:
                logger.info(f"[{self.session_id}] Discarding stale ingestion failure: {e}")
                return False
            self._apply(transitions.ingestion_failed(self._state, str(e)), "ingestionFailed")
            return False

        if image is None:
            return False
        if self._state.request_id != token:
            logger.info(f"[{self.session_id}] Discarding image ingested after the session moved on")
            return False

        self.load_image(image)
        return True

    def _complete(self, transition, token: int, value: str, event: str) -> None:
        new_state = transition(self._state, token, value)
        if new_state is self._state:
            logger.info(f"[{self.session_id}] Discarding stale {event} for request {token} "
                        f"(current request {self._state.request_id})")
            return
        self._apply(new_state, event)

    def _apply(self, new_state: SessionState, event: str) -> None:
        if new_state is self._state:
            return
        logger.debug(f"[{self.session_id}] {event}: {self._state.status.value} -> {new_state.status.value}")
        self._state = new_state
        view = SessionView.from_state(new_state)
        for callback in list(self._subscribers):
            try:
                callback(view)
            except Exception as e:
                logger.error(f"[{self.session_id}] Subscriber failed on {event}: {e}", exc_info=True)
