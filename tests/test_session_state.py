"""
Tests for the pure session transitions.
"""
import itertools
import pytest

from cinefilter.session import state as transitions
from cinefilter.session.state import SessionState, SessionStatus


IMAGE = "data:image/png;base64,AAAA"


@pytest.fixture
def ready():
    return transitions.image_loaded(SessionState(), IMAGE)


@pytest.fixture
def requesting(ready):
    new_state, token = transitions.request_filter(ready)
    return new_state, token


class TestStatus:

    def test_initial_state_is_idle(self):
        state = SessionState()
        assert state.status == SessionStatus.IDLE
        assert state.image is None and state.filter is None and state.error is None
        assert state.pending is False

    def test_image_loaded_is_ready(self, ready):
        assert ready.status == SessionStatus.READY
        assert ready.image == IMAGE
        assert ready.filter is None and ready.error is None

    def test_requesting(self, requesting):
        state, token = requesting
        assert state.status == SessionStatus.REQUESTING
        assert state.pending is True
        assert token == state.request_id

    def test_succeeded(self, requesting):
        state, token = requesting
        done = transitions.request_succeeded(state, token, "saturate(1.2) contrast(1.1)")
        assert done.status == SessionStatus.SUCCEEDED
        assert done.filter == "saturate(1.2) contrast(1.1)"
        assert done.pending is False

    def test_failed(self, requesting):
        state, token = requesting
        done = transitions.request_failed(state, token, "boom")
        assert done.status == SessionStatus.FAILED
        assert done.error == "boom"
        assert done.filter is None
        assert done.pending is False


class TestRequestFilter:

    def test_noop_in_idle(self):
        idle = SessionState()
        new_state, token = transitions.request_filter(idle)
        assert token is None
        assert new_state is idle

    def test_noop_while_pending(self, requesting):
        state, _ = requesting
        new_state, token = transitions.request_filter(state)
        assert token is None
        assert new_state is state

    def test_clears_previous_outcome(self, requesting):
        state, token = requesting
        failed = transitions.request_failed(state, token, "boom")
        retried, new_token = transitions.request_filter(failed)

        assert new_token == token + 1
        assert retried.error is None
        assert retried.filter is None
        assert retried.pending is True

    def test_new_request_from_succeeded(self, requesting):
        state, token = requesting
        done = transitions.request_succeeded(state, token, "sepia(0.1)")
        again, _ = transitions.request_filter(done)
        assert again.filter is None
        assert again.status == SessionStatus.REQUESTING


class TestStaleCompletions:

    def test_result_after_reset_ignored(self, requesting):
        state, token = requesting
        cleared = transitions.reset(state)
        late = transitions.request_succeeded(cleared, token, "saturate(1.2)")
        assert late is cleared
        assert late.status == SessionStatus.IDLE

    def test_failure_after_reset_ignored(self, requesting):
        state, token = requesting
        cleared = transitions.reset(state)
        assert transitions.request_failed(cleared, token, "timeout") is cleared

    def test_result_after_reload_and_new_request_ignored(self, requesting):
        state, old_token = requesting
        reloaded = transitions.image_loaded(transitions.reset(state), IMAGE)
        newer, new_token = transitions.request_filter(reloaded)

        assert new_token != old_token
        assert transitions.request_succeeded(newer, old_token, "stale") is newer

    def test_result_after_new_image_ignored(self, requesting):
        state, token = requesting
        replaced = transitions.image_loaded(state, "data:image/png;base64,BBBB")
        assert replaced.pending is False
        assert transitions.request_succeeded(replaced, token, "stale") is replaced

    def test_completion_applies_once(self, requesting):
        state, token = requesting
        done = transitions.request_succeeded(state, token, "contrast(1.1)")
        assert transitions.request_failed(done, token, "late") is done


class TestReset:

    @pytest.mark.parametrize("events", [
        (),
        ("load",),
        ("load", "request"),
        ("load", "request", "succeed"),
        ("load", "request", "fail"),
        ("ingest_fail",),
    ])
    def test_reset_from_any_state(self, events):
        state = _run(events)
        cleared = transitions.reset(state)
        assert cleared.image is None
        assert cleared.filter is None
        assert cleared.error is None
        assert cleared.pending is False
        assert cleared.status == SessionStatus.IDLE
        assert cleared.request_id > state.request_id


class TestIngestionFailure:

    def test_keeps_image_and_reports_error(self, ready):
        failed = transitions.ingestion_failed(ready, "File is not a valid image")
        assert failed.image == IMAGE
        assert failed.error == "File is not a valid image"

    def test_idle_stays_idle(self):
        failed = transitions.ingestion_failed(SessionState(), "File is empty")
        assert failed.status == SessionStatus.IDLE
        assert failed.error == "File is empty"

    def test_later_upload_clears_error(self):
        failed = transitions.ingestion_failed(SessionState(), "File is empty")
        assert transitions.image_loaded(failed, IMAGE).error is None


EVENTS = ("load", "request", "succeed", "fail", "reset", "ingest_fail")


def _run(events):
    state = SessionState()
    token = None
    for event in events:
        state, token = _step(state, token, event)
    return state


def _step(state, token, event):
    if event == "load":
        return transitions.image_loaded(state, IMAGE), token
    if event == "request":
        new_state, new_token = transitions.request_filter(state)
        return new_state, new_token if new_token is not None else token
    if event == "succeed":
        return (transitions.request_succeeded(state, token, "saturate(1.2)") if token else state), token
    if event == "fail":
        return (transitions.request_failed(state, token, "boom") if token else state), token
    if event == "reset":
        return transitions.reset(state), token
    return transitions.ingestion_failed(state, "unreadable"), token


def test_invariants_hold_for_all_short_event_sequences():
    for events in itertools.product(EVENTS, repeat=4):
        state = SessionState()
        token = None
        last_id = state.request_id
        for event in events:
            state, token = _step(state, token, event)

            # filter and pending are never both set, filter and error exclusive
            assert not (state.pending and state.filter is not None), events
            assert not (state.filter is not None and state.error is not None), events
            if state.pending:
                assert state.error is None, events
                assert state.image is not None, events
            if event == "reset":
                assert state == SessionState(request_id=state.request_id), events
            assert state.request_id >= last_id, events
            last_id = state.request_id
