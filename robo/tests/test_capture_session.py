"""
Tests for CaptureSessionCoordinator

Covers the session lifecycle, stop handshake, teardown and exactly-once
completion with the latest valid heading.
"""

import pytest
from unittest.mock import Mock


@pytest.fixture
def callbacks():
    return Mock(on_complete=Mock(), on_error=Mock())


@pytest.fixture
def coordinator(backend, compass, callbacks):
    from robo.capture.session import build_capture_session

    return build_capture_session(
        backend=backend,
        on_complete=callbacks.on_complete,
        on_error=callbacks.on_error,
        heading_provider=compass,
    )


class TestStart:
    def test_start_runs_session_and_heading(self, coordinator, backend, compass):
        from robo.capture.session import SessionState

        coordinator.start()

        assert backend.run_calls == 1
        assert compass.start_calls == 1
        assert coordinator.state is SessionState.RUNNING

    def test_listeners_attached_at_construction(self, coordinator, backend):
        assert backend.session_listener is coordinator.session_listener
        assert backend.review_listener is coordinator.review_listener

    def test_start_without_heading_support(self, backend, compass, callbacks):
        from robo.capture.session import build_capture_session

        compass.available = False
        coordinator = build_capture_session(
            backend, callbacks.on_complete, callbacks.on_error, heading_provider=compass
        )
        coordinator.start()

        assert backend.run_calls == 1
        assert compass.start_calls == 0

    def test_heading_disabled_by_config(self, backend, compass, callbacks):
        from robo.common.config import CaptureConfig
        from robo.capture.session import build_capture_session

        coordinator = build_capture_session(
            backend,
            callbacks.on_complete,
            callbacks.on_error,
            heading_provider=compass,
            config=CaptureConfig(heading_enabled=False),
        )
        coordinator.start()

        assert compass.start_calls == 0

    def test_start_twice_raises(self, coordinator):
        from robo.common.errors import CaptureStateError

        coordinator.start()
        with pytest.raises(CaptureStateError):
            coordinator.start()

    def test_start_unsupported_device(self, backend, compass, callbacks):
        from robo.common.errors import CaptureUnsupportedError
        from robo.capture.session import build_capture_session

        backend.supported = False
        coordinator = build_capture_session(backend, callbacks.on_complete, callbacks.on_error, compass)

        with pytest.raises(CaptureUnsupportedError):
            coordinator.start()
        assert backend.run_calls == 0

    def test_run_config_passed_through(self, backend, callbacks):
        from robo.capture.capabilities import CaptureCapabilities
        from robo.capture.session import CaptureSessionCoordinator

        coordinator = CaptureSessionCoordinator(
            backend=backend,
            capabilities=CaptureCapabilities(capture_supported=True),
            on_complete=callbacks.on_complete,
            on_error=callbacks.on_error,
            run_config={"mode": "room"},
        )
        coordinator.start()

        assert backend.run_config == {"mode": "room"}


class TestStopHandshake:
    def test_request_stop_sets_pending(self, coordinator, backend):
        from robo.capture.session import SessionState

        coordinator.start()
        coordinator.request_stop()

        assert coordinator.stop_pending is True
        assert coordinator.state is SessionState.STOP_REQUESTED
        assert backend.stop_calls == 0

    def test_double_request_equals_single(self, coordinator, backend):
        from robo.capture.session import SessionState

        coordinator.start()
        coordinator.request_stop()
        coordinator.request_stop()

        assert coordinator.poll() is True
        assert coordinator.poll() is False
        assert backend.stop_calls == 1
        assert coordinator.state is SessionState.STOPPED

    def test_poll_clears_pending(self, coordinator):
        coordinator.start()
        coordinator.request_stop()
        coordinator.poll()

        assert coordinator.stop_pending is False

    def test_poll_without_request_is_noop(self, coordinator, backend):
        coordinator.start()

        assert coordinator.poll() is False
        assert backend.stop_calls == 0

    def test_request_stop_before_start_ignored(self, coordinator):
        from robo.capture.session import SessionState

        coordinator.request_stop()

        assert coordinator.stop_pending is False
        assert coordinator.state is SessionState.IDLE

    def test_stop_does_not_complete(self, coordinator, callbacks):
        coordinator.start()
        coordinator.request_stop()
        coordinator.poll()

        callbacks.on_complete.assert_not_called()
        callbacks.on_error.assert_not_called()


class TestCompletion:
    def test_success_reports_artifact_and_latest_heading(self, coordinator, backend, compass, callbacks):
        coordinator.start()
        compass.emit(12.0, accuracy=4.0)
        compass.emit(270.25, accuracy=2.0)
        compass.emit(300.0, accuracy=-1.0)
        coordinator.request_stop()
        coordinator.poll()
        backend.finish(payload={"walls": 4})

        callbacks.on_complete.assert_called_once()
        artifact, heading = callbacks.on_complete.call_args[0]
        assert artifact.payload == {"walls": 4}
        assert heading == 270.25
        assert artifact.heading.degrees == 270.25
        callbacks.on_error.assert_not_called()

    def test_success_without_valid_heading(self, coordinator, backend, compass, callbacks):
        coordinator.start()
        compass.emit(300.0, accuracy=-1.0)
        backend.finish(payload="room")

        artifact, heading = callbacks.on_complete.call_args[0]
        assert heading is None
        assert artifact.heading is None

    def test_session_ended_is_not_forwarded(self, coordinator, backend, callbacks):
        coordinator.start()
        backend.end_session(RuntimeError("tracking lost"))
        backend.end_session()

        callbacks.on_complete.assert_not_called()
        callbacks.on_error.assert_not_called()

    def test_failure_reports_error_once(self, coordinator, backend, callbacks):
        from robo.common.errors import HardwareSessionError
        from robo.capture.session import SessionState

        coordinator.start()
        cause = RuntimeError("world tracking failed")
        backend.finish(error=cause)

        callbacks.on_error.assert_called_once()
        error = callbacks.on_error.call_args[0][0]
        assert isinstance(error, HardwareSessionError)
        assert error.cause is cause
        callbacks.on_complete.assert_not_called()
        assert coordinator.state is SessionState.STOPPED

    def test_missing_payload_is_failure(self, coordinator, backend, callbacks):
        coordinator.start()
        backend.finish()

        callbacks.on_error.assert_called_once()
        callbacks.on_complete.assert_not_called()

    def test_completion_fires_once(self, coordinator, backend, callbacks):
        coordinator.start()
        backend.finish(payload="first")
        backend.finish(payload="second")
        backend.finish(error=RuntimeError("late"))

        assert callbacks.on_complete.call_count == 1
        callbacks.on_error.assert_not_called()

    def test_review_prompt_is_accepted(self, coordinator):
        assert coordinator.review_listener.should_present("data") is True
        assert coordinator.review_listener.should_present("data", RuntimeError("x")) is True

    def test_result_before_start_dropped(self, coordinator, backend, callbacks):
        backend.finish(payload="room")

        callbacks.on_complete.assert_not_called()
        assert coordinator.is_completed is False


class TestDismantle:
    @pytest.mark.parametrize("setup", ["idle", "running", "stop_requested", "stopped", "failed"])
    def test_dismantle_stops_everything_in_any_state(self, coordinator, backend, compass, setup):
        from robo.capture.session import SessionState

        if setup != "idle":
            coordinator.start()
        if setup in ("stop_requested", "stopped"):
            coordinator.request_stop()
        if setup == "stopped":
            coordinator.poll()
        if setup == "failed":
            backend.finish(error=RuntimeError("boom"))

        stops_before = backend.stop_calls
        coordinator.dismantle()

        assert backend.stop_calls == stops_before + 1
        assert compass.stop_calls == 1
        assert coordinator.state is SessionState.TORN_DOWN
        assert coordinator.stop_pending is False

    def test_dismantle_is_idempotent(self, coordinator, backend, compass, callbacks):
        coordinator.start()
        backend.finish(payload="room")
        coordinator.dismantle()
        coordinator.dismantle()

        assert backend.stop_calls == 1
        assert compass.stop_calls == 1
        assert callbacks.on_complete.call_count == 1
        callbacks.on_error.assert_not_called()

    def test_events_after_teardown_dropped(self, coordinator, backend, callbacks):
        coordinator.start()
        coordinator.dismantle()
        backend.finish(payload="room")
        backend.finish(error=RuntimeError("late"))

        callbacks.on_complete.assert_not_called()
        callbacks.on_error.assert_not_called()

    def test_no_operations_after_teardown(self, coordinator, backend):
        from robo.common.errors import CaptureStateError

        coordinator.dismantle()
        coordinator.request_stop()

        assert coordinator.stop_pending is False
        assert coordinator.poll() is False
        with pytest.raises(CaptureStateError):
            coordinator.start()
        assert backend.run_calls == 0

    def test_heading_stopped_even_if_backend_stop_fails(self, coordinator, backend, compass):
        backend.stop = Mock(side_effect=RuntimeError("session gone"))
        coordinator.start()

        with pytest.raises(RuntimeError):
            coordinator.dismantle()

        assert compass.stop_calls == 1
