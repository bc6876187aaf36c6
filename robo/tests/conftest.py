"""Shared fakes for the hardware boundaries."""

import pytest

from robo.capture.base import CaptureBackend, HeadingProvider


class FakeCaptureBackend(CaptureBackend):
    """Records calls and lets tests fire backend events."""

    def __init__(self, supported: bool = True):
        self.supported = supported
        self.run_calls = 0
        self.stop_calls = 0
        self.run_config = None
        self.session_listener = None
        self.review_listener = None

    def attach(self, session_listener, review_listener):
        self.session_listener = session_listener
        self.review_listener = review_listener

    def run(self, config=None):
        self.run_calls += 1
        self.run_config = config

    def stop(self):
        self.stop_calls += 1

    def is_supported(self):
        return self.supported

    # Hardware-side helpers
    def end_session(self, error=None):
        self.session_listener.session_ended(error)

    def finish(self, payload=None, error=None):
        if self.review_listener.should_present(payload, error):
            self.session_listener.result_ready(payload, error)


class FakeCompass(HeadingProvider):
    def __init__(self, available: bool = True):
        self.available = available
        self.listener = None
        self.start_calls = 0
        self.stop_calls = 0

    def is_available(self):
        return self.available

    def start_updates(self, listener):
        self.start_calls += 1
        self.listener = listener

    def stop_updates(self):
        self.stop_calls += 1

    def emit(self, degrees, accuracy=5.0):
        self.listener.heading_updated(degrees, accuracy)


@pytest.fixture
def backend():
    return FakeCaptureBackend()


@pytest.fixture
def compass():
    return FakeCompass()
