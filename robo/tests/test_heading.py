"""
Tests for HeadingTracker

Only updates with non-negative accuracy count; the last valid one wins.
"""

import pytest


class TestHeadingTracker:
    @pytest.fixture
    def tracker(self, compass):
        from robo.capture.heading import HeadingTracker
        return HeadingTracker(compass)

    def test_no_sample_before_updates(self, tracker):
        assert tracker.latest is None
        assert tracker.latest_degrees is None

    def test_start_registers_listener(self, tracker, compass):
        assert tracker.start() is True
        assert compass.start_calls == 1
        assert compass.listener is tracker.listener
        assert tracker.is_running is True

    def test_start_without_compass(self, compass, caplog):
        import logging
        from robo.capture.heading import HeadingTracker

        compass.available = False
        tracker = HeadingTracker(compass)

        with caplog.at_level(logging.INFO, logger="robo.capture.heading"):
            assert tracker.start() is False

        assert compass.start_calls == 0
        assert "not available" in caplog.text

    def test_last_valid_update_wins(self, tracker, compass):
        tracker.start()
        compass.emit(10.0, accuracy=5.0)
        compass.emit(95.5, accuracy=0.0)

        assert tracker.latest_degrees == 95.5
        assert tracker.latest.accuracy == 0.0

    def test_negative_accuracy_ignored(self, tracker, compass):
        tracker.start()
        compass.emit(42.0, accuracy=3.0)
        compass.emit(180.0, accuracy=-1.0)

        assert tracker.latest_degrees == 42.0

    def test_only_invalid_updates_leave_no_sample(self, tracker, compass):
        tracker.start()
        compass.emit(180.0, accuracy=-1.0)

        assert tracker.latest is None

    def test_stop_is_unconditional(self, tracker, compass):
        tracker.stop()
        tracker.stop()

        assert compass.stop_calls == 2
        assert tracker.is_running is False
