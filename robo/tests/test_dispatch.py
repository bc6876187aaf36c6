"""
Tests for SerialDispatcher and loop-bound capture sessions

Hardware callbacks delivered from other threads must run on the loop, in order.
"""

import asyncio
import threading

import pytest
from unittest.mock import Mock


class TestSerialDispatcher:
    def test_inline_dispatch_runs_immediately(self):
        from robo.capture.dispatch import SerialDispatcher

        calls = []
        dispatcher = SerialDispatcher()
        dispatcher.dispatch(calls.append, 1)

        assert dispatcher.is_inline is True
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_loop_dispatch_preserves_order(self):
        from robo.capture.dispatch import SerialDispatcher

        calls = []
        dispatcher = SerialDispatcher.for_running_loop()
        for i in range(5):
            dispatcher.dispatch(calls.append, i)

        assert calls == []
        await asyncio.sleep(0)
        assert calls == [0, 1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_dispatch_from_other_thread_runs_on_loop_thread(self):
        from robo.capture.dispatch import SerialDispatcher

        loop_thread = threading.get_ident()
        seen = []
        done = asyncio.Event()

        def record(value):
            seen.append((value, threading.get_ident()))
            if value == "last":
                done.set()

        dispatcher = SerialDispatcher.for_running_loop()

        def hardware_thread():
            dispatcher.dispatch(record, "first")
            dispatcher.dispatch(record, "last")

        worker = threading.Thread(target=hardware_thread)
        worker.start()
        worker.join()
        await asyncio.wait_for(done.wait(), timeout=1.0)

        assert [value for value, _ in seen] == ["first", "last"]
        assert all(thread_id == loop_thread for _, thread_id in seen)

    def test_closed_loop_drops_callback(self, caplog):
        import logging
        from robo.capture.dispatch import SerialDispatcher

        loop = asyncio.new_event_loop()
        loop.close()
        calls = []

        with caplog.at_level(logging.WARNING, logger="robo.capture.dispatch"):
            SerialDispatcher(loop).dispatch(calls.append, 1)

        assert calls == []
        assert "dropping" in caplog.text


class TestLoopBoundSession:
    @pytest.mark.asyncio
    async def test_heading_and_result_are_ordered(self, backend, compass):
        from robo.capture.dispatch import SerialDispatcher
        from robo.capture.session import build_capture_session

        on_complete = Mock()
        on_error = Mock()
        coordinator = build_capture_session(
            backend,
            on_complete,
            on_error,
            heading_provider=compass,
            dispatcher=SerialDispatcher.for_running_loop(),
        )
        coordinator.start()

        def hardware_thread():
            compass.emit(90.0, accuracy=1.0)
            compass.emit(135.0, accuracy=1.0)
            backend.finish(payload="room")

        worker = threading.Thread(target=hardware_thread)
        worker.start()
        worker.join()

        for _ in range(10):
            if on_complete.called:
                break
            await asyncio.sleep(0)

        on_complete.assert_called_once()
        assert on_complete.call_args[0][1] == 135.0
        on_error.assert_not_called()
