"""
Tests for the canvas event system.
"""

import logging

from pointlink_annotation.core.canvas import CanvasEvent, EventEmitter, EventType


class TestEventSystem:
    """Test suite for event system."""

    def test_event_subscription(self):
        """Test subscribing to events."""
        emitter = EventEmitter()
        events_received = []

        emitter.on(EventType.POINT_ADDED, events_received.append)
        emitter.emit(CanvasEvent(EventType.POINT_ADDED, {"x": 50}))

        assert len(events_received) == 1
        assert events_received[0].event_type == EventType.POINT_ADDED
        assert events_received[0].data == {"x": 50}

    def test_event_unsubscription(self):
        """Test unsubscribing from events."""
        emitter = EventEmitter()
        events_received = []

        emitter.on(EventType.POINT_ADDED, events_received.append)
        emitter.emit(CanvasEvent(EventType.POINT_ADDED))
        assert len(events_received) == 1

        emitter.off(EventType.POINT_ADDED, events_received.append)
        emitter.emit(CanvasEvent(EventType.POINT_ADDED))
        assert len(events_received) == 1

    def test_off_unknown_callback_is_tolerated(self):
        """Test unsubscribing a callback that was never registered."""
        emitter = EventEmitter()
        emitter.on(EventType.POINT_ADDED, print)

        assert not emitter.off(EventType.POINT_ADDED, len)
        assert not emitter.off(EventType.VIEW_CHANGED, print)
        assert emitter.listener_count(EventType.POINT_ADDED) == 1
        assert emitter.off(EventType.POINT_ADDED, print)
        assert emitter.listener_count(EventType.POINT_ADDED) == 0

    def test_listener_may_unsubscribe_itself(self):
        """Test a listener removing itself while called."""
        emitter = EventEmitter()
        calls = []

        def once(event):
            calls.append(event)
            emitter.off(EventType.MODE_CHANGED, once)

        emitter.on(EventType.MODE_CHANGED, once)
        emitter.emit(CanvasEvent(EventType.MODE_CHANGED))
        emitter.emit(CanvasEvent(EventType.MODE_CHANGED))

        assert len(calls) == 1

    def test_default_data_is_empty_dict(self):
        """Test default event payload."""
        assert CanvasEvent(EventType.VIEW_CHANGED).data == {}

    def test_other_event_types_not_delivered(self):
        """Test that listeners only get their event type."""
        emitter = EventEmitter()
        events_received = []
        emitter.on(EventType.POINT_ADDED, events_received.append)
        emitter.emit(CanvasEvent(EventType.POINT_DELETED))
        assert events_received == []

    def test_failing_listener_does_not_stop_others(self, caplog):
        """Test isolation of failing listeners."""
        emitter = EventEmitter()
        counter = [0]

        def broken(event):
            raise RuntimeError("boom")

        def working(event):
            counter[0] += 1

        emitter.on(EventType.MODE_CHANGED, broken)
        emitter.on(EventType.MODE_CHANGED, working)

        with caplog.at_level(logging.ERROR):
            emitter.emit(CanvasEvent(EventType.MODE_CHANGED))

        assert counter[0] == 1
        assert "mode_changed" in caplog.text

    def test_clear(self):
        """Test removing all listeners."""
        emitter = EventEmitter()
        events_received = []
        emitter.on(EventType.POINT_ADDED, events_received.append)
        emitter.clear()
        emitter.emit(CanvasEvent(EventType.POINT_ADDED))
        assert events_received == []
