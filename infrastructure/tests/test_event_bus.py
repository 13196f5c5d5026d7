from unittest.mock import MagicMock

import pytest

from infrastructure.events import DomainEvent
from infrastructure.events.memory_event_bus import InMemoryEventBus


@pytest.mark.unit
class TestInMemoryEventBus:
    def setup_method(self):
        self.bus = InMemoryEventBus()

    def test_publish_dispatches_envelope(self):
        handler = MagicMock()
        self.bus.subscribe("order.placed", handler)

        self.bus.publish("order.placed", {"order_id": "o1"})

        envelope = handler.call_args[0][0]
        assert envelope["event_type"] == "order.placed"
        assert envelope["payload"] == {"order_id": "o1"}
        assert "occurred_at" in envelope

    def test_subscribe_is_idempotent(self):
        handler = MagicMock()
        self.bus.subscribe("x", handler)
        self.bus.subscribe("x", handler)
        self.bus.publish("x", {})
        assert handler.call_count == 1

    def test_handler_errors_do_not_propagate(self):
        failing = MagicMock(side_effect=RuntimeError("boom"))
        after = MagicMock()
        self.bus.subscribe("x", failing)
        self.bus.subscribe("x", after)

        self.bus.publish("x", {"a": 1})

        after.assert_called_once()

    def test_publish_event_records_domain_event(self):
        self.bus.publish_event(DomainEvent(event_type="review.submitted", payload={"review_id": "r1"}))
        assert [e["event_type"] for e in self.bus.published] == ["review.submitted"]
        self.bus.clear_published()
        assert self.bus.published == []
