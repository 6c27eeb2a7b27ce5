"""
Tests for the observability layer: EventLogger and mediator event emission.
"""

import json
from datetime import datetime

import pytest

from mediator_pattern.mediation import ConcreteColleague, ConcreteMediator, DeliveryFailure
from mediator_pattern.observability.event_logger import Event, EventLogger, EventType


# ── Helpers ──


class SilentColleague(ConcreteColleague):
    def receive(self, message):
        pass


class FailingColleague(ConcreteColleague):
    def receive(self, message):
        raise ValueError("no thanks")


class Unprintable:
    """A message whose text form cannot be produced."""

    def __str__(self):
        raise RuntimeError("not printable")


# ── Event ──


def test_event_type_values():
    assert EventType.REGISTER == "register"
    assert EventType.DELIVER == "deliver"
    assert len(list(EventType)) == 5


def test_event_to_json():
    event = Event(
        type=EventType.REGISTER,
        run_id="run-1",
        mediator_id="m1",
        colleague="A",
        payload={"position": 1},
    )
    data = json.loads(event.to_json())
    assert data["type"] == "register"
    assert data["colleague"] == "A"
    assert data["payload"] == {"position": 1}
    assert datetime.fromisoformat(data["timestamp"]) == event.timestamp


# ── EventLogger ──


def test_record_stamps_run_id():
    events = EventLogger(run_id="run-1")
    event = events.record(EventType.REGISTER, "m1", "A")
    assert event.run_id == "run-1"
    assert event.payload == {}
    assert len(events) == 1
    assert events.events_path is None


def test_record_accepts_type_value():
    events = EventLogger(run_id="run-1")
    assert events.record("deliver", "m1", "B").type is EventType.DELIVER


def test_writes_jsonl(tmp_path):
    events = EventLogger(run_id="run-1", output_dir=str(tmp_path))
    events.record(EventType.REGISTER, "m1", "A", {"position": 1})
    events.record(EventType.DELIVER, "m1", "B")

    assert events.events_path == tmp_path / "run-1" / "events.jsonl"
    lines = events.events_path.read_text().splitlines()
    assert [json.loads(line)["type"] for line in lines] == ["register", "deliver"]


def test_get_events_filters():
    events = EventLogger(run_id="run-1")
    events.record(EventType.REGISTER, "m1", "A")
    events.record(EventType.DELIVER, "m1", "B")
    events.record(EventType.DELIVER, "m2", "B")

    assert len(events.get_events()) == 3
    assert len(events.get_events(colleague="B")) == 2
    assert len(events.get_events(event_type=EventType.REGISTER)) == 1
    assert len(events.get_events(mediator_id="m2")) == 1
    assert len(events.get_events(colleague="B", mediator_id="m1")) == 1


def test_recipients_in_delivery_order():
    events = EventLogger(run_id="run-1")
    events.record(EventType.DELIVER, "m1", "C")
    events.record(EventType.REGISTER, "m1", "D")
    events.record(EventType.DELIVER, "m2", "B")
    events.record(EventType.DELIVER, "m1", "B")

    assert events.recipients() == ["C", "B", "B"]
    assert events.recipients("m1") == ["C", "B"]
    assert events.get_delivery_counts() == {"C": 1, "B": 2}


# ── Mediator integration ──


def test_mediator_logs_full_distribution():
    events = EventLogger(run_id="run-1")
    mediator = ConcreteMediator("m1", event_logger=events)
    a, b, c = SilentColleague("A"), SilentColleague("B"), SilentColleague("C")
    for colleague in (a, b, c):
        mediator.register(colleague)

    a.send(mediator, "hello")

    types = [e.type for e in events.get_events()]
    assert types == [
        EventType.REGISTER,
        EventType.REGISTER,
        EventType.REGISTER,
        EventType.DISTRIBUTE_START,
        EventType.DELIVER,
        EventType.DELIVER,
        EventType.DISTRIBUTE_END,
    ]
    start = events.get_events(event_type=EventType.DISTRIBUTE_START)[0]
    assert start.colleague == "A"
    assert start.payload == {"recipients": 2}
    assert events.recipients("m1") == ["B", "C"]
    assert all(e.run_id == "run-1" and e.mediator_id == "m1" for e in events.get_events())


def test_mediator_never_renders_message():
    events = EventLogger(run_id="run-1")
    mediator = ConcreteMediator("m1", event_logger=events)
    a, b = SilentColleague("A"), SilentColleague("B")
    mediator.register(a)
    mediator.register(b)

    a.send(mediator, Unprintable())

    assert events.recipients() == ["B"]


def test_mediator_set_mode_logs_single_register():
    events = EventLogger(run_id="run-1")
    mediator = ConcreteMediator("m1", membership="set", event_logger=events)
    a = SilentColleague("A")
    mediator.register(a)
    mediator.register(a)
    assert len(events.get_events(event_type=EventType.REGISTER)) == 1


def test_mediator_logs_error_and_no_end():
    events = EventLogger(run_id="run-1")
    mediator = ConcreteMediator("m1", event_logger=events)
    a = SilentColleague("A")
    mediator.register(a)
    mediator.register(FailingColleague("Broken"))
    mediator.register(SilentColleague("C"))

    with pytest.raises(DeliveryFailure):
        a.send(mediator, "x")

    errors = events.get_events(event_type=EventType.ERROR)
    assert len(errors) == 1
    assert errors[0].colleague == "Broken"
    assert "ValueError" in errors[0].payload["error"]
    assert events.get_events(event_type=EventType.DISTRIBUTE_END) == []
    assert events.get_delivery_counts() == {}
