"""
Event log of what mediators did during a run.

Every accepted registration, each distribution (start, per-recipient
delivery, end) and every delivery failure becomes one Event. Events are kept
in memory and, when an output directory is given, appended one JSON object
per line to <output_dir>/<run_id>/events.jsonl.
"""

import json
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional


class EventType(str, Enum):
    """Steps of a mediator's lifecycle that are recorded."""

    REGISTER = "register"
    DISTRIBUTE_START = "distribute_start"
    DELIVER = "deliver"
    DISTRIBUTE_END = "distribute_end"
    ERROR = "error"


@dataclass
class Event:
    """One mediator action. `colleague` is the registrant, sender or recipient."""

    type: EventType
    run_id: str
    mediator_id: str
    colleague: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_json(self) -> str:
        return json.dumps({
            "type": self.type.value,
            "run_id": self.run_id,
            "mediator_id": self.mediator_id,
            "colleague": self.colleague,
            "payload": self.payload,
            "timestamp": self.timestamp.isoformat(),
        }, default=str)


class EventLogger:
    """
    Collects the events of one run, shared by all mediators of that run.

    Mediators call record(); the run id is stamped by the logger so a
    mediator never needs to know which run it belongs to.
    """

    def __init__(self, run_id: str, output_dir: Optional[str] = None):
        """
        Args:
            run_id: Identifier stamped on every event, also the name of the
                subdirectory holding events.jsonl.
            output_dir: Base directory for events.jsonl. None keeps events
                in memory only.
        """
        self.run_id = run_id
        self._events: List[Event] = []
        self.events_path: Optional[Path] = None

        if output_dir:
            run_dir = Path(output_dir) / run_id
            run_dir.mkdir(parents=True, exist_ok=True)
            self.events_path = run_dir / "events.jsonl"

    def __len__(self) -> int:
        return len(self._events)

    def record(
        self,
        event_type: EventType,
        mediator_id: str,
        colleague: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Event:
        """Build an event for this run and log it."""
        event = Event(
            type=EventType(event_type),
            run_id=self.run_id,
            mediator_id=mediator_id,
            colleague=colleague,
            payload=payload or {},
        )
        self.log(event)
        return event

    def log(self, event: Event) -> None:
        self._events.append(event)
        if self.events_path is not None:
            with open(self.events_path, "a", encoding="utf-8") as f:
                f.write(event.to_json() + "\n")

    def get_events(
        self,
        colleague: Optional[str] = None,
        event_type: Optional[EventType] = None,
        mediator_id: Optional[str] = None,
    ) -> List[Event]:
        """Events matching every given filter, in the order they were logged."""
        return [
            e for e in self._events
            if (colleague is None or e.colleague == colleague)
            and (event_type is None or e.type == event_type)
            and (mediator_id is None or e.mediator_id == mediator_id)
        ]

    def recipients(self, mediator_id: Optional[str] = None) -> List[str]:
        """
        Names of colleagues that received a message, in delivery order.

        Args:
            mediator_id: Restrict to deliveries made by one mediator.
        """
        return [
            e.colleague or "unknown"
            for e in self.get_events(event_type=EventType.DELIVER, mediator_id=mediator_id)
        ]

    def get_delivery_counts(self) -> Dict[str, int]:
        """Map each recipient name to the number of messages it received."""
        return dict(Counter(self.recipients()))
