from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Dict, Any
from collections import deque


class EventType(Enum):
    """Things an interaction task reports while it runs."""
    TASK_STARTED = auto()
    TASK_COMPLETED = auto()
    TASK_CANCELED = auto()

    MOVE_REQUESTED = auto()
    MOVEMENT_STOPPED = auto()
    INTERACTED = auto()
    PROGRESS_ADVANCED = auto()  # counter credited without an interaction


@dataclass
class Event:
    """A single task event, stamped with the task tick it happened on."""
    event_type: EventType
    tick: int
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type.name.lower(),
            "tick": self.tick,
            "data": self.data,
        }


class EventQueue:
    """
    Queue of task events between scheduler steps.
    The task pushes; the runner drains once per step.

    Processed history keeps only the newest `max_history` events.
    """

    def __init__(self, max_size: int = 1000, max_history: int = 10000):
        self._queue: deque = deque(maxlen=max_size)
        self._processed: deque = deque(maxlen=max_history)

    def push(self, event: Event) -> None:
        """Add an event to the queue."""
        self._queue.append(event)

    def pop_all(self) -> List[Event]:
        """Pop all pending events from the queue."""
        events = list(self._queue)
        self._queue.clear()
        return events

    def record_processed(self, event: Event) -> None:
        self._processed.append(event)

    def get_processed_history(self) -> List[Dict[str, Any]]:
        """Get all processed events as dicts."""
        return [e.to_dict() for e in self._processed]

    def clear_history(self) -> None:
        """Clear processed event history."""
        self._processed.clear()

    @property
    def pending_count(self) -> int:
        return len(self._queue)
