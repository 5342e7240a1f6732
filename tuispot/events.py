"""Events passed from the player and the queue to the main loop."""

from __future__ import annotations

import queue
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator, Optional


class EventType(Enum):
    """Where an event comes from."""

    PLAYER = "player"
    QUEUE = "queue"
    SESSION_DIED = "session_died"


@dataclass(frozen=True)
class Event:
    """An event and the value it carries, if any."""

    type: EventType
    payload: Any = None


class EventManager:
    """An unbounded, thread-safe channel of events for the main loop.

    ``notify`` is called whenever the main loop should wake up and look at
    pending events.
    """

    def __init__(self, notify: Optional[Callable[[], None]] = None) -> None:
        self._events: queue.SimpleQueue[Event] = queue.SimpleQueue()
        self._notify = notify

    def send(self, event: Event) -> None:
        """Queue ``event`` and wake the main loop."""
        self._events.put(event)
        self.trigger()

    def trigger(self) -> None:
        """Wake the main loop without sending an event."""
        if self._notify is not None:
            self._notify()

    def messages(self) -> Iterator[Event]:
        """Yield the pending events, in order, without waiting for new ones."""
        while True:
            try:
                yield self._events.get_nowait()
            except queue.Empty:
                return