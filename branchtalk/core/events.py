"""
Typed event bus for observing dialogue traversal.

The engine publishes DialogueEvent members so a presentation layer can react
to steps, prompts and branch decisions without polling.

Usage:
    bus = EventBus()
    bus.subscribe(DialogueEvent.OPTION_OPENED, show_menu)
    engine = DialogueEngine(graph, events=bus)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable

logger = logging.getLogger(__name__)


class DialogueEvent(Enum):
    """Events published by the dialogue engine."""
    STEP = auto()             # A step was produced by advance()
    OPTION_OPENED = auto()    # An option prompt is waiting for select()
    OPTION_SELECTED = auto()  # select() recorded a choice
    BRANCH_RESOLVED = auto()  # A choice node picked one of its branches
    FINISHED = auto()         # advance() found no successor


@dataclass(frozen=True)
class Event:
    """A published DialogueEvent and its keyword payload."""
    type: DialogueEvent
    data: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


class EventBus:
    """
    Dispatches DialogueEvents to subscribed handlers in subscription order.

    A handler that raises is logged and skipped, so a broken subscriber never
    interrupts advance() or select().
    """

    def __init__(self):
        self._handlers: dict[DialogueEvent, list[EventHandler]] = {}

    def subscribe(self, event_type: DialogueEvent, handler: EventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(self, event_type: DialogueEvent, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event_type: DialogueEvent, **data: Any) -> Event:
        event = Event(type=event_type, data=data)
        # Copy so handlers may unsubscribe themselves
        for handler in list(self._handlers.get(event_type, [])):
            try:
                handler(event)
            except Exception:
                logger.exception(f"Error in {event_type.name} handler {handler!r}")
        return event
