"""
Core module - shared infrastructure.

Provides:
- Error taxonomy
- Configuration
- Event bus
"""

from branchtalk.core.errors import (
    DialogueError,
    ScriptSyntaxError,
    SequencingError,
    GraphFormatError,
)
from branchtalk.core.config import DialogueConfig
from branchtalk.core.events import EventBus, Event, DialogueEvent

__all__ = [
    "DialogueError",
    "ScriptSyntaxError",
    "SequencingError",
    "GraphFormatError",
    "DialogueConfig",
    "EventBus",
    "Event",
    "DialogueEvent",
]
