"""
events.py
Defines the GameEvent dataclass and the output sinks that receive events from the engine.
The console renders them as text; InMemoryRecorder keeps them for tests and simulations.
Related modules:
- engine.py: Emits GameEvent objects to the injected sink.
- UI/cli.py: ConsoleSink renders events for a human.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class GameEvent:
    """
    Represents a single event in the game (e.g., exchange committed, dice chosen, game finished).
    Fields:
        event_type (str): Type of event (e.g., 'ThrowRevealed').
        payload (dict): Event-specific data.
    """
    event_type: str
    payload: Dict[str, Any] = field(default_factory=dict)


class EventSink:
    """
    Output capability handed to the engine. Subclasses override record().
    """
    def record(self, event: GameEvent) -> None:
        raise NotImplementedError


class InMemoryRecorder(EventSink):
    """
    Records GameEvent objects in memory for later retrieval.
    """
    def __init__(self):
        self._events: List[GameEvent] = []

    def record(self, event: GameEvent) -> None:
        """Add a new event to the recorder."""
        self._events.append(event)

    def events(self):
        """Return all recorded events as a list."""
        return list(self._events)

    def of_type(self, event_type: str) -> List[GameEvent]:
        return [e for e in self._events if e.event_type == event_type]
