"""Events raised towards the host and the bus that fans them out."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, ClassVar, Dict, Optional, Union

from .mode import Mode

if TYPE_CHECKING:
    from modal_input.actions.models import Action

REDRAW = "redraw"


@dataclass(frozen=True, slots=True)
class ModeChanged:
    name: ClassVar[str] = "mode.changed"

    mode: Mode


@dataclass(frozen=True, slots=True)
class ActionExecuted:
    name: ClassVar[str] = "action.executed"

    action: "Action"


@dataclass(frozen=True, slots=True)
class CommandEntered:
    name: ClassVar[str] = "command.entered"

    command: str


Event = Union[ModeChanged, ActionExecuted, CommandEntered]


@dataclass(slots=True)
class DispatchResult:
    """Outcome of feeding one token (or one lifecycle call) to the manager.

    ``redraw`` is the notify signal: the host should refresh whatever it
    renders from the state aggregate.
    """

    action: Optional["Action"] = None
    events: list[Event] = field(default_factory=list)
    redraw: bool = False


class ModeBus:
    """Name-keyed event bus; ``redraw`` is emitted with a ``None`` payload."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)

    def publish(self, result: DispatchResult) -> None:
        for event in result.events:
            self.emit(event.name, event)
        if result.redraw:
            self.emit(REDRAW, None)


__all__ = [
    "REDRAW",
    "ActionExecuted",
    "CommandEntered",
    "DispatchResult",
    "Event",
    "ModeBus",
    "ModeChanged",
]
