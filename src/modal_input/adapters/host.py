"""UI-agnostic adapter that wires ModeManager results into host callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

from modal_input.actions.models import Action
from modal_input.modes.events import (
    REDRAW,
    ActionExecuted,
    CommandEntered,
    DispatchResult,
    ModeChanged,
)
from modal_input.modes.mode import Mode
from modal_input.modes.mode_manager import ModeManager

RELAYED_EVENTS = (ModeChanged.name, ActionExecuted.name, CommandEntered.name)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class HostHooks:
    """Callbacks invoked by the adapter to update the host surface."""

    perform_action: Callable[[Action], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class HostAdapter:
    """Bridges ModeManager + bus events to a host editing surface."""

    def __init__(self, manager: ModeManager, hooks: HostHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self._callbacks: Dict[str, Callable[[object], None]] = {}
        self._subscribe_events()
        self.refresh()

    def feed(self, token: str) -> DispatchResult:
        """Dispatch one key token and hand the resulting action to the host."""

        self._log_state("key ->", token=token)
        result = self.manager.handle_key(token)
        if result.action is not None:
            self.hooks.perform_action(result.action)
        self._log_state(
            "result <-",
            action=str(result.action) if result.action else None,
            events=[event.name for event in result.events] or None,
            redraw=result.redraw,
        )
        return result

    def feed_all(self, tokens: Iterable[str]) -> list[DispatchResult]:
        return [self.feed(token) for token in tokens]

    def refresh(self) -> None:
        """Push the status and command line regardless of pending redraws."""

        self.hooks.update_status(self.status_text())
        self.hooks.show_command(self.command_text())

    def status_text(self) -> str:
        if not self.manager.enabled:
            return ""
        return self.manager.mode.label

    def command_text(self) -> str:
        state = self.manager.state
        if state.mode is Mode.COMMAND:
            return state.mode.prompt + state.command_buffer
        if state.mode is Mode.SEARCH:
            return state.mode.prompt + state.search_buffer
        return ""

    def detach(self) -> None:
        bus = self.manager.bus
        for name, callback in self._callbacks.items():
            bus.unsubscribe(name, callback)
        self._callbacks.clear()

    def _subscribe_events(self) -> None:
        bus = self.manager.bus
        for event in RELAYED_EVENTS:
            callback = lambda payload, name=event: self._handle_event(name, payload)
            self._callbacks[event] = callback
            bus.subscribe(event, callback)
        self._callbacks[REDRAW] = lambda _payload: self.refresh()
        bus.subscribe(REDRAW, self._callbacks[REDRAW])

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        state = self.manager.state
        return {
            "mode": state.mode.value,
            "enabled": state.enabled,
            "cursor": state.cursor,
            "count": state.count,
            "operator": state.pending_operator,
        }


__all__ = ["HostAdapter", "HostHooks", "RELAYED_EVENTS"]
