"""Mode manager: owns the state aggregate and dispatches key tokens."""

from __future__ import annotations

from typing import Iterable, Optional

from modal_input.actions import Action, ActionKind, KeyInterpreter
from modal_input.config import EngineSettings
from modal_input.keymaps import KeymapInterpreter
from modal_input.runtime import telemetry

from .events import ActionExecuted, CommandEntered, DispatchResult, ModeBus, ModeChanged
from .mode import Mode
from .state import ModalState
from .tokens import BACKSPACE, ENTER, ESCAPE, digit_value, is_printable, normalize_token
from .transitions import apply_transition, clear_scratch

LOGGER_NAME = "modal_input.modes"


class ModeManager:
    """Routes each token to the handler of the current mode.

    The manager decides *when* modes change and how counts, the pending
    operator and the command/search buffers evolve. What a token means is
    delegated to the injected ``KeyInterpreter``. Every call returns a
    ``DispatchResult``; the same events are then emitted on ``bus``.
    """

    def __init__(
        self,
        interpreter: Optional[KeyInterpreter] = None,
        *,
        state: Optional[ModalState] = None,
        bus: Optional[ModeBus] = None,
        settings: Optional[EngineSettings] = None,
    ) -> None:
        self.interpreter: KeyInterpreter = interpreter or KeymapInterpreter()
        self.state = state or ModalState()
        self.bus = bus or ModeBus()
        self.settings = settings or EngineSettings()

    @classmethod
    def from_settings(
        cls,
        settings: EngineSettings,
        *,
        interpreter: Optional[KeyInterpreter] = None,
        bus: Optional[ModeBus] = None,
    ) -> "ModeManager":
        manager = cls(interpreter, bus=bus, settings=settings)
        if settings.vim_mode:
            manager.enable()
        return manager

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def enabled(self) -> bool:
        return self.state.enabled

    def set_cursor(self, line: int, column: int) -> None:
        self.state.set_cursor(line, column)

    # Lifecycle -----------------------------------------------------------

    def enable(self) -> DispatchResult:
        result = DispatchResult(redraw=True)
        self.state.enabled = True
        self._switch(Mode.NORMAL, result)
        return self._publish(result)

    def disable(self) -> DispatchResult:
        result = DispatchResult(redraw=True)
        clear_scratch(self.state)
        self.interpreter.reset()
        self._switch(Mode.INSERT, result)
        self.state.enabled = False
        return self._publish(result)

    def toggle(self) -> DispatchResult:
        if self.state.enabled:
            return self.disable()
        return self.enable()

    def set_mode(self, mode: Mode) -> DispatchResult:
        result = DispatchResult()
        self._switch(mode, result)
        return self._publish(result)

    # Dispatch ------------------------------------------------------------

    def handle_key(self, token: str) -> DispatchResult:
        result = DispatchResult()
        if not self.state.enabled:
            return result

        token = normalize_token(token)
        mode = self.state.mode
        with telemetry.span(
            f"mode::{mode.value}",
            logger_name=LOGGER_NAME,
            component="modes",
            metadata={"token": token, "mode": mode.value},
        ) as handle:
            result.action = self._dispatch(mode, token, result)
            if result.action is not None:
                handle.add_metadata("action", result.action)
        return self._publish(result)

    def handle_keys(self, tokens: Iterable[str]) -> list[DispatchResult]:
        return [self.handle_key(token) for token in tokens]

    def _dispatch(self, mode: Mode, token: str, result: DispatchResult) -> Optional[Action]:
        if mode is Mode.NORMAL:
            return self._handle_normal(token, result)
        if mode is Mode.INSERT:
            return self._handle_insert(token, result)
        if mode.is_visual:
            return self._handle_visual(token, result)
        if mode is Mode.COMMAND:
            return self._handle_command(token, result)
        if mode is Mode.SEARCH:
            return self._handle_search(token, result)
        raise AssertionError(f"No handler for mode {mode!r}")

    def _handle_normal(self, token: str, result: DispatchResult) -> Optional[Action]:
        state = self.state
        digit = digit_value(token)
        # A lone "0" is the line-start motion, not the start of a count.
        if digit is not None and (digit != 0 or state.count is not None):
            state.count = (state.count or 0) * 10 + digit
            return None

        count, state.count = state.count, None
        action = self.interpreter.handle_normal(token, count, state.pending_operator)
        if action is None:
            telemetry.record_event(
                "normal.unhandled", data={"token": token}, logger_name=LOGGER_NAME
            )
            return None

        if action.kind is ActionKind.SET_OPERATOR:
            state.pending_operator = action.argument
            return None

        if state.pending_operator is not None and self.settings.clear_operator_on_completion:
            state.pending_operator = None

        if action.implied_mode is not None:
            self._switch(action.implied_mode, result)
        result.events.append(ActionExecuted(action))
        return action

    def _handle_insert(self, token: str, result: DispatchResult) -> Optional[Action]:
        if token == ESCAPE:
            self._switch(Mode.NORMAL, result)
            return Action(ActionKind.EXIT_INSERT_MODE)
        # Text entry belongs to the host.
        return None

    def _handle_visual(self, token: str, result: DispatchResult) -> Optional[Action]:
        if token == ESCAPE:
            self._switch(Mode.NORMAL, result)
            return Action(ActionKind.EXIT_VISUAL_MODE)

        count, self.state.count = self.state.count, None
        action = self.interpreter.handle_visual(token, count or 1)
        if action is None:
            return None
        if action.consumes_selection:
            self._switch(Mode.NORMAL, result)
        result.events.append(ActionExecuted(action))
        return action

    def _handle_command(self, token: str, result: DispatchResult) -> Optional[Action]:
        if token == ESCAPE:
            self._switch(Mode.NORMAL, result)
            return Action(ActionKind.CANCEL_COMMAND)
        if token == ENTER:
            command = self.state.command_buffer
            self._switch(Mode.NORMAL, result)
            result.events.append(CommandEntered(command))
            return Action.execute_command(command)

        edited = _edit_line(self.state.command_buffer, token)
        if edited is not None:
            self.state.command_buffer = edited
            result.redraw = True
        return None

    def _handle_search(self, token: str, result: DispatchResult) -> Optional[Action]:
        if token == ESCAPE:
            self._switch(Mode.NORMAL, result)
            return Action(ActionKind.CANCEL_SEARCH)
        if token == ENTER:
            pattern = self.state.search_buffer
            self.state.last_search = pattern
            self._switch(Mode.NORMAL, result)
            return Action.execute_search(pattern)

        edited = _edit_line(self.state.search_buffer, token)
        if edited is not None:
            self.state.search_buffer = edited
            result.redraw = True
        return None

    # Transitions ---------------------------------------------------------

    def _switch(self, mode: Mode, result: DispatchResult) -> None:
        previous = self.state.mode
        if not apply_transition(self.state, mode):
            return
        # Half-typed sequences never survive a mode change.
        self.interpreter.reset()
        result.events.append(ModeChanged(mode))
        result.redraw = True
        telemetry.record_event(
            "mode.switch",
            data={"from": previous.value, "to": mode.value},
            logger_name=LOGGER_NAME,
        )

    def _publish(self, result: DispatchResult) -> DispatchResult:
        self.bus.publish(result)
        return result


def _edit_line(current: str, token: str) -> Optional[str]:
    """Apply a backspace or printable token to a line buffer."""

    if token == BACKSPACE:
        return current[:-1]
    if is_printable(token):
        return current + token
    return None


__all__ = ["ModeManager"]
