"""Side effects that run once whenever the active mode changes.

Effects are keyed by the destination mode and run before ``state.mode`` is
updated. This table is the only place mode-scoped scratch state is reset.
"""

from __future__ import annotations

from typing import Callable, Dict

from .mode import Mode
from .state import ModalState

TransitionEffect = Callable[[ModalState], None]


def _enter_insert(state: ModalState) -> None:
    state.visual_anchor = None


def _enter_visual(state: ModalState) -> None:
    state.visual_anchor = state.cursor


def clear_scratch(state: ModalState) -> None:
    """Drop every mode-scoped field; ``last_search`` survives."""

    state.visual_anchor = None
    state.command_buffer = ""
    state.search_buffer = ""
    state.pending_operator = None
    state.count = None


_enter_normal = clear_scratch


def _enter_command(state: ModalState) -> None:
    state.command_buffer = ""


def _enter_search(state: ModalState) -> None:
    state.search_buffer = ""


TRANSITIONS: Dict[Mode, TransitionEffect] = {
    Mode.NORMAL: _enter_normal,
    Mode.INSERT: _enter_insert,
    Mode.VISUAL: _enter_visual,
    Mode.VISUAL_LINE: _enter_visual,
    Mode.VISUAL_BLOCK: _enter_visual,
    Mode.COMMAND: _enter_command,
    Mode.SEARCH: _enter_search,
}


def apply_transition(state: ModalState, destination: Mode) -> bool:
    """Move ``state`` into ``destination``; return False if already there."""

    if state.mode == destination:
        return False
    TRANSITIONS[destination](state)
    state.mode = destination
    return True


__all__ = ["TRANSITIONS", "TransitionEffect", "apply_transition", "clear_scratch"]
