"""Modes, the state aggregate, the transition table and the event contract."""

from .events import (
    REDRAW,
    ActionExecuted,
    CommandEntered,
    DispatchResult,
    Event,
    ModeBus,
    ModeChanged,
)
from .mode import MODE_CONFIGS, Mode, ModeConfig
from .state import Cursor, CursorValidationError, ModalState, StateSnapshot
from .tokens import BACKSPACE, ENTER, ESCAPE, normalize_token
from .transitions import TRANSITIONS, apply_transition, clear_scratch

__all__ = [
    "REDRAW",
    "ActionExecuted",
    "CommandEntered",
    "DispatchResult",
    "Event",
    "ModeBus",
    "ModeChanged",
    "MODE_CONFIGS",
    "Mode",
    "ModeConfig",
    "Cursor",
    "CursorValidationError",
    "ModalState",
    "StateSnapshot",
    "BACKSPACE",
    "ENTER",
    "ESCAPE",
    "normalize_token",
    "TRANSITIONS",
    "apply_transition",
    "clear_scratch",
]
