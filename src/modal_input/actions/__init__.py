"""Editing intents and the interpreter contract that produces them."""

from .interpreter import KeyInterpreter
from .models import (
    IMPLIED_MODES,
    OPERATOR_KINDS,
    OPERATOR_LINE_KINDS,
    SELECTION_CONSUMERS,
    Action,
    ActionKind,
)

__all__ = [
    "Action",
    "ActionKind",
    "KeyInterpreter",
    "IMPLIED_MODES",
    "OPERATOR_KINDS",
    "OPERATOR_LINE_KINDS",
    "SELECTION_CONSUMERS",
]
