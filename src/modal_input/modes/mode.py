"""Editing modes and their per-mode display configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class ModeConfig:
    """Static display data for a mode."""

    label: str
    hint: str
    prompt: str = ""


class Mode(str, Enum):
    """Closed set of editing modes."""

    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    VISUAL_LINE = "visual_line"
    VISUAL_BLOCK = "visual_block"
    COMMAND = "command"
    SEARCH = "search"

    @property
    def allows_input(self) -> bool:
        """True when tokens are free text rather than commands."""

        return self in _INPUT_MODES

    @property
    def is_visual(self) -> bool:
        return self in _VISUAL_MODES

    @property
    def config(self) -> ModeConfig:
        return MODE_CONFIGS[self]

    @property
    def label(self) -> str:
        return MODE_CONFIGS[self].label

    @property
    def hint(self) -> str:
        return MODE_CONFIGS[self].hint

    @property
    def prompt(self) -> str:
        return MODE_CONFIGS[self].prompt


_INPUT_MODES = frozenset({Mode.INSERT, Mode.COMMAND, Mode.SEARCH})
_VISUAL_MODES = frozenset({Mode.VISUAL, Mode.VISUAL_LINE, Mode.VISUAL_BLOCK})

_VISUAL_HINT = "Press Esc to cancel, y to yank, d to delete"

MODE_CONFIGS: dict[Mode, ModeConfig] = {
    Mode.NORMAL: ModeConfig("NORMAL", "Press 'i' to insert, ':' for command"),
    Mode.INSERT: ModeConfig("INSERT", "Press Esc to return to Normal"),
    Mode.VISUAL: ModeConfig("VISUAL", _VISUAL_HINT),
    Mode.VISUAL_LINE: ModeConfig("V-LINE", _VISUAL_HINT),
    Mode.VISUAL_BLOCK: ModeConfig("V-BLOCK", _VISUAL_HINT),
    Mode.COMMAND: ModeConfig("COMMAND", "Enter to execute, Esc to cancel", ":"),
    Mode.SEARCH: ModeConfig("SEARCH", "Enter to search, Esc to cancel", "/"),
}


__all__ = ["Mode", "ModeConfig", "MODE_CONFIGS"]
