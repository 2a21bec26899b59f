"""Tagged editing intents produced by the interpreter and the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from modal_input.modes.mode import Mode


class ActionKind(str, Enum):
    # Mode entry / exit
    ENTER_INSERT_MODE = "enter_insert_mode"
    ENTER_INSERT_MODE_APPEND = "enter_insert_mode_append"
    ENTER_INSERT_MODE_LINE_START = "enter_insert_mode_line_start"
    ENTER_INSERT_MODE_LINE_END = "enter_insert_mode_line_end"
    ENTER_INSERT_MODE_NEW_LINE_BELOW = "enter_insert_mode_new_line_below"
    ENTER_INSERT_MODE_NEW_LINE_ABOVE = "enter_insert_mode_new_line_above"
    EXIT_INSERT_MODE = "exit_insert_mode"
    ENTER_VISUAL_MODE = "enter_visual_mode"
    ENTER_VISUAL_LINE_MODE = "enter_visual_line_mode"
    ENTER_VISUAL_BLOCK_MODE = "enter_visual_block_mode"
    EXIT_VISUAL_MODE = "exit_visual_mode"
    ENTER_COMMAND_MODE = "enter_command_mode"
    ENTER_SEARCH_MODE = "enter_search_mode"

    # Motions
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_WORD_FORWARD = "move_word_forward"
    MOVE_WORD_BACKWARD = "move_word_backward"
    MOVE_WORD_END = "move_word_end"
    MOVE_LINE_START = "move_line_start"
    MOVE_LINE_FIRST_NON_BLANK = "move_line_first_non_blank"
    MOVE_LINE_END = "move_line_end"
    MOVE_TO_TOP = "move_to_top"
    MOVE_TO_BOTTOM = "move_to_bottom"
    MOVE_TO_LINE = "move_to_line"
    MOVE_HALF_PAGE_DOWN = "move_half_page_down"
    MOVE_HALF_PAGE_UP = "move_half_page_up"
    MOVE_PAGE_DOWN = "move_page_down"
    MOVE_PAGE_UP = "move_page_up"
    FIND_CHAR = "find_char"
    FIND_CHAR_BACK = "find_char_back"
    TILL_CHAR = "till_char"
    TILL_CHAR_BACK = "till_char_back"

    # Edits
    DELETE_CHAR = "delete_char"
    DELETE_CHAR_BEFORE = "delete_char_before"
    DELETE_LINE = "delete_line"
    YANK_LINE = "yank_line"
    CHANGE_LINE = "change_line"
    CHANGE_TO_END = "change_to_end"
    PUT = "put"
    PUT_BEFORE = "put_before"
    UNDO = "undo"
    REDO = "redo"
    JOIN = "join"
    REPEAT = "repeat"
    TOGGLE_CASE = "toggle_case"
    INDENT = "indent"
    OUTDENT = "outdent"
    REPLACE = "replace"
    INCREMENT_NUMBER = "increment_number"
    DECREMENT_NUMBER = "decrement_number"

    # Operators, composite or over a selection
    SET_OPERATOR = "set_operator"
    DELETE = "delete"
    YANK = "yank"
    CHANGE = "change"

    # Command line / search
    CANCEL_COMMAND = "cancel_command"
    EXECUTE_COMMAND = "execute_command"
    CANCEL_SEARCH = "cancel_search"
    EXECUTE_SEARCH = "execute_search"
    SEARCH_NEXT = "search_next"
    SEARCH_PREV = "search_prev"


IMPLIED_MODES: dict[ActionKind, Mode] = {
    ActionKind.ENTER_INSERT_MODE: Mode.INSERT,
    ActionKind.ENTER_INSERT_MODE_APPEND: Mode.INSERT,
    ActionKind.ENTER_INSERT_MODE_LINE_START: Mode.INSERT,
    ActionKind.ENTER_INSERT_MODE_LINE_END: Mode.INSERT,
    ActionKind.ENTER_INSERT_MODE_NEW_LINE_BELOW: Mode.INSERT,
    ActionKind.ENTER_INSERT_MODE_NEW_LINE_ABOVE: Mode.INSERT,
    ActionKind.ENTER_VISUAL_MODE: Mode.VISUAL,
    ActionKind.ENTER_VISUAL_LINE_MODE: Mode.VISUAL_LINE,
    ActionKind.ENTER_VISUAL_BLOCK_MODE: Mode.VISUAL_BLOCK,
    ActionKind.ENTER_COMMAND_MODE: Mode.COMMAND,
    ActionKind.ENTER_SEARCH_MODE: Mode.SEARCH,
}

SELECTION_CONSUMERS = frozenset({ActionKind.YANK, ActionKind.DELETE, ActionKind.CHANGE})

# Composite action produced when a pending operator meets a motion.
OPERATOR_KINDS: dict[str, ActionKind] = {
    "d": ActionKind.DELETE,
    "y": ActionKind.YANK,
    "c": ActionKind.CHANGE,
}

# Line-wise variant produced when an operator key is doubled (``dd``).
OPERATOR_LINE_KINDS: dict[str, ActionKind] = {
    "d": ActionKind.DELETE_LINE,
    "y": ActionKind.YANK_LINE,
    "c": ActionKind.CHANGE_LINE,
}


@dataclass(frozen=True, slots=True)
class Action:
    """A single editing intent, performed by the host, never by the core.

    ``count`` is set for counted motions and ``MoveToLine``; ``argument``
    carries the operator character, the target character of ``r``/``f``/``t``
    commands, or the command/search text.
    """

    kind: ActionKind
    count: Optional[int] = None
    argument: Optional[str] = None

    @classmethod
    def counted(cls, kind: ActionKind, count: Optional[int]) -> "Action":
        return cls(kind, count=count if count is not None else 1)

    @classmethod
    def with_char(cls, kind: ActionKind, char: str) -> "Action":
        if len(char) != 1:
            raise ValueError(f"{kind.value} expects a single character, got {char!r}")
        return cls(kind, argument=char)

    @classmethod
    def set_operator(cls, operator: str) -> "Action":
        return cls.with_char(ActionKind.SET_OPERATOR, operator)

    @classmethod
    def execute_command(cls, command: str) -> "Action":
        return cls(ActionKind.EXECUTE_COMMAND, argument=command)

    @classmethod
    def execute_search(cls, pattern: str) -> "Action":
        return cls(ActionKind.EXECUTE_SEARCH, argument=pattern)

    @property
    def implied_mode(self) -> Optional[Mode]:
        """Mode entered as part of applying this action in Normal mode."""

        return IMPLIED_MODES.get(self.kind)

    @property
    def is_mode_entry(self) -> bool:
        return self.kind in IMPLIED_MODES

    @property
    def consumes_selection(self) -> bool:
        return self.kind in SELECTION_CONSUMERS

    def __str__(self) -> str:
        parts = [self.kind.value]
        if self.count is not None:
            parts.append(str(self.count))
        if self.argument is not None:
            parts.append(repr(self.argument))
        return ":".join(parts)


__all__ = [
    "Action",
    "ActionKind",
    "IMPLIED_MODES",
    "OPERATOR_KINDS",
    "OPERATOR_LINE_KINDS",
    "SELECTION_CONSUMERS",
]
