"""Mutable state aggregate owned by one editing surface."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .mode import Mode

Cursor = Tuple[int, int]  # (line, column)


class CursorValidationError(ValueError):
    """Raised when the host reports a cursor outside the valid range."""

    def __init__(self, message: str, *, cursor: Cursor) -> None:
        super().__init__(message)
        self.cursor = cursor


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    mode: Mode
    enabled: bool
    cursor: Cursor
    visual_anchor: Optional[Cursor]
    command_buffer: str
    search_buffer: str
    last_search: str
    count: Optional[int]
    pending_operator: Optional[str]


@dataclass(slots=True)
class ModalState:
    """Mode, per-mode scratch buffers and the operator/count bookkeeping.

    A fresh aggregate describes a disabled surface: ``enabled`` is false and
    the mode is ``INSERT`` so typing behaves as plain text entry. Scratch
    fields are only reset by the transition table.
    """

    mode: Mode = Mode.INSERT
    enabled: bool = False
    cursor: Cursor = (0, 0)
    visual_anchor: Optional[Cursor] = None
    command_buffer: str = ""
    search_buffer: str = ""
    last_search: str = ""
    count: Optional[int] = None
    pending_operator: Optional[str] = None

    def set_cursor(self, line: int, column: int) -> None:
        cursor = (line, column)
        if line < 0:
            raise CursorValidationError("Line out of range", cursor=cursor)
        if column < 0:
            raise CursorValidationError("Column out of range", cursor=cursor)
        self.cursor = cursor

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            mode=self.mode,
            enabled=self.enabled,
            cursor=self.cursor,
            visual_anchor=self.visual_anchor,
            command_buffer=self.command_buffer,
            search_buffer=self.search_buffer,
            last_search=self.last_search,
            count=self.count,
            pending_operator=self.pending_operator,
        )


__all__ = ["Cursor", "CursorValidationError", "ModalState", "StateSnapshot"]
