"""Helpers for the logical key tokens hosts deliver."""

from __future__ import annotations

from typing import Optional

ESCAPE = "escape"
ENTER = "enter"
BACKSPACE = "backspace"

_ALIASES = {
    "esc": ESCAPE,
    "<esc>": ESCAPE,
    "escape": ESCAPE,
    "enter": ENTER,
    "return": ENTER,
    "<cr>": ENTER,
    "backspace": BACKSPACE,
    "<bs>": BACKSPACE,
}

_DIGITS = "0123456789"


def normalize_token(token: str) -> str:
    """Map well-known key names to their canonical spelling.

    Single characters are returned untouched so ``"E"`` stays distinct from
    ``"e"``.
    """

    if len(token) <= 1:
        return token
    return _ALIASES.get(token.lower(), token)


def digit_value(token: str) -> Optional[int]:
    if len(token) == 1 and token in _DIGITS:
        return int(token)
    return None


def is_printable(token: str) -> bool:
    return len(token) == 1 and token.isprintable()


__all__ = [
    "BACKSPACE",
    "ENTER",
    "ESCAPE",
    "digit_value",
    "is_printable",
    "normalize_token",
]
