"""Contract for the strategy object that turns tokens into actions."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from .models import Action


@runtime_checkable
class KeyInterpreter(Protocol):
    """Decides *what* a token means; the mode manager decides *when*.

    Implementations must leave the state aggregate alone. They may keep
    private bookkeeping such as a partially typed multi-key sequence.
    """

    def handle_normal(
        self, token: str, count: Optional[int], pending_operator: Optional[str]
    ) -> Optional[Action]:
        """Interpret a Normal-mode token.

        ``count`` is ``None`` when no count prefix was typed; a standalone
        ``"0"`` only ever arrives in that case and is a motion. Returning
        ``Action.set_operator`` starts operator-pending; with
        ``pending_operator`` set the token is the completing motion.
        """
        ...

    def handle_visual(self, token: str, count: int) -> Optional[Action]:
        """Interpret a token against the active selection."""
        ...

    def reset(self) -> None:
        """Drop private bookkeeping; called whenever the mode changes."""
        ...


__all__ = ["KeyInterpreter"]
