"""Dataclasses describing key sequences, bindings and action builders."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from modal_input.actions.models import Action
from modal_input.modes.mode import Mode

# Bindings live in one of two tables; the three visual modes share one.
KEYMAP_MODES = (Mode.NORMAL, Mode.VISUAL)


def keymap_mode(mode: Mode) -> Mode:
    """Return the binding table used while ``mode`` is active."""

    return Mode.VISUAL if mode.is_visual else mode


@dataclass(frozen=True, slots=True)
class KeySequence:
    """Immutable run of logical tokens, e.g. ``("g", "g")``."""

    tokens: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.tokens:
            raise ValueError("KeySequence requires at least one token")
        if any(not token for token in self.tokens):
            raise ValueError("KeySequence tokens cannot be empty")

    @property
    def signature(self) -> str:
        return " ".join(self.tokens)

    @classmethod
    def from_strings(cls, *keys: str) -> "KeySequence":
        return cls(tuple(keys))

    @classmethod
    def parse(cls, text: str) -> "KeySequence":
        """Split ``"gg"`` into ``("g", "g")``; named keys go space-separated."""

        if " " in text:
            return cls(tuple(text.split()))
        if text.startswith("ctrl-"):
            return cls((text,))
        return cls(tuple(text))


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Gate on a boolean flag of the resolution context (``!flag`` negates)."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        if expr.startswith("!"):
            return cls(expr[1:], False)
        return cls(expr, True)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected


ActionFactory = Callable[[Optional[int]], Optional[Action]]


@dataclass(frozen=True, slots=True)
class ActionBuilder:
    """Named factory turning a typed count into an ``Action``."""

    id: str
    build: ActionFactory
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionBuilder id cannot be empty")
        if not callable(self.build):
            raise TypeError("build must be callable")

    def __call__(self, count: Optional[int]) -> Optional[Action]:
        return self.build(count)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key sequence in one keymap with an action builder."""

    id: str
    mode: Mode
    sequence: KeySequence
    builder_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if self.mode not in KEYMAP_MODES:
            raise ValueError(
                f"binding '{self.id}' must target one of "
                f"{[mode.value for mode in KEYMAP_MODES]}, got '{self.mode.value}'"
            )
        if not self.builder_id:
            raise ValueError("binding builder_id cannot be empty")
        normalized = tuple(
            clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
            for clause in self.when
        )
        object.__setattr__(self, "when", normalized)

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)

    @property
    def key_signature(self) -> str:
        return self.sequence.signature


__all__ = [
    "ActionBuilder",
    "ActionFactory",
    "Binding",
    "KEYMAP_MODES",
    "KeySequence",
    "WhenClause",
    "keymap_mode",
]
