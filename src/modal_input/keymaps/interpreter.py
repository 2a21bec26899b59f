"""Default ``KeyInterpreter`` driven by the keymap registry."""

from __future__ import annotations

from typing import Optional

from modal_input.actions.models import (
    OPERATOR_KINDS,
    OPERATOR_LINE_KINDS,
    Action,
    ActionKind,
)
from modal_input.modes.mode import Mode
from modal_input.runtime import telemetry

from .defaults import CHAR_ARGUMENT_KINDS, COUNT_GIVEN, load_default_keymaps
from .registry import KeymapRegistry
from .resolver import KeymapResolver

LOGGER_NAME = "modal_input.keymaps"


class KeymapInterpreter:
    """Turns tokens into actions using the Normal and Visual keymaps.

    Multi-key sequences (``gg``, ``>>``) and the character argument of
    ``r``/``f``/``F``/``t``/``T`` are buffered here; the manager only sees
    the finished action.
    """

    def __init__(
        self,
        registry: Optional[KeymapRegistry] = None,
        resolver: Optional[KeymapResolver] = None,
    ) -> None:
        if resolver is not None:
            registry = resolver.registry
        elif registry is None:
            registry = KeymapRegistry(logger_name=LOGGER_NAME)
            load_default_keymaps(registry)
        self.registry = registry
        self.resolver = resolver or KeymapResolver(registry)
        self._pending: list[str] = []
        self._char_kind: Optional[ActionKind] = None
        self._spent_operator: Optional[str] = None

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def reset(self) -> None:
        self._pending.clear()
        self._char_kind = None
        self._spent_operator = None

    def handle_normal(
        self, token: str, count: Optional[int], pending_operator: Optional[str]
    ) -> Optional[Action]:
        # The manager keeps a folded operator until the next Normal entry;
        # once spent here it no longer applies to later motions.
        if pending_operator is None:
            self._spent_operator = None
        if pending_operator is None or pending_operator == self._spent_operator:
            action = self._resolve(Mode.NORMAL, token, count)
            if action is not None and action.kind is ActionKind.SET_OPERATOR:
                self._spent_operator = None
            return action

        idle = not self._pending and self._char_kind is None
        if idle and token == pending_operator and pending_operator in OPERATOR_LINE_KINDS:
            self._spent_operator = pending_operator
            return Action(OPERATOR_LINE_KINDS[pending_operator], count=count)
        motion = self._resolve(Mode.NORMAL, token, count)
        if motion is None or motion.kind is ActionKind.SET_OPERATOR:
            return motion
        self._spent_operator = pending_operator
        kind = OPERATOR_KINDS.get(pending_operator)
        if kind is None:
            return motion
        return Action(kind, count=motion.count)

    def handle_visual(self, token: str, count: int) -> Optional[Action]:
        return self._resolve(Mode.VISUAL, token, count)

    def _resolve(self, mode: Mode, token: str, count: Optional[int]) -> Optional[Action]:
        if self._char_kind is not None:
            return self._char_argument(token)
        if mode is Mode.NORMAL and not self._pending and token in CHAR_ARGUMENT_KINDS:
            self._char_kind = CHAR_ARGUMENT_KINDS[token]
            return None

        self._pending.append(token)
        resolution = self.resolver.resolve(
            mode, self._pending, context={COUNT_GIVEN: count is not None}
        )
        if resolution.status == "pending":
            return None

        sequence = " ".join(self._pending)
        self._pending.clear()
        if resolution.status == "miss" or resolution.match is None:
            telemetry.record_event(
                "keymap.miss",
                data={"mode": mode.value, "sequence": sequence},
                logger_name=LOGGER_NAME,
            )
            return None

        match = resolution.match
        telemetry.record_event(
            "keymap.match",
            data={"binding": match.binding.id, "sequence": sequence},
            logger_name=LOGGER_NAME,
        )
        return match.builder(count)

    def _char_argument(self, token: str) -> Optional[Action]:
        kind, self._char_kind = self._char_kind, None
        if kind is None or len(token) != 1:
            return None
        return Action.with_char(kind, token)


__all__ = ["KeymapInterpreter"]
