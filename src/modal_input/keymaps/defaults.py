"""Built-in Normal and Visual keymaps."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from modal_input.actions.models import Action, ActionKind
from modal_input.modes.mode import Mode

from .models import ActionBuilder, ActionFactory, Binding, KeySequence, WhenClause
from .registry import KeymapRegistry

# Flag set by the interpreter when a count prefix was typed.
COUNT_GIVEN = "count_given"

# Commands that take the next typed character as their argument.
CHAR_ARGUMENT_KINDS: Mapping[str, ActionKind] = {
    "r": ActionKind.REPLACE,
    "f": ActionKind.FIND_CHAR,
    "F": ActionKind.FIND_CHAR_BACK,
    "t": ActionKind.TILL_CHAR,
    "T": ActionKind.TILL_CHAR_BACK,
}

_COUNTED = frozenset(
    {
        ActionKind.MOVE_LEFT,
        ActionKind.MOVE_RIGHT,
        ActionKind.MOVE_UP,
        ActionKind.MOVE_DOWN,
        ActionKind.MOVE_WORD_FORWARD,
        ActionKind.MOVE_WORD_BACKWARD,
        ActionKind.MOVE_WORD_END,
    }
)


def _plain(kind: ActionKind) -> ActionFactory:
    if kind in _COUNTED:
        return lambda count: Action.counted(kind, count)
    return lambda count: Action(kind)


def _go_to_line(count: Optional[int]) -> Action:
    if count is not None:
        return Action(ActionKind.MOVE_TO_LINE, count=count)
    return Action(ActionKind.MOVE_TO_BOTTOM)


def _operator(operator: str) -> ActionFactory:
    return lambda count: Action.set_operator(operator)


def _default_builders() -> tuple[ActionBuilder, ...]:
    skip = {ActionKind.SET_OPERATOR, ActionKind.MOVE_TO_LINE}
    builders = [
        ActionBuilder(id=kind.value, build=_plain(kind), description=kind.name)
        for kind in ActionKind
        if kind not in skip
    ]
    builders.append(
        ActionBuilder(
            id="go_to_line",
            build=_go_to_line,
            description="Jump to the counted line, or the last line without a count",
        )
    )
    builders.extend(
        ActionBuilder(
            id=f"operator.{operator}",
            build=_operator(operator),
            description=f"Start the '{operator}' operator",
        )
        for operator in ("d", "y", "c")
    )
    return tuple(builders)


_MOTIONS: dict[str, str] = {
    "h": ActionKind.MOVE_LEFT.value,
    "j": ActionKind.MOVE_DOWN.value,
    "k": ActionKind.MOVE_UP.value,
    "l": ActionKind.MOVE_RIGHT.value,
    "w": ActionKind.MOVE_WORD_FORWARD.value,
    "b": ActionKind.MOVE_WORD_BACKWARD.value,
    "e": ActionKind.MOVE_WORD_END.value,
    "0": ActionKind.MOVE_LINE_START.value,
    "^": ActionKind.MOVE_LINE_FIRST_NON_BLANK.value,
    "$": ActionKind.MOVE_LINE_END.value,
    "gg": ActionKind.MOVE_TO_TOP.value,
}

NORMAL_KEYS: dict[str, str] = {
    "i": ActionKind.ENTER_INSERT_MODE.value,
    "a": ActionKind.ENTER_INSERT_MODE_APPEND.value,
    "I": ActionKind.ENTER_INSERT_MODE_LINE_START.value,
    "A": ActionKind.ENTER_INSERT_MODE_LINE_END.value,
    "o": ActionKind.ENTER_INSERT_MODE_NEW_LINE_BELOW.value,
    "O": ActionKind.ENTER_INSERT_MODE_NEW_LINE_ABOVE.value,
    "v": ActionKind.ENTER_VISUAL_MODE.value,
    "V": ActionKind.ENTER_VISUAL_LINE_MODE.value,
    ":": ActionKind.ENTER_COMMAND_MODE.value,
    "/": ActionKind.ENTER_SEARCH_MODE.value,
    **_MOTIONS,
    "G": "go_to_line",
    "x": ActionKind.DELETE_CHAR.value,
    "X": ActionKind.DELETE_CHAR_BEFORE.value,
    "C": ActionKind.CHANGE_TO_END.value,
    "p": ActionKind.PUT.value,
    "P": ActionKind.PUT_BEFORE.value,
    "u": ActionKind.UNDO.value,
    "J": ActionKind.JOIN.value,
    ".": ActionKind.REPEAT.value,
    "~": ActionKind.TOGGLE_CASE.value,
    ">>": ActionKind.INDENT.value,
    "<<": ActionKind.OUTDENT.value,
    "d": "operator.d",
    "y": "operator.y",
    "c": "operator.c",
    "n": ActionKind.SEARCH_NEXT.value,
    "N": ActionKind.SEARCH_PREV.value,
    "ctrl-d": ActionKind.MOVE_HALF_PAGE_DOWN.value,
    "ctrl-u": ActionKind.MOVE_HALF_PAGE_UP.value,
    "ctrl-f": ActionKind.MOVE_PAGE_DOWN.value,
    "ctrl-b": ActionKind.MOVE_PAGE_UP.value,
    "ctrl-r": ActionKind.REDO.value,
    "ctrl-v": ActionKind.ENTER_VISUAL_BLOCK_MODE.value,
    "ctrl-a": ActionKind.INCREMENT_NUMBER.value,
    "ctrl-x": ActionKind.DECREMENT_NUMBER.value,
}

VISUAL_KEYS: dict[str, str] = {
    **_MOTIONS,
    "G": ActionKind.MOVE_TO_BOTTOM.value,
    "d": ActionKind.DELETE.value,
    "x": ActionKind.DELETE.value,
    "y": ActionKind.YANK.value,
    "c": ActionKind.CHANGE.value,
    ">": ActionKind.INDENT.value,
    "<": ActionKind.OUTDENT.value,
    "~": ActionKind.TOGGLE_CASE.value,
    "J": ActionKind.JOIN.value,
    "v": ActionKind.ENTER_VISUAL_MODE.value,
    "V": ActionKind.ENTER_VISUAL_LINE_MODE.value,
}

# "0" only means line start while no count has been typed.
_GATED: Mapping[tuple[Mode, str], tuple[WhenClause, ...]] = {
    (Mode.NORMAL, "0"): (WhenClause(COUNT_GIVEN, expected=False),),
}


def _bindings_for(mode: Mode, keys: Mapping[str, str]) -> tuple[Binding, ...]:
    bindings = []
    for keys_text, builder_id in keys.items():
        sequence = KeySequence.parse(keys_text)
        bindings.append(
            Binding(
                id=f"{mode.value}.{''.join(sequence.tokens)}",
                mode=mode,
                sequence=sequence,
                builder_id=builder_id,
                when=_GATED.get((mode, keys_text), ()),
            )
        )
    return tuple(bindings)


DEFAULT_BUILDERS: tuple[ActionBuilder, ...] = _default_builders()
DEFAULT_BINDINGS: tuple[Binding, ...] = _bindings_for(
    Mode.NORMAL, NORMAL_KEYS
) + _bindings_for(Mode.VISUAL, VISUAL_KEYS)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    include: Sequence[str] | None = None,
    exclude: Sequence[str] | None = None,
    extra_bindings: Iterable[Binding] | None = None,
) -> None:
    """Register the built-in builders and bindings.

    ``include``/``exclude`` filter bindings by id (``"normal.gg"``);
    ``extra_bindings`` are registered afterwards and may reference any
    built-in builder.
    """

    included = set(include) if include else None
    excluded = set(exclude or ())

    for builder in DEFAULT_BUILDERS:
        registry.register_builder(builder, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if included is not None and binding.id not in included:
            continue
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace)


__all__ = [
    "CHAR_ARGUMENT_KINDS",
    "COUNT_GIVEN",
    "DEFAULT_BINDINGS",
    "DEFAULT_BUILDERS",
    "NORMAL_KEYS",
    "VISUAL_KEYS",
    "load_default_keymaps",
]
