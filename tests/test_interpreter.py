from __future__ import annotations

from typing import Optional

from modal_input.actions import Action, ActionKind, KeyInterpreter
from modal_input.keymaps import KeymapInterpreter, KeymapRegistry, load_default_keymaps


def make_interpreter() -> KeymapInterpreter:
    return KeymapInterpreter()


def feed_normal(
    interpreter: KeymapInterpreter,
    keys: str,
    *,
    count: Optional[int] = None,
    operator: Optional[str] = None,
) -> list[Optional[Action]]:
    return [interpreter.handle_normal(key, count, operator) for key in keys]


def test_default_interpreter_satisfies_protocol() -> None:
    assert isinstance(make_interpreter(), KeyInterpreter)


def test_mode_entry_keys() -> None:
    interpreter = make_interpreter()

    assert interpreter.handle_normal("i", None, None) == Action(ActionKind.ENTER_INSERT_MODE)
    assert interpreter.handle_normal("V", None, None) == Action(
        ActionKind.ENTER_VISUAL_LINE_MODE
    )
    assert interpreter.handle_normal("ctrl-v", None, None) == Action(
        ActionKind.ENTER_VISUAL_BLOCK_MODE
    )
    assert interpreter.handle_normal(":", None, None) == Action(ActionKind.ENTER_COMMAND_MODE)


def test_counted_motion_defaults_to_one() -> None:
    interpreter = make_interpreter()

    assert interpreter.handle_normal("j", None, None) == Action(ActionKind.MOVE_DOWN, count=1)
    assert interpreter.handle_normal("w", 4, None) == Action(
        ActionKind.MOVE_WORD_FORWARD, count=4
    )


def test_zero_is_line_start_only_without_count() -> None:
    interpreter = make_interpreter()

    assert interpreter.handle_normal("0", None, None) == Action(ActionKind.MOVE_LINE_START)
    assert interpreter.handle_normal("0", 3, None) is None


def test_go_to_line_uses_count() -> None:
    interpreter = make_interpreter()

    assert interpreter.handle_normal("G", 12, None) == Action(ActionKind.MOVE_TO_LINE, count=12)
    assert interpreter.handle_normal("G", None, None) == Action(ActionKind.MOVE_TO_BOTTOM)


def test_multi_key_sequences_wait_for_completion() -> None:
    interpreter = make_interpreter()

    assert interpreter.handle_normal("g", None, None) is None
    assert interpreter.pending == ("g",)
    assert interpreter.handle_normal("g", None, None) == Action(ActionKind.MOVE_TO_TOP)
    assert interpreter.pending == ()

    assert feed_normal(interpreter, ">>") == [None, Action(ActionKind.INDENT)]


def test_unknown_sequence_is_dropped() -> None:
    interpreter = make_interpreter()

    assert feed_normal(interpreter, "gz") == [None, None]
    assert interpreter.pending == ()
    assert interpreter.handle_normal("x", None, None) == Action(ActionKind.DELETE_CHAR)


def test_reset_clears_partial_sequence() -> None:
    interpreter = make_interpreter()
    interpreter.handle_normal("g", None, None)

    interpreter.reset()

    assert interpreter.pending == ()
    assert interpreter.handle_normal("x", None, None) == Action(ActionKind.DELETE_CHAR)


def test_char_argument_commands() -> None:
    interpreter = make_interpreter()

    assert feed_normal(interpreter, "rx") == [None, Action.with_char(ActionKind.REPLACE, "x")]
    assert feed_normal(interpreter, "f;") == [None, Action.with_char(ActionKind.FIND_CHAR, ";")]
    assert feed_normal(interpreter, "Ta") == [
        None,
        Action.with_char(ActionKind.TILL_CHAR_BACK, "a"),
    ]


def test_char_argument_rejects_named_keys() -> None:
    interpreter = make_interpreter()

    assert interpreter.handle_normal("t", None, None) is None
    assert interpreter.handle_normal("escape", None, None) is None
    assert interpreter.handle_normal("x", None, None) == Action(ActionKind.DELETE_CHAR)


def test_operator_keys_set_operator() -> None:
    interpreter = make_interpreter()

    assert interpreter.handle_normal("d", None, None) == Action.set_operator("d")
    assert interpreter.handle_normal("c", None, None) == Action.set_operator("c")


def test_doubled_operator_yields_line_variant() -> None:
    interpreter = make_interpreter()

    assert interpreter.handle_normal("d", None, "d") == Action(ActionKind.DELETE_LINE)
    interpreter.reset()
    assert interpreter.handle_normal("y", 2, "y") == Action(ActionKind.YANK_LINE, count=2)


def test_operator_folds_motion() -> None:
    interpreter = make_interpreter()

    assert interpreter.handle_normal("w", 3, "d") == Action(ActionKind.DELETE, count=3)
    interpreter.reset()
    assert feed_normal(interpreter, "gg", operator="y") == [None, Action(ActionKind.YANK)]


def test_spent_operator_no_longer_folds() -> None:
    interpreter = make_interpreter()

    assert interpreter.handle_normal("w", None, "d") == Action(ActionKind.DELETE, count=1)
    # The manager still reports "d" as pending.
    assert interpreter.handle_normal("j", None, "d") == Action(ActionKind.MOVE_DOWN, count=1)
    assert interpreter.handle_normal("d", None, "d") == Action.set_operator("d")
    assert interpreter.handle_normal("w", None, "d") == Action(ActionKind.DELETE, count=1)


def test_visual_keys() -> None:
    interpreter = make_interpreter()

    assert interpreter.handle_visual("l", 2) == Action(ActionKind.MOVE_RIGHT, count=2)
    assert interpreter.handle_visual("x", 1) == Action(ActionKind.DELETE)
    assert interpreter.handle_visual(">", 1) == Action(ActionKind.INDENT)
    assert interpreter.handle_visual("G", 5) == Action(ActionKind.MOVE_TO_BOTTOM)
    assert interpreter.handle_visual("i", 1) is None


def test_custom_registry_is_used_as_is() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry, include=("normal.x",))
    interpreter = KeymapInterpreter(registry)

    assert interpreter.handle_normal("x", None, None) == Action(ActionKind.DELETE_CHAR)
    assert interpreter.handle_normal("i", None, None) is None
