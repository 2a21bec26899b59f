from __future__ import annotations

from typing import List

from modal_input.actions import Action, ActionKind
from modal_input.adapters import HostAdapter, HostHooks
from modal_input.modes import CommandEntered, Mode
from modal_input.modes.mode_manager import ModeManager


def make_manager() -> ModeManager:
    manager = ModeManager()
    manager.enable()
    return manager


def test_adapter_performs_actions_and_updates_status() -> None:
    manager = make_manager()
    performed: List[Action] = []
    statuses: List[str] = []
    hooks = HostHooks(
        perform_action=performed.append,
        update_status=statuses.append,
    )
    adapter = HostAdapter(manager, hooks)

    adapter.feed("i")
    adapter.feed("escape")

    assert performed == [
        Action(ActionKind.ENTER_INSERT_MODE),
        Action(ActionKind.EXIT_INSERT_MODE),
    ]
    assert statuses == ["NORMAL", "INSERT", "NORMAL"]


def test_adapter_relays_command_events() -> None:
    manager = make_manager()
    command_lines: List[str] = []
    events: List[tuple[str, object | None]] = []
    hooks = HostHooks(
        perform_action=lambda action: None,
        show_command=command_lines.append,
        handle_event=lambda name, payload: events.append((name, payload)),
    )
    adapter = HostAdapter(manager, hooks)

    adapter.feed_all([":", "w", "q"])
    result = adapter.feed("enter")

    assert result.action == Action.execute_command("wq")
    assert command_lines[-2] == ":wq"
    assert command_lines[-1] == ""
    assert (CommandEntered.name, CommandEntered("wq")) in events


def test_adapter_shows_search_prompt() -> None:
    manager = make_manager()
    adapter = HostAdapter(manager, HostHooks(perform_action=lambda action: None))

    adapter.feed_all(["/", "a", "b"])

    assert manager.mode is Mode.SEARCH
    assert adapter.command_text() == "/ab"
    assert adapter.status_text() == "SEARCH"


def test_adapter_refreshes_on_lifecycle_changes() -> None:
    manager = ModeManager()
    statuses: List[str] = []
    adapter = HostAdapter(
        manager, HostHooks(perform_action=lambda action: None, update_status=statuses.append)
    )

    manager.enable()
    manager.disable()

    assert statuses == ["", "NORMAL", ""]
    adapter.detach()
    manager.enable()
    assert statuses == ["", "NORMAL", ""]


def test_adapter_emits_log_lines() -> None:
    manager = make_manager()
    lines: List[str] = []
    adapter = HostAdapter(manager, HostHooks(perform_action=lambda action: None, log=lines.append))

    adapter.feed("3")
    adapter.feed("j")

    assert lines[0].startswith("key -> ")
    assert "token='3'" in lines[0]
    assert any(line.startswith("result <- ") and "count=3" in line for line in lines)
    assert any("action='move_down:3'" in line for line in lines)
