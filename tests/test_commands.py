# tests/test_commands.py

from __future__ import annotations

from bloom.cli.commands import CommandRegistry, registry
from bloom.connectors.console_connector import handle_line, run_console_loop
from bloom.core.state import AppState
from bloom.garden.models import FlowerType


def test_command_registry_routes_and_aliases(state: AppState) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    def h(state, args):
        called.append(args)
        return "ok"

    reg.register("a", h, "a", aliases=["alpha"])

    assert reg.handle(state, "/a x y") == "ok"
    assert reg.handle(state, "/ALPHA") == "ok"
    assert called == [["x", "y"], []]


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_and_done_plant_a_rose(state: AppState) -> None:
    assert registry.handle(state, "/add 3 Deep work") == "Added: Deep work (difficulty 3)"
    reply = registry.handle(state, "/done 1") or ""
    assert "Completed: Deep work" in reply
    assert "Rose bloomed at (0, 0)" in reply
    assert state.day.flowers[0].type is FlowerType.ROSE

    assert registry.handle(state, "/done 1") == "Already completed: Deep work"
    assert registry.handle(state, "/done 9") == "No such task: 9"


def test_add_without_title_is_usage(state: AppState) -> None:
    assert registry.handle(state, "/add 2") == "Usage: /add [1|2|3] <title>"
    assert state.day.tasks == []


def test_plain_text_adds_easy_task(state: AppState) -> None:
    assert handle_line(state, "  Stretch  ") == "Added: Stretch (difficulty 1)"
    assert handle_line(state, "   ") is None
    assert [t.title for t in state.day.tasks] == ["Stretch"]


def test_show_and_close_bloom_detail(state: AppState) -> None:
    handle_line(state, "Stretch")
    handle_line(state, "/done 1")

    detail = registry.handle(state, "/show 0 0") or ""
    assert "Bloom detail" in detail
    assert "Stretch" in detail
    assert "Daisy at (0, 0)" in detail
    assert state.day.selected_task is not None

    assert registry.handle(state, "/show 1 0") == "Plot (1, 0) is empty."
    assert state.day.selected_flower is None

    registry.handle(state, "/show 0 0")
    assert registry.handle(state, "/close") == "Closed."
    assert state.day.selected_flower is None


def test_garden_and_tasks_rendering(state: AppState) -> None:
    assert registry.handle(state, "/tasks") == "No tasks yet. Add one to plant your first flower."
    handle_line(state, "/add 2 Tulip time")
    handle_line(state, "/done 1")

    assert "[x] Tulip time" in (registry.handle(state, "/ls") or "")
    garden = registry.handle(state, "/garden") or ""
    assert "🌷" in garden
    assert "Daisy = easy" in garden


def test_reset_and_status(state: AppState) -> None:
    handle_line(state, "a")
    handle_line(state, "/done 1")
    assert "Loaded 1 tasks (1 completed), 1 flowers" in (registry.handle(state, "/status") or "")

    assert registry.handle(state, "/reset") == "Reset 2024-05-01: tasks and flowers cleared."
    assert state.day.tasks == []
    assert state.day.flowers == []


def test_journal_lists_prompts(state: AppState) -> None:
    reply = registry.handle(state, "/journal") or ""
    assert "What did your garden teach you today?" in reply


def test_console_loop_runs_until_exit(state: AppState) -> None:
    lines = iter(["Stretch", "/done 1", "/exit", "never read"])
    out: list[str] = []

    run_console_loop(state, read=lambda _prompt: next(lines), write=out.append)

    assert state.day.get_task(state.day.tasks[0].id).is_completed
    assert any("Daisy bloomed" in line for line in out)
    assert next(lines) == "never read"


def test_console_loop_stops_on_eof(state: AppState) -> None:
    def read(_prompt: str) -> str:
        raise EOFError

    out: list[str] = []
    run_console_loop(state, read=read, write=out.append)
    assert len(out) == 1
