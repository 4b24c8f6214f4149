# src/bloom/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from ..garden.models import GRID_COLUMNS, Flower, Task, parse_timestamp
from ..garden.plots import iter_plots, occupancy
from ..garden.rewards import FLOWER_GLYPHS, LEGEND

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

JOURNAL_PROMPTS = (
    "What did your garden teach you today?",
    "Which habit felt most nourishing?",
)

MANTRA = "Consistency creates calm. Show up gently, and your garden will mirror your care."


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering helpers ----


def format_task_line(index: int, task: Task) -> str:
    mark = "x" if task.is_completed else " "
    label = "Completed" if task.is_completed else "Open"
    return f"{index:>2}. [{mark}] {task.title}  (difficulty {task.difficulty}, {label})"


def render_tasks(state: AppState) -> str:
    tasks = state.day.tasks
    if not tasks:
        return "No tasks yet. Add one to plant your first flower."
    return "\n".join(format_task_line(i, t) for i, t in enumerate(tasks, start=1))


def render_garden(state: AppState) -> str:
    plots = occupancy(state.day.flowers)
    rows: list[str] = []
    row: list[str] = []
    for x, y in iter_plots():
        flower = plots.get((x, y))
        row.append(FLOWER_GLYPHS[flower.type] if flower else " .")
        if x == GRID_COLUMNS - 1:
            rows.append(f"{y} " + " ".join(row))
            row = []
    header = "  " + " ".join(f"{x:>2}" for x in range(GRID_COLUMNS))
    return "\n".join([header, *rows, LEGEND])


def _planted_local(flower: Flower) -> str:
    dt = parse_timestamp(flower.created_at)
    if dt is None:
        return flower.created_at
    return dt.astimezone().strftime("%H:%M:%S")


def render_bloom_detail(state: AppState) -> str:
    flower = state.day.selected_flower
    if flower is None:
        return "No bloom selected."
    task = state.day.selected_task
    title = task.title if task else "Unknown task"
    return (
        "Bloom detail:\n"
        f"  {title}\n"
        f"  {FLOWER_GLYPHS[flower.type]} {flower.type.value} at ({flower.x}, {flower.y})\n"
        f"  Planted {_planted_local(flower)}"
    )


def _resolve_task(state: AppState, ref: str) -> Task | None:
    tasks = state.day.tasks
    if ref.isdigit():
        n = int(ref)
        if 1 <= n <= len(tasks):
            return tasks[n - 1]
        return None
    return state.day.get_task(ref)


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    day = state.day
    done = sum(1 for t in day.tasks if t.is_completed)
    return (
        "Status:\n"
        f"  Day: {day.date_key}\n"
        f"  Loaded {len(day.tasks)} tasks ({done} completed), {len(day.flowers)} flowers\n"
        f"  Storage: {state.storage_label}\n"
        f"  {MANTRA}"
    )


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <title>        -> difficulty 1
    /add 2 <title>      -> difficulty 2 (1..3)
    """
    difficulty = 1
    if args and args[0] in ("1", "2", "3"):
        difficulty = int(args[0])
        args = args[1:]

    task = state.day.add_task(" ".join(args), difficulty)
    if task is None:
        return "Usage: /add [1|2|3] <title>"
    return f"Added: {task.title} (difficulty {task.difficulty})"


def cmd_done(state: AppState, args: list[str]) -> str:
    """/done <n|task-id> -> complete the n-th listed task (or by id)."""
    if not args:
        return "Usage: /done <n|task-id>"

    task = _resolve_task(state, args[0])
    if task is None:
        return f"No such task: {args[0]}"
    if task.is_completed:
        return f"Already completed: {task.title}"

    flower = state.day.complete_task(task.id)
    if flower is None:
        return f"Completed: {task.title}. The garden is full today, no new bloom."
    return (
        f"Completed: {task.title}. "
        f"{FLOWER_GLYPHS[flower.type]} A {flower.type.value} bloomed at ({flower.x}, {flower.y})."
    )


def cmd_tasks(state: AppState, args: list[str]) -> str:
    return render_tasks(state)


def cmd_garden(state: AppState, args: list[str]) -> str:
    return render_garden(state)


def cmd_show(state: AppState, args: list[str]) -> str:
    """/show <x> <y> -> select the bloom on that plot."""
    if len(args) != 2 or not all(a.isdigit() for a in args):
        return "Usage: /show <x> <y>"
    flower = state.day.flower_at(int(args[0]), int(args[1]))
    if flower is None:
        state.day.select_flower(None)
        return f"Plot ({args[0]}, {args[1]}) is empty."
    state.day.select_flower(flower.id)
    return render_bloom_detail(state)


def cmd_close(state: AppState, args: list[str]) -> str:
    state.day.select_flower(None)
    return "Closed."


def cmd_reset(state: AppState, args: list[str]) -> str:
    logger.debug("Reset requested day=%s", state.day.date_key)
    state.day.reset_day()
    return f"Reset {state.day.date_key}: tasks and flowers cleared."


def cmd_journal(state: AppState, args: list[str]) -> str:
    lines = ["Journal (capture today's reflections):"]
    lines.extend(f"  - {p}" for p in JOURNAL_PROMPTS)
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show today's date, counts and storage.")
registry.register("add", cmd_add, help_text="Add a task: /add [1|2|3] <title>.")
registry.register("done", cmd_done, help_text="Complete a task: /done <n|task-id>.")
registry.register("tasks", cmd_tasks, help_text="List today's tasks (newest first).", aliases=["ls"])
registry.register("garden", cmd_garden, help_text="Show today's 6x4 garden.", aliases=["g"])
registry.register("show", cmd_show, help_text="Bloom detail for a plot: /show <x> <y>.")
registry.register("close", cmd_close, help_text="Close the bloom detail.")
registry.register("reset", cmd_reset, help_text="Clear today's tasks and flowers.")
registry.register("journal", cmd_journal, help_text="Show today's journal prompts.")
