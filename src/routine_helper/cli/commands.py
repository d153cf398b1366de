# src/routine_helper/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..core.errors import ContractViolationError, RoutineHelperError
from ..core.state import AppState
from ..routines.progress import active_routines, routine_progress, today_progress, toggle_completion
from ..routines.routine_models import CATEGORIES, DEFAULT_TARGET_DAYS
from ..routines.stats import aggregate
from ..tasks.matrix import DEFAULT_SORT_OPTIONS, partition, reassign, toggle_task
from ..tasks.task_models import Quadrant, SortOption, Task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

SHORT_ID = 8

QUADRANT_TITLES: dict[Quadrant, str] = {
    Quadrant.URGENT_IMPORTANT: "Urgent & important (do now)",
    Quadrant.URGENT_NOT_IMPORTANT: "Urgent, not important (delegate or do quickly)",
    Quadrant.NOT_URGENT_IMPORTANT: "Important, not urgent (schedule)",
    Quadrant.NOT_URGENT_NOT_IMPORTANT: "Neither (eliminate or minimize)",
}


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /matrix, ...)."""

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
        Domain errors (unknown id, bad date, bad target) become the reply text.
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

        try:
            return handler(state, args)
        except RoutineHelperError as e:
            logger.debug("Command /%s rejected: %s", name, e)
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _resolve_id(ids: Iterable[str], prefix: str, entity: str) -> str:
    """Accept a full id or any unique prefix of one."""
    ids = list(ids)
    if prefix in ids:
        return prefix
    matches = [i for i in ids if i.startswith(prefix)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        # Let the engine/store raise the proper NotFoundError.
        return prefix
    raise ContractViolationError(f"ambiguous {entity} id prefix {prefix!r} ({len(matches)} matches)")


def _fmt_task(task: Task) -> str:
    due = f" due {task.due_date.isoformat()}" if task.due_date else ""
    mark = "x" if task.completed else " "
    return (
        f"[{mark}] {task.id[:SHORT_ID]} {task.name} "
        f"(importance {task.importance}, urgency {task.urgency}){due}"
    )


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    snapshot = "ON" if getattr(state.settings, "save_snapshot", False) else "OFF"
    return (
        "Status:\n"
        f"  Today: {state.clock.today()}\n"
        f"  Tasks: {len(state.store.list_tasks())}\n"
        f"  Routines: {len(state.store.list_routines())}\n"
        f"  Snapshot: {snapshot} ({getattr(state.settings, 'snapshot_path', '-')})"
    )


def cmd_matrix(state: AppState, args: list[str]) -> str:
    buckets = partition(state.store.list_tasks(), state.sort_options)
    lines = ["Task matrix:"]
    for quadrant, tasks in buckets.items():
        option = state.sort_options.get(quadrant, DEFAULT_SORT_OPTIONS[quadrant])
        lines.append(f"{QUADRANT_TITLES[quadrant]} ({len(tasks)}) [sort: {option.label}]")
        if not tasks:
            lines.append("    (no tasks)")
        for task in tasks:
            lines.append(f"    {_fmt_task(task)}")
    return "\n".join(lines)


def cmd_task(state: AppState, args: list[str]) -> str:
    """
    /task add <importance> <urgency> <name...>
    /task done <id>             -> toggle completed
    /task move <id> <quadrant>  -> q1..q4 or urgent_important, ...
    /task list [all]
    /task rm <id>
    """
    usage = (
        "Usage:\n"
        "  /task add <importance> <urgency> <name...>\n"
        "  /task done <id>\n"
        "  /task move <id> <q1|q2|q3|q4>\n"
        "  /task list [all]\n"
        "  /task rm <id>"
    )
    if not args:
        return usage

    sub = args[0].lower()
    store = state.store
    task_ids = [t.id for t in store.list_tasks()]

    if sub == "add":
        if len(args) < 4:
            return "Usage: /task add <importance> <urgency> <name...>"
        try:
            importance, urgency = int(args[1]), int(args[2])
        except ValueError:
            return "importance and urgency must be integers (0-100)."
        task = store.add_task(name=" ".join(args[3:]), importance=importance, urgency=urgency)
        return f"Task added: {_fmt_task(task)}"

    if sub == "done" and len(args) >= 2:
        task_id = _resolve_id(task_ids, args[1], "task")
        task = store.patch_task(toggle_task(store.list_tasks(), task_id))
        return f"{'Completed' if task.completed else 'Reopened'}: {_fmt_task(task)}"

    if sub == "move" and len(args) >= 3:
        task_id = _resolve_id(task_ids, args[1], "task")
        target = Quadrant.parse(args[2])
        task = store.patch_task(reassign(store.list_tasks(), task_id, target))
        return f"Moved to {QUADRANT_TITLES[target]}: {_fmt_task(task)}"

    if sub == "list":
        show_all = len(args) > 1 and args[1].lower() == "all"
        tasks = [t for t in store.list_tasks() if show_all or not t.completed]
        if not tasks:
            return "No tasks."
        return "\n".join(_fmt_task(t) for t in tasks)

    if sub in ("rm", "delete") and len(args) >= 2:
        task_id = _resolve_id(task_ids, args[1], "task")
        store.delete_task(task_id)
        return f"Task deleted: {task_id[:SHORT_ID]}"

    return usage


def cmd_sort(state: AppState, args: list[str]) -> str:
    """
    /sort                       -> show current sort per quadrant
    /sort <quadrant> <option>   -> e.g. /sort q1 name-asc
    /sort reset
    """
    if args and args[0].lower() == "reset":
        state.sort_options.clear()
        return "Sort options reset to defaults."

    if len(args) < 2:
        lines = ["Sort per quadrant:"]
        for quadrant in Quadrant:
            option = state.sort_options.get(quadrant, DEFAULT_SORT_OPTIONS[quadrant])
            lines.append(f"  {quadrant.value}: {option.label}")
        lines.append(
            "Options: importance-desc|importance-asc|urgency-desc|urgency-asc|"
            "name-asc|created-desc|due-asc|due-desc"
        )
        return "\n".join(lines)

    quadrant = Quadrant.parse(args[0])
    option = SortOption.parse(args[1])
    state.sort_options[quadrant] = option
    return f"{quadrant.value} now sorted by {option.label}."


def cmd_routine(state: AppState, args: list[str]) -> str:
    """
    /routine add [target_days] <category> <name...>
    /routine rm <id>
    """
    usage = (
        "Usage:\n"
        "  /routine add [target_days] <category> <name...>\n"
        "  /routine rm <id>\n"
        f"Suggested categories: {', '.join(CATEGORIES)}"
    )
    if not args:
        return usage

    sub = args[0].lower()
    store = state.store

    if sub == "add":
        rest = args[1:]
        try:
            target_days = int(rest[0])
            rest = rest[1:]
        except (IndexError, ValueError):
            target_days = int(getattr(state.settings, "default_target_days", DEFAULT_TARGET_DAYS))
        if len(rest) < 2:
            return usage
        routine = store.add_routine(
            name=" ".join(rest[1:]),
            category=rest[0],
            target_days=target_days,
        )
        return f"Routine added: {routine.id[:SHORT_ID]} {routine.name} ({routine.category}, {routine.target_days} days)"

    if sub in ("rm", "delete") and len(args) >= 2:
        routine_id = _resolve_id((r.id for r in store.list_routines()), args[1], "routine")
        store.delete_routine(routine_id)
        return f"Routine deleted: {routine_id[:SHORT_ID]}"

    return usage


def cmd_routines(state: AppState, args: list[str]) -> str:
    """/routines [all] -> active routines (or all) with streak and progress."""
    today = state.clock.today()
    routines = list(state.store.list_routines())
    if not (args and args[0].lower() == "all"):
        routines = active_routines(routines)
    if not routines:
        return "No routines yet. Add one with /routine add [target_days] <category> <name...>"

    lines = [f"Routines ({today}):"]
    for routine in routines:
        p = routine_progress(routine, today)
        check = "x" if p.completed_today else " "
        streak = f", streak {p.streak}d" if p.streak > 0 else ""
        done = " [finished]" if p.finished else ""
        lines.append(
            f"  [{check}] {routine.id[:SHORT_ID]} {routine.name} ({routine.category}) "
            f"{p.completed}/{p.target_days} days, {round(p.rate)}%{streak}{done}"
        )
    return "\n".join(lines)


def cmd_check(state: AppState, args: list[str]) -> str:
    """/check <routine_id> [YYYY-MM-DD] -> toggle completion for today (or the given day)."""
    if not args:
        return "Usage: /check <routine_id> [YYYY-MM-DD]"
    store = state.store
    routine_id = _resolve_id((r.id for r in store.list_routines()), args[0], "routine")
    day = args[1] if len(args) > 1 else state.clock.today()
    routine = store.save_routine(toggle_completion(store.get_routine(routine_id), day))
    done = day in routine.completed_dates
    p = routine_progress(routine, state.clock.today())
    return (
        f"{routine.name}: {day} {'done' if done else 'cleared'} "
        f"({p.completed}/{p.target_days}, streak {p.streak}d)"
    )


def cmd_today(state: AppState, args: list[str]) -> str:
    today = state.clock.today()
    p = today_progress(state.store.list_routines(), today)
    return (
        f"Today ({today}): {p.completed_today}/{p.active_total} routines done, "
        f"{round(p.rate)}%"
    )


def cmd_stats(state: AppState, args: list[str]) -> str:
    stats = aggregate(state.store.list_routines(), state.clock.today())
    if stats.total_routines == 0:
        return "No statistics yet. Add routines and complete them to see stats."

    lines = [
        "Statistics:",
        f"  Routines: {stats.total_routines}",
        f"  Completions: {stats.total_completions}",
        f"  Average completion: {round(stats.average_completion_rate)}%",
        f"  Longest streak: {stats.longest_streak}d",
    ]
    if stats.best_routine is not None:
        best = stats.best_routine
        lines.append(
            f"  Best routine: {best.name} ({best.category}) "
            f"{best.completed_count}/{best.target_days}, {round(stats.best_rate)}%"
        )
    lines.append("  By category:")
    for category, cat in stats.per_category.items():
        lines.append(f"    {category or '(none)'}: {cat.count} routines, {cat.completions} completions")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show today, collection sizes and snapshot path.")
registry.register("matrix", cmd_matrix, help_text="Show open tasks by quadrant.", aliases=["m"])
registry.register(
    "task", cmd_task, help_text="Tasks: /task add | done | move | list | rm.", aliases=["t"]
)
registry.register("sort", cmd_sort, help_text="Per-quadrant sort: /sort <quadrant> <option>.")
registry.register("routines", cmd_routines, help_text="List active routines: /routines [all].")
registry.register("routine", cmd_routine, help_text="Routines: /routine add | rm.", aliases=["r"])
registry.register("check", cmd_check, help_text="Toggle a routine for today: /check <id> [date].")
registry.register("today", cmd_today, help_text="Today's progress over active routines.")
registry.register("stats", cmd_stats, help_text="Routine statistics.")
