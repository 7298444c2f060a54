# src/gantt_sync/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import Any, cast

from ..core.state import AppState
from ..tasks.errors import LookupFailure, PersistenceFailure
from ..tasks.reconciler import ReconcileResult
from ..tasks.task_models import (
    TASK_FIELDS,
    FieldKind,
    Person,
    Predecessor,
    Task,
    UnresolvedPerson,
)

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], Awaitable[str]]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /list, ...)."""

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

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
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

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return await h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return await h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- formatting ----


def _fmt_date(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d") if value else "-"


def _fmt_people(persons: tuple[Person, ...]) -> str:
    return ", ".join(p.display_name or p.account_name for p in persons) or "-"


def format_task_line(task: Task) -> str:
    return (
        f"#{task.id} [{task.status}] {task.title} "
        f"{task.percent_complete}% {_fmt_date(task.start_date)}..{_fmt_date(task.due_date)} "
        f"@{_fmt_people(task.assigned_to)}"
    )


def format_task_detail(task: Task) -> str:
    preds = ", ".join(f"#{p.id} {p.title}".strip() for p in task.predecessors) or "-"
    return "\n".join(
        [
            f"Task #{task.id}: {task.title}",
            f"  Status: {task.status} ({task.percent_complete}%)",
            f"  Priority: {task.priority or '-'}",
            f"  Dates: {_fmt_date(task.start_date)} .. {_fmt_date(task.due_date)}",
            f"  Assigned: {_fmt_people(task.assigned_to)}",
            f"  Predecessors: {preds}",
        ]
    )


# ---- argument parsing ----


def _parse_task_id(raw: str) -> int | None:
    try:
        return int(raw.lstrip("#"))
    except ValueError:
        return None


def parse_scalar_value(field_name: str, raw: str) -> Any:
    """Console text -> UI-level field value. Raises ValueError on bad input."""
    spec = TASK_FIELDS[field_name]
    text = raw.strip()
    if spec.kind == FieldKind.DATE:
        if text.lower() in ("none", "-", ""):
            return None
        return datetime.fromisoformat(text)
    if field_name == "percentComplete":
        pct = int(text.rstrip("%"))
        if not 0 <= pct <= 100:
            raise ValueError("percentComplete must be between 0 and 100")
        return pct
    if field_name == "priority" and text.lower() in ("none", "-"):
        return None
    return text


def _split_csv(args: list[str]) -> list[str]:
    return [p.strip() for p in " ".join(args).replace(",", " ").split() if p.strip()]


def _person_aliases(person: Person) -> set[str]:
    # "i:0#.f|membership|jdoe@contoso.com" answers to the full claim, the login
    # after the last "|", the part before "@" and the display name.
    login = person.account_name.rsplit("|", 1)[-1]
    names = {person.account_name, login, login.split("@", 1)[0], person.display_name}
    return {n.strip().lower() for n in names if n and n.strip()}


def persons_for_accounts(task: Task, accounts: list[str]) -> list[Person]:
    """Reuse already-assigned persons from the task; anything new goes out unresolved."""
    known: dict[str, Person] = {}
    for p in task.assigned_to:
        for alias in _person_aliases(p):
            known.setdefault(alias, p)
    return [known.get(acct.strip().lower()) or UnresolvedPerson(account_name=acct) for acct in accounts]


def _describe(result: ReconcileResult, field_name: str) -> str:
    if not result.changed:
        return f"Task #{result.task.id}: {field_name} unchanged."
    return f"Updated: {format_task_line(result.task)}"


async def _run_edit(edit: Awaitable[ReconcileResult], field_name: str) -> str:
    try:
        result = await edit
    except LookupFailure as e:
        return f"Update not applied: {e}"
    except PersistenceFailure as e:
        cause = e.__cause__
        detail = f" ({cause})" if cause is not None else ""
        return f"Update not applied: {e}{detail}"
    return _describe(result, field_name)


# ---- handlers ----


async def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.board.tasks or []
    if not tasks:
        return "No tasks found."
    return "\n".join(format_task_line(t) for t in tasks)


async def cmd_show(state: AppState, args: list[str]) -> str:
    task_id = _parse_task_id(args[0]) if args else None
    if task_id is None:
        return "Usage: /show <task id>"
    task = state.board.get_task(task_id)
    if task is None:
        return f"No task #{task_id}."
    return format_task_detail(task)


async def cmd_options(state: AppState, args: list[str]) -> str:
    board = state.board
    return "\n".join(
        [
            "Status: " + (", ".join(o.text for o in board.status_options) or "-"),
            "Priority: " + (", ".join(o.text for o in board.priority_options) or "-"),
            "Predecessors: " + (", ".join(f"{o.key}={o.text}" for o in board.predecessor_options) or "-"),
        ]
    )


async def cmd_set(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /set <id> <field> <value...>
    Fields: title, startDate, dueDate, percentComplete, status, priority.
    Dates as YYYY-MM-DD (or "none" to clear).
    """
    usage = "Usage: /set <id> <field> <value>. Fields: " + ", ".join(
        n for n, s in TASK_FIELDS.items() if s.kind in (FieldKind.SCALAR, FieldKind.DATE)
    )
    if len(args) < 2:
        return usage

    task_id = _parse_task_id(args[0])
    if task_id is None or state.board.get_task(task_id) is None:
        return f"No task {args[0]}."

    field_name = args[1]
    spec = TASK_FIELDS.get(field_name)
    if spec is None or spec.kind not in (FieldKind.SCALAR, FieldKind.DATE):
        return usage

    try:
        value = parse_scalar_value(field_name, " ".join(args[2:]))
    except ValueError as e:
        return f"Bad value for {field_name}: {e}"

    if emit:
        emit(f"Updating {field_name} on task #{task_id}...")
    return await _run_edit(state.board.on_scalar_field_change(task_id, field_name, value), field_name)


async def cmd_assign(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/assign <id> [account,account...]  (no accounts clears the field)"""
    task_id = _parse_task_id(args[0]) if args else None
    task = state.board.get_task(task_id) if task_id is not None else None
    if task is None:
        return "Usage: /assign <task id> [account,account...]"

    persons = persons_for_accounts(task, _split_csv(args[1:]))
    if emit and any(isinstance(p, UnresolvedPerson) for p in persons):
        emit("Resolving accounts...")
    return await _run_edit(state.board.on_person_field_change(task.id, "assignedTo", persons), "assignedTo")


async def cmd_preds(state: AppState, args: list[str]) -> str:
    """/preds <id> [task id,task id...]  (no ids clears the field)"""
    task_id = _parse_task_id(args[0]) if args else None
    task = state.board.get_task(task_id) if task_id is not None else None
    if task is None:
        return "Usage: /preds <task id> [task id,task id...]"

    titles = {o.key: o.text for o in state.board.predecessor_options}
    preds: list[Predecessor] = []
    for raw in _split_csv(args[1:]):
        pred_id = _parse_task_id(raw)
        if pred_id is None or str(pred_id) not in titles:
            return f"Unknown predecessor task: {raw}"
        if pred_id == task.id:
            return "A task cannot be its own predecessor."
        preds.append(Predecessor(id=pred_id, title=titles[str(pred_id)]))

    return await _run_edit(state.board.on_predecessor_field_change(task.id, preds), "predecessors")


async def _toggle(state: AppState, args: list[str], mark_complete: bool) -> str:
    task_id = _parse_task_id(args[0]) if args else None
    if task_id is None or state.board.get_task(task_id) is None:
        return f"Usage: /{'done' if mark_complete else 'reopen'} <task id>"
    return await _run_edit(state.board.on_completion_toggle(task_id, mark_complete), "status")


async def cmd_done(state: AppState, args: list[str]) -> str:
    return await _toggle(state, args, True)


async def cmd_reopen(state: AppState, args: list[str]) -> str:
    return await _toggle(state, args, False)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List tasks.", aliases=["ls"])
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("options", cmd_options, help_text="Show status/priority/predecessor choices.")
registry.register("set", cmd_set, help_text="Change a field: /set <id> <field> <value>.")
registry.register("assign", cmd_assign, help_text="Set assignees: /assign <id> acct1,acct2.")
registry.register("preds", cmd_preds, help_text="Set predecessors: /preds <id> 3,5.")
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>.")
registry.register("reopen", cmd_reopen, help_text="Clear completion (status from progress): /reopen <id>.")
