# src/asana_tasks/cli/commands.py

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ..resources.tasks import Tasks

CommandHandler = Callable[[Tasks, list[str]], Awaitable[Any]]

logger = logging.getLogger(__name__)


class CommandError(ValueError):
    """Bad command line (unknown command, malformed id or field)."""


class CommandRegistry:
    """Simple command registry mapping CLI words onto router operations."""

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

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._handlers

    def help_text(self) -> str:
        width = max((len(k) for k in self._help), default=0)
        lines = ["Usage: asana-tasks <command> [id] [key=value ...]", "", "Commands:"]
        for name in sorted(self._help):
            lines.append(f"  {name.ljust(width)}  {self._help[name]}")
        return "\n".join(lines)

    async def handle(self, tasks: Tasks | None, argv: list[str]) -> Any:
        """
        Run one command like ["update", "7", "completed=true"].
        Returns whatever the router operation resolved to. tasks may be None for
        commands that need no client (help).
        """
        if not argv:
            raise CommandError("Empty command. Use 'help' to list available commands.")

        name = argv[0].lower()
        handler = self._handlers.get(name)
        if handler is None:
            raise CommandError(f"Unknown command: {argv[0]}. Use 'help' to list available commands.")

        logger.debug("Running command %s args=%s", name, argv[1:])
        return await handler(tasks, argv[1:])


def parse_identifier(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise CommandError(f"Expected a numeric id, got: {raw!r}") from None


def _reject_constant(name: str) -> Any:
    # NaN/Infinity can't be sent as JSON, so such values stay plain strings.
    raise ValueError(name)


def parse_fields(args: list[str]) -> dict[str, Any] | None:
    """
    key=value pairs -> dict. Values are JSON when they parse as JSON
    (true, 42, [1,2], null), plain strings otherwise.
    """
    if not args:
        return None
    out: dict[str, Any] = {}
    for arg in args:
        key, sep, raw = arg.partition("=")
        if not sep or not key:
            raise CommandError(f"Expected key=value, got: {arg!r}")
        try:
            out[key] = json.loads(raw, parse_constant=_reject_constant)
        except ValueError:
            out[key] = raw
    return out


def _fields_handler(method: str) -> CommandHandler:
    async def handler(tasks: Tasks, args: list[str]) -> Any:
        return await getattr(tasks, method)(parse_fields(args))

    return handler


def _id_handler(method: str, *, takes_fields: bool = True) -> CommandHandler:
    async def handler(tasks: Tasks, args: list[str]) -> Any:
        if not args:
            raise CommandError(f"Missing id for {method}.")
        ident = parse_identifier(args[0])
        rest = args[1:]
        if not takes_fields:
            if rest:
                raise CommandError(f"{method} takes only an id.")
            return await getattr(tasks, method)(ident)
        return await getattr(tasks, method)(ident, parse_fields(rest))

    return handler


# command, router method, alias (operation name), help
_FIELDS_COMMANDS: list[tuple[str, str, str, str]] = [
    ("create", "create", "create", "key=value...  Create a task (workspace/projects/parent in fields)"),
    ("list", "find_all", "findAll", "key=value...  Filter tasks (assignee, workspace, completed_since, modified_since)"),
]

_ID_COMMANDS: list[tuple[str, str, str, str]] = [
    ("create-in-workspace", "create_in_workspace", "createInWorkspace", "<workspace> key=value...  Create a task in a workspace"),
    ("get", "find_by_id", "findById", "<task>  Show the complete task record"),
    ("update", "update", "update", "<task> key=value...  Update only the given fields"),
    ("project-tasks", "find_by_project", "findByProject", "<project>  Tasks in a project, by priority"),
    ("tag-tasks", "find_by_tag", "findByTag", "<tag>  Tasks with a tag"),
    ("add-followers", "add_followers", "addFollowers", "<task> followers=[...]  Add followers"),
    ("remove-followers", "remove_followers", "removeFollowers", "<task> followers=[...]  Remove followers"),
    ("projects", "projects", "projects", "<task>  Projects the task is in"),
    ("add-project", "add_project", "addProject", "<task> project=<id> [insert_after|insert_before|section]=<id>"),
    ("remove-project", "remove_project", "removeProject", "<task> project=<id>  Remove from a project"),
    ("tags", "tags", "tags", "<task>  Tags on the task"),
    ("add-tag", "add_tag", "addTag", "<task> tag=<id>  Add a tag"),
    ("remove-tag", "remove_tag", "removeTag", "<task> tag=<id>  Remove a tag"),
    ("subtasks", "subtasks", "subtasks", "<task>  Subtasks of the task"),
    ("add-subtask", "add_subtask", "addSubtask", "<task> subtask=<id>  Reparent an existing task"),
    ("stories", "stories", "stories", "<task>  Stories (comments, activity) on the task"),
    ("comment", "add_comment", "addComment", "<task> text=...  Comment as the current user"),
]


def build_registry() -> CommandRegistry:
    reg = CommandRegistry()

    for name, method, alias, help_text in _FIELDS_COMMANDS:
        aliases = [alias] if alias != name else []
        reg.register(name, _fields_handler(method), help_text, aliases)

    for name, method, alias, help_text in _ID_COMMANDS:
        aliases = [alias] if alias != name else []
        reg.register(name, _id_handler(method), help_text, aliases)

    reg.register("delete", _id_handler("delete", takes_fields=False), "<task>  Move the task to the trash")

    async def show_help(tasks: Tasks | None, args: list[str]) -> str:
        return reg.help_text()

    reg.register("help", show_help, "Show this list", aliases=["-h", "--help"])

    return reg
