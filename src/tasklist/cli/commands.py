# src/tasklist/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.ports import Prompter
from ..core.state import AppState
from ..errors import (
    InvalidArgumentError,
    StorageReadError,
    StorageWriteError,
    TaskNotFoundError,
    TaskStoreError,
)

CommandHandler2 = Callable[[AppState, str], str]
CommandHandler3 = Callable[[AppState, str, Prompter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


def friendly_store_error_message(e: TaskStoreError) -> str:
    """Turn a store/controller error into one line the user can act on."""
    if isinstance(e, InvalidArgumentError):
        return f"Invalid input: {e}."
    if isinstance(e, TaskNotFoundError):
        return "That task no longer exists; it was removed from the list."
    if isinstance(e, StorageReadError):
        return f"Could not read tasks: {e}. Use /reload to try again."
    if isinstance(e, StorageWriteError):
        return f"Could not save task: {e}. Nothing was changed."
    return f"Task storage error: {e}."


class CommandRegistry:
    """Simple slash-command registry used by the console (/add, /edit, ...)."""

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

    def handle(
        self,
        state: AppState,
        line: str,
        prompt: Prompter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Only the command name is split off; the handler gets the rest of the
        line as typed, so titles keep their inner spacing.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1] if len(parts) > 1 else ""

        if name not in self._handlers:
            return (
                f"Unknown command: /{name}. Use /help to list available commands, "
                f"or /add /{name} ... to add it as a task."
            )
        return self.dispatch(state, name, args, prompt)

    def dispatch(
        self,
        state: AppState,
        name: str,
        args: str,
        prompt: Prompter | None = None,
    ) -> str:
        """
        Run a registered command with already-split argument text.

        Task store errors never escape: they come back as a user-visible reply.
        """
        handler = self._handlers[name.lower()]

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, prompt)

            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except TaskStoreError as e:
            logger.info("/%s failed: %s", name, e)
            return friendly_store_error_message(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        lines.append("Any other text is added as a new task.")
        lines.append("To add a task that starts with '/', use /add <title>.")
        return "\n".join(lines)


registry = CommandRegistry()


def render_list(state: AppState) -> str:
    titles = state.controller.titles()
    if not titles:
        return "No tasks yet. Type a title (or /add) to create one."
    width = len(str(len(titles)))
    lines = ["Task List:"]
    for i, title in enumerate(titles, start=1):
        lines.append(f"  {i:>{width}}. {title}")
    return "\n".join(lines)


def _parse_row(args: str) -> tuple[int, str]:
    """Split "N rest of line" into the row number and the untouched rest."""
    parts = args.split(maxsplit=1)
    if not parts:
        raise InvalidArgumentError("a row number is required")
    try:
        row = int(parts[0])
    except ValueError:
        raise InvalidArgumentError(f"{parts[0]!r} is not a row number") from None
    return row, parts[1] if len(parts) > 1 else ""


def cmd_help(state: AppState, args: str) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: str) -> str:
    return render_list(state)


def cmd_reload(state: AppState, args: str) -> str:
    state.controller.load()
    state.load_error = None
    return render_list(state)


def cmd_status(state: AppState, args: str) -> str:
    store = state.task_store
    return (
        "Status:\n"
        f"  Backend: {store.backend_name}\n"
        f"  Location: {store.path}\n"
        f"  Tasks: {store.count_tasks()}"
    )


def cmd_add(state: AppState, args: str, prompt: Prompter | None = None) -> str:
    """
    /add <title>  -> add a task
    /add          -> ask for the title
    """
    title = args
    if not title.strip() and prompt is not None:
        title = prompt.ask("New Task - What do you want to do? ")

    # Empty input is rejected here, before anything reaches the store.
    if not title.strip():
        return "Nothing added (empty title)."

    task = state.controller.add(title)
    return f"Added #{len(state.controller)}: {task.title}"


def cmd_edit(state: AppState, args: str, prompt: Prompter | None = None) -> str:
    """
    /edit N <title>  -> rename row N
    /edit N          -> ask for the new title, current one prefilled
    """
    row, title = _parse_row(args)
    current = state.controller.task_at(row)

    if not title.strip() and prompt is not None:
        title = prompt.ask("Edit your item: ", default=current.title)

    if not title.strip():
        return "Nothing changed (empty title)."
    if title.strip() == current.title:
        return "Nothing changed."

    task = state.controller.edit(row, title)
    return f"Updated #{row}: {task.title}"


def cmd_delete(state: AppState, args: str, prompt: Prompter | None = None) -> str:
    """
    /delete N  -> delete row N after an explicit yes
    """
    row, _ = _parse_row(args)
    current = state.controller.task_at(row)

    if getattr(state.settings, "confirm_delete", True):
        if prompt is None or not prompt.confirm(f'Delete "{current.title}"?'):
            return "Kept."

    state.controller.remove(row)
    return f"Deleted: {current.title}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <title>.", aliases=["new"])
registry.register("edit", cmd_edit, help_text="Rename a task: /edit N [title].", aliases=["e"])
registry.register(
    "delete", cmd_delete, help_text="Delete a task: /delete N.", aliases=["del", "rm"]
)
registry.register("reload", cmd_reload, help_text="Re-read tasks from storage.")
registry.register("status", cmd_status, help_text="Show storage backend, location and count.")
