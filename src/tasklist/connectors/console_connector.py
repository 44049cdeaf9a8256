# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..cli.commands import render_list
from ..core.state import AppState

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]


class ConsolePrompter:
    """Prompter backed by input(); the modal dialogs of the console UI."""

    def __init__(self, input_fn: InputFn = input) -> None:
        self._input = input_fn

    def ask(self, message: str, default: str = "") -> str:
        try:
            if default and self._input is input:
                return _input_prefilled(message, default)
            return self._input(message)
        except EOFError:
            return ""

    def confirm(self, message: str) -> bool:
        try:
            answer = self._input(f"{message} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")


def _input_prefilled(message: str, default: str) -> str:
    """input() with `default` already typed in, so the user can edit it."""
    try:
        import readline
    except ImportError:
        # No line editing (e.g. Windows): show the current value, Enter keeps it.
        return input(f"{message}[{default}] ") or default

    readline.set_startup_hook(lambda: readline.insert_text(default))
    try:
        return input(message)
    finally:
        readline.set_startup_hook()


def run_console_loop(state: AppState, *, input_fn: InputFn = input) -> None:
    app_name = str(getattr(state.settings, "app_name", "tasklist"))
    prompter = ConsolePrompter(input_fn)

    logger.info("Console started (%d tasks).", len(state.controller))
    print(f"[{app_name}] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    if state.load_error:
        print(state.load_error)
    print(render_list(state))

    while True:
        try:
            user_input = input_fn("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        before = state.controller.tasks
        try:
            if user_input.startswith("/"):
                response = command_registry.handle(state, user_input, prompt=prompter)
            else:
                # Plain text is a new task title, passed through as typed.
                response = command_registry.dispatch(state, "add", user_input, prompt=prompter)
        except KeyboardInterrupt:
            print("\nCancelled.")
            continue
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is not None:
            print(response)

        if state.controller.tasks != before:
            print(render_list(state))

    logger.info("Console finished.")
