# src/daytasks/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import cmd_add, cmd_save
from ..cli.commands import registry as command_registry
from ..cli.render import render_page
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _print_page(state: AppState) -> None:
    print(render_page(state.manager.views(), state.store.tasks()))
    print()


def handle_line(state: AppState, line: str) -> str | None:
    """
    Route one line of input.

    - slash commands go to the registry
    - while editing, plain text is the new text for the task being edited
    - otherwise plain text is a shorthand for /add

    Plain text goes to the handlers as typed, inner spacing included.
    """
    if line.startswith("/"):
        return command_registry.handle(state, line, emit=print)
    if state.manager.editing_id is not None:
        return cmd_save(state, [line])
    return cmd_add(state, [line])


def run_console_loop(state: AppState) -> None:
    logger.info("Console started (tasks=%d).", len(state.store))
    print("Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    _print_page(state)

    # Re-render the current page whenever the task list actually changed.
    changed = False

    def _on_change(_snapshot) -> None:
        nonlocal changed
        changed = True

    unsubscribe = state.store.subscribe(_on_change)
    try:
        while True:
            try:
                user_input = input("> ").strip()
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

            changed = False
            try:
                response = handle_line(state, user_input)
            except OSError as e:
                logger.exception("Storage write failed.")
                response = f"Could not save tasks: {e}"
            except Exception:
                logger.exception("Command handler crashed.")
                response = "Internal error while handling a command."

            if response:
                print(response)
                print()
            if changed:
                _print_page(state)
    finally:
        unsubscribe()

    logger.info("Console finished.")
