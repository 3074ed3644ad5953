"""Main menu — an explicit state machine over :class:`MenuCommand`.

States
------
``MAIN_MENU``
    Initial state, re-entered after every command.
``RUNNING``
    A command handler is executing.
``TERMINATED``
    The user chose Quit (or input closed); :meth:`MenuLoop.run` returns.

A handler that raises :class:`~easypost_cli.exceptions.EasypostCliError`
gets its message rendered and control returns to ``MAIN_MENU``.  Closed
input and ``KeyboardInterrupt`` are left to the CLI error boundary.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Mapping

from easypost_cli.cli import exit_codes
from easypost_cli.cli.console import console, render_error
from easypost_cli.cli.handlers import (
    CommandContext,
    heading,
    list_addresses,
    list_parcels,
    list_shipments,
    new_shipment,
)
from easypost_cli.core.models import MenuCommand
from easypost_cli.exceptions import EasypostCliError, InputClosedError

logger = logging.getLogger(__name__)

Handler = Callable[[CommandContext], object]

MENU_OPTIONS = "[S] Shipments\t[N] New Shipment\n[A] Addresses\t[P] Parcels\t[Q] Quit"

DEFAULT_HANDLERS: Mapping[MenuCommand, Handler] = {
    MenuCommand.LIST_SHIPMENTS: list_shipments,
    MenuCommand.NEW_SHIPMENT: new_shipment,
    MenuCommand.LIST_ADDRESSES: list_addresses,
    MenuCommand.LIST_PARCELS: list_parcels,
}


class MenuState(enum.Enum):
    MAIN_MENU = "main_menu"
    RUNNING = "running"
    TERMINATED = "terminated"


class MenuLoop:
    """Drive the main menu until the user quits.

    Parameters
    ----------
    context:
        Passed unchanged to every handler.
    handlers:
        Command → handler table; defaults to :data:`DEFAULT_HANDLERS`.
    """

    def __init__(
        self,
        context: CommandContext,
        handlers: Mapping[MenuCommand, Handler] | None = None,
    ) -> None:
        self._context: CommandContext = context
        self._handlers: dict[MenuCommand, Handler] = dict(
            DEFAULT_HANDLERS if handlers is None else handlers
        )
        self.state: MenuState = MenuState.MAIN_MENU

    def run(self) -> int:
        """Loop until Quit; returns the process exit code."""
        while self.state is not MenuState.TERMINATED:
            self.step(self._read_command())
        return exit_codes.SUCCESS

    def step(self, command: MenuCommand) -> MenuState:
        """Apply one transition from ``MAIN_MENU`` and return the new state."""
        if command is MenuCommand.QUIT:
            self.state = MenuState.TERMINATED
        elif command is MenuCommand.INVALID:
            heading(self._context.session, "[red]Invalid section[/red]")
        else:
            self._dispatch(command)
        return self.state

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _read_command(self) -> MenuCommand:
        heading(self._context.session, "Main Menu", MENU_OPTIONS)
        try:
            line = self._context.ask("")
        except InputClosedError:
            self.state = MenuState.TERMINATED
            raise
        return MenuCommand.from_input(line)

    def _dispatch(self, command: MenuCommand) -> None:
        handler = self._handlers[command]
        self.state = MenuState.RUNNING
        logger.debug("Running %s", command.name)
        try:
            handler(self._context)
        except InputClosedError:
            self.state = MenuState.TERMINATED
            raise
        except EasypostCliError as exc:
            logger.debug("%s failed: %r", command.name, exc)
            console.print()
            render_error(exc)
        self.state = MenuState.MAIN_MENU
