"""CLI console and logging helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from easypost_cli.exceptions import EasypostCliError, EnvironmentError


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stdout."""
	console_class = _load_rich_console_class()
	return console_class(highlight=False)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain stdout print."""
		try:
			rich_console = get_rich_console()
		except EnvironmentError:
			print(*objects)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def configure_logging(verbose: bool = False) -> None:
	"""Install a single root handler: WARNING by default, DEBUG when *verbose*.

	Diagnostics go to stderr so they never interleave with tables on
	stdout.
	"""
	level = logging.DEBUG if verbose else logging.WARNING
	handler: logging.Handler
	try:
		from rich.logging import RichHandler

		handler = RichHandler(
			console=_load_rich_console_class()(stderr=True),
			show_path=False,
			rich_tracebacks=False,
		)
		handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
	except (ModuleNotFoundError, EnvironmentError):
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(
			logging.Formatter("%(levelname)s %(name)s: %(message)s"),
		)
	logging.basicConfig(level=level, handlers=[handler], force=True)


def escape(text: str) -> str:
	"""Escape Rich markup in untrusted *text* (no-op without Rich)."""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		return text
	return rich_escape(text)


def render_error(exc: EasypostCliError) -> None:
	"""Print a known error and its hint."""
	console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
	if exc.hint:
		console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
