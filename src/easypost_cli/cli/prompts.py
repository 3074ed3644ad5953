"""Line-oriented terminal input for the CLI layer.

Every prompt in the application reads one line through these helpers,
so handlers can be driven by a scripted reader in tests.  Ctrl+C
propagates as ``KeyboardInterrupt`` to the CLI error boundary; a closed
input stream becomes :class:`~easypost_cli.exceptions.InputClosedError`.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from easypost_cli.exceptions import EnvironmentError, InputClosedError

LineReader = Callable[[str], str]
"""Reads one line of input after showing a message."""

_T = TypeVar("_T")


def _import_questionary() -> Any:
    """Import questionary lazily for interactive input."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _ask(question: Any) -> str:
    try:
        answer = question.unsafe_ask()
    except EOFError as exc:
        raise InputClosedError(
            "Input stream closed.",
            hint="Run easypost-cli from an interactive terminal.",
        ) from exc
    if answer is None:
        raise InputClosedError("Input stream closed.")
    return str(answer)


def ask_line(message: str) -> str:
    """Prompt for one line of text and return it unmodified."""
    questionary = _import_questionary()
    return _ask(questionary.text(message, qmark=">"))


def ask_secret(message: str) -> str:
    """Prompt for one line without echoing it (API keys)."""
    questionary = _import_questionary()
    return _ask(questionary.password(message, qmark=">"))


# ---------------------------------------------------------------------------
# Input parsing (pure)
# ---------------------------------------------------------------------------

def parse_index(text: str, items: Sequence[_T]) -> _T | None:
    """Return ``items[int(text)]`` for a valid, in-range index, else ``None``."""
    stripped = text.strip()
    if not (stripped.isascii() and stripped.isdigit()):
        return None
    index = int(stripped)
    if index >= len(items):
        return None
    return items[index]


def parse_measure(text: str) -> float | None:
    """Parse a non-negative number; ``None`` for anything else."""
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if value < 0 or not math.isfinite(value):
        return None
    return value
