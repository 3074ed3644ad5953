"""Session bootstrap — choose a mode and resolve its API key.

Key lookup order: process environment, then the config file, then an
interactive prompt whose answer is appended to the config file.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from easypost_cli.cli.console import console
from easypost_cli.cli.prompts import LineReader, ask_line, ask_secret
from easypost_cli.core.models import Mode, Session
from easypost_cli.infra.credential_store import CredentialStore

logger = logging.getLogger(__name__)

MODE_PROMPT = "Start EasyPost CLI in Test or Prod mode? [T/p]"


def mode_markup(mode: Mode, text: str | None = None) -> str:
    """Wrap *text* (default: the mode name) in the mode's colour."""
    colour = "red" if mode is Mode.PROD else "green"
    return f"[{colour}]{text or mode.value}[/{colour}]"


def bootstrap_session(
    mode_hint: str | None,
    store: CredentialStore,
    *,
    ask: LineReader = ask_line,
    ask_key: LineReader = ask_secret,
    environ: Mapping[str, str] | None = None,
) -> Session:
    """Return the :class:`Session` for this run.

    Parameters
    ----------
    mode_hint:
        ``t``/``test``/``p``/``prod`` from the command line, or ``None``
        to ask interactively.
    store:
        Where keys are loaded from and saved to.
    ask, ask_key:
        Line readers for the mode and the API key.
    environ:
        Environment consulted before the config file.

    Raises
    ------
    InputClosedError
        If the terminal closes while prompting.
    CredentialError
        If a newly entered key cannot be saved.
    """
    env = os.environ if environ is None else environ

    if mode_hint is None:
        console.print(MODE_PROMPT)
        mode_hint = ask("")
    mode = Mode.from_input(mode_hint)
    logger.debug("Starting in %s mode", mode.value)

    api_key = (env.get(mode.env_key) or "").strip()
    if api_key:
        logger.debug("Using %s from the environment", mode.env_key)
        return Session(mode=mode, api_key=api_key)

    api_key = store.load(mode) or ""
    if api_key:
        return Session(mode=mode, api_key=api_key)

    console.print()
    console.print(f"What is your EasyPost {mode_markup(mode)} API key?")
    while not api_key:
        api_key = ask_key("").strip()
    store.save(mode, api_key)
    console.print(
        f"EasyPost {mode_markup(mode)} API key saved to {store.display_path}"
    )
    return Session(mode=mode, api_key=api_key)
