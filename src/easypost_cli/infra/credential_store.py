"""Infrastructure: per-mode API key storage in a dotenv-style config file.

The file holds ``KEY=VALUE`` lines, e.g.::

    EASYPOST_TEST_API_KEY=EZTK...
    EASYPOST_PROD_API_KEY=EZAK...

Rules
-----
* Writes are append-only — existing lines are never rewritten or
  deduplicated.
* When a key appears more than once, the **last** line wins on reload.
* No ``print()`` — callers handle user-facing output.
* API keys are never logged.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values

from easypost_cli.core.models import Mode
from easypost_cli.exceptions import CredentialError

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "EASYPOST_CLI_CONFIG"
"""Environment variable overriding the config file location."""

DEFAULT_CONFIG_DIR_NAME = ".easypost-cli"
DEFAULT_CONFIG_FILE_NAME = "config"


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the config file location.

    ``$EASYPOST_CLI_CONFIG`` when set, else ``~/.easypost-cli/config``.
    """
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_PATH_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / DEFAULT_CONFIG_DIR_NAME / DEFAULT_CONFIG_FILE_NAME


class CredentialStore:
    """Append-only store of one API key per :class:`Mode`.

    Parameters
    ----------
    path:
        Config file location.  Neither the file nor its parent directory
        needs to exist until the first :meth:`save`.
    """

    def __init__(self, path: Path) -> None:
        self._path: Path = path

    @property
    def path(self) -> Path:
        return self._path

    @property
    def display_path(self) -> str:
        """The path with the home directory abbreviated to ``~``."""
        try:
            relative = self._path.relative_to(Path.home())
        except ValueError:
            return str(self._path)
        return str(Path("~") / relative)

    def load(self, mode: Mode) -> str | None:
        """Return the stored key for *mode*, or ``None`` when absent.

        A missing or unreadable file counts as absent.
        """
        if not self._path.is_file():
            logger.debug("No config file at %s", self._path)
            return None
        try:
            values = dotenv_values(self._path, interpolate=False, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read config file %s: %s", self._path, exc)
            return None
        value = values.get(mode.env_key)
        if not value:
            return None
        return value.strip() or None

    def save(self, mode: Mode, api_key: str) -> None:
        """Append ``EASYPOST_<MODE>_API_KEY=<api_key>`` to the config file.

        Raises
        ------
        CredentialError
            If the directory or file cannot be written.
        """
        line = f"{mode.env_key}={api_key.strip()}\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            if self._needs_leading_newline():
                line = "\n" + line
            with self._path.open("a", encoding="utf-8") as handle:
                handle.write(line)
        except OSError as exc:
            raise CredentialError(
                f"Could not save the {mode.value} API key to {self._path}: {exc}",
                hint=f"Check permissions, or set {CONFIG_PATH_ENV_VAR} to a writable path.",
            ) from exc
        logger.debug("Appended %s to %s", mode.env_key, self._path)

    def _needs_leading_newline(self) -> bool:
        """``True`` when the file's last line is unterminated."""
        if not self._path.is_file():
            return False
        with self._path.open("rb") as handle:
            handle.seek(0, os.SEEK_END)
            if handle.tell() == 0:
                return False
            handle.seek(-1, os.SEEK_END)
            return handle.read(1) != b"\n"
