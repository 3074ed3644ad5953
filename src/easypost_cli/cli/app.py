"""CLI application entry point and command routing for easypost-cli.

This module is the **outer error boundary** for the entire application.
It catches :class:`~easypost_cli.exceptions.EasypostCliError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.
Errors raised by individual menu commands are handled one level down,
in :class:`~easypost_cli.cli.menu.MenuLoop`, so a failed API call returns
the user to the main menu instead of ending the session.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core/service
  and infrastructure layers.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from easypost_cli.cli import exit_codes
from easypost_cli.cli.console import configure_logging, console, escape, render_error
from easypost_cli.exceptions import EasypostCliError
from easypost_cli.infra.credential_store import CONFIG_PATH_ENV_VAR, default_config_path
from easypost_cli.version import __version__

MODE_ARGUMENTS: tuple[str, ...] = ("t", "test", "p", "prod")


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``easypost-cli``            — interactive session, mode asked
    * ``easypost-cli t|test|p|prod`` — interactive session in that mode
    * ``easypost-cli doctor``     — environment diagnostics
    * ``easypost-cli --version``
    """
    parser = argparse.ArgumentParser(
        prog="easypost-cli",
        description="Interactive terminal client for the EasyPost shipping API.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="API mode to start in (t/test or p/prod), or 'doctor' to run diagnostics.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help=f"Config file holding API keys (default: ${CONFIG_PATH_ENV_VAR} "
        "or ~/.easypost-cli/config).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log API calls and config access to stderr.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_session(mode_hint: str | None, config_path: Path) -> int:
    """Run an interactive session.

    Flow:
    1. Resolve mode and API key (prompting and saving when needed).
    2. Build the EasyPost provider and shipping service.
    3. Hand control to the main menu until the user quits.
    """
    from easypost_cli.cli.bootstrap import bootstrap_session
    from easypost_cli.cli.handlers import CommandContext
    from easypost_cli.cli.menu import MenuLoop
    from easypost_cli.core.shipping_service import ShippingService
    from easypost_cli.infra.credential_store import CredentialStore
    from easypost_cli.infra.easypost_provider import EasyPostProvider

    console.print(f"[bold]EasyPost CLI[/bold] v{__version__}")
    session = bootstrap_session(mode_hint, CredentialStore(config_path))
    service = ShippingService(EasyPostProvider(session.api_key))
    return MenuLoop(CommandContext(session=session, service=service)).run()


def _handle_doctor(config_path: Path) -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from easypost_cli.cli.doctor import run_doctor

    return run_doctor(config_path)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the easypost-cli CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    config_path: Path = args.config or default_config_path()
    target: str | None = args.target.strip().lower() if args.target else None

    if target == "doctor":
        return _handle_doctor(config_path)

    if target is not None and target not in MODE_ARGUMENTS:
        parser.error(
            f"invalid mode {args.target!r} (choose from t, test, p, prod, doctor)"
        )

    return _handle_session(target, config_path)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except EasypostCliError as exc:
        render_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
