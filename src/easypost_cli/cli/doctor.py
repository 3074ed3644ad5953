"""``easypost-cli doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment and the stored credentials are ready.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  API keys are never displayed;
only their presence is reported.
"""

from __future__ import annotations

import platform
import sys
from pathlib import Path

from easypost_cli.cli import exit_codes
from easypost_cli.cli.console import console
from easypost_cli.core.models import Mode
from easypost_cli.infra.credential_store import CredentialStore
from easypost_cli.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _easypost_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the easypost SDK row."""
    try:
        import easypost
    except ImportError:
        return "easypost", "NOT INSTALLED", "[red]FAIL[/red]"
    version = getattr(easypost, "__version__", None)
    if version is None:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as dist_version

        try:
            version = dist_version("easypost")
        except PackageNotFoundError:
            version = "unknown"
    return "easypost", str(version), "[green]OK[/green]"


def _config_file_check(store: CredentialStore) -> tuple[str, str, str]:
    """Return (label, value, status) for the config file row."""
    if store.path.is_file():
        return "Config", store.display_path, "[green]OK[/green]"
    return "Config", f"{store.display_path} (not created yet)", "[yellow]WARN[/yellow]"


def _api_key_check(store: CredentialStore, mode: Mode) -> tuple[str, str, str]:
    """Return (label, value, status) for one mode's stored key."""
    label = f"{mode.value} key"
    if store.load(mode):
        return label, "stored", "[green]OK[/green]"
    return label, "not stored", "[yellow]WARN[/yellow]"


def _easypost_cli_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the easypost-cli version row."""
    return "easypost-cli", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\neasypost-cli doctor")
    print("=" * 64)
    print(f"{'Component':<14} {'Value':<38} {'Status':<8}")
    print("-" * 64)
    for label, value, status in checks:
        plain_status = _status_plain(status)
        print(f"{label:<14} {value:<38} {plain_status:<8}")
    print()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(config_path: Path) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  Missing keys are
        warnings: the interactive session asks for them.
    """
    store = CredentialStore(config_path)
    checks = [
        _easypost_cli_version_check(),
        _python_version_check(),
        _easypost_version_check(),
        _config_file_check(store),
        _api_key_check(store, Mode.TEST),
        _api_key_check(store, Mode.PROD),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="easypost-cli doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if has_failure:
        if rich_available:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            print("Some checks failed.")
        return exit_codes.GENERAL_ERROR

    if rich_available:
        console.print("[bold green]All checks passed.[/bold green]")
    else:
        print("All checks passed.")
    return exit_codes.SUCCESS
