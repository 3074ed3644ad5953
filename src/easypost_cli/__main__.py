"""Allow ``python -m easypost_cli`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m easypost_cli`` behaves identically to the ``easypost-cli``
console script.
"""

from __future__ import annotations

from easypost_cli.cli.app import cli

if __name__ == "__main__":
    cli()
