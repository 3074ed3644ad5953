"""Infrastructure layer — external system integration.

This layer wraps all interaction with the EasyPost API and the local
config file.  Every raw third-party exception must be caught here and
re-raised as a :class:`~easypost_cli.exceptions.EasypostCliError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from easypost_cli.infra.credential_store import CredentialStore, default_config_path
from easypost_cli.infra.easypost_provider import EasyPostProvider

__all__: list[str] = [
    "CredentialStore",
    "EasyPostProvider",
    "default_config_path",
]
