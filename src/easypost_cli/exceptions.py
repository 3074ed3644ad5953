"""Custom exception hierarchy for easypost-cli.

All exceptions that cross layer boundaries must inherit from
:class:`EasypostCliError`.  Raw third-party exceptions (e.g. from the
``easypost`` SDK) must NEVER propagate beyond the infrastructure layer —
they must be caught and re-raised as a typed subclass defined here.

Hierarchy
---------
EasypostCliError
├── CredentialError
├── InputClosedError
├── ShippingApiError
│   └── AuthenticationError
└── EnvironmentError
"""

from __future__ import annotations


class EasypostCliError(Exception):
    """Base exception for all easypost-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundaries can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Session bootstrap -----------------------------------------------------

class CredentialError(EasypostCliError):
    """Raised when an API key cannot be persisted to the config file."""


class InputClosedError(EasypostCliError):
    """Raised when the terminal input stream is closed mid-prompt."""


# --- Shipping provider -----------------------------------------------------

class ShippingApiError(EasypostCliError):
    """Raised when the shipping provider rejects or fails a request."""


class AuthenticationError(ShippingApiError):
    """Raised when the provider rejects the configured API key."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(EasypostCliError):
    """Raised when a required runtime dependency is not available."""

