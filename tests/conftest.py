"""Shared pytest fixtures and configuration for the easypost-cli test suite.

Guidelines
----------
* No internet access in any test.
* The shipping provider is mocked at the core boundary.
* Terminal input is scripted — no questionary prompt is ever shown.
* Config files live under ``tmp_path`` only.
"""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from easypost_cli.core.models import Mode, Session
from easypost_cli.exceptions import InputClosedError


class ScriptedInput:
    """Line reader replaying fixed answers; closes input when exhausted."""

    def __init__(self, lines: tuple[str, ...]) -> None:
        self._lines: list[str] = list(lines)
        self.prompts: list[str] = []

    def __call__(self, message: str) -> str:
        self.prompts.append(message)
        if not self._lines:
            raise InputClosedError("Scripted input exhausted.")
        return self._lines.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._lines)


@pytest.fixture
def scripted() -> Callable[..., ScriptedInput]:
    """Factory: ``scripted("S", "Q")`` returns a reader answering in order."""

    def _make(*lines: str) -> ScriptedInput:
        return ScriptedInput(lines)

    return _make


@pytest.fixture
def session() -> Session:
    return Session(mode=Mode.TEST, api_key="EZTK_test_key")


@pytest.fixture
def provider() -> MagicMock:
    """A ShippingProvider double with empty listings by default."""
    fake = MagicMock()
    fake.list_shipments.return_value = []
    fake.list_addresses.return_value = []
    return fake


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Keep every test away from the real ``~/.easypost-cli`` and env keys."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("EASYPOST_CLI_CONFIG", raising=False)
    monkeypatch.delenv("EASYPOST_TEST_API_KEY", raising=False)
    monkeypatch.delenv("EASYPOST_PROD_API_KEY", raising=False)
