"""Tests for terminal input helpers (cli/prompts.py).

``questionary`` is mocked — no prompt_toolkit application is started.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from easypost_cli.cli.prompts import ask_line, ask_secret, parse_index, parse_measure
from easypost_cli.exceptions import InputClosedError


class TestAskLine:
    @patch("easypost_cli.cli.prompts._import_questionary")
    def test_returns_answer(self, mock_q: MagicMock) -> None:
        mock_q.return_value.text.return_value.unsafe_ask.return_value = " s "
        assert ask_line("Menu") == " s "
        mock_q.return_value.text.assert_called_once_with("Menu", qmark=">")

    @patch("easypost_cli.cli.prompts._import_questionary")
    def test_eof_becomes_input_closed(self, mock_q: MagicMock) -> None:
        mock_q.return_value.text.return_value.unsafe_ask.side_effect = EOFError
        with pytest.raises(InputClosedError):
            ask_line("Menu")

    @patch("easypost_cli.cli.prompts._import_questionary")
    def test_ctrl_c_propagates(self, mock_q: MagicMock) -> None:
        mock_q.return_value.text.return_value.unsafe_ask.side_effect = KeyboardInterrupt
        with pytest.raises(KeyboardInterrupt):
            ask_line("Menu")

    @patch("easypost_cli.cli.prompts._import_questionary")
    def test_secret_uses_password_prompt(self, mock_q: MagicMock) -> None:
        mock_q.return_value.password.return_value.unsafe_ask.return_value = "EZTK123"
        assert ask_secret("Key") == "EZTK123"
        mock_q.return_value.text.assert_not_called()


class TestParseIndex:
    @pytest.mark.parametrize(("text", "expected"), [("0", "a"), ("2", "c"), (" 1 ", "b")])
    def test_valid(self, text: str, expected: str) -> None:
        assert parse_index(text, ["a", "b", "c"]) == expected

    @pytest.mark.parametrize("text", ["", "3", "-1", "1.0", "x", "1a", "N", "²", "١"])
    def test_invalid(self, text: str) -> None:
        assert parse_index(text, ["a", "b", "c"]) is None

    def test_empty_sequence(self) -> None:
        assert parse_index("0", []) is None


class TestParseMeasure:
    @pytest.mark.parametrize(("text", "expected"), [("10", 10.0), (" 5.5 ", 5.5), ("0", 0.0)])
    def test_valid(self, text: str, expected: float) -> None:
        assert parse_measure(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "-1", "nan", "inf"])
    def test_invalid(self, text: str) -> None:
        assert parse_measure(text) is None
