"""Tests for the confirmation gate (cli/confirm.py).

No terminal is involved: answers come from an injected reader that
records the prompts it was shown.
"""

from __future__ import annotations

import io
import sys

import pytest

from metalcloud_cli.cli.confirm import (
    ConfirmationGate,
    ConfirmationState,
    read_confirmation_line,
)
from metalcloud_cli.exceptions import OperationAbortedError


class _Reader:
    def __init__(self, answer: str | None) -> None:
        self.answer = answer
        self.prompts: list[str] = []

    def __call__(self, message: str) -> str | None:
        self.prompts.append(message)
        return self.answer


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------

class TestConfirmationGate:
    def test_starts_pending(self) -> None:
        assert ConfirmationGate(reader=_Reader("yes")).state is ConfirmationState.PENDING

    @pytest.mark.parametrize("answer", ["yes", "yes\n", "yes\r\n", "  yes "])
    def test_yes_confirms(self, answer: str) -> None:
        gate = ConfirmationGate(reader=_Reader(answer))
        assert gate.confirm("Sure?") is ConfirmationState.CONFIRMED

    @pytest.mark.parametrize("answer", ["no", "y", "YES", "Yes", "", "yes please", None])
    def test_anything_else_aborts(self, answer: str | None) -> None:
        gate = ConfirmationGate(reader=_Reader(answer))
        assert gate.confirm("Sure?") is ConfirmationState.ABORTED

    def test_autoconfirm_never_reads(self) -> None:
        reader = _Reader("no")
        gate = ConfirmationGate(autoconfirm=True, reader=reader)
        assert gate.confirm("Sure?") is ConfirmationState.CONFIRMED
        assert reader.prompts == []

    def test_prompt_is_shown(self) -> None:
        reader = _Reader("yes")
        ConfirmationGate(reader=reader).confirm("Sure?")
        assert reader.prompts == ["Sure?"]

    def test_suppressed_prompt_still_reads(self) -> None:
        reader = _Reader("yes")
        gate = ConfirmationGate(suppress_prompts=True, reader=reader)
        assert gate.confirm("Sure?") is ConfirmationState.CONFIRMED
        assert reader.prompts == [""]

    def test_outcome_is_final(self) -> None:
        reader = _Reader("no")
        gate = ConfirmationGate(reader=reader)
        gate.confirm("Sure?")
        reader.answer = "yes"
        assert gate.confirm("Sure?") is ConfirmationState.ABORTED
        assert len(reader.prompts) == 1

    def test_require_raises_on_abort(self) -> None:
        gate = ConfirmationGate(reader=_Reader("no"))
        with pytest.raises(OperationAbortedError, match="Operation not confirmed. Aborting"):
            gate.require("Sure?")

    def test_require_passes_on_yes(self) -> None:
        ConfirmationGate(reader=_Reader("yes")).require("Sure?")


# ---------------------------------------------------------------------------
# Default reader (non-interactive path)
# ---------------------------------------------------------------------------

class TestReadConfirmationLine:
    def test_reads_one_line_from_stdin(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(sys, "stdin", io.StringIO("yes\nmore\n"))
        assert read_confirmation_line("Sure?") == "yes\n"
        assert "Sure?" in capsys.readouterr().err

    def test_eof_returns_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(sys, "stdin", io.StringIO(""))
        assert read_confirmation_line("Sure?") is None

    def test_empty_message_prints_nothing(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(sys, "stdin", io.StringIO("yes\n"))
        read_confirmation_line("")
        assert capsys.readouterr().err == ""
