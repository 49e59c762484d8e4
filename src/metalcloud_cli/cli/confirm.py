"""Interactive confirmation for destructive commands.

A :class:`ConfirmationGate` goes from ``PENDING`` to either
``CONFIRMED`` or ``ABORTED``:

* ``--autoconfirm`` confirms straight away; nothing is read.
* Otherwise one line is read and only the literal ``yes`` confirms.

The line reader is injected, so tests can simulate answers without a
terminal.  The default reader uses questionary on an interactive
terminal and a plain ``readline`` otherwise (so ``echo yes | …`` works).
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from enum import Enum
from typing import Any

from metalcloud_cli.exceptions import EnvironmentError, OperationAbortedError

LineReader = Callable[[str], "str | None"]
"""Shows a prompt and returns the answer, or ``None`` on EOF / cancel."""


class ConfirmationState(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ABORTED = "aborted"


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def read_confirmation_line(message: str) -> str | None:
    """Default :data:`LineReader`.

    On a TTY with a visible prompt the question is asked through
    questionary; otherwise *message* (if any) goes to stderr and a single
    line is read from stdin.
    """
    if message and sys.stdin.isatty():
        questionary = _import_questionary()
        return questionary.text(message).ask()

    if message:
        sys.stderr.write(message + " ")
        sys.stderr.flush()
    line = sys.stdin.readline()
    return line or None


class ConfirmationGate:
    """Ask once, remember the outcome.

    Parameters
    ----------
    autoconfirm:
        Confirm without asking.
    suppress_prompts:
        Read the answer without showing the question text.
    reader:
        Line reader; defaults to :func:`read_confirmation_line`.
    """

    def __init__(
        self,
        *,
        autoconfirm: bool = False,
        suppress_prompts: bool = False,
        reader: LineReader | None = None,
    ) -> None:
        self._autoconfirm = autoconfirm
        self._suppress_prompts = suppress_prompts
        self._reader: LineReader = reader or read_confirmation_line
        self.state = ConfirmationState.PENDING

    def confirm(self, message: str) -> ConfirmationState:
        """Resolve the gate and return the final state."""
        if self.state is not ConfirmationState.PENDING:
            return self.state

        if self._autoconfirm:
            self.state = ConfirmationState.CONFIRMED
            return self.state

        answer = self._reader("" if self._suppress_prompts else message)
        if answer is not None and answer.strip("\r\n ") == "yes":
            self.state = ConfirmationState.CONFIRMED
        else:
            self.state = ConfirmationState.ABORTED
        return self.state

    def require(self, message: str) -> None:
        """Like :meth:`confirm` but raise when not confirmed.

        Raises
        ------
        OperationAbortedError
            If the answer was anything other than ``yes``.
        """
        if self.confirm(message) is not ConfirmationState.CONFIRMED:
            raise OperationAbortedError("Operation not confirmed. Aborting")
