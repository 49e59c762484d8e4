"""Smoke tests — verify scaffold wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

from metalcloud_cli import __version__
from metalcloud_cli.cli import exit_codes
from metalcloud_cli.cli.app import cli, main
from metalcloud_cli.exceptions import (
    ConfigurationError,
    DecodeError,
    EnvironmentError,
    MetalCloudError,
    MissingParameterError,
    OperationAbortedError,
    ResourceNotFoundError,
    UpstreamError,
    ValidationError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            MissingParameterError,
            ValidationError,
            DecodeError,
            UpstreamError,
            ResourceNotFoundError,
            OperationAbortedError,
            ConfigurationError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[MetalCloudError]
    ) -> None:
        assert issubclass(exc_class, MetalCloudError)

    def test_not_found_is_an_upstream_error(self) -> None:
        assert issubclass(ResourceNotFoundError, UpstreamError)

    def test_hint_is_stored(self) -> None:
        err = MetalCloudError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert MetalCloudError("boom").hint is None


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        """No arguments should print help and exit 0."""
        code = main([])
        assert code == exit_codes.SUCCESS
        assert "switch" in capsys.readouterr().out

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    @patch("metalcloud_cli.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_returns_success(self, _mock_doc: object) -> None:
        assert main(["doctor"]) == exit_codes.SUCCESS

    def test_switch_without_predicate_prints_help(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["switch"]) == exit_codes.SUCCESS
        assert "interfaces" in capsys.readouterr().out

    def test_unknown_predicate_is_a_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["switch", "explode"])
        assert exc_info.value.code == 2


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def test_known_error_exits_one_with_message(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        def _boom(argv: object = None) -> int:
            raise MissingParameterError("--id is required")

        monkeypatch.setattr("metalcloud_cli.cli.app.main", _boom)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.GENERAL_ERROR
        assert "--id is required" in capsys.readouterr().err

    def test_keyboard_interrupt_exits_130(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _interrupt(argv: object = None) -> int:
            raise KeyboardInterrupt

        monkeypatch.setattr("metalcloud_cli.cli.app.main", _interrupt)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error_exits_two(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        def _crash(argv: object = None) -> int:
            raise RuntimeError("kaput")

        monkeypatch.setattr("metalcloud_cli.cli.app.main", _crash)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.UNEXPECTED_ERROR
        err = capsys.readouterr().err
        assert "Unexpected error" in err
        assert "Traceback" not in err
