"""Command invocation context.

A :class:`CommandContext` is the read-only bag of parsed options a
command handler works from.  It is built once per process from the
argparse namespace and never mutated afterwards.
"""

from __future__ import annotations

import argparse
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from metalcloud_cli.exceptions import MissingParameterError

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class CommandContext:
    """Immutable mapping of option name → typed value.

    Option names use the argparse ``dest`` spelling (``show_credentials``,
    ``raw_config``…).  Options that were not registered for a command, or
    were left at ``None``, are treated as absent.
    """

    options: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> CommandContext:
        return cls(options=MappingProxyType(dict(values)))

    @classmethod
    def from_namespace(cls, namespace: argparse.Namespace, **extra: Any) -> CommandContext:
        """Build from parsed arguments; names starting with ``_`` are dropped."""
        values = {k: v for k, v in vars(namespace).items() if not k.startswith("_")}
        values.update(extra)
        return cls.from_mapping(values)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_string(self, key: str) -> str:
        """Return the string option *key*, or ``""`` when absent."""
        value = self.options.get(key)
        return "" if value is None else str(value)

    def get_bool(self, key: str) -> bool:
        """Return the flag *key*, ``False`` when absent."""
        return bool(self.options.get(key, False))

    def require_string(self, key: str, flag: str) -> str:
        """Return the string option *key* or raise if it was not given.

        Raises
        ------
        MissingParameterError
            When the option is absent or an empty string.
        """
        value = self.options.get(key)
        if value is None:
            raise MissingParameterError(f"{flag} is required")
        text = str(value)
        if text == "":
            raise MissingParameterError(f"{flag} cannot be empty")
        return text
