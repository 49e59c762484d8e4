"""Mapping ⇄ domain-model conversion.

Pure functions that turn already-parsed JSON/YAML documents (plain
dicts) into :mod:`~metalcloud_cli.core.models` instances and back.  No
parsing of bytes happens here — that is the job of the CLI input reader
and the API client.

Rules
-----
* Unknown keys are ignored.
* ``None`` fields are omitted on output, so ``to_mapping(from_mapping(d))``
  reproduces every known key of *d*.
* A value of the wrong shape raises :class:`DecodeError` naming the key.
* YAML resolves unquoted scalars such as ``12345`` or ``true`` to numbers
  and booleans; string fields read from YAML take their text back.
"""

from __future__ import annotations

from dataclasses import fields
from enum import Enum
from typing import Any, TypeVar

from metalcloud_cli.core.models import SwitchDevice, SwitchInterface
from metalcloud_cli.exceptions import DecodeError

_ModelT = TypeVar("_ModelT", SwitchDevice, SwitchInterface)


class Naming(Enum):
    """Which wire name set to use for keys."""

    JSON = "json"
    YAML = "yaml"


# ---------------------------------------------------------------------------
# Value coercion (per field kind)
# ---------------------------------------------------------------------------

def _scalar_text(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _coerce(key: str, kind: str, value: Any, naming: Naming = Naming.JSON) -> Any:
    """Validate *value* against *kind* and return its immutable form."""
    if value is None:
        return None

    if naming is Naming.YAML:
        if kind == "str":
            value = _scalar_text(value)
        elif kind == "str_list" and isinstance(value, list):
            value = [_scalar_text(v) for v in value]
        elif kind == "str_matrix" and isinstance(value, list):
            value = [
                [_scalar_text(v) for v in row] if isinstance(row, list) else row
                for row in value
            ]

    if kind == "int":
        # bool is an int subclass; a YAML ``true`` must not become 1.
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodeError(f"Field '{key}' must be an integer, got {value!r}.")
        return value

    if kind == "str":
        if not isinstance(value, str):
            raise DecodeError(f"Field '{key}' must be a string, got {value!r}.")
        return value

    if kind == "bool":
        if not isinstance(value, bool):
            raise DecodeError(f"Field '{key}' must be a boolean, got {value!r}.")
        return value

    if kind == "str_list":
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise DecodeError(f"Field '{key}' must be a list of strings.")
        return tuple(value)

    if kind == "str_matrix":
        if not isinstance(value, list):
            raise DecodeError(f"Field '{key}' must be a list of string lists.")
        rows: list[tuple[str, ...]] = []
        for row in value:
            if not isinstance(row, list) or not all(isinstance(v, str) for v in row):
                raise DecodeError(f"Field '{key}' must be a list of string lists.")
            rows.append(tuple(row))
        return tuple(rows)

    raise ValueError(f"unknown field kind {kind!r}")


def _export(value: Any) -> Any:
    """Convert tuples back into plain lists for serialisers."""
    if isinstance(value, tuple):
        return [_export(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Generic model conversion
# ---------------------------------------------------------------------------

def _from_mapping(model: type[_ModelT], data: Any, naming: Naming) -> _ModelT:
    if not isinstance(data, dict):
        raise DecodeError(
            f"Expected an object, got {type(data).__name__}.",
            hint="The document must be a single mapping of field names to values.",
        )
    values: dict[str, Any] = {}
    for f in fields(model):
        key = f.metadata[naming.value]
        if key in data:
            values[f.name] = _coerce(key, f.metadata["kind"], data[key], naming)
    return model(**values)


def _to_mapping(obj: SwitchDevice | SwitchInterface, naming: Naming) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is not None:
            out[f.metadata[naming.value]] = _export(value)
    return out


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def device_from_mapping(data: Any, naming: Naming = Naming.JSON) -> SwitchDevice:
    """Build a :class:`SwitchDevice` from a decoded document."""
    return _from_mapping(SwitchDevice, data, naming)


def device_to_mapping(
    device: SwitchDevice,
    naming: Naming = Naming.JSON,
) -> dict[str, Any]:
    """Return the wire representation of *device*."""
    return _to_mapping(device, naming)


def interface_from_mapping(data: Any) -> SwitchInterface:
    """Build a :class:`SwitchInterface` from an API search row."""
    return _from_mapping(SwitchInterface, data, Naming.JSON)


def interface_to_mapping(interface: SwitchInterface) -> dict[str, Any]:
    """Return the API representation of *interface*."""
    return _to_mapping(interface, Naming.JSON)
