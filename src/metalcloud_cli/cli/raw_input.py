"""Reading ``create``/``edit`` configuration documents.

The document comes from ``--raw-config <path>`` or, when ``--pipe`` is
set, from standard input.  A file path wins when both are given.  The
bytes are parsed according to ``--format`` (``json`` or ``yaml``) and
converted into a :class:`~metalcloud_cli.core.models.SwitchDevice`.

Nothing is sent anywhere from here: a document that fails to decode
stops the command before any API call.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import IO, Any

import yaml

from metalcloud_cli.core.codec import Naming, device_from_mapping
from metalcloud_cli.core.context import CommandContext
from metalcloud_cli.core.models import SwitchDevice
from metalcloud_cli.exceptions import DecodeError, MissingParameterError, ValidationError

logger = logging.getLogger(__name__)

INPUT_FORMATS: tuple[str, ...] = ("json", "yaml")


def read_raw_content(ctx: CommandContext, stdin: IO[Any] | None = None) -> bytes:
    """Return the raw document bytes selected by the context.

    Raises
    ------
    MissingParameterError
        When neither ``--raw-config`` nor ``--pipe`` was given.
    DecodeError
        When the file cannot be read or the content is empty.
    """
    path = ctx.get_string("raw_config")

    if path:
        logger.debug("Reading configuration from %s", path)
        try:
            content = Path(path).read_bytes()
        except OSError as exc:
            raise DecodeError(f"Could not read {path}: {exc.strerror or exc}") from exc
    elif ctx.get_bool("pipe"):
        logger.debug("Reading configuration from standard input")
        stream = stdin if stdin is not None else sys.stdin
        data = stream.read()
        content = data.encode() if isinstance(data, str) else data
    else:
        raise MissingParameterError(
            "--raw-config <path_to_file> or --pipe is required",
        )

    if not content.strip():
        raise DecodeError("Content cannot be empty")
    return content


def decode_device(content: bytes, input_format: str) -> SwitchDevice:
    """Parse *content* as *input_format* into a :class:`SwitchDevice`.

    Raises
    ------
    ValidationError
        If *input_format* is not ``json`` or ``yaml``.
    DecodeError
        If the document is malformed or has fields of the wrong type.
    """
    fmt = (input_format or "json").lower()

    if fmt == "json":
        try:
            document = json.loads(content)
        except ValueError as exc:
            raise DecodeError(f"Invalid JSON: {exc}") from exc
        return device_from_mapping(document, Naming.JSON)

    if fmt == "yaml":
        try:
            document = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise DecodeError(f"Invalid YAML: {exc}") from exc
        return device_from_mapping(document, Naming.YAML)

    raise ValidationError(
        f'Input format "{input_format}" not supported.',
        hint="Supported values are 'json' and 'yaml'.",
    )


def read_raw_device(ctx: CommandContext, stdin: IO[Any] | None = None) -> SwitchDevice:
    """Read and decode the switch configuration named by *ctx*."""
    content = read_raw_content(ctx, stdin)
    return decode_device(content, ctx.get_string("format"))
