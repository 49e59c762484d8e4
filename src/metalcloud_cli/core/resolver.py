"""Switch lookup from a user-supplied ``--id`` token.

The token may be a numeric id or an identifier string (label).
Classification is a pure function so it can be tested without any
client; :func:`resolve_switch` then performs exactly one remote call.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Union

from metalcloud_cli.core.context import CommandContext
from metalcloud_cli.core.models import SwitchDevice
from metalcloud_cli.core.protocols import SwitchClient

logger = logging.getLogger(__name__)

# Same acceptance as a strict decimal integer parse: optional sign,
# ASCII digits only, nothing else (no spaces, no underscores).
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, slots=True)
class ById:
    """Token resolved as a numeric identifier."""

    id: int


@dataclass(frozen=True, slots=True)
class ByLabel:
    """Token resolved as an identifier string."""

    label: str


SwitchRef = Union[ById, ByLabel]


def classify_token(token: str) -> SwitchRef:
    """Decide which lookup path *token* takes.

    >>> classify_token("007")
    ById(id=7)
    >>> classify_token("sw-leaf-01")
    ByLabel(label='sw-leaf-01')
    """
    if _INTEGER_RE.fullmatch(token):
        return ById(int(token))
    return ByLabel(token)


def resolve_switch(
    ctx: CommandContext,
    client: SwitchClient,
    *,
    key: str = "id",
    flag: str = "--id",
) -> SwitchDevice:
    """Fetch the switch named by option *key* of *ctx*.

    Credentials are requested only when the context carries
    ``show_credentials``.

    Raises
    ------
    MissingParameterError
        If the option is absent or empty.
    ResourceNotFoundError, UpstreamError
        Propagated unchanged from the client.
    """
    token = ctx.require_string(key, flag)
    with_credentials = ctx.get_bool("show_credentials")

    ref = classify_token(token)
    if isinstance(ref, ById):
        logger.debug("Resolving switch by id %d", ref.id)
        return client.get_device(ref.id, with_credentials)

    logger.debug("Resolving switch by label %r", ref.label)
    return client.get_device_by_label(ref.label, with_credentials)
