"""Handlers for the ``switch`` subject.

Each handler receives the parsed :class:`CommandContext` and a
:class:`SwitchClient`, performs its remote calls and returns the text to
print (possibly empty).  Nothing is written to stdout here; the caller
owns output.

Handlers never retry and never swallow errors: the first failure
propagates and no later remote call is made.
"""

from __future__ import annotations

import logging
from typing import IO, Any

from metalcloud_cli.cli.confirm import ConfirmationGate
from metalcloud_cli.cli.raw_input import read_raw_device
from metalcloud_cli.cli.render import (
    render_raw_object,
    render_table,
    render_transposed_table,
    should_render_raw,
)
from metalcloud_cli.core.context import CommandContext
from metalcloud_cli.core.models import SwitchDevice
from metalcloud_cli.core.protocols import SwitchClient
from metalcloud_cli.core.resolver import resolve_switch
from metalcloud_cli.core.switch_schema import (
    DEVICE_SORT_ORDER,
    INTERFACE_SORT_ORDER,
    device_row,
    device_schema,
    interface_row,
    interface_schema,
)
from metalcloud_cli.core.table import OutputFormat, sort_rows
from metalcloud_cli.exceptions import ValidationError

logger = logging.getLogger(__name__)

DELETE_PROMPT = 'Deleting switch {label} ({id}).  Are you sure? Type "yes" to continue:'


def _validate(device: SwitchDevice) -> None:
    if not device.datacenter_name:
        raise ValidationError(
            "Datacenter name is required.",
            hint="Set datacenter_name (JSON) or datacenterName (YAML) in the configuration.",
        )


def _id_result(ctx: CommandContext, device: SwitchDevice) -> str:
    if ctx.get_bool("return_id") and device.id is not None:
        return str(device.id)
    return ""


# ---------------------------------------------------------------------------
# list / create / edit
# ---------------------------------------------------------------------------

def switch_list(ctx: CommandContext, client: SwitchClient) -> str:
    """List switch devices, optionally filtered by datacenter and type."""
    fmt = OutputFormat.parse(ctx.get_string("format"))
    with_credentials = ctx.get_bool("show_credentials")

    devices = client.get_devices(ctx.get_string("datacenter"), ctx.get_string("switch_type"))
    logger.debug("Fetched %d switch devices", len(devices))

    rows = []
    for device in devices:
        if with_credentials and device.id is not None:
            # The listing never carries decrypted credentials.
            device = client.get_device(device.id, True)
        rows.append(device_row(device, with_credentials))

    schema = device_schema(with_credentials)
    rows = sort_rows(schema, rows, *DEVICE_SORT_ORDER)
    return render_table(schema, rows, "Switches", fmt)


def switch_create(
    ctx: CommandContext,
    client: SwitchClient,
    *,
    stdin: IO[Any] | None = None,
) -> str:
    """Register a new switch from ``--raw-config`` or ``--pipe``.

    Returns the new id when ``--return-id`` is set, otherwise ``""``.
    """
    device = read_raw_device(ctx, stdin)
    _validate(device)

    created = client.create_device(device, ctx.get_bool("retrieve_hostname_from_switch"))
    logger.debug("Created switch device %s", created.id)
    return _id_result(ctx, created)


def switch_edit(
    ctx: CommandContext,
    client: SwitchClient,
    *,
    stdin: IO[Any] | None = None,
) -> str:
    """Replace the configuration of the switch named by ``--id``."""
    device = read_raw_device(ctx, stdin)
    _validate(device)

    target = resolve_switch(ctx, client)
    updated = client.update_device(
        target.id,
        device,
        ctx.get_bool("retrieve_hostname_from_switch"),
    )
    logger.debug("Updated switch device %s", target.id)
    return _id_result(ctx, updated)


# ---------------------------------------------------------------------------
# get / delete / interfaces
# ---------------------------------------------------------------------------

def switch_get(ctx: CommandContext, client: SwitchClient) -> str:
    """Show one switch as a key/value table, or dump it with ``--raw``."""
    fmt = OutputFormat.parse(ctx.get_string("format"))
    with_credentials = ctx.get_bool("show_credentials")

    device = resolve_switch(ctx, client)

    if should_render_raw(ctx.get_bool("raw"), fmt):
        return render_raw_object(device, fmt)

    return render_transposed_table(
        device_schema(with_credentials),
        device_row(device, with_credentials),
        "switch device",
        fmt,
    )


def switch_delete(
    ctx: CommandContext,
    client: SwitchClient,
    *,
    gate: ConfirmationGate | None = None,
) -> str:
    """Delete the switch named by ``--id`` once the user confirms.

    Raises
    ------
    OperationAbortedError
        When the confirmation is anything other than ``yes``.
    """
    device = resolve_switch(ctx, client)

    if gate is None:
        gate = ConfirmationGate(
            autoconfirm=ctx.get_bool("autoconfirm"),
            suppress_prompts=ctx.get_bool("suppress_prompts"),
        )
    gate.require(DELETE_PROMPT.format(label=device.identifier_string or "", id=device.id))

    client.delete_device(device.id)
    logger.debug("Deleted switch device %s", device.id)
    return ""


def switch_interfaces(ctx: CommandContext, client: SwitchClient) -> str:
    """List the interfaces of the switch named by ``--id``."""
    fmt = OutputFormat.parse(ctx.get_string("format"))

    device = resolve_switch(ctx, client)
    interfaces = client.search_interfaces(f"network_equipment_id:{device.id}")

    if should_render_raw(ctx.get_bool("raw"), fmt):
        return render_raw_object(interfaces, fmt)

    schema = interface_schema()
    rows = sort_rows(schema, [interface_row(i) for i in interfaces], *INTERFACE_SORT_ORDER)
    title = f"Interfaces of switch {device.identifier_string or ''} (#{device.id})"
    return render_table(schema, rows, title, fmt)
