"""Column layouts and row builders for switch listings.

Schemas are built by pure functions — asking for credentials returns a
longer schema rather than mutating a shared one — and every row has
exactly one cell per schema column.
"""

from __future__ import annotations

from metalcloud_cli.core.models import SwitchDevice, SwitchInterface
from metalcloud_cli.core.table import FieldType, SchemaField
from metalcloud_cli.utils.strings import flatten_and_join

DEVICE_SORT_ORDER: tuple[str, ...] = ("ID", "IDENTIFIER", "DATACENTER")
INTERFACE_SORT_ORDER: tuple[str, ...] = ("IDX",)

_DEVICE_COLUMNS: tuple[SchemaField, ...] = (
    SchemaField("ID", FieldType.INT, 6),
    SchemaField("IDENTIFIER", FieldType.STRING, 6),
    SchemaField("DATACENTER", FieldType.STRING, 5),
    SchemaField("DRIVER", FieldType.STRING, 6),
    SchemaField("PROVISIONER", FieldType.STRING, 6),
    SchemaField("MGMT IP", FieldType.STRING, 5),
)

_CREDENTIAL_COLUMNS: tuple[SchemaField, ...] = (
    SchemaField("MGMT_USER", FieldType.STRING, 5),
    SchemaField("MGMT_PASS", FieldType.STRING, 5),
)

_INTERFACE_COLUMNS: tuple[SchemaField, ...] = (
    SchemaField("IDX", FieldType.INT, 5),
    SchemaField("SWITCH INTERFACE", FieldType.STRING, 6),
    SchemaField("SWITCH INTERFACE MAC", FieldType.STRING, 6),
    SchemaField("SERVER_ID", FieldType.INT, 6),
    SchemaField("SERVER_SERIAL", FieldType.STRING, 6),
    SchemaField("SERVER_IPMI_HOST", FieldType.STRING, 6),
    SchemaField("SERVER INTERFACE", FieldType.STRING, 5),
    SchemaField("CAPACITY", FieldType.STRING, 5),
    SchemaField("TYP", FieldType.STRING, 5),
    SchemaField("IP", FieldType.STRING, 5),
)


# ---------------------------------------------------------------------------
# Devices
# ---------------------------------------------------------------------------

def device_schema(with_credentials: bool) -> list[SchemaField]:
    """Return the device columns, with the credential pair iff requested."""
    if with_credentials:
        return [*_DEVICE_COLUMNS, *_CREDENTIAL_COLUMNS]
    return list(_DEVICE_COLUMNS)


def device_row(device: SwitchDevice, with_credentials: bool) -> list[object]:
    """Return the cells of *device* matching :func:`device_schema`."""
    row: list[object] = [
        device.id,
        device.identifier_string or "",
        device.datacenter_name or "",
        device.driver or "",
        device.provisioner_type or "",
        device.management_address or "",
    ]
    if with_credentials:
        row.append(device.management_username or "")
        row.append(device.management_password or "")
    return row


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------

def interface_schema() -> list[SchemaField]:
    return list(_INTERFACE_COLUMNS)


def format_capacity(capacity_mbps: int | None) -> str:
    """Render a Mbps capacity as whole Gbps, truncating (2500 → ``"2 Gbps"``)."""
    mbps = capacity_mbps or 0
    return f"{int(mbps / 1000)} Gbps"


def interface_row(interface: SwitchInterface) -> list[object]:
    """Return the cells of *interface* matching :func:`interface_schema`."""
    return [
        interface.interface_id,
        interface.identifier_string or "",
        interface.mac_address or "",
        interface.server_id,
        interface.server_serial_number or "",
        interface.server_ipmi_host or "",
        interface.server_interface_mac_address or "",
        format_capacity(interface.capacity_mbps),
        ",".join(interface.network_types or ()),
        flatten_and_join(interface.ips or ()),
    ]
