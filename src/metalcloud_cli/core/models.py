"""Domain models for metalcloud-cli.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and zero dependencies
on external packages.

Each field declares its wire names in ``metadata``:

* ``"json"`` — the key used by the API and by JSON configuration files.
* ``"yaml"`` — the key used by YAML configuration files.
* ``"kind"`` — the expected value shape (see :data:`FIELD_KINDS`),
  checked by :mod:`metalcloud_cli.core.codec` when decoding.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

FIELD_KINDS: tuple[str, ...] = ("int", "str", "bool", "str_list", "str_matrix")
"""Value shapes understood by the codec."""


def _wire(json_key: str, yaml_key: str | None = None, kind: str = "str") -> Any:
    return field(
        default=None,
        metadata={"json": json_key, "yaml": yaml_key or json_key, "kind": kind},
    )


# ---------------------------------------------------------------------------
# Switch device
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SwitchDevice:
    """A network switch registered in a datacenter.

    ``management_password`` is only populated when credentials were
    explicitly requested from the API; otherwise it is ``None``.
    """

    id: int | None = _wire("network_equipment_id", "id", "int")
    identifier_string: str | None = _wire(
        "network_equipment_identifier_string", "identifierString",
    )
    datacenter_name: str | None = _wire("datacenter_name", "datacenterName")
    description: str | None = _wire("network_equipment_description", "description")
    driver: str | None = _wire("network_equipment_driver", "driver")
    provisioner_type: str | None = _wire(
        "network_equipment_provisioner_type", "provisionerType",
    )
    provisioner_position: str | None = _wire(
        "network_equipment_position", "provisionerPosition",
    )

    management_address: str | None = _wire(
        "network_equipment_management_address", "managementAddress",
    )
    management_port: int | None = _wire(
        "network_equipment_management_port", "managementPort", "int",
    )
    management_protocol: str | None = _wire(
        "network_equipment_management_protocol", "managementProtocol",
    )
    management_username: str | None = _wire(
        "network_equipment_management_username", "managementUsername",
    )
    management_password: str | None = _wire(
        "network_equipment_management_password", "managementPassword",
    )
    management_mac_address: str | None = _wire(
        "network_equipment_management_mac_address", "managementMACAddress",
    )

    primary_wan_ipv4_subnet_pool: str | None = _wire(
        "network_equipment_primary_wan_ipv4_subnet_pool", "primaryWANIPv4SubnetPool",
    )
    primary_wan_ipv4_subnet_prefix_size: int | None = _wire(
        "network_equipment_primary_wan_ipv4_subnet_prefix_size",
        "primaryWANIPv4SubnetPrefixSize",
        "int",
    )
    primary_wan_ipv6_subnet_pool: str | None = _wire(
        "network_equipment_primary_wan_ipv6_subnet_pool", "primaryWANIPv6SubnetPool",
    )
    primary_wan_ipv6_subnet_pool_id: int | None = _wire(
        "network_equipment_primary_wan_ipv6_subnet_pool_id",
        "primaryWANIPv6SubnetPoolID",
        "int",
    )
    primary_wan_ipv6_subnet_prefix_size: int | None = _wire(
        "network_equipment_primary_wan_ipv6_subnet_prefix_size",
        "primaryWANIPv6SubnetPrefixSize",
        "int",
    )
    primary_san_subnet_pool: str | None = _wire(
        "network_equipment_primary_san_subnet_pool", "primarySANSubnetPool",
    )
    primary_san_subnet_prefix_size: int | None = _wire(
        "network_equipment_primary_san_subnet_prefix_size",
        "primarySANSubnetPrefixSize",
        "int",
    )

    quarantine_subnet_start: str | None = _wire(
        "network_equipment_quarantine_subnet_start", "quarantineSubnetStart",
    )
    quarantine_subnet_end: str | None = _wire(
        "network_equipment_quarantine_subnet_end", "quarantineSubnetEnd",
    )
    quarantine_subnet_prefix_size: int | None = _wire(
        "network_equipment_quarantine_subnet_prefix_size",
        "quarantineSubnetPrefixSize",
        "int",
    )
    quarantine_subnet_gateway: str | None = _wire(
        "network_equipment_quarantine_subnet_gateway", "quarantineSubnetGateway",
    )

    requires_os_install: bool | None = _wire(
        "network_equipment_requires_os_install", "requiresOSInstall", "bool",
    )
    is_border_device: bool | None = _wire(
        "network_equipment_is_border_device", "isBorderDevice", "bool",
    )
    is_storage_switch: bool | None = _wire(
        "network_equipment_is_storage_switch", "isStorageSwitch", "bool",
    )
    network_types_allowed: tuple[str, ...] | None = _wire(
        "network_equipment_network_types_allowed", "networkTypesAllowed", "str_list",
    )
    tags: tuple[str, ...] | None = _wire("network_equipment_tags", "tags", "str_list")
    volume_template_id: int | None = _wire(
        "volume_template_id", "volumeTemplateID", "int",
    )

    created_timestamp: str | None = _wire(
        "network_equipment_created_timestamp", "createdTimestamp",
    )
    updated_timestamp: str | None = _wire(
        "network_equipment_updated_timestamp", "updatedTimestamp",
    )


# ---------------------------------------------------------------------------
# Switch interface (read-only search result)
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SwitchInterface:
    """One port of a switch, as returned by the interface search.

    The server-side fields are ``None`` when nothing is cabled to the
    port.
    """

    interface_id: int | None = _wire("network_equipment_interface_id", kind="int")
    identifier_string: str | None = _wire(
        "network_equipment_interface_identifier_string",
    )
    mac_address: str | None = _wire("network_equipment_interface_mac_address")
    switch_id: int | None = _wire("network_equipment_id", kind="int")

    server_id: int | None = _wire("server_id", kind="int")
    server_serial_number: str | None = _wire("server_serial_number")
    server_ipmi_host: str | None = _wire("server_ipmi_host")
    server_interface_mac_address: str | None = _wire("server_interface_mac_address")

    capacity_mbps: int | None = _wire("server_interface_capacity_mbps", kind="int")
    network_types: tuple[str, ...] | None = _wire("network_type", kind="str_list")
    ips: tuple[tuple[str, ...], ...] | None = _wire("ip", kind="str_matrix")
