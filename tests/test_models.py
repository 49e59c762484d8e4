"""Tests for domain models (core/models.py) and their wire codec (core/codec.py).

All models are frozen dataclasses — these tests verify immutability,
the two naming schemes, and the per-field type checks.
"""

from __future__ import annotations

import dataclasses

import pytest

from metalcloud_cli.core.codec import (
    Naming,
    device_from_mapping,
    device_to_mapping,
    interface_from_mapping,
    interface_to_mapping,
)
from metalcloud_cli.core.models import SwitchDevice, SwitchInterface
from metalcloud_cli.exceptions import DecodeError


# ---------------------------------------------------------------------------
# SwitchDevice
# ---------------------------------------------------------------------------

class TestSwitchDevice:
    def test_all_fields_default_to_none(self) -> None:
        device = SwitchDevice()
        assert all(getattr(device, f.name) is None for f in dataclasses.fields(device))

    def test_frozen(self) -> None:
        device = SwitchDevice(id=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            device.id = 2  # type: ignore[misc]

    def test_equality_by_value(self) -> None:
        assert SwitchDevice(id=1, driver="x") == SwitchDevice(id=1, driver="x")


class TestSwitchInterface:
    def test_frozen(self) -> None:
        interface = SwitchInterface(interface_id=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            interface.interface_id = 2  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Device decoding
# ---------------------------------------------------------------------------

class TestDeviceFromMapping:
    def test_json_names(self) -> None:
        device = device_from_mapping(
            {
                "network_equipment_id": 7,
                "network_equipment_identifier_string": "leaf-07",
                "datacenter_name": "dc-prod",
                "network_equipment_management_port": 22,
                "network_equipment_tags": ["a", "b"],
                "network_equipment_is_border_device": True,
            },
        )
        assert device.id == 7
        assert device.identifier_string == "leaf-07"
        assert device.datacenter_name == "dc-prod"
        assert device.management_port == 22
        assert device.tags == ("a", "b")
        assert device.is_border_device is True

    def test_yaml_names(self) -> None:
        device = device_from_mapping(
            {
                "id": 7,
                "identifierString": "leaf-07",
                "datacenterName": "dc-prod",
                "managementMACAddress": "00:00:00:00:00:00",
            },
            Naming.YAML,
        )
        assert device.id == 7
        assert device.identifier_string == "leaf-07"
        assert device.management_mac_address == "00:00:00:00:00:00"

    def test_yaml_scalars_in_string_fields_keep_their_text(self) -> None:
        device = device_from_mapping(
            {
                "identifierString": 12345,
                "managementPassword": 123456,
                "managementAddress": 10.5,
                "managementUsername": True,
                "tags": ["rack", 42],
            },
            Naming.YAML,
        )
        assert device.identifier_string == "12345"
        assert device.management_password == "123456"
        assert device.management_address == "10.5"
        assert device.management_username == "true"
        assert device.tags == ("rack", "42")

    def test_yaml_numbers_still_rejected_for_int_fields(self) -> None:
        with pytest.raises(DecodeError, match="must be an integer"):
            device_from_mapping({"managementPort": "22"}, Naming.YAML)

    def test_json_names_are_ignored_in_yaml_mode(self) -> None:
        device = device_from_mapping({"datacenter_name": "dc-prod"}, Naming.YAML)
        assert device.datacenter_name is None

    def test_unknown_keys_are_ignored(self) -> None:
        device = device_from_mapping({"datacenter_name": "dc", "whatever": 1})
        assert device == SwitchDevice(datacenter_name="dc")

    @pytest.mark.parametrize("document", [[], "text", 3, None])
    def test_non_mapping_rejected(self, document: object) -> None:
        with pytest.raises(DecodeError, match="Expected an object"):
            device_from_mapping(document)

    def test_string_for_int_rejected(self) -> None:
        with pytest.raises(DecodeError, match="network_equipment_management_port"):
            device_from_mapping({"network_equipment_management_port": "22"})

    def test_int_for_string_rejected_in_json(self) -> None:
        with pytest.raises(DecodeError, match="must be a string"):
            device_from_mapping({"network_equipment_identifier_string": 12345})

    def test_bool_for_int_rejected(self) -> None:
        with pytest.raises(DecodeError, match="must be an integer"):
            device_from_mapping({"network_equipment_id": True})

    def test_int_for_bool_rejected(self) -> None:
        with pytest.raises(DecodeError, match="must be a boolean"):
            device_from_mapping({"network_equipment_is_storage_switch": 1})

    def test_mixed_list_rejected(self) -> None:
        with pytest.raises(DecodeError, match="list of strings"):
            device_from_mapping({"network_equipment_tags": ["a", 1]})

    def test_null_values_stay_unset(self) -> None:
        device = device_from_mapping({"network_equipment_driver": None})
        assert device.driver is None


# ---------------------------------------------------------------------------
# Device encoding
# ---------------------------------------------------------------------------

class TestDeviceToMapping:
    def test_unset_fields_are_omitted(self) -> None:
        assert device_to_mapping(SwitchDevice(id=3)) == {"network_equipment_id": 3}

    def test_yaml_names(self) -> None:
        out = device_to_mapping(
            SwitchDevice(id=3, datacenter_name="dc", tags=("x",)),
            Naming.YAML,
        )
        assert out == {"id": 3, "datacenterName": "dc", "tags": ["x"]}

    def test_tuples_become_lists(self) -> None:
        out = device_to_mapping(SwitchDevice(network_types_allowed=("wan", "lan")))
        assert out["network_equipment_network_types_allowed"] == ["wan", "lan"]


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------

class TestInterfaceCodec:
    def test_search_row_decoded(self) -> None:
        interface = interface_from_mapping(
            {
                "network_equipment_interface_id": 5,
                "network_equipment_id": 1,
                "server_interface_capacity_mbps": 25000,
                "network_type": ["wan", "san"],
                "ip": [["10.0.0.2", "10.0.0.3"], []],
            },
        )
        assert interface.interface_id == 5
        assert interface.switch_id == 1
        assert interface.capacity_mbps == 25000
        assert interface.network_types == ("wan", "san")
        assert interface.ips == (("10.0.0.2", "10.0.0.3"), ())

    def test_ip_matrix_must_hold_lists(self) -> None:
        with pytest.raises(DecodeError, match="list of string lists"):
            interface_from_mapping({"ip": ["10.0.0.2"]})

    def test_encoded_with_api_names(self) -> None:
        out = interface_to_mapping(SwitchInterface(interface_id=5, ips=(("a",),)))
        assert out == {"network_equipment_interface_id": 5, "ip": [["a"]]}
