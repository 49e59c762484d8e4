"""Shared pytest fixtures and configuration for the metalcloud-cli test suite.

Guidelines
----------
* No network access in any test: handlers get :class:`FakeSwitchClient`,
  the real client gets an ``httpx.MockTransport``.
* Core tests must be pure — no side effects.
* Tests must not depend on the caller's ``METALCLOUD_*`` environment.
"""

from __future__ import annotations

import os
from dataclasses import replace
from typing import Any

import pytest

from metalcloud_cli.core.models import SwitchDevice, SwitchInterface
from metalcloud_cli.exceptions import ResourceNotFoundError


class FakeSwitchClient:
    """In-memory :class:`SwitchClient` that records every call."""

    def __init__(
        self,
        devices: list[SwitchDevice] | None = None,
        interfaces: list[SwitchInterface] | None = None,
        passwords: dict[int, str] | None = None,
    ) -> None:
        self.devices = {d.id: d for d in devices or []}
        self.interfaces = list(interfaces or [])
        self.passwords = dict(passwords or {})
        self.calls: list[tuple[Any, ...]] = []
        self.closed = False

    def count(self, method: str) -> int:
        return sum(1 for call in self.calls if call[0] == method)

    def _lookup(self, device: SwitchDevice | None, with_credentials: bool) -> SwitchDevice:
        if device is None:
            raise ResourceNotFoundError("Switch device not found")
        if with_credentials:
            return replace(device, management_password=self.passwords.get(device.id))
        return replace(device, management_password=None)

    def get_devices(self, datacenter: str, switch_type: str) -> list[SwitchDevice]:
        self.calls.append(("get_devices", datacenter, switch_type))
        return [
            replace(d, management_password=None)
            for d in self.devices.values()
            if (not datacenter or d.datacenter_name == datacenter)
            and (not switch_type or d.provisioner_type == switch_type)
        ]

    def get_device(self, device_id: int, with_credentials: bool) -> SwitchDevice:
        self.calls.append(("get_device", device_id, with_credentials))
        return self._lookup(self.devices.get(device_id), with_credentials)

    def get_device_by_label(self, label: str, with_credentials: bool) -> SwitchDevice:
        self.calls.append(("get_device_by_label", label, with_credentials))
        match = next(
            (d for d in self.devices.values() if d.identifier_string == label),
            None,
        )
        return self._lookup(match, with_credentials)

    def create_device(self, device: SwitchDevice, overwrite_hostname: bool) -> SwitchDevice:
        self.calls.append(("create_device", device, overwrite_hostname))
        created = replace(device, id=max(self.devices, default=0) + 1)
        self.devices[created.id] = created
        return created

    def update_device(
        self,
        device_id: int,
        device: SwitchDevice,
        overwrite_hostname: bool,
    ) -> SwitchDevice:
        self.calls.append(("update_device", device_id, device, overwrite_hostname))
        updated = replace(device, id=device_id)
        self.devices[device_id] = updated
        return updated

    def delete_device(self, device_id: int) -> None:
        self.calls.append(("delete_device", device_id))
        self.devices.pop(device_id, None)

    def search_interfaces(self, filter_expression: str) -> list[SwitchInterface]:
        self.calls.append(("search_interfaces", filter_expression))
        _, _, wanted = filter_expression.partition(":")
        return [i for i in self.interfaces if str(i.switch_id) == wanted]

    def close(self) -> None:
        self.closed = True


def make_device(**overrides: Any) -> SwitchDevice:
    values: dict[str, Any] = {
        "id": 1,
        "identifier_string": "leaf-01",
        "datacenter_name": "dc-prod",
        "driver": "cumulus42",
        "provisioner_type": "evpnvxlanl2",
        "management_address": "10.0.0.1",
        "management_port": 22,
        "management_username": "admin",
        "created_timestamp": "2024-01-01T00:00:00Z",
    }
    values.update(overrides)
    return SwitchDevice(**values)


def make_interface(**overrides: Any) -> SwitchInterface:
    values: dict[str, Any] = {
        "interface_id": 10,
        "identifier_string": "swp1",
        "mac_address": "aa:bb:cc:00:00:01",
        "switch_id": 1,
        "server_id": 100,
        "server_serial_number": "SN100",
        "server_ipmi_host": "10.1.0.100",
        "server_interface_mac_address": "aa:bb:cc:00:01:01",
        "capacity_mbps": 10000,
        "network_types": ("wan",),
        "ips": (("192.168.0.2",),),
    }
    values.update(overrides)
    return SwitchInterface(**values)


@pytest.fixture(autouse=True)
def _clean_metalcloud_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    for name in list(os.environ):
        if name.startswith("METALCLOUD_"):
            monkeypatch.delenv(name)
    # Keep a developer's .env out of the settings under test.
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def fake_client() -> FakeSwitchClient:
    return FakeSwitchClient(
        devices=[
            make_device(id=2, identifier_string="spine-01", provisioner_type="sdn"),
            make_device(id=1),
        ],
        interfaces=[
            make_interface(interface_id=11, identifier_string="swp2", capacity_mbps=2500),
            make_interface(),
            make_interface(interface_id=20, switch_id=2),
        ],
        passwords={1: "s3cret", 2: "t0ps3cret"},
    )
