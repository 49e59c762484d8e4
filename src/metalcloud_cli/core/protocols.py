"""Protocols (interfaces) consumed by the core and CLI layers.

These define the contract the infrastructure API client must satisfy.
Command handlers depend ONLY on this protocol — never on the concrete
JSON-RPC client — so tests can hand them a counting fake.
"""

from __future__ import annotations

from typing import Protocol

from metalcloud_cli.core.models import SwitchDevice, SwitchInterface


class SwitchClient(Protocol):
    """Contract for the switch-device API backend.

    Implementations must map all backend-specific exceptions to
    :class:`~metalcloud_cli.exceptions.MetalCloudError` subclasses:
    :class:`~metalcloud_cli.exceptions.ResourceNotFoundError` when the
    object does not exist and
    :class:`~metalcloud_cli.exceptions.UpstreamError` for everything
    else.  Every call is a single request; nothing is retried.
    """

    def get_devices(self, datacenter: str, switch_type: str) -> list[SwitchDevice]:
        """Return all devices, optionally filtered (``""`` = no filter).

        Credentials are never included in the listing.
        """
        ...  # pragma: no cover

    def get_device(self, device_id: int, with_credentials: bool) -> SwitchDevice:
        """Return one device by numeric id."""
        ...  # pragma: no cover

    def get_device_by_label(self, label: str, with_credentials: bool) -> SwitchDevice:
        """Return one device by identifier string."""
        ...  # pragma: no cover

    def create_device(
        self,
        device: SwitchDevice,
        overwrite_hostname: bool,
    ) -> SwitchDevice:
        """Register *device* and return the stored object."""
        ...  # pragma: no cover

    def update_device(
        self,
        device_id: int,
        device: SwitchDevice,
        overwrite_hostname: bool,
    ) -> SwitchDevice:
        """Replace the configuration of device *device_id*."""
        ...  # pragma: no cover

    def delete_device(self, device_id: int) -> None:
        """Delete device *device_id*."""
        ...  # pragma: no cover

    def search_interfaces(self, filter_expression: str) -> list[SwitchInterface]:
        """Return switch interfaces matching a search filter.

        Example filter: ``"network_equipment_id:42"``.
        """
        ...  # pragma: no cover
