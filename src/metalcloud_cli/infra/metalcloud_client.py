"""httpx-backed implementation of :class:`~metalcloud_cli.core.protocols.SwitchClient`.

This module is the **only** place in the codebase that imports ``httpx``.
The Metal Cloud developer API speaks JSON-RPC 2.0 over HTTP POST; each
request body is signed with HMAC-MD5 keyed by the API key and the
signature is passed in the ``verify`` query parameter.

All transport, HTTP and RPC failures are caught here and re-raised as
:class:`~metalcloud_cli.exceptions.UpstreamError` (or its
:class:`~metalcloud_cli.exceptions.ResourceNotFoundError` subclass) —
nothing raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import hashlib
import hmac
import itertools
import json
import logging
import time
from typing import Any

import httpx

from metalcloud_cli.core.codec import (
    Naming,
    device_from_mapping,
    device_to_mapping,
    interface_from_mapping,
)
from metalcloud_cli.core.models import SwitchDevice, SwitchInterface
from metalcloud_cli.exceptions import DecodeError, ResourceNotFoundError, UpstreamError
from metalcloud_cli.infra.settings import Settings
from metalcloud_cli.version import __version__

logger = logging.getLogger(__name__)

_INTERFACE_TABLE = "_switch_interfaces"

_INTERFACE_COLUMNS: tuple[str, ...] = (
    "network_equipment_interface_id",
    "network_equipment_interface_identifier_string",
    "network_equipment_interface_mac_address",
    "network_equipment_id",
    "server_id",
    "server_serial_number",
    "server_ipmi_host",
    "server_interface_mac_address",
    "server_interface_capacity_mbps",
    "network_type",
    "ip",
)


class MetalCloudClient:
    """Concrete :class:`SwitchClient` talking to the developer endpoint.

    Usage::

        client = MetalCloudClient(
            "https://api.example.com/api/developer/developer",
            api_key="12:AbCd",
        )
        devices = client.get_devices("dc-prod", "")

    Parameters
    ----------
    endpoint:
        Full JSON-RPC URL.
    api_key:
        ``<id>:<secret>`` key; the whole string is the HMAC key, the
        ``<id>`` part identifies the signer.
    timeout:
        Per-request timeout in seconds.
    transport:
        Optional httpx transport, used by tests to avoid the network.
    """

    # Substrings in RPC error messages meaning the object does not exist
    # (as opposed to a permission or server-side failure).
    _NOT_FOUND_SIGNALS: tuple[str, ...] = (
        "not found",
        "could not find",
        "does not exist",
        "couldnotfind",
    )

    def __init__(
        self,
        endpoint: str,
        *,
        api_key: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._api_key = api_key
        self._key_id = api_key.split(":", 1)[0]
        self._ids = itertools.count(1)
        self._http = httpx.Client(
            timeout=httpx.Timeout(timeout),
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "User-Agent": f"metalcloud-cli/{__version__}",
            },
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> MetalCloudClient:
        """Build a client for the developer endpoint described by *settings*."""
        return cls(
            settings.developer_endpoint,
            api_key=settings.api_key,
            timeout=settings.timeout,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> MetalCloudClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def get_devices(self, datacenter: str, switch_type: str) -> list[SwitchDevice]:
        result = self._call(
            "switch_devices",
            datacenter or None,
            switch_type or None,
        )
        # The API answers with an object keyed by identifier string, or
        # with an empty array when nothing matches.
        if isinstance(result, list) and not result:
            return []
        if not isinstance(result, dict):
            raise UpstreamError("Unexpected switch list returned by the API.")
        return [self._device(row, with_credentials=False) for row in result.values()]

    def get_device(self, device_id: int, with_credentials: bool) -> SwitchDevice:
        return self._get_device(device_id, with_credentials)

    def get_device_by_label(self, label: str, with_credentials: bool) -> SwitchDevice:
        return self._get_device(label, with_credentials)

    def create_device(
        self,
        device: SwitchDevice,
        overwrite_hostname: bool,
    ) -> SwitchDevice:
        result = self._call(
            "switch_device_create",
            device_to_mapping(device, Naming.JSON),
            overwrite_hostname,
        )
        return self._device(result, with_credentials=False)

    def update_device(
        self,
        device_id: int,
        device: SwitchDevice,
        overwrite_hostname: bool,
    ) -> SwitchDevice:
        result = self._call(
            "switch_device_update",
            device_id,
            device_to_mapping(device, Naming.JSON),
            overwrite_hostname,
        )
        return self._device(result, with_credentials=False)

    def delete_device(self, device_id: int) -> None:
        self._call("switch_device_delete", device_id)

    def search_interfaces(self, filter_expression: str) -> list[SwitchInterface]:
        result = self._call(
            "search",
            self._key_id,
            filter_expression,
            [_INTERFACE_TABLE],
            {_INTERFACE_TABLE: list(_INTERFACE_COLUMNS)},
            "array_row_span",
            None,
        )
        try:
            rows = result[_INTERFACE_TABLE]["rows"]
        except (KeyError, TypeError) as exc:
            raise UpstreamError("Unexpected interface search result.") from exc
        if not isinstance(rows, list):
            raise UpstreamError("Unexpected interface search result.")
        try:
            return [interface_from_mapping(row) for row in rows]
        except DecodeError as exc:
            raise UpstreamError(f"Malformed interface returned by the API: {exc}") from exc

    # ------------------------------------------------------------------
    # Device helpers
    # ------------------------------------------------------------------

    def _get_device(self, id_or_label: int | str, with_credentials: bool) -> SwitchDevice:
        result = self._call("switch_device_get", id_or_label)
        if not isinstance(result, dict):
            raise UpstreamError("Unexpected switch returned by the API.")
        if with_credentials:
            encrypted = result.get("network_equipment_management_password")
            if encrypted:
                result = dict(result)
                result["network_equipment_management_password"] = self._call(
                    "password_decrypt", encrypted,
                )
        return self._device(result, with_credentials=with_credentials)

    @staticmethod
    def _device(raw: Any, *, with_credentials: bool) -> SwitchDevice:
        if isinstance(raw, dict) and not with_credentials:
            raw = {
                k: v for k, v in raw.items()
                if k != "network_equipment_management_password"
            }
        try:
            return device_from_mapping(raw, Naming.JSON)
        except DecodeError as exc:
            raise UpstreamError(f"Malformed switch returned by the API: {exc}") from exc

    # ------------------------------------------------------------------
    # JSON-RPC transport
    # ------------------------------------------------------------------

    def _sign(self, body: bytes) -> str:
        digest = hmac.new(self._api_key.encode(), body, hashlib.md5).hexdigest()
        return f"{self._key_id}:{digest}"

    def _call(self, method: str, *params: Any) -> Any:
        """Perform one JSON-RPC call and return its ``result``."""
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": list(params),
            "id": next(self._ids),
        }
        body = json.dumps(payload).encode()

        started = time.monotonic()
        try:
            response = self._http.post(
                self._endpoint,
                content=body,
                params={"verify": self._sign(body)},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UpstreamError(
                f"API call {method} failed with HTTP {exc.response.status_code}.",
            ) from exc
        except httpx.RequestError as exc:
            raise UpstreamError(
                f"Could not reach the API: {exc}",
                hint="Check METALCLOUD_ENDPOINT and your network connection.",
            ) from exc
        finally:
            logger.debug(
                "rpc %s finished in %.3fs", method, time.monotonic() - started,
            )

        try:
            envelope = response.json()
        except ValueError as exc:
            raise UpstreamError(f"API call {method} returned invalid JSON.") from exc
        if not isinstance(envelope, dict):
            raise UpstreamError(f"API call {method} returned an invalid response.")

        error = envelope.get("error")
        if error is not None:
            self._raise_mapped(method, error)
        return envelope.get("result")

    @classmethod
    def _raise_mapped(cls, method: str, error: Any) -> None:
        """Translate a JSON-RPC error object into a domain exception.

        Always raises.
        """
        if isinstance(error, dict):
            message = str(error.get("message") or "unknown error")
            data = error.get("data")
            error_type = str(data.get("type", "")) if isinstance(data, dict) else ""
        else:
            message = str(error)
            error_type = ""

        haystack = f"{message} {error_type}".lower()
        if any(signal in haystack for signal in cls._NOT_FOUND_SIGNALS):
            raise ResourceNotFoundError(message)
        raise UpstreamError(f"{method}: {message}")
