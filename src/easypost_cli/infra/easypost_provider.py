"""``easypost`` SDK backed implementation of :class:`~easypost_cli.core.protocols.ShippingProvider`.

This module is the **only** place in the codebase that imports
``easypost``.  All SDK exceptions are caught here and re-raised as typed
:class:`~easypost_cli.exceptions.EasypostCliError` subclasses — nothing
raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from easypost_cli.exceptions import (
    AuthenticationError,
    EnvironmentError,
    ShippingApiError,
)

logger = logging.getLogger(__name__)

SHIPMENT_LOOKBACK = timedelta(days=30)
"""How far back shipment listings reach."""

_AUTH_FAILURE_STATUSES: frozenset[int] = frozenset({401, 403})


def _import_easypost() -> Any:
    """Import the easypost SDK lazily."""
    try:
        import easypost
        import easypost.errors
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "easypost is not installed. Install with: pip install easypost",
        ) from exc
    return easypost


def _plain(value: Any) -> Any:
    """Recursively convert SDK objects into plain dicts and lists."""
    if hasattr(value, "to_dict") and not isinstance(value, dict):
        value = value.to_dict()
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


class EasyPostProvider:
    """Concrete :class:`ShippingProvider` backed by ``easypost.EasyPostClient``.

    Usage::

        provider = EasyPostProvider(session.api_key)
        shipments = provider.list_shipments(page_size=10, purchased=False)

    This class satisfies the :class:`~easypost_cli.core.protocols.ShippingProvider`
    protocol structurally — no explicit inheritance required.  The SDK
    client is created on first use.
    """

    def __init__(self, api_key: str, *, client: Any | None = None) -> None:
        self._api_key: str = api_key
        self._client: Any | None = client

    def __repr__(self) -> str:
        return "EasyPostProvider()"

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def list_shipments(self, *, page_size: int, purchased: bool) -> list[dict[str, Any]]:
        start = datetime.now(timezone.utc) - SHIPMENT_LOOKBACK
        response = self._request(
            lambda client: client.shipment.all(
                page_size=page_size,
                purchased=purchased,
                start_datetime=start.strftime("%Y-%m-%dT%H:%M:%SZ"),
            )
        )
        return list(response.get("shipments") or [])

    def list_addresses(self, *, page_size: int) -> list[dict[str, Any]]:
        response = self._request(lambda client: client.address.all(page_size=page_size))
        return list(response.get("addresses") or [])

    def create_address(self, fields: dict[str, str]) -> dict[str, Any]:
        return self._request(lambda client: client.address.create(**fields))

    def create_parcel(self, dimensions: dict[str, float]) -> dict[str, Any]:
        return self._request(lambda client: client.parcel.create(**dimensions))

    def create_shipment(
        self,
        from_address_id: str,
        to_address_id: str,
        parcel_id: str,
        *,
        customs_info_id: str | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "from_address": {"id": from_address_id},
            "to_address": {"id": to_address_id},
            "parcel": {"id": parcel_id},
        }
        if customs_info_id:
            params["customs_info"] = {"id": customs_info_id}
        return self._request(lambda client: client.shipment.create(**params))

    def buy_shipment(self, shipment_id: str, rate_id: str) -> dict[str, Any]:
        return self._request(
            lambda client: client.shipment.buy(shipment_id, rate={"id": rate_id})
        )

    # ------------------------------------------------------------------
    # SDK plumbing
    # ------------------------------------------------------------------

    def _get_client(self) -> Any:
        if self._client is None:
            easypost = _import_easypost()
            self._client = easypost.EasyPostClient(self._api_key)
        return self._client

    def _request(self, call: Callable[[Any], Any]) -> dict[str, Any]:
        """Run *call* against the SDK client and return a plain dict."""
        client = self._get_client()
        easypost = _import_easypost()
        try:
            response = call(client)
        except easypost.errors.EasyPostError as exc:
            self._raise_mapped(exc)
        except Exception as exc:
            raise ShippingApiError(
                f"Unexpected EasyPost client error: {exc}",
            ) from exc
        result = _plain(response)
        if not isinstance(result, dict):
            raise ShippingApiError(
                f"Unexpected EasyPost response type: {type(response).__name__}",
            )
        return result

    @staticmethod
    def _raise_mapped(exc: Exception) -> None:
        """Translate an SDK ``EasyPostError`` into a domain exception.

        Always raises.
        """
        status = getattr(exc, "http_status", None)
        logger.debug("EasyPost request failed (status=%s): %s", status, exc)
        if status in _AUTH_FAILURE_STATUSES:
            raise AuthenticationError(
                f"EasyPost rejected the API key: {exc}",
                hint="Check that the key matches the selected mode.",
            ) from exc
        raise ShippingApiError(
            str(exc) or "EasyPost request failed.",
            hint="Check the entered details and your network connection.",
        ) from exc
