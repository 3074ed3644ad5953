"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Any, Protocol


class ShippingProvider(Protocol):
    """Contract for shipping API backends.

    Every method exchanges plain provider-shaped dicts (the JSON objects
    documented by the EasyPost API).  Implementations must map all
    backend-specific exceptions to
    :class:`~easypost_cli.exceptions.EasypostCliError` subclasses.

    Raises
    ------
    ShippingApiError
        When the backend rejects or fails a request.
    AuthenticationError
        When the backend rejects the API key.
    """

    def list_shipments(self, *, page_size: int, purchased: bool) -> list[dict[str, Any]]:
        """Return recent shipments, newest first as far as the backend cares."""
        ...  # pragma: no cover

    def list_addresses(self, *, page_size: int) -> list[dict[str, Any]]:
        """Return stored addresses."""
        ...  # pragma: no cover

    def create_address(self, fields: dict[str, str]) -> dict[str, Any]:
        """Create and return an address."""
        ...  # pragma: no cover

    def create_parcel(self, dimensions: dict[str, float]) -> dict[str, Any]:
        """Create and return a parcel."""
        ...  # pragma: no cover

    def create_shipment(
        self,
        from_address_id: str,
        to_address_id: str,
        parcel_id: str,
        *,
        customs_info_id: str | None = None,
    ) -> dict[str, Any]:
        """Create a shipment and return it with its rates."""
        ...  # pragma: no cover

    def buy_shipment(self, shipment_id: str, rate_id: str) -> dict[str, Any]:
        """Purchase *rate_id* for *shipment_id* and return the shipment."""
        ...  # pragma: no cover
