"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem access; network only through an injected provider.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from easypost_cli.core.models import (
    Address,
    AddressFields,
    Fee,
    MenuCommand,
    Mode,
    Parcel,
    ParcelDimensions,
    Rate,
    Session,
    Shipment,
)
from easypost_cli.core.protocols import ShippingProvider
from easypost_cli.core.shipping_service import ShippingService

__all__: list[str] = [
    "Address",
    "AddressFields",
    "Fee",
    "MenuCommand",
    "Mode",
    "Parcel",
    "ParcelDimensions",
    "Rate",
    "Session",
    "Shipment",
    "ShippingProvider",
    "ShippingService",
]
