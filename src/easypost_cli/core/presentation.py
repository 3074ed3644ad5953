"""Presentation helpers — pure transforms from records to table rows.

Every function here maps a domain record to a flat ``dict`` whose keys
become table column headers.  No I/O, no Rich imports; the CLI layer
renders the rows.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from easypost_cli.core.models import Address, Parcel, Rate, Shipment

Row = dict[str, object]

OUNCES_PER_POUND = 16
OUNCES_PER_KILOGRAM = 35.274

ADDRESS_FIELDS: tuple[str, ...] = (
    "name",
    "company",
    "street1",
    "street2",
    "city",
    "state",
    "zip",
    "country",
)


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

def sort_rates(rates: Iterable[Rate]) -> list[Rate]:
    """Cheapest first; equal prices keep their original order."""
    return sorted(rates, key=lambda rate: rate.price)


def sort_shipments(shipments: Iterable[Shipment]) -> list[Shipment]:
    """Newest first; equal timestamps keep their original order."""
    # sorted() stays stable with reverse=True.
    return sorted(shipments, key=lambda shipment: shipment.created_at, reverse=True)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_weight(weight_oz: float) -> str:
    """Render ounces as ``"2lbs 3oz | 1.08kg"``.

    The pounds part is omitted when the weight is below one pound.
    Leftover ounces are rounded half up.
    """
    pounds = math.floor(weight_oz / OUNCES_PER_POUND)
    ounces = math.floor(weight_oz % OUNCES_PER_POUND + 0.5)
    kilograms = weight_oz / OUNCES_PER_KILOGRAM
    prefix = f"{pounds}lbs " if pounds >= 1 else ""
    return f"{prefix}{ounces}oz | {kilograms:.2f}kg"


def _parse_amount(amount: str | None) -> float | str:
    if not amount:
        return ""
    try:
        return float(amount)
    except ValueError:
        return ""


# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------

def address_row(address: Address) -> Row:
    return {field: getattr(address, field) for field in ADDRESS_FIELDS}


def address_listing_row(address: Address) -> Row:
    """Address row for the listing view, with contact details."""
    row = address_row(address)
    row["phone"] = address.phone
    row["email"] = address.email
    return row


def address_comparison_rows(from_address: Address, to_address: Address) -> list[Row]:
    """One row per address field, showing sender and recipient side by side."""
    return [
        {
            "field": f"{field.upper()}:",
            "From": getattr(from_address, field),
            "To": getattr(to_address, field),
        }
        for field in ADDRESS_FIELDS
    ]


def parcel_row(parcel: Parcel) -> Row:
    return {
        "length": parcel.length,
        "width": parcel.width,
        "height": parcel.height,
        "weight": format_weight(parcel.weight),
    }


def shipment_row(shipment: Shipment) -> Row:
    """Summary row for the shipment listing."""
    selected = shipment.selected_rate
    sender = shipment.from_address
    return {
        "carrier": selected.carrier if selected is not None else "",
        "tracking_code": shipment.tracking_code or "",
        "from": sender.name or sender.company,
        "to": shipment.to_address.name,
        "customs": "Yes" if shipment.customs_info_id else "No",
        "status": shipment.status,
        "cost": _parse_amount(shipment.fee_amount("PostageFee")),
        "ins": _parse_amount(shipment.fee_amount("InsuranceFee")),
    }


def rate_row(rate: Rate, *, include_id: bool = False) -> Row:
    row: Row = {
        "carrier": rate.carrier,
        "service": rate.service,
        "rate": rate.rate,
        "days": rate.delivery_days,
    }
    if include_id:
        row["id"] = rate.id
    return row
