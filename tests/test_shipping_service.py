"""Tests for ShippingService (core/shipping_service.py).

The :class:`ShippingProvider` dependency is **mocked** — no internet
access, no easypost SDK.  These tests verify:

* Raw-dict → record parsing, including missing and malformed fields
* Request payloads sent to the provider
* Exception mapping (unexpected provider errors → ShippingApiError)
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any
from unittest.mock import MagicMock

import pytest

from easypost_cli.core.models import AddressFields, ParcelDimensions
from easypost_cli.core.shipping_service import ShippingService
from easypost_cli.exceptions import AuthenticationError, ShippingApiError


# ---------------------------------------------------------------------------
# Raw payload factories (EasyPost JSON shapes)
# ---------------------------------------------------------------------------

def _raw_address(address_id: str = "adr_1", **overrides: Any) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": address_id,
        "object": "Address",
        "name": "Jane Doe",
        "company": None,
        "street1": "417 Montgomery St",
        "street2": "",
        "city": "San Francisco",
        "state": "CA",
        "zip": "94104",
        "country": "US",
        "phone": "4155559999",
        "email": None,
    }
    d.update(overrides)
    return d


def _raw_rate(rate_id: str, rate: str, **overrides: Any) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": rate_id,
        "object": "Rate",
        "carrier": "USPS",
        "service": "Priority",
        "rate": rate,
        "delivery_days": 2,
    }
    d.update(overrides)
    return d


def _raw_shipment(**overrides: Any) -> dict[str, Any]:
    d: dict[str, Any] = {
        "id": "shp_1",
        "object": "Shipment",
        "created_at": "2024-05-01T12:00:00Z",
        "status": "unknown",
        "tracking_code": None,
        "from_address": _raw_address("adr_1"),
        "to_address": _raw_address("adr_2", name="John Roe"),
        "parcel": {"id": "prcl_1", "length": 10.0, "width": 5.0, "height": 5.0, "weight": 32.0},
        "rates": [_raw_rate("rate_a", "12.00"), _raw_rate("rate_b", "5.50")],
        "fees": [],
        "selected_rate": None,
        "customs_info": None,
        "tracker": None,
        "postage_label": None,
    }
    d.update(overrides)
    return d


def _service(**returns: Any) -> tuple[ShippingService, MagicMock]:
    provider = MagicMock()
    for name, value in returns.items():
        if isinstance(value, Exception):
            getattr(provider, name).side_effect = value
        else:
            getattr(provider, name).return_value = value
    return ShippingService(provider), provider


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------

class TestListShipments:
    def test_passes_filters(self) -> None:
        svc, provider = _service(list_shipments=[])
        assert svc.list_shipments(10, purchased=False) == []
        provider.list_shipments.assert_called_once_with(page_size=10, purchased=False)

    def test_parses_all_fields(self) -> None:
        raw = _raw_shipment(
            tracking_code="9400",
            selected_rate=_raw_rate("rate_b", "5.50"),
            fees=[{"type": "PostageFee", "amount": "5.50000"}],
            customs_info={"id": "cstinfo_1"},
            tracker={"id": "trk_1", "public_url": "https://track.easypost.com/x"},
            postage_label={"label_url": "https://labels.easypost.com/x.png"},
        )
        svc, _ = _service(list_shipments=[raw])
        (shipment,) = svc.list_shipments()
        assert shipment.id == "shp_1"
        assert shipment.created_at == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert shipment.from_address.name == "Jane Doe"
        assert shipment.to_address.name == "John Roe"
        assert shipment.parcel.weight == 32.0
        assert [r.id for r in shipment.rates] == ["rate_a", "rate_b"]
        assert shipment.selected_rate is not None
        assert shipment.selected_rate.id == "rate_b"
        assert shipment.fee_amount("PostageFee") == "5.50000"
        assert shipment.customs_info_id == "cstinfo_1"
        assert shipment.tracker_url == "https://track.easypost.com/x"
        assert shipment.label_url == "https://labels.easypost.com/x.png"
        assert shipment.tracking_code == "9400"

    def test_missing_optional_parts(self) -> None:
        raw = _raw_shipment()
        for key in ("rates", "fees", "parcel", "created_at"):
            del raw[key]
        svc, _ = _service(list_shipments=[raw])
        (shipment,) = svc.list_shipments()
        assert shipment.rates == ()
        assert shipment.fees == ()
        assert shipment.parcel.weight == 0.0
        assert shipment.created_at.year == 1
        assert not shipment.is_purchased

    def test_unparsable_timestamp_sorts_oldest(self) -> None:
        svc, _ = _service(list_shipments=[_raw_shipment(created_at="yesterday")])
        (shipment,) = svc.list_shipments()
        assert shipment.created_at == datetime.min.replace(tzinfo=timezone.utc)

    def test_offset_timestamp_is_kept(self) -> None:
        svc, _ = _service(list_shipments=[_raw_shipment(created_at="2024-05-01T08:00:00-04:00")])
        (shipment,) = svc.list_shipments()
        assert shipment.created_at == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def test_skips_malformed_entries(self) -> None:
        svc, _ = _service(list_shipments=[_raw_shipment(), "garbage", None])
        assert len(svc.list_shipments()) == 1

    @pytest.mark.parametrize("amount", ["n/a", "12,50", "nan", "inf"])
    def test_skips_rates_without_usable_amount(self, amount: str) -> None:
        raw = _raw_shipment(rates=[_raw_rate("rate_bad", amount), _raw_rate("rate_ok", "5.50")])
        svc, _ = _service(list_shipments=[raw])
        (shipment,) = svc.list_shipments()
        assert [r.id for r in shipment.rates] == ["rate_ok"]
        assert shipment.rates[0].price == 5.5


class TestListAddresses:
    def test_parses_and_blanks_become_none(self) -> None:
        svc, provider = _service(list_addresses=[_raw_address()])
        (address,) = svc.list_addresses(5)
        provider.list_addresses.assert_called_once_with(page_size=5)
        assert address.id == "adr_1"
        assert address.street2 is None
        assert address.company is None
        assert address.phone == "4155559999"


# ---------------------------------------------------------------------------
# Creation and purchase
# ---------------------------------------------------------------------------

class TestCreate:
    def test_create_address_payload(self) -> None:
        svc, provider = _service(create_address=_raw_address("adr_9"))
        fields = AddressFields(
            name="Jane",
            company="",
            street1="1 Main St",
            street2="",
            city="Austin",
            state="TX",
            zip="78701",
        )
        address = svc.create_address(fields)
        assert address.id == "adr_9"
        payload = provider.create_address.call_args[0][0]
        assert payload["country"] == "US"
        assert payload["street1"] == "1 Main St"

    def test_create_parcel_payload(self) -> None:
        svc, provider = _service(
            create_parcel={"id": "prcl_1", "length": 10, "width": 5, "height": 5, "weight": 32},
        )
        parcel = svc.create_parcel(ParcelDimensions(length=10, width=5, height=5, weight=32))
        provider.create_parcel.assert_called_once_with(
            {"length": 10, "width": 5, "height": 5, "weight": 32}
        )
        assert parcel.id == "prcl_1"

    def test_create_shipment_passes_ids(self) -> None:
        svc, provider = _service(list_shipments=[_raw_shipment()], create_shipment=_raw_shipment())
        (existing,) = svc.list_shipments()
        shipment = svc.create_shipment(
            existing.from_address, existing.to_address, existing.parcel, customs_info_id="cstinfo_1"
        )
        provider.create_shipment.assert_called_once_with(
            "adr_1", "adr_2", "prcl_1", customs_info_id="cstinfo_1"
        )
        assert len(shipment.rates) == 2

    def test_blank_customs_id_is_omitted(self) -> None:
        svc, provider = _service(list_shipments=[_raw_shipment()], create_shipment=_raw_shipment())
        (existing,) = svc.list_shipments()
        svc.create_shipment(existing.from_address, existing.to_address, existing.parcel, "")
        assert provider.create_shipment.call_args.kwargs["customs_info_id"] is None

    def test_purchase_rate(self) -> None:
        bought = _raw_shipment(
            selected_rate=_raw_rate("rate_b", "5.50"),
            postage_label={"label_url": "https://labels.easypost.com/x.png"},
        )
        svc, provider = _service(list_shipments=[_raw_shipment()], buy_shipment=bought)
        (shipment,) = svc.list_shipments()
        result = svc.purchase_rate(shipment, "rate_b")
        provider.buy_shipment.assert_called_once_with("shp_1", "rate_b")
        assert result.is_purchased
        assert result.label_url == "https://labels.easypost.com/x.png"


# ---------------------------------------------------------------------------
# Exception boundary
# ---------------------------------------------------------------------------

class TestExceptionBoundary:
    def test_our_errors_propagate_unchanged(self) -> None:
        err = AuthenticationError("bad key")
        svc, _ = _service(list_addresses=err)
        with pytest.raises(AuthenticationError) as exc_info:
            svc.list_addresses()
        assert exc_info.value is err

    def test_unexpected_errors_are_wrapped(self) -> None:
        svc, _ = _service(list_shipments=ConnectionError("reset by peer"))
        with pytest.raises(ShippingApiError, match="Could not list shipments: reset by peer"):
            svc.list_shipments()
