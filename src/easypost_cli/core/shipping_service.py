"""Core shipping service — the Shipping API Client used by command handlers.

This service depends on a :class:`~easypost_cli.core.protocols.ShippingProvider`
injected at construction time (dependency inversion), keeping the core
free of any SDK imports.  It is responsible for:

* Converting provider dicts into the frozen records of
  :mod:`easypost_cli.core.models`.
* Ensuring only :class:`~easypost_cli.exceptions.EasypostCliError`
  subclasses escape.

Guarantees
----------
* Pure orchestration — no ``print()``, no filesystem access.
* All parsing logic is deterministic and stateless.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, TypeVar

from easypost_cli.core.models import (
    Address,
    AddressFields,
    Fee,
    Parcel,
    ParcelDimensions,
    Rate,
    Shipment,
)
from easypost_cli.core.protocols import ShippingProvider
from easypost_cli.exceptions import EasypostCliError, ShippingApiError

logger = logging.getLogger(__name__)

_T = TypeVar("_T")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class ShippingService:
    """Stateless service exposing shipping operations as typed records.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`ShippingProvider` protocol.
    """

    def __init__(self, provider: ShippingProvider) -> None:
        self._provider: ShippingProvider = provider

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_shipments(self, page_size: int = 10, *, purchased: bool = False) -> list[Shipment]:
        raw = self._call(
            "list shipments",
            lambda: self._provider.list_shipments(page_size=page_size, purchased=purchased),
        )
        return [self._parse_shipment(entry) for entry in raw if isinstance(entry, dict)]

    def list_addresses(self, page_size: int = 5) -> list[Address]:
        raw = self._call(
            "list addresses",
            lambda: self._provider.list_addresses(page_size=page_size),
        )
        return [self._parse_address(entry) for entry in raw if isinstance(entry, dict)]

    def create_address(self, fields: AddressFields) -> Address:
        payload = {
            "name": fields.name,
            "company": fields.company,
            "street1": fields.street1,
            "street2": fields.street2,
            "city": fields.city,
            "state": fields.state,
            "zip": fields.zip,
            "country": fields.country,
        }
        raw = self._call("create address", lambda: self._provider.create_address(payload))
        return self._parse_address(raw)

    def create_parcel(self, dimensions: ParcelDimensions) -> Parcel:
        payload = {
            "length": dimensions.length,
            "width": dimensions.width,
            "height": dimensions.height,
            "weight": dimensions.weight,
        }
        raw = self._call("create parcel", lambda: self._provider.create_parcel(payload))
        return self._parse_parcel(raw)

    def create_shipment(
        self,
        from_address: Address,
        to_address: Address,
        parcel: Parcel,
        customs_info_id: str | None = None,
    ) -> Shipment:
        """Create a shipment; the returned record carries its rates."""
        raw = self._call(
            "create shipment",
            lambda: self._provider.create_shipment(
                from_address.id,
                to_address.id,
                parcel.id,
                customs_info_id=customs_info_id or None,
            ),
        )
        return self._parse_shipment(raw)

    def purchase_rate(self, shipment: Shipment, rate_id: str) -> Shipment:
        """Buy *rate_id* for *shipment*; the result carries the postage label."""
        raw = self._call(
            "purchase rate",
            lambda: self._provider.buy_shipment(shipment.id, rate_id),
        )
        return self._parse_shipment(raw)

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _call(action: str, request: Callable[[], _T]) -> _T:
        """Run *request* and ensure only our exceptions escape."""
        logger.debug("Shipping provider call: %s", action)
        try:
            return request()
        except EasypostCliError:
            raise
        except Exception as exc:
            raise ShippingApiError(
                f"Could not {action}: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Raw-dict → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _text(raw: dict[str, Any], key: str) -> str | None:
        value = raw.get(key)
        if value is None or value == "":
            return None
        return str(value)

    @staticmethod
    def _number(raw: dict[str, Any], key: str) -> float | None:
        value = raw.get(key)
        if value is None or value == "":
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _parse_timestamp(value: object) -> datetime:
        """Parse an ISO-8601 timestamp; unparsable values sort oldest."""
        if not isinstance(value, str) or not value:
            return _EPOCH
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return _EPOCH
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    @classmethod
    def _parse_address(cls, raw: dict[str, Any]) -> Address:
        return Address(
            id=str(raw.get("id", "")),
            name=cls._text(raw, "name"),
            company=cls._text(raw, "company"),
            street1=cls._text(raw, "street1"),
            street2=cls._text(raw, "street2"),
            city=cls._text(raw, "city"),
            state=cls._text(raw, "state"),
            zip=cls._text(raw, "zip"),
            country=cls._text(raw, "country"),
            phone=cls._text(raw, "phone"),
            email=cls._text(raw, "email"),
        )

    @classmethod
    def _parse_parcel(cls, raw: dict[str, Any]) -> Parcel:
        return Parcel(
            id=str(raw.get("id", "")),
            length=cls._number(raw, "length"),
            width=cls._number(raw, "width"),
            height=cls._number(raw, "height"),
            weight=cls._number(raw, "weight") or 0.0,
        )

    @classmethod
    def _parse_rate(cls, raw: dict[str, Any]) -> Rate:
        days = raw.get("delivery_days")
        return Rate(
            id=str(raw.get("id", "")),
            carrier=str(raw.get("carrier", "")),
            service=str(raw.get("service", "")),
            rate=str(raw.get("rate") or "0"),
            delivery_days=int(days) if isinstance(days, (int, float)) else None,
        )

    @staticmethod
    def _has_price(raw: dict[str, Any]) -> bool:
        """True when the rate amount parses as a finite number."""
        try:
            price = float(str(raw.get("rate") or "0"))
        except ValueError:
            logger.debug("Skipping rate %r with unusable amount", raw.get("id"))
            return False
        return math.isfinite(price)

    @classmethod
    def _parse_fee(cls, raw: dict[str, Any]) -> Fee:
        return Fee(type=str(raw.get("type", "")), amount=cls._text(raw, "amount"))

    @staticmethod
    def _dicts(raw: object) -> list[dict[str, Any]]:
        """Keep only dict entries of a raw list; anything else yields ``[]``."""
        if not isinstance(raw, list):
            return []
        return [entry for entry in raw if isinstance(entry, dict)]

    @staticmethod
    def _nested(raw: dict[str, Any], key: str) -> dict[str, Any] | None:
        value = raw.get(key)
        return value if isinstance(value, dict) else None

    @classmethod
    def _parse_shipment(cls, raw: dict[str, Any]) -> Shipment:
        selected = cls._nested(raw, "selected_rate")
        customs = cls._nested(raw, "customs_info")
        tracker = cls._nested(raw, "tracker")
        label = cls._nested(raw, "postage_label")
        return Shipment(
            id=str(raw.get("id", "")),
            created_at=cls._parse_timestamp(raw.get("created_at")),
            status=cls._text(raw, "status"),
            from_address=cls._parse_address(cls._nested(raw, "from_address") or {}),
            to_address=cls._parse_address(cls._nested(raw, "to_address") or {}),
            parcel=cls._parse_parcel(cls._nested(raw, "parcel") or {}),
            rates=tuple(
                cls._parse_rate(rate)
                for rate in cls._dicts(raw.get("rates"))
                if cls._has_price(rate)
            ),
            fees=tuple(cls._parse_fee(fee) for fee in cls._dicts(raw.get("fees"))),
            tracking_code=cls._text(raw, "tracking_code"),
            selected_rate=cls._parse_rate(selected) if selected else None,
            customs_info_id=cls._text(customs, "id") if customs else None,
            tracker_url=cls._text(tracker, "public_url") if tracker else None,
            label_url=cls._text(label, "label_url") if label else None,
        )
