"""Domain models for easypost-cli.

All records are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and trivial derived properties.  They carry
zero I/O and no dependency on the ``easypost`` SDK; the shipping service
builds them from raw provider dicts.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime


# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

class Mode(enum.Enum):
    """API environment selecting which credential is used."""

    TEST = "TEST"
    PROD = "PROD"

    @classmethod
    def from_input(cls, text: str | None) -> Mode:
        """Parse user input; anything other than ``P``/``PROD`` is TEST."""
        normalized = (text or "").strip().upper()
        if normalized in ("P", "PROD"):
            return cls.PROD
        return cls.TEST

    @property
    def env_key(self) -> str:
        """Config/environment variable holding this mode's API key."""
        return f"EASYPOST_{self.value}_API_KEY"


@dataclass(frozen=True, slots=True)
class Session:
    """Active mode and resolved API key, fixed for the process lifetime."""

    mode: Mode
    api_key: str

    def __repr__(self) -> str:
        # Never echo the key itself.
        return f"Session(mode={self.mode.value})"


class MenuCommand(enum.Enum):
    """Main-menu commands, keyed by their single-character shortcut."""

    LIST_SHIPMENTS = "S"
    NEW_SHIPMENT = "N"
    LIST_ADDRESSES = "A"
    LIST_PARCELS = "P"
    QUIT = "Q"
    INVALID = ""

    @classmethod
    def from_input(cls, text: str) -> MenuCommand:
        """Map one line of input (trimmed, case-insensitive) to a command."""
        normalized = text.strip().upper()
        if not normalized:
            return cls.INVALID
        for command in cls:
            if command.value == normalized:
                return command
        return cls.INVALID


# ---------------------------------------------------------------------------
# Shipping records
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Address:
    """A postal address stored with the provider."""

    id: str
    name: str | None = None
    company: str | None = None
    street1: str | None = None
    street2: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    country: str | None = None
    phone: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class AddressFields:
    """User-entered fields for a new address."""

    name: str
    company: str
    street1: str
    street2: str
    city: str
    state: str
    zip: str
    country: str = "US"


@dataclass(frozen=True, slots=True)
class Parcel:
    """Package dimensions in inches and weight in ounces."""

    id: str
    length: float | None
    width: float | None
    height: float | None
    weight: float


@dataclass(frozen=True, slots=True)
class ParcelDimensions:
    """User-entered dimensions for a new parcel."""

    length: float
    width: float
    height: float
    weight: float


@dataclass(frozen=True, slots=True)
class Rate:
    """A priced shipping option for a shipment."""

    id: str
    carrier: str
    service: str
    rate: str
    """Price as the decimal string sent by the provider."""

    delivery_days: int | None = None

    @property
    def price(self) -> float:
        return float(self.rate)


@dataclass(frozen=True, slots=True)
class Fee:
    """A charge attached to a shipment (``PostageFee``, ``InsuranceFee``…)."""

    type: str
    amount: str | None


@dataclass(frozen=True, slots=True)
class Shipment:
    """A shipment with its addresses, parcel, rates and purchase state."""

    id: str
    created_at: datetime
    status: str | None
    from_address: Address
    to_address: Address
    parcel: Parcel
    rates: tuple[Rate, ...] = ()
    fees: tuple[Fee, ...] = ()
    tracking_code: str | None = None
    selected_rate: Rate | None = None
    customs_info_id: str | None = None
    tracker_url: str | None = None
    label_url: str | None = None

    @property
    def is_purchased(self) -> bool:
        return self.selected_rate is not None

    def fee_amount(self, fee_type: str) -> str | None:
        """Return the amount of the first fee of *fee_type*, if any."""
        for fee in self.fees:
            if fee.type == fee_type:
                return fee.amount
        return None
