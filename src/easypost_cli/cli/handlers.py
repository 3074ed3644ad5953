"""Main-menu command handlers.

Each handler is a short interactive script over the
:class:`~easypost_cli.core.shipping_service.ShippingService`.  Input
mistakes are handled here by re-prompting or returning to the menu;
provider failures propagate as
:class:`~easypost_cli.exceptions.EasypostCliError` to the menu loop.
"""

from __future__ import annotations

from dataclasses import dataclass

from easypost_cli.cli.bootstrap import mode_markup
from easypost_cli.cli.console import console, escape
from easypost_cli.cli.prompts import LineReader, ask_line, parse_index, parse_measure
from easypost_cli.cli.tables import render_record, render_rows
from easypost_cli.core.models import (
    Address,
    AddressFields,
    ParcelDimensions,
    Rate,
    Session,
    Shipment,
)
from easypost_cli.core.presentation import (
    address_comparison_rows,
    address_listing_row,
    parcel_row,
    rate_row,
    shipment_row,
    sort_rates,
    sort_shipments,
)
from easypost_cli.core.shipping_service import ShippingService

SHIPMENT_PAGE_SIZE = 10
ADDRESS_PAGE_SIZE = 5
DEFAULT_COUNTRY = "US"


@dataclass(frozen=True)
class CommandContext:
    """Everything a handler needs: the session, the API and an input reader."""

    session: Session
    service: ShippingService
    ask: LineReader = ask_line


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------

def heading(session: Session, title: str, body: str | None = None) -> None:
    """Print a mode-tagged heading with an optional line below it."""
    tag = mode_markup(session.mode, f"[{session.mode.value} MODE]")
    console.print()
    console.print(f"{tag} [bold]{title}[/bold]")
    if body:
        console.print(body)


def _warn(ctx: CommandContext, message: str) -> None:
    heading(ctx.session, f"[red]{message}[/red]")


def _ask_text(
    ctx: CommandContext,
    message: str,
    *,
    required: bool = False,
    default: str = "",
) -> str:
    while True:
        value = ctx.ask(message).strip()
        if value:
            return value
        if not required:
            return default


def _ask_measure(ctx: CommandContext, message: str) -> float:
    while True:
        value = parse_measure(ctx.ask(message))
        if value is not None:
            return value
        console.print("[red]Enter a non-negative number.[/red]")


# ---------------------------------------------------------------------------
# Shared steps
# ---------------------------------------------------------------------------

def _render_shipment_detail(shipment: Shipment) -> None:
    console.print()
    console.print("[bold]From / To:[/bold]")
    render_rows(
        address_comparison_rows(shipment.from_address, shipment.to_address),
        indexed=False,
    )
    console.print("[bold]Parcel:[/bold]")
    render_record(parcel_row(shipment.parcel))

    selected = shipment.selected_rate
    if selected is not None:
        console.print("[bold]Selected Rate:[/bold]")
        render_record(rate_row(selected))
    elif shipment.rates:
        console.print("[bold]Available Rates:[/bold]")
        render_rows([rate_row(rate, include_id=True) for rate in sort_rates(shipment.rates)])

    if selected is not None:
        console.print(f"[bold]Carrier:[/bold] {escape(selected.carrier)}")
    if shipment.tracker_url:
        console.print(f"[bold]Tracking:[/bold] {escape(shipment.tracker_url)}")
    if shipment.label_url:
        console.print(f"[bold]Label URL:[/bold] {escape(shipment.label_url)}")


def _purchase(ctx: CommandContext, shipment: Shipment, rate: Rate) -> Shipment:
    purchased = ctx.service.purchase_rate(shipment, rate.id)
    heading(
        ctx.session,
        f"[green]Rate Purchased, ${escape(rate.rate)} deducted from EasyPost balance.[/green]",
    )
    if purchased.label_url:
        console.print(f"[bold]Label URL:[/bold] {escape(purchased.label_url)}")
    return purchased


def _new_address(ctx: CommandContext) -> Address:
    fields = AddressFields(
        name=_ask_text(ctx, "Name: "),
        company=_ask_text(ctx, "Company (optional): "),
        street1=_ask_text(ctx, "Street 1: ", required=True),
        street2=_ask_text(ctx, "Street 2: "),
        city=_ask_text(ctx, "City: ", required=True),
        state=_ask_text(ctx, "State: "),
        zip=_ask_text(ctx, "Zip: ", required=True),
        country=_ask_text(ctx, f"Country [{DEFAULT_COUNTRY}]: ", default=DEFAULT_COUNTRY),
    )
    return ctx.service.create_address(fields)


def _choose_address(ctx: CommandContext, label: str) -> Address | None:
    """Pick an existing address by index or enter a new one; ``None`` on quit."""
    console.print()
    addresses = list_addresses(ctx)
    heading(
        ctx.session,
        f"Select or enter a {label} address",
        "[0-9] Selection | [N] New Address | [Q] Quit to main Menu",
    )
    choice = ctx.ask("").strip()
    if choice.upper() == "Q":
        return None
    selected = parse_index(choice, addresses)
    if selected is not None:
        return selected
    return _new_address(ctx)


def _country(address: Address) -> str:
    return (address.country or "").strip().upper()


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def list_shipments(ctx: CommandContext) -> None:
    """Show recent unpurchased shipments, their details, and offer purchase."""
    shipments = ctx.service.list_shipments(SHIPMENT_PAGE_SIZE, purchased=False)
    if not shipments:
        _warn(ctx, "No shipments found")
        return

    ordered = sort_shipments(shipments)
    render_rows([shipment_row(shipment) for shipment in ordered])
    heading(
        ctx.session,
        f"Showing first {SHIPMENT_PAGE_SIZE} Shipments (from last 30 days)",
        "[0-9] Details | [Enter] Main Menu",
    )

    while True:
        choice = ctx.ask("").strip()
        if not choice:
            return
        shipment = parse_index(choice, ordered)
        if shipment is not None:
            break
        _warn(ctx, "Invalid selection")

    _render_shipment_detail(shipment)

    if shipment.is_purchased or not shipment.rates:
        return

    rates = sort_rates(shipment.rates)
    heading(
        ctx.session,
        "Shipment has not been purchased. Purchase a rate?",
        "[0-9] Purchase rate | [Q] Main Menu",
    )
    choice = ctx.ask("").strip()
    if choice.upper() == "Q":
        return
    rate = parse_index(choice, rates)
    if rate is None:
        _warn(ctx, "Invalid selection")
        return
    _purchase(ctx, shipment, rate)


def new_shipment(ctx: CommandContext) -> None:
    """Build a shipment from chosen addresses and a parcel, then buy a rate."""
    from_address = _choose_address(ctx, "FROM")
    if from_address is None:
        return
    to_address = _choose_address(ctx, "TO")
    if to_address is None:
        return

    customs_info_id: str | None = None
    if _country(from_address) != _country(to_address):
        _warn(
            ctx,
            "Customs info required for international shipments. "
            'Please enter your "customs_info" ID:',
        )
        customs_info_id = _ask_text(ctx, "", required=True)

    heading(ctx.session, "Package Dimensions")
    length = _ask_measure(ctx, "Length (inch): ")
    height = _ask_measure(ctx, "Height (inch): ")
    width = _ask_measure(ctx, "Width (inch): ")
    weight = _ask_measure(ctx, "Weight (oz): ")
    parcel = ctx.service.create_parcel(
        ParcelDimensions(length=length, width=width, height=height, weight=weight)
    )

    shipment = ctx.service.create_shipment(
        from_address, to_address, parcel, customs_info_id=customs_info_id
    )
    rates = sort_rates(shipment.rates)
    if not rates:
        _warn(ctx, "No rates returned for this shipment")
        return

    heading(ctx.session, "Select a rate to buy:")
    render_rows([rate_row(rate, include_id=True) for rate in rates])
    console.print("[0-9] Selection | [Q] Quit to main menu")

    while True:
        choice = ctx.ask("").strip()
        if choice.upper() == "Q":
            return
        rate = parse_index(choice, rates)
        if rate is not None:
            break
        _warn(ctx, "Invalid selection - postage not purchased")

    _purchase(ctx, shipment, rate)


def list_addresses(ctx: CommandContext) -> list[Address]:
    """Show stored addresses and return them for selection by index."""
    addresses = ctx.service.list_addresses(ADDRESS_PAGE_SIZE)
    if not addresses:
        _warn(ctx, "No addresses found")
        return []
    render_rows([address_listing_row(address) for address in addresses])
    return addresses


def list_parcels(ctx: CommandContext) -> None:
    heading(ctx.session, "Parcels are not yet implemented")
