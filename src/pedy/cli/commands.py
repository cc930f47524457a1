"""Command-line interface commands."""

import asyncio
import sys
import click
from datetime import datetime
from typing import Optional

from pydantic import ValidationError

from ..config import configure_logging, pricing_config
from ..exceptions import PedyError
from ..models.checkout import DeliveryContext
from ..services.checkout_service import CheckoutService
from ..services.entitlement_service import EntitlementService
from ..services.hours_service import HoursService
from ..services.pricing_service import PricingService
from ..utils.currency import format_currency
from ..utils.json_processor import JSONProcessor


@click.group()
@click.option('--log-level', type=str, default=None, help='Override LOG_LEVEL')
def main(log_level: Optional[str]):
    """Pedy CLI - menu order pricing and checkout quotes."""
    configure_logging(log_level)


def _parse_moment(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Not an ISO timestamp: {value}")


@main.command()
@click.argument('snapshot_path')
@click.argument('cart_path')
@click.option('--coupon', type=str, help='Coupon code (overrides the cart file)')
@click.option('--pickup', is_flag=True, help='Customer picks the order up')
@click.option('--neighborhood', type=str, help='Delivery neighborhood (overrides the cart file)')
@click.option('--at', 'at', type=str, help='Quote as of this ISO timestamp')
@click.option('--output', '-o', type=str, help='Save the quote as JSON to this path')
def quote(snapshot_path: str, cart_path: str, coupon: Optional[str], pickup: bool,
          neighborhood: Optional[str], at: Optional[str], output: Optional[str]):
    """Price a cart file against a menu snapshot."""
    now = _parse_moment(at)
    asyncio.run(_quote(snapshot_path, cart_path, coupon, pickup, neighborhood, now, output))


async def _quote(snapshot_path: str, cart_path: str, coupon: Optional[str], pickup: bool,
                 neighborhood: Optional[str], now: Optional[datetime], output: Optional[str]):
    """Price a cart file against a menu snapshot."""
    try:
        processor = JSONProcessor()
        snapshot = await processor.load_snapshot(snapshot_path)
        request = await processor.load_cart_request(cart_path)
        
        updates = {}
        if coupon:
            updates['coupon_code'] = coupon
        if pickup or neighborhood:
            updates['delivery'] = DeliveryContext(
                delivery_type='pickup' if pickup else request.delivery.delivery_type,
                neighborhood=neighborhood or request.delivery.neighborhood
            )
        if updates:
            request = request.model_copy(update=updates)
        
        result = CheckoutService.quote(snapshot, request, now=now)
    except (OSError, PedyError, ValidationError) as e:
        click.echo(f"❌ Error quoting cart: {str(e)}")
        sys.exit(1)
    
    capability = result.capability
    
    click.echo(f"🧾 {snapshot.establishment.name}")
    for i, line in enumerate(result.lines, 1):
        unit = PricingService.resolve_unit_price(line, capability)
        total = PricingService.resolve_line_total(line, capability)
        click.echo(f"{i}. {line.quantity}x {line.product.name} ({format_currency(unit)}) = {format_currency(total)}")
        for addition in line.selected_additions:
            click.echo(f"   + {addition.name} ({format_currency(addition.price)})")
        for group in line.selected_option_groups:
            names = ', '.join(option.name for option in group.selected_options)
            group_price = PricingService.resolve_group_price(group, capability)
            click.echo(f"   {group.group_name}: {names} ({format_currency(group_price)})")
        if line.observations:
            click.echo(f"   📝 {line.observations}")
    
    totals = result.totals
    validations = totals.validations
    click.echo()
    click.echo(f"   Subtotal: {format_currency(totals.subtotal)}")
    click.echo(f"   Delivery: {format_currency(totals.delivery_fee)} ({validations.delivery_reason.value})")
    if validations.coupon:
        if validations.coupon.applied:
            click.echo(f"   Coupon {validations.coupon.code}: -{format_currency(totals.discount)}")
        else:
            click.echo(f"   ⚠️  Coupon {validations.coupon.code}: {validations.coupon.message}")
    click.echo(f"💰 Total: {format_currency(totals.grand_total)}")
    
    if not validations.is_order_valid:
        click.echo(
            f"⚠️  Minimum order is {format_currency(validations.min_order_value)}; "
            f"add {format_currency(validations.missing_for_minimum)}"
        )
    click.echo(f"🕒 {result.business_status.message}")
    if result.scheduled_message:
        click.echo(f"   {result.scheduled_message}")
    click.echo("✅ Ready to submit" if result.can_submit else "⛔ Cannot submit yet")
    
    if output:
        path = await JSONProcessor().save_quote_json(result, output)
        click.echo(f"💾 Saved quote to {path}")


@main.command()
@click.argument('snapshot_path')
@click.option('--at', 'at', type=str, help='Check as of this ISO timestamp')
def status(snapshot_path: str, at: Optional[str]):
    """Show opening status and plan entitlements."""
    now = _parse_moment(at)
    asyncio.run(_status(snapshot_path, now))


async def _status(snapshot_path: str, now: Optional[datetime]):
    """Show opening status and plan entitlements."""
    try:
        snapshot = await JSONProcessor().load_snapshot(snapshot_path)
    except (OSError, PedyError, ValidationError) as e:
        click.echo(f"❌ Error loading snapshot: {str(e)}")
        sys.exit(1)
    
    establishment = snapshot.establishment
    business = HoursService.check_business_status(snapshot.business_hours, now)
    active, reason = EntitlementService.is_establishment_active(establishment, now)
    pro = EntitlementService.check_pro_feature_access(establishment, now)
    pro_plus = EntitlementService.check_feature_access(establishment, now)
    
    click.echo(f"🏪 {establishment.name}")
    click.echo(f"   🕒 {business.message}")
    if business.today_hours:
        click.echo(f"   Today: {business.today_hours}")
    click.echo(f"   Plan: {establishment.plan_status} ({establishment.plan_type or 'basic'})")
    if not active:
        click.echo(f"   ⛔ Inactive: {reason}")
    click.echo(f"   Pro features: {'yes' if pro.has_access else 'no'} ({pro.reason})")
    click.echo(f"   Pro+ features: {'yes' if pro_plus.has_access else 'no'} ({pro_plus.reason})")
    click.echo(f"   Products: {len(snapshot.products)}, zones: {len(snapshot.delivery_zones)}, coupons: {len(snapshot.coupons)}")


@main.command('validate-snapshot')
@click.argument('snapshot_path')
def validate_snapshot(snapshot_path: str):
    """Validate a menu snapshot JSON file."""
    asyncio.run(_validate_snapshot(snapshot_path))


async def _validate_snapshot(snapshot_path: str):
    """Validate a menu snapshot JSON file."""
    try:
        snapshot = await JSONProcessor().load_snapshot(snapshot_path)
    except (OSError, PedyError, ValidationError) as e:
        click.echo(f"❌ Invalid snapshot: {str(e)}")
        sys.exit(1)
    
    click.echo(f"✅ {snapshot.establishment.name}: {len(snapshot.products)} products")


@main.command('validate-directory')
@click.argument('directory', type=str, required=False, default=None)
@click.option('--verbose', '-v', is_flag=True, help='Show detailed output for each file')
def validate_directory(directory: Optional[str], verbose: bool):
    """Validate every menu snapshot in a directory."""
    asyncio.run(_validate_directory(directory or pricing_config.snapshot_dir, verbose))


async def _validate_directory(directory: str, verbose: bool):
    """Validate every menu snapshot in a directory."""
    processor = JSONProcessor()
    try:
        json_files = await processor.get_all_json_files(directory)
    except FileNotFoundError as e:
        click.echo(f"❌ {str(e)}")
        sys.exit(1)
    
    invalid = 0
    for path in json_files:
        if await processor.validate_snapshot_json(path):
            if verbose:
                click.echo(f"✅ {path}")
        else:
            invalid += 1
            click.echo(f"❌ {path}")
    
    click.echo(f"📊 {len(json_files) - invalid}/{len(json_files)} snapshot(s) valid")
    if invalid:
        sys.exit(1)
