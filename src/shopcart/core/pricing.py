"""
Pricing resolver - display/charge prices under variants and offers, plus stock rules.
All functions are pure; nothing here touches the cart.
"""

from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

from ..models.catalog import PriceQuote
from ..models.product import Offer, Product, ProductVariant


def resolve_price(base_price: float, base_old_price: Optional[float] = None, offer: Optional[Offer] = None) -> PriceQuote:
    """
    Apply an offer to a base price.

    A disabled or missing offer leaves both prices untouched. An enabled offer
    makes the base price the old price and discounts it by percentage, or by
    a fixed amount when no percentage is set.
    """
    if offer is None or not offer.enabled:
        return PriceQuote(price=base_price, old_price=base_old_price)

    if offer.discount_percentage:
        price = base_price - (base_price * offer.discount_percentage / 100)
    elif offer.discount_amount:
        price = base_price - offer.discount_amount
    else:
        price = base_price

    return PriceQuote(price=max(price, 0.0), old_price=base_price)


def _parse_iso(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def offer_time_left(end_date: str, now: Optional[datetime] = None) -> Dict[str, int]:
    """
    Countdown until an offer ends: days, hours, minutes, seconds and has_ended.
    Unparseable end dates count as open-ended, as in offer_is_active.
    """
    try:
        seconds = int((_parse_iso(end_date) - _now(now)).total_seconds())
    except ValueError:
        return {"days": 0, "hours": 0, "minutes": 0, "seconds": 0, "has_ended": False}

    if seconds <= 0:
        return {"days": 0, "hours": 0, "minutes": 0, "seconds": 0, "has_ended": True}

    return {
        "days": seconds // 86400,
        "hours": (seconds // 3600) % 24,
        "minutes": (seconds // 60) % 60,
        "seconds": seconds % 60,
        "has_ended": False,
    }


def offer_is_active(offer: Optional[Offer], now: Optional[datetime] = None) -> bool:
    """Enabled and not yet past its end date. Unparseable end dates count as open-ended."""
    if offer is None or not offer.enabled:
        return False
    if not offer.end_date:
        return True
    try:
        return _parse_iso(offer.end_date) > _now(now)
    except ValueError:
        return True


def quote_product(product: Product, variant: Optional[ProductVariant] = None, now: Optional[datetime] = None) -> PriceQuote:
    """Price shown on a product view, for the product itself or its selected variant."""
    if variant is not None:
        base_price, base_old_price = variant.price, variant.old_price
    else:
        base_price, base_old_price = product.price, product.old_price

    # offers live on the product and apply to every variant
    offer = product.offer if offer_is_active(product.offer, now) else None
    return resolve_price(base_price, base_old_price, offer)


def price_for_cart(
    product: Product,
    variant: Optional[ProductVariant] = None,
    now: Optional[datetime] = None
) -> Tuple[Product, Optional[ProductVariant]]:
    """Copies of product and variant carrying the quoted price, ready to be captured by the cart."""
    quote = quote_product(product, variant, now)
    if variant is not None:
        priced_variant = variant.model_copy(update={"price": quote.price, "old_price": quote.old_price})
        return product, priced_variant

    priced_product = product.model_copy(update={"price": quote.price, "old_price": quote.old_price})
    return priced_product, None


def effective_stock(product: Product) -> int:
    """Sum of variant stocks when the product has variants, else its own stock."""
    if product.has_variants:
        return sum(v.stock for v in product.variant_list)
    return product.stock


def is_out_of_stock(product: Product) -> bool:
    return effective_stock(product) <= 0


def max_addable_quantity(product: Product, variant: Optional[ProductVariant] = None) -> int:
    """Upper bound for a single add: the selected variant's stock, else the product's own stock."""
    if variant is not None:
        return variant.stock
    return product.stock
