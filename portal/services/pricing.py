"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  NirmaanTech Portal - Pricing Engine                                         ║
║                                                                              ║
║  unit_rate(product, tier)            -> currency, or percent / 100           ║
║  line_total(product, tier, amount)   -> currency                             ║
║                                                                              ║
║  fixed       rate = franchise_price | selling_price       x quantity         ║
║  unit        rate = unit_rate_franchise | unit_rate_selling x units          ║
║  percentage  rate = (franchise_price | selling_price) / 100 x base value     ║
║                                                                              ║
║  Never raises: a missing rate field counts as 0.                             ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

import math
from typing import Optional, Tuple

from portal import config
from portal.models import PriceType, Product, Role


# Role -> sees franchise prices without the price-view toggle
ROLE_FRANCHISE_TIER = {
    Role.ADMIN: False,
    Role.TELECALLER: False,
    Role.FRANCHISE: True,
    Role.PARTNER: False,
    Role.VENDOR: False,
    Role.GUEST: False,
}


def is_franchise_tier(role: Role, franchise_view: bool = False) -> bool:
    """Franchise users always get franchise rates; anyone else needs the unlocked toggle."""
    return ROLE_FRANCHISE_TIER[role] or bool(franchise_view)


def _num(value) -> float:
    return float(value) if value else 0.0


def rate_triple(product: Product) -> Tuple[float, float, float]:
    """(mrp, selling, franchise) from the triple that is authoritative for price_type"""
    if product.price_type == PriceType.UNIT:
        return (
            _num(product.unit_rate_mrp),
            _num(product.unit_rate_selling),
            _num(product.unit_rate_franchise),
        )
    return _num(product.mrp), _num(product.selling_price), _num(product.franchise_price)


def split_percent(product: Product, base_value: Optional[float]) -> Optional[float]:
    """
    Threshold split-rate policy for percentage products (opt-in).

    base_value above the threshold -> franchise_percent_above, else _below,
    for both tiers. Returns None when the policy is off or the product
    does not define all three fields.
    """
    if not config.SPLIT_RATE_ENABLED or base_value is None:
        return None
    if product.price_type != PriceType.PERCENTAGE:
        return None
    if (product.selling_price_threshold is None
            or product.franchise_percent_above is None
            or product.franchise_percent_below is None):
        return None
    if base_value > product.selling_price_threshold:
        return _num(product.franchise_percent_above)
    return _num(product.franchise_percent_below)


def rate_percent(product: Product, franchise_tier: bool, base_value: Optional[float] = None) -> float:
    """Raw percent (6 means 6%) of a percentage product"""
    split = split_percent(product, base_value)
    if split is not None:
        return split
    _, selling, franchise = rate_triple(product)
    return franchise if franchise_tier else selling


def unit_rate(product: Product, franchise_tier: bool, base_value: Optional[float] = None) -> float:
    """Price of one unit for the tier; for percentage products the fraction applied to the base value"""
    if product.price_type == PriceType.PERCENTAGE:
        return rate_percent(product, franchise_tier, base_value) / 100
    _, selling, franchise = rate_triple(product)
    return franchise if franchise_tier else selling


def line_total(product: Product, franchise_tier: bool, amount: float) -> float:
    """
    Total for one cart line.
    amount is a count for fixed/unit products and the buyer's base value
    for percentage products.
    """
    amount = _num(amount)
    if product.price_type == PriceType.PERCENTAGE:
        # percent * base / 100 keeps whole-number results exact
        return rate_percent(product, franchise_tier, amount) * amount / 100
    return unit_rate(product, franchise_tier) * amount


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def discount_percent(product: Product, franchise_tier: bool) -> int:
    """Badge percentage off MRP; always 0 for percentage products, a missing MRP or a missing rate"""
    if product.price_type == PriceType.PERCENTAGE:
        return 0
    mrp, _, _ = rate_triple(product)
    if not mrp:
        return 0
    rate = unit_rate(product, franchise_tier)
    if not rate:
        return 0
    return max(0, _round_half_up((mrp - rate) / mrp * 100))


def display_price(product: Product, franchise_tier: bool) -> dict:
    """What a product card shows for the viewer's tier"""
    mrp, selling, franchise = rate_triple(product)
    is_percentage = product.price_type == PriceType.PERCENTAGE

    if product.price_type == PriceType.UNIT:
        label = f"/{product.unit_label or 'unit'}"
    elif is_percentage:
        label = "% of Value"
    else:
        label = ""

    return {
        "display_price": franchise if franchise_tier else selling,
        "mrp": mrp,
        "label": label,
        "is_percentage": is_percentage,
        "discount_percent": discount_percent(product, franchise_tier),
        "tier": "franchise" if franchise_tier else "retail",
    }
