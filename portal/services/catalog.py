"""
NirmaanTech Portal - Catalogue listing

Filtering and sorting run on the tier's authoritative display rate,
so a franchise viewer filters and sorts on franchise prices.
"""

from typing import List, Optional

from pydantic import BaseModel

from portal.config import WILDCARD_CITY
from portal.models import Product, Role
from portal.services.pricing import display_price

SORT_PRICE_LOW_HIGH = "price-low-high"
SORT_PRICE_HIGH_LOW = "price-high-low"


class CatalogFilters(BaseModel):
    search: Optional[str] = None
    category: Optional[str] = None
    city: Optional[str] = None
    max_price: Optional[float] = None
    sort: Optional[str] = None


def city_matches(product: Product, city: Optional[str]) -> bool:
    if not city or city == WILDCARD_CITY:
        return True
    return product.city in (city, WILDCARD_CITY)


def search_matches(product: Product, search: Optional[str]) -> bool:
    if not search:
        return True
    needle = search.strip().lower()
    return needle in product.name.lower() or needle in product.sku.lower()


def filter_catalog(products, filters: CatalogFilters, role: Role, franchise_tier: bool) -> List[Product]:
    """
    Products a viewer sees with the given filters applied.
    Hidden products are listed for admin only.
    """
    def price(p: Product) -> float:
        return display_price(p, franchise_tier)["display_price"]

    result = [
        p for p in products
        if (p.is_visible or role == Role.ADMIN)
        and search_matches(p, filters.search)
        and (not filters.category or p.category == filters.category)
        and city_matches(p, filters.city)
        and (filters.max_price is None or price(p) <= filters.max_price)
    ]

    if filters.sort == SORT_PRICE_LOW_HIGH:
        result.sort(key=price)
    elif filters.sort == SORT_PRICE_HIGH_LOW:
        result.sort(key=price, reverse=True)
    return result


def categories(products) -> List[str]:
    """Distinct categories in first-seen order"""
    seen = []
    for p in products:
        if p.category not in seen:
            seen.append(p.category)
    return seen


def product_card(product: Product, franchise_tier: bool) -> dict:
    card = product.model_dump(mode="json")
    card["pricing"] = display_price(product, franchise_tier)
    card["average_rating"] = product.average_rating
    return card
