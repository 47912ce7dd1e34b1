"""
NirmaanTech Portal - Session cart

Ephemeral, one per session token. Lines hold a product snapshot taken
when the product is added; the cart is cleared on successful checkout.
"""

from typing import Dict, List, Optional

from portal.errors import NotFoundError, ValidationError
from portal.models import CartItem, PriceType, Product, Session
from portal.services.pricing import line_total


class Cart:

    def __init__(self):
        self.items: Dict[int, CartItem] = {}

    def add(self, product: Product, quantity: Optional[int] = None, base_value: Optional[float] = None) -> CartItem:
        """
        Add to the line for this product, accumulating like the catalogue
        "Add" button. Percentage products need a base value.
        """
        existing = self.items.get(product.id)
        snapshot = product.model_copy(deep=True)

        if snapshot.price_type == PriceType.PERCENTAGE:
            if not base_value or base_value <= 0:
                raise ValidationError(
                    f"A base value is required for {product.name}", code="base_value_required"
                )
            total_base = base_value + (existing.base_value if existing else 0)
            item = CartItem(product=snapshot, quantity=1, base_value=total_base)
        else:
            qty = quantity if quantity is not None else 1
            if qty < 1:
                raise ValidationError("Quantity must be at least 1", code="invalid_quantity")
            total_qty = qty + (existing.quantity if existing else 0)
            item = CartItem(product=snapshot, quantity=total_qty)

        self.items[product.id] = item
        return item

    def update(self, product_id: int, quantity: Optional[int] = None, base_value: Optional[float] = None) -> CartItem:
        item = self.items.get(product_id)
        if item is None:
            raise NotFoundError(f"Product {product_id} is not in the cart")

        if item.is_percentage:
            if base_value is None or base_value <= 0:
                raise ValidationError("Base value must be positive", code="base_value_required")
            updated = item.model_copy(update={"base_value": base_value})
        else:
            if quantity is None:
                raise ValidationError("Quantity is required", code="invalid_quantity")
            updated = item.model_copy(update={"quantity": max(1, quantity)})

        self.items[product_id] = updated
        return updated

    def remove(self, product_id: int) -> CartItem:
        if product_id not in self.items:
            raise NotFoundError(f"Product {product_id} is not in the cart")
        return self.items.pop(product_id)

    def lines(self) -> List[CartItem]:
        return list(self.items.values())

    def count(self) -> int:
        """Header badge count; a percentage line counts as one item"""
        return sum(1 if item.is_percentage else item.quantity for item in self.items.values())

    def subtotal(self, franchise_tier: bool) -> float:
        return sum(
            (line_total(item.product, franchise_tier, item.amount) for item in self.items.values()),
            0.0,
        )

    def clear(self) -> None:
        self.items = {}

    def is_empty(self) -> bool:
        return not self.items


def get_cart(store, session: Session) -> Cart:
    cart = store.carts.get(session.token)
    if cart is None:
        cart = Cart()
        store.carts[session.token] = cart
    return cart
