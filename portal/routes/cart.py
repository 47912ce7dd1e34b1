"""
NirmaanTech Portal - Routes Cart
Session cart priced at the session's tier.
"""

from fastapi import APIRouter, Depends

from portal.errors import NotFoundError
from portal.models import CartAdd, CartUpdate, Role, Session
from portal.routes.auth import get_current_session, get_store
from portal.services.cart import get_cart
from portal.services.pricing import line_total, unit_rate
from portal.store import Store

router = APIRouter(prefix="/cart", tags=["Cart"])


def cart_payload(cart, session: Session) -> dict:
    tier = session.is_franchise_tier
    lines = []
    for item in cart.lines():
        lines.append({
            "product_id": item.product.id,
            "name": item.product.name,
            "sku": item.product.sku,
            "price_type": item.product.price_type.value,
            "quantity": item.quantity,
            "base_value": item.base_value if item.is_percentage else None,
            "unit_rate": unit_rate(item.product, tier, item.amount),
            "line_total": line_total(item.product, tier, item.amount),
        })
    return {
        "items": lines,
        "count": cart.count(),
        "subtotal": cart.subtotal(tier),
        "tier": "franchise" if tier else "retail",
    }


@router.get("")
async def view_cart(
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    return cart_payload(get_cart(store, session), session)


@router.post("")
async def add_to_cart(
    data: CartAdd,
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    product = store.products.require(data.product_id)
    if not product.is_visible and session.role != Role.ADMIN:
        raise NotFoundError(f"Product {data.product_id} not found")

    cart = get_cart(store, session)
    cart.add(product, quantity=data.quantity, base_value=data.base_value)
    store.notify(f"{product.name} added to cart", "success")
    return cart_payload(cart, session)


@router.put("/{product_id}")
async def update_cart_line(
    product_id: int,
    data: CartUpdate,
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    cart = get_cart(store, session)
    cart.update(product_id, quantity=data.quantity, base_value=data.base_value)
    return cart_payload(cart, session)


@router.delete("/{product_id}")
async def remove_cart_line(
    product_id: int,
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    cart = get_cart(store, session)
    cart.remove(product_id)
    return cart_payload(cart, session)
