"""
NirmaanTech Portal - Routes Orders
Checkout / order history per viewer / admin status.
"""

from fastapi import APIRouter, Depends

from portal.models import CheckoutRequest, OrderStatusUpdate, Role, Session
from portal.routes.auth import get_current_session, get_store, require_admin
from portal.services import orders as order_service
from portal.store import Store

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("/checkout")
async def checkout(
    data: CheckoutRequest,
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    """Place the session cart; the cart is empty afterwards."""
    order = order_service.place_order(store, session, data)
    return {
        "success": True,
        "order": order.model_dump(mode="json"),
        "upi_payment_link": order_service.upi_payment_link(order.total_amount),
    }


@router.get("")
async def list_orders(
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    orders = order_service.orders_for_viewer(store.orders, store.products, session.role, session.user_id)
    my_skus = (
        order_service.vendor_skus(store.products, session.user_id)
        if session.role == Role.VENDOR else set()
    )

    result = []
    for order in orders:
        entry = order.model_dump(mode="json")
        if session.role == Role.PARTNER:
            entry["commission"] = order_service.partner_commission(order)
        if my_skus:
            for item in entry["items"]:
                item["is_mine"] = item["sku"] in my_skus
        result.append(entry)

    return {"orders": result, "count": len(result)}


@router.patch("/{order_id}/status")
async def update_status(
    order_id: int,
    data: OrderStatusUpdate,
    session: Session = Depends(require_admin),
    store: Store = Depends(get_store)
):
    order = order_service.update_order_status(
        store, order_id, data.status, data.admin_comments, actor_id=session.user_id
    )
    return {"success": True, "order": order.model_dump(mode="json")}
