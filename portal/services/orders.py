"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  NirmaanTech Portal - Cart & Order Assembler                                 ║
║                                                                              ║
║  subtotal   = sum(line_total(item))                                          ║
║  tax        = subtotal x GST_RATE when paying by GST invoice, else 0         ║
║  total      = subtotal + tax                                                 ║
║                                                                              ║
║  ONLY place_order() appends to the order list, and it clears the cart        ║
║  in the same step: both happen or neither does.                              ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

import logging
from typing import Dict, Iterable, List, Optional, Set

from portal import config
from portal.config import UNATTRIBUTED_ID, UPI_ID, UPI_PAYEE_NAME, today_iso, timestamp_ms
from portal.errors import NotFoundError, ValidationError
from portal.models import (
    PAYMENT_TYPES,
    AttributionDetails,
    Attributions,
    CartItem,
    CheckoutRequest,
    ClientDetails,
    Order,
    OrderItem,
    PaymentMode,
    Product,
    Role,
    Session,
)
from portal.services.activity_logger import log_activity
from portal.services.cart import get_cart
from portal.services.pricing import line_total

logger = logging.getLogger("orders")

ATTRIBUTION_ROLES = {
    "franchise": Role.FRANCHISE,
    "telecaller": Role.TELECALLER,
    "partner": Role.PARTNER,
}


# ════════════════════════════════════════════════════════════════════════════
# PURE COMPUTATIONS
# ════════════════════════════════════════════════════════════════════════════

def compute_subtotal(cart_items: Iterable[CartItem], franchise_tier: bool) -> float:
    return sum((line_total(item.product, franchise_tier, item.amount) for item in cart_items), 0.0)


def compute_tax(subtotal: float, payment_mode: PaymentMode) -> float:
    if PaymentMode(payment_mode) == PaymentMode.GST:
        return round(subtotal * config.GST_RATE, 2)
    return 0.0


def validate_client_details(client_details: ClientDetails) -> None:
    """Name and phone are mandatory at checkout"""
    missing = [
        field for field in ("name", "phone")
        if not (getattr(client_details, field) or "").strip()
    ]
    if missing:
        raise ValidationError(
            f"Client {' and '.join(missing)} required to place the order",
            code="client_details_required"
        )


def build_order_item(item: CartItem, franchise_tier: bool) -> OrderItem:
    """price stores the line total; a percentage line is one item worth its total"""
    return OrderItem(
        name=item.product.name,
        price=line_total(item.product, franchise_tier, item.amount),
        quantity=1 if item.is_percentage else item.quantity,
        sku=item.product.sku,
    )


def build_order(
    cart_items: List[CartItem],
    franchise_tier: bool,
    payment_mode: PaymentMode,
    client_details: ClientDetails,
    attributions: Optional[Dict[str, AttributionDetails]] = None,
    order_id: Optional[int] = None,
    order_date: Optional[str] = None,
) -> Order:
    """
    Assemble an immutable Order from cart lines.

    attributions maps "franchise" / "telecaller" / "partner" to resolved
    details; missing keys are recorded as unattributed.

    Raises:
        ValidationError: empty cart or missing client name / phone
    """
    cart_items = list(cart_items)
    if not cart_items:
        raise ValidationError("Cart is empty", code="empty_cart")
    validate_client_details(client_details)

    payment_mode = PaymentMode(payment_mode)
    attributions = attributions or {}
    items = [build_order_item(item, franchise_tier) for item in cart_items]
    subtotal = sum((i.price for i in items), 0.0)
    tax = compute_tax(subtotal, payment_mode)

    return Order(
        order_id=order_id or timestamp_ms(),
        date=order_date or today_iso(),
        status="Pending",
        items=items,
        subtotal=subtotal,
        tax=tax,
        total_amount=subtotal + tax,
        payment_type=PAYMENT_TYPES[payment_mode],
        client_details=client_details,
        franchise_details=attributions.get("franchise", AttributionDetails()),
        telecaller_details=attributions.get("telecaller", AttributionDetails()),
        partner_details=attributions.get("partner", AttributionDetails()),
        admin_comments="Order placed via Portal",
    )


def upi_payment_link(total_amount: float) -> str:
    """UPI deep link handed to the payer's app (no gateway behind it)"""
    return f"upi://pay?pa={UPI_ID}&pn={UPI_PAYEE_NAME}&am={total_amount:.2f}&cu=INR"


def partner_commission(order: Order) -> float:
    if not order.partner_details.is_attributed:
        return 0.0
    return round(order.subtotal * config.PARTNER_COMMISSION_RATE, 2)


# ════════════════════════════════════════════════════════════════════════════
# CHECKOUT
# ════════════════════════════════════════════════════════════════════════════

def fill_own_attribution(attributions: Attributions, session: Session) -> Attributions:
    """The acting agent is always credited in their own role's slot"""
    field = {
        Role.TELECALLER: "telecaller_id",
        Role.FRANCHISE: "franchise_id",
        Role.PARTNER: "partner_id",
    }.get(session.role)
    if field is None:
        return attributions
    return attributions.model_copy(update={field: session.user_id})


def resolve_attributions(store, attributions: Attributions) -> Dict[str, AttributionDetails]:
    """Look up each credited id; an unknown id is rejected before anything is written"""
    resolved = {}
    for slot, role in ATTRIBUTION_ROLES.items():
        user_id = getattr(attributions, f"{slot}_id")
        if not user_id or user_id == UNATTRIBUTED_ID:
            continue
        user = store.find_user(role, user_id)
        if user is None:
            raise NotFoundError(f"{role.value.capitalize()} {user_id} not found")
        resolved[slot] = AttributionDetails(
            id=user.id,
            name=user.name,
            phone=user.phone or "",
            email=user.email or "",
        )
    return resolved


def place_order(store, session: Session, checkout: CheckoutRequest) -> Order:
    """
    Checkout the session cart.
    Everything is validated and built first; the commit (append order,
    clear cart) cannot fail halfway.
    """
    cart = get_cart(store, session)
    attributions = fill_own_attribution(checkout.attributions, session)
    resolved = resolve_attributions(store, attributions)

    order = build_order(
        cart.lines(),
        session.is_franchise_tier,
        checkout.payment_mode,
        checkout.client_details,
        resolved,
        order_id=store.next_id(),
    )

    store.orders.add(order)
    cart.clear()

    log_activity(
        store,
        actor_id=session.user_id,
        action="checkout",
        entity_type="order",
        entity_id=order.order_id,
        details={"total_amount": order.total_amount, "payment_type": order.payment_type}
    )
    store.notify("Order Placed Successfully", "success")
    logger.info(
        f"[ORDER] {order.order_id} placed by {session.user_id} | "
        f"items={len(order.items)} subtotal={order.subtotal} total={order.total_amount}"
    )
    return order


# ════════════════════════════════════════════════════════════════════════════
# VISIBILITY
# ════════════════════════════════════════════════════════════════════════════

def vendor_skus(products: Iterable[Product], vendor_id: str) -> Set[str]:
    return {p.sku for p in products if p.vendor_id == vendor_id}


def orders_for_viewer(orders: Iterable[Order], products: Iterable[Product], role: Role, user_id: Optional[str]) -> List[Order]:
    """
    Orders a viewer may see, newest first.
    Agents see orders credited to them, vendors the orders holding one of their SKUs.
    """
    orders = list(orders)
    if role == Role.ADMIN:
        visible = orders
    elif not user_id:
        visible = []
    elif role == Role.FRANCHISE:
        visible = [o for o in orders if o.franchise_details.id == user_id]
    elif role == Role.PARTNER:
        visible = [o for o in orders if o.partner_details.id == user_id]
    elif role == Role.TELECALLER:
        visible = [o for o in orders if o.telecaller_details.id == user_id]
    elif role == Role.VENDOR:
        skus = vendor_skus(products, user_id)
        visible = [o for o in orders if any(item.sku in skus for item in o.items)]
    else:
        visible = []
    return sorted(visible, key=lambda o: (o.date, o.order_id), reverse=True)


def update_order_status(store, order_id: int, status: str, admin_comments: Optional[str] = None, actor_id: Optional[str] = None) -> Order:
    """
    Admin status change: the only post-checkout edit.
    Items and totals are never touched.
    """
    if status not in config.ORDER_STATUS_OPTIONS:
        raise ValidationError(
            f"Invalid order status: {status}. Allowed: {config.ORDER_STATUS_OPTIONS}",
            code="invalid_status"
        )
    order = store.orders.require(order_id)

    update = {"status": status}
    if admin_comments is not None:
        update["admin_comments"] = admin_comments
    updated = store.orders.replace(order.model_copy(update=update))

    log_activity(
        store,
        actor_id=actor_id,
        action="status",
        entity_type="order",
        entity_id=order_id,
        details={"from": order.status, "to": status}
    )
    store.notify(f"Order {order_id} marked {status}", "info")
    logger.info(f"[ORDER] {order_id} status {order.status} -> {status}")
    return updated
