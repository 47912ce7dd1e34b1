"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  NirmaanTech Portal - Models Package                                         ║
║                                                                              ║
║  Exports every model for easy import                                         ║
║  from portal.models import Product, Lead, Order, User, etc.                  ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from .user import (
    Role,
    Plan,
    MEMBER_ROLES,
    PLAN_ROLES,
    ID_PREFIXES,
    User,
    UserLogin,
    UserRegister,
    UserSave,
    Session,
)

from .product import (
    PriceType,
    Review,
    Product,
    ProductInput,
)

from .lead import (
    LeadStatus,
    ContactHistoryEntry,
    Lead,
    LeadCreate,
    LeadSave,
    CallLog,
)

from .order import (
    PaymentMode,
    PAYMENT_TYPES,
    ClientDetails,
    AttributionDetails,
    Attributions,
    OrderItem,
    Order,
    CheckoutRequest,
    OrderStatusUpdate,
)

from .cart import (
    CartItem,
    CartAdd,
    CartUpdate,
)

from .script import (
    GENERAL_SCRIPT_CATEGORY,
    SubScript,
    CentralScript,
    ScriptSave,
)

__all__ = [
    # Users
    "Role",
    "Plan",
    "MEMBER_ROLES",
    "PLAN_ROLES",
    "ID_PREFIXES",
    "User",
    "UserLogin",
    "UserRegister",
    "UserSave",
    "Session",
    # Products
    "PriceType",
    "Review",
    "Product",
    "ProductInput",
    # Leads
    "LeadStatus",
    "ContactHistoryEntry",
    "Lead",
    "LeadCreate",
    "LeadSave",
    "CallLog",
    # Orders
    "PaymentMode",
    "PAYMENT_TYPES",
    "ClientDetails",
    "AttributionDetails",
    "Attributions",
    "OrderItem",
    "Order",
    "CheckoutRequest",
    "OrderStatusUpdate",
    # Cart
    "CartItem",
    "CartAdd",
    "CartUpdate",
    # Scripts
    "GENERAL_SCRIPT_CATEGORY",
    "SubScript",
    "CentralScript",
    "ScriptSave",
]
