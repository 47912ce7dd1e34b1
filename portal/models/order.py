"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  NirmaanTech Portal - Order model                                            ║
║                                                                              ║
║  - items[].price is the LINE TOTAL (rate x quantity or base value)           ║
║  - total_amount = subtotal + tax                                             ║
║  - created once at checkout, immutable afterwards (append-only list)         ║
║  - unattributed blocks carry id "None"                                       ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from portal.config import UNATTRIBUTED_ID


class PaymentMode(str, Enum):
    UPI = "upi"
    GST = "gst"


# Stored payment_type per checkout mode
PAYMENT_TYPES = {
    PaymentMode.UPI: "UPI_DIRECT",
    PaymentMode.GST: "GST_INVOICE",
}


class ClientDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""


class AttributionDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = UNATTRIBUTED_ID
    name: str = ""
    phone: str = ""
    email: str = ""

    @property
    def is_attributed(self) -> bool:
        return self.id != UNATTRIBUTED_ID


class Attributions(BaseModel):
    """Ids credited on an order (commission / performance)"""
    telecaller_id: Optional[str] = None
    franchise_id: Optional[str] = None
    partner_id: Optional[str] = None


class OrderItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    price: float  # line total
    quantity: int
    sku: str


class Order(BaseModel):
    model_config = ConfigDict(frozen=True)

    order_id: int
    date: str
    status: str = "Pending"
    items: List[OrderItem]
    subtotal: float
    tax: float = 0
    total_amount: float
    payment_type: str
    client_details: ClientDetails
    franchise_details: AttributionDetails = AttributionDetails()
    telecaller_details: AttributionDetails = AttributionDetails()
    partner_details: AttributionDetails = AttributionDetails()
    admin_comments: str = ""


class CheckoutRequest(BaseModel):
    payment_mode: PaymentMode = PaymentMode.UPI
    client_details: ClientDetails
    attributions: Attributions = Attributions()


class OrderStatusUpdate(BaseModel):
    status: str
    admin_comments: Optional[str] = None
