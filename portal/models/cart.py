"""
NirmaanTech Portal - Cart line

quantity counts items for fixed/unit products.
base_value is the buyer-declared amount (loan principal, project value)
that a percentage product's rate applies to; quantity is unused there.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .product import PriceType, Product


class CartItem(BaseModel):
    product: Product
    quantity: int = Field(default=1, ge=0)
    base_value: float = Field(default=0, ge=0)

    @property
    def is_percentage(self) -> bool:
        return self.product.price_type == PriceType.PERCENTAGE

    @property
    def amount(self) -> float:
        """What the pricing engine multiplies the rate by"""
        return self.base_value if self.is_percentage else self.quantity


class CartAdd(BaseModel):
    product_id: int
    quantity: Optional[int] = Field(default=None, ge=1)
    base_value: Optional[float] = Field(default=None, gt=0)


class CartUpdate(BaseModel):
    quantity: Optional[int] = None
    base_value: Optional[float] = Field(default=None, gt=0)
