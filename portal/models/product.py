"""
NirmaanTech Portal - Product catalogue model

Exactly one rate triple is authoritative per price_type:
  fixed       -> mrp / selling_price / franchise_price (currency)
  unit        -> unit_rate_mrp / unit_rate_selling / unit_rate_franchise (currency per unit_label)
  percentage  -> mrp / selling_price / franchise_price hold raw percents (6 means 6%)
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from portal.config import SYSTEM_VENDOR_ID


class PriceType(str, Enum):
    FIXED = "fixed"
    UNIT = "unit"
    PERCENTAGE = "percentage"


class Review(BaseModel):
    rating: int = Field(ge=1, le=5)
    comment: str = ""
    reviewer: str = ""
    photo_url: str = ""
    date: str = ""


class Product(BaseModel):
    id: int
    sku: str
    price_type: PriceType = PriceType.FIXED
    unit_label: Optional[str] = None
    category: str
    city: str
    name: str

    # Flat triple (fixed = currency, percentage = raw percent)
    mrp: float = 0
    selling_price: float = 0
    franchise_price: float = 0

    # Unit triple
    unit_rate_mrp: Optional[float] = None
    unit_rate_selling: Optional[float] = None
    unit_rate_franchise: Optional[float] = None

    # Split-rate policy (percentage only, opt-in)
    selling_price_threshold: Optional[float] = None
    franchise_percent_above: Optional[float] = None
    franchise_percent_below: Optional[float] = None

    short_description: str = ""
    image: str = ""
    gallery_images: List[str] = []
    video_link: str = ""
    reviews: List[Review] = []
    is_visible: bool = True
    vendor_id: str = SYSTEM_VENDOR_ID

    @property
    def average_rating(self) -> float:
        if not self.reviews:
            return 0
        return sum(r.rating for r in self.reviews) / len(self.reviews)


class ProductInput(BaseModel):
    """
    Product form as submitted by admin or vendor.
    mrp / price / franchise_price are mapped onto the triple
    that matches price_type.
    """
    name: str
    sku: str = ""
    price_type: PriceType = PriceType.FIXED
    unit_label: Optional[str] = None
    category: str
    city: str
    mrp: float = 0
    price: float = 0
    franchise_price: float = 0
    short_description: str = ""
    image: str = ""

    @field_validator("mrp", "price", "franchise_price")
    @classmethod
    def non_negative(cls, v):
        if v < 0:
            raise ValueError("Prices must be >= 0")
        return v

    @field_validator("name", "category", "city")
    @classmethod
    def not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Field is required")
        return v.strip()
