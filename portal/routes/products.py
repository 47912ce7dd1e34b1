"""
NirmaanTech Portal - Routes Products
Catalogue listing with tier pricing, product detail, admin/vendor CRUD.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from portal import config
from portal.errors import NotFoundError
from portal.models import ProductInput, Role, Session
from portal.routes.auth import get_current_session, get_store, require_admin, require_roles
from portal.services import products as product_service
from portal.services.catalog import CatalogFilters, categories, filter_catalog, product_card
from portal.services.trial import can_upload_product
from portal.store import Store

router = APIRouter(prefix="/products", tags=["Products"])

require_manager = require_roles(Role.ADMIN, Role.VENDOR)


class VisibilityUpdate(BaseModel):
    is_visible: bool


@router.get("")
async def list_products(
    search: Optional[str] = None,
    category: Optional[str] = None,
    city: Optional[str] = None,
    max_price: Optional[float] = None,
    sort: Optional[str] = None,
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    """Catalogue for the caller's tier; hidden products only for admin."""
    filters = CatalogFilters(search=search, category=category, city=city, max_price=max_price, sort=sort)
    tier = session.is_franchise_tier
    products = filter_catalog(store.products, filters, session.role, tier)
    return {
        "products": [product_card(p, tier) for p in products],
        "count": len(products),
        "categories": categories(store.products),
        "cities": config.CITIES,
        "tier": "franchise" if tier else "retail",
    }


@router.get("/mine")
async def my_products(
    session: Session = Depends(require_roles(Role.VENDOR)),
    store: Store = Depends(get_store)
):
    vendor = store.user_repo(Role.VENDOR).require(session.user_id)
    products = product_service.vendor_products(store.products, vendor.id)
    return {
        "products": [product_card(p, False) for p in products],
        "count": len(products),
        "plan": vendor.plan.value if vendor.plan else None,
        "limit": config.VENDOR_BASIC_PRODUCT_LIMIT,
        "can_upload": can_upload_product(vendor, len(products)),
    }


@router.get("/{product_id}")
async def get_product(
    product_id: int,
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    product = store.products.require(product_id)
    if not product.is_visible and session.role != Role.ADMIN:
        raise NotFoundError(f"Product {product_id} not found")
    return product_card(product, session.is_franchise_tier)


@router.post("")
async def create_product(
    data: ProductInput,
    session: Session = Depends(require_manager),
    store: Store = Depends(get_store)
):
    product = product_service.save_product(store, session, data)
    return {"success": True, "product": product.model_dump(mode="json")}


@router.put("/{product_id}")
async def update_product(
    product_id: int,
    data: ProductInput,
    session: Session = Depends(require_manager),
    store: Store = Depends(get_store)
):
    product = product_service.save_product(store, session, data, product_id)
    return {"success": True, "product": product.model_dump(mode="json")}


@router.delete("/{product_id}")
async def delete_product(
    product_id: int,
    session: Session = Depends(require_manager),
    store: Store = Depends(get_store)
):
    product_service.delete_product(store, session, product_id)
    return {"success": True}


@router.patch("/{product_id}/visibility")
async def update_visibility(
    product_id: int,
    data: VisibilityUpdate,
    session: Session = Depends(require_admin),
    store: Store = Depends(get_store)
):
    product = product_service.set_visibility(store, product_id, data.is_visible, session.user_id)
    return {"success": True, "is_visible": product.is_visible}
