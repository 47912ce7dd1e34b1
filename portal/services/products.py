"""
NirmaanTech Portal - Product management (admin + vendor)

Admin products belong to the "System" vendor.
Vendors only ever touch their own products, and a basic-plan vendor
stops at VENDOR_BASIC_PRODUCT_LIMIT products.
"""

import logging
from typing import List, Optional

from portal.config import SYSTEM_VENDOR_ID
from portal.errors import UploadLimitError, ValidationError
from portal.models import PriceType, Product, ProductInput, Role, Session
from portal.services.activity_logger import log_activity
from portal.services.trial import ensure_can_upload

logger = logging.getLogger("products")


def vendor_products(products, vendor_id: str) -> List[Product]:
    return [p for p in products if p.vendor_id == vendor_id]


def build_product(data: ProductInput, product_id: int, vendor_id: str, existing: Optional[Product] = None) -> Product:
    """
    Map the submitted form onto the rate triple its price_type reads.
    Unit products zero the flat triple; the others leave the unit triple empty.
    """
    if data.price_type == PriceType.UNIT:
        rates = {
            "mrp": 0, "selling_price": 0, "franchise_price": 0,
            "unit_rate_mrp": data.mrp,
            "unit_rate_selling": data.price,
            "unit_rate_franchise": data.franchise_price,
        }
    else:
        rates = {
            "mrp": data.mrp, "selling_price": data.price, "franchise_price": data.franchise_price,
            "unit_rate_mrp": None, "unit_rate_selling": None, "unit_rate_franchise": None,
        }

    fields = {
        "id": product_id,
        "sku": (data.sku or "").strip() or f"SKU-{product_id}",
        "price_type": data.price_type,
        "unit_label": (data.unit_label or "unit") if data.price_type == PriceType.UNIT else None,
        "category": data.category,
        "city": data.city,
        "name": data.name,
        "short_description": data.short_description,
        "image": data.image,
        "vendor_id": vendor_id,
        **rates,
    }
    if existing is not None:
        # reviews, gallery, visibility and split-rate fields survive an edit
        return existing.model_copy(update=fields)
    return Product(**fields)


def _check_sku_free(store, sku: str, product_id: int) -> None:
    clash = store.products.find(lambda p: p.sku == sku and p.id != product_id)
    if clash:
        raise ValidationError(f"SKU {sku} is already used by {clash[0].name}", code="duplicate_sku")


def _require_owned(store, session: Session, product_id: int) -> Product:
    product = store.products.require(product_id)
    if session.role == Role.VENDOR and product.vendor_id != session.user_id:
        logger.warning(f"[VENDOR] {session.user_id} tried to modify product {product_id} it does not own")
        raise ValidationError("You can only manage your own products", code="not_owner")
    return product


def save_product(store, session: Session, data: ProductInput, product_id: Optional[int] = None) -> Product:
    """
    Create (product_id None) or edit a product.

    Raises:
        ValidationError: actor is not admin/vendor, not the owner, or SKU taken
        UploadLimitError: basic vendor at the product cap
        NotFoundError: editing a product that no longer exists
    """
    if session.role not in (Role.ADMIN, Role.VENDOR):
        raise ValidationError(f"Role {session.role.value} cannot manage products", code="forbidden_role")

    if product_id is not None:
        existing = _require_owned(store, session, product_id)
        product = build_product(data, product_id, existing.vendor_id, existing)
        _check_sku_free(store, product.sku, product.id)
        store.products.replace(product)
        action = "update"
    else:
        if session.role == Role.VENDOR:
            vendor = store.user_repo(Role.VENDOR).require(session.user_id)
            try:
                ensure_can_upload(vendor, len(vendor_products(store.products, vendor.id)))
            except UploadLimitError as e:
                logger.warning(f"[CATALOG] Upload by {vendor.id} rejected: {e.message}")
                store.notify(e.message, "warning")
                raise
            vendor_id = vendor.id
        else:
            vendor_id = SYSTEM_VENDOR_ID
        product = build_product(data, store.next_id(), vendor_id)
        _check_sku_free(store, product.sku, product.id)
        store.products.add(product)
        action = "create"

    log_activity(store, session.user_id, action, "product", product.id, {"sku": product.sku})
    store.notify("Product Saved", "success")
    logger.info(f"[CATALOG] Product {product.id} ({product.sku}) {action}d by {session.role.value}:{session.user_id}")
    return product


def delete_product(store, session: Session, product_id: int) -> Product:
    if session.role not in (Role.ADMIN, Role.VENDOR):
        raise ValidationError(f"Role {session.role.value} cannot manage products", code="forbidden_role")
    _require_owned(store, session, product_id)
    product = store.products.remove(product_id)

    log_activity(store, session.user_id, "delete", "product", product_id, {"sku": product.sku})
    store.notify("Product Deleted", "info")
    logger.info(f"[CATALOG] Product {product_id} deleted by {session.role.value}:{session.user_id}")
    return product


def set_visibility(store, product_id: int, is_visible: bool, actor_id: Optional[str] = None) -> Product:
    """Admin switch hiding a product from every non-admin catalogue"""
    product = store.products.require(product_id)
    updated = store.products.replace(product.model_copy(update={"is_visible": is_visible}))

    log_activity(store, actor_id, "update", "product", product_id, {"is_visible": is_visible})
    logger.info(f"[CATALOG] Product {product_id} visibility -> {is_visible}")
    return updated
