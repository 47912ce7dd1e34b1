"""
NirmaanTech Portal - Routes Trial
Dashboard countdown for franchise and vendor accounts.
"""

from fastapi import APIRouter, Depends

from portal import config
from portal.models import Role, Session
from portal.routes.auth import get_current_session, get_store
from portal.services.auth import session_user
from portal.services.products import vendor_products
from portal.services.trial import can_upload_product, trial_applies, trial_state
from portal.store import Store

router = APIRouter(prefix="/trial", tags=["Trial"])


@router.get("")
async def my_trial(
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    user = session_user(store, session)
    if user is None or not trial_applies(user):
        return {"applies": False}

    result = {"applies": True, "plan": user.plan.value if user.plan else None, **trial_state(user)}
    if user.role == Role.VENDOR:
        count = len(vendor_products(store.products, user.id))
        result["product_count"] = count
        result["product_limit"] = config.VENDOR_BASIC_PRODUCT_LIMIT
        result["can_upload"] = can_upload_product(user, count)
    return result
