"""
NirmaanTech Portal - Routes Notifications
"""

from fastapi import APIRouter, Depends, Query

from portal.models import Session
from portal.routes.auth import get_current_session, get_store
from portal.store import Store

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("")
async def list_notifications(
    since: int = Query(0, ge=0),
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    """Notifications newer than seq `since`; `next` is the cursor for the following poll."""
    entries = [n for n in store.notifications if n["seq"] > since]
    return {"notifications": entries, "next": entries[-1]["seq"] if entries else since}
