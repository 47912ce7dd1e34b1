"""
NirmaanTech Portal - Routes Users (admin)
Member accounts and the activity journal.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from portal.models import Role, Session, UserSave
from portal.routes.auth import get_store, require_admin
from portal.services import users as user_service
from portal.services.activity_logger import get_activity_logs
from portal.store import Store

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("")
async def list_users(
    role: Optional[Role] = None,
    session: Session = Depends(require_admin),
    store: Store = Depends(get_store)
):
    users = user_service.list_users(store, role)
    return {"users": [u.public() for u in users], "count": len(users)}


@router.post("")
async def save_user(
    data: UserSave,
    session: Session = Depends(require_admin),
    store: Store = Depends(get_store)
):
    user = user_service.save_user(store, data, actor_id=session.user_id)
    return {"success": True, "user": user.public()}


@router.delete("/{role}/{user_id}")
async def delete_user(
    role: Role,
    user_id: str,
    session: Session = Depends(require_admin),
    store: Store = Depends(get_store)
):
    user_service.delete_user(store, role, user_id, actor_id=session.user_id)
    return {"success": True}


@router.get("/activity-logs")
async def activity_logs(
    actor_id: str = None,
    entity_type: str = None,
    action: str = None,
    limit: int = 100,
    skip: int = 0,
    session: Session = Depends(require_admin),
    store: Store = Depends(get_store)
):
    return get_activity_logs(store, actor_id, entity_type, action, limit, skip)
