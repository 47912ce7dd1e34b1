"""
NirmaanTech Portal - Routes Scripts
"""

from fastapi import APIRouter, Depends

from portal.models import Role, ScriptSave, Session
from portal.routes.auth import get_store, require_admin, require_roles
from portal.services import scripts as script_service
from portal.store import Store

router = APIRouter(prefix="/scripts", tags=["Scripts"])


@router.get("")
async def list_scripts(
    session: Session = Depends(require_roles(Role.ADMIN, Role.TELECALLER, Role.FRANCHISE, Role.PARTNER)),
    store: Store = Depends(get_store)
):
    return {"scripts": [s.model_dump(mode="json") for s in store.scripts]}


@router.post("")
async def create_script(
    data: ScriptSave,
    session: Session = Depends(require_admin),
    store: Store = Depends(get_store)
):
    script = script_service.save_script(store, data, actor_id=session.user_id)
    return {"success": True, "script": script.model_dump(mode="json")}


@router.put("/{script_id}")
async def update_script(
    script_id: int,
    data: ScriptSave,
    session: Session = Depends(require_admin),
    store: Store = Depends(get_store)
):
    script = script_service.save_script(store, data, script_id, actor_id=session.user_id)
    return {"success": True, "script": script.model_dump(mode="json")}


@router.delete("/{script_id}")
async def delete_script(
    script_id: int,
    session: Session = Depends(require_admin),
    store: Store = Depends(get_store)
):
    script_service.delete_script(store, script_id, actor_id=session.user_id)
    return {"success": True}
