"""
NirmaanTech Portal - Routes Leads
Agent lead lists, call logging, metrics, scripts; admin lead CRUD.
"""

from fastapi import APIRouter, Depends

from portal import config
from portal.errors import NotFoundError
from portal.models import CallLog, Lead, LeadCreate, LeadSave, Role, Session
from portal.routes.auth import get_store, require_admin, require_roles
from portal.services import leads as lead_service
from portal.store import Store

router = APIRouter(prefix="/leads", tags=["Leads"])

require_lead_access = require_roles(Role.ADMIN, Role.TELECALLER, Role.FRANCHISE, Role.PARTNER)


def _visible_lead(store: Store, session: Session, lead_id: int) -> Lead:
    """Lead the caller may work on; other agents' leads read as missing."""
    lead = store.leads.require(lead_id)
    if not lead_service.leads_for_actor([lead], session.role, session.user_id):
        raise NotFoundError(f"Lead {lead_id} not found")
    return lead


@router.get("")
async def list_leads(
    session: Session = Depends(require_lead_access),
    store: Store = Depends(get_store)
):
    leads = lead_service.leads_for_actor(store.leads, session.role, session.user_id)
    return {
        "leads": [lead.model_dump(mode="json") for lead in leads],
        "count": len(leads),
        "status_options": config.LEADS_STATUS_OPTIONS,
    }


@router.get("/metrics")
async def my_metrics(
    session: Session = Depends(require_lead_access),
    store: Store = Depends(get_store)
):
    leads = lead_service.leads_for_actor(store.leads, session.role, session.user_id)
    return lead_service.agent_metrics(leads, session.user_id)


@router.post("")
async def create_lead(
    data: LeadCreate,
    session: Session = Depends(require_lead_access),
    store: Store = Depends(get_store)
):
    lead = lead_service.create_lead(store, data, session.role, session.user_id, session.name)
    return {"success": True, "lead": lead.model_dump(mode="json")}


@router.get("/{lead_id}")
async def get_lead(
    lead_id: int,
    session: Session = Depends(require_lead_access),
    store: Store = Depends(get_store)
):
    lead = _visible_lead(store, session, lead_id)
    return {
        "lead": lead.model_dump(mode="json"),
        "default_followup_date": lead_service.default_followup(lead),
    }


@router.get("/{lead_id}/script")
async def get_lead_script(
    lead_id: int,
    session: Session = Depends(require_lead_access),
    store: Store = Depends(get_store)
):
    lead = _visible_lead(store, session, lead_id)
    script = lead_service.script_for_lead(store.scripts, lead)
    return {"script": script.model_dump(mode="json") if script else None}


@router.post("/{lead_id}/calls")
async def log_call(
    lead_id: int,
    data: CallLog,
    session: Session = Depends(require_lead_access),
    store: Store = Depends(get_store)
):
    _visible_lead(store, session, lead_id)
    lead = lead_service.log_call(store, lead_id, data, session.user_id)
    return {"success": True, "lead": lead.model_dump(mode="json")}


@router.put("/{lead_id}")
async def update_lead(
    lead_id: int,
    data: LeadSave,
    session: Session = Depends(require_admin),
    store: Store = Depends(get_store)
):
    lead = lead_service.save_lead(store, data, lead_id, actor_id=session.user_id)
    return {"success": True, "lead": lead.model_dump(mode="json")}


@router.delete("/{lead_id}")
async def delete_lead(
    lead_id: int,
    session: Session = Depends(require_admin),
    store: Store = Depends(get_store)
):
    lead_service.delete_lead(store, lead_id, actor_id=session.user_id)
    return {"success": True}
