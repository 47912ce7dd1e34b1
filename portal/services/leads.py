"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  NirmaanTech Portal - Lead Lifecycle                                         ║
║                                                                              ║
║  contact_history IS APPEND-ONLY                                              ║
║                                                                              ║
║  ONLY log_call() appends to an existing lead's history, and it always        ║
║  sets current_status to the status of the entry it appends.                  ║
║                                                                              ║
║  - effective duration = max(0, raw duration - dialing overhead)              ║
║  - comments shorter than MIN_CALL_COMMENT_LENGTH are rejected before         ║
║    anything is written                                                       ║
║  - statuses are advisory: any status may follow any other                    ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

import logging
from typing import Dict, Iterable, List, Optional

from portal import config
from portal.config import SYSTEM_ACTOR_ID, today_iso
from portal.errors import NotFoundError, ValidationError
from portal.models import (
    GENERAL_SCRIPT_CATEGORY,
    CallLog,
    CentralScript,
    ContactHistoryEntry,
    Lead,
    LeadCreate,
    LeadSave,
    LeadStatus,
    Role,
)
from portal.services.activity_logger import log_activity

logger = logging.getLogger("leads")

MANUAL_ENTRY_COMMENT = "Lead added manually via dashboard."
ADMIN_ENTRY_SOURCE = "Admin Entry"
MANUAL_SOURCE = "Manual ({name})"

# Ownership field set on leads created by each agent role
OWNER_FIELDS = {
    Role.TELECALLER: "telecaller_id",
    Role.FRANCHISE: "assigned_franchise_id",
    Role.PARTNER: "assigned_partner_id",
}


# ════════════════════════════════════════════════════════════════════════════
# PURE TRANSITIONS
# ════════════════════════════════════════════════════════════════════════════

def effective_duration(raw_duration_seconds: int) -> int:
    """Talk time once the fixed dialing overhead is deducted, never negative"""
    return max(0, int(raw_duration_seconds) - config.DIALING_OVERHEAD_SECONDS)


def validate_call_comments(comments: Optional[str]) -> str:
    comments = (comments or "").strip()
    if len(comments) < config.MIN_CALL_COMMENT_LENGTH:
        raise ValidationError(
            f"Call notes must be at least {config.MIN_CALL_COMMENT_LENGTH} characters",
            code="comments_too_short"
        )
    return comments


def append_call(lead: Lead, call_log: CallLog, actor_id: str, call_date: Optional[str] = None) -> Lead:
    """
    Return a new Lead with one more history entry and the matching status.
    The input lead is left untouched.

    Raises:
        ValidationError: comments too short
    """
    comments = validate_call_comments(call_log.comments)
    if not (call_log.status or "").strip():
        raise ValidationError("A call outcome status is required", code="status_required")

    entry = ContactHistoryEntry(
        status=call_log.status,
        comments=comments,
        call_date=call_date or today_iso(),
        call_time_seconds=effective_duration(call_log.raw_duration_seconds),
        next_followup_date=call_log.follow_up_date or None,
        logged_by=actor_id,
    )
    return lead.model_copy(update={
        "contact_history": [*lead.contact_history, entry],
        "current_status": entry.status,
    })


def build_lead(
    data: LeadCreate,
    role: Role,
    actor_id: Optional[str],
    lead_id: int,
    source: str = ADMIN_ENTRY_SOURCE,
    call_date: Optional[str] = None,
) -> Lead:
    """
    New lead with its synthetic creation entry.
    Exactly the creator's ownership field is set; admin leads have none.
    """
    name = (data.customer_name or "").strip()
    phone = (data.customer_phone or "").strip()
    if not name or not phone:
        raise ValidationError("Customer name and phone are required", code="customer_required")

    status = data.current_status or LeadStatus.PENDING.value
    ownership = {}
    owner_field = OWNER_FIELDS.get(role)
    if owner_field:
        ownership[owner_field] = actor_id

    return Lead(
        lead_id=lead_id,
        customer_name=name,
        customer_phone=phone,
        product_requirement=data.product_requirement,
        source=source,
        current_status=status,
        assigned_script_id=data.assigned_script_id,
        contact_history=[ContactHistoryEntry(
            status=status,
            comments=MANUAL_ENTRY_COMMENT,
            call_date=call_date or today_iso(),
            call_time_seconds=0,
            next_followup_date=None,
            logged_by=actor_id or SYSTEM_ACTOR_ID,
        )],
        **ownership,
    )


def default_followup(lead: Lead) -> Optional[str]:
    """Pre-filled follow-up date for the next call: the one previously agreed"""
    last = lead.last_contact
    return last.next_followup_date if last else None


# ════════════════════════════════════════════════════════════════════════════
# STORE OPERATIONS
# ════════════════════════════════════════════════════════════════════════════

def create_lead(
    store, data: LeadCreate, role: Role, actor_id: Optional[str], actor_name: Optional[str] = None
) -> Lead:
    """Agents' leads record who entered them in `source`; admin leads are "Admin Entry"."""
    if role not in OWNER_FIELDS and role != Role.ADMIN:
        raise ValidationError(f"Role {role.value} cannot create leads", code="forbidden_role")

    if role == Role.ADMIN:
        source = ADMIN_ENTRY_SOURCE
    else:
        source = MANUAL_SOURCE.format(name=actor_name or actor_id)
    lead = build_lead(data, role, actor_id, lead_id=store.next_id(), source=source)
    store.leads.add(lead)

    log_activity(store, actor_id, "create", "lead", lead.lead_id, {"customer_name": lead.customer_name})
    store.notify("Lead created successfully", "success")
    logger.info(f"[LEAD] {lead.lead_id} created by {role.value}:{actor_id}")
    return lead


def log_call(store, lead_id: int, call_log: CallLog, actor_id: str) -> Lead:
    """
    Record a finished call on a lead.

    Raises:
        NotFoundError: the lead no longer exists
        ValidationError: comments too short (history left unchanged)
    """
    lead = store.leads.require(lead_id)
    try:
        updated = append_call(lead, call_log, actor_id)
    except ValidationError as e:
        logger.warning(f"[LEAD] Call on {lead_id} rejected: {e.message}")
        store.notify(e.message, "error")
        raise

    store.leads.replace(updated)
    entry = updated.last_contact

    log_activity(
        store, actor_id, "log_call", "lead", lead_id,
        {"status": entry.status, "call_time_seconds": entry.call_time_seconds}
    )
    store.notify(f"Call logged for {lead.customer_name}", "success")
    logger.info(
        f"[LEAD] {lead_id} call by {actor_id} | status={entry.status} "
        f"talk={entry.call_time_seconds}s history={len(updated.contact_history)}"
    )
    return updated


def save_lead(store, data: LeadSave, lead_id: Optional[int] = None, actor_id: Optional[str] = None) -> Lead:
    """
    Admin create or edit.
    Edits change the lead's details but never its contact history.
    """
    if lead_id is None:
        return create_lead(store, LeadCreate(**data.model_dump()), Role.ADMIN, actor_id)

    lead = store.leads.require(lead_id)
    name = (data.customer_name or "").strip()
    phone = (data.customer_phone or "").strip()
    if not name or not phone:
        raise ValidationError("Customer name and phone are required", code="customer_required")

    updated = store.leads.replace(lead.model_copy(update={
        "customer_name": name,
        "customer_phone": phone,
        "product_requirement": data.product_requirement,
        "current_status": data.current_status,
        "assigned_script_id": data.assigned_script_id,
    }))
    log_activity(store, actor_id, "update", "lead", lead_id)
    store.notify("Lead updated", "success")
    logger.info(f"[LEAD] {lead_id} updated by {actor_id}")
    return updated


def delete_lead(store, lead_id: int, actor_id: Optional[str] = None) -> Lead:
    lead = store.leads.remove(lead_id)
    log_activity(store, actor_id, "delete", "lead", lead_id, {"customer_name": lead.customer_name})
    store.notify("Lead deleted", "info")
    logger.info(f"[LEAD] {lead_id} deleted by {actor_id}")
    return lead


# ════════════════════════════════════════════════════════════════════════════
# PROJECTIONS
# ════════════════════════════════════════════════════════════════════════════

def leads_for_actor(leads: Iterable[Lead], role: Role, actor_id: Optional[str]) -> List[Lead]:
    leads = list(leads)
    if role == Role.ADMIN:
        return leads
    owner_field = OWNER_FIELDS.get(role)
    if owner_field is None or not actor_id:
        return []
    return [lead for lead in leads if getattr(lead, owner_field) == actor_id]


def agent_metrics(leads: Iterable[Lead], actor_id: str) -> Dict:
    """
    Derived on demand, never stored.
    Calls and talk time only count entries the actor logged personally.
    """
    leads = list(leads)
    entries = [
        entry
        for lead in leads
        for entry in lead.contact_history
        if entry.logged_by == actor_id
    ]
    total_calls = len(entries)
    total_talk = sum(entry.call_time_seconds for entry in entries)
    talk_minutes = total_talk / 60

    dials_target = config.ATTENDANCE_TARGET["dials"]
    talk_target = config.ATTENDANCE_TARGET["talk_time_minutes"]

    return {
        "actor_id": actor_id,
        "total_calls": total_calls,
        "total_talk_time_seconds": total_talk,
        "leads_worked": len(leads),
        "interested": sum(1 for lead in leads if lead.current_status == LeadStatus.INTERESTED.value),
        "dials_target": dials_target,
        "talk_time_target_minutes": talk_target,
        "dials_progress_percent": min(100, round(total_calls / dials_target * 100)) if dials_target else 0,
        "talk_time_progress_percent": min(100, round(talk_minutes / talk_target * 100)) if talk_target else 0,
    }


def script_for_lead(scripts: Iterable[CentralScript], lead: Lead) -> Optional[CentralScript]:
    """Assigned script, else the one for the lead's requirement, else the general script"""
    scripts = list(scripts)
    if lead.assigned_script_id is not None:
        for script in scripts:
            if script.id == lead.assigned_script_id:
                return script
    for script in scripts:
        if script.category == lead.product_requirement:
            return script
    for script in scripts:
        if script.category == GENERAL_SCRIPT_CATEGORY:
            return script
    return None
