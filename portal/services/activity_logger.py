"""
Activity journal service
"""

from typing import Optional

from portal.config import SYSTEM_ACTOR_ID, now_iso


def log_activity(
    store,
    actor_id: Optional[str],
    action: str,
    entity_type: str,
    entity_id=None,
    details: dict = None
) -> dict:
    """
    Record a committed mutation in the journal.

    Actions: create, update, delete, login, logout, register, log_call, checkout, status
    Entity types: lead, product, order, user, script, session
    """
    log_entry = {
        "actor_id": actor_id or SYSTEM_ACTOR_ID,
        "action": action,
        "entity_type": entity_type,
        "entity_id": entity_id,
        "details": details or {},
        "created_at": now_iso()
    }
    store.activity_logs.append(log_entry)
    return log_entry


def get_activity_logs(
    store,
    actor_id: str = None,
    entity_type: str = None,
    action: str = None,
    limit: int = 100,
    skip: int = 0
) -> dict:
    """Journal entries, newest first, with optional filters"""
    logs = [
        entry for entry in reversed(store.activity_logs)
        if (not actor_id or entry["actor_id"] == actor_id)
        and (not entity_type or entry["entity_type"] == entity_type)
        and (not action or entry["action"] == action)
    ]
    return {"logs": logs[skip:skip + limit], "total": len(logs), "limit": limit, "skip": skip}
