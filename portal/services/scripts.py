"""NirmaanTech Portal - Central call scripts (admin CRUD)"""

import logging
from typing import Optional

from portal.errors import ValidationError
from portal.models import CentralScript, ScriptSave
from portal.services.activity_logger import log_activity

logger = logging.getLogger("scripts")


def save_script(store, data: ScriptSave, script_id: Optional[int] = None, actor_id: Optional[str] = None) -> CentralScript:
    if not (data.category or "").strip() or not (data.main_script or "").strip():
        raise ValidationError("Category and main script are required", code="script_required")

    if script_id is None:
        script = store.scripts.add(CentralScript(id=store.next_id(), **data.model_dump()))
        action = "create"
    else:
        store.scripts.require(script_id)
        script = store.scripts.replace(CentralScript(id=script_id, **data.model_dump()))
        action = "update"

    log_activity(store, actor_id, action, "script", script.id, {"category": script.category})
    store.notify("Script saved", "success")
    logger.info(f"[LEAD] Script {script.id} ({script.category}) {action}d")
    return script


def delete_script(store, script_id: int, actor_id: Optional[str] = None) -> CentralScript:
    script = store.scripts.remove(script_id)
    log_activity(store, actor_id, "delete", "script", script_id)
    store.notify("Script deleted", "info")
    logger.info(f"[LEAD] Script {script_id} deleted")
    return script
