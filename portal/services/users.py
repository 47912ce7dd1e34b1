"""
NirmaanTech Portal - Member accounts (admin)
"""

import logging
from typing import List, Optional

from portal.config import hash_password, today_iso
from portal.errors import ValidationError
from portal.models import MEMBER_ROLES, PLAN_ROLES, Plan, Role, User, UserSave
from portal.services.activity_logger import log_activity

logger = logging.getLogger("users")


def list_users(store, role: Optional[Role] = None) -> List[User]:
    roles = [role] if role else MEMBER_ROLES
    return [user for r in roles for user in store.user_repo(r)]


def save_user(store, data: UserSave, actor_id: Optional[str] = None) -> User:
    """
    Upsert into the role's collection.

    A new account needs a password; on edit a missing password keeps the
    current hash and registration_date is preserved. plan only applies to
    franchise and vendor accounts.
    """
    repo = store.user_repo(data.role)
    user_id = (data.id or "").strip()
    if not user_id:
        raise ValidationError("User ID is required", code="id_required")
    if not (data.name or "").strip():
        raise ValidationError("Name is required", code="name_required")

    existing = repo.get(user_id)
    if existing is None and not data.password:
        raise ValidationError("A password is required for a new user", code="password_required")

    has_plan = data.role in PLAN_ROLES
    user = User(
        id=user_id,
        name=data.name.strip(),
        role=data.role,
        password_hash=hash_password(data.password) if data.password else existing.password_hash,
        city=data.city,
        email=data.email,
        phone=data.phone,
        plan=(data.plan or Plan.BASIC) if has_plan else None,
        registration_date=existing.registration_date if existing else today_iso(),
    )

    if existing is None:
        repo.add(user)
        action = "create"
    else:
        repo.replace(user)
        action = "update"

    log_activity(store, actor_id, action, "user", user.id, {"role": user.role.value})
    store.notify("User saved", "success")
    logger.info(f"[AUTH] User {data.role.value}:{user.id} {action}d")
    return user


def delete_user(store, role: Role, user_id: str, actor_id: Optional[str] = None) -> User:
    if role not in MEMBER_ROLES:
        raise ValidationError(f"Cannot delete {role.value} accounts", code="invalid_role")
    user = store.user_repo(role).remove(user_id)

    # drop the deleted account's sessions and carts
    for token in [t for t, s in store.sessions.items() if s.role == role and s.user_id == user_id]:
        store.sessions.pop(token, None)
        store.carts.pop(token, None)

    log_activity(store, actor_id, "delete", "user", user_id, {"role": role.value})
    store.notify("User deleted", "info")
    logger.info(f"[AUTH] User {role.value}:{user_id} deleted")
    return user
