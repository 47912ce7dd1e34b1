"""
NirmaanTech Portal - Auth & sessions
Login / register / guest sessions / franchise price view.

Sessions live in the store's session table, keyed by bearer token.
Guests get a session too: it carries their cart and price-view flag.
"""

import logging
from datetime import timedelta
from typing import Optional

from portal import config
from portal.config import (
    ADMIN_USER_ID,
    generate_token,
    hash_password,
    now_utc,
    timestamp_ms,
    today_iso,
    verify_password,
)
from portal.errors import AuthenticationError, ValidationError
from portal.models import ID_PREFIXES, PLAN_ROLES, Plan, Role, Session, User, UserRegister
from portal.services.activity_logger import log_activity
from portal.services.trial import enforce_login_trial

logger = logging.getLogger("auth")

GUEST_USER_ID = "guest"
INVALID_CREDENTIALS = "Invalid ID or Password"


# ==================== SESSIONS ====================

def sweep_expired_sessions(store) -> int:
    """Drop expired sessions and their carts; returns how many went"""
    now = now_utc()
    expired = [token for token, session in store.sessions.items() if session.expires_at <= now]
    for token in expired:
        del store.sessions[token]
        store.carts.pop(token, None)
    if expired:
        logger.info(f"[AUTH] Swept {len(expired)} expired session(s)")
    return len(expired)


def _issue_session(store, user_id: str, role: Role, name: str = "", franchise_view: bool = False) -> Session:
    sweep_expired_sessions(store)
    session = Session(
        token=generate_token(),
        user_id=user_id,
        role=role,
        name=name,
        franchise_view=franchise_view,
        expires_at=now_utc() + timedelta(days=config.SESSION_TTL_DAYS),
    )
    store.sessions[session.token] = session
    return session


def resolve_session(store, token: Optional[str]) -> Session:
    """
    Session for a bearer token.

    Raises:
        AuthenticationError: unknown or expired token
    """
    session = store.sessions.get(token) if token else None
    if session is None:
        raise AuthenticationError("Not authenticated", code="not_authenticated")
    if session.expires_at <= now_utc():
        store.sessions.pop(token, None)
        store.carts.pop(token, None)
        raise AuthenticationError("Session expired", code="session_expired")
    return session


def session_user(store, session: Session) -> Optional[User]:
    if session.role == Role.GUEST:
        return None
    return store.find_user(session.role, session.user_id)


def start_guest_session(store) -> Session:
    session = _issue_session(store, GUEST_USER_ID, Role.GUEST, name="Guest")
    logger.info("[AUTH] Guest session started")
    return session


def logout(store, token: str) -> None:
    session = store.sessions.pop(token, None)
    store.carts.pop(token, None)
    if session is not None:
        log_activity(store, session.user_id, "logout", "session")
        logger.info(f"[AUTH] {session.role.value}:{session.user_id} logged out")


# ==================== LOGIN / REGISTER ====================

def handle_login(store, role: Role, user_id: str, password: str) -> Session:
    """
    Authenticate against the role's own collection.

    Admin uses the single seeded admin account (the id is ignored).
    A basic-plan franchise whose trial is over is refused before any
    session exists. Franchise sessions see franchise prices.

    Raises:
        AuthenticationError: unknown id or wrong password
        TrialExpiredError: basic franchise trial over
    """
    role = Role(role)
    if role == Role.GUEST:
        raise ValidationError("Guests do not log in; start a guest session instead", code="invalid_role")

    lookup_id = ADMIN_USER_ID if role == Role.ADMIN else (user_id or "").strip()
    user = store.find_user(role, lookup_id)

    if user is None or not verify_password(password, user.password_hash):
        logger.warning(f"[AUTH] Failed login for {role.value}:{lookup_id}")
        raise AuthenticationError(INVALID_CREDENTIALS)

    enforce_login_trial(user)

    session = _issue_session(
        store,
        user.id,
        role,
        name=user.name,
        franchise_view=(role == Role.FRANCHISE),
    )
    log_activity(store, user.id, "login", "session", user.id, {"role": role.value})
    logger.info(f"[AUTH] {role.value}:{user.id} logged in")
    return session


def new_member_id(role: Role) -> str:
    """<prefix>-<last 5 digits of the ms clock>, e.g. F-48213"""
    return f"{ID_PREFIXES[role]}-{str(timestamp_ms())[-5:]}"


def register(store, data: UserRegister) -> Session:
    """
    Self-registration for member roles, followed by auto-login.
    Franchise and vendor accounts start on the basic plan.

    Raises:
        ValidationError: generated id already taken
    """
    role = data.role
    user_id = new_member_id(role)
    repo = store.user_repo(role)
    if user_id in repo:
        raise ValidationError(
            f"User ID {user_id} already exists, please try again", code="duplicate_id"
        )

    has_plan = role in PLAN_ROLES
    user = User(
        id=user_id,
        name=data.name,
        role=role,
        password_hash=hash_password(data.password),
        phone=data.phone,
        city=data.city if has_plan else None,
        plan=Plan.BASIC if has_plan else None,
        registration_date=today_iso(),
    )
    repo.add(user)

    log_activity(store, user.id, "register", "user", user.id, {"role": role.value})
    store.notify(f"Registration successful! Your ID is {user.id}", "success")
    logger.info(f"[AUTH] Registered {role.value}:{user.id}")

    return _issue_session(
        store,
        user.id,
        role,
        name=user.name,
        franchise_view=(role == Role.FRANCHISE),
    )


# ==================== PRICE VIEW ====================

def enable_franchise_view(store, session: Session, password: str) -> Session:
    """Unlock franchise prices for this session with the shared view secret"""
    if password != config.FRANCHISE_VIEW_PASSWORD:
        logger.warning(f"[AUTH] Franchise view refused for {session.user_id}")
        raise AuthenticationError("Incorrect franchise view password")

    updated = session.model_copy(update={"franchise_view": True})
    store.sessions[session.token] = updated
    store.notify("Franchise price view enabled", "success")
    logger.info(f"[AUTH] Franchise view enabled for {session.role.value}:{session.user_id}")
    return updated


def disable_franchise_view(store, session: Session) -> Session:
    # a franchise session always prices at franchise tier
    updated = session.model_copy(update={"franchise_view": session.role == Role.FRANCHISE})
    store.sessions[session.token] = updated
    return updated
