"""
NirmaanTech Portal - Routes Auth
Login / Register / Guest / Logout / Session / Franchise price view.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from portal.errors import AuthenticationError
from portal.models import Role, Session, UserLogin, UserRegister
from portal.services import auth as auth_service
from portal.services.trial import trial_state, trial_applies
from portal.store import Store

router = APIRouter(prefix="/auth", tags=["Auth"])
security = HTTPBearer(auto_error=False)


class FranchiseViewUnlock(BaseModel):
    password: str


# ==================== HELPERS ====================

def get_store(request: Request) -> Store:
    return request.app.state.store


async def get_current_session(
    store: Store = Depends(get_store),
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> Session:
    """Session behind the bearer token."""
    if not credentials:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        return auth_service.resolve_session(store, credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=e.message)


def require_roles(*roles: Role):
    """Dependency factory: the session's role must be one of roles."""
    async def checker(session: Session = Depends(get_current_session)) -> Session:
        if session.role not in roles:
            allowed = ", ".join(r.value for r in roles)
            raise HTTPException(status_code=403, detail=f"Access restricted to: {allowed}")
        return session
    return checker


require_admin = require_roles(Role.ADMIN)


def session_payload(store: Store, session: Session) -> dict:
    payload = {
        "token": session.token,
        "role": session.role.value,
        "user_id": session.user_id,
        "name": session.name,
        "franchise_view": session.is_franchise_tier,
        "expires_at": session.expires_at.isoformat(),
    }
    user = auth_service.session_user(store, session)
    if user is not None:
        payload["user"] = user.public()
        if trial_applies(user):
            payload["trial"] = trial_state(user)
    return payload


# ==================== LOGIN / LOGOUT ====================

@router.post("/login")
async def login(data: UserLogin, store: Store = Depends(get_store)):
    session = auth_service.handle_login(store, data.role, data.user_id, data.password)
    return session_payload(store, session)


@router.post("/register")
async def register(data: UserRegister, store: Store = Depends(get_store)):
    session = auth_service.register(store, data)
    return {"success": True, **session_payload(store, session)}


@router.post("/guest")
async def start_guest(store: Store = Depends(get_store)):
    session = auth_service.start_guest_session(store)
    return session_payload(store, session)


@router.post("/logout")
async def logout(
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    auth_service.logout(store, session.token)
    return {"success": True}


@router.get("/me")
async def get_me(
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    return session_payload(store, session)


# ==================== PRICE VIEW ====================

@router.post("/franchise-view")
async def unlock_franchise_view(
    data: FranchiseViewUnlock,
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    updated = auth_service.enable_franchise_view(store, session, data.password)
    return {"success": True, "franchise_view": updated.is_franchise_tier}


@router.delete("/franchise-view")
async def lock_franchise_view(
    session: Session = Depends(get_current_session),
    store: Store = Depends(get_store)
):
    updated = auth_service.disable_franchise_view(store, session)
    return {"success": True, "franchise_view": updated.is_franchise_tier}
