"""
NirmaanTech Portal - Users, roles & sessions

Role collections are disjoint: a telecaller id and a franchise id
live in separate repositories, keyed by id.
Passwords are only ever stored as bcrypt hashes.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator


class Role(str, Enum):
    ADMIN = "admin"
    TELECALLER = "telecaller"
    FRANCHISE = "franchise"
    PARTNER = "partner"
    VENDOR = "vendor"
    GUEST = "guest"


class Plan(str, Enum):
    BASIC = "basic"
    PAID = "paid"


# Roles that own a user collection (admin is a single seeded account)
MEMBER_ROLES = [Role.TELECALLER, Role.FRANCHISE, Role.PARTNER, Role.VENDOR]

# Roles that carry a subscription plan
PLAN_ROLES = [Role.FRANCHISE, Role.VENDOR]

# Registration id prefixes: T-12345, F-12345, ...
ID_PREFIXES = {
    Role.TELECALLER: "T",
    Role.FRANCHISE: "F",
    Role.PARTNER: "P",
    Role.VENDOR: "V",
}


class User(BaseModel):
    id: str
    name: str
    role: Role
    password_hash: str = ""
    city: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    plan: Optional[Plan] = None
    registration_date: Optional[str] = None  # YYYY-MM-DD, trial anchor

    def public(self) -> dict:
        """Serializable view without the password hash"""
        return self.model_dump(mode="json", exclude={"password_hash"})


class UserLogin(BaseModel):
    role: Role
    user_id: str = ""
    password: str


class UserRegister(BaseModel):
    role: Role
    name: str
    phone: str = ""
    password: str
    city: Optional[str] = "Bangalore"

    @field_validator("role")
    @classmethod
    def validate_role(cls, v):
        if v not in MEMBER_ROLES:
            raise ValueError(f"Cannot self-register as {v.value}")
        return v

    @field_validator("name", "password")
    @classmethod
    def not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Field is required")
        return v.strip()


class UserSave(BaseModel):
    """Admin create/edit of a member account"""
    id: str
    role: Role
    name: str
    password: Optional[str] = None  # None on edit = keep current hash
    city: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    plan: Optional[Plan] = None

    @field_validator("role")
    @classmethod
    def validate_role(cls, v):
        if v not in MEMBER_ROLES:
            raise ValueError(f"Invalid role: {v.value}")
        return v


class Session(BaseModel):
    token: str
    user_id: str
    role: Role
    name: str = ""
    franchise_view: bool = False  # price-view toggle
    expires_at: datetime

    @property
    def is_franchise_tier(self) -> bool:
        return self.franchise_view or self.role == Role.FRANCHISE
