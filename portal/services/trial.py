"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  NirmaanTech Portal - Trial Gate                                             ║
║                                                                              ║
║  BASIC PLAN POLICY                                                           ║
║  - franchise: usable for TRIAL_DAYS after registration, login refused after  ║
║  - vendor:    no time limit, product uploads capped at                       ║
║               VENDOR_BASIC_PRODUCT_LIMIT                                     ║
║  - paid plan lifts both limits                                               ║
║                                                                              ║
║  A record without registration_date reads as registered "now": legacy        ║
║  accounts start a fresh trial instead of being locked out.                   ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

import logging
import math
from datetime import datetime, timezone
from typing import Dict, Optional

from portal import config
from portal.config import now_utc
from portal.errors import TrialExpiredError, UploadLimitError
from portal.models import PLAN_ROLES, Plan, Role, User

logger = logging.getLogger("trial")

SECONDS_PER_DAY = 24 * 60 * 60

STATUS_PAID = "paid"
STATUS_ACTIVE = "active"
STATUS_EXPIRED = "expired"


def _parse_registration(value: Optional[str], now: datetime) -> datetime:
    if not value:
        return now
    registered = datetime.fromisoformat(value)
    if registered.tzinfo is None:
        registered = registered.replace(tzinfo=timezone.utc)
    return registered


def days_elapsed(registration_date: Optional[str], now: Optional[datetime] = None) -> int:
    """Whole days since registration, any started day counting as one"""
    now = now or now_utc()
    registered = _parse_registration(registration_date, now)
    return math.ceil(abs((now - registered).total_seconds()) / SECONDS_PER_DAY)


def trial_state(user: User, now: Optional[datetime] = None) -> Dict:
    """
    Trial position of a plan holder.

    Returns:
        {"status": "paid" | "active" | "expired", "days_remaining": int | None}
    """
    if user.plan == Plan.PAID:
        return {"status": STATUS_PAID, "days_remaining": None}

    elapsed = days_elapsed(user.registration_date, now)
    return {
        "status": STATUS_EXPIRED if elapsed > config.TRIAL_DAYS else STATUS_ACTIVE,
        "days_remaining": max(0, config.TRIAL_DAYS - elapsed),
    }


def trial_applies(user: User) -> bool:
    return user.role in PLAN_ROLES


def enforce_login_trial(user: User, now: Optional[datetime] = None) -> None:
    """
    Evaluated at login, before any session exists.
    Only basic-plan franchises expire; vendors are gated by product count.
    """
    if user.role != Role.FRANCHISE:
        return
    state = trial_state(user, now)
    if state["status"] == STATUS_EXPIRED:
        logger.warning(f"[TRIAL] Login refused for {user.id}: trial expired")
        raise TrialExpiredError(
            f"Your {config.TRIAL_DAYS}-day free trial has ended. Upgrade to the Paid plan to continue."
        )


def can_upload_product(vendor: User, current_product_count: int) -> bool:
    if vendor.plan == Plan.PAID:
        return True
    return current_product_count < config.VENDOR_BASIC_PRODUCT_LIMIT


def ensure_can_upload(vendor: User, current_product_count: int) -> None:
    """Raise UploadLimitError instead of dropping the create"""
    if not can_upload_product(vendor, current_product_count):
        logger.warning(
            f"[VENDOR] {vendor.id} upload refused: {current_product_count}/"
            f"{config.VENDOR_BASIC_PRODUCT_LIMIT} products on basic plan"
        )
        raise UploadLimitError(
            f"Basic Plan Limit Reached! Upgrade to upload more than "
            f"{config.VENDOR_BASIC_PRODUCT_LIMIT} products."
        )
