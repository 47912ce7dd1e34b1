"""
NirmaanTech Portal - configuration and shared helpers
"""

import os
import secrets
import time
from datetime import datetime, timezone
from pathlib import Path

import bcrypt
from dotenv import load_dotenv

# Load .env
ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ==================== SECRETS / AUTH ====================

ADMIN_PASSWORD = os.environ.get('PORTAL_ADMIN_PASSWORD', 'NIRMAANADMIN')
FRANCHISE_VIEW_PASSWORD = os.environ.get('PORTAL_FRANCHISE_VIEW_PASSWORD', 'NIRMAANFRANCHISE')
SESSION_TTL_DAYS = int(os.environ.get('PORTAL_SESSION_TTL_DAYS', '7'))
NOTIFICATION_HISTORY = int(os.environ.get('PORTAL_NOTIFICATION_HISTORY', '500'))

# ==================== BUSINESS CONSTANTS ====================

GST_RATE = float(os.environ.get('PORTAL_GST_RATE', '0.18'))
TRIAL_DAYS = int(os.environ.get('PORTAL_TRIAL_DAYS', '30'))
DIALING_OVERHEAD_SECONDS = int(os.environ.get('PORTAL_DIALING_OVERHEAD_SECONDS', '20'))
VENDOR_BASIC_PRODUCT_LIMIT = int(os.environ.get('PORTAL_VENDOR_BASIC_PRODUCT_LIMIT', '3'))
SPLIT_RATE_ENABLED = _env_bool('PORTAL_SPLIT_RATE_ENABLED', False)
PARTNER_COMMISSION_RATE = 0.10
MIN_CALL_COMMENT_LENGTH = 3

UPI_ID = '8073126541@ptaxis'
UPI_PAYEE_NAME = 'NirmaanTech'

ATTENDANCE_TARGET = {"dials": 100, "talk_time_minutes": 120}

# Wildcard region: an "All Karnataka" product is served in every city
WILDCARD_CITY = 'All Karnataka'
CITIES = [WILDCARD_CITY, 'Bangalore', 'Mysore', 'Hubli', 'Dharwad', 'Belgaum', 'Mangalore']

LEADS_STATUS_OPTIONS = [
    'Pending', 'Contacted', 'Interested', 'Not Interested', 'Follow-Up',
    'Appointment Scheduled', 'Appointment Conducted', 'Cancelled'
]
ORDER_STATUS_OPTIONS = ['Pending', 'Processing', 'Pending from Client', 'Completed', 'Cancelled']

# Sentinels
UNATTRIBUTED_ID = 'None'
SYSTEM_VENDOR_ID = 'System'
SYSTEM_ACTOR_ID = 'System'
ADMIN_USER_ID = 'ADMIN'

# HTTP adapter
CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


# ==================== HELPERS ====================

def bcrypt_rounds() -> int:
    """Read on every call so tests can lower the cost factor."""
    return int(os.environ.get('PORTAL_BCRYPT_ROUNDS', '12'))


def hash_password(password: str) -> str:
    """Hash a password with bcrypt"""
    salt = bcrypt.gensalt(rounds=bcrypt_rounds())
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, hashed: str) -> bool:
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        # unreadable hash: refuse instead of crashing
        return False


def generate_token() -> str:
    """Generate a secure session token"""
    return secrets.token_urlsafe(32)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_iso() -> str:
    """Current UTC date/time in ISO format"""
    return now_utc().isoformat()


def today_iso() -> str:
    """Today as YYYY-MM-DD"""
    return now_utc().date().isoformat()


def timestamp_ms() -> int:
    """Current timestamp in milliseconds"""
    return int(time.time() * 1000)
