"""
╔══════════════════════════════════════════════════════════════════════════════╗
║  NirmaanTech Portal - Lead model                                             ║
║                                                                              ║
║  RULES:                                                                      ║
║  1. contact_history is never empty (creation writes a synthetic entry)       ║
║  2. contact_history is append-only: entries are frozen once written          ║
║  3. current_status == status of the last entry after every logged call       ║
║  4. call_time_seconds >= 0 on every entry                                    ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LeadStatus(str, Enum):
    """
    Advisory vocabulary: admins may still enter a custom status,
    and any status may follow any other.
    """
    PENDING = "Pending"
    CONTACTED = "Contacted"
    INTERESTED = "Interested"
    NOT_INTERESTED = "Not Interested"
    FOLLOW_UP = "Follow-Up"
    APPOINTMENT_SCHEDULED = "Appointment Scheduled"
    APPOINTMENT_CONDUCTED = "Appointment Conducted"
    CANCELLED = "Cancelled"


class ContactHistoryEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str
    comments: str
    call_date: str  # YYYY-MM-DD
    call_time_seconds: int = Field(default=0, ge=0)
    next_followup_date: Optional[str] = None
    logged_by: str


class Lead(BaseModel):
    model_config = ConfigDict(frozen=True)

    lead_id: int
    customer_name: str
    customer_phone: str
    product_requirement: str = ""  # matched against product/script category
    source: str = ""
    current_status: str = LeadStatus.PENDING.value
    assigned_script_id: Optional[int] = None

    # Ownership: at most the creator's own field is set
    telecaller_id: Optional[str] = None
    assigned_franchise_id: Optional[str] = None
    assigned_partner_id: Optional[str] = None

    contact_history: List[ContactHistoryEntry] = []

    @property
    def last_contact(self) -> Optional[ContactHistoryEntry]:
        return self.contact_history[-1] if self.contact_history else None


class LeadCreate(BaseModel):
    """Lead entered from an agent dashboard"""
    customer_name: str
    customer_phone: str
    product_requirement: str = ""
    current_status: str = LeadStatus.PENDING.value
    assigned_script_id: Optional[int] = None


class LeadSave(BaseModel):
    """Admin create/edit; never touches contact_history on edit"""
    customer_name: str
    customer_phone: str
    product_requirement: str = ""
    current_status: str = LeadStatus.PENDING.value
    assigned_script_id: Optional[int] = None


class CallLog(BaseModel):
    """Outcome of a call, as captured when the agent ends it"""
    status: str
    comments: str = ""
    follow_up_date: Optional[str] = None
    raw_duration_seconds: int = Field(default=0, ge=0)
