import datetime as dt
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..utils.coerce import ensure_string, ensure_string_list
from ..utils.ids import new_id, utc_now

RiskProfile = Literal["Conservative", "Moderate", "Moderate-Aggressive", "Aggressive"]
AccountType = Literal["IRA", "Brokerage", "401k", "Roth IRA", "Trust"]
InteractionType = Literal["meeting", "call", "email", "note"]
Priority = Literal["low", "medium", "high"]

RISK_PROFILES = ("Conservative", "Moderate", "Moderate-Aggressive", "Aggressive")
ACCOUNT_TYPES = ("IRA", "Brokerage", "401k", "Roth IRA", "Trust")

CUSTOM_CLIENT_PREFIX = "client-custom-"


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire and in storage."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Provenance(str, Enum):
    BUILTIN = "builtin"
    CUSTOM = "custom"


# --- Client records ---

class Goal(CamelModel):
    id: str = Field(default_factory=lambda: new_id("goal"))
    name: str
    target_amount: float = Field(ge=0)
    current_amount: float = Field(ge=0)
    target_date: str

    @property
    def progress(self) -> float:
        """Fraction funded; may exceed 1.0."""
        if not self.target_amount:
            return 0.0
        return self.current_amount / self.target_amount

    @property
    def progress_percent(self) -> float:
        return min(self.progress * 100, 100.0)


class Account(CamelModel):
    id: str = Field(default_factory=lambda: new_id("acc"))
    name: str
    type: AccountType = "Brokerage"
    balance: float = Field(ge=0)


class ClientFields(CamelModel):
    """Everything a client has except its id."""

    name: str
    aum: float = Field(ge=0)
    risk_profile: RiskProfile = "Moderate"
    advisor: str = "Unassigned"
    last_contact: str
    goals: List[Goal] = Field(default_factory=list)
    accounts: List[Account] = Field(default_factory=list)


class Client(ClientFields):
    id: str
    provenance: Provenance = Provenance.CUSTOM


class ClientUpdate(CamelModel):
    name: Optional[str] = None
    aum: Optional[float] = Field(default=None, ge=0)
    risk_profile: Optional[RiskProfile] = None
    advisor: Optional[str] = None
    last_contact: Optional[str] = None
    goals: Optional[List[Goal]] = None
    accounts: Optional[List[Account]] = None


# --- Interaction log ---

class InteractionFields(CamelModel):
    client_id: str
    type: InteractionType
    title: str
    date: dt.date
    notes: str
    action_items: Optional[List[str]] = None


class Interaction(InteractionFields):
    id: str
    created_at: dt.datetime


class InteractionUpdate(CamelModel):
    type: Optional[InteractionType] = None
    title: Optional[str] = None
    date: Optional[dt.date] = None
    notes: Optional[str] = None
    action_items: Optional[List[str]] = None


# --- CRM update suggestions (transient) ---

class FieldUpdate(CamelModel):
    id: str = Field(default_factory=lambda: new_id("fu"))
    field_name: str
    current_value: str
    proposed_value: str
    confidence: float = Field(ge=0, le=1)
    source_snippet: str


class Task(CamelModel):
    id: str = Field(default_factory=lambda: new_id("task"))
    owner: str
    description: str
    due_date: Optional[str] = None
    priority: Priority = "medium"


class AuditLog(CamelModel):
    summary: str
    tags: List[str] = Field(default_factory=list)
    timestamp: dt.datetime = Field(default_factory=utc_now)


class CRMUpdateResult(CamelModel):
    field_updates: List[FieldUpdate] = Field(default_factory=list)
    tasks: List[Task] = Field(default_factory=list)
    audit_log: AuditLog


class TimelineEntry(CamelModel):
    id: str = Field(default_factory=lambda: new_id("timeline"))
    date: str
    title: str
    summary: str
    type: Literal["crm_update", "meeting", "task_completed"]


# --- Meeting prep (transient) ---

class MeetingPrep(CamelModel):
    client_snapshot: str = ""
    recent_context: str = ""
    key_topics_to_discuss: List[str] = Field(default_factory=list)
    open_action_items: List[str] = Field(default_factory=list)
    questions_to_ask: List[str] = Field(default_factory=list)
    potential_concerns: str = ""
    relationship_notes: str = ""

    # The model's output shape is not guaranteed; coerce instead of rejecting.
    @field_validator(
        "client_snapshot", "recent_context", "potential_concerns", "relationship_notes",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value):
        return ensure_string(value)

    @field_validator(
        "key_topics_to_discuss", "open_action_items", "questions_to_ask",
        mode="before",
    )
    @classmethod
    def _coerce_list(cls, value):
        return ensure_string_list(value)
